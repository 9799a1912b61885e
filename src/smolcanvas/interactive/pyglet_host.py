# どこで: `src/smolcanvas/interactive/pyglet_host.py`。
# 何を: pyglet ウィンドウ 1 枚をホスト環境（フレーム提示・入力源・タイトル/サイズ）として提供する。
# なぜ: OS 依存のイベント配送とバッファ flip を pyglet に任せ、SmolCanvas は Host 契約だけに依存させるため。

from __future__ import annotations

import logging
import time

import moderngl
import pyglet
from pyglet.gl import Config
from pyglet.window import key

from smolcanvas.core.runtime_config import RuntimeConfig, runtime_config
from smolcanvas.interactive.gl.surface import GLSurface
from smolcanvas.interactive.input import InputTranslator
from smolcanvas.interactive.runtime.frame_scheduler import FrameCallback

_logger = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.perf_counter() * 1000.0


class PygletHost:
    """pyglet.window.Window を 1 枚持つホスト。

    Notes
    -----
    - `request_frame()` は次の `on_draw` で 1 度だけ呼ぶコールバックを登録し、
      `pyglet.clock.schedule_once` で目標 fps 間隔の再描画を予約する。
    - pyglet のマウス座標は左下原点なので、上下を反転してから InputTranslator へ渡す。
    """

    def __init__(self, config: RuntimeConfig | None = None) -> None:
        cfg = config if config is not None else runtime_config()
        self._cfg = cfg
        pyglet.options["vsync"] = True

        samples = int(cfg.msaa_samples)
        gl_config = (
            Config(double_buffer=True, sample_buffers=1, samples=samples)  # type: ignore[abstract]
            if samples > 0
            else Config(double_buffer=True)  # type: ignore[abstract]
        )
        width, height = cfg.canvas_size
        self.window = pyglet.window.Window(  # type: ignore[abstract]
            width=max(int(width), 1),
            height=max(int(height), 1),
            caption=cfg.canvas_title,
            resizable=False,
            config=gl_config,
        )
        self.window.switch_to()
        ctx = moderngl.create_context(require=330)
        self._ctx: moderngl.Context | None = ctx
        self._surface = GLSurface(
            ctx,
            int(width),
            int(height),
            circle_segments=cfg.circle_segments,
        )
        self._pending: list[FrameCallback] = []
        self._input: InputTranslator | None = None
        self._closed = False
        self._released = False

        self.window.push_handlers(on_draw=self._on_draw, on_close=self._on_close)

    @property
    def surface(self) -> GLSurface:
        return self._surface

    def set_title(self, title: str) -> None:
        self.window.set_caption(str(title))

    def viewport_size(self) -> tuple[int, int]:
        screen = self.window.screen
        return int(screen.width), int(screen.height)

    def clear_margin(self) -> None:
        # ウィンドウ枠の余白に相当するのはデコレーション。画面いっぱいに寄せる。
        self.window.set_location(0, 0)

    def resize(self, width: int, height: int) -> None:
        self.window.set_size(max(int(width), 1), max(int(height), 1))
        self._surface.resize(width, height)

    def surface_offset(self) -> tuple[float, float]:
        # タッチ座標はウィンドウのクライアント座標で届くので、描画面のオフセットは 0。
        return (0.0, 0.0)

    def request_frame(self, callback: FrameCallback) -> None:
        if self._closed:
            return
        self._pending.append(callback)
        pyglet.clock.schedule_once(self._present, 1.0 / float(self._cfg.target_fps))

    def _present(self, dt: float) -> None:
        # Window.draw は switch_to / on_draw / flip をまとめて行う。閉じたウィンドウへは描かない。
        if self._closed or self.window not in pyglet.app.windows:
            return
        self.window.draw(dt)

    def _on_draw(self) -> None:
        pending, self._pending = self._pending, []
        if not pending or self._ctx is None:
            return
        self._ctx.screen.use()
        timestamp = _now_ms()
        for callback in pending:
            callback(timestamp)

    def bind_input(self, translator: InputTranslator) -> None:
        self._input = translator
        self.window.push_handlers(
            on_mouse_motion=self._on_mouse_motion,
            on_mouse_drag=self._on_mouse_drag,
            on_mouse_press=self._on_mouse_press,
            on_key_release=self._on_key_release,
        )

    def _flip_y(self, y: float) -> float:
        return float(self.window.height) - float(y)

    def _on_mouse_motion(self, x: int, y: int, _dx: int, _dy: int) -> None:
        if self._input is not None:
            self._input.pointer_move(x, self._flip_y(y))

    def _on_mouse_drag(self, x: int, y: int, _dx: int, _dy: int, _buttons: int, _modifiers: int) -> None:
        if self._input is not None:
            self._input.pointer_move(x, self._flip_y(y))

    def _on_mouse_press(self, _x: int, _y: int, _button: int, _modifiers: int) -> None:
        if self._input is not None:
            self._input.pointer_down()

    def _on_key_release(self, symbol: int, _modifiers: int) -> None:
        if self._input is not None:
            self._input.key_up(key.symbol_string(symbol))

    def _on_close(self) -> bool:
        _logger.debug("window closed")
        self._closed = True
        pyglet.app.exit()
        # window の破棄は close() で GPU 資源と一緒に行う。
        return pyglet.event.EVENT_HANDLED

    def run(self) -> None:
        """ウィンドウが閉じられるまで pyglet のループを回す。"""
        try:
            pyglet.app.run(interval=None)
        finally:
            self.close()

    def close(self) -> None:
        """GPU / window 資源を解放する。"""
        if self._released:
            return
        self._released = True
        self._closed = True
        self._pending.clear()
        pyglet.clock.unschedule(self._present)
        self._surface.release()
        if self._ctx is not None:
            self._ctx.release()
            self._ctx = None
        self.window.close()


__all__ = ["PygletHost"]
