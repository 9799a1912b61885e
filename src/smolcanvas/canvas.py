"""
どこで: `src/smolcanvas/canvas.py`。公開 API の組み立て役。
何を: 描画面・入力変換・フレームスケジューラを 1 つのホストに配線し、スケッチ向けの描画/設定 API を提供する。
なぜ: スケッチが `SmolCanvas` 1 つを作ってコールバックを代入するだけでアニメーションを始められるようにするため。
"""

from __future__ import annotations

from smolcanvas.core.drawing import Painter
from smolcanvas.core.runtime_config import runtime_config
from smolcanvas.interactive.host import Host
from smolcanvas.interactive.input import InputTranslator
from smolcanvas.interactive.runtime.frame_scheduler import FrameScheduler, FrameTiming
from smolcanvas.interactive.runtime.perf import PerfCollector
from smolcanvas.interactive.state import (
    Callbacks,
    DrawHandler,
    KeyPressedHandler,
    MousePressedHandler,
    PointerState,
    UpdateHandler,
)


class SmolCanvas:
    """描画面を 1 つ所有するクリエイティブコーディング用キャンバス。

    Notes
    -----
    - 構築した時点でフレームループが始まる（最初のフレームをホストへ要求する）。
    - `update` / `draw` / `mouse_pressed` / `key_pressed` は代入式のコールバック枠で、
      未代入（None）なら呼ばれない。
    - 停止は `stop()`。ホストがフレームを届けなくなった場合も実質的に止まる。
    """

    def __init__(
        self,
        host: Host | None = None,
        *,
        smoothing: float | None = None,
        perf: PerfCollector | None = None,
    ) -> None:
        """キャンバスを初期化し、ループを開始する。

        Parameters
        ----------
        host : Host | None
            ホスト環境。None の場合は pyglet ウィンドウを新規に作る。
        smoothing : float | None
            fps 平滑化係数。None の場合は config の `loop.fps_smoothing`。
        perf : PerfCollector | None
            区間計測。None の場合は環境変数から作る。
        """

        cfg = runtime_config()
        if host is None:
            # pyglet/moderngl は重い（ディスプレイも要る）ので、ウィンドウを作るときだけ import する。
            from smolcanvas.interactive.pyglet_host import PygletHost

            host = PygletHost(cfg)
        self._host = host

        self._callbacks = Callbacks()
        self._pointer = PointerState()
        self._painter = Painter(host.surface)

        self._input = InputTranslator(
            self._pointer,
            self._callbacks,
            surface_offset=host.surface_offset,
        )
        host.bind_input(self._input)

        self._scheduler = FrameScheduler(
            host.request_frame,
            self._callbacks,
            host.surface,
            smoothing=cfg.fps_smoothing if smoothing is None else float(smoothing),
            perf=perf,
        )
        self._scheduler.start()

    # --- コールバック枠 ---

    @property
    def update(self) -> UpdateHandler | None:
        return self._callbacks.update

    @update.setter
    def update(self, handler: UpdateHandler | None) -> None:
        self._callbacks.update = handler

    @property
    def draw(self) -> DrawHandler | None:
        return self._callbacks.draw

    @draw.setter
    def draw(self, handler: DrawHandler | None) -> None:
        self._callbacks.draw = handler

    @property
    def mouse_pressed(self) -> MousePressedHandler | None:
        return self._callbacks.mouse_pressed

    @mouse_pressed.setter
    def mouse_pressed(self, handler: MousePressedHandler | None) -> None:
        self._callbacks.mouse_pressed = handler

    @property
    def key_pressed(self) -> KeyPressedHandler | None:
        return self._callbacks.key_pressed

    @key_pressed.setter
    def key_pressed(self, handler: KeyPressedHandler | None) -> None:
        self._callbacks.key_pressed = handler

    # --- ライフサイクル / 設定 ---

    def set_title(self, title: str) -> None:
        self._host.set_title(title)

    def setup(self, callback: DrawHandler) -> DrawHandler:
        """`callback()` をその場で 1 度だけ呼ぶ。デコレータとしても使える。"""

        callback()
        return callback

    def size(self, width: int, height: int | None = None) -> None:
        """描画面のサイズを設定する（`height` 省略時は正方形）。

        Notes
        -----
        サイズ変更で描画面の状態（変換/色/フォント）は初期化される。
        """

        h = width if height is None else height
        if int(width) < 0 or int(h) < 0:
            raise ValueError(f"サイズは 0 以上である必要がある: got=({width}, {h})")
        self._host.resize(int(width), int(h))

    def fill_window(self) -> None:
        """ホストの表示領域いっぱいにサイズを合わせる。"""

        self._host.clear_margin()
        w, h = self._host.viewport_size()
        self.size(w, h)

    def font(self, name: str, size: float) -> None:
        self._painter.font(name, size)

    def run(self) -> None:
        """ホストのループへ入る。ループを抜けたらスケジューラも止める。"""

        try:
            self._host.run()
        finally:
            self._scheduler.cancel()

    def stop(self) -> None:
        """以後のフレーム要求を止める。"""

        self._scheduler.cancel()

    def tick(self, timestamp: float) -> FrameTiming:
        """ホストを介さずに 1 フレーム進める（時刻はミリ秒）。"""

        return self._scheduler.tick(timestamp)

    # --- 読み取り専用の状態 ---

    @property
    def mouse_x(self) -> float:
        return self._pointer.mouse_x

    @property
    def mouse_y(self) -> float:
        return self._pointer.mouse_y

    @property
    def fps(self) -> float:
        return self._scheduler.fps

    def width(self) -> int:
        return self._host.surface.width

    def height(self) -> int:
        return self._host.surface.height

    @property
    def fill_active(self) -> bool:
        return self._painter.state.fill_active

    @property
    def stroke_active(self) -> bool:
        return self._painter.state.stroke_active

    @property
    def host(self) -> Host:
        return self._host

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def input(self) -> InputTranslator:
        return self._input

    # --- 描画 ---

    def background(self, value: float) -> None:
        self._painter.background(value)

    def background_rgb(self, r: float, g: float, b: float) -> None:
        self._painter.background_rgb(r, g, b)

    def fill_rgb(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        self._painter.fill_rgb(r, g, b, a)

    def fill(self, value: float, a: float = 1.0) -> None:
        self._painter.fill(value, a)

    def no_fill(self) -> None:
        self._painter.no_fill()

    def stroke_rgb(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        self._painter.stroke_rgb(r, g, b, a)

    def no_stroke(self) -> None:
        self._painter.no_stroke()

    def stroke_weight(self, weight: float) -> None:
        self._painter.stroke_weight(weight)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._painter.line(x1, y1, x2, y2)

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        self._painter.rect(x, y, width, height)

    def circle(self, x: float, y: float, radius: float) -> None:
        self._painter.circle(x, y, radius)

    def text(self, x: float, y: float, text: str) -> None:
        self._painter.text(x, y, text)

    def translate(self, x: float, y: float) -> None:
        self._painter.translate(x, y)

    def rotate(self, degrees: float) -> None:
        self._painter.rotate(degrees)

    def scale(self, x: float, y: float | None = None) -> None:
        self._painter.scale(x, y)

    def transform_push(self) -> None:
        self._painter.transform_push()

    def transform_pop(self) -> None:
        self._painter.transform_pop()


__all__ = ["SmolCanvas"]
