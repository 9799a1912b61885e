# どこで: `src/smolcanvas/interactive/host.py`。
# 何を: SmolCanvas が依存するホスト環境の契約（Host）と、ウィンドウ無しで動く HeadlessHost を定義する。
# なぜ: フレーム提示/入力源/ウィンドウ操作を差し替え可能にし、pyglet 無しでもループを決定的に回せるようにするため。

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from smolcanvas.core.runtime_config import runtime_config
from smolcanvas.core.surface import RecordingSurface, Surface
from smolcanvas.interactive.input import InputTranslator
from smolcanvas.interactive.runtime.frame_scheduler import FrameCallback


class Host(Protocol):
    """SmolCanvas から見たホスト環境。"""

    @property
    def surface(self) -> Surface: ...

    def set_title(self, title: str) -> None: ...

    def viewport_size(self) -> tuple[int, int]: ...

    def clear_margin(self) -> None: ...

    def resize(self, width: int, height: int) -> None: ...

    def surface_offset(self) -> tuple[float, float]: ...

    def request_frame(self, callback: FrameCallback) -> None: ...

    def bind_input(self, translator: InputTranslator) -> None: ...

    def run(self) -> None: ...

    def close(self) -> None: ...


class HeadlessHost:
    """ウィンドウを持たないホスト。

    Notes
    -----
    フレームは `advance(timestamp_ms)` を呼んだときだけ届く。
    入力は `input`（bind 済みの InputTranslator）を直接呼んで注入する。
    """

    def __init__(
        self,
        *,
        surface: Surface | None = None,
        viewport: tuple[int, int] | None = None,
        offset: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        cfg = runtime_config()
        if surface is None:
            surface = RecordingSurface(*cfg.canvas_size)
        self._surface = surface
        self._viewport = tuple(viewport) if viewport is not None else cfg.headless_viewport
        self._offset = (float(offset[0]), float(offset[1]))
        self._pending: list[FrameCallback] = []
        self.title = ""
        self.margin_cleared = False
        self.closed = False
        self.input: InputTranslator | None = None

    @property
    def surface(self) -> Surface:
        return self._surface

    def set_title(self, title: str) -> None:
        self.title = str(title)

    def viewport_size(self) -> tuple[int, int]:
        w, h = self._viewport
        return int(w), int(h)

    def clear_margin(self) -> None:
        self.margin_cleared = True

    def resize(self, width: int, height: int) -> None:
        self._surface.resize(width, height)

    def surface_offset(self) -> tuple[float, float]:
        return self._offset

    def request_frame(self, callback: FrameCallback) -> None:
        if not self.closed:
            self._pending.append(callback)

    @property
    def pending_frames(self) -> int:
        return len(self._pending)

    def advance(self, timestamp: float) -> int:
        """要求済みのフレームコールバックを `timestamp` で呼び、呼んだ数を返す。"""

        pending, self._pending = self._pending, []
        for callback in pending:
            callback(float(timestamp))
        return len(pending)

    def bind_input(self, translator: InputTranslator) -> None:
        self.input = translator

    def run(self, timestamps: Iterable[float] = ()) -> None:
        """与えた時刻列で順にフレームを進める。"""

        for t in timestamps:
            if self.closed:
                break
            self.advance(t)

    def close(self) -> None:
        self.closed = True
        self._pending.clear()


__all__ = ["HeadlessHost", "Host"]
