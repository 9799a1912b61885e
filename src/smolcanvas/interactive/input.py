# どこで: `src/smolcanvas/interactive/input.py`。
# 何を: ポインタ/タッチ/キーの生イベントをポインタ状態の更新とユーザーハンドラ呼び出しへ変換する。
# なぜ: ホスト（pyglet 等）固有のイベント形式を 1 層で吸収し、スケッチ側の契約を揃えるため。

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from smolcanvas.interactive.state import Callbacks, PointerState

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TouchPoint:
    """タッチ点 1 つ（クライアント座標）。"""

    client_x: float
    client_y: float


class InputTranslator:
    """生イベントを PointerState とコールバックへ振り分ける。

    Notes
    -----
    - pointer_move は受け取った座標をそのまま書く（ホストのクライアント座標）。
    - touch_move は描画面の左上オフセットを引いてキャンバス座標にする。
    - ハンドラの例外はログに残して握りつぶし、`failures` を数える。
    """

    def __init__(
        self,
        pointer: PointerState,
        callbacks: Callbacks,
        *,
        surface_offset: Callable[[], tuple[float, float]],
    ) -> None:
        self._pointer = pointer
        self._callbacks = callbacks
        self._surface_offset = surface_offset
        self.failures = 0

    def pointer_move(self, x: float, y: float) -> None:
        self._pointer.mouse_x = float(x)
        self._pointer.mouse_y = float(y)

    def touch_move(self, touches: Sequence[TouchPoint]) -> None:
        """先頭のタッチ点をキャンバス座標に直して書く（タッチ無しは無視）。"""

        if not touches:
            return
        touch = touches[0]
        left, top = self._surface_offset()
        self._pointer.mouse_x = float(touch.client_x) - float(left)
        self._pointer.mouse_y = float(touch.client_y) - float(top)

    def pointer_down(self) -> None:
        handler = self._callbacks.mouse_pressed
        if handler is not None:
            self._dispatch("mouse_pressed", handler)

    def key_up(self, key: str) -> None:
        handler = self._callbacks.key_pressed
        if handler is not None:
            self._dispatch("key_pressed", handler, str(key))

    def _dispatch(self, name: str, handler: Callable[..., Any], *args: Any) -> None:
        try:
            handler(*args)
        except Exception:
            self.failures += 1
            _logger.exception("%s ハンドラで例外が発生しました", name)


__all__ = ["InputTranslator", "TouchPoint"]
