# どこで: `src/smolcanvas/interactive/state.py`。
# 何を: ホスト 1 つが所有する共有状態（ユーザーコールバック枠とポインタ位置）を定義する。
# なぜ: Frame Scheduler / Input Translator / SmolCanvas が同じ状態を参照し、グローバル変数を持たないようにするため。

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

UpdateHandler = Callable[[float], None]
DrawHandler = Callable[[], None]
MousePressedHandler = Callable[[], None]
KeyPressedHandler = Callable[[str], None]


@dataclass(slots=True)
class Callbacks:
    """ユーザーが代入するコールバック枠。

    各枠は None（未登録）か 1 つの callable。毎フレーム/毎イベントの直前に参照する。
    """

    update: UpdateHandler | None = None
    draw: DrawHandler | None = None
    mouse_pressed: MousePressedHandler | None = None
    key_pressed: KeyPressedHandler | None = None


@dataclass(slots=True)
class PointerState:
    """最後に観測したポインタ位置。"""

    mouse_x: float = 0.0
    mouse_y: float = 0.0


__all__ = [
    "Callbacks",
    "DrawHandler",
    "KeyPressedHandler",
    "MousePressedHandler",
    "PointerState",
    "UpdateHandler",
]
