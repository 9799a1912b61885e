# どこで: `src/smolcanvas/__init__.py`。
# 何を: ルート `smolcanvas` パッケージを定義する。
# なぜ: スケッチの import 起点を `smolcanvas` に統一するため。

from __future__ import annotations

from smolcanvas.canvas import SmolCanvas
from smolcanvas.core.color import rgba
from smolcanvas.core.mathutil import map_range, random, random_range, seed, shuffle
from smolcanvas.core.vector import DimensionMismatchError, Vector

__all__ = [
    "DimensionMismatchError",
    "SmolCanvas",
    "Vector",
    "map_range",
    "random",
    "random_range",
    "rgba",
    "seed",
    "shuffle",
]
