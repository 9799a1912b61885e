# どこで: `src/smolcanvas/interactive/runtime/__init__.py`。
# 何を: フレームループと計測の実装をまとめるパッケージ定義。
# なぜ: `canvas.py` を配線に寄せ、ループの責務を独立させるため。

from __future__ import annotations

__all__ = []
