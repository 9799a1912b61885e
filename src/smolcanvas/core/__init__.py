# どこで: `src/smolcanvas/core/__init__.py`。
# 何を: ウィンドウ/GPU に依存しない描画コア（数値・ベクトル・描画状態・Surface）のパッケージ定義。
# なぜ: interactive 層なしでも import/テストできる境界を明示するため。

from __future__ import annotations

__all__ = []
