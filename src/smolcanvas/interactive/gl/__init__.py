# どこで: `src/smolcanvas/interactive/gl/__init__.py`。
# 何を: ModernGL を使う描画面実装のパッケージ定義。
# なぜ: GPU 依存をこの層に閉じ込め、core をヘッドレスに保つため。

from __future__ import annotations

__all__ = []
