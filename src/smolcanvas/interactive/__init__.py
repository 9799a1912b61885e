# どこで: `src/smolcanvas/interactive/__init__.py`。
# 何を: ホスト環境・入力変換・フレームループなど、実行時に動く層のパッケージ定義。
# なぜ: core（純粋な描画規則）と、時間/イベントを扱う層の境界を明示するため。

from __future__ import annotations

__all__ = []
