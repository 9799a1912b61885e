from __future__ import annotations

# どこで: `src/smolcanvas/interactive/gl/utils.py`。
# 何を: 描画で使う小さなユーティリティ（投影行列生成）を提供する。
# なぜ: surface 初期化とリサイズで共有し、座標系の定義を一箇所に集約するため。

import numpy as np


def build_projection(canvas_width: float, canvas_height: float) -> "np.ndarray":
    """左上原点・y 下向きのピクセル座標を基準とする正射影行列（ModernGL 用の転置済み）を返す。"""
    w = max(float(canvas_width), 1.0)
    h = max(float(canvas_height), 1.0)
    proj = np.array(
        [
            [2 / w, 0, 0, -1],
            [0, -2 / h, 0, 1],
            [0, 0, -1, 0],
            [0, 0, 0, 1],
        ],
        dtype="f4",
    ).T
    return proj
