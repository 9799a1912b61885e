"""
どこで: `src/smolcanvas/interactive/gl/tessellate.py`。
何を: 矩形/円/太線/円周を GL_TRIANGLES 用の頂点列 `(3N, 2)` に分解する。
なぜ: GLSurface が全図形を 1 種類の描画呼び出しで扱えるようにするため（numpy のみに依存）。
"""

from __future__ import annotations

import numpy as np

from smolcanvas.core.surface import circle_outline
from smolcanvas.core.transform import Affine2D


def rect_triangles(t: Affine2D, x: float, y: float, w: float, h: float) -> np.ndarray:
    corners = t.apply(np.array([(x, y), (x + w, y), (x + w, y + h), (x, y + h)], dtype=np.float64))
    return corners[[0, 1, 2, 0, 2, 3]]


def fan_triangles(t: Affine2D, x: float, y: float, radius: float, segments: int) -> np.ndarray:
    """円を中心からの扇形三角形で埋める。"""

    ring = t.apply(circle_outline(x, y, abs(radius), segments))
    center = t.apply(np.array([(x, y)], dtype=np.float64))[0]
    nxt = np.roll(ring, -1, axis=0)
    tris = np.empty((ring.shape[0], 3, 2), dtype=np.float64)
    tris[:, 0] = center
    tris[:, 1] = ring
    tris[:, 2] = nxt
    return tris.reshape(-1, 2)


def ring_triangles(
    t: Affine2D, x: float, y: float, radius: float, width: float, segments: int
) -> np.ndarray:
    """幅 `width` の円周（内外半径 radius∓width/2）を三角形列にする。"""

    half = abs(float(width)) / 2.0
    r = abs(float(radius))
    outer = t.apply(circle_outline(x, y, r + half, segments))
    inner = t.apply(circle_outline(x, y, max(r - half, 0.0), segments))
    outer_n = np.roll(outer, -1, axis=0)
    inner_n = np.roll(inner, -1, axis=0)
    tris = np.stack([outer, inner, outer_n, outer_n, inner, inner_n], axis=1)
    return tris.reshape(-1, 2)


def line_triangles(
    t: Affine2D, x1: float, y1: float, x2: float, y2: float, width: float
) -> np.ndarray:
    """ローカル座標で幅 `width` の線分を矩形にしてから変換する。"""

    d = np.array([x2 - x1, y2 - y1], dtype=np.float64)
    length = float(np.hypot(d[0], d[1]))
    if length == 0.0:
        return np.empty((0, 2), dtype=np.float64)
    normal = np.array([-d[1], d[0]]) / length * (abs(float(width)) / 2.0)
    p1 = np.array([x1, y1], dtype=np.float64)
    p2 = np.array([x2, y2], dtype=np.float64)
    quad = t.apply(np.stack([p1 + normal, p2 + normal, p2 - normal, p1 - normal]))
    return quad[[0, 1, 2, 0, 2, 3]]


__all__ = ["fan_triangles", "line_triangles", "rect_triangles", "ring_triangles"]
