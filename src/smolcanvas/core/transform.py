"""
どこで: `src/smolcanvas/core/transform.py`。
何を: 2D アフィン変換（3x3 同次行列）の合成と点列への適用を提供する。
なぜ: Surface 実装（記録用/GL）が translate/rotate/scale の合成規則を共有するため。
"""

from __future__ import annotations

import math

import numpy as np


class Affine2D:
    """不変な 2D アフィン変換。

    Notes
    -----
    合成はキャンバス 2D と同じく「右から掛ける」。
    `m.translated(x, y)` はローカル座標系を平行移動した変換を返す。
    """

    __slots__ = ("matrix",)

    def __init__(self, matrix: np.ndarray | None = None) -> None:
        if matrix is None:
            matrix = np.eye(3, dtype=np.float64)
        self.matrix = np.asarray(matrix, dtype=np.float64)

    @classmethod
    def identity(cls) -> "Affine2D":
        return cls()

    def _compose(self, local: np.ndarray) -> "Affine2D":
        return Affine2D(self.matrix @ local)

    def translated(self, x: float, y: float) -> "Affine2D":
        m = np.eye(3, dtype=np.float64)
        m[0, 2] = float(x)
        m[1, 2] = float(y)
        return self._compose(m)

    def rotated(self, radians: float) -> "Affine2D":
        c = math.cos(float(radians))
        s = math.sin(float(radians))
        m = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)
        return self._compose(m)

    def scaled(self, x: float, y: float) -> "Affine2D":
        m = np.diag([float(x), float(y), 1.0])
        return self._compose(m)

    def apply(self, points: np.ndarray) -> np.ndarray:
        """`(N, 2)` の点列を変換して `(N, 2)` で返す。"""

        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return pts @ self.matrix[:2, :2].T + self.matrix[:2, 2]

    @property
    def rotation_degrees(self) -> float:
        """x 軸の回転角（度）を返す（テキストの向き合わせ用）。"""

        return math.degrees(math.atan2(self.matrix[1, 0], self.matrix[0, 0]))

    @property
    def scale_factor(self) -> float:
        """線幅/半径に掛ける等方スケール（行列式の平方根）を返す。"""

        det = float(np.linalg.det(self.matrix[:2, :2]))
        return math.sqrt(abs(det))


__all__ = ["Affine2D"]
