"""
どこで: `src/smolcanvas/core/vector.py`。
何を: 次元固定の数値ベクトル `Vector`（差・ノルム・x/y/z アクセサ）を提供する。
なぜ: スケッチ側の位置/速度計算を、次元不一致を黙って切り詰めない形で扱うため。
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np


class DimensionMismatchError(ValueError):
    """次元の異なる Vector 同士で演算しようとした。"""


class Vector:
    """N 次元の数値ベクトル。

    Notes
    -----
    次元 N は構築時に固定され、以後変わらない。
    `Vector(n)` は n 次元のゼロベクトルを作る（成分からの構築は `Vector.of()`）。
    """

    __slots__ = ("_values",)

    def __init__(self, dim: int) -> None:
        n = int(dim)
        if n < 1:
            raise ValueError(f"Vector の次元は 1 以上である必要がある: got={dim!r}")
        self._values = np.zeros(n, dtype=np.float64)

    @classmethod
    def of(cls, *values: float) -> "Vector":
        """成分列から Vector を作る。"""

        vec = cls(len(values))
        vec._values[:] = values
        return vec

    @classmethod
    def create(cls, x: float, y: float, z: float | None = None) -> "Vector":
        """2 次元（`z` 省略時）または 3 次元の Vector を作る。"""

        if z is None:
            return cls.of(x, y)
        return cls.of(x, y, z)

    @property
    def dim(self) -> int:
        """次元数を返す。"""

        return int(self._values.shape[0])

    @property
    def values(self) -> tuple[float, ...]:
        """成分のコピーを tuple で返す。"""

        return tuple(float(v) for v in self._values)

    def sub(self, other: "Vector") -> "Vector":
        """成分ごとの差 `self - other` を新しい Vector として返す。

        Raises
        ------
        DimensionMismatchError
            次元が異なる場合。
        """

        if other.dim != self.dim:
            raise DimensionMismatchError(
                f"次元が一致しない: self.dim={self.dim}, other.dim={other.dim}"
            )
        out = Vector(self.dim)
        out._values = self._values - other._values
        return out

    def mag(self) -> float:
        """ユークリッドノルムを返す。"""

        return float(np.sqrt(np.sum(self._values * self._values)))

    def _get(self, index: int, name: str) -> float:
        if index >= self.dim:
            raise IndexError(f"{self.dim} 次元の Vector に成分 {name} は無い")
        return float(self._values[index])

    def _set(self, index: int, name: str, value: float) -> None:
        if index >= self.dim:
            raise IndexError(f"{self.dim} 次元の Vector に成分 {name} は無い")
        self._values[index] = float(value)

    @property
    def x(self) -> float:
        return self._get(0, "x")

    @x.setter
    def x(self, value: float) -> None:
        self._set(0, "x", value)

    @property
    def y(self) -> float:
        return self._get(1, "y")

    @y.setter
    def y(self, value: float) -> None:
        self._set(1, "y", value)

    @property
    def z(self) -> float:
        return self._get(2, "z")

    @z.setter
    def z(self, value: float) -> None:
        self._set(2, "z", value)

    def __len__(self) -> int:
        return self.dim

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __getitem__(self, index: int) -> float:
        return float(self._values[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.dim == other.dim and bool(np.array_equal(self._values, other._values))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Vector.of({', '.join(f'{v:g}' for v in self.values)})"


__all__ = ["DimensionMismatchError", "Vector"]
