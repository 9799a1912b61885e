"""
どこで: `src/smolcanvas/core/mathutil.py`。
何を: スケッチ用の小さな数値ユーティリティ（範囲写像・乱数・シャッフル）を提供する。
なぜ: draw/update から直接呼べる純関数を 1 箇所にまとめ、乱数源を差し替え可能にするため。
"""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import TypeVar

import numpy as np

T = TypeVar("T")

_rng: np.random.Generator = np.random.default_rng()


def seed(value: int | None) -> None:
    """モジュール既定の乱数源を再初期化する。

    Notes
    -----
    `value=None` の場合は OS エントロピーから再初期化する。
    """

    global _rng
    _rng = np.random.default_rng(value)


def _source(rng: np.random.Generator | None) -> np.random.Generator:
    return _rng if rng is None else rng


def map_range(
    value: float,
    in_min: float,
    in_max: float,
    out_min: float,
    out_max: float,
) -> float:
    """`value` を `[in_min, in_max]` から `[out_min, out_max]` へ線形写像する。

    Notes
    -----
    `in_min == in_max` は検査しない。その場合は例外ではなく inf/nan が返るので、
    呼び出し側で幅 0 の入力範囲を避けること。
    """

    span = np.float64(in_max) - np.float64(in_min)
    with np.errstate(divide="ignore", invalid="ignore"):
        t = (np.float64(value) - np.float64(in_min)) / span
        return float(out_min + (out_max - out_min) * t)


def random_range(
    min: float = 0.0,
    max: float = 1.0,
    *,
    rng: np.random.Generator | None = None,
) -> float:
    """`[min, max)` の一様乱数を返す。"""

    return map_range(float(_source(rng).random()), 0.0, 1.0, min, max)


def random(*args: float, rng: np.random.Generator | None = None) -> float:
    """引数の個数に応じた一様乱数を返す。

    - `random()` → `[0, 1)`
    - `random(n)` → `[0, n)`
    - `random(a, b)` → `[a, b)`

    Raises
    ------
    TypeError
        引数が 3 個以上の場合。
    """

    if len(args) == 0:
        return random_range(0.0, 1.0, rng=rng)
    if len(args) == 1:
        return random_range(0.0, args[0], rng=rng)
    if len(args) == 2:
        return random_range(args[0], args[1], rng=rng)
    raise TypeError(f"random() は 0〜2 個の引数を取る: got={len(args)}")


def shuffle(
    seq: MutableSequence[T],
    *,
    rng: np.random.Generator | None = None,
) -> MutableSequence[T]:
    """Fisher–Yates で `seq` をその場で一様に並べ替え、同じ参照を返す。"""

    src = _source(rng)
    for i in range(len(seq) - 1, 0, -1):
        # j は [0, i] から一様に選ぶ（i を含む）。
        j = min(int(random_range(0.0, float(i + 1), rng=src)), i)
        seq[i], seq[j] = seq[j], seq[i]
    return seq


__all__ = ["map_range", "random", "random_range", "seed", "shuffle"]
