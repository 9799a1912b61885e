import math
from collections import Counter
from itertools import permutations

import numpy as np
import pytest

from smolcanvas.core import mathutil
from smolcanvas.core.mathutil import map_range, random, random_range, shuffle


@pytest.mark.parametrize(
    "a, b, c, d",
    [(0.0, 1.0, 0.0, 255.0), (-5.0, 5.0, 10.0, 20.0), (2.0, -3.0, 1.0, 0.0), (0.0, 700.0, 0.0, 480.0)],
)
def test_map_range_hits_endpoints(a, b, c, d):
    assert map_range(a, a, b, c, d) == c
    assert map_range(b, a, b, c, d) == d


def test_map_range_is_linear():
    assert map_range(0.5, 0.0, 1.0, 0.0, 255.0) == pytest.approx(127.5)
    assert map_range(2.0, 0.0, 1.0, 0.0, 10.0) == pytest.approx(20.0)
    assert map_range(-1.0, 0.0, 2.0, 10.0, 20.0) == pytest.approx(5.0)


def test_map_range_degenerate_input_range_is_not_finite():
    assert math.isinf(map_range(1.0, 2.0, 2.0, 0.0, 1.0))
    assert math.isnan(map_range(2.0, 2.0, 2.0, 0.0, 1.0))


def test_random_range_stays_in_half_open_interval():
    rng = np.random.default_rng(1234)
    samples = [random_range(-3.0, 7.0, rng=rng) for _ in range(10_000)]
    assert all(-3.0 <= s < 7.0 for s in samples)
    assert sum(samples) / len(samples) == pytest.approx(2.0, abs=0.15)


def test_random_range_defaults_to_unit_interval():
    rng = np.random.default_rng(7)
    samples = [random_range(rng=rng) for _ in range(1000)]
    assert all(0.0 <= s < 1.0 for s in samples)


def test_random_arity():
    rng = np.random.default_rng(99)
    assert all(0.0 <= random(rng=rng) < 1.0 for _ in range(200))
    assert all(0.0 <= random(20, rng=rng) < 20.0 for _ in range(200))
    assert all(-80.0 <= random(-80, 80, rng=rng) < 80.0 for _ in range(200))


def test_random_rejects_more_than_two_arguments():
    with pytest.raises(TypeError):
        random(1, 2, 3)


def test_seed_makes_module_source_reproducible():
    mathutil.seed(42)
    first = [random() for _ in range(5)]
    mathutil.seed(42)
    second = [random() for _ in range(5)]
    mathutil.seed(None)
    assert first == second


def test_shuffle_returns_same_list_with_same_elements():
    values = list(range(50)) + [3, 3, 7]
    before = Counter(values)
    out = shuffle(values, rng=np.random.default_rng(0))
    assert out is values
    assert Counter(out) == before


def test_shuffle_handles_empty_and_single():
    assert shuffle([]) == []
    assert shuffle(["x"]) == ["x"]


def test_shuffle_is_uniform_over_permutations():
    rng = np.random.default_rng(2024)
    trials = 6000
    counts = Counter(tuple(shuffle([1, 2, 3], rng=rng)) for _ in range(trials))

    assert set(counts) == set(permutations([1, 2, 3]))
    expected = trials / 6
    chi2 = sum((counts[p] - expected) ** 2 / expected for p in permutations([1, 2, 3]))
    # 自由度 5 の 99.9% 点は約 20.5。
    assert chi2 < 20.5
