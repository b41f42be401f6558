import math

import numpy as np
import pytest

from splatkit.multinomial import multinomial_sample


def test_samples_are_distinct_and_in_range():
    weights = [0.5, 1.0, 2.0, 0.1, 3.0, 0.7]
    result = multinomial_sample(weights, 4, np.random.default_rng(1))
    assert len(result) == 4
    assert len(set(result)) == 4
    assert all(0 <= i < len(weights) for i in result)


def test_zero_and_nan_never_chosen():
    weights = [0.0, 1.0, math.nan, 2.0, 0.0, 5.0]
    for seed in range(20):
        result = multinomial_sample(weights, 3, np.random.default_rng(seed))
        assert sorted(result) == [1, 3, 5]


def test_dominant_weight_is_chosen():
    result = multinomial_sample([1e-9, 1e9, 1e-9], 1, np.random.default_rng(0))
    assert result == [1]


def test_seeded_is_reproducible():
    weights = np.linspace(0.1, 1.0, 50)
    a = multinomial_sample(weights, 10, np.random.default_rng(42))
    b = multinomial_sample(weights, 10, np.random.default_rng(42))
    assert a == b


def test_zero_samples():
    assert multinomial_sample([1.0, 2.0], 0) == []


def test_too_many_samples():
    with pytest.raises(ValueError, match="Counts: 2"):
        multinomial_sample([1.0, 2.0], 3)


def test_negative_weight_rejected():
    with pytest.raises(ValueError):
        multinomial_sample([1.0, -1.0, 2.0], 1)


def test_insufficient_nonzero_rejected():
    with pytest.raises(ValueError, match="NaN: 1"):
        multinomial_sample([1.0, 0.0, math.nan], 2)


def test_heavier_weights_picked_more_often():
    rng = np.random.default_rng(7)
    picks = [multinomial_sample([1.0, 9.0], 1, rng)[0] for _ in range(2000)]
    assert set(picks) == {0, 1}
    assert picks.count(1) > picks.count(0) * 4