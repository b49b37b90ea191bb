"""
Tests for the sampler wrappers.

Covers construction-time validation and the statistical conformance of
weighted sampling.
"""

import math

import numpy as np
import pytest

from cw_generator.distributions import (
    Bernoulli,
    UniformChoice,
    WeightedIndex,
    digit_string,
    uniform_band,
)
from cw_generator.errors import DistributionError


class TestWeightedIndex:
    """Tests for WeightedIndex."""

    @pytest.mark.parametrize(
        "weights",
        [[], [-1, 2], [0, 0, 0], [1, float("nan")], [1, float("inf")]],
    )
    def test_rejects_malformed_weights(self, weights):
        with pytest.raises(DistributionError):
            WeightedIndex(weights)

    def test_frequencies_match_weights(self):
        """Each category lands within 4 standard deviations of its share."""
        weights = [2, 2, 14, 1, 1]
        n = 10_000
        sampler = WeightedIndex(weights)
        rng = np.random.default_rng(7)

        counts = np.bincount(sampler.sample_n(rng, n), minlength=len(weights))

        total = sum(weights)
        for k, w in enumerate(weights):
            p = w / total
            sigma = math.sqrt(n * p * (1 - p))
            assert abs(counts[k] - n * p) <= 4 * sigma, (k, counts[k], n * p)

    def test_zero_weight_never_sampled(self):
        sampler = WeightedIndex([0, 1, 0])
        rng = np.random.default_rng(1)
        assert set(sampler.sample_n(rng, 500)) == {1}

    def test_same_arguments_same_sampler(self):
        a = WeightedIndex([18, 1, 1])
        b = WeightedIndex([18, 1, 1])
        assert a.weights == b.weights
        assert a.sample(np.random.default_rng(3)) == b.sample(np.random.default_rng(3))

    def test_sample_n_zero(self):
        assert WeightedIndex([1]).sample_n(np.random.default_rng(), 0) == []


class TestBernoulli:
    """Tests for Bernoulli."""

    @pytest.mark.parametrize("p", [-0.1, 1.5])
    def test_rejects_out_of_range(self, p):
        with pytest.raises(DistributionError):
            Bernoulli(p)

    def test_extremes(self):
        rng = np.random.default_rng(0)
        assert not any(Bernoulli(0.0).sample(rng) for _ in range(200))
        assert all(Bernoulli(1.0).sample(rng) for _ in range(200))


class TestUniformChoice:
    """Tests for UniformChoice."""

    def test_rejects_empty(self):
        with pytest.raises(DistributionError):
            UniformChoice([])

    def test_samples_from_values(self):
        rng = np.random.default_rng(0)
        choice = UniformChoice(["a", "b", "c"])
        drawn = {choice.sample(rng) for _ in range(300)}
        assert drawn == {"a", "b", "c"}


class TestHelpers:
    """Tests for uniform_band and digit_string."""

    def test_uniform_band_bounds(self):
        rng = np.random.default_rng(0)
        for _ in range(500):
            value = uniform_band(rng, 1000.0, 0.05)
            assert 950.0 <= value <= 1050.0

    def test_uniform_band_zero_scatter(self):
        assert uniform_band(np.random.default_rng(0), 42.0, 0.0) == 42.0

    def test_digit_string(self):
        value = digit_string(np.random.default_rng(0), 17)
        assert len(value) == 17
        assert value.isdigit()
