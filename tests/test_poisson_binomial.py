"""
Tests for numerics/poisson_binomial.py - PoissonBinomial
"""

import numpy as np
import pytest

from skillcurve.custom_types import Bin
from skillcurve.numerics.poisson_binomial import PoissonBinomial


def coin(skill, difficulty):
    return 0.5


class TestKnownDistribution:
    """Two fair trials: 0/1/2 failures with 1/4, 1/2, 1/4."""

    @pytest.fixture
    def two_coins(self):
        return PoissonBinomial.from_difficulties([1.0, 1.0], 1.0, coin)

    def test_pmf(self, two_coins):
        assert [two_coins.pmf(k) for k in range(3)] == pytest.approx([0.25, 0.5, 0.25])
        assert two_coins.pmf(-1) == 0.0
        assert two_coins.pmf(3) == 0.0

    def test_integer_cdf(self, two_coins):
        assert two_coins.cdf(0) == pytest.approx(0.25)
        assert two_coins.cdf(1) == pytest.approx(0.75)
        assert two_coins.cdf(2) == 1.0

    def test_interpolated_cdf(self, two_coins):
        assert two_coins.cdf(0.5) == pytest.approx(0.5)
        assert two_coins.cdf(-0.5) == pytest.approx(0.125)

    def test_mean(self, two_coins):
        assert two_coins.mean() == pytest.approx(1.0)
        assert two_coins.object_count == 2


class TestCdfProperties:

    @pytest.fixture
    def distribution(self, erf_hit):
        difficulties = np.linspace(0.5, 3.0, 40)
        return PoissonBinomial.from_difficulties(difficulties, 2.0, erf_hit)

    def test_boundaries(self, distribution):
        assert distribution.cdf(-1) == 0.0
        assert distribution.cdf(-50) == 0.0
        assert distribution.cdf(distribution.object_count) == pytest.approx(1.0)

    def test_non_decreasing(self, distribution):
        grid = np.linspace(-2.0, distribution.object_count + 2.0, 500)
        values = [distribution.cdf(k) for k in grid]

        assert all(b >= a for a, b in zip(values, values[1:]))

    def test_pmf_sums_to_one(self, distribution):
        total = sum(distribution.pmf(k) for k in range(distribution.object_count + 1))
        assert total == pytest.approx(1.0)

    def test_mean_is_sum_of_fail_probabilities(self, erf_hit):
        difficulties = [0.8, 1.2, 2.5, 3.0]
        dist = PoissonBinomial.from_difficulties(difficulties, 1.5, erf_hit)
        expected = sum(1.0 - erf_hit(1.5, d) for d in difficulties)

        assert dist.mean() == pytest.approx(expected)


class TestBinned:

    def test_matches_exact_for_identical_members(self, linear_hit):
        exact = PoissonBinomial.from_difficulties([1.0, 1.0, 1.0, 2.0, 2.0], 0.8, linear_hit)
        binned = PoissonBinomial.from_bins([Bin(1.0, 3), Bin(2.0, 2)], 0.8, linear_hit)

        assert binned.object_count == exact.object_count == 5
        for k in range(6):
            assert binned.cdf(k) == pytest.approx(exact.cdf(k), abs=1e-12)

    def test_certain_hits(self, linear_hit):
        dist = PoissonBinomial.from_bins([Bin(1.0, 10)], 5.0, linear_hit)

        assert dist.cdf(0) == pytest.approx(1.0)
        assert dist.mean() == pytest.approx(0.0)

    def test_certain_misses(self, linear_hit):
        dist = PoissonBinomial.from_bins([Bin(1.0, 4)], 0.0, linear_hit)

        assert dist.cdf(3) == pytest.approx(0.0)
        assert dist.pmf(4) == pytest.approx(1.0)
