"""
Tests for numerics/root_finding.py - find_root_expand
"""

import math

import pytest

from skillcurve.numerics.root_finding import find_root_expand


class TestBracketedSearch:
    """Root already inside [lower, upper_estimate]."""

    def test_linear_root(self):
        root = find_root_expand(lambda x: x - 2.0, 0.0, 10.0, accuracy=1e-6)
        assert root == pytest.approx(2.0, abs=1e-6)

    def test_root_at_lower_bound(self):
        assert find_root_expand(lambda x: x, 0.0, 5.0) == 0.0

    def test_step_function(self):
        """Piecewise constant input still converges onto the jump."""
        root = find_root_expand(lambda x: (0.0 if x < 3.0 else 1.0) - 0.5, 0.0, 10.0, accuracy=1e-4)
        assert root == pytest.approx(3.0, abs=1e-3)

    def test_power_root(self):
        """40 objects at difficulty 1 under a linear hit model."""
        root = find_root_expand(lambda s: min(1.0, s) ** 40 - 0.02, 0.0, 3.0, accuracy=1e-4)
        assert root == pytest.approx(0.02 ** (1 / 40), abs=1e-4)


class TestExpansion:
    """Upper bound grows until the sign changes."""

    def test_expands_for_increasing_function(self):
        root = find_root_expand(lambda x: x - 100.0, 0.0, 1.0, accuracy=1e-6)
        assert root == pytest.approx(100.0, abs=1e-6)

    def test_expands_for_decreasing_function(self):
        root = find_root_expand(lambda x: 5.0 - x, 0.0, 2.0, accuracy=1e-6)
        assert root == pytest.approx(5.0, abs=1e-6)

    def test_expands_from_degenerate_bracket(self):
        root = find_root_expand(lambda x: x - 1.0, 0.0, 0.0, accuracy=1e-6)
        assert root == pytest.approx(1.0, abs=1e-6)


class TestDegenerateInput:
    """Never raises; falls back to the best boundary."""

    def test_root_below_lower_returns_lower(self):
        assert find_root_expand(lambda x: x + 5.0, 0.0, 10.0) == 0.0

    def test_flat_function_returns_boundary(self, caplog):
        result = find_root_expand(lambda x: -1.0, 0.0, 1.0, max_iterations=5)

        assert math.isfinite(result)
        assert result >= 0.0
        assert "No sign change" in caplog.text

    def test_unreachable_root_hits_iteration_cap(self):
        result = find_root_expand(lambda x: x - 1e12, 0.0, 1.0, max_iterations=3)
        # 1 -> 3 -> 7 -> 15
        assert result == pytest.approx(15.0)
