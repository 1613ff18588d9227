"""
Shared pytest fixtures.

File output goes through tmp_path; plots render with the Agg backend.
"""

from typing import Callable, List, Sequence

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from skillcurve.custom_types import TimedObject
from skillcurve.numerics.hit_probability import erf_hit_probability, linear_hit_probability


@pytest.fixture
def linear_hit():
    return linear_hit_probability


@pytest.fixture
def erf_hit():
    return erf_hit_probability


@pytest.fixture
def make_objects() -> Callable[..., List[TimedObject]]:
    """Build evenly spaced timed objects carrying the given difficulties."""

    def _make(difficulties: Sequence[float], delta_time: float = 100.0) -> List[TimedObject]:
        return [
            TimedObject(
                index=i,
                start_time=(i + 1) * delta_time,
                delta_time=delta_time,
                difficulty=float(d),
            )
            for i, d in enumerate(difficulties)
        ]

    return _make


@pytest.fixture
def spread_difficulties() -> Callable[[int], np.ndarray]:
    """Deterministic difficulties spread over [1, 2]."""

    def _spread(n: int) -> np.ndarray:
        return np.linspace(1.0, 2.0, n)

    return _spread
