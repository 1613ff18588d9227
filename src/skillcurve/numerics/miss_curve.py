"""
Miss penalty curve: expected failures as a function of skill.
"""

from typing import List, Optional, Sequence

import numpy as np
from sklearn.linear_model import LinearRegression


class MissPenaltyCurve:
    """
    log(1 + misses) as a quartic in the skill deficit x = 1 - skill / fc_skill.

    The curve is pinned to zero misses at full skill (x = 0) and to the
    largest sampled miss count at x = 1; the remaining three degrees of
    freedom come from a least squares fit through the sampled points.

    Coefficients are stored in power order [x^4, x^3, x^2, x^1]. A curve
    that was never fitted has all coefficients at zero.
    """

    COEFFICIENT_COUNT = 4

    def __init__(self, coefficients: Optional[Sequence[float]] = None):
        if coefficients is None:
            coefficients = [0.0] * self.COEFFICIENT_COUNT
        if len(coefficients) != self.COEFFICIENT_COUNT:
            raise ValueError(
                f"Expected {self.COEFFICIENT_COUNT} coefficients, got {len(coefficients)}"
            )
        self._coefficients = np.asarray(coefficients, dtype=np.float64)

    @property
    def coefficients(self) -> List[float]:
        return [float(c) for c in self._coefficients]

    @property
    def is_zero(self) -> bool:
        return not np.any(self._coefficients)

    def fit(self, penalty_fractions: Sequence[float], miss_counts: Sequence[float]) -> "MissPenaltyCurve":
        fractions = np.asarray(penalty_fractions, dtype=np.float64)
        misses = np.asarray(miss_counts, dtype=np.float64)
        if fractions.shape != misses.shape:
            raise ValueError(
                f"Shape mismatch: {fractions.shape[0]} fractions, {misses.shape[0]} miss counts"
            )

        x = 1.0 - fractions
        y = np.log1p(np.maximum(misses, 0.0))
        end_point = float(y.max())

        # basis functions vanish at x = 0 and x = 1, keeping both pins exact
        design = np.column_stack([x ** 4 - x, x ** 3 - x, x ** 2 - x])
        residual = y - end_point * x

        model = LinearRegression(fit_intercept=False)
        model.fit(design, residual)
        a, b, c = (float(v) for v in model.coef_)

        self._coefficients = np.array([a, b, c, end_point - a - b - c], dtype=np.float64)
        return self

    def log_miss_count(self, deficit: float) -> float:
        # trailing zero: no constant term
        return float(np.polyval(np.append(self._coefficients, 0.0), deficit))

    def miss_count(self, skill_fraction: float) -> float:
        """Expected misses for a player at `skill_fraction` of the full combo skill."""
        deficit = 1.0 - min(1.0, max(0.0, skill_fraction))
        return max(0.0, float(np.expm1(self.log_miss_count(deficit))))

    def __repr__(self):
        return f"MissPenaltyCurve({self.coefficients})"
