# src/skillcurve/numerics/poisson_binomial.py
from __future__ import annotations

import math
from typing import Callable, Iterable, Sequence

import numpy as np
from scipy.stats import binom

from skillcurve.custom_types import Bin


class PoissonBinomial:
    """
    Distribution of the number of failed objects.

    Every object is an independent Bernoulli trial that fails with
    probability 1 - hit_probability(skill, difficulty). The mass function
    over 0..n failures is built one trial (or one bin of identical trials)
    at a time, so nothing ever enumerates the 2**n outcomes.

    cdf() accepts real-valued counts: between two integers it interpolates
    linearly, which gives root finders a continuous function to work on.
    """

    def __init__(self, pmf: np.ndarray):
        pmf = np.clip(np.asarray(pmf, dtype=np.float64), 0.0, None)
        self._pmf = pmf
        self._cdf = np.minimum(np.cumsum(pmf), 1.0)

    @classmethod
    def from_difficulties(
        cls,
        difficulties: Iterable[float],
        skill: float,
        hit_probability: Callable[[float, float], float],
    ) -> "PoissonBinomial":
        pmf = np.ones(1, dtype=np.float64)
        for d in difficulties:
            p_fail = _fail_probability(hit_probability(skill, d))
            nxt = np.zeros(pmf.size + 1, dtype=np.float64)
            nxt[:-1] += pmf * (1.0 - p_fail)
            nxt[1:] += pmf * p_fail
            pmf = nxt
        return cls(pmf)

    @classmethod
    def from_bins(
        cls,
        bins: Sequence[Bin],
        skill: float,
        hit_probability: Callable[[float, float], float],
    ) -> "PoissonBinomial":
        pmf = np.ones(1, dtype=np.float64)
        for b in bins:
            # identical trials inside a bin: binomial, then convolve across bins
            p_fail = _fail_probability(hit_probability(skill, b.difficulty))
            within = binom.pmf(np.arange(b.count + 1), b.count, p_fail)
            pmf = np.convolve(pmf, within)
        return cls(pmf)

    @property
    def object_count(self) -> int:
        return self._pmf.size - 1

    def pmf(self, k: int) -> float:
        if k < 0 or k > self.object_count:
            return 0.0
        return float(self._pmf[k])

    def cdf(self, k: float) -> float:
        """Probability of at most `k` failures."""
        n = self.object_count
        if k <= -1.0:
            return 0.0
        if k >= n:
            return 1.0
        if k < 0.0:
            return float((k + 1.0) * self._cdf[0])

        lower = int(math.floor(k))
        t = k - lower
        lo = self._cdf[lower]
        if t == 0.0:
            return float(lo)

        hi = self._cdf[lower + 1]
        return float(min(hi, lo + t * (hi - lo)))

    def mean(self) -> float:
        return float(np.dot(np.arange(self._pmf.size), self._pmf))


def _fail_probability(hit: float) -> float:
    return min(1.0, max(0.0, 1.0 - float(hit)))
