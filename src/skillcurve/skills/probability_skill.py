# src/skillcurve/skills/probability_skill.py
from __future__ import annotations

import logging
import math
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from skillcurve.config import ProbabilityConfig
from skillcurve.custom_types import Bin, SkillAttributes, StrainPeak, TimedObject
from skillcurve.numerics.binning import create_bins
from skillcurve.numerics.miss_curve import MissPenaltyCurve
from skillcurve.numerics.poisson_binomial import PoissonBinomial
from skillcurve.numerics.root_finding import find_root_expand
from skillcurve.protocols.evaluator import HitProbability, StrainEvaluator

logger = logging.getLogger(__name__)


class ProbabilitySkill:
    """
    Skill needed to pass every object of a sequence.

    The returned skill is the level at which the probability of hitting
    all objects equals config.fc_probability. Objects are independent,
    so that probability is the product of the per-object hit
    probabilities; arrival order does not matter.

    Usage:
        skill = ProbabilitySkill(erf_hit_probability, strain_value_at=evaluator)
        for obj in objects:
            skill.process(obj)

        skill.difficulty_value()
        skill.get_miss_penalty_curve().miss_count(0.9)

    Short sequences are evaluated exactly. From config.bin_threshold
    objects on, difficulties are grouped into config.bin_count bins
    first, which keeps each evaluation O(bin_count).
    """

    def __init__(
        self,
        hit_probability: HitProbability,
        strain_value_at: Optional[StrainEvaluator] = None,
        config: Optional[ProbabilityConfig] = None,
    ):
        self.config = config or ProbabilityConfig()
        self.config.validate()

        self.hit_probability = hit_probability
        self.strain_value_at = strain_value_at

        self._difficulties: List[float] = []
        self._timestamps: List[float] = []
        self._elapsed_time = 0.0

    # ================================================================
    # INGESTION
    # ================================================================

    def process(self, current: TimedObject):
        if self.strain_value_at is None:
            raise ValueError(
                "process() needs a strain evaluator; use add_difficulty() for raw values"
            )
        self.add_difficulty(self.strain_value_at(current), delta_time=current.delta_time)

    def add_difficulty(self, difficulty: float, delta_time: float = 0.0):
        difficulty = float(difficulty)
        if not math.isfinite(difficulty) or difficulty < 0:
            raise ValueError(f"Object difficulty must be a finite non-negative number, got {difficulty}")

        self._elapsed_time += delta_time
        self._timestamps.append(self._elapsed_time)
        self._difficulties.append(difficulty)

    # ================================================================
    # PROPERTIES
    # ================================================================

    @property
    def object_count(self) -> int:
        return len(self._difficulties)

    @property
    def difficulties(self) -> Tuple[float, ...]:
        return tuple(self._difficulties)

    @property
    def max_difficulty(self) -> float:
        return max(self._difficulties) if self._difficulties else 0.0

    @property
    def uses_bins(self) -> bool:
        return self.object_count >= self.config.bin_threshold

    def _is_trivial(self) -> bool:
        return self.max_difficulty <= self.config.zero_difficulty_epsilon

    def create_bins(self) -> List[Bin]:
        return create_bins(self._difficulties, self.config.bin_count)

    # ================================================================
    # FULL COMBO PROBABILITY
    # ================================================================

    def success_probability_exact(self, skill: float) -> float:
        if skill <= 0:
            return 0.0

        hits = np.fromiter(
            (self.hit_probability(skill, d) for d in self._difficulties),
            dtype=np.float64,
            count=self.object_count,
        )
        return _product(hits, np.ones_like(hits))

    def success_probability_binned(self, skill: float, bins: Optional[Sequence[Bin]] = None) -> float:
        if skill <= 0:
            return 0.0

        if bins is None:
            bins = self.create_bins()

        hits = np.array([self.hit_probability(skill, b.difficulty) for b in bins], dtype=np.float64)
        counts = np.array([b.count for b in bins], dtype=np.float64)
        return _product(hits, counts)

    def success_probability(self, skill: float) -> float:
        """Probability of hitting every object at `skill`."""
        if self.uses_bins:
            return self.success_probability_binned(skill)
        return self.success_probability_exact(skill)

    def difficulty_value(self) -> float:
        if not self._difficulties or self._is_trivial():
            return 0.0

        if self.uses_bins:
            bins = self.create_bins()
            logger.debug(f"Binned {self.object_count} difficulties into {len(bins)} bins")

            def fc_probability(s: float) -> float:
                return self.success_probability_binned(s, bins)
        else:
            fc_probability = self.success_probability_exact

        skill = find_root_expand(
            lambda s: fc_probability(s) - self.config.fc_probability,
            0.0,
            self.config.upper_bound_multiplier * self.max_difficulty,
            accuracy=self.config.root_accuracy,
        )
        return max(0.0, skill)

    # ================================================================
    # MISS COUNTS
    # ================================================================

    def failure_distribution(self, skill: float, bins: Optional[Sequence[Bin]] = None) -> PoissonBinomial:
        if self.uses_bins:
            return PoissonBinomial.from_bins(
                bins if bins is not None else self.create_bins(), skill, self.hit_probability
            )
        return PoissonBinomial.from_difficulties(self._difficulties, skill, self.hit_probability)

    def get_miss_count_at_skill(self, skill: float, bins: Optional[Sequence[Bin]] = None) -> float:
        """
        Lowest miss count a player at `skill` reaches or beats with
        probability config.fc_probability.
        """
        if not self._difficulties or self._is_trivial():
            return 0.0
        if skill <= 0:
            return float(self.object_count)

        distribution = self.failure_distribution(skill, bins)

        misses = find_root_expand(
            lambda k: distribution.cdf(k) - self.config.fc_probability,
            self.config.miss_search_lower,
            self.config.miss_search_upper,
            accuracy=self.config.root_accuracy,
        )
        return max(0.0, misses)

    def get_miss_penalty_curve(self) -> MissPenaltyCurve:
        """
        Curve fitted to the miss counts at fixed fractions of the full
        combo skill. All coefficients are zero when there is nothing to fit.
        """
        curve = MissPenaltyCurve()

        if not self._difficulties or self._is_trivial():
            return curve

        fc_skill = self.difficulty_value()
        bins = self.create_bins() if self.uses_bins else None

        fractions = self.config.penalty_fractions
        miss_counts = []
        for i, fraction in enumerate(fractions):
            # full skill passes everything by definition
            if i == 0:
                miss_counts.append(0.0)
                continue

            miss_counts.append(self.get_miss_count_at_skill(fc_skill * fraction, bins))

        logger.debug(f"Miss counts at {list(fractions)}: {miss_counts}")

        return curve.fit(fractions, miss_counts)

    # ================================================================
    # DIAGNOSTICS
    # ================================================================

    def get_current_strain_peaks(self) -> Iterator[StrainPeak]:
        """One (timestamp, difficulty) entry per processed object."""
        for timestamp, value in zip(self._timestamps, self._difficulties):
            yield StrainPeak(timestamp=timestamp, value=value)

    def attributes(self) -> SkillAttributes:
        return SkillAttributes(
            difficulty_value=self.difficulty_value(),
            object_count=self.object_count,
            max_difficulty=self.max_difficulty,
            miss_penalty_coefficients=self.get_miss_penalty_curve().coefficients,
        )


def _product(hits: np.ndarray, counts: np.ndarray) -> float:
    # summed in logs, in stored order, so long sequences neither underflow nor reorder
    with np.errstate(divide="ignore"):
        log_hits = np.log(np.clip(hits, 0.0, 1.0))
    if np.isneginf(log_hits).any():
        return 0.0
    return float(np.exp(np.sum(counts * log_hits)))
