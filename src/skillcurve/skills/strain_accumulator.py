# src/skillcurve/skills/strain_accumulator.py
from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, List, Optional

import numpy as np

from skillcurve.config import StrainConfig
from skillcurve.custom_types import StrainAttributes, StrainPeak, StrainSample, TimedObject
from skillcurve.protocols.evaluator import StrainEvaluator

logger = logging.getLogger(__name__)


class StrainAccumulator:
    """
    Continuous decayed-strain skill.

    Every processed object leaves the previous running strain decayed
    over the object's delta time (weight -1, skipped for the first
    object) and the new running strain (weight +1). In arrival order the
    running weight sum is the active strain count and alternates between
    0 and 1. Sorting the samples by strain turns the
    piecewise exponential decay curve into a sequence of segments with
    a known active strain count, so the weighted integral of the curve
    is computed in closed form instead of resampling it.

    Processing order matters: decay depends on the time between objects.
    """

    def __init__(self, strain_value_at: StrainEvaluator, config: Optional[StrainConfig] = None):
        self.config = config or StrainConfig()
        self.config.validate()

        self.strain_value_at = strain_value_at

        self._samples: List[StrainSample] = []
        self._strain_history: List[float] = []
        self._timestamps: List[float] = []
        self._current_strain = 0.0
        self._elapsed_time = 0.0

    def process(self, current: TimedObject):
        if self._strain_history:
            decay = math.pow(self.config.strain_decay_base, current.delta_time / 1000.0)
            self._samples.append(StrainSample(strain=self._current_strain * decay, weight=-1))

        self._current_strain = float(self.strain_value_at(current))
        self._samples.append(StrainSample(strain=self._current_strain, weight=1))

        self._elapsed_time += current.delta_time
        self._timestamps.append(self._elapsed_time)
        self._strain_history.append(self._current_strain)

    @property
    def object_count(self) -> int:
        return len(self._strain_history)

    @property
    def samples(self) -> List[StrainSample]:
        return list(self._samples)

    def sorted_samples(self) -> List[StrainSample]:
        """
        Samples by descending strain, closed by the last strain decaying
        to zero. The running weight sum along this order is never negative
        and ends at zero.
        """
        if not self._samples:
            return []

        closing = StrainSample(strain=0.0, weight=-1)
        # ties: new strains (+1) before decayed ones (-1)
        return sorted(self._samples + [closing], key=lambda s: (s.strain, s.weight), reverse=True)

    # ================================================================
    # AGGREGATION
    # ================================================================

    def difficulty_value(self) -> float:
        """
        Decay-weighted sum over the sorted strain curve.

        Between two consecutive sorted strains with `frequency` active
        strains, the strain falls exponentially in time while the weight
        falls by decay_weight per section; both integrate in closed form.
        """
        sorted_samples = self.sorted_samples()
        if not sorted_samples:
            return 0.0

        strain_decay_rate = math.log(self.config.strain_decay_base) / 1000.0
        sum_decay_rate = math.log(self.config.decay_weight) / self.config.section_length

        result = 0.0
        current_weight = 1.0
        frequency = 0

        for current, nxt in zip(sorted_samples, sorted_samples[1:]):
            frequency += current.weight

            if frequency <= 0 or current.strain <= 0:
                continue

            if nxt.strain > 0:
                time = math.log(nxt.strain / current.strain) * (frequency / strain_decay_rate)
                next_weight = current_weight * math.exp(sum_decay_rate * time)
            else:
                next_weight = 0.0

            combined_decay = self.config.section_length * (sum_decay_rate + strain_decay_rate / frequency)
            result += (nxt.strain * next_weight - current.strain * current_weight) / combined_decay
            current_weight = next_weight

        value = result * self.config.difficulty_multiplier

        if self.config.length_bonus_weight > 0:
            integral = self.strain_integral()
            logger.debug(f"Length bonus from strain integral {integral:.3f}")
            value *= 1.0 + self.config.length_bonus_weight * math.log10(
                1.0 + integral / self.config.normalized_peak
            )

        return value

    def strain_integral(self) -> float:
        """
        Length/consistency scalar, independent of absolute difficulty.

        Strains are rescaled so the highest equals config.normalized_peak,
        then each sorted segment contributes its mean strain times the
        number of strains active across it.
        """
        sorted_samples = self.sorted_samples()
        if not sorted_samples:
            return 0.0

        max_strain = sorted_samples[0].strain
        if max_strain <= 0:
            return 0.0

        normalization = self.config.normalized_peak / max_strain

        integral = 0.0
        frequency = 0
        for current, nxt in zip(sorted_samples, sorted_samples[1:]):
            frequency += current.weight
            average = 0.5 * (current.strain + nxt.strain) * normalization
            integral += average * frequency

        return integral

    def hard_strain_count(self) -> int:
        threshold = self.config.hard_strain_threshold
        return sum(1 for strain in self._strain_history if strain > threshold)

    # ================================================================
    # DIAGNOSTICS
    # ================================================================

    def get_current_strain_peaks(self) -> Iterator[StrainPeak]:
        """One (timestamp, running strain) entry per processed object."""
        for timestamp, value in zip(self._timestamps, self._strain_history):
            yield StrainPeak(timestamp=timestamp, value=value)

    def attributes(self) -> StrainAttributes:
        return StrainAttributes(
            difficulty_value=self.difficulty_value(),
            strain_integral=self.strain_integral(),
            hard_strain_count=self.hard_strain_count(),
            peak_sum=geometric_peak_sum(self._strain_history, self.config.peak_decay),
            object_count=self.object_count,
            strain_history=list(self._strain_history),
        )


def geometric_peak_sum(values: Iterable[float], decay: float = 0.98) -> float:
    """
    Highest values first, the i-th weighted by decay ** i, normalised by
    (1 - decay) so a constant input returns (almost) itself.
    """
    ordered = np.sort(np.asarray(list(values), dtype=np.float64))[::-1]
    if ordered.size == 0:
        return 0.0

    weights = np.power(decay, np.arange(ordered.size))
    return float(np.dot(ordered, weights) * (1.0 - decay))
