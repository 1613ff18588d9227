# src/skillcurve/config.py

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Tuple


def _from_mapping(cls, values: Mapping[str, Any]):
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {unknown}. Options: {sorted(known)}")

    kwargs: Dict[str, Any] = dict(values)
    if "penalty_fractions" in kwargs:
        kwargs["penalty_fractions"] = tuple(float(x) for x in kwargs["penalty_fractions"])
    return cls(**kwargs)


@dataclass(frozen=True)
class ProbabilityConfig:
    """
    Tuning for the probability skill.

    fc_probability is the chance a player at the returned skill passes
    every object. A higher value increases the influence of difficulty
    spikes, a lower value the influence of length and consistency.
    """
    fc_probability: float = 0.02
    bin_count: int = 32
    root_accuracy: float = 1e-4
    upper_bound_multiplier: float = 3.0
    zero_difficulty_epsilon: float = 1e-10

    # search range for the continuous miss count
    miss_search_lower: float = -50.0
    miss_search_upper: float = 1000.0

    # skill fractions sampled for the miss penalty curve
    penalty_fractions: Tuple[float, ...] = (1.0, 0.95, 0.9, 0.8, 0.6, 0.3, 0.0)

    @property
    def bin_threshold(self) -> int:
        # below this many objects binning changes the result too much
        return 2 * self.bin_count

    def validate(self):
        if not 0.0 < self.fc_probability < 1.0:
            raise ValueError(f"fc_probability must lie in (0, 1), got {self.fc_probability}")
        if self.bin_count < 1:
            raise ValueError(f"bin_count must be positive, got {self.bin_count}")
        if self.root_accuracy <= 0:
            raise ValueError(f"root_accuracy must be positive, got {self.root_accuracy}")
        if self.upper_bound_multiplier <= 0:
            raise ValueError(
                f"upper_bound_multiplier must be positive, got {self.upper_bound_multiplier}"
            )
        if self.miss_search_lower >= self.miss_search_upper:
            raise ValueError(
                f"Empty miss search range [{self.miss_search_lower}, {self.miss_search_upper}]"
            )

        p = self.penalty_fractions
        if len(p) < 2 or p[0] != 1.0:
            raise ValueError(f"penalty_fractions must start at 1.0, got {p}")
        if any(b >= a for a, b in zip(p, p[1:])) or p[-1] < 0.0:
            raise ValueError(f"penalty_fractions must be strictly decreasing to >= 0, got {p}")

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "ProbabilityConfig":
        return _from_mapping(cls, values)


@dataclass(frozen=True)
class StrainConfig:
    """
    Tuning for the decayed strain accumulator.

    strain_decay_base is the fraction of strain left after one second.
    decay_weight is the weight ratio between two consecutive sections of
    section_length ms in the sorted strain curve.
    """
    strain_decay_base: float = 0.25
    decay_weight: float = 0.9
    section_length: float = 400.0
    difficulty_multiplier: float = 1.0

    # the strain integral rescales strains so the highest equals this
    normalized_peak: float = 10.0
    # 0 disables the logarithmic length bonus
    length_bonus_weight: float = 0.0

    hard_strain_threshold: float = 1.1
    peak_decay: float = 0.98

    def validate(self):
        for name in ("strain_decay_base", "decay_weight", "peak_decay"):
            value = getattr(self, name)
            if not 0.0 < value < 1.0:
                raise ValueError(f"{name} must lie in (0, 1), got {value}")
        if self.section_length <= 0:
            raise ValueError(f"section_length must be positive, got {self.section_length}")
        if self.normalized_peak <= 0:
            raise ValueError(f"normalized_peak must be positive, got {self.normalized_peak}")
        if self.length_bonus_weight < 0:
            raise ValueError(
                f"length_bonus_weight must be non-negative, got {self.length_bonus_weight}"
            )

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "StrainConfig":
        return _from_mapping(cls, values)
