from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any


@dataclass(frozen=True)
class TimedObject:
    """One timed target as handed over by the host sequence."""
    index: int
    start_time: float        # ms
    delta_time: float        # ms since previous object
    difficulty: Optional[float] = None   # pre-computed evaluator output, if any


@dataclass(frozen=True)
class Bin:
    """Representative difficulty standing in for `count` near-equal samples."""
    difficulty: float
    count: int


@dataclass(frozen=True)
class StrainSample:
    """
    Point of the piecewise decay curve.

    weight is +1 where a fresh strain starts and -1 where the previous
    running strain has decayed away. The running sum of weights is the
    active strain count.
    """
    strain: float
    weight: int


@dataclass(frozen=True)
class StrainPeak:
    timestamp: float
    value: float


@dataclass(frozen=True)
class SkillAttributes:
    """Probability skill outcome."""
    difficulty_value: float
    object_count: int
    max_difficulty: float
    miss_penalty_coefficients: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty_value": self.difficulty_value,
            "object_count": self.object_count,
            "max_difficulty": self.max_difficulty,
            "miss_penalty_coefficients": list(self.miss_penalty_coefficients),
        }


@dataclass(frozen=True)
class StrainAttributes:
    """Strain accumulator outcome."""
    difficulty_value: float
    strain_integral: float
    hard_strain_count: int
    peak_sum: float
    object_count: int
    strain_history: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty_value": self.difficulty_value,
            "strain_integral": self.strain_integral,
            "hard_strain_count": self.hard_strain_count,
            "peak_sum": self.peak_sum,
            "object_count": self.object_count,
            "max_strain": max(self.strain_history) if self.strain_history else 0.0,
        }
