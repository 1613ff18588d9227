import math
from typing import Dict

from scipy.special import erf

from skillcurve.protocols.evaluator import HitProbability


def erf_hit_probability(skill: float, difficulty: float) -> float:
    """
    Normal-error hit model: the player's deviation is N(0, difficulty / skill)
    and the object is hit while it stays inside one unit.
    """
    if difficulty <= 0:
        return 1.0
    if skill <= 0:
        return 0.0

    return float(erf(skill / (math.sqrt(2) * difficulty)))


def linear_hit_probability(skill: float, difficulty: float) -> float:
    """min(1, skill / difficulty). Mostly useful for tests and sanity checks."""
    if difficulty <= 0:
        return 1.0
    if skill <= 0:
        return 0.0

    return min(1.0, skill / difficulty)


HIT_PROBABILITIES: Dict[str, HitProbability] = {
    "erf": erf_hit_probability,
    "linear": linear_hit_probability,
}


def get_hit_probability(name: str) -> HitProbability:
    if name not in HIT_PROBABILITIES:
        raise ValueError(
            f"Unknown hit probability model: {name}. Options: {list(HIT_PROBABILITIES.keys())}"
        )
    return HIT_PROBABILITIES[name]
