from typing import Callable, List, Optional, Tuple

from scipy.special import expit

from skillcurve.custom_types import TimedObject


def sparsity_nerf(elapsed: float, center: float = 600.0, width: float = 70.0, floor: float = 0.05) -> float:
    """Logistic falloff: ~1 for recent objects, 0 once `elapsed` is well past `center` ms."""
    return max(0.0, (float(expit(-(elapsed - center) / width)) - floor) / (1.0 - floor))


class WindowedStrainEvaluator:
    """
    Strain source for StrainAccumulator.

    Blends the hardest strain seen within the last `window_ms` (each
    previous strain nerfed by how long ago it happened) with the
    immediate difficulty of the current object:

        strain = (blend_weight * hardest_recent + difficulty) / (blend_weight + 1)

    `object_difficulty` defaults to the difficulty carried on the object.
    Objects must be fed in arrival order; the look-back history is kept
    here.
    """

    def __init__(
        self,
        object_difficulty: Optional[Callable[[TimedObject], float]] = None,
        *,
        window_ms: float = 1000.0,
        blend_weight: float = 3.0,
        skill_multiplier: float = 1.0,
    ):
        self.object_difficulty = object_difficulty or _carried_difficulty
        self.window_ms = window_ms
        self.blend_weight = blend_weight
        self.skill_multiplier = skill_multiplier

        # (delta_time, blended strain) per evaluated object
        self._history: List[Tuple[float, float]] = []

    def hardest_recent(self, current: TimedObject) -> float:
        hardest = 0.0
        elapsed = current.delta_time

        for delta_time, strain in reversed(self._history):
            if elapsed > self.window_ms:
                break
            hardest = max(hardest, strain * sparsity_nerf(elapsed))
            elapsed += delta_time

        return hardest

    def __call__(self, current: TimedObject) -> float:
        hardest = self.hardest_recent(current)
        difficulty = float(self.object_difficulty(current))

        strain = (self.blend_weight * hardest + difficulty) / (self.blend_weight + 1.0)
        self._history.append((current.delta_time, strain))

        return strain * self.skill_multiplier


def _carried_difficulty(current: TimedObject) -> float:
    if current.difficulty is None:
        raise ValueError(f"Object {current.index} carries no difficulty and no evaluator was given")
    return current.difficulty
