# skillcurve/protocols/evaluator.py

from typing import Protocol

from skillcurve.custom_types import TimedObject


class StrainEvaluator(Protocol):
    """
    Per-object difficulty source.

    Called exactly once per object, in arrival order. May keep its own
    look-back buffer but never looks ahead.
    """

    def __call__(self, current: TimedObject) -> float:
        """
        Returns a non-negative difficulty for `current`.
        """


class HitProbability(Protocol):
    """
    Chance of cleanly hitting one object.

    Must be non-decreasing in skill and non-increasing in difficulty,
    with values in [0, 1]. Root finding relies on this; it is not checked.
    """

    def __call__(self, skill: float, difficulty: float) -> float:
        ...
