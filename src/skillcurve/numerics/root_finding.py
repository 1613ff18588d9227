# src/skillcurve/numerics/root_finding.py
from __future__ import annotations

import logging
from typing import Callable

import numpy as np
from scipy.optimize import brentq

logger = logging.getLogger(__name__)


def find_root_expand(
    function: Callable[[float], float],
    lower: float,
    upper_estimate: float,
    *,
    accuracy: float = 1e-4,
    max_iterations: int = 25,
    expansion_factor: float = 2.0,
) -> float:
    """
    Root of a monotone function, with an auto-expanding upper bound.

    `upper_estimate` is only a guess. While f(lower) and f(upper) share a
    sign and |f| does not grow towards the upper side, the bracket is
    slid upwards with a geometrically growing width. Once the signs
    differ Brent's method finishes inside [lower, upper].

    If no sign change is found the boundary whose value is closest to
    zero is returned. This never raises for monotone input.
    """
    a = float(lower)
    b = float(upper_estimate)
    fa = float(function(a))
    fb = float(function(b))

    iterations = 0
    while np.sign(fa) == np.sign(fb) and fa != 0.0:
        # root is below the lower bound; lower is a hard limit
        if abs(fb) > abs(fa):
            break
        if iterations >= max_iterations:
            break

        width = max(b - a, accuracy)
        a, fa = b, fb
        b = a + expansion_factor * width
        fb = float(function(b))
        iterations += 1

    if fa == 0.0:
        return a
    if fb == 0.0:
        return b

    if np.sign(fa) == np.sign(fb):
        best = a if abs(fa) <= abs(fb) else b
        logger.warning(
            f"No sign change in [{a:g}, {b:g}] after {iterations} expansions; "
            f"returning boundary {best:g}"
        )
        return best

    if iterations:
        logger.debug(f"Bracket expanded {iterations} times to [{a:g}, {b:g}]")

    root, result = brentq(function, a, b, xtol=accuracy, full_output=True, disp=False)
    if not result.converged:
        logger.warning(f"Brent search stopped after {result.iterations} iterations at {root:g}")

    return float(root)
