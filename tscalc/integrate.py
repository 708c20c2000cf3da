"""
Numerical Quadrature Fallback

Composite Boole's rule used wherever a time scale has no closed-form
integral over a dense sub-interval:

∫_a^b f dt ≈ (2h/45) * Σ w_i f(a + i h)

with weights 7, 32, 12, 32, 14, 32, 12, 32, ..., 32, 7. The rule is exact
for polynomials up to degree five and has error O(h^6).
"""

import math
from typing import Callable, Optional

import numpy as np
from numpy.typing import NDArray

from .exceptions import TimeScaleError
from .interval import Interval
from .settings import CalculusSettings, DEFAULT_SETTINGS


def quadrature_steps(distance: float,
                     settings: Optional[CalculusSettings] = None) -> int:
    """Number of equal sub-steps used over an interval of given length.

    One step per unit length, clamped to ``[min_steps, max_steps]`` and
    rounded up to a multiple of four so whole Boole panels tile the interval.

    Args:
        distance: Interval length (right - left)
        settings: Optional numerical settings

    Returns:
        Number of sub-steps n
    """
    if settings is None:
        settings = DEFAULT_SETTINGS

    n = int(distance)
    n = max(settings.min_steps, min(settings.max_steps, n))
    return n + (-n) % 4


def boole_weights(n_steps: int) -> NDArray[np.float64]:
    """Composite Boole's rule weights for ``n_steps + 1`` nodes.

    Args:
        n_steps: Number of sub-steps (multiple of 4)

    Returns:
        Weight array of length ``n_steps + 1``
    """
    if n_steps < 4 or n_steps % 4 != 0:
        raise ValueError(f"n_steps must be a positive multiple of 4, got {n_steps}")

    weights = np.empty(n_steps + 1)
    weights[1::2] = 32.0
    weights[2::4] = 12.0
    weights[4::4] = 14.0
    weights[0] = weights[-1] = 7.0
    return weights


def integrate_interval(f: Callable[[float], float],
                       interval: Interval,
                       settings: Optional[CalculusSettings] = None) -> float:
    """Integrate ``f`` over a closed interval with composite Boole's rule.

    Args:
        f: Scalar function defined on the interval
        interval: Bounds of integration
        settings: Optional numerical settings

    Returns:
        Approximation of ∫ f over the interval (0 for a degenerate interval)

    Raises:
        TimeScaleError: If an endpoint is not finite
    """
    if interval.is_degenerate:
        return 0.0

    if not (math.isfinite(interval.left) and math.isfinite(interval.right)):
        raise TimeScaleError(
            f"Cannot integrate over unbounded interval [{interval.left}, {interval.right}]"
        )

    distance = interval.right - interval.left
    n_steps = quadrature_steps(distance, settings)
    step_size = distance / n_steps

    nodes = interval.left + step_size * np.arange(n_steps + 1)
    # Pin the last node so rounding in step_size does not move the bound
    nodes[-1] = interval.right
    values = np.array([f(float(t)) for t in nodes], dtype=float)

    return float(2.0 * step_size / 45.0 * np.dot(boole_weights(n_steps), values))
