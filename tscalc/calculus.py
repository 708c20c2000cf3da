"""
Time Scale Calculus

Derived operations shared by every time scale. A time scale only has to
supply five primitives (see ``TimeScale``); graininess, point
classification, the delta derivative and the delta integral are built from
them here as free functions.

References:
    [1] M. Bohner, A. Peterson, "Dynamic Equations on Time Scales", 2001.
"""

import math
from typing import Callable, Optional, Protocol, runtime_checkable

from .exceptions import NotInTimeScaleError, UnreachableBoundError
from .integrate import integrate_interval
from .interval import Interval
from .settings import CalculusSettings, DEFAULT_SETTINGS

Function = Callable[[float], float]

SCATTERED = "scattered"
DENSE = "dense"
RIGHT_SCATTERED_LEFT_DENSE = "right-scattered, left-dense"
LEFT_SCATTERED_RIGHT_DENSE = "left-scattered, right-dense"


@runtime_checkable
class TimeScale(Protocol):
    """Primitives every time scale must supply."""

    def is_in_time_scale(self, t: float) -> bool:
        """Whether ``t`` is an element of the scale."""
        ...

    def sigma(self, t: float) -> float:
        """Forward jump: infimum of the elements strictly greater than ``t``."""
        ...

    def rho(self, t: float) -> float:
        """Backward jump: supremum of the elements strictly less than ``t``."""
        ...

    def get_interval_from_value(self, t: float) -> Interval:
        """The maximal sub-interval of the scale containing ``t``."""
        ...

    def get_t_kappa(self) -> "TimeScale":
        """The scale restricted for differentiation ([1] Definition 1.1)."""
        ...


@runtime_checkable
class ClosedFormIntegral(Protocol):
    """Named override point for scales with a cheaper delta integral."""

    def closed_form_integral(self, f: Function, a: float, b: float,
                             settings: Optional[CalculusSettings] = None) -> float:
        ...


def mu(scale: TimeScale, t: float) -> float:
    """Forward graininess μ(t) = σ(t) - t."""
    return scale.sigma(t) - t


def forward_jump(scale: TimeScale, t: float) -> float:
    """σ(t), with the dense-point report σ(t) = 0 read as σ(t) = t.

    A jump of 0 is a real jump only when t is the right endpoint of its
    containing interval.
    """
    jump = scale.sigma(t)
    if jump == 0 and jump != t and t < scale.get_interval_from_value(t).right:
        return t
    return jump


def backward_jump(scale: TimeScale, t: float) -> float:
    """ρ(t), with the dense-point report ρ(t) = 0 read as ρ(t) = t."""
    jump = scale.rho(t)
    if jump == 0 and jump != t and t > scale.get_interval_from_value(t).left:
        return t
    return jump


def is_right_scattered(scale: TimeScale, t: float) -> bool:
    """Whether σ(t) > t."""
    return t < forward_jump(scale, t)


def is_right_dense(scale: TimeScale, t: float) -> bool:
    """Whether σ(t) = t."""
    return t == forward_jump(scale, t)


def is_left_scattered(scale: TimeScale, t: float) -> bool:
    """Whether ρ(t) < t."""
    return backward_jump(scale, t) < t


def is_left_dense(scale: TimeScale, t: float) -> bool:
    """Whether ρ(t) = t."""
    return backward_jump(scale, t) == t


def is_scattered(scale: TimeScale, t: float) -> bool:
    """Right-scattered and left-scattered ([1] Table 1.1)."""
    return is_right_scattered(scale, t) and is_left_scattered(scale, t)


def is_dense(scale: TimeScale, t: float) -> bool:
    """Right-dense and left-dense ([1] Table 1.1)."""
    return is_right_dense(scale, t) and is_left_dense(scale, t)


def classify_point(scale: TimeScale, t: float) -> str:
    """Classify ``t`` by which sides of it are scattered.

    Returns:
        One of SCATTERED, DENSE, RIGHT_SCATTERED_LEFT_DENSE,
        LEFT_SCATTERED_RIGHT_DENSE
    """
    right = is_right_scattered(scale, t)
    left = is_left_scattered(scale, t)
    if right and left:
        return SCATTERED
    if right:
        return RIGHT_SCATTERED_LEFT_DENSE
    if left:
        return LEFT_SCATTERED_RIGHT_DENSE
    return DENSE


def delta_derivative(scale: TimeScale, f: Function, t: float,
                     settings: Optional[CalculusSettings] = None) -> float:
    """Delta derivative of ``f`` at ``t``.

    If ``t`` is right-scattered in T^κ the exact jump quotient
    ([1] Theorem 1.16 (ii)) is returned. Otherwise the symmetric
    difference quotient approximates the derivative, with error
    -h^2 f'''(t) / 6. ``f`` is assumed differentiable at ``t`` in that case.

    Args:
        scale: Time scale containing ``t``
        f: Scalar function
        t: Point of evaluation
        settings: Optional numerical settings

    Returns:
        f^Δ(t)

    Raises:
        NotInTimeScaleError: If ``t`` is not in the scale
    """
    if settings is None:
        settings = DEFAULT_SETTINGS

    t_kappa = scale.get_t_kappa()
    if is_right_scattered(t_kappa, t):
        return (f(t_kappa.sigma(t)) - f(t)) / mu(t_kappa, t)

    h = settings.diff_step
    return (f(t + h) - f(t - h)) / (2 * h)


def check_bounds(scale: TimeScale, a: float, b: float) -> None:
    """Raise NotInTimeScaleError naming whichever bound is not in the scale."""
    if not scale.is_in_time_scale(a):
        raise NotInTimeScaleError(a)
    if not scale.is_in_time_scale(b):
        raise NotInTimeScaleError(b)


def walk_integral(scale: TimeScale, f: Function, a: float, b: float,
                  settings: Optional[CalculusSettings] = None) -> float:
    """Generic delta integral by a forward walk from ``a`` to ``b``.

    Dense stretches are integrated with the quadrature fallback; each
    scattered point t contributes μ(t) f(t) ([1] Theorem 1.79) and the walk
    jumps to σ(t).

    Raises:
        NotInTimeScaleError: If a bound is not in the scale
        UnreachableBoundError: If σ cannot carry the walk to ``b``
    """
    if settings is None:
        settings = DEFAULT_SETTINGS

    check_bounds(scale, a, b)

    if b < a:
        return -walk_integral(scale, f, b, a, settings)
    if a == b:
        return 0.0

    total = 0.0
    current = a
    steps = 0

    while current != b:
        if steps >= settings.max_walk_steps:
            raise UnreachableBoundError(a, b, steps, "step budget exhausted")
        steps += 1

        interval = scale.get_interval_from_value(current)
        graininess = mu(scale, current)

        # Dense points report σ(t) = 0, so μ alone does not identify them
        if graininess == 0 or current < interval.right:
            if interval.contains(b):
                total += integrate_interval(f, Interval(current, b), settings)
                current = b
            else:
                total += integrate_interval(f, interval.with_left(current), settings)
                current = interval.right
            continue

        if graininess < 0:
            raise UnreachableBoundError(a, b, steps, f"no forward jump from t={current}")

        following = scale.sigma(current)
        # Products of q in a geometric lattice drift by a few ulps
        if following != b and math.isclose(following, b, rel_tol=settings.jump_tol):
            following = b
        if following > b:
            raise UnreachableBoundError(a, b, steps, f"jump from t={current} overshoots to {following}")

        total += graininess * f(current)
        current = following

    return total


def delta_integral(scale: TimeScale, f: Function, a: float, b: float,
                   settings: Optional[CalculusSettings] = None) -> float:
    """Delta integral of ``f`` from ``a`` to ``b``.

    Scales implementing ``closed_form_integral`` answer directly; all others
    go through ``walk_integral``.

    Args:
        scale: Time scale containing both bounds
        f: Scalar function, assumed rd-continuous
        a: Lower bound
        b: Upper bound (``b < a`` gives the negated integral)
        settings: Optional numerical settings

    Returns:
        ∫_a^b f(t) Δt
    """
    if isinstance(scale, ClosedFormIntegral):
        return scale.closed_form_integral(f, a, b, settings)
    return walk_integral(scale, f, a, b, settings)
