"""
Time Scale Experiments

Evaluations built on the calculus engine:
- Delta derivative tables over a set of points
- Checks of the integral identities (additivity, antisymmetry)
- The demonstration run comparing the same function on several scales
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .calculus import Function, TimeScale, classify_point, delta_derivative, delta_integral
from .functions import make_function
from .settings import CalculusSettings
from .timescales import make_scale

IDENTITY_TOL = 1e-8


@dataclass
class DerivativeTable:
    """Delta derivative of a function at several points of one scale."""
    scale_name: str
    function_name: str
    points: NDArray[np.float64]
    values: NDArray[np.float64]
    point_types: list[str]


@dataclass
class IdentityCheck:
    """Comparison of the two sides of an integral identity.

    Attributes:
        name: Identity checked ("additivity" or "antisymmetry")
        lhs: Left-hand side value
        rhs: Right-hand side value
        abs_error: |lhs - rhs|
        holds: Whether abs_error is within tolerance
    """
    name: str
    lhs: float
    rhs: float
    abs_error: float
    holds: bool


@dataclass
class DemoCase:
    """One line of the demonstration run."""
    label: str
    scale_name: str
    operation: str
    arguments: tuple[float, ...]
    value: float
    expected: float

    @property
    def abs_error(self) -> float:
        return abs(self.value - self.expected)


def derivative_table(scale: TimeScale,
                     f: Function,
                     points: Sequence[float],
                     scale_name: str = "custom",
                     function_name: str = "custom",
                     settings: Optional[CalculusSettings] = None) -> DerivativeTable:
    """Evaluate f^Δ at each of ``points``.

    Args:
        scale: Time scale containing every point
        f: Scalar function
        points: Points of evaluation
        scale_name: Label stored in the result
        function_name: Label stored in the result
        settings: Optional numerical settings

    Returns:
        DerivativeTable with values and point classifications
    """
    ts = np.asarray(points, dtype=float)
    values = np.empty_like(ts)
    point_types = []

    for i, t in enumerate(ts):
        values[i] = delta_derivative(scale, f, float(t), settings)
        point_types.append(classify_point(scale, float(t)))

    return DerivativeTable(
        scale_name=scale_name,
        function_name=function_name,
        points=ts,
        values=values,
        point_types=point_types,
    )


def _identity(name: str, lhs: float, rhs: float, tol: float) -> IdentityCheck:
    error = abs(lhs - rhs)
    return IdentityCheck(name=name, lhs=lhs, rhs=rhs, abs_error=error,
                         holds=bool(error <= tol * max(1.0, abs(lhs), abs(rhs))))


def check_additivity(scale: TimeScale, f: Function, a: float, b: float, c: float,
                     tol: float = IDENTITY_TOL,
                     settings: Optional[CalculusSettings] = None) -> IdentityCheck:
    """Compare ∫_a^c f Δt with ∫_a^b f Δt + ∫_b^c f Δt."""
    lhs = delta_integral(scale, f, a, c, settings)
    rhs = delta_integral(scale, f, a, b, settings) + delta_integral(scale, f, b, c, settings)
    return _identity("additivity", lhs, rhs, tol)


def check_antisymmetry(scale: TimeScale, f: Function, a: float, b: float,
                       tol: float = IDENTITY_TOL,
                       settings: Optional[CalculusSettings] = None) -> IdentityCheck:
    """Compare ∫_a^b f Δt with -∫_b^a f Δt."""
    lhs = delta_integral(scale, f, a, b, settings)
    rhs = -delta_integral(scale, f, b, a, settings)
    return _identity("antisymmetry", lhs, rhs, tol)


def run_demo(settings: Optional[CalculusSettings] = None) -> list[DemoCase]:
    """Run the demonstration with f(x) = 3x^2 + 2x.

    Scales: the reals, the integers, and the union [0,1] ∪ [2,3] ∪ [4,5].

    - T=R: f^Δ = 6x + 2, so f^Δ(2) = 14 and ∫_0^2 f = 12
    - T=Z: f^Δ = 6x + 5, so f^Δ(1) = 11 and ∫_0^2 f Δt = f(0) + f(1) = 5
    - union: 2 is dense (14), 1 jumps across the gap (11), ∫_0^2 f Δt = 2 + 5 = 7

    Returns:
        List of DemoCase results
    """
    f = make_function("quadratic")
    reals = make_scale("reals")
    ints = make_scale("integers")
    union = make_scale("union")

    plan = [
        ("T=R  @ 2, f'", "reals", reals, "derivative", (2.0,), 14.0),
        ("T=Z  @ 1, f'", "integers", ints, "derivative", (1.0,), 11.0),
        ("T=ts @ 2, f'", "union", union, "derivative", (2.0,), 14.0),
        ("T=ts @ 1, f'", "union", union, "derivative", (1.0,), 11.0),
        ("T=R  ∫[0,2]", "reals", reals, "integral", (0.0, 2.0), 12.0),
        ("T=Z  ∫[0,2]", "integers", ints, "integral", (0.0, 2.0), 5.0),
        ("T=ts ∫[0,2]", "union", union, "integral", (0.0, 2.0), 7.0),
    ]

    cases = []
    for label, scale_name, scale, operation, args, expected in plan:
        if operation == "derivative":
            value = delta_derivative(scale, f, args[0], settings)
        else:
            value = delta_integral(scale, f, args[0], args[1], settings)
        cases.append(DemoCase(
            label=label,
            scale_name=scale_name,
            operation=operation,
            arguments=args,
            value=value,
            expected=expected,
        ))
    return cases
