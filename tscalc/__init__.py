"""
tscalc - Time Scale Calculus

Delta derivatives and delta integrals over time scales: nonempty closed
subsets of the reals that mix continuous stretches with isolated points.

Usage:
    python -m tscalc --demo
    python -m tscalc --scale union --interval 0 1 --interval 2 3 --at 1 --at 2
    python -m tscalc --scale integers --integral 0 10 --function cubic

Main components:
    - interval: Closed interval value type
    - calculus: Capability protocol and derived operations (μ, f^Δ, ∫ Δt)
    - timescales: Continuous, affine lattice, geometric lattice, interval union
    - integrate: Composite Boole quadrature fallback
    - experiments: Derivative tables, identity checks, demonstration
    - plot / report: Visualization and report generation
"""

__version__ = "0.1.0"

from .interval import Interval, point

from .exceptions import (
    TimeScaleError,
    NotInTimeScaleError,
    NotEnoughArgumentsError,
    UnreachableBoundError,
)

from .settings import (
    CalculusSettings,
    DEFAULT_SETTINGS,
    MACHINE_EPSILON,
    DIFF_STEP,
)

from .integrate import integrate_interval

from .calculus import (
    TimeScale,
    mu,
    is_right_scattered,
    is_right_dense,
    is_left_scattered,
    is_left_dense,
    is_scattered,
    is_dense,
    classify_point,
    delta_derivative,
    delta_integral,
    walk_integral,
)

from .timescales import (
    Continuous,
    AffineLattice,
    GeometricLattice,
    IntervalUnion,
    make_scale,
)

__all__ = [
    "Interval",
    "point",
    "TimeScaleError",
    "NotInTimeScaleError",
    "NotEnoughArgumentsError",
    "UnreachableBoundError",
    "CalculusSettings",
    "DEFAULT_SETTINGS",
    "MACHINE_EPSILON",
    "DIFF_STEP",
    "integrate_interval",
    "TimeScale",
    "mu",
    "is_right_scattered",
    "is_right_dense",
    "is_left_scattered",
    "is_left_dense",
    "is_scattered",
    "is_dense",
    "classify_point",
    "delta_derivative",
    "delta_integral",
    "walk_integral",
    "Continuous",
    "AffineLattice",
    "GeometricLattice",
    "IntervalUnion",
    "make_scale",
]
