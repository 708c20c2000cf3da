"""
Time Scale Variants

Concrete time scales. Each supplies the five primitives of
``calculus.TimeScale``; the derived operations are available both as free
functions in ``calculus`` and, for convenience, as methods.

- Continuous: the real line, every point dense
- AffineLattice: {scalar * k + offset : k integer}
- GeometricLattice: {0} ∪ {q^k : k integer}, q > 1
- IntervalUnion: a caller-assembled union of closed intervals

Dense points report σ(t) = ρ(t) = 0.
"""

import math
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from . import calculus
from .calculus import Function
from .exceptions import NotInTimeScaleError, TimeScaleError
from .integrate import integrate_interval
from .interval import Interval, point
from .settings import CalculusSettings, MEMBERSHIP_TOL


class DerivedOperationsMixin:
    """Method access to the free functions of ``calculus``."""

    def mu(self, t: float) -> float:
        return calculus.mu(self, t)

    def is_right_scattered(self, t: float) -> bool:
        return calculus.is_right_scattered(self, t)

    def is_right_dense(self, t: float) -> bool:
        return calculus.is_right_dense(self, t)

    def is_left_scattered(self, t: float) -> bool:
        return calculus.is_left_scattered(self, t)

    def is_left_dense(self, t: float) -> bool:
        return calculus.is_left_dense(self, t)

    def is_scattered(self, t: float) -> bool:
        return calculus.is_scattered(self, t)

    def is_dense(self, t: float) -> bool:
        return calculus.is_dense(self, t)

    def classify_point(self, t: float) -> str:
        return calculus.classify_point(self, t)

    def delta_derivative(self, f: Function, t: float,
                         settings: Optional[CalculusSettings] = None) -> float:
        return calculus.delta_derivative(self, f, t, settings)

    def delta_integral(self, f: Function, a: float, b: float,
                       settings: Optional[CalculusSettings] = None) -> float:
        return calculus.delta_integral(self, f, a, b, settings)


@dataclass
class Continuous(DerivedOperationsMixin):
    """The time scale of the real numbers."""

    def is_in_time_scale(self, t: float) -> bool:
        return True

    def get_interval_from_value(self, t: float) -> Interval:
        return Interval(-math.inf, math.inf)

    def sigma(self, t: float) -> float:
        return 0.0

    def rho(self, t: float) -> float:
        return 0.0

    def get_t_kappa(self) -> "Continuous":
        # sup = +inf, so T^κ = T
        return self

    def closed_form_integral(self, f: Function, a: float, b: float,
                             settings: Optional[CalculusSettings] = None) -> float:
        """Ordinary integral over [a, b]; the whole line is one interval."""
        if b < a:
            return -self.closed_form_integral(f, b, a, settings)
        return integrate_interval(f, Interval(a, b), settings)


@dataclass
class AffineLattice(DerivedOperationsMixin):
    """Multiples of ``scalar`` shifted by ``offset``.

    t = scalar * k + offset for some integer k. A negative scalar is stored
    as its absolute value.

    Attributes:
        scalar: Spacing between consecutive points (nonzero)
        offset: The point with k = 0
    """
    scalar: float = 1.0
    offset: float = 0.0

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if self.scalar == 0:
            raise ValueError("scalar must be nonzero")
        self.scalar = abs(self.scalar)

    def is_in_time_scale(self, t: float) -> bool:
        return (t - self.offset) % self.scalar == 0

    def get_interval_from_value(self, t: float) -> Interval:
        if self.is_in_time_scale(t):
            return point(t)
        raise NotInTimeScaleError(t)

    def sigma(self, t: float) -> float:
        if self.is_in_time_scale(t):
            return t + self.scalar
        raise NotInTimeScaleError(t)

    def rho(self, t: float) -> float:
        if self.is_in_time_scale(t):
            return t - self.scalar
        raise NotInTimeScaleError(t)

    def get_t_kappa(self) -> "AffineLattice":
        # sup = +inf, so T^κ = T
        return self

    def closed_form_integral(self, f: Function, a: float, b: float,
                             settings: Optional[CalculusSettings] = None) -> float:
        """Σ μ(t) f(t) over lattice points a <= t < b.

        Graininess is constant, so points are generated directly instead of
        walking σ.
        """
        calculus.check_bounds(self, a, b)

        if b < a:
            return -self.closed_form_integral(f, b, a, settings)

        n_points = int(round((b - a) / self.scalar))
        ts = a + self.scalar * np.arange(n_points)
        return float(sum(self.scalar * f(float(t)) for t in ts))


@dataclass
class GeometricLattice(DerivedOperationsMixin):
    """The quantum numbers {0, ..., q^-2, q^-1, 1, q, q^2, ...}.

    Attributes:
        q: Ratio between consecutive points (q > 1)
        min_positive: Smallest positive lattice point representable in
            double precision, computed once at construction
    """
    q: float
    min_positive: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate q and locate the smallest positive point."""
        if not self.q > 1:
            raise ValueError(f"q must be > 1, got {self.q}")

        # 1/q is always in the lattice; divide until underflow or round-off
        # pushes the value out of it or makes it inexact
        smallest = 1.0 / self.q
        while True:
            candidate = smallest / self.q
            if candidate == 0 or not self.is_in_time_scale(candidate):
                break
            # Subnormal quotients lose precision; keep only exact steps there
            if candidate < sys.float_info.min and candidate * self.q != smallest:
                break
            smallest = candidate
        self.min_positive = smallest

    def is_in_time_scale(self, t: float) -> bool:
        if t == 0:
            return True
        if t < 0 or not math.isfinite(t):
            return False
        # t = q^k for integer k
        k = math.log(t) / math.log(self.q)
        return math.isclose(k, round(k), rel_tol=0.0, abs_tol=MEMBERSHIP_TOL)

    def get_interval_from_value(self, t: float) -> Interval:
        if self.is_in_time_scale(t):
            return point(t)
        raise NotInTimeScaleError(t)

    def sigma(self, t: float) -> float:
        if t == 0:
            return self.min_positive
        if self.is_in_time_scale(t):
            return self.q * t
        raise NotInTimeScaleError(t)

    def rho(self, t: float) -> float:
        if self.is_in_time_scale(t):
            return t / self.q
        raise NotInTimeScaleError(t)

    def get_t_kappa(self) -> "GeometricLattice":
        # sup = +inf, so T^κ = T
        return self


@dataclass
class IntervalUnion(DerivedOperationsMixin):
    """Arbitrary time scale assembled from closed intervals and points.

    The intervals must be given in ascending order and must not overlap;
    ``add_interval`` neither sorts nor merges. Not safe for concurrent
    mutation: build the union fully before querying it.

    Attributes:
        intervals: Ordered, non-overlapping intervals
    """
    intervals: List[Interval] = field(default_factory=list)

    def add_interval(self, interval: Interval) -> None:
        """Append an interval to the end of the union."""
        self.intervals.append(interval)

    @property
    def supremum(self) -> float:
        if not self.intervals:
            raise TimeScaleError("Empty time scale has no supremum")
        return self.intervals[-1].right

    @property
    def infimum(self) -> float:
        if not self.intervals:
            raise TimeScaleError("Empty time scale has no infimum")
        return self.intervals[0].left

    def _index_of(self, t: float) -> int:
        for i, interval in enumerate(self.intervals):
            if interval.contains(t):
                return i
        return -1

    def is_in_time_scale(self, t: float) -> bool:
        return self._index_of(t) != -1

    def get_interval_from_value(self, t: float) -> Interval:
        index = self._index_of(t)
        if index == -1:
            raise NotInTimeScaleError(t)
        return self.intervals[index]

    def sigma(self, t: float) -> float:
        index = self._index_of(t)
        if index == -1:
            raise NotInTimeScaleError(t)

        if t == self.intervals[index].right:
            if index < len(self.intervals) - 1:
                return self.intervals[index + 1].left
            # supremum
            return t
        return 0.0

    def rho(self, t: float) -> float:
        index = self._index_of(t)
        if index == -1:
            raise NotInTimeScaleError(t)

        if t == self.intervals[index].left:
            if index > 0:
                # TODO: jump to intervals[index - 1].right; the first interval is
                # only correct for unions of two intervals
                return self.intervals[0].right
            # infimum
            return t
        return 0.0

    def get_t_kappa(self) -> "IntervalUnion":
        # T^κ = T \ (ρ(sup T), sup T] when sup T is left-scattered; not
        # implemented, the full scale is returned
        return self


SCALE_NAMES = [
    "reals",
    "integers",
    "quantum",
    "union",
]


def get_scale_names() -> List[str]:
    """Return the list of supported scale names."""
    return SCALE_NAMES.copy()


def default_scale_params(name: str) -> Dict:
    """Return default construction parameters for a named scale."""
    if name == "reals":
        return {}
    if name == "integers":
        return {"scalar": 1.0, "offset": 0.0}
    if name == "quantum":
        return {"q": 2.0}
    if name == "union":
        return {"intervals": [(0.0, 1.0), (2.0, 3.0), (4.0, 5.0)]}
    raise ValueError(f"Unknown scale: {name}")


def make_scale(name: str, params: Optional[Dict] = None):
    """Build a named time scale.

    Args:
        name: One of SCALE_NAMES
        params: Optional overrides of ``default_scale_params(name)``

    Returns:
        Time scale instance

    Raises:
        ValueError: If name is not recognized
    """
    if name not in SCALE_NAMES:
        valid = ", ".join(SCALE_NAMES)
        raise ValueError(f"Unknown scale '{name}'. Valid: {valid}")

    p = default_scale_params(name)
    if params:
        p.update(params)

    if name == "reals":
        return Continuous()
    if name == "integers":
        return AffineLattice(scalar=p["scalar"], offset=p["offset"])
    if name == "quantum":
        return GeometricLattice(q=p["q"])

    union = IntervalUnion()
    for left, right in p["intervals"]:
        union.add_interval(Interval(float(left), float(right)))
    return union
