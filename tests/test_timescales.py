"""
Unit tests for the time scale variants.

Tests cover:
- Membership and jump operators of each variant
- The cached minimum of the geometric lattice
- Interval union bookkeeping, including the first-interval backward jump
- The named scale registry
"""

import math
import sys

import pytest

from tscalc.calculus import mu
from tscalc.exceptions import NotInTimeScaleError, TimeScaleError
from tscalc.interval import Interval
from tscalc.timescales import (
    SCALE_NAMES,
    AffineLattice,
    Continuous,
    GeometricLattice,
    IntervalUnion,
    make_scale,
)


def make_union():
    """[0,1] ∪ [2,3] ∪ [4,5]"""
    union = IntervalUnion()
    for i in range(0, 5, 2):
        union.add_interval(Interval(float(i), float(i + 1)))
    return union


class TestContinuous:
    """Tests for the real line."""

    def test_everything_is_member(self):
        reals = Continuous()
        for t in [-1e9, -1.5, 0.0, math.pi, 1e12]:
            assert reals.is_in_time_scale(t)

    def test_jumps_return_zero(self):
        reals = Continuous()
        assert reals.sigma(3.0) == 0.0
        assert reals.rho(3.0) == 0.0

    def test_interval_is_unbounded(self):
        interval = Continuous().get_interval_from_value(7.0)
        assert interval.left == -math.inf
        assert interval.right == math.inf

    def test_t_kappa_is_self(self):
        reals = Continuous()
        assert reals.get_t_kappa() is reals


class TestAffineLattice:
    """Tests for scaled and shifted integers."""

    def test_defaults_are_integers(self):
        ints = AffineLattice()
        assert ints.scalar == 1.0
        assert ints.offset == 0.0
        assert ints.is_in_time_scale(-3.0)
        assert ints.is_in_time_scale(4.0)
        assert not ints.is_in_time_scale(0.5)

    def test_negative_scalar_stored_positive(self):
        assert AffineLattice(scalar=-2.0).scalar == 2.0

    def test_zero_scalar_rejected(self):
        with pytest.raises(ValueError, match="scalar must be nonzero"):
            AffineLattice(scalar=0.0)

    def test_offset_membership(self):
        lattice = AffineLattice(scalar=2.0, offset=1.0)
        assert lattice.is_in_time_scale(3.0)
        assert lattice.is_in_time_scale(-1.0)
        assert not lattice.is_in_time_scale(2.0)

    def test_jumps(self):
        lattice = AffineLattice(scalar=2.0, offset=1.0)
        assert lattice.sigma(3.0) == 5.0
        assert lattice.rho(3.0) == 1.0

    def test_jumps_require_membership(self):
        lattice = AffineLattice(scalar=2.0, offset=1.0)
        with pytest.raises(NotInTimeScaleError) as excinfo:
            lattice.sigma(4.0)
        assert excinfo.value.value == 4.0
        with pytest.raises(NotInTimeScaleError):
            lattice.rho(4.0)
        with pytest.raises(NotInTimeScaleError):
            lattice.get_interval_from_value(4.0)

    def test_interval_is_point(self):
        interval = AffineLattice().get_interval_from_value(2.0)
        assert interval == Interval(2.0, 2.0)


class TestGeometricLattice:
    """Tests for the quantum numbers."""

    def test_membership(self):
        quantum = GeometricLattice(2.0)
        for t in [0.0, 0.25, 0.5, 1.0, 2.0, 8.0, 1024.0]:
            assert quantum.is_in_time_scale(t), t
        for t in [-2.0, 3.0, 0.3, math.inf]:
            assert not quantum.is_in_time_scale(t), t

    def test_jumps(self):
        quantum = GeometricLattice(3.0)
        assert quantum.sigma(9.0) == 27.0
        assert quantum.rho(9.0) == 3.0
        with pytest.raises(NotInTimeScaleError):
            quantum.sigma(5.0)
        with pytest.raises(NotInTimeScaleError):
            quantum.rho(5.0)

    def test_sigma_of_zero_is_cached_minimum(self):
        quantum = GeometricLattice(2.0)
        assert quantum.sigma(0.0) == quantum.min_positive

    def test_min_positive_stays_precise(self):
        """Climbing back from the minimum reproduces 1/q closely."""
        quantum = GeometricLattice(3.0)
        t = quantum.min_positive
        while t < 1.0 / 3.0 * (1 - 1e-6):
            t = quantum.sigma(t)
        assert t == pytest.approx(1.0 / 3.0, rel=1e-12)

    def test_min_positive_power_of_two(self):
        """Powers of two are exact down to the smallest subnormal."""
        assert GeometricLattice(2.0).min_positive == 2.0 ** -1074

    @pytest.mark.parametrize("q", [1.5, 2.0, 3.0, 10.0])
    def test_min_positive_is_smallest_member(self, q):
        quantum = GeometricLattice(q)
        smallest = quantum.min_positive
        assert smallest > 0
        assert quantum.is_in_time_scale(smallest)
        below = smallest / q
        inexact = below < sys.float_info.min and below * q != smallest
        assert below == 0 or not quantum.is_in_time_scale(below) or inexact
        assert smallest <= 1.0 / q

    def test_invalid_q(self):
        with pytest.raises(ValueError, match="q must be > 1"):
            GeometricLattice(1.0)

    def test_interval_is_point(self):
        assert GeometricLattice(2.0).get_interval_from_value(4.0) == Interval(4.0, 4.0)


class TestIntervalUnion:
    """Tests for the union of intervals."""

    def test_membership(self):
        union = make_union()
        assert union.is_in_time_scale(0.0)
        assert union.is_in_time_scale(2.5)
        assert union.is_in_time_scale(5.0)
        assert not union.is_in_time_scale(1.5)
        assert not union.is_in_time_scale(6.0)

    def test_interval_from_value(self):
        union = make_union()
        assert union.get_interval_from_value(2.5) == Interval(2.0, 3.0)
        with pytest.raises(NotInTimeScaleError):
            union.get_interval_from_value(3.5)

    def test_sigma(self):
        union = make_union()
        assert union.sigma(1.0) == 2.0
        assert union.sigma(3.0) == 4.0
        assert union.sigma(5.0) == 5.0
        assert union.sigma(2.5) == 0.0

    def test_rho(self):
        union = make_union()
        assert union.rho(0.0) == 0.0
        assert union.rho(2.0) == 1.0
        assert union.rho(0.5) == 0.0

    def test_rho_uses_first_interval(self):
        """Backward jumps across a gap land on the first interval's right end."""
        assert make_union().rho(4.0) == 1.0

    def test_jumps_require_membership(self):
        union = make_union()
        with pytest.raises(NotInTimeScaleError):
            union.sigma(1.5)
        with pytest.raises(NotInTimeScaleError):
            union.rho(1.5)

    def test_add_interval_does_not_sort(self):
        union = IntervalUnion()
        union.add_interval(Interval(4.0, 5.0))
        union.add_interval(Interval(0.0, 1.0))
        assert union.intervals == [Interval(4.0, 5.0), Interval(0.0, 1.0)]

    def test_supremum_infimum(self):
        union = make_union()
        assert union.supremum == 5.0
        assert union.infimum == 0.0
        with pytest.raises(TimeScaleError):
            IntervalUnion().supremum

    def test_isolated_points(self):
        union = IntervalUnion([Interval(0.0, 0.0), Interval(1.0, 2.0)])
        assert union.sigma(0.0) == 1.0
        assert union.rho(1.0) == 0.0

    def test_t_kappa_is_self(self):
        union = make_union()
        assert union.get_t_kappa() is union


class TestGraininess:
    """μ(t) = σ(t) - t on every variant."""

    @pytest.mark.parametrize("scale, t", [
        (Continuous(), 2.0),
        (AffineLattice(scalar=0.5), 1.5),
        (GeometricLattice(2.0), 4.0),
        (GeometricLattice(2.0), 0.0),
        (make_union(), 1.0),
        (make_union(), 2.5),
        (make_union(), 5.0),
    ])
    def test_mu_is_sigma_minus_t(self, scale, t):
        assert mu(scale, t) == scale.sigma(t) - t
        assert scale.mu(t) == scale.sigma(t) - t

    def test_lattice_graininess(self):
        assert mu(AffineLattice(scalar=3.0), 6.0) == 3.0
        assert mu(GeometricLattice(2.0), 4.0) == 4.0


class TestScaleRegistry:
    """Tests for named scales."""

    def test_all_names_build(self):
        for name in SCALE_NAMES:
            assert make_scale(name) is not None

    def test_default_union(self):
        union = make_scale("union")
        assert union.intervals == make_union().intervals

    def test_overrides(self):
        lattice = make_scale("integers", {"scalar": 2.0})
        assert lattice.scalar == 2.0
        assert make_scale("quantum", {"q": 3.0}).q == 3.0

    def test_unknown_scale(self):
        with pytest.raises(ValueError, match="Unknown scale"):
            make_scale("rationals")
