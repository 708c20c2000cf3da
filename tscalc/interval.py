"""
Closed real intervals.

An ``Interval`` is an immutable ``[left, right]`` pair. A degenerate
interval with ``left == right`` represents an isolated point of a time
scale. "Modifying" an endpoint returns a new interval.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Interval:
    """Closed interval ``[left, right]``.

    Attributes:
        left: Left endpoint
        right: Right endpoint (``left <= right`` is assumed, not checked)
    """
    left: float
    right: float

    @property
    def is_degenerate(self) -> bool:
        """Whether the interval is a single point."""
        return self.left == self.right

    def contains(self, t: float) -> bool:
        """Whether ``t`` lies in the interval (both endpoints included)."""
        return self.left <= t <= self.right

    def can_merge(self, other: "Interval") -> bool:
        """Whether either endpoint of ``other`` lies inside this interval.

        This is a one-directional overlap test: ``a.can_merge(b)`` can be
        False while ``b.can_merge(a)`` is True.
        """
        return self.contains(other.left) or self.contains(other.right)

    def with_right(self, right: float) -> "Interval":
        """Return a copy with the right endpoint replaced."""
        return replace(self, right=right)

    def with_left(self, left: float) -> "Interval":
        """Return a copy with the left endpoint replaced."""
        return replace(self, left=left)


def point(t: float) -> Interval:
    """Degenerate interval ``[t, t]``."""
    return Interval(t, t)
