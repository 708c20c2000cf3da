"""
Plotting Utilities

Figures of a time scale's elements inside a window and of delta
derivative tables. Uses matplotlib only.
"""

import math
from pathlib import Path
from typing import Callable, Optional

import numpy as np
from numpy.typing import NDArray
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from .calculus import DENSE, TimeScale
from .experiments import DerivativeTable
from .interval import Interval
from .timescales import AffineLattice, Continuous, GeometricLattice, IntervalUnion


def setup_style() -> None:
    """Set up matplotlib style for publication-quality plots."""
    plt.rcParams.update({
        'font.size': 10,
        'axes.labelsize': 11,
        'axes.titlesize': 12,
        'xtick.labelsize': 9,
        'ytick.labelsize': 9,
        'legend.fontsize': 9,
        'figure.figsize': (8, 6),
        'figure.dpi': 150,
        'savefig.dpi': 150,
        'axes.grid': True,
        'grid.alpha': 0.3,
    })


def scale_elements(scale: TimeScale, t_min: float, t_max: float) -> tuple[list[Interval], NDArray[np.float64]]:
    """Split the part of a scale inside [t_min, t_max] into pieces.

    Args:
        scale: Time scale
        t_min: Window start
        t_max: Window end

    Returns:
        Tuple of (nondegenerate intervals, isolated points), both clipped
        to the window
    """
    if isinstance(scale, Continuous):
        return [Interval(t_min, t_max)], np.array([])

    if isinstance(scale, AffineLattice):
        k_lo = math.ceil((t_min - scale.offset) / scale.scalar)
        k_hi = math.floor((t_max - scale.offset) / scale.scalar)
        return [], scale.offset + scale.scalar * np.arange(k_lo, k_hi + 1)

    if isinstance(scale, GeometricLattice):
        pts = [0.0] if t_min <= 0.0 <= t_max else []
        if t_max > 0:
            lo = max(t_min, scale.min_positive)
            k_lo = math.ceil(math.log(lo) / math.log(scale.q))
            k_hi = math.floor(math.log(t_max) / math.log(scale.q))
            pts.extend(scale.q ** k for k in range(k_lo, k_hi + 1))
        return [], np.array(pts)

    if isinstance(scale, IntervalUnion):
        intervals, pts = [], []
        for interval in scale.intervals:
            if interval.right < t_min or interval.left > t_max:
                continue
            if interval.is_degenerate:
                pts.append(interval.left)
            else:
                intervals.append(Interval(max(interval.left, t_min), min(interval.right, t_max)))
        return intervals, np.array(pts)

    raise TypeError(f"Cannot enumerate elements of {type(scale).__name__}")


def plot_time_scale(scale: TimeScale,
                    t_min: float,
                    t_max: float,
                    name: str = "custom",
                    outdir: Optional[Path] = None,
                    show: bool = False) -> Figure:
    """Draw the elements of a scale on a number line.

    Args:
        scale: Time scale to draw
        t_min: Window start
        t_max: Window end
        name: Scale label used in the title and filename
        outdir: Directory to save plot (if provided)
        show: Whether to display the plot

    Returns:
        matplotlib Figure object
    """
    setup_style()

    fig, ax = plt.subplots(figsize=(8, 2.5))
    intervals, pts = scale_elements(scale, t_min, t_max)

    for interval in intervals:
        ax.plot([interval.left, interval.right], [0, 0], '-', linewidth=4, color='#2E86AB')
        ax.plot([interval.left, interval.right], [0, 0], '|', markersize=14, color='#2E86AB')
    if len(pts):
        ax.plot(pts, np.zeros_like(pts), 'o', markersize=6, color='#A23B72')

    ax.set_xlim(t_min, t_max)
    ax.set_yticks([])
    ax.set_xlabel(r'$t$')
    ax.set_title(f'Time scale: {name}')

    plt.tight_layout()

    if outdir is not None:
        outdir.mkdir(parents=True, exist_ok=True)
        fig.savefig(outdir / f"timescale_{name}.png", bbox_inches='tight')

    if show:
        plt.show()

    return fig


def plot_delta_derivative(table: DerivativeTable,
                          exact: Optional[Callable[[float], float]] = None,
                          outdir: Optional[Path] = None,
                          show: bool = False) -> Figure:
    """Plot f^Δ at the table's points, optionally against f'.

    Args:
        table: DerivativeTable from ``derivative_table``
        exact: Ordinary derivative f' for comparison
        outdir: Directory to save plot (if provided)
        show: Whether to display the plot

    Returns:
        matplotlib Figure object
    """
    setup_style()

    fig, ax = plt.subplots(figsize=(8, 6))

    scattered = np.array([kind != DENSE for kind in table.point_types], dtype=bool)
    ax.plot(table.points[~scattered], table.values[~scattered], 'o',
            color='#2E86AB', label=r'$f^\Delta$ (dense)')
    ax.plot(table.points[scattered], table.values[scattered], 's',
            color='#A23B72', label=r'$f^\Delta$ (scattered)')

    if exact is not None and len(table.points):
        grid = np.linspace(table.points.min(), table.points.max(), 400)
        ax.plot(grid, [exact(float(t)) for t in grid], '--', color='gray',
                alpha=0.7, label=r"$f'$")

    ax.set_xlabel(r'$t$')
    ax.set_ylabel(r'$f^\Delta(t)$')
    ax.set_title(f'Delta derivative of {table.function_name} on {table.scale_name}')
    ax.legend(loc='best')

    plt.tight_layout()

    if outdir is not None:
        outdir.mkdir(parents=True, exist_ok=True)
        filename = f"delta_derivative_{table.scale_name}_{table.function_name}.png"
        fig.savefig(outdir / filename, bbox_inches='tight')

    if show:
        plt.show()

    return fig
