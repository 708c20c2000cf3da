"""
Time Scale Calculus CLI Entry Point

Run with: python -m tscalc [options]
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .calculus import delta_integral
from .experiments import (
    check_additivity,
    check_antisymmetry,
    derivative_table,
    run_demo,
)
from .functions import describe_function, exact_derivative, get_function_names, make_function
from .plot import plot_delta_derivative, plot_time_scale
from .report import generate_report, save_results_json
from .settings import CalculusSettings, DIFF_STEP, MAX_QUADRATURE_STEPS, MAX_WALK_STEPS, MIN_QUADRATURE_STEPS
from .timescales import IntervalUnion, get_scale_names, make_scale


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="tscalc",
        description="Delta derivatives and delta integrals on time scales",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Scale selection
    parser.add_argument("--scale", type=str, default="union",
                        choices=get_scale_names(),
                        help="Time scale to work on")
    parser.add_argument("--scalar", type=float, default=1.0,
                        help="Spacing of the integers scale")
    parser.add_argument("--offset", type=float, default=0.0,
                        help="Offset of the integers scale")
    parser.add_argument("--q", type=float, default=2.0,
                        help="Ratio of the quantum scale (q > 1)")
    parser.add_argument("--interval", type=float, nargs=2, action="append",
                        metavar=("LEFT", "RIGHT"), default=None,
                        help="Interval of the union scale, in ascending order (repeatable)")

    # Function and evaluation points
    parser.add_argument("--function", type=str, default="quadratic",
                        choices=get_function_names(),
                        help="Function to differentiate/integrate")
    parser.add_argument("--at", type=float, action="append", default=None,
                        help="Point at which to evaluate the delta derivative (repeatable)")
    parser.add_argument("--integral", type=float, nargs=2, default=None,
                        metavar=("A", "B"),
                        help="Bounds of a delta integral")
    parser.add_argument("--demo", action="store_true",
                        help="Run the demonstration on the reals, integers and a union")

    # Numerical settings
    parser.add_argument("--diff-step", type=float, default=DIFF_STEP,
                        help="Step of the symmetric difference quotient")
    parser.add_argument("--min-steps", type=int, default=MIN_QUADRATURE_STEPS,
                        help="Minimum quadrature sub-steps")
    parser.add_argument("--max-steps", type=int, default=MAX_QUADRATURE_STEPS,
                        help="Maximum quadrature sub-steps")
    parser.add_argument("--max-walk-steps", type=int, default=MAX_WALK_STEPS,
                        help="Step budget of the delta integral walk")

    # Output
    parser.add_argument("--outdir", type=str, default=None,
                        help="Output directory for report, results and plots")
    parser.add_argument("--plot", action="store_true",
                        help="Write plots (requires --outdir or --show)")
    parser.add_argument("--show", action="store_true",
                        help="Display plots interactively")
    parser.add_argument("--json", action="store_true",
                        help="Print results as JSON")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress progress output")

    return parser.parse_args(argv)


def scale_params(args: argparse.Namespace) -> dict:
    """Construction parameters for the selected scale."""
    if args.scale == "integers":
        return {"scalar": args.scalar, "offset": args.offset}
    if args.scale == "quantum":
        return {"q": args.q}
    if args.scale == "union" and args.interval:
        return {"intervals": [tuple(pair) for pair in args.interval]}
    return {}


def run(args: argparse.Namespace) -> dict:
    """Run the requested computations and print the results."""
    settings = CalculusSettings(
        diff_step=args.diff_step,
        min_steps=args.min_steps,
        max_steps=args.max_steps,
        max_walk_steps=args.max_walk_steps,
    )
    outdir = Path(args.outdir) if args.outdir else None

    demo_cases = None
    tables = []
    integrals = []
    checks = []

    if args.demo:
        if not args.quiet:
            print("Running demonstration with f(x) = 3x^2 + 2x")
        demo_cases = run_demo(settings)
        for case in demo_cases:
            print(f"{case.label} = {case.value:.10g}  (expected {case.expected:g})")

    scale = make_scale(args.scale, scale_params(args))
    f = make_function(args.function)

    if args.at:
        if not args.quiet:
            print(f"\nDelta derivative of f(t) = {describe_function(args.function)} on {args.scale}:")
        table = derivative_table(scale, f, args.at, scale_name=args.scale,
                                 function_name=args.function, settings=settings)
        tables.append(table)
        for t, value, kind in zip(table.points, table.values, table.point_types):
            print(f"  f^Δ({t:g}) = {value:.10g}  [{kind}]")

    if args.integral:
        a, b = args.integral
        value = delta_integral(scale, f, a, b, settings)
        integrals.append({"scale": args.scale, "function": args.function,
                          "a": a, "b": b, "value": value})
        print(f"\n∫[{a:g}, {b:g}] {describe_function(args.function)} Δt on {args.scale} = {value:.10g}")
        checks.append(check_antisymmetry(scale, f, a, b, settings=settings))
        if not args.quiet:
            for check in checks:
                print(f"  {check.name}: error {check.abs_error:.2e}")

    if outdir is not None:
        generate_report(demo_cases, tables, integrals, checks, outdir)
        results = save_results_json(demo_cases, tables, integrals, checks, outdir)
        if not args.quiet:
            print(f"\nOutputs written to {outdir}")
    else:
        results = {
            "demo": [{"label": c.label, "value": c.value, "expected": c.expected}
                     for c in demo_cases or []],
            "derivatives": [{"points": t.points.tolist(), "values": t.values.tolist()}
                            for t in tables],
            "integrals": integrals,
        }

    if args.plot and (outdir is not None or args.show):
        window = _plot_window(scale, tables, integrals)
        plot_time_scale(scale, window[0], window[1], name=args.scale,
                        outdir=outdir, show=args.show)
        for table in tables:
            plot_delta_derivative(table, exact=exact_derivative(table.function_name),
                                  outdir=outdir, show=args.show)

    if args.json:
        print(json.dumps(results, indent=2))

    return results


def _plot_window(scale, tables: list, integrals: list) -> tuple[float, float]:
    values = []
    for table in tables:
        values.extend(table.points.tolist())
    for item in integrals:
        values.extend([item["a"], item["b"]])
    if isinstance(scale, IntervalUnion) and scale.intervals:
        values.extend([scale.infimum, scale.supremum])
    if not values:
        return -1.0, 5.0
    lo, hi = min(values), max(values)
    pad = max(1.0, 0.1 * (hi - lo))
    return lo - pad, hi + pad


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    if not (args.demo or args.at or args.integral):
        args.demo = True

    try:
        run(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        raise


if __name__ == "__main__":
    main()
