"""
Report Generation

Markdown and JSON summaries of derivative tables, integrals and the
demonstration run.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import json

from .experiments import DemoCase, DerivativeTable, IdentityCheck


def generate_report(demo_cases: Optional[list[DemoCase]],
                    tables: Optional[list[DerivativeTable]],
                    integrals: Optional[list[dict]],
                    checks: Optional[list[IdentityCheck]],
                    outdir: Path) -> str:
    """Generate the markdown report and write ``report.md``.

    Args:
        demo_cases: Results of ``run_demo``
        tables: Delta derivative tables
        integrals: Delta integral results as dicts with keys
            scale, function, a, b, value
        checks: Integral identity checks
        outdir: Output directory for the report

    Returns:
        Report content as string
    """
    report = []

    report.append("# Time Scale Calculus Report")
    report.append("")
    report.append(f"*Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}*")
    report.append("")

    if demo_cases:
        report.append("## Demonstration")
        report.append("")
        report.append("| Case | Value | Expected | Abs. error |")
        report.append("|------|-------|----------|------------|")
        for case in demo_cases:
            report.append(f"| {case.label} | {case.value:.10g} | {case.expected:g} | {case.abs_error:.2e} |")
        report.append("")

    for table in tables or []:
        report.append(f"## Delta derivative: {table.function_name} on {table.scale_name}")
        report.append("")
        report.append("| t | f^Δ(t) | Point type |")
        report.append("|---|--------|------------|")
        for t, value, kind in zip(table.points, table.values, table.point_types):
            report.append(f"| {t:g} | {value:.10g} | {kind} |")
        report.append("")

    if integrals:
        report.append("## Delta integrals")
        report.append("")
        report.append("| Scale | Function | a | b | Value |")
        report.append("|-------|----------|---|---|-------|")
        for item in integrals:
            report.append(f"| {item['scale']} | {item['function']} | {item['a']:g} | {item['b']:g} | {item['value']:.10g} |")
        report.append("")

    if checks:
        report.append("## Identity checks")
        report.append("")
        for check in checks:
            status = "holds" if check.holds else "FAILS"
            report.append(f"- {check.name}: {check.lhs:.10g} vs {check.rhs:.10g} ({status}, error {check.abs_error:.2e})")
        report.append("")

    content = "\n".join(report)
    outdir.mkdir(parents=True, exist_ok=True)
    with open(outdir / "report.md", 'w') as f:
        f.write(content)

    return content


def save_results_json(demo_cases: Optional[list[DemoCase]],
                      tables: Optional[list[DerivativeTable]],
                      integrals: Optional[list[dict]],
                      checks: Optional[list[IdentityCheck]],
                      outdir: Path) -> dict:
    """Save all numerical results to ``results.json``.

    Returns:
        Results dictionary
    """
    results = {
        "demo": [
            {
                "label": case.label,
                "scale": case.scale_name,
                "operation": case.operation,
                "arguments": list(case.arguments),
                "value": float(case.value),
                "expected": float(case.expected),
            }
            for case in demo_cases or []
        ],
        "derivatives": [
            {
                "scale": table.scale_name,
                "function": table.function_name,
                "points": table.points.tolist(),
                "values": table.values.tolist(),
                "point_types": list(table.point_types),
            }
            for table in tables or []
        ],
        "integrals": [dict(item) for item in integrals or []],
        "checks": [
            {
                "name": check.name,
                "lhs": float(check.lhs),
                "rhs": float(check.rhs),
                "abs_error": float(check.abs_error),
                "holds": bool(check.holds),
            }
            for check in checks or []
        ],
        "timestamp": datetime.now().isoformat(),
    }

    outdir.mkdir(parents=True, exist_ok=True)
    json_path = outdir / "results.json"
    with open(json_path, 'w') as f:
        json.dump(results, f, indent=2)

    return results
