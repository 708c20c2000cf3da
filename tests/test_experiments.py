"""
Tests for experiments, functions, report generation and the CLI.
"""

import json

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from tscalc.__main__ import main
from tscalc.calculus import DENSE
from tscalc.experiments import (
    check_additivity,
    check_antisymmetry,
    derivative_table,
    run_demo,
)
from tscalc.functions import (
    FUNCTION_NAMES,
    describe_function,
    exact_derivative,
    make_function,
)
from tscalc.plot import plot_delta_derivative, plot_time_scale, scale_elements
from tscalc.report import generate_report, save_results_json
from tscalc.timescales import AffineLattice, GeometricLattice, make_scale


class TestFunctions:
    """Tests for the sample function registry."""

    def test_quadratic(self):
        f = make_function("quadratic")
        assert f(2.0) == 16.0
        assert exact_derivative("quadratic")(2.0) == 14.0
        assert describe_function("quadratic") == "3t^2 + 2t"

    def test_all_functions_evaluate(self):
        for name in FUNCTION_NAMES:
            assert np.isfinite(make_function(name)(0.5))
            assert np.isfinite(exact_derivative(name)(0.5))

    def test_unknown_function(self):
        with pytest.raises(ValueError, match="Unknown function"):
            make_function("gamma")


class TestExperiments:
    """Tests for derivative tables and identity checks."""

    def test_demo_matches_expected(self):
        cases = run_demo()
        assert len(cases) == 7
        for case in cases:
            assert case.value == pytest.approx(case.expected, abs=1e-6), case.label

    def test_derivative_table(self):
        union = make_scale("union")
        table = derivative_table(union, make_function("quadratic"), [0.0, 1.0, 2.5],
                                 scale_name="union", function_name="quadratic")
        assert table.values[0] == pytest.approx(2.0, abs=1e-6)
        assert table.values[1] == 11.0
        assert table.values[2] == pytest.approx(17.0, abs=1e-6)
        assert table.point_types[0] == DENSE
        assert table.points.shape == (3,)

    def test_additivity_check(self):
        check = check_additivity(make_scale("union"), make_function("cubic"), 0.0, 2.5, 5.0)
        assert check.name == "additivity"
        assert check.holds

    def test_antisymmetry_check(self):
        check = check_antisymmetry(AffineLattice(), make_function("sine"), -3.0, 4.0)
        assert check.holds
        assert check.abs_error == pytest.approx(0.0, abs=1e-12)


class TestReport:
    """Tests for report writers."""

    def test_generate_report(self, tmp_path):
        table = derivative_table(AffineLattice(), make_function("linear"), [0.0, 1.0])
        content = generate_report(run_demo(), [table],
                                  [{"scale": "integers", "function": "linear",
                                    "a": 0.0, "b": 2.0, "value": 4.0}],
                                  None, tmp_path)
        assert "## Demonstration" in content
        assert "## Delta integrals" in content
        assert (tmp_path / "report.md").exists()

    def test_save_results_json(self, tmp_path):
        results = save_results_json(run_demo(), None, None, None, tmp_path)
        with open(tmp_path / "results.json") as f:
            saved = json.load(f)
        assert len(saved["demo"]) == 7
        assert saved["demo"][1]["value"] == 11.0
        assert results["derivatives"] == []


class TestPlot:
    """Tests for plotting helpers."""

    def test_lattice_elements(self):
        intervals, pts = scale_elements(AffineLattice(scalar=2.0, offset=1.0), 0.0, 6.0)
        assert intervals == []
        np.testing.assert_array_equal(pts, [1.0, 3.0, 5.0])

    def test_quantum_elements(self):
        _, pts = scale_elements(GeometricLattice(2.0), 0.0, 4.0)
        assert 0.0 in pts
        assert 4.0 in pts
        assert 3.0 not in pts

    def test_union_elements_clipped(self):
        intervals, _ = scale_elements(make_scale("union"), 0.5, 4.5)
        assert intervals[0].left == 0.5
        assert intervals[-1].right == 4.5

    def test_plots_written(self, tmp_path):
        union = make_scale("union")
        plot_time_scale(union, -1.0, 6.0, name="union", outdir=tmp_path)
        table = derivative_table(union, make_function("quadratic"), [0.5, 1.0, 2.5],
                                 scale_name="union", function_name="quadratic")
        plot_delta_derivative(table, exact=exact_derivative("quadratic"), outdir=tmp_path)
        assert (tmp_path / "timescale_union.png").exists()
        assert (tmp_path / "delta_derivative_union_quadratic.png").exists()


class TestCLI:
    """Tests for the command line driver."""

    def test_demo(self, capsys):
        main(["--demo", "--quiet"])
        out = capsys.readouterr().out
        assert "T=Z  @ 1, f' = 11" in out

    def test_integral_with_outputs(self, tmp_path):
        main(["--scale", "integers", "--integral", "0", "2", "--quiet",
              "--outdir", str(tmp_path)])
        with open(tmp_path / "results.json") as f:
            saved = json.load(f)
        assert saved["integrals"][0]["value"] == 5.0
        assert saved["checks"][0]["holds"]

    def test_derivative_points(self, capsys):
        main(["--scale", "union", "--interval", "0", "1", "--interval", "2", "3",
              "--at", "1", "--quiet"])
        out = capsys.readouterr().out
        assert "f^Δ(1) = 11" in out

    def test_not_in_scale_reraised(self, capsys):
        with pytest.raises(ValueError):
            main(["--scale", "integers", "--at", "0.5", "--quiet"])
        assert "not in the time scale" in capsys.readouterr().err
