"""Tests for PANELDK.report and PANELDK.simulate."""

import numpy as np
import pytest

from PANELDK import comparison_table, print_comparison_summary, simulate_group_panel
from PANELDK.DK import ContrastResult


@pytest.fixture
def results():
    return {
        "LS": ContrastResult("LS", -7.0, 0.29, -24.1, 0.0),
        "DK": ContrastResult("DK", -7.0, 2.5, -2.8, 0.005),
    }


class TestComparisonTable:
    """Tests for comparison_table and print_comparison_summary."""

    def test_one_row_per_method(self, results):
        table = comparison_table(results)
        assert list(table.columns) == ["method", "estimate", "std_error", "t_stat", "p_value"]
        assert list(table["method"]) == ["LS", "DK"]
        assert table.loc[1, "t_stat"] == pytest.approx(-2.8)

    def test_print_summary(self, results, capsys):
        print_comparison_summary(comparison_table(results), title="Test table")
        out = capsys.readouterr().out
        assert "Test table" in out
        assert "-24.10" in out and "-2.80" in out


class TestSimulateGroupPanel:
    """Tests for simulate_group_panel."""

    def test_shapes_and_design(self, rng):
        sim = simulate_group_panel(
            30, (2, 3), alphas=(0.1, -0.1), n_unassigned=1, rng=rng
        )
        assert sim["Y"].shape == (30, 6)
        assert sim["X"].shape == (30, 2)
        np.testing.assert_allclose(sim["X"][:, 0], 1.0)
        np.testing.assert_array_equal(sim["Z"].sum(axis=0), [2, 3])
        np.testing.assert_array_equal(sim["Z"][-1], [0, 0])
        np.testing.assert_array_equal(sim["groups"], [0, 0, 1, 1, 1, -1])
        np.testing.assert_allclose(sim["theta"], [0.1, 1.0, -0.1, 1.0])

    def test_within_group_correlation(self, rng):
        sim = simulate_group_panel(
            5000, (2, 2), alphas=(0.0, 0.0), betas=np.zeros((2, 1)), rho=0.6, rng=rng
        )
        corr = np.corrcoef(sim["Y"].T)
        assert corr[0, 1] == pytest.approx(0.6, abs=0.05)
        assert corr[0, 2] == pytest.approx(0.0, abs=0.05)

    def test_invalid_inputs(self, rng):
        with pytest.raises(ValueError, match="one entry per group"):
            simulate_group_panel(10, (2, 2), alphas=(0.1,), rng=rng)
        with pytest.raises(ValueError, match="rho"):
            simulate_group_panel(10, (2,), alphas=(0.1,), rho=1.0, rng=rng)
