"""Tests for PANELDK.DK.inference."""

import numpy as np
import pytest

from PANELDK.DK import (
    DegenerateContrastError,
    contrast_summary,
    fit_panel,
    group_contrast,
    linear_contrast_test,
)


@pytest.fixture
def simple_estimates():
    theta = np.array([0.5, 1.2, -0.3, 0.9])
    cov = np.diag([0.04, 0.01, 0.09, 0.02])
    cov[0, 2] = cov[2, 0] = 0.01
    return theta, cov


class TestLinearContrastTest:
    """Tests for linear_contrast_test."""

    def test_known_values(self, simple_estimates):
        theta, cov = simple_estimates
        R = np.array([1.0, 0.0, -1.0, 0.0])
        estimate, t_stat = linear_contrast_test(theta, cov, R)
        assert estimate == pytest.approx(0.8)
        # var = 0.04 + 0.09 - 2 * 0.01
        assert t_stat == pytest.approx(0.8 / np.sqrt(0.11))

    def test_positive_rescaling(self, simple_estimates):
        """Scaling R scales the estimate but leaves the t-statistic unchanged."""
        theta, cov = simple_estimates
        R = np.array([1.0, 0.0, -1.0, 0.0])
        est, t = linear_contrast_test(theta, cov, R)
        est_scaled, t_scaled = linear_contrast_test(theta, cov, 3.5 * R)
        assert est_scaled == pytest.approx(3.5 * est)
        assert t_scaled == pytest.approx(t)

    def test_accepts_row_vector(self, simple_estimates):
        theta, cov = simple_estimates
        R = np.array([[0.0, 1.0, 0.0, 0.0]])
        estimate, t_stat = linear_contrast_test(theta, cov, R)
        assert estimate == pytest.approx(1.2)
        assert t_stat == pytest.approx(12.0)

    def test_zero_contrast_raises(self, simple_estimates):
        theta, cov = simple_estimates
        with pytest.raises(DegenerateContrastError, match="not positive"):
            linear_contrast_test(theta, cov, np.zeros(4))

    def test_zero_variance_direction_raises(self, simple_estimates):
        theta, _ = simple_estimates
        cov = np.diag([0.0, 1.0, 1.0, 1.0])
        with pytest.raises(DegenerateContrastError):
            linear_contrast_test(theta, cov, np.array([1.0, 0.0, 0.0, 0.0]))

    def test_shape_mismatch_raises(self, simple_estimates):
        theta, cov = simple_estimates
        with pytest.raises(ValueError, match="must match"):
            linear_contrast_test(theta, cov, np.ones(3))


class TestGroupContrast:
    """Tests for group_contrast."""

    def test_alpha_difference(self):
        R = group_contrast(3, 2, 0, 1)
        np.testing.assert_array_equal(R, [1, 0, 0, -1, 0, 0])

    def test_factor_difference(self):
        R = group_contrast(3, 3, 2, 0, factor=1)
        expected = np.zeros(9)
        expected[2 * 3 + 1] = 1.0
        expected[0 * 3 + 1] = -1.0
        np.testing.assert_array_equal(R, expected)

    def test_invalid_indices(self):
        with pytest.raises(ValueError, match="group index"):
            group_contrast(2, 2, 0, 2)
        with pytest.raises(ValueError, match="factor"):
            group_contrast(2, 2, 0, 1, factor=2)
        with pytest.raises(ValueError, match="must differ"):
            group_contrast(2, 2, 1, 1)


class TestContrastSummary:
    """Tests for contrast_summary and PanelResult.contrast_tests."""

    def test_same_numerator_for_every_covariance(self, panel_data):
        d = panel_data
        result = fit_panel(d["Y"], d["X"], d["Z"])
        R = group_contrast(result.n_factors, result.n_groups, 0, 1)
        summary = contrast_summary(result.theta, result.covariances(), R, scale=252)
        assert set(summary) == {"LS", "DK"}
        assert summary["LS"].estimate == summary["DK"].estimate
        assert summary["LS"].estimate == pytest.approx(252 * float(R @ result.theta))

        direct = result.contrast_tests(R)
        for label in ("LS", "DK"):
            assert summary[label].t_stat == pytest.approx(direct[label][1])
            assert 0.0 <= summary[label].p_value <= 1.0

    def test_scale_leaves_t_unchanged(self, simple_estimates):
        theta, cov = simple_estimates
        R = np.array([0.0, 1.0, 0.0, -1.0])
        plain = contrast_summary(theta, {"A": cov}, R)["A"]
        scaled = contrast_summary(theta, {"A": cov}, R, scale=12.0)["A"]
        assert scaled.estimate == pytest.approx(12.0 * plain.estimate)
        assert scaled.std_error == pytest.approx(12.0 * plain.std_error)
        assert scaled.t_stat == pytest.approx(plain.t_stat)
        assert scaled.estimate / scaled.std_error == pytest.approx(plain.t_stat)
