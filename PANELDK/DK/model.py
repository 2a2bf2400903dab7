"""Result container and driver for the panel estimator."""

from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np

from .config import PanelConfig
from .covariance import estimate_covariance
from .estimator import NormalEquations, accumulate_normal_equations, solve_theta
from .inference import linear_contrast_test, standard_errors

logger = logging.getLogger(__name__)


@dataclass
class PanelResult:
    """Estimates of a panel regression with interacted regressors.

    Attributes
    ----------
    theta : ndarray, shape (K,)
        Coefficients; entry ``j * Kx + k`` belongs to group ``j`` and
        factor ``k``.
    cov_dk : ndarray, shape (K, K)
        Driscoll-Kraay covariance (contemporaneous cross-correlation only).
    cov_ls : ndarray, shape (K, K)
        Naive i.i.d. covariance.
    normal_equations : NormalEquations
        Shared ``Sxx``/``inv(Sxx)`` of both passes.
    n_factors, n_groups : int
        ``Kx`` and ``Kz``.
    n_excluded : int
        Units with an all-zero design row.
    """

    theta: np.ndarray
    cov_dk: np.ndarray
    cov_ls: np.ndarray
    normal_equations: NormalEquations
    n_factors: int
    n_groups: int
    n_excluded: int = 0

    @property
    def se_dk(self) -> np.ndarray:
        return standard_errors(self.cov_dk)

    @property
    def se_ls(self) -> np.ndarray:
        return standard_errors(self.cov_ls)

    def coef_matrix(self) -> np.ndarray:
        """Return ``theta`` as a ``(Kz, Kx)`` array, one row per group."""
        return self.theta.reshape(self.n_groups, self.n_factors)

    def covariances(self) -> dict[str, np.ndarray]:
        return {"LS": self.cov_ls, "DK": self.cov_dk}

    def contrast_tests(self, R: np.ndarray) -> dict[str, tuple[float, float]]:
        """Return ``{"LS": (estimate, t), "DK": (estimate, t)}`` for ``R``."""
        return {
            label: linear_contrast_test(self.theta, cov, R)
            for label, cov in self.covariances().items()
        }


# ---------------------------------------------------------------------------
def fit_panel(
    Y: np.ndarray,
    X: np.ndarray,
    Z: np.ndarray,
    config: PanelConfig | None = None,
) -> PanelResult:
    """Estimate ``theta`` and its LS and DK covariance in two passes over time.

    Parameters
    ----------
    Y : ndarray, shape (T, N)
        Excess returns, fully observed.
    X : ndarray, shape (T, Kx)
        Common factors, usually a constant followed by risk factors.
    Z : ndarray, shape (N, Kz)
        Cross-sectional design, e.g. 0/1 group indicators.
    config : PanelConfig, optional
        Strategy, partitioning and conditioning thresholds.

    Returns
    -------
    PanelResult

    Raises
    ------
    PanelDimensionError
        On inconsistent shapes or missing values.
    SingularDesignError
        If ``Sxx`` is singular; the covariance pass is not attempted.
    """

    cfg = config or PanelConfig()
    normal_equations = accumulate_normal_equations(Y, X, Z, cfg)
    theta = solve_theta(normal_equations)
    cov_dk, cov_ls = estimate_covariance(
        Y, X, Z, theta, normal_equations=normal_equations, config=cfg
    )

    Z = np.asarray(Z, dtype=float)
    n_excluded = int(np.sum(~np.any(Z != 0.0, axis=1)))
    if n_excluded:
        logger.info("%d of %d units have an all-zero design row and were excluded", n_excluded, Z.shape[0])

    return PanelResult(
        theta=theta,
        cov_dk=cov_dk,
        cov_ls=cov_ls,
        normal_equations=normal_equations,
        n_factors=np.asarray(X).shape[1],
        n_groups=Z.shape[1],
        n_excluded=n_excluded,
    )
