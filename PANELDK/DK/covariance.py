"""Covariance pass: Driscoll-Kraay and naive OLS covariance of ``theta``."""

from __future__ import annotations

import logging

import numpy as np

from .config import PanelConfig
from .errors import PanelDimensionError
from .estimator import NormalEquations, accumulate_normal_equations
from .utils import design_provider, fold_periods, period_partitions, validate_panel

logger = logging.getLogger(__name__)


def estimate_covariance(
    Y: np.ndarray,
    X: np.ndarray,
    Z: np.ndarray,
    theta: np.ndarray,
    normal_equations: NormalEquations | None = None,
    config: PanelConfig | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(CovDK, CovLS)`` for the panel coefficients ``theta``.

    For every period the regressors ``X_t`` are rebuilt, the residuals
    ``e_t = y_t - X_t theta`` formed and the moment condition
    ``h_t = X_t' e_t / N`` accumulated as ``omega += h_t h_t'``; the squared
    residuals are accumulated as ``s2 += sum(e_t**2) / N**2``. With
    ``Shat = omega / T**2``, ``s2 = s2 / T**2`` and ``zx_1 = inv(Sxx)``::

        CovDK = zx_1 @ Shat @ zx_1.T
        CovLS = zx_1 * s2

    Only the contemporaneous (lag 0) term enters ``Shat``: the estimator is
    robust to cross-sectional correlation of the residuals but not to serial
    correlation.

    Parameters
    ----------
    Y, X, Z : ndarray
        Panel ``(T, N)``, factors ``(T, Kx)`` and design ``(N, Kz)``.
    theta : ndarray, shape (K,)
        Coefficients from :func:`estimate_theta`.
    normal_equations : NormalEquations, optional
        Output of the OLS pass. When omitted the normal equations are
        accumulated again, which reproduces the same ``inv(Sxx)``.
    config : PanelConfig, optional
        Strategy and partitioning of the time loop.

    Notes
    -----
    Residuals of units whose ``Z`` row is all zero are set to zero: those
    units are outside the model and do not enter ``s2``.
    """

    cfg = config or PanelConfig()
    Y, X, Z = validate_panel(Y, X, Z)
    T, N = Y.shape
    K = X.shape[1] * Z.shape[1]
    theta = np.asarray(theta, dtype=float).reshape(-1)
    if theta.size != K:
        raise PanelDimensionError(f"theta has {theta.size} entries, expected {K}")

    if normal_equations is None:
        normal_equations = accumulate_normal_equations(Y, X, Z, cfg)
    if normal_equations.Sxx_inv.shape != (K, K):
        raise PanelDimensionError(
            f"normal equations have shape {normal_equations.Sxx_inv.shape}, expected {(K, K)}"
        )
    zx_1 = normal_equations.Sxx_inv

    included = np.any(Z != 0.0, axis=1)
    design = design_provider(Z, X, cfg.strategy)
    n_sq = float(N) ** 2

    def init():
        return np.zeros((K, K)), 0.0

    def update(acc, t):
        omega, s2 = acc
        X_t = design(t)
        e_t = np.where(included, Y[t] - X_t @ theta, 0.0)
        h_t = X_t.T @ e_t / N
        omega += np.outer(h_t, h_t)
        return omega, s2 + float(np.sum(e_t**2)) / n_sq

    blocks = period_partitions(T, cfg.n_partitions)
    omega, s2 = fold_periods(update, init, blocks, n_jobs=cfg.n_jobs)
    logger.debug("Accumulated %d moment conditions over %d block(s)", T, len(blocks))

    Shat = omega / T**2
    s2 = s2 / T**2

    cov_dk = zx_1 @ Shat @ zx_1.T
    cov_ls = zx_1 * s2
    cov_dk = 0.5 * (cov_dk + cov_dk.T)
    cov_ls = 0.5 * (cov_ls + cov_ls.T)
    return cov_dk, cov_ls
