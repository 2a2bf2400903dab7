"""OLS pass of the panel estimator.

The stacked regression of ``Y[t, i]`` on ``Z[i] ⊗ X[t]`` is solved from
the normal equations, which are accumulated one period at a time so that
the ``T * N x K`` design matrix is never formed.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import warnings

import numpy as np

from .config import PanelConfig
from .errors import SingularDesignError
from .utils import design_provider, fold_periods, period_partitions, validate_panel

logger = logging.getLogger(__name__)


@dataclass
class NormalEquations:
    """Scaled normal equations ``Sxx theta = Sxy`` of one panel.

    Attributes
    ----------
    Sxx : ndarray, shape (K, K)
        ``sum_t X_t' X_t / (T * N)``.
    Sxy : ndarray, shape (K,)
        ``sum_t X_t' y_t / (T * N)``.
    Sxx_inv : ndarray, shape (K, K)
        Inverse of ``Sxx``; the same matrix is used for ``theta`` and for
        both covariance estimates.
    n_periods, n_units : int
        ``T`` and ``N``.
    cond : float
        Condition number of ``Sxx``.
    """

    Sxx: np.ndarray
    Sxy: np.ndarray
    Sxx_inv: np.ndarray
    n_periods: int
    n_units: int
    cond: float


# ---------------------------------------------------------------------------
def invert_normal_matrix(
    Sxx: np.ndarray, n_factors: int, config: PanelConfig | None = None
) -> tuple[np.ndarray, float]:
    """Return ``(inv(Sxx), cond(Sxx))`` or raise :class:`SingularDesignError`.

    Parameters
    ----------
    Sxx : ndarray, shape (K, K)
        Scaled normal-equations matrix.
    n_factors : int
        ``Kx``; used to translate zero columns into group indices.
    config : PanelConfig, optional
        Supplies ``cond_threshold`` and ``cond_warn``.
    """

    cfg = config or PanelConfig()
    empty = np.flatnonzero(~np.any(Sxx != 0.0, axis=0))
    if empty.size:
        groups = sorted({int(c) // n_factors for c in empty})
        raise SingularDesignError(
            f"Sxx is singular: design columns {empty.tolist()} are identically zero "
            f"(groups {groups} have no members or a factor is zero throughout)",
            cond=np.inf,
            empty_columns=empty,
        )

    with np.errstate(divide="ignore", invalid="ignore"):
        cond = float(np.linalg.cond(Sxx))
    if not np.isfinite(cond) or cond > cfg.cond_threshold:
        raise SingularDesignError(
            f"Sxx is numerically singular (condition number {cond:.3e} exceeds "
            f"{cfg.cond_threshold:.1e}); check for collinear factors or groups",
            cond=cond,
        )
    if cond > cfg.cond_warn:
        warnings.warn(f"Sxx is ill-conditioned (condition number {cond:.3e})")

    try:
        Sxx_inv = np.linalg.inv(Sxx)
    except np.linalg.LinAlgError as exc:
        raise SingularDesignError(f"Sxx could not be inverted: {exc}", cond=cond) from exc
    return Sxx_inv, cond


# ---------------------------------------------------------------------------
def accumulate_normal_equations(
    Y: np.ndarray,
    X: np.ndarray,
    Z: np.ndarray,
    config: PanelConfig | None = None,
) -> NormalEquations:
    """Accumulate ``Sxx`` and ``Sxy`` over all periods and invert ``Sxx``.

    Each period contributes ``X_t' X_t / (T * N)`` and ``X_t' y_t / (T * N)``;
    the scaling is applied to every term before it is added.
    """

    cfg = config or PanelConfig()
    Y, X, Z = validate_panel(Y, X, Z)
    T, N = Y.shape
    Kx = X.shape[1]
    K = Kx * Z.shape[1]
    scale = float(T * N)
    design = design_provider(Z, X, cfg.strategy)

    def init():
        return np.zeros((K, K)), np.zeros(K)

    def update(acc, t):
        Sxx, Sxy = acc
        X_t = design(t)
        Sxx += X_t.T @ X_t / scale
        Sxy += X_t.T @ Y[t] / scale
        return Sxx, Sxy

    blocks = period_partitions(T, cfg.n_partitions)
    Sxx, Sxy = fold_periods(update, init, blocks, n_jobs=cfg.n_jobs)
    logger.debug(
        "Accumulated normal equations: T=%d, N=%d, K=%d, %d block(s)",
        T, N, K, len(blocks),
    )

    Sxx_inv, cond = invert_normal_matrix(Sxx, Kx, cfg)
    return NormalEquations(
        Sxx=Sxx, Sxy=Sxy, Sxx_inv=Sxx_inv, n_periods=T, n_units=N, cond=cond
    )


# ---------------------------------------------------------------------------
def solve_theta(normal_equations: NormalEquations) -> np.ndarray:
    """Solve ``Sxx theta = Sxy``."""
    ne = normal_equations
    try:
        return np.linalg.solve(ne.Sxx, ne.Sxy)
    except np.linalg.LinAlgError as exc:
        raise SingularDesignError(f"Sxx could not be solved: {exc}", cond=ne.cond) from exc


def estimate_theta(
    Y: np.ndarray,
    X: np.ndarray,
    Z: np.ndarray,
    config: PanelConfig | None = None,
) -> np.ndarray:
    """Return the pooled coefficients ``theta`` of length ``Kx * Kz``.

    Entry ``j * Kx + k`` is the loading on factor ``k`` for group ``j``.

    Raises
    ------
    PanelDimensionError
        If the shapes of ``Y``, ``X`` and ``Z`` disagree.
    SingularDesignError
        If ``Sxx`` is singular or ill-conditioned.
    """

    return solve_theta(accumulate_normal_equations(Y, X, Z, config))
