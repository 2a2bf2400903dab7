"""Calendar-time group portfolios and their alpha comparison."""

from __future__ import annotations

import logging

import numpy as np

from ..DK.errors import PanelDimensionError
from ..DK.inference import ContrastResult, contrast_summary, group_contrast
from ..DK.utils import validate_panel
from .regression import default_lags, newey_west_cov, ols, sure

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
def group_portfolios(Y: np.ndarray, Z: np.ndarray) -> np.ndarray:
    """Return the ``(T, Kz)`` portfolio returns ``Y @ Z / Z.sum(axis=0)``.

    For 0/1 indicators this is the equal-weighted average return of each
    group's members in every period.
    """

    Y = np.asarray(Y, dtype=float)
    Z = np.asarray(Z, dtype=float)
    if Y.ndim != 2 or Z.ndim != 2:
        raise PanelDimensionError("Y and Z must be 2D arrays")
    if Y.shape[1] != Z.shape[0]:
        raise PanelDimensionError(f"Z has {Z.shape[0]} units but Y has {Y.shape[1]}")
    weights = Z.sum(axis=0)
    empty = np.flatnonzero(weights == 0)
    if empty.size:
        raise ValueError(f"groups {empty.tolist()} have no members")
    return Y @ Z / weights


def calendar_time_alphas(
    Y: np.ndarray,
    X: np.ndarray,
    Z: np.ndarray,
    group_a: int = 0,
    group_b: int = 1,
    *,
    factor: int = 0,
    nw_lags: int | None = None,
    scale: float = 1.0,
) -> dict[str, ContrastResult]:
    """Compare two groups with calendar-time portfolio regressions.

    Each group's portfolio is regressed on ``X``. The difference of
    coefficient ``factor`` (the alpha when ``X[:, 0]`` is a constant) is
    tested with the joint SURE covariance (``"SURE"``) and with a Newey-West
    regression of the long-short portfolio ``P_a - P_b`` (``"NW"``).
    """

    Y, X, Z = validate_panel(Y, X, Z)
    Kx, Kz = X.shape[1], Z.shape[1]
    P = group_portfolios(Y, Z)

    fit = sure(P, X)
    R = group_contrast(Kx, Kz, group_a, group_b, factor=factor)
    results = contrast_summary(fit.theta, {"SURE": fit.cov}, R, scale=scale)

    lags = default_lags(X.shape[0]) if nw_lags is None else nw_lags
    spread = ols(P[:, group_a] - P[:, group_b], X)
    R_spread = np.zeros(Kx)
    R_spread[factor] = 1.0
    nw_cov = newey_west_cov(X, spread.resid, lags)
    results.update(contrast_summary(spread.coef, {"NW": nw_cov}, R_spread, scale=scale))
    logger.debug("Calendar-time comparison with %d Newey-West lag(s)", lags)
    return results
