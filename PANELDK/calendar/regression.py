"""Time-series regressions for calendar-time portfolios: OLS, SURE and Newey-West."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..DK.errors import PanelDimensionError, SingularDesignError
from ..DK.inference import standard_errors


@dataclass
class OLSResult:
    """Single-equation OLS fit.

    Attributes
    ----------
    coef : ndarray, shape (K,)
    resid : ndarray, shape (T,)
    cov : ndarray, shape (K, K)
        ``sigma2 * inv(X'X)`` with ``sigma2 = e'e / (T - K)``.
    r_squared : float
    """

    coef: np.ndarray
    resid: np.ndarray
    cov: np.ndarray
    r_squared: float

    @property
    def se(self) -> np.ndarray:
        return standard_errors(self.cov)


@dataclass
class SUREResult:
    """Seemingly-unrelated regressions with common regressors.

    Attributes
    ----------
    coef : ndarray, shape (M, K)
        One row of coefficients per equation.
    resid : ndarray, shape (T, M)
    sigma : ndarray, shape (M, M)
        Residual covariance across equations.
    cov : ndarray, shape (M * K, M * K)
        Joint covariance of ``coef.reshape(-1)``, i.e. ``kron(sigma, inv(X'X))``.
    """

    coef: np.ndarray
    resid: np.ndarray
    sigma: np.ndarray
    cov: np.ndarray

    @property
    def theta(self) -> np.ndarray:
        """Coefficients stacked equation by equation."""
        return self.coef.reshape(-1)

    @property
    def se(self) -> np.ndarray:
        return standard_errors(self.cov).reshape(self.coef.shape)


# ---------------------------------------------------------------------------
def _gram_inverse(X: np.ndarray, cond_threshold: float = 1e12) -> np.ndarray:
    XtX = X.T @ X
    with np.errstate(divide="ignore", invalid="ignore"):
        cond = float(np.linalg.cond(XtX))
    if not np.isfinite(cond) or cond > cond_threshold:
        raise SingularDesignError(
            f"X'X is singular (condition number {cond:.3e}); check for collinear regressors",
            cond=cond,
        )
    try:
        return np.linalg.inv(XtX)
    except np.linalg.LinAlgError as exc:
        raise SingularDesignError(
            "X'X is singular; check for collinear regressors"
        ) from exc


def _check_regressors(y: np.ndarray, X: np.ndarray) -> None:
    if X.ndim != 2:
        raise PanelDimensionError("X must be a 2D array")
    if y.shape[0] != X.shape[0]:
        raise PanelDimensionError(
            f"y has {y.shape[0]} observations but X has {X.shape[0]}"
        )
    if X.shape[0] <= X.shape[1]:
        raise PanelDimensionError("need more observations than regressors")


def ols(y: np.ndarray, X: np.ndarray) -> OLSResult:
    """Regress ``y`` on ``X`` (no constant is added)."""
    y = np.asarray(y, dtype=float).reshape(-1)
    X = np.asarray(X, dtype=float)
    _check_regressors(y, X)
    T, K = X.shape
    XtX_inv = _gram_inverse(X)
    coef = XtX_inv @ (X.T @ y)
    resid = y - X @ coef
    rss = float(resid @ resid)
    tss = float(np.sum((y - y.mean()) ** 2))
    cov = rss / (T - K) * XtX_inv
    return OLSResult(
        coef=coef,
        resid=resid,
        cov=0.5 * (cov + cov.T),
        r_squared=1.0 - rss / tss if tss > 0 else 0.0,
    )


def sure(P: np.ndarray, X: np.ndarray, ddof: int = 0) -> SUREResult:
    """Estimate ``P[:, m] = X b_m + u_m`` jointly for all equations ``m``.

    With identical regressors in every equation the SURE point estimates
    coincide with equation-by-equation OLS; the joint covariance
    ``kron(sigma, inv(X'X))`` carries the cross-equation residual
    correlation, with ``sigma = U'U / (T - ddof)``.
    """

    P = np.asarray(P, dtype=float)
    X = np.asarray(X, dtype=float)
    if P.ndim == 1:
        P = P[:, None]
    _check_regressors(P, X)
    T = X.shape[0]
    XtX_inv = _gram_inverse(X)
    B = XtX_inv @ (X.T @ P)
    U = P - X @ B
    sigma = U.T @ U / (T - ddof)
    cov = np.kron(sigma, XtX_inv)
    return SUREResult(coef=B.T, resid=U, sigma=sigma, cov=0.5 * (cov + cov.T))


# ---------------------------------------------------------------------------
def default_lags(T: int) -> int:
    """Rule-of-thumb lag length ``floor(4 (T / 100) ** (2 / 9))``."""
    return int(np.floor(4 * (T / 100.0) ** (2.0 / 9.0)))


def newey_west_cov(X: np.ndarray, e: np.ndarray, lags: int | None = None) -> np.ndarray:
    """HAC covariance ``inv(X'X) S inv(X'X)`` with Bartlett weights.

    ``S = sum_t u_t u_t' + sum_j w_j (G_j + G_j')`` where ``u_t = x_t e_t``,
    ``G_j = sum_t u_t u_{t-j}'`` and ``w_j = 1 - j / (lags + 1)``.
    """

    X = np.asarray(X, dtype=float)
    e = np.asarray(e, dtype=float).reshape(-1)
    _check_regressors(e, X)
    T = X.shape[0]
    if lags is None:
        lags = default_lags(T)
    if lags < 0:
        raise ValueError("lags must be non-negative")
    U = X * e[:, None]
    S = U.T @ U
    for j in range(1, min(lags, T - 1) + 1):
        w = 1.0 - j / (lags + 1.0)
        G = U[j:].T @ U[:-j]
        S += w * (G + G.T)
    XtX_inv = _gram_inverse(X)
    cov = XtX_inv @ S @ XtX_inv
    return 0.5 * (cov + cov.T)


def newey_west_se(series: np.ndarray, lags: int | None = None) -> float:
    """Newey-West standard error of the sample mean of ``series``.

    Uses the long-run variance ``gamma_0 + 2 sum_k (1 - k / (L + 1)) gamma_k``
    of the demeaned series divided by ``T``.
    """

    x = np.asarray(series, dtype=float).reshape(-1)
    n = x.size
    if n < 2:
        raise ValueError("series needs at least two observations")
    if lags is None:
        lags = default_lags(n)
    if lags < 0:
        raise ValueError("lags must be non-negative")
    d = x - x.mean()
    lr_var = float(d @ d) / n
    for k in range(1, min(lags, n - 1) + 1):
        gamma = float(d[k:] @ d[:-k]) / n
        lr_var += 2.0 * (1.0 - k / (lags + 1.0)) * gamma
    return float(np.sqrt(max(lr_var, 0.0) / n))
