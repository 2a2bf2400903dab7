"""Linear contrast tests on estimated coefficients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import numpy as np
from scipy.stats import norm

from .errors import DegenerateContrastError


@dataclass
class ContrastResult:
    """Outcome of one contrast test.

    Attributes
    ----------
    label : str
        Name of the covariance estimate used (e.g. ``"DK"``).
    estimate : float
        ``scale * R theta``.
    std_error : float
        ``scale * sqrt(R Cov R')``.
    t_stat : float
        ``R theta / sqrt(R Cov R')``; unaffected by ``scale``.
    p_value : float
        Two-sided p-value under the normal approximation.
    """

    label: str
    estimate: float
    std_error: float
    t_stat: float
    p_value: float


# ---------------------------------------------------------------------------
def standard_errors(cov: np.ndarray) -> np.ndarray:
    """Return ``sqrt(diag(cov))``."""
    return np.sqrt(np.diag(np.asarray(cov, dtype=float)))


def linear_contrast_test(
    theta: np.ndarray, cov: np.ndarray, R: np.ndarray
) -> tuple[float, float]:
    """Return ``(R theta, R theta / sqrt(R cov R'))``.

    Parameters
    ----------
    theta : ndarray, shape (K,)
        Coefficient estimates.
    cov : ndarray, shape (K, K)
        Covariance of ``theta``.
    R : ndarray, shape (K,) or (1, K)
        Contrast row vector.

    Raises
    ------
    DegenerateContrastError
        If ``R cov R'`` is not strictly positive.
    """

    theta = np.asarray(theta, dtype=float).reshape(-1)
    cov = np.asarray(cov, dtype=float)
    R = np.asarray(R, dtype=float).reshape(-1)
    K = theta.size
    if R.size != K or cov.shape != (K, K):
        raise ValueError(
            f"R ({R.size}) and cov {cov.shape} must match theta ({K})"
        )
    estimate = float(R @ theta)
    variance = float(R @ cov @ R)
    if not np.isfinite(variance) or variance <= 0.0:
        raise DegenerateContrastError(
            f"contrast variance R Cov R' = {variance!r} is not positive"
        )
    return estimate, estimate / np.sqrt(variance)


def group_contrast(
    n_factors: int, n_groups: int, group_a: int, group_b: int, factor: int = 0
) -> np.ndarray:
    """Return ``R`` selecting ``factor`` of ``group_a`` minus that of ``group_b``.

    With a constant in the first column of ``X``, ``factor=0`` compares the
    two groups' alphas.
    """

    if not 0 <= factor < n_factors:
        raise ValueError(f"factor must be in [0, {n_factors}), got {factor}")
    for g in (group_a, group_b):
        if not 0 <= g < n_groups:
            raise ValueError(f"group index must be in [0, {n_groups}), got {g}")
    if group_a == group_b:
        raise ValueError("group_a and group_b must differ")
    R = np.zeros(n_factors * n_groups)
    R[group_a * n_factors + factor] = 1.0
    R[group_b * n_factors + factor] = -1.0
    return R


def contrast_summary(
    theta: np.ndarray,
    covariances: Mapping[str, np.ndarray],
    R: np.ndarray,
    scale: float = 1.0,
) -> dict[str, ContrastResult]:
    """Test one contrast against several covariance estimates.

    The numerator ``R theta`` is the same for every entry; only the
    covariance matrix changes. ``scale`` (e.g. ``252`` for daily returns)
    rescales the reported estimate and standard error.
    """

    R = np.asarray(R, dtype=float).reshape(-1)
    results = {}
    for label, cov in covariances.items():
        estimate, t_stat = linear_contrast_test(theta, cov, R)
        std_error = float(np.sqrt(R @ np.asarray(cov, dtype=float) @ R))
        results[label] = ContrastResult(
            label=label,
            estimate=scale * estimate,
            std_error=abs(scale) * std_error,
            t_stat=float(t_stat),
            p_value=float(2.0 * norm.sf(abs(t_stat))),
        )
    return results
