"""Synthetic factor panels with group-level cross-sectional correlation."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def simulate_group_panel(
    T: int,
    group_sizes: Sequence[int],
    alphas: Sequence[float],
    betas: np.ndarray | None = None,
    *,
    factor_mean: float | Sequence[float] = 0.0,
    factor_vol: float = 1.0,
    resid_vol: float = 1.0,
    rho: float = 0.0,
    n_unassigned: int = 0,
    rng: np.random.Generator | None = None,
) -> dict:
    """Generate returns ``y[t, i] = alpha_g + f_t' beta_g + u[t, i]``.

    Parameters
    ----------
    T : int
        Number of periods.
    group_sizes : sequence of int
        Members per group; units are ordered group by group.
    alphas : sequence of float
        Intercept of each group.
    betas : ndarray, shape (Kz, Kf), optional
        Factor loadings per group. Defaults to one factor with unit loading.
    factor_mean, factor_vol : float
        Mean and volatility of the i.i.d. normal factors.
    resid_vol : float
        Volatility of ``u[t, i]``.
    rho : float, default 0.0
        Correlation of residuals of two members of the same group, produced
        by a group-level common shock. ``0`` gives independent residuals.
    n_unassigned : int, default 0
        Extra units appended with an all-zero design row and pure noise
        returns.
    rng : np.random.Generator, optional
        Random number generator.

    Returns
    -------
    dict
        Keys ``Y`` (T, N), ``X`` (T, 1 + Kf) with a leading constant,
        ``Z`` (N, Kz), ``theta`` (true coefficients in estimator order) and
        ``groups`` (group index per unit, ``-1`` when unassigned).
    """

    rng = np.random.default_rng() if rng is None else rng
    group_sizes = [int(n) for n in group_sizes]
    Kz = len(group_sizes)
    if len(alphas) != Kz:
        raise ValueError("alphas must have one entry per group")
    if not 0.0 <= rho < 1.0:
        raise ValueError(f"rho must be in [0, 1), got {rho}")
    betas = np.ones((Kz, 1)) if betas is None else np.atleast_2d(np.asarray(betas, dtype=float))
    if betas.shape[0] != Kz:
        raise ValueError("betas must have one row per group")
    Kf = betas.shape[1]

    F = np.asarray(factor_mean, dtype=float) + factor_vol * rng.normal(size=(T, Kf))
    X = np.column_stack([np.ones(T), F])

    membership = np.concatenate(
        [np.full(n, g) for g, n in enumerate(group_sizes)]
        + [np.full(n_unassigned, -1)]
    ).astype(int)
    N = membership.size
    Z = np.zeros((N, Kz))
    assigned = membership >= 0
    Z[np.flatnonzero(assigned), membership[assigned]] = 1.0

    coef = np.column_stack([np.asarray(alphas, dtype=float), betas])
    shocks = rng.normal(size=(T, Kz))
    noise = rng.normal(size=(T, N))
    Y = np.sqrt(1.0 - rho) * resid_vol * noise
    for g in range(Kz):
        members = membership == g
        Y[:, members] += (X @ coef[g])[:, None] + np.sqrt(rho) * resid_vol * shocks[:, [g]]

    return {
        "Y": Y,
        "X": X,
        "Z": Z,
        "theta": coef.reshape(-1),
        "groups": membership,
    }
