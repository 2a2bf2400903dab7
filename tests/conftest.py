"""Shared pytest fixtures for PANELDK tests.

This module provides seeded random generators and small synthetic panels
used across the test modules.
"""

import numpy as np
import pytest

from PANELDK.simulate import simulate_group_panel

# ---------------------------------------------------------------------------
# Data generation fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def rng():
    """Provide a seeded random number generator for reproducibility."""
    return np.random.default_rng(42)


@pytest.fixture
def small_dims():
    """Small dimensions for fast tests."""
    return {"T": 60, "group_sizes": (5, 7), "Kf": 2}


def generate_panel(
    T: int,
    group_sizes,
    rng: np.random.Generator,
    Kf: int = 2,
    rho: float = 0.0,
    n_unassigned: int = 0,
) -> dict:
    """Generate a two-factor panel with random alphas and betas.

    Parameters
    ----------
    T : int
        Number of periods.
    group_sizes : sequence of int
        Members per group.
    rng : np.random.Generator
        Random number generator.
    Kf : int, default 2
        Number of non-constant factors.
    rho : float, default 0.0
        Within-group residual correlation.
    n_unassigned : int, default 0
        Units outside every group.

    Returns
    -------
    dict
        Output of :func:`simulate_group_panel`.
    """
    Kz = len(group_sizes)
    return simulate_group_panel(
        T,
        group_sizes,
        alphas=rng.normal(scale=0.1, size=Kz),
        betas=rng.uniform(0.5, 1.5, size=(Kz, Kf)),
        factor_mean=0.05,
        resid_vol=0.5,
        rho=rho,
        n_unassigned=n_unassigned,
        rng=rng,
    )


def brute_force_panel(Y, X, Z):
    """Reference estimates computed on the stacked ``T * N x K`` design."""
    T, N = Y.shape
    K = X.shape[1] * Z.shape[1]
    D = np.stack([np.kron(Z[i], X[t]) for t in range(T) for i in range(N)])
    y = Y.reshape(-1)
    DtD_inv = np.linalg.inv(D.T @ D)
    theta = DtD_inv @ D.T @ y
    e = (y - D @ theta).reshape(T, N)
    e[:, ~np.any(Z != 0, axis=1)] = 0.0
    meat = np.zeros((K, K))
    for t in range(T):
        D_t = D[t * N : (t + 1) * N]
        u = D_t.T @ e[t]
        meat += np.outer(u, u)
    cov_dk = DtD_inv @ meat @ DtD_inv
    cov_ls = float(np.sum(e**2)) / (T * N) * DtD_inv
    return theta, cov_dk, cov_ls


@pytest.fixture
def panel_data(rng, small_dims):
    """Small two-group panel with independent residuals."""
    return generate_panel(
        small_dims["T"], small_dims["group_sizes"], rng, Kf=small_dims["Kf"]
    )


@pytest.fixture
def correlated_panel(rng):
    """Two-group panel with strongly correlated residuals within groups."""
    return generate_panel(400, (20, 20), rng, Kf=1, rho=0.8)
