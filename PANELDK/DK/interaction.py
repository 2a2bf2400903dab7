"""Interacted regressors for the factor-structured panel ``x(t,i) = x(t) ⊗ z(i)``."""

from __future__ import annotations

import numpy as np


def build_interaction(Z: np.ndarray, x_row: np.ndarray) -> np.ndarray:
    """Return the effective regressors of one period.

    Parameters
    ----------
    Z : ndarray, shape (N, Kz)
        Cross-sectional design, one row per unit.
    x_row : ndarray, shape (Kx,) or (1, Kx)
        Common factors of the period, broadcast to every unit.

    Returns
    -------
    ndarray, shape (N, Kx * Kz)
        Row ``i`` is ``np.kron(Z[i], x_row)``: the entries of ``Z[i]`` vary
        slowest, so column ``j * Kx + k`` holds ``Z[i, j] * x_row[k]``.

    Notes
    -----
    A unit whose ``Z`` row is all zero gets an all-zero regressor row and
    therefore drops out of every sum built from it.
    """

    Z = np.asarray(Z, dtype=float)
    x_row = np.asarray(x_row, dtype=float).reshape(-1)
    if Z.ndim != 2:
        raise ValueError("Z must be a 2D array")
    if Z.shape[1] < 1 or x_row.size < 1:
        raise ValueError("Z and x_row need at least one column")
    N, Kz = Z.shape
    return (Z[:, :, None] * x_row[None, None, :]).reshape(N, Kz * x_row.size)


def materialize_design(Z: np.ndarray, X: np.ndarray) -> np.ndarray:
    """Return the full design as an array of shape ``(T, N, Kx * Kz)``.

    ``materialize_design(Z, X)[t]`` equals ``build_interaction(Z, X[t])``.
    Memory grows with ``T * N * K``.
    """

    Z = np.asarray(Z, dtype=float)
    X = np.asarray(X, dtype=float)
    if Z.ndim != 2 or X.ndim != 2:
        raise ValueError("Z and X must be 2D arrays")
    T, Kx = X.shape
    N, Kz = Z.shape
    return np.einsum("ij,tk->tijk", Z, X).reshape(T, N, Kz * Kx)
