"""Shared helpers for the two passes of the panel estimator."""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np
from joblib import Parallel, delayed

from .errors import PanelDimensionError
from .interaction import build_interaction, materialize_design


def validate_panel(
    Y: np.ndarray, X: np.ndarray, Z: np.ndarray
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return ``Y``, ``X``, ``Z`` as float arrays after checking their shapes.

    Raises
    ------
    PanelDimensionError
        If an input is not 2D, has no columns, contains non-finite values or
        if the time (``Y`` vs ``X``) or unit (``Y`` vs ``Z``) dimensions
        disagree.
    """

    Y = np.asarray(Y, dtype=float)
    X = np.asarray(X, dtype=float)
    Z = np.asarray(Z, dtype=float)
    for name, arr in (("Y", Y), ("X", X), ("Z", Z)):
        if arr.ndim != 2:
            raise PanelDimensionError(f"{name} must be a 2D array, got ndim={arr.ndim}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise PanelDimensionError(f"{name} must be non-empty, got shape {arr.shape}")
        if not np.all(np.isfinite(arr)):
            raise PanelDimensionError(f"{name} contains missing or non-finite values")
    T, N = Y.shape
    if X.shape[0] != T:
        raise PanelDimensionError(
            f"X has {X.shape[0]} periods but Y has {T}"
        )
    if Z.shape[0] != N:
        raise PanelDimensionError(
            f"Z has {Z.shape[0]} units but Y has {N}"
        )
    return Y, X, Z


def period_partitions(T: int, n_partitions: int) -> list[np.ndarray]:
    """Split ``range(T)`` into at most ``n_partitions`` contiguous blocks."""
    n_blocks = max(1, min(int(n_partitions), T))
    return [block for block in np.array_split(np.arange(T), n_blocks) if block.size]


def design_provider(
    Z: np.ndarray, X: np.ndarray, strategy: str = "stream"
) -> Callable[[int], np.ndarray]:
    """Return ``t -> X_t`` for the requested strategy."""
    if strategy == "stream":
        return lambda t: build_interaction(Z, X[t])
    if strategy == "materialize":
        design = materialize_design(Z, X)
        return lambda t: design[t]
    raise ValueError(f"Unknown strategy: {strategy}")


def fold_periods(
    update: Callable[[tuple, int], tuple],
    init: Callable[[], tuple],
    blocks: Sequence[np.ndarray],
    n_jobs: int | None = None,
) -> tuple:
    """Fold ``update`` over each block of periods and add up the partials.

    Every block starts from ``init()`` and visits its periods in order. The
    partial accumulators are then summed element-wise in block order.
    """

    def _fold_block(block):
        acc = init()
        for t in block:
            acc = update(acc, int(t))
        return acc

    if n_jobs is not None and n_jobs != 1 and len(blocks) > 1:
        partials = Parallel(n_jobs=n_jobs)(delayed(_fold_block)(b) for b in blocks)
    else:
        partials = [_fold_block(b) for b in blocks]

    total = partials[0]
    for part in partials[1:]:
        total = tuple(a + b for a, b in zip(total, part))
    return total
