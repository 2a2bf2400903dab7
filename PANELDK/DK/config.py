"""Configuration for the panel estimator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PanelConfig:
    """Numerical and execution settings for :func:`fit_panel`.

    Parameters
    ----------
    strategy : {"stream", "materialize"}, default "stream"
        ``"stream"`` rebuilds the per-period regressors ``X_t`` every time
        they are needed and never holds more than one ``N x K`` block.
        ``"materialize"`` builds the full ``(T, N, K)`` design once; only
        worth it when ``T * N * K`` fits comfortably in memory.
    n_partitions : int, default 1
        Number of contiguous blocks of periods folded separately and then
        summed. Results depend on this value (through rounding) but not on
        ``n_jobs``.
    n_jobs : int or None, default None
        Workers used by :class:`joblib.Parallel` for the partitions. ``None``
        or ``1`` folds the partitions sequentially.
    cond_threshold : float, default 1e12
        Condition number of ``Sxx`` above which the design is treated as
        singular.
    cond_warn : float, default 1e8
        Condition number above which a warning is emitted.
    """

    strategy: str = "stream"
    n_partitions: int = 1
    n_jobs: int | None = None
    cond_threshold: float = 1e12
    cond_warn: float = 1e8

    def __post_init__(self) -> None:
        if self.strategy not in ("stream", "materialize"):
            raise ValueError(
                f"strategy must be 'stream' or 'materialize', got {self.strategy!r}"
            )
        if self.n_partitions < 1:
            raise ValueError(f"n_partitions must be positive, got {self.n_partitions}")
        if self.n_jobs is not None and self.n_jobs == 0:
            raise ValueError("n_jobs must be None or a non-zero integer")
        if self.cond_threshold <= 1:
            raise ValueError("cond_threshold must be greater than 1")
        if not 1 <= self.cond_warn <= self.cond_threshold:
            raise ValueError("cond_warn must lie in [1, cond_threshold]")
