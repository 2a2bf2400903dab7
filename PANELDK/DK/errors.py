"""Exceptions raised by the panel estimator."""

from __future__ import annotations

import numpy as np


class PanelDimensionError(ValueError):
    """Inputs ``Y``, ``X`` and ``Z`` do not describe a valid balanced panel."""


class SingularDesignError(np.linalg.LinAlgError):
    """The normal-equations matrix ``Sxx`` cannot be inverted reliably.

    Typical causes are an indicator group without members or perfectly
    collinear factor columns. The estimator never regularises ``Sxx``.
    """

    def __init__(self, message: str, cond: float | None = None, empty_columns=None) -> None:
        super().__init__(message)
        self.cond = cond
        self.empty_columns = [] if empty_columns is None else list(empty_columns)


class DegenerateContrastError(ValueError):
    """A linear contrast has zero (or negative) estimated variance."""
