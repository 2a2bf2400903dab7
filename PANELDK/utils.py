"""Loading of return panels, factors and group assignments."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import numpy as np
import pandas as pd
from scipy.io import loadmat

from .DK.errors import PanelDimensionError


@dataclass
class PanelData:
    """Aligned inputs of the panel estimator.

    Attributes
    ----------
    Y : ndarray, shape (T, N)
        Excess returns.
    X : ndarray, shape (T, Kx)
        Factors (with a leading constant when ``add_constant`` was used).
    Z : ndarray, shape (N, Kz)
        Group indicators.
    dates, units, factors, groups : list[str]
        Labels of the rows of ``Y``/``X``, the columns of ``Y``, the columns
        of ``X`` and the columns of ``Z``.
    """

    Y: np.ndarray
    X: np.ndarray
    Z: np.ndarray
    dates: List[str] = field(default_factory=list)
    units: List[str] = field(default_factory=list)
    factors: List[str] = field(default_factory=list)
    groups: List[str] = field(default_factory=list)

    @property
    def shape(self) -> tuple[int, int, int, int]:
        """``(T, N, Kx, Kz)``."""
        return self.Y.shape + (self.X.shape[1], self.Z.shape[1])


def _with_constant(X: np.ndarray, factors: List[str]) -> tuple[np.ndarray, List[str]]:
    return np.column_stack([np.ones(X.shape[0]), X]), ["const"] + list(factors)


def _lookup(container: dict, key: str) -> np.ndarray:
    for name, value in container.items():
        if name.lower() == key.lower():
            return np.atleast_2d(np.asarray(value, dtype=float))
    raise KeyError(f"container has no array named '{key}'")


# ---------------------------------------------------------------------------
def load_panel(path: str | Path, add_constant: bool = False) -> PanelData:
    """Load ``Y``, ``X`` and ``Z`` from a ``.npz`` or MATLAB ``.mat`` file.

    Array names are matched case-insensitively. Label arrays are not
    expected; generic labels are generated.

    Parameters
    ----------
    path : str or Path
        File to read.
    add_constant : bool, default False
        Prepend a column of ones to ``X``.
    """

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".npz":
        with np.load(path) as npz:
            content = {name: npz[name] for name in npz.files}
    elif suffix == ".mat":
        content = {k: v for k, v in loadmat(path).items() if not k.startswith("__")}
    else:
        raise ValueError(f"Unsupported panel container: {path.suffix}")

    Y = _lookup(content, "Y")
    X = _lookup(content, "X")
    Z = _lookup(content, "Z")
    # 1D vectors come back as a single row
    if X.shape[0] == 1 and Y.shape[0] > 1:
        X = X.T
    if Z.shape[0] == 1 and Y.shape[1] > 1:
        Z = Z.T
    if X.shape[0] != Y.shape[0] or Z.shape[0] != Y.shape[1]:
        raise PanelDimensionError(
            f"inconsistent shapes: Y {Y.shape}, X {X.shape}, Z {Z.shape}"
        )

    factors = [f"f{k}" for k in range(X.shape[1])]
    if add_constant:
        X, factors = _with_constant(X, factors)
    return PanelData(
        Y=Y,
        X=X,
        Z=Z,
        dates=[str(t) for t in range(Y.shape[0])],
        units=[str(i) for i in range(Y.shape[1])],
        factors=factors,
        groups=[f"g{j}" for j in range(Z.shape[1])],
    )


def load_panel_csv(
    returns_path: str | Path,
    factors_path: str | Path,
    groups_path: str | Path,
    add_constant: bool = True,
) -> PanelData:
    """Load a balanced panel from three CSV files.

    Parameters
    ----------
    returns_path : str or Path
        Wide table: first column is the date, remaining columns are units.
    factors_path : str or Path
        Wide table: first column is the date, remaining columns are factors.
    groups_path : str or Path
        Two columns: unit identifier and group label. Units without a label
        (empty cell) get an all-zero design row.
    add_constant : bool, default True
        Prepend a constant to the factors so that the first coefficient of
        every group is its alpha.

    Returns
    -------
    PanelData
        Periods are the dates common to returns and factors, in the order of
        the returns file.
    """

    returns = pd.read_csv(returns_path, index_col=0)
    factors = pd.read_csv(factors_path, index_col=0)
    assignment = pd.read_csv(groups_path, dtype=str)
    if assignment.shape[1] < 2:
        raise ValueError("groups file needs a unit and a group column")
    assignment = assignment.iloc[:, :2]
    assignment.columns = ["unit", "group"]

    returns.index = returns.index.astype(str)
    factors.index = factors.index.astype(str)
    returns.columns = returns.columns.astype(str)

    common = returns.index.intersection(factors.index, sort=False)
    if len(common) == 0:
        raise PanelDimensionError("returns and factors share no dates")
    returns = returns.loc[common]
    factors = factors.loc[common]
    if returns.isna().any().any():
        raise ValueError("returns contain missing values; the panel must be balanced")
    if factors.isna().any().any():
        raise ValueError("factors contain missing values")

    assignment = assignment.drop_duplicates("unit").set_index("unit")
    missing = [u for u in returns.columns if u not in assignment.index]
    if missing:
        raise PanelDimensionError(f"units without a group entry: {missing[:5]}")
    labels = assignment.loc[list(returns.columns), "group"]
    dummies = pd.get_dummies(labels, dtype=float)
    dummies = dummies[sorted(dummies.columns)]

    X = factors.to_numpy(dtype=float)
    factor_names = [str(c) for c in factors.columns]
    if add_constant:
        X, factor_names = _with_constant(X, factor_names)

    return PanelData(
        Y=returns.to_numpy(dtype=float),
        X=X,
        Z=dummies.to_numpy(dtype=float),
        dates=list(returns.index),
        units=list(returns.columns),
        factors=factor_names,
        groups=[str(c) for c in dummies.columns],
    )
