"""Tables comparing contrast tests across estimators."""

from __future__ import annotations

from typing import Mapping

import pandas as pd

from .DK.inference import ContrastResult

COLUMNS = ["method", "estimate", "std_error", "t_stat", "p_value"]


def comparison_table(results: Mapping[str, ContrastResult]) -> pd.DataFrame:
    """Collect contrast results into a DataFrame, one row per method."""
    rows = [
        {
            "method": label,
            "estimate": res.estimate,
            "std_error": res.std_error,
            "t_stat": res.t_stat,
            "p_value": res.p_value,
        }
        for label, res in results.items()
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def print_comparison_summary(table: pd.DataFrame, title: str = "Alpha difference") -> None:
    """Print a comparison table produced by :func:`comparison_table`."""
    print(f"\n{title}")
    print("=" * 60)
    print(f"{'method':<10} {'estimate':>12} {'std.err':>12} {'t-stat':>10} {'p-value':>10}")
    print("-" * 60)
    for row in table.itertuples(index=False):
        print(
            f"{row.method:<10} {row.estimate:>12.4f} {row.std_error:>12.4f} "
            f"{row.t_stat:>10.2f} {row.p_value:>10.4f}"
        )
    print("-" * 60)
