"""Compare the alphas of two groups of agents.

The difference in alphas is tested four ways:
- calendar-time group portfolios with a joint SURE covariance,
- a Newey-West regression of the long-short portfolio,
- the stacked panel regression with naive (LS) standard errors,
- the stacked panel regression with Driscoll-Kraay (DK) standard errors.

Without input files a simulated panel is used.
"""

import argparse
import logging
from pathlib import Path

import numpy as np

from PANELDK import (
    PanelConfig,
    calendar_time_alphas,
    comparison_table,
    contrast_summary,
    fit_panel,
    group_contrast,
    load_panel,
    load_panel_csv,
    print_comparison_summary,
    simulate_group_panel,
)
from PANELDK.utils import PanelData

from scenario_config import ANNUALIZATION, GROUP_LABELS, SEED, scenario_kwargs

BASE_DIR = Path(__file__).resolve().parent
OUTPUT_FILE = "output_alpha_difference.csv"


def parse_args():
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Test the difference in alphas of two groups"
    )
    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Panel container (.npz or .mat) with arrays Y, X, Z",
    )
    parser.add_argument("--returns", type=str, default=None, help="Returns CSV (date x unit)")
    parser.add_argument("--factors", type=str, default=None, help="Factors CSV (date x factor)")
    parser.add_argument("--groups", type=str, default=None, help="Groups CSV (unit, group)")
    parser.add_argument(
        "--add-constant",
        action="store_true",
        help="Prepend a constant to X when loading a .npz/.mat container",
    )
    parser.add_argument("--group-a", type=int, default=0, help="First group (default: 0)")
    parser.add_argument("--group-b", type=int, default=1, help="Second group (default: 1)")
    parser.add_argument(
        "--annualize",
        type=float,
        default=ANNUALIZATION,
        help=f"Scale applied to estimates (default: {ANNUALIZATION})",
    )
    parser.add_argument("--nw-lags", type=int, default=None, help="Newey-West lags")
    parser.add_argument(
        "--strategy",
        choices=("stream", "materialize"),
        default="stream",
        help="How the panel design is built (default: stream)",
    )
    parser.add_argument("--n-partitions", type=int, default=1, help="Period blocks")
    parser.add_argument("--n-jobs", type=int, default=None, help="Parallel workers")
    parser.add_argument("--seed", type=int, default=SEED, help="Seed for the simulated panel")
    parser.add_argument(
        "--save",
        action="store_true",
        help=f"Write the comparison table to {OUTPUT_FILE}",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print per-group coefficients and debug logging",
    )
    return parser.parse_args()


def load_data(args) -> PanelData:
    """Load the panel from the files given on the command line or simulate it."""
    if args.data is not None:
        return load_panel(args.data, add_constant=args.add_constant)
    if args.returns or args.factors or args.groups:
        if not (args.returns and args.factors and args.groups):
            raise SystemExit("--returns, --factors and --groups must be given together")
        return load_panel_csv(args.returns, args.factors, args.groups)

    sim = simulate_group_panel(**scenario_kwargs(), rng=np.random.default_rng(args.seed))
    return PanelData(
        Y=sim["Y"],
        X=sim["X"],
        Z=sim["Z"],
        dates=[str(t) for t in range(sim["Y"].shape[0])],
        units=[str(i) for i in range(sim["Y"].shape[1])],
        factors=["const", "mkt"],
        groups=list(GROUP_LABELS),
    )


def print_coefficients(data: PanelData, result) -> None:
    """Print each group's coefficients with LS and DK standard errors."""
    coef = result.coef_matrix()
    se_ls = result.se_ls.reshape(coef.shape)
    se_dk = result.se_dk.reshape(coef.shape)
    print(f"\n{'group':<12} {'factor':<10} {'coef':>10} {'se LS':>10} {'se DK':>10}")
    print("-" * 56)
    for j, group in enumerate(data.groups):
        for k, factor in enumerate(data.factors):
            print(
                f"{group:<12} {factor:<10} {coef[j, k]:>10.4f} "
                f"{se_ls[j, k]:>10.4f} {se_dk[j, k]:>10.4f}"
            )


def main():
    """Run the alpha comparison."""
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    data = load_data(args)
    T, N, Kx, Kz = data.shape
    print(f"Panel: {T} periods, {N} units, {Kx} factors, {Kz} groups")

    config = PanelConfig(
        strategy=args.strategy, n_partitions=args.n_partitions, n_jobs=args.n_jobs
    )
    result = fit_panel(data.Y, data.X, data.Z, config=config)
    if args.verbose:
        print_coefficients(data, result)

    R = group_contrast(Kx, Kz, args.group_a, args.group_b)
    results = calendar_time_alphas(
        data.Y,
        data.X,
        data.Z,
        args.group_a,
        args.group_b,
        nw_lags=args.nw_lags,
        scale=args.annualize,
    )
    results.update(
        contrast_summary(result.theta, result.covariances(), R, scale=args.annualize)
    )

    table = comparison_table(results)
    title = (
        f"Alpha difference {data.groups[args.group_a]} - {data.groups[args.group_b]}"
        f" (x{args.annualize:g})"
    )
    print_comparison_summary(table, title=title)

    if args.save:
        output_path = BASE_DIR / OUTPUT_FILE
        table.to_csv(output_path, index=False)
        print(f"Saved: {output_path.name}")

    print("Done.")


if __name__ == "__main__":
    main()
