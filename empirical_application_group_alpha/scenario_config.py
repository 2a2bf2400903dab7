"""Defaults of the two-group alpha comparison.

Returns are daily excess returns in percent. The simulated scenario has two
groups of 100 agents over ten years of trading days, an annualized alpha
difference of -7 and residuals that are strongly correlated within each
group, so the naive panel t-statistic is far larger (in absolute value)
than the Driscoll-Kraay one.
"""

from __future__ import annotations

import numpy as np

# =============================================================================
# Scaling
# =============================================================================

ANNUALIZATION = 252  # trading days per year

# =============================================================================
# Simulated scenario
# =============================================================================

N_PERIODS = 2520
GROUP_SIZES = (100, 100)
GROUP_LABELS = ("group_1", "group_2")
ALPHA_DIFF_ANNUAL = -7.0
ALPHAS = (0.01 + ALPHA_DIFF_ANNUAL / ANNUALIZATION, 0.01)
BETAS = np.array([[1.0], [0.9]])
FACTOR_MEAN = 0.03
FACTOR_VOL = 1.0
RESID_VOL = 0.41
RHO = 0.73
SEED = 2024


def scenario_kwargs() -> dict:
    """Keyword arguments for :func:`PANELDK.simulate_group_panel`."""
    return {
        "T": N_PERIODS,
        "group_sizes": GROUP_SIZES,
        "alphas": ALPHAS,
        "betas": BETAS,
        "factor_mean": FACTOR_MEAN,
        "factor_vol": FACTOR_VOL,
        "resid_vol": RESID_VOL,
        "rho": RHO,
    }
