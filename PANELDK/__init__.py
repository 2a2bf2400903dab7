__version__ = "0.1.0"

from .DK import (
    PanelConfig,
    PanelResult,
    PanelDimensionError,
    SingularDesignError,
    DegenerateContrastError,
    build_interaction,
    estimate_theta,
    estimate_covariance,
    fit_panel,
    linear_contrast_test,
    group_contrast,
    contrast_summary,
)
from .calendar import calendar_time_alphas, group_portfolios, sure, newey_west_se
from .utils import PanelData, load_panel, load_panel_csv
from .simulate import simulate_group_panel
from .report import comparison_table, print_comparison_summary

__all__ = [
    "PanelConfig",
    "PanelResult",
    "PanelDimensionError",
    "SingularDesignError",
    "DegenerateContrastError",
    "build_interaction",
    "estimate_theta",
    "estimate_covariance",
    "fit_panel",
    "linear_contrast_test",
    "group_contrast",
    "contrast_summary",
    "calendar_time_alphas",
    "group_portfolios",
    "sure",
    "newey_west_se",
    "PanelData",
    "load_panel",
    "load_panel_csv",
    "simulate_group_panel",
    "comparison_table",
    "print_comparison_summary",
]
