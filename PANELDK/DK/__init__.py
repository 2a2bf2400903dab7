from .config import PanelConfig
from .errors import PanelDimensionError, SingularDesignError, DegenerateContrastError
from .interaction import build_interaction, materialize_design
from .estimator import NormalEquations, accumulate_normal_equations, estimate_theta
from .covariance import estimate_covariance
from .inference import (
    ContrastResult,
    linear_contrast_test,
    group_contrast,
    contrast_summary,
    standard_errors,
)
from .model import PanelResult, fit_panel

__all__ = [
    "PanelConfig",
    "PanelDimensionError",
    "SingularDesignError",
    "DegenerateContrastError",
    "build_interaction",
    "materialize_design",
    "NormalEquations",
    "accumulate_normal_equations",
    "estimate_theta",
    "estimate_covariance",
    "ContrastResult",
    "linear_contrast_test",
    "group_contrast",
    "contrast_summary",
    "standard_errors",
    "PanelResult",
    "fit_panel",
]
