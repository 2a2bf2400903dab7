from .regression import (
    OLSResult,
    SUREResult,
    ols,
    sure,
    default_lags,
    newey_west_cov,
    newey_west_se,
)
from .portfolio import group_portfolios, calendar_time_alphas

__all__ = [
    "OLSResult",
    "SUREResult",
    "ols",
    "sure",
    "default_lags",
    "newey_west_cov",
    "newey_west_se",
    "group_portfolios",
    "calendar_time_alphas",
]
