"""Charts for Fingertips indicator data."""

from .plots import (
    DeprivationPlotConfig,
    PlotReport,
    TrendSummary,
    generate_deprivation_plot,
)

__all__ = [
    "DeprivationPlotConfig",
    "PlotReport",
    "TrendSummary",
    "generate_deprivation_plot",
]
