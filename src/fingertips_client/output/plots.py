"""Plotting tools for Fingertips indicator data."""

from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .utils import complete_pairs, ensure_directory, format_correlation


def _axis_limits(values: np.ndarray, *, padding: float = 0.05) -> tuple[float, float]:
    """Return axis limits spanning the data with a small margin."""
    if values.size == 0:
        return (-1.0, 1.0)
    lower = float(values.min())
    upper = float(values.max())
    span = upper - lower
    if span <= 0:
        span = max(abs(lower), abs(upper), 1.0)
        return lower - span * 0.5, upper + span * 0.5
    margin = span * padding
    return lower - margin, upper + margin


@dataclass(frozen=True)
class DeprivationPlotConfig:
    """Styling options for indicator-versus-deprivation scatter plots."""

    title: str = "Indicator value by deprivation"
    xlabel: str = "IMD score"
    ylabel: str = "Value"
    x_column: str = "IMDscore"
    y_column: str = "Value"
    color: str = "#126782"
    trend_color: str = "#d08300"
    alpha: float = 0.7
    marker_size: float = 24.0


@dataclass(frozen=True)
class TrendSummary:
    """Least-squares fit of value on deprivation score."""

    count: int
    correlation: float
    slope: float
    intercept: float


@dataclass(frozen=True)
class PlotReport:
    """Metadata describing a saved plot and its fitted trend."""

    path: Path
    summary: TrendSummary


def fit_trend(x: np.ndarray, y: np.ndarray) -> TrendSummary:
    """Fit ``y = slope * x + intercept`` and report Pearson's r."""
    if x.size < 2:
        raise ValueError("At least two complete rows are required to fit a trend.")
    slope, intercept = np.polyfit(x, y, 1)
    if np.std(x) == 0 or np.std(y) == 0:
        correlation = float("nan")
    else:
        correlation = float(np.corrcoef(x, y)[0, 1])
    return TrendSummary(
        count=int(x.size),
        correlation=correlation,
        slope=float(slope),
        intercept=float(intercept),
    )


def generate_deprivation_plot(
    data: pd.DataFrame,
    *,
    output_dir: str | Path = "out",
    filename: str = "deprivation.png",
    config: DeprivationPlotConfig | None = None,
) -> PlotReport:
    """Render values against deprivation scores with a fitted trend line."""
    config = config or DeprivationPlotConfig()
    out_dir = ensure_directory(output_dir)

    x, y = complete_pairs(data, config.x_column, config.y_column)
    summary = fit_trend(x, y)

    fig, ax = plt.subplots(figsize=(11, 6))
    ax.scatter(
        x,
        y,
        s=config.marker_size,
        color=config.color,
        alpha=config.alpha,
        label=f"Areas (n={summary.count})",
    )
    grid = np.linspace(*_axis_limits(x, padding=0.0), 100)
    ax.plot(
        grid,
        summary.slope * grid + summary.intercept,
        color=config.trend_color,
        linestyle="--",
        linewidth=1.5,
        label=f"Trend ({format_correlation(summary.correlation)})",
    )
    ax.set_title(config.title)
    ax.set_xlabel(config.xlabel)
    ax.set_ylabel(config.ylabel)
    ax.set_xlim(*_axis_limits(x))
    ax.set_ylim(*_axis_limits(y))

    ax.legend(loc="upper right")
    ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.6)
    fig.tight_layout()

    output_path = out_dir / filename
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return PlotReport(path=output_path, summary=summary)
