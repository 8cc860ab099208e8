"""Shared helpers for Fingertips charts."""

from pathlib import Path

import numpy as np
import pandas as pd


def complete_pairs(data: pd.DataFrame, x: str, y: str) -> tuple[np.ndarray, np.ndarray]:
    """Return the numeric ``x`` and ``y`` columns with incomplete rows dropped."""
    numeric = data[[x, y]].apply(pd.to_numeric, errors="coerce").dropna()
    return numeric[x].to_numpy(dtype=float), numeric[y].to_numpy(dtype=float)


def ensure_directory(path: str | Path) -> Path:
    """Create the directory at ``path`` if needed and return its Path."""
    directory = Path(path)
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
    return directory


def format_correlation(value: float) -> str:
    """Format a correlation coefficient for legends and terminal output."""
    return f"r = {value:+.2f}"
