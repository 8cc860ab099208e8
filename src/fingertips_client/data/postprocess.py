"""Reshaping steps applied to bulk Fingertips data after retrieval.

``fetch_data`` applies these in a fixed order: column names are normalized
before ranking, ranking happens before the area filter (so ranks compare an
area with every area of its type), and blank cells become missing before
category rows are dropped.
"""

import re
from collections.abc import Callable, Iterable

import numpy as np
import pandas as pd
import structlog

logger = structlog.get_logger(__name__)

RANK_GROUP_COLUMNS = [
    "IndicatorID",
    "Timeperiod",
    "Sex",
    "Age",
    "CategoryType",
    "Category",
    "AreaType",
]

_WHITESPACE = re.compile(r"\s")


def normalize_columns(frame: pd.DataFrame) -> pd.DataFrame:
    """Remove every whitespace character from column names."""
    return frame.rename(columns=lambda name: _WHITESPACE.sub("", str(name)))


def add_rank(
    frame: pd.DataFrame,
    polarity_lookup: Callable[[list[int]], pd.DataFrame],
) -> pd.DataFrame:
    """Join indicator polarity and rank Value within comparable groups.

    ``Rank`` is ascending with ties sharing their average position; a missing
    Value keeps a missing rank. ``AreaValuesCount`` counts the non-missing
    values in the group. Polarity is joined for the caller and does not change
    the rank direction.
    """
    indicator_ids = [int(value) for value in frame["IndicatorID"].dropna().unique()]
    polarities = polarity_lookup(indicator_ids)
    polarities = (
        polarities.reindex(columns=["IndicatorID", "Polarity"])
        .drop_duplicates(subset="IndicatorID", keep="first")
        .astype({"IndicatorID": frame["IndicatorID"].dtype})
    )
    ranked = frame.merge(polarities, on="IndicatorID", how="left")

    for column in RANK_GROUP_COLUMNS:
        if column not in ranked.columns:
            ranked[column] = np.nan
    grouped = ranked.groupby(RANK_GROUP_COLUMNS, dropna=False, sort=False)["Value"]
    ranked["Rank"] = grouped.rank(method="average", na_option="keep")
    ranked["AreaValuesCount"] = grouped.transform("count").astype("int64")
    logger.debug(
        "postprocess.ranked",
        indicators=len(indicator_ids),
        groups=grouped.ngroups,
    )
    return ranked


def filter_area_codes(frame: pd.DataFrame, area_codes: Iterable[str]) -> pd.DataFrame:
    """Keep rows whose AreaCode is one of ``area_codes``."""
    if "AreaCode" not in frame.columns:
        return frame
    wanted = set(area_codes)
    return frame.loc[frame["AreaCode"].isin(wanted)].reset_index(drop=True)


def blank_to_missing(frame: pd.DataFrame) -> pd.DataFrame:
    """Replace empty-string cells with missing values."""
    return frame.replace("", np.nan)


def drop_category_rows(frame: pd.DataFrame) -> pd.DataFrame:
    """Keep only rows without a category breakdown."""
    if "CategoryType" not in frame.columns:
        return frame
    return frame.loc[frame["CategoryType"].isna()].reset_index(drop=True)


def to_categorical(frame: pd.DataFrame) -> pd.DataFrame:
    """Convert string-valued columns to the pandas ``category`` dtype."""
    converted = frame.copy()
    for column in converted.columns:
        series = converted[column]
        if pd.api.types.is_object_dtype(series) or pd.api.types.is_string_dtype(series):
            converted[column] = series.astype("category")
    return converted


__all__ = [
    "RANK_GROUP_COLUMNS",
    "add_rank",
    "blank_to_missing",
    "drop_category_rows",
    "filter_area_codes",
    "normalize_columns",
    "to_categorical",
]
