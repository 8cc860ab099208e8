"""Index of Multiple Deprivation scores and deciles by area."""

import pandas as pd
import structlog

from ..errors import InvalidArgument
from .catalog import areas_by_area_type
from .client import FingertipsHttpClient, open_client
from .endpoints import DEPRIVATION_AREA_TYPES, DEPRIVATION_INDICATORS
from .pipeline import fetch_data

logger = structlog.get_logger(__name__)


def _deciles(scores: pd.Series) -> pd.Series:
    """Split scores into tenths, 1 holding the highest (most deprived) scores."""
    count = len(scores)
    order = scores.rank(method="first", ascending=False)
    return ((order - 1) * 10 // count + 1).astype("int64")


def deprivation_decile(
    area_type_id: int = 102,
    year: int = 2015,
    *,
    client: FingertipsHttpClient | None = None,
) -> pd.DataFrame:
    """Return AreaCode, IMDscore and decile for every area of ``area_type_id``.

    Only district (101) and county (102) geographies, and the 2015 and 2019
    releases, are published as Fingertips indicators.
    """
    if area_type_id not in DEPRIVATION_AREA_TYPES:
        raise InvalidArgument(
            "AreaTypeID must be one of "
            + ", ".join(str(value) for value in DEPRIVATION_AREA_TYPES),
            area_type_id=area_type_id,
        )
    if year not in DEPRIVATION_INDICATORS:
        raise InvalidArgument(
            "Year must be one of " + ", ".join(str(value) for value in DEPRIVATION_INDICATORS),
            year=year,
        )

    with open_client(client) as http:
        data = fetch_data(
            indicator_id=DEPRIVATION_INDICATORS[year],
            area_type_id=area_type_id,
            client=http,
        )
        codes = set(areas_by_area_type(area_type_id, client=http)["Code"])

    if data.empty:
        return pd.DataFrame(columns=["AreaCode", "IMDscore", "decile"])

    scores = data.loc[data["AreaCode"].isin(codes), ["AreaCode", "Value"]]
    if "Timeperiod" in data.columns:
        same_year = data.loc[scores.index, "Timeperiod"].astype(str) == str(year)
        if same_year.any():
            scores = scores.loc[same_year]
    scores = (
        scores.dropna(subset=["Value"])
        .drop_duplicates(subset="AreaCode", keep="first")
        .rename(columns={"Value": "IMDscore"})
        .reset_index(drop=True)
    )
    scores["decile"] = _deciles(scores["IMDscore"])
    logger.debug(
        "deprivation.loaded", area_type_id=area_type_id, year=year, areas=len(scores)
    )
    return scores


def join_deprivation(data: pd.DataFrame, deprivation: pd.DataFrame) -> pd.DataFrame:
    """Attach IMDscore and decile by AreaCode, keeping rows with both a score and a value."""
    joined = data.merge(
        deprivation.loc[:, ["AreaCode", "IMDscore", "decile"]], on="AreaCode", how="left"
    )
    return joined.dropna(subset=["IMDscore", "Value"]).reset_index(drop=True)


__all__ = ["deprivation_decile", "join_deprivation"]
