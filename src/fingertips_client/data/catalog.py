"""Reference lookups: area types, areas, indicator metadata and profiles."""

from collections.abc import Iterable, Sequence

import pandas as pd
import structlog

from . import endpoints
from .client import FingertipsHttpClient, open_client
from .models import (
    AreaSchema,
    AreaTypeSchema,
    ProfileSchema,
    flatten_area_types,
    records_frame,
)
from .postprocess import normalize_columns

logger = structlog.get_logger(__name__)

AREA_TYPE_COLUMNS = {
    "area_type_id": "AreaTypeID",
    "area_type_name": "AreaTypeName",
    "parent_area_type_id": "ParentAreaTypeID",
    "parent_area_type_name": "ParentAreaTypeName",
}
AREA_COLUMNS = {"code": "Code", "name": "Name", "area_type_id": "AreaTypeID"}


def join_ids(ids: Iterable[int]) -> str:
    """Render ids the way the API expects them in query strings."""
    return ",".join(str(int(value)) for value in ids)


def area_types(
    area_type_ids: Sequence[int] | None = None,
    *,
    client: FingertipsHttpClient | None = None,
) -> pd.DataFrame:
    """Return one row per child/parent area type mapping, in API order.

    When ``area_type_ids`` is given only mappings whose child is listed are
    kept.
    """
    with open_client(client) as http:
        payload = http.get_json(endpoints.AREA_TYPES)
    mappings = flatten_area_types(AreaTypeSchema(many=True).load(payload))
    if area_type_ids is not None:
        wanted = {int(value) for value in area_type_ids}
        mappings = [mapping for mapping in mappings if mapping.area_type_id in wanted]
    logger.debug("catalog.area_types_loaded", mappings=len(mappings))
    return records_frame(mappings, AREA_TYPE_COLUMNS)


def areas_by_area_type(
    area_type_id: int,
    *,
    client: FingertipsHttpClient | None = None,
) -> pd.DataFrame:
    """Return the areas (Code, Name, AreaTypeID) belonging to one area type."""
    with open_client(client) as http:
        payload = http.get_json(
            endpoints.AREAS_BY_AREA_TYPE, {"area_type_id": str(int(area_type_id))}
        )
    areas = AreaSchema(many=True).load(payload)
    frame = records_frame(areas, AREA_COLUMNS)
    frame["AreaTypeID"] = frame["AreaTypeID"].fillna(int(area_type_id)).astype("int64")
    logger.debug("catalog.areas_loaded", area_type_id=area_type_id, areas=len(frame))
    return frame


def indicator_metadata(
    indicator_ids: Sequence[int],
    *,
    client: FingertipsHttpClient | None = None,
) -> pd.DataFrame:
    """Return the metadata table for the given indicators, including Polarity."""
    with open_client(client) as http:
        frame = http.get_csv(
            endpoints.INDICATOR_METADATA, {"indicator_ids": join_ids(indicator_ids)}
        )
    return normalize_columns(frame)


def profiles(
    profile_ids: Sequence[int] | None = None,
    *,
    client: FingertipsHttpClient | None = None,
) -> pd.DataFrame:
    """Return one row per profile and domain.

    Profiles without domains appear once with a missing DomainID.
    """
    with open_client(client) as http:
        payload = http.get_json(endpoints.PROFILES)
    loaded = ProfileSchema(many=True).load(payload)
    if profile_ids is not None:
        wanted = {int(value) for value in profile_ids}
        loaded = [profile for profile in loaded if profile.profile_id in wanted]
    rows = []
    for profile in loaded:
        for domain_id in profile.domain_ids or (None,):
            rows.append(
                {
                    "ProfileID": profile.profile_id,
                    "ProfileName": profile.name,
                    "ProfileKey": profile.key,
                    "DomainID": domain_id,
                }
            )
    frame = pd.DataFrame(rows, columns=["ProfileID", "ProfileName", "ProfileKey", "DomainID"])
    return frame.astype({"DomainID": "Int64"})


__all__ = ["area_types", "areas_by_area_type", "indicator_metadata", "join_ids", "profiles"]
