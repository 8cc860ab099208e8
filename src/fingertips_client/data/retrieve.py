"""Bulk data retrieval and dispatch on the resolved selector."""

from collections.abc import Sequence

import pandas as pd
import structlog

from . import endpoints
from .catalog import join_ids
from .client import FingertipsHttpClient
from .endpoints import DataRequest
from .selectors import (
    AreaSelection,
    ByDomain,
    ByIndicator,
    ByIndicatorProfile,
    ByProfile,
    Selector,
)

logger = structlog.get_logger(__name__)


def _area_params(child: int, parent: int) -> dict[str, str]:
    return {"child_area_type_id": str(child), "parent_area_type_id": str(parent)}


def _area_pairs(
    child_area_type_ids: Sequence[int], parent_area_type_ids: Sequence[int]
) -> list[tuple[int, int]]:
    return AreaSelection(child_area_type_ids, parent_area_type_ids).pairs()


def _collect(client: FingertipsHttpClient, batch: Sequence[DataRequest]) -> pd.DataFrame:
    """Issue each request in turn and stack the resulting tables."""
    frames = []
    for request in batch:
        log = logger.bind(path=request.path, params=request.params)
        log.debug("retrieve.request_start")
        frame = client.get_csv(request.path, request.params)
        log.debug("retrieve.request_complete", rows=len(frame))
        frames.append(frame)
    non_empty = [frame for frame in frames if not frame.empty]
    if not non_empty:
        return frames[0] if frames else pd.DataFrame()
    return pd.concat(non_empty, ignore_index=True)


def retrieve_indicator(
    indicator_ids: Sequence[int],
    child_area_type_ids: Sequence[int],
    parent_area_type_ids: Sequence[int],
    *,
    client: FingertipsHttpClient,
) -> pd.DataFrame:
    """Fetch all indicators together, once per area type pair."""
    batch = [
        DataRequest(
            endpoints.DATA_BY_INDICATOR,
            {"indicator_ids": join_ids(indicator_ids), **_area_params(child, parent)},
        )
        for child, parent in _area_pairs(child_area_type_ids, parent_area_type_ids)
    ]
    return _collect(client, batch)


def retrieve_indicator_profile(
    indicator_ids: Sequence[int],
    profile_ids: Sequence[int | None],
    child_area_type_ids: Sequence[int],
    parent_area_type_ids: Sequence[int],
    *,
    client: FingertipsHttpClient,
) -> pd.DataFrame:
    """Fetch each indicator in the context of its paired profile."""
    selector = ByIndicatorProfile(indicator_ids, profile_ids)
    batch = []
    for child, parent in _area_pairs(child_area_type_ids, parent_area_type_ids):
        for indicator_id, profile_id in selector.pairs():
            params = {"indicator_ids": str(indicator_id), **_area_params(child, parent)}
            if profile_id is not None:
                params["profile_id"] = str(profile_id)
            batch.append(DataRequest(endpoints.DATA_BY_INDICATOR, params))
    return _collect(client, batch)


def retrieve_domain(
    domain_ids: Sequence[int],
    child_area_type_ids: Sequence[int],
    parent_area_type_ids: Sequence[int],
    *,
    client: FingertipsHttpClient,
) -> pd.DataFrame:
    """Fetch every indicator of each domain."""
    batch = [
        DataRequest(
            endpoints.DATA_BY_DOMAIN,
            {"group_id": str(int(domain_id)), **_area_params(child, parent)},
        )
        for child, parent in _area_pairs(child_area_type_ids, parent_area_type_ids)
        for domain_id in domain_ids
    ]
    return _collect(client, batch)


def retrieve_profile(
    profile_ids: Sequence[int],
    child_area_type_ids: Sequence[int],
    parent_area_type_ids: Sequence[int],
    *,
    client: FingertipsHttpClient,
) -> pd.DataFrame:
    """Fetch every indicator of each profile."""
    batch = [
        DataRequest(
            endpoints.DATA_BY_PROFILE,
            {"profile_id": str(int(profile_id)), **_area_params(child, parent)},
        )
        for child, parent in _area_pairs(child_area_type_ids, parent_area_type_ids)
        for profile_id in profile_ids
    ]
    return _collect(client, batch)


def dispatch(
    selector: Selector,
    areas: AreaSelection,
    *,
    client: FingertipsHttpClient,
) -> pd.DataFrame:
    """Run the one retrieval operation matching ``selector``."""
    children = areas.child_area_type_ids
    parents = areas.parent_area_type_ids
    match selector:
        case ByIndicator(indicator_ids=indicator_ids):
            return retrieve_indicator(indicator_ids, children, parents, client=client)
        case ByIndicatorProfile(indicator_ids=indicator_ids, profile_ids=profile_ids):
            return retrieve_indicator_profile(
                indicator_ids, profile_ids, children, parents, client=client
            )
        case ByDomain(domain_ids=domain_ids):
            return retrieve_domain(domain_ids, children, parents, client=client)
        case ByProfile(profile_ids=profile_ids):
            return retrieve_profile(profile_ids, children, parents, client=client)
    raise TypeError(f"Unsupported selector: {selector!r}")


__all__ = [
    "dispatch",
    "retrieve_domain",
    "retrieve_indicator",
    "retrieve_indicator_profile",
    "retrieve_profile",
]
