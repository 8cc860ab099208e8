"""Data retrieval for the Fingertips API."""

from .catalog import area_types, areas_by_area_type, indicator_metadata, profiles
from .client import FingertipsHttpClient, open_client
from .deprivation import deprivation_decile, join_deprivation
from .pipeline import fetch_data
from .retrieve import (
    dispatch,
    retrieve_domain,
    retrieve_indicator,
    retrieve_indicator_profile,
    retrieve_profile,
)
from .selectors import (
    AreaSelection,
    ByDomain,
    ByIndicator,
    ByIndicatorProfile,
    ByProfile,
    resolve_area_selection,
    resolve_selector,
)

__all__ = [
    "AreaSelection",
    "ByDomain",
    "ByIndicator",
    "ByIndicatorProfile",
    "ByProfile",
    "FingertipsHttpClient",
    "area_types",
    "areas_by_area_type",
    "deprivation_decile",
    "dispatch",
    "fetch_data",
    "indicator_metadata",
    "join_deprivation",
    "open_client",
    "profiles",
    "resolve_area_selection",
    "resolve_selector",
    "retrieve_domain",
    "retrieve_indicator",
    "retrieve_indicator_profile",
    "retrieve_profile",
]
