"""Client for the Fingertips public health statistics API."""

from .data import (
    FingertipsHttpClient,
    area_types,
    areas_by_area_type,
    deprivation_decile,
    fetch_data,
    indicator_metadata,
    profiles,
)
from .errors import (
    FingertipsError,
    FingertipsWarning,
    InvalidArgument,
    InvalidAreaCode,
    InvalidAreaType,
    InvalidSelector,
    MismatchedLength,
)

__all__ = [
    "FingertipsError",
    "FingertipsHttpClient",
    "FingertipsWarning",
    "InvalidArgument",
    "InvalidAreaCode",
    "InvalidAreaType",
    "InvalidSelector",
    "MismatchedLength",
    "area_types",
    "areas_by_area_type",
    "deprivation_decile",
    "fetch_data",
    "indicator_metadata",
    "profiles",
]
