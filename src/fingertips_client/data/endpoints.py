"""Constants describing the Fingertips API surface."""

from attrs import define

BASE_URL = "https://fingertips.phe.org.uk/api/"

AREA_TYPES = "area_types/parent_area_types"
AREAS_BY_AREA_TYPE = "areas/by_area_type"
INDICATOR_METADATA = "indicator_metadata/csv/by_indicator_id"
PROFILES = "profiles"

DATA_BY_INDICATOR = "all_data/csv/by_indicator_id"
DATA_BY_DOMAIN = "all_data/csv/by_group_id"
DATA_BY_PROFILE = "all_data/csv/by_profile_id"

DEFAULT_AREA_TYPE_ID = 102

# England is not listed as a child in the parent mappings but is always queryable.
NATIONAL_AREA_TYPE_ID = 15
NATIONAL_AREA_CODE = "E92000001"

# Index of Multiple Deprivation score, by IMD release year.
DEPRIVATION_INDICATORS = {
    2015: 91872,
    2019: 93553,
}
DEPRIVATION_AREA_TYPES = (101, 102)


@define(frozen=True)
class DataRequest:
    """A single bulk CSV request: endpoint path plus query parameters."""

    path: str
    params: dict[str, str]
