"""Global test configuration and fixtures."""

import io
from collections.abc import Mapping
from typing import Any
from unittest.mock import MagicMock

import pandas as pd
import pytest

from fingertips_client.data import endpoints
from fingertips_client.data.client import FingertipsHttpClient

AREA_TYPES_PAYLOAD = [
    {
        "Id": 101,
        "Name": "Districts & UAs",
        "Short": "Districts & UAs",
        "ParentAreaTypes": [
            {"Id": 102, "Name": "Counties & UAs", "Short": "Counties & UAs"},
            {"Id": 6, "Name": "Government office region", "Short": "Region"},
        ],
    },
    {
        "Id": 102,
        "Name": "Counties & UAs",
        "Short": "Counties & UAs",
        "ParentAreaTypes": [
            {"Id": 6, "Name": "Government office region", "Short": "Region"},
            {"Id": 15, "Name": "England", "Short": "England"},
        ],
    },
    {
        "Id": 6,
        "Name": "Government office region",
        "Short": "Region",
        "ParentAreaTypes": [{"Id": 15, "Name": "England", "Short": "England"}],
    },
]

AREAS_PAYLOAD = {
    101: [
        {"Code": "E07000004", "Name": "Aylesbury Vale", "AreaTypeId": 101},
        {"Code": "E06000001", "Name": "Hartlepool", "AreaTypeId": 101},
    ],
    102: [
        {"Code": "E06000001", "Name": "Hartlepool", "AreaTypeId": 102},
        {"Code": "E06000002", "Name": "Middlesbrough", "AreaTypeId": 102},
        {"Code": "E06000003", "Name": "Redcar and Cleveland", "AreaTypeId": 102},
        {"Code": "E06000004", "Name": "Stockton-on-Tees", "AreaTypeId": 102},
    ],
    6: [{"Code": "E12000001", "Name": "North East region", "AreaTypeId": 6}],
    15: [{"Code": "E92000001", "Name": "England", "AreaTypeId": 15}],
}

DATA_COLUMNS = [
    "Indicator ID",
    "Indicator Name",
    "Parent Code",
    "Parent Name",
    "Area Code",
    "Area Name",
    "Area Type",
    "Sex",
    "Age",
    "Category Type",
    "Category",
    "Time period",
    "Value",
    "Time period Sortable",
]

LIFE = "Life expectancy at birth"
HLE = "Healthy life expectancy at birth"
DECILES = "County & UA deprivation deciles in England (IMD2015)"

DATA_ROWS = [
    (90362, LIFE, "", "", "E92000001", "England", "England", "Female", "All ages", "", "", "2012 - 14", 83.2, 20120000),
    (90362, LIFE, "E12000001", "North East region", "E06000001", "Hartlepool", "County & UA", "Female", "All ages", "", "", "2012 - 14", 81.0, 20120000),
    (90362, LIFE, "E12000001", "North East region", "E06000002", "Middlesbrough", "County & UA", "Female", "All ages", "", "", "2012 - 14", 80.0, 20120000),
    (90362, LIFE, "E12000001", "North East region", "E06000003", "Redcar and Cleveland", "County & UA", "Female", "All ages", "", "", "2012 - 14", 81.0, 20120000),
    (90362, LIFE, "E12000001", "North East region", "E06000004", "Stockton-on-Tees", "County & UA", "Female", "All ages", "", "", "2012 - 14", None, 20120000),
    (90362, LIFE, "E12000001", "North East region", "E06000001", "Hartlepool", "County & UA", "Female", "All ages", "", "", "2013 - 15", 81.4, 20130000),
    (90362, LIFE, "", "", "E92000001", "England", "England", "Female", "All ages", DECILES, "Most deprived decile", "2012 - 14", 79.1, 20120000),
    (90366, HLE, "E12000001", "North East region", "E06000001", "Hartlepool", "County & UA", "Female", "All ages", "", "", "2012 - 14", 60.1, 20120000),
    (90366, HLE, "E12000001", "North East region", "E06000002", "Middlesbrough", "County & UA", "Female", "All ages", "", "", "2012 - 14", 58.4, 20120000),
    (91872, "Deprivation score (IMD 2015)", "E12000001", "North East region", "E06000001", "Hartlepool", "County & UA", "Persons", "All ages", "", "", "2015", 33.2, 20150000),
    (91872, "Deprivation score (IMD 2015)", "E12000001", "North East region", "E06000002", "Middlesbrough", "County & UA", "Persons", "All ages", "", "", "2015", 40.2, 20150000),
    (91872, "Deprivation score (IMD 2015)", "E12000001", "North East region", "E06000003", "Redcar and Cleveland", "County & UA", "Persons", "All ages", "", "", "2015", 25.4, 20150000),
    (91872, "Deprivation score (IMD 2015)", "", "", "E92000001", "England", "England", "Persons", "All ages", "", "", "2015", 21.8, 20150000),
]

DOMAIN_INDICATORS = {1938132983: [90362, 90366]}
PROFILE_INDICATORS = {19: [90362], 93: [90362, 90366]}

METADATA_CSV = (
    "Indicator ID,Indicator,Polarity,Unit\n"
    f"90362,{LIFE},RAG - High is good,Years\n"
    f"90362,{LIFE},BOB - Blue orange blue,Years\n"
    f"90366,{HLE},RAG - High is good,Years\n"
)

PROFILES_PAYLOAD = [
    {"Id": 19, "Name": "Public Health Outcomes Framework", "Key": "phof", "GroupIds": [1000049, 1000041]},
    {"Id": 93, "Name": "Wider Determinants", "Key": "wider-determinants", "GroupIds": []},
]


def as_csv(rows: list[tuple]) -> str:
    """Render data rows the way the bulk endpoints deliver them."""
    return pd.DataFrame(rows, columns=DATA_COLUMNS).to_csv(index=False)


class FakeFingertipsApi:
    """In-memory stand-in for the Fingertips endpoints used by the library."""

    def __init__(self) -> None:
        self.area_types = AREA_TYPES_PAYLOAD
        self.areas = AREAS_PAYLOAD
        self.rows = list(DATA_ROWS)
        self.metadata_csv = METADATA_CSV
        self.profiles = PROFILES_PAYLOAD
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        params = dict(params or {})
        self.calls.append((path, params))
        if path == endpoints.AREA_TYPES:
            return self.area_types
        if path == endpoints.AREAS_BY_AREA_TYPE:
            return self.areas.get(int(params["area_type_id"]), [])
        if path == endpoints.PROFILES:
            return self.profiles
        raise FileNotFoundError(f"No canned JSON for path: {path}")

    def get_csv(self, path: str, params: Mapping[str, Any] | None = None) -> pd.DataFrame:
        params = dict(params or {})
        self.calls.append((path, params))
        if path == endpoints.INDICATOR_METADATA:
            return pd.read_csv(io.StringIO(self.metadata_csv))
        if path == endpoints.DATA_BY_INDICATOR:
            indicators = [int(value) for value in params["indicator_ids"].split(",")]
        elif path == endpoints.DATA_BY_DOMAIN:
            indicators = DOMAIN_INDICATORS.get(int(params["group_id"]), [])
        elif path == endpoints.DATA_BY_PROFILE:
            indicators = PROFILE_INDICATORS.get(int(params["profile_id"]), [])
        else:
            raise FileNotFoundError(f"No canned CSV for path: {path}")
        rows = [row for row in self.rows if row[0] in indicators]
        return pd.read_csv(io.StringIO(as_csv(rows)))

    def data_calls(self) -> list[tuple[str, dict[str, Any]]]:
        """Return the calls made to the bulk data endpoints."""
        return [call for call in self.calls if call[0].startswith("all_data/")]


@pytest.fixture
def fake_api() -> FakeFingertipsApi:
    return FakeFingertipsApi()


@pytest.fixture
def mock_client(fake_api):
    """A FingertipsHttpClient mock answering from :class:`FakeFingertipsApi`."""
    client = MagicMock(spec=FingertipsHttpClient)
    client.get_json.side_effect = fake_api.get_json
    client.get_csv.side_effect = fake_api.get_csv
    return client
