"""Reference records returned by the Fingertips catalog endpoints."""

from collections.abc import Iterable
from typing import Any

import marshmallow as ma
import pandas as pd
from attrs import asdict as attrs_asdict, define, field


def _strip(value: str) -> str:
    """Trim surrounding whitespace from a field."""
    return value.strip()


def _optional_int(value: Any) -> int | None:
    """Coerce ids that the API may omit or send as null."""
    if value is None:
        return None
    return int(value)


class _ApiSchema(ma.Schema):
    """Base schema tolerating the extra keys the API adds over time."""

    class Meta:
        unknown = ma.EXCLUDE


@define(slots=True, frozen=True)
class ParentAreaType:
    """Comparator geography an area type rolls up to."""

    area_type_id: int = field(converter=int)
    name: str = field(converter=_strip)


class ParentAreaTypeSchema(_ApiSchema):
    """Marshmallow schema for entries of ``ParentAreaTypes``."""

    area_type_id = ma.fields.Int(required=True, data_key="Id")
    name = ma.fields.Str(required=True, data_key="Name")

    @ma.post_load
    def make_parent(self, data: dict[str, Any], **kwargs: object) -> ParentAreaType:
        """Convert validated payloads into :class:`ParentAreaType` objects."""
        return ParentAreaType(**data)


@define(slots=True, frozen=True)
class AreaType:
    """A geographic granularity and the parents it can be compared against."""

    area_type_id: int = field(converter=int)
    name: str = field(converter=_strip)
    parents: tuple[ParentAreaType, ...] = field(converter=tuple, factory=tuple)


class AreaTypeSchema(_ApiSchema):
    """Marshmallow schema for ``area_types/parent_area_types`` records."""

    area_type_id = ma.fields.Int(required=True, data_key="Id")
    name = ma.fields.Str(required=True, data_key="Name")
    parents = ma.fields.List(
        ma.fields.Nested(ParentAreaTypeSchema),
        data_key="ParentAreaTypes",
        load_default=list,
    )

    @ma.post_load
    def make_area_type(self, data: dict[str, Any], **kwargs: object) -> AreaType:
        """Instantiate :class:`AreaType` from validated row data."""
        return AreaType(**data)


@define(slots=True, frozen=True)
class AreaTypeMapping:
    """One child/parent area type pairing, the row shape of ``area_types()``."""

    area_type_id: int
    area_type_name: str
    parent_area_type_id: int
    parent_area_type_name: str


def flatten_area_types(area_types: Iterable[AreaType]) -> list[AreaTypeMapping]:
    """Expand each area type into one mapping per parent, preserving API order."""
    return [
        AreaTypeMapping(
            area_type_id=area_type.area_type_id,
            area_type_name=area_type.name,
            parent_area_type_id=parent.area_type_id,
            parent_area_type_name=parent.name,
        )
        for area_type in area_types
        for parent in area_type.parents
    ]


@define(slots=True, frozen=True)
class Area:
    """A single geography, identified by its ONS code."""

    code: str = field(converter=_strip)
    name: str = field(converter=_strip)
    area_type_id: int | None = field(converter=_optional_int, default=None)


class AreaSchema(_ApiSchema):
    """Marshmallow schema for ``areas/by_area_type`` records."""

    code = ma.fields.Str(required=True, data_key="Code")
    name = ma.fields.Str(required=True, data_key="Name")
    area_type_id = ma.fields.Int(data_key="AreaTypeId", allow_none=True, load_default=None)

    @ma.post_load
    def make_area(self, data: dict[str, Any], **kwargs: object) -> Area:
        """Instantiate :class:`Area` records."""
        return Area(**data)


@define(slots=True, frozen=True)
class Profile:
    """A curated collection of indicators grouped into domains."""

    profile_id: int = field(converter=int)
    name: str = field(converter=_strip)
    key: str = field(converter=_strip, default="")
    domain_ids: tuple[int, ...] = field(converter=tuple, factory=tuple)


class ProfileSchema(_ApiSchema):
    """Marshmallow schema for ``profiles`` records."""

    profile_id = ma.fields.Int(required=True, data_key="Id")
    name = ma.fields.Str(required=True, data_key="Name")
    key = ma.fields.Str(data_key="Key", load_default="")
    domain_ids = ma.fields.List(ma.fields.Int(), data_key="GroupIds", load_default=list)

    @ma.post_load
    def make_profile(self, data: dict[str, Any], **kwargs: object) -> Profile:
        """Instantiate :class:`Profile` objects from parsed data."""
        return Profile(**data)


def records_frame(records: Iterable[Any], columns: dict[str, str]) -> pd.DataFrame:
    """Build a DataFrame from attrs records, renaming fields to API-style columns."""
    rows = [attrs_asdict(record, recurse=False) for record in records]
    frame = pd.DataFrame(rows, columns=list(columns))
    return frame.rename(columns=columns)


__all__ = [
    "Area",
    "AreaSchema",
    "AreaType",
    "AreaTypeMapping",
    "AreaTypeSchema",
    "ParentAreaType",
    "ParentAreaTypeSchema",
    "Profile",
    "ProfileSchema",
    "flatten_area_types",
    "records_frame",
]
