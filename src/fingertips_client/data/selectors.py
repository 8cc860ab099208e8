"""Resolution of caller arguments into a selector and an area selection.

A request names its data in one of three mutually substitutable ways
(indicators, domains or profiles) and its geography as child area types with
optional parents. The resolver validates those arguments against the area
types reference table and produces the immutable values the dispatcher works
from. Every check here runs before any bulk data request is made.
"""

import itertools
import math
import warnings
from collections.abc import Iterable
from typing import Any, TypeAlias

import numpy as np
import structlog
from attrs import define, field

from ..errors import (
    FingertipsWarning,
    InvalidArgument,
    InvalidAreaCode,
    InvalidAreaType,
    InvalidSelector,
    MismatchedLength,
)
from .catalog import area_types, areas_by_area_type
from .client import FingertipsHttpClient
from .endpoints import NATIONAL_AREA_CODE, NATIONAL_AREA_TYPE_ID

logger = structlog.get_logger(__name__)


def as_list(value: Any) -> list[Any] | None:
    """Normalize a scalar or iterable argument; ``None`` and empty inputs become ``None``."""
    if value is None:
        return None
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return [value]
    items = list(value)
    return items or None


def _is_missing(value: Any) -> bool:
    """Return True for ``None`` and float NaN placeholders."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def _ids(values: Iterable[Any]) -> tuple[int, ...]:
    return tuple(int(value) for value in values)


def _optional_ids(values: Iterable[Any]) -> tuple[int | None, ...]:
    return tuple(None if _is_missing(value) else int(value) for value in values)


def _warn(event: str, message: str, **context: Any) -> None:
    """Surface a non-fatal problem through both structlog and :mod:`warnings`."""
    logger.warning(event, message=message, **context)
    warnings.warn(message, FingertipsWarning, stacklevel=4)


@define(frozen=True)
class ByIndicator:
    """Fetch the listed indicators."""

    indicator_ids: tuple[int, ...] = field(converter=_ids)


@define(frozen=True)
class ByIndicatorProfile:
    """Fetch each indicator in the context of the profile at the same position.

    A ``None`` profile fetches that indicator without a profile.
    """

    indicator_ids: tuple[int, ...] = field(converter=_ids)
    profile_ids: tuple[int | None, ...] = field(converter=_optional_ids)

    @profile_ids.validator
    def _check_lengths(self, attribute: object, value: tuple[int | None, ...]) -> None:
        if len(value) != len(self.indicator_ids):
            raise MismatchedLength(
                "If ProfileID and IndicatorID are populated, they must be the same length",
                indicator_ids=len(self.indicator_ids),
                profile_ids=len(value),
            )

    def pairs(self) -> list[tuple[int, int | None]]:
        """Return the positional (indicator, profile) pairs."""
        return list(zip(self.indicator_ids, self.profile_ids))


@define(frozen=True)
class ByDomain:
    """Fetch every indicator in the listed domains."""

    domain_ids: tuple[int, ...] = field(converter=_ids)


@define(frozen=True)
class ByProfile:
    """Fetch every indicator in the listed profiles."""

    profile_ids: tuple[int, ...] = field(converter=_ids)


Selector: TypeAlias = ByIndicator | ByIndicatorProfile | ByDomain | ByProfile


@define(frozen=True)
class AreaSelection:
    """Validated geography for a request."""

    child_area_type_ids: tuple[int, ...] = field(converter=_ids)
    parent_area_type_ids: tuple[int, ...] = field(converter=_ids)
    area_codes: tuple[str, ...] | None = field(
        default=None, converter=lambda codes: None if codes is None else tuple(codes)
    )

    def pairs(self) -> list[tuple[int, int]]:
        """Return the (child, parent) area type pairs to query.

        Equal-length lists pair positionally; otherwise every child is paired
        with every parent.
        """
        children, parents = self.child_area_type_ids, self.parent_area_type_ids
        if len(children) == len(parents):
            candidates: Iterable[tuple[int, int]] = zip(children, parents)
        else:
            candidates = itertools.product(children, parents)
        return list(dict.fromkeys(candidates))


def resolve_selector(
    indicator_id: Any = None,
    domain_id: Any = None,
    profile_id: Any = None,
) -> Selector:
    """Decide which of indicators, domains or profiles drives the request.

    Indicators take precedence over domains, and domains over profiles.
    Profiles may accompany indicators only position for position.
    """
    indicators = as_list(indicator_id)
    domains = as_list(domain_id)
    profiles = as_list(profile_id)

    if indicators is not None:
        if domains is not None:
            _warn(
                "resolver.domain_ignored",
                "If IndicatorID is populated DomainID is ignored",
                domain_ids=domains,
            )
        if profiles is None:
            return ByIndicator(indicators)
        return ByIndicatorProfile(indicators, profiles)

    if domains is not None:
        if profiles is not None:
            _warn(
                "resolver.profile_ignored",
                "DomainID is complete so ProfileID is ignored",
                profile_ids=profiles,
            )
        return ByDomain(domains)

    if profiles is not None:
        return ByProfile(profiles)

    raise InvalidSelector("One of IndicatorID, DomainID or ProfileID must have an input")


def check_flag(name: str, value: Any) -> bool:
    """Require a boolean flag, rejecting truthy stand-ins such as ``1`` or ``"yes"``."""
    if not isinstance(value, (bool, np.bool_)):
        raise InvalidArgument(f"{name} input must be True or False", **{name: value})
    return bool(value)


def resolve_area_selection(
    area_type_id: Any,
    parent_area_type_id: Any = None,
    area_code: Any = None,
    *,
    client: FingertipsHttpClient,
) -> AreaSelection:
    """Validate area types and codes, and infer parents where none are given."""
    children = as_list(area_type_id)
    if children is None or any(_is_missing(value) for value in children):
        raise InvalidArgument(
            "AreaTypeID must have a value. Use function area_types() to see what values can be used."
        )

    reference = area_types(client=client)
    known = {int(value) for value in reference["AreaTypeID"]} | {NATIONAL_AREA_TYPE_ID}
    unknown = [value for value in children if value not in known]
    if unknown:
        raise InvalidAreaType(
            "Invalid AreaTypeID. Use function area_types() to see what values can be used.",
            area_type_ids=unknown,
        )
    children = [int(value) for value in children]

    codes = as_list(area_code)
    if codes is not None:
        _check_area_codes(codes, children, client=client)

    parents = as_list(parent_area_type_id)
    child_rows = reference.loc[reference["AreaTypeID"].isin(children)]
    if parents is None:
        first_parent = child_rows.drop_duplicates(subset="AreaTypeID", keep="first")
        parent_by_child = dict(zip(first_parent["AreaTypeID"], first_parent["ParentAreaTypeID"]))
        parents = [parent_by_child.get(child, child) for child in children]
        logger.debug("resolver.parent_inferred", children=children, parents=parents)
    else:
        valid_parents = set(child_rows["ParentAreaTypeID"])
        mismatched = [value for value in parents if value not in valid_parents]
        if mismatched:
            _warn(
                "resolver.parent_mismatch",
                "AreaTypeID not a child of ParentAreaTypeID. There may be duplicate values "
                "in data. Use function area_types() to see mappings of area type to parent "
                "area type.",
                area_type_ids=children,
                parent_area_type_ids=mismatched,
            )

    return AreaSelection(children, parents, codes)


def _check_area_codes(
    codes: list[Any],
    children: list[int],
    *,
    client: FingertipsHttpClient,
) -> None:
    """Require every code to belong to one of the area types, or be England."""
    valid = {NATIONAL_AREA_CODE}
    for child in children:
        valid.update(areas_by_area_type(child, client=client)["Code"])
    invalid = [code for code in codes if code not in valid]
    if invalid:
        raise InvalidAreaCode(
            "Area code not contained AreaTypeID.",
            area_codes=invalid,
            area_type_ids=children,
        )


__all__ = [
    "AreaSelection",
    "ByDomain",
    "ByIndicator",
    "ByIndicatorProfile",
    "ByProfile",
    "Selector",
    "as_list",
    "check_flag",
    "resolve_area_selection",
    "resolve_selector",
]
