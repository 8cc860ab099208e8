"""The ``fetch_data`` entry point: resolve arguments, retrieve, reshape."""

import warnings
from typing import Any

import pandas as pd
import structlog

from . import postprocess
from .catalog import indicator_metadata
from .client import FingertipsHttpClient, open_client
from .endpoints import DEFAULT_AREA_TYPE_ID
from .retrieve import dispatch
from .selectors import check_flag, resolve_area_selection, resolve_selector

logger = structlog.get_logger(__name__)

_UNSET: Any = object()


def fetch_data(
    indicator_id: Any = None,
    area_code: Any = None,
    domain_id: Any = None,
    profile_id: Any = None,
    area_type_id: Any = DEFAULT_AREA_TYPE_ID,
    parent_area_type_id: Any = None,
    categorytype: bool = False,
    rank: bool = False,
    strings_as_factors: bool = False,
    *,
    inequalities: Any = _UNSET,
    client: FingertipsHttpClient | None = None,
) -> pd.DataFrame:
    """Fetch Fingertips data as a DataFrame.

    Args:
        indicator_id: Indicator id or ids. Takes precedence over ``domain_id``.
        area_code: Restrict the result to these ONS area codes. Codes must
            belong to the requested area types, or be England (E92000001).
        domain_id: Domain id or ids, used when no indicator is given.
        profile_id: Profile id or ids. Alongside ``indicator_id`` it must have
            the same length (entries may be ``None``); on its own it selects
            whole profiles. Polarity can differ between profiles.
        area_type_id: Child area type id or ids; 102 by default.
        parent_area_type_id: Comparator area type id or ids. When omitted the
            first parent listed by :func:`area_types` is used for each area type.
        categorytype: Keep rows broken down by a category type.
        rank: Add ``Polarity``, ``Rank`` (ascending, 1 is lowest, ties
            averaged, missing values unranked) and ``AreaValuesCount`` per
            indicator, time period, sex, age, category type, category and area
            type.
        strings_as_factors: Convert string columns to the ``category`` dtype.
        inequalities: Deprecated alias for ``categorytype``.
        client: HTTP client to use; a temporary one is created when omitted.

    Raises:
        InvalidSelector: None of indicator, domain or profile was given.
        MismatchedLength: Paired indicator and profile ids differ in length.
        InvalidArgument: ``categorytype`` is not boolean or no area type given.
        InvalidAreaType: An area type is unknown.
        InvalidAreaCode: An area code is not in the requested area types.
    """
    if inequalities is not _UNSET:
        warnings.warn(
            "argument inequalities is deprecated; please use categorytype instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        categorytype = inequalities

    selector = resolve_selector(indicator_id, domain_id, profile_id)
    categorytype = check_flag("categorytype", categorytype)

    with open_client(client) as http:
        areas = resolve_area_selection(
            area_type_id, parent_area_type_id, area_code, client=http
        )
        log = logger.bind(
            selector=type(selector).__name__,
            area_type_pairs=areas.pairs(),
        )
        log.info("pipeline.fetch_start")
        data = dispatch(selector, areas, client=http)
        data = postprocess.normalize_columns(data)

        if rank and not data.empty:
            data = postprocess.add_rank(
                data, lambda ids: indicator_metadata(ids, client=http)
            )

    if areas.area_codes is not None:
        data = postprocess.filter_area_codes(data, areas.area_codes)

    if len(data) > 0:
        data = postprocess.blank_to_missing(data)
        if not categorytype:
            data = postprocess.drop_category_rows(data)

    if strings_as_factors:
        data = postprocess.to_categorical(data)

    log.info("pipeline.fetch_complete", rows=len(data), columns=len(data.columns))
    return data


__all__ = ["fetch_data"]
