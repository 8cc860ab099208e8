"""Tests for argument resolution."""

import math

import numpy as np
import pytest

from fingertips_client.data.selectors import (
    AreaSelection,
    ByDomain,
    ByIndicator,
    ByIndicatorProfile,
    ByProfile,
    as_list,
    check_flag,
    resolve_area_selection,
    resolve_selector,
)
from fingertips_client.errors import (
    FingertipsWarning,
    InvalidArgument,
    InvalidAreaCode,
    InvalidAreaType,
    InvalidSelector,
    MismatchedLength,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ([], None),
        (90362, [90362]),
        ("E06000001", ["E06000001"]),
        ((1, 2), [1, 2]),
        (np.array([3, 4]), [3, 4]),
    ],
)
def test_as_list_normalizes_scalars_and_sequences(value, expected):
    result = as_list(value)
    if expected is None:
        assert result is None
    else:
        assert [int(v) if not isinstance(v, str) else v for v in result] == expected


def test_indicator_only_selector():
    assert resolve_selector(indicator_id=[90362, 90366]) == ByIndicator([90362, 90366])


def test_indicator_ignores_domain_with_warning():
    with pytest.warns(FingertipsWarning, match="DomainID is ignored"):
        selector = resolve_selector(indicator_id=90362, domain_id=1000049)
    assert selector == ByIndicator([90362])


def test_indicator_with_matching_profiles_pairs_positionally():
    selector = resolve_selector(indicator_id=[90282, 90282], profile_id=[19, 93])
    assert isinstance(selector, ByIndicatorProfile)
    assert selector.pairs() == [(90282, 19), (90282, 93)]


def test_paired_profiles_may_contain_missing_entries():
    selector = resolve_selector(indicator_id=[90282, 90366], profile_id=[19, math.nan])
    assert selector.pairs() == [(90282, 19), (90366, None)]


@pytest.mark.parametrize(
    ("indicators", "profiles"),
    [([90362], [19, 93]), ([90362, 90366], 19), ([1, 2, 3], [4, 5])],
)
def test_mismatched_indicator_and_profile_lengths(indicators, profiles):
    with pytest.raises(MismatchedLength, match="same length"):
        resolve_selector(indicator_id=indicators, profile_id=profiles)


def test_domain_selector_ignores_profile_with_warning():
    with pytest.warns(FingertipsWarning, match="ProfileID is ignored"):
        selector = resolve_selector(domain_id=[1000049, 1938132983], profile_id=19)
    assert selector == ByDomain([1000049, 1938132983])


def test_profile_selector_when_alone():
    assert resolve_selector(profile_id=19) == ByProfile([19])


def test_no_selector_raises():
    with pytest.raises(InvalidSelector):
        resolve_selector()
    with pytest.raises(InvalidSelector):
        resolve_selector(indicator_id=[], domain_id=[], profile_id=[])


def test_check_flag_accepts_only_booleans():
    assert check_flag("categorytype", True) is True
    assert check_flag("categorytype", np.bool_(False)) is False
    for bad in (1, "TRUE", None):
        with pytest.raises(InvalidArgument, match="categorytype"):
            check_flag("categorytype", bad)


def test_area_selection_pairs_positionally_or_as_product():
    assert AreaSelection([101, 102], [102, 6]).pairs() == [(101, 102), (102, 6)]
    assert AreaSelection([101, 102], [15]).pairs() == [(101, 15), (102, 15)]
    assert AreaSelection([102, 102], [6, 6]).pairs() == [(102, 6)]


def test_parent_inferred_from_first_mapping(mock_client):
    areas = resolve_area_selection([102, 101], client=mock_client)
    assert areas.child_area_type_ids == (102, 101)
    assert areas.parent_area_type_ids == (6, 102)
    assert areas.area_codes is None


def test_national_area_type_is_its_own_parent(mock_client):
    areas = resolve_area_selection(15, client=mock_client)
    assert areas.pairs() == [(15, 15)]


def test_missing_area_type_raises(mock_client):
    with pytest.raises(InvalidArgument, match="AreaTypeID must have a value"):
        resolve_area_selection(None, client=mock_client)
    mock_client.get_json.assert_not_called()


@pytest.mark.parametrize("area_type_id", [999, [102, 7], "102"])
def test_unknown_area_type_raises(mock_client, area_type_id):
    with pytest.raises(InvalidAreaType):
        resolve_area_selection(area_type_id, client=mock_client)


def test_supplied_parent_outside_mappings_warns(mock_client):
    with pytest.warns(FingertipsWarning, match="not a child of ParentAreaTypeID"):
        areas = resolve_area_selection(102, parent_area_type_id=101, client=mock_client)
    assert areas.parent_area_type_ids == (101,)


def test_supplied_valid_parent_is_kept_silently(mock_client, recwarn):
    areas = resolve_area_selection(102, parent_area_type_id=15, client=mock_client)
    assert areas.pairs() == [(102, 15)]
    assert not [w for w in recwarn if issubclass(w.category, FingertipsWarning)]


def test_area_codes_checked_against_every_area_type(mock_client, fake_api):
    areas = resolve_area_selection(
        [101, 102], area_code=["E07000004", "E06000004", "E92000001"], client=mock_client
    )
    assert areas.area_codes == ("E07000004", "E06000004", "E92000001")
    looked_up = [call[1]["area_type_id"] for call in fake_api.calls if call[1]]
    assert looked_up == ["101", "102"]


def test_area_code_outside_area_types_raises(mock_client):
    with pytest.raises(InvalidAreaCode) as excinfo:
        resolve_area_selection(101, area_code=["E06000002"], client=mock_client)
    assert excinfo.value.details["area_codes"] == ["E06000002"]
