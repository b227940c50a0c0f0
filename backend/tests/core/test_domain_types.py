"""Domain Types - verifies enums, YearRange bounds and ParsedEgn helpers.

Tests:
    - Enums have expected members and string values
    - YearRange rejects reversed or unsupported bounds
    - YearRange membership and first/last day
"""

from datetime import date

import pytest

from egn.core.domain_types import (
    DEFAULT_LOCALE, DetailsFormat, EgnCode, Gender, Locale, ParsedEgn, YearRange,
)
from egn.core.errors import InvalidOptionError


def test_egn_code_wraps_str():
    assert EgnCode("6101057509") == "6101057509"


def test_gender_has_two_values():
    assert {g.value for g in Gender} == {"female", "male"}


def test_locales_and_default():
    assert {loc.value for loc in Locale} == {"bg", "en"}
    assert DEFAULT_LOCALE is Locale.BG


def test_details_format_values():
    assert [f.value for f in DetailsFormat] == ["plain", "ordered", "object"]


def test_year_range_defaults_to_full_supported_span():
    year_range = YearRange()
    assert (year_range.start_year, year_range.end_year) == (1800, 2099)
    assert year_range.first_day == date(1800, 1, 1)
    assert year_range.last_day == date(2099, 12, 31)


def test_year_range_membership():
    year_range = YearRange(1901, 1903)
    assert 1901 in year_range
    assert 1903 in year_range
    assert 1900 not in year_range
    assert 1904 not in year_range
    assert "1902" not in year_range


def test_year_range_single_year_allowed():
    assert YearRange(1950, 1950).start_year == 1950


@pytest.mark.parametrize("start,end", [
    (2000, 1999), (1799, 1900), (1900, 2100),
])
def test_year_range_rejects_invalid_bounds(start, end):
    with pytest.raises(InvalidOptionError):
        YearRange(start, end)


def test_year_range_is_immutable():
    year_range = YearRange()
    with pytest.raises(AttributeError):
        year_range.start_year = 1900


def test_parsed_egn_birth_date():
    parsed = ParsedEgn(year=2000, month=2, day=29, gender=Gender.MALE)
    assert parsed.birth_date == date(2000, 2, 29)
    assert parsed.to_dict()["gender"] == "male"
