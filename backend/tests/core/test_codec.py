"""EGN Codec - tests for parse, decode, checksum and century month mapping.

Tests cover:
    - Known valid and invalid codes (checksum, calendar, month bands)
    - decode() raises the specific DecodeError; parse()/is_valid() never raise
    - Century bands in both directions, including band edges
    - Checksum remainder 10 maps to 0
    - Non-ASCII digits and wrong lengths rejected
"""

import random

import pytest

from egn.core import codec
from egn.core.domain_types import Gender
from egn.core.errors import (
    ChecksumMismatchError,
    DecodeError,
    InvalidDateError,
    InvalidMonthEncodingError,
    InvalidOptionError,
    MalformedInputError,
)
from egn.core.generator import EgnGenerator


# ─── parse / is_valid ────────────────────────────────────────────

def test_parses_known_valid_egn():
    parsed = codec.parse("6101057509")
    assert parsed is not None
    assert (parsed.year, parsed.month, parsed.day) == (1961, 1, 5)
    assert parsed.gender is Gender.FEMALE


def test_known_valid_egn_validates():
    assert codec.is_valid("6101057509")
    assert codec.is_valid("8702260780")


def test_rejects_checksum_mismatch():
    assert codec.is_valid("6101057508") is False
    assert codec.parse("6101057508") is None


def test_rejects_day_out_of_month():
    assert codec.is_valid("6102327503") is False


def test_parse_returns_none_for_garbage():
    for value in ["", "abc", "0000000000", "61010575", None, 6101057509]:
        assert codec.parse(value) is None
        assert codec.is_valid(value) is False


def test_parses_2000s_code(with_checksum):
    code = with_checksum("002101000")
    assert code == "0021010008"
    parsed = codec.parse(code)
    assert (parsed.year, parsed.month, parsed.day) == (2000, 1, 1)
    assert parsed.gender is Gender.FEMALE


def test_parses_1800s_code():
    parsed = codec.parse("5046150011")
    assert (parsed.year, parsed.month, parsed.day) == (1850, 6, 15)
    assert parsed.gender is Gender.MALE


def test_odd_ninth_digit_is_male(with_checksum):
    assert codec.parse(with_checksum("911224221")).gender is Gender.MALE
    assert codec.parse(with_checksum("911224222")).gender is Gender.FEMALE


def test_parsed_birth_date_and_dict():
    parsed = codec.parse("6101057509")
    assert parsed.birth_date.isoformat() == "1961-01-05"
    assert parsed.to_dict() == {
        "year": 1961, "month": 1, "day": 5, "gender": "female",
    }


# ─── decode errors ───────────────────────────────────────────────

@pytest.mark.parametrize("code", [
    "610105750", "61010575091", "61010a7509", " 6101057509", "6101057509 ",
    "٦١٠١٠٥٧٥٠٩",
])
def test_decode_rejects_malformed_input(code):
    with pytest.raises(MalformedInputError):
        codec.decode(code)


@pytest.mark.parametrize("encoded_month", ["00", "13", "20", "33", "40", "53", "99"])
def test_decode_rejects_month_outside_bands(encoded_month, with_checksum):
    code = with_checksum(f"61{encoded_month}05750")
    with pytest.raises(InvalidMonthEncodingError):
        codec.decode(code)


def test_decode_rejects_invalid_calendar_date(with_checksum):
    with pytest.raises(InvalidDateError):
        codec.decode(with_checksum("000229000"))  # 1900 is not a leap year


def test_decode_accepts_leap_day_in_2000(with_checksum):
    parsed = codec.decode(with_checksum("002229000"))
    assert (parsed.year, parsed.month, parsed.day) == (2000, 2, 29)


def test_decode_rejects_day_zero(with_checksum):
    with pytest.raises(InvalidDateError):
        codec.decode(with_checksum("610100750"))


def test_decode_reports_checksum_mismatch():
    with pytest.raises(ChecksumMismatchError) as exc_info:
        codec.decode("6101057508")
    assert exc_info.value.expected == 9
    assert "610105****" in exc_info.value.message


def test_all_decode_errors_share_base():
    for cls in (MalformedInputError, InvalidMonthEncodingError,
                InvalidDateError, ChecksumMismatchError):
        assert issubclass(cls, DecodeError)


# ─── checksum ────────────────────────────────────────────────────

def test_checksum_of_known_code():
    assert codec.calculate_checksum("610105750") == 9


def test_checksum_remainder_ten_maps_to_zero():
    # weighted sum of 870226078 is 197, 197 % 11 == 10
    assert codec.calculate_checksum("870226078") == 0


def test_checksum_uses_only_first_nine_digits():
    assert codec.calculate_checksum("6101057509") == codec.calculate_checksum("610105750")


def test_checksum_rejects_short_input():
    with pytest.raises(MalformedInputError):
        codec.calculate_checksum("12345678")


def test_checksum_reproduces_tenth_digit_of_generated_codes():
    generator = EgnGenerator(rng=random.Random(1234))
    for code in generator.generate(300):
        assert codec.calculate_checksum(code[:9]) == int(code[9])


# ─── century mapping ─────────────────────────────────────────────

@pytest.mark.parametrize("year,month,expected", [
    (1800, 1, 41), (1899, 12, 52),
    (1900, 1, 1), (1999, 12, 12),
    (2000, 1, 21), (2099, 12, 32),
])
def test_encode_month_bands(year, month, expected):
    assert codec.encode_month(year, month) == expected


@pytest.mark.parametrize("year", [1799, 2100, 0])
def test_encode_month_rejects_unsupported_year(year):
    with pytest.raises(InvalidOptionError):
        codec.encode_month(year, 1)


def test_encode_month_rejects_bad_month():
    with pytest.raises(InvalidOptionError):
        codec.encode_month(1950, 13)


@pytest.mark.parametrize("yy,encoded,expected", [
    (61, 1, (1961, 1)),
    (5, 21, (2005, 1)),
    (99, 32, (2099, 12)),
    (50, 52, (1850, 12)),
    (0, 41, (1800, 1)),
])
def test_decode_month_bands(yy, encoded, expected):
    assert codec.decode_month(yy, encoded) == expected


def test_encode_date_prefix_round_trips():
    from datetime import date

    assert codec.encode_date_prefix(date(1987, 2, 26)) == "870226"
    assert codec.encode_date_prefix(date(2005, 7, 3)) == "052703"
    assert codec.encode_date_prefix(date(1850, 6, 15)) == "504615"
