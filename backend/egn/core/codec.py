"""EGN Codec - parse, validate, checksum and century month mapping.

Invariants:
    - decode() raises a DecodeError subclass; parse() and is_valid() never raise
    - calculate_checksum() is a pure function of the first nine digits
    - Remainder 10 maps to check digit 0 (an encoding rule, not a rejection)
    - Century bands: 01-12 -> 1900s, 21-32 -> 2000s, 41-52 -> 1800s

Design Decisions:
    - Only ASCII digits accepted: str.isdigit() also admits other Unicode digits
    - Century table held as data (_CENTURY_BANDS) and read in both directions
"""

from datetime import date

from egn.core.domain_types import (
    EgnCode, Gender, ParsedEgn, MIN_SUPPORTED_YEAR, MAX_SUPPORTED_YEAR,
)
from egn.core.errors import (
    DecodeError,
    MalformedInputError,
    InvalidMonthEncodingError,
    InvalidDateError,
    ChecksumMismatchError,
    InvalidOptionError,
)

EGN_LENGTH: int = 10
CHECKSUM_WEIGHTS: tuple[int, ...] = (2, 4, 8, 5, 10, 9, 7, 3, 6)

# (first year of century, month offset)
_CENTURY_BANDS: tuple[tuple[int, int], ...] = (
    (1900, 0),
    (2000, 20),
    (1800, 40),
)

_ASCII_DIGITS = frozenset("0123456789")


def _is_ascii_digits(value: str, length: int) -> bool:
    return len(value) == length and all(ch in _ASCII_DIGITS for ch in value)


def calculate_checksum(digits: str) -> int:
    """Weighted mod-11 check digit over the first nine digits of `digits`."""
    if not isinstance(digits, str) or not _is_ascii_digits(digits[:9], 9):
        raise MalformedInputError("Checksum needs at least nine leading digits.")
    total = sum(int(d) * w for d, w in zip(digits, CHECKSUM_WEIGHTS))
    remainder = total % 11
    return 0 if remainder == 10 else remainder


def encode_month(year: int, month: int) -> int:
    """Shift `month` into the band that encodes the century of `year`."""
    if not 1 <= month <= 12:
        raise InvalidOptionError("Month must be in range 1..12.", option="month")
    for century, offset in _CENTURY_BANDS:
        if century <= year <= century + 99:
            return month + offset
    raise InvalidOptionError(
        f"Year must be in range {MIN_SUPPORTED_YEAR}..{MAX_SUPPORTED_YEAR} for EGN.",
        option="year",
    )


def decode_month(yy: int, encoded_month: int) -> tuple[int, int]:
    """Recover (year, month) from the two-digit year and encoded month."""
    for century, offset in _CENTURY_BANDS:
        if offset + 1 <= encoded_month <= offset + 12:
            return century + yy, encoded_month - offset
    raise InvalidMonthEncodingError(encoded_month)


def encode_date_prefix(birth_date: date) -> str:
    """First six digits: yy, encoded month, day."""
    encoded_month = encode_month(birth_date.year, birth_date.month)
    return f"{birth_date.year % 100:02d}{encoded_month:02d}{birth_date.day:02d}"


def append_checksum(nine_digits: str) -> EgnCode:
    return EgnCode(nine_digits + str(calculate_checksum(nine_digits)))


def decode(code: str) -> ParsedEgn:
    """Parse `code` or raise the DecodeError that explains why it is invalid."""
    if not isinstance(code, str) or not _is_ascii_digits(code, EGN_LENGTH):
        raise MalformedInputError()

    year, month = decode_month(int(code[0:2]), int(code[2:4]))
    day = int(code[4:6])
    try:
        date(year, month, day)
    except ValueError:
        raise InvalidDateError(year, month, day) from None

    expected = calculate_checksum(code)
    if expected != int(code[9]):
        raise ChecksumMismatchError(code, expected)

    gender = Gender.MALE if int(code[8]) % 2 else Gender.FEMALE
    return ParsedEgn(year=year, month=month, day=day, gender=gender)


def parse(code: str) -> ParsedEgn | None:
    """Parsed birth date and gender, or None if `code` is not a valid EGN."""
    try:
        return decode(code)
    except DecodeError:
        return None


def is_valid(code: str) -> bool:
    return parse(code) is not None
