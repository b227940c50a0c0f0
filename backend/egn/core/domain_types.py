"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - EgnCode wraps str; only the codec and generator produce one
    - YearRange is bounded 1800..2099 and ordered (start <= end)
    - All closed value sets encoded as str Enums, no raw string matching

Design Decisions:
    - NewType for EgnCode: zero runtime cost, full type-checker support
    - str Enums serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import NewType

from egn.core.errors import InvalidOptionError


# ─── Identity Types ──────────────────────────────────────────────

EgnCode = NewType("EgnCode", str)       # exactly 10 ASCII digits


# ─── Constants ───────────────────────────────────────────────────

MIN_SUPPORTED_YEAR: int = 1800
MAX_SUPPORTED_YEAR: int = 2099


# ─── Enums ───────────────────────────────────────────────────────

class Gender(str, Enum):
    """Gender encoded by the parity of the ninth digit."""
    FEMALE = "female"
    MALE = "male"


class Locale(str, Enum):
    """Locales with bundled lookup tables. BG is the fallback."""
    BG = "bg"
    EN = "en"


DEFAULT_LOCALE: Locale = Locale.BG


class DetailsFormat(str, Enum):
    """Shapes the details mapping can be rendered as."""
    PLAIN = "plain"
    ORDERED = "ordered"
    OBJECT = "object"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class YearRange:
    """Inclusive range of birth years the generator may produce."""

    start_year: int = MIN_SUPPORTED_YEAR
    end_year: int = MAX_SUPPORTED_YEAR

    def __post_init__(self):
        if self.start_year > self.end_year:
            raise InvalidOptionError(
                f"Invalid EGN year range configuration: "
                f"start_year {self.start_year} > end_year {self.end_year}.",
                option="start_year",
            )
        if self.start_year < MIN_SUPPORTED_YEAR or self.end_year > MAX_SUPPORTED_YEAR:
            raise InvalidOptionError(
                f"EGN year range must lie within "
                f"{MIN_SUPPORTED_YEAR}..{MAX_SUPPORTED_YEAR}.",
                option="end_year" if self.end_year > MAX_SUPPORTED_YEAR else "start_year",
            )

    def __contains__(self, year: object) -> bool:
        return isinstance(year, int) and self.start_year <= year <= self.end_year

    @property
    def first_day(self) -> date:
        return date(self.start_year, 1, 1)

    @property
    def last_day(self) -> date:
        return date(self.end_year, 12, 31)


@dataclass(frozen=True)
class ParsedEgn:
    """Birth date and gender decoded from a valid EGN."""

    year: int
    month: int
    day: int
    gender: Gender

    @property
    def birth_date(self) -> date:
        return date(self.year, self.month, self.day)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "gender": self.gender.value,
        }
