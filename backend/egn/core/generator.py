"""EGN Generator - builds valid codes that satisfy caller constraints.

Invariants:
    - Every returned code passes codec.is_valid()
    - exact_date wins over year/month/day and must fall inside the YearRange
    - Partial dates are sampled at most MAX_DATE_ATTEMPTS times, so generation
      always terminates
    - A fully pinned year+month+day that is not a calendar date fails at once
    - Serial = region * 10 + last digit; last digit parity encodes gender
    - Calls share no mutable state; each one draws only from the injected rng

Design Decisions:
    - rng defaults to random.SystemRandom: OS entropy, no seedable global state
      shared between threads
    - Tests inject random.Random(seed) for reproducible sequences
"""

import calendar
import logging
import random
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Mapping

from egn.core import codec
from egn.core.domain_types import EgnCode, Gender, YearRange
from egn.core.errors import InvalidOptionError, UnsatisfiableConstraintError

logger = logging.getLogger(__name__)

MAX_DATE_ATTEMPTS: int = 1000
REGION_MAX: int = 99

_GENDER_ALIASES: dict[str, Gender] = {
    "male": Gender.MALE,
    "m": Gender.MALE,
    "female": Gender.FEMALE,
    "f": Gender.FEMALE,
}


@dataclass(frozen=True)
class GenerationOptions:
    """Constraints for one generated code. Unset fields mean "any"."""

    exact_date: date | str | None = None
    year: int | str | None = None
    month: int | str | None = None
    day: int | str | None = None
    gender: Gender | str | None = None
    region: int | str | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "GenerationOptions":
        """Build from a plain mapping; accepts `date` as an alias of `exact_date`."""
        if not options:
            return cls()
        unknown = set(options) - {
            "date", "exact_date", "year", "month", "day", "gender", "region",
        }
        if unknown:
            raise InvalidOptionError(
                f"Unknown generation option(s): {', '.join(sorted(unknown))}.",
                option=sorted(unknown)[0],
            )
        exact = options.get("exact_date")
        if exact is None:
            exact = options.get("date")
        return cls(
            exact_date=exact,
            year=options.get("year"),
            month=options.get("month"),
            day=options.get("day"),
            gender=options.get("gender"),
            region=options.get("region"),
        )


# --- Option normalization -----------------------------------------------------


def _is_unset(value: object) -> bool:
    return value is None or value == ""


def normalize_int(value: object, option: str) -> int | None:
    """Integer option from int or ASCII digit string; None/"" mean unset."""
    if _is_unset(value):
        return None
    if isinstance(value, bool):
        raise InvalidOptionError(f'Option "{option}" must be an integer.', option=option)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    raise InvalidOptionError(f'Option "{option}" must be an integer.', option=option)


def normalize_date(value: object) -> date | None:
    """Exact birth date from date, datetime or ISO 8601 string."""
    if _is_unset(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise InvalidOptionError(
                f'Option "date" is not an ISO 8601 date: {value!r}.', option="date",
            ) from None
    raise InvalidOptionError(
        'Option "date" must be a date, datetime, ISO string or None.', option="date",
    )


def normalize_gender(value: object) -> Gender | None:
    if _is_unset(value):
        return None
    if isinstance(value, Gender):
        return value
    if not isinstance(value, str):
        raise InvalidOptionError(
            'Option "gender" must be string male|female|m|f.', option="gender",
        )
    gender = _GENDER_ALIASES.get(value.strip().lower())
    if gender is None:
        raise InvalidOptionError(
            'Option "gender" must be male|female|m|f.', option="gender",
        )
    return gender


def normalize_region(value: object) -> int | None:
    region = normalize_int(value, "region")
    if region is not None and not 0 <= region <= REGION_MAX:
        raise InvalidOptionError(
            f'Option "region" must be in range 0..{REGION_MAX}.', option="region",
        )
    return region


# --- Generator ----------------------------------------------------------------


class EgnGenerator:
    """Produces random valid EGNs inside a configured year range."""

    def __init__(self, year_range: YearRange | None = None,
                 rng: random.Random | None = None):
        self.year_range = year_range or YearRange()
        self._rng = rng or random.SystemRandom()

    def generate(self, count: int = 1,
                 options: GenerationOptions | Mapping[str, Any] | None = None,
                 ) -> list[EgnCode]:
        """`count` independent codes; duplicates are possible."""
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise InvalidOptionError("Count must be >= 1.", option="count")
        opts = self._coerce_options(options)
        return [self.generate_one(opts) for _ in range(count)]

    def generate_one(self,
                     options: GenerationOptions | Mapping[str, Any] | None = None,
                     ) -> EgnCode:
        opts = self._coerce_options(options)
        birth_date = self.pick_date(opts)
        gender = normalize_gender(opts.gender)
        region = normalize_region(opts.region)

        nine = codec.encode_date_prefix(birth_date) + f"{self._serial(gender, region):03d}"
        return codec.append_checksum(nine)

    @staticmethod
    def _coerce_options(options) -> GenerationOptions:
        if isinstance(options, GenerationOptions):
            return options
        return GenerationOptions.from_mapping(options)

    # --- date resolution ------------------------------------------------------

    def pick_date(self, options: GenerationOptions) -> date:
        """Resolve options to one concrete birth date."""
        start, end = self.year_range.start_year, self.year_range.end_year

        exact = normalize_date(options.exact_date)
        if exact is not None:
            if exact.year not in self.year_range:
                raise InvalidOptionError(
                    f"Year must be in range {start}..{end}.", option="date",
                )
            return exact

        year = normalize_int(options.year, "year")
        month = normalize_int(options.month, "month")
        day = normalize_int(options.day, "day")

        if year is not None and year not in self.year_range:
            raise InvalidOptionError(
                f'Option "year" must be in range {start}..{end}.', option="year",
            )
        if month is not None and not 1 <= month <= 12:
            raise InvalidOptionError('Option "month" must be in range 1..12.', option="month")
        if day is not None and not 1 <= day <= 31:
            raise InvalidOptionError('Option "day" must be in range 1..31.', option="day")

        if year is None and month is None and day is None:
            return self.random_date()
        return self._random_date_with_parts(year, month, day)

    def random_date(self) -> date:
        """Uniform draw over every day of the year range."""
        first, last = self.year_range.first_day, self.year_range.last_day
        offset = self._rng.randint(0, (last - first).days)
        return first + timedelta(days=offset)

    def _random_date_with_parts(self, year: int | None, month: int | None,
                                day: int | None) -> date:
        if (day is not None and month is not None and year is None
                and not self._year_exists_for(month, day)):
            raise UnsatisfiableConstraintError(
                "No valid date can be generated with the provided month/day "
                "in configured year range.",
            )

        start, end = self.year_range.start_year, self.year_range.end_year
        for attempt in range(1, MAX_DATE_ATTEMPTS + 1):
            candidate_year = year if year is not None else self._rng.randint(start, end)
            candidate_month = month if month is not None else self._rng.randint(1, 12)
            max_day = calendar.monthrange(candidate_year, candidate_month)[1]

            if day is not None and day > max_day:
                if year is not None and month is not None:
                    raise UnsatisfiableConstraintError(
                        "Invalid day for the provided year/month.", attempts=attempt,
                    )
                continue

            candidate_day = day if day is not None else self._rng.randint(1, max_day)
            if attempt > 1:
                logger.debug(
                    "Date constraints satisfied after sampling",
                    extra={"attempts": attempt},
                )
            return date(candidate_year, candidate_month, candidate_day)

        raise UnsatisfiableConstraintError(
            "Could not build valid date from provided options.",
            attempts=MAX_DATE_ATTEMPTS,
        )

    def _year_exists_for(self, month: int, day: int) -> bool:
        return any(
            day <= calendar.monthrange(y, month)[1]
            for y in range(self.year_range.start_year, self.year_range.end_year + 1)
        )

    # --- serial ---------------------------------------------------------------

    def _serial(self, gender: Gender | None, region: int | None) -> int:
        base = region if region is not None else self._rng.randint(0, REGION_MAX)
        if gender is Gender.MALE:
            last_digit = self._rng.randint(0, 4) * 2 + 1
        elif gender is Gender.FEMALE:
            last_digit = self._rng.randint(0, 4) * 2
        else:
            last_digit = self._rng.randint(0, 9)
        return base * 10 + last_digit
