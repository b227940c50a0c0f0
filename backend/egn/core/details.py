"""Details Resolver - derived, localized facts about a valid EGN.

Invariants:
    - resolve() returns None for any code the codec rejects; never raises for it
    - Unknown format raises UnknownFormatError (checked after the code parses)
    - Locale order: explicit argument, then injected provider, then default;
      unsupported tags fall back silently
    - One canonical OrderedDict is built; formats are projections of it
    - Output depends on the wall clock only through `age` (today is injectable)

Design Decisions:
    - Locale tags matched on their first two letters ("en-US" -> en)
    - object format projects to types.SimpleNamespace, keeping attribute access
      without tying core to a schema library
"""

import logging
from collections import OrderedDict
from datetime import date
from types import SimpleNamespace
from typing import Any

from egn.core import codec
from egn.core.domain_types import (
    DEFAULT_LOCALE, DetailsFormat, Locale, ParsedEgn,
)
from egn.core.errors import UnknownFormatError
from egn.core.lookup_tables import (
    find_region, find_zodiac, format_birth_date, gender_label, weekday_name,
)
from egn.core.protocols import Clock, LocaleProvider

logger = logging.getLogger(__name__)

_FORMAT_ALIASES: dict[str, DetailsFormat] = {
    "plain": DetailsFormat.PLAIN,
    "array": DetailsFormat.PLAIN,
    "dict": DetailsFormat.PLAIN,
    "ordered": DetailsFormat.ORDERED,
    "collection": DetailsFormat.ORDERED,
    "object": DetailsFormat.OBJECT,
}


def normalize_locale(tag: object) -> Locale | None:
    """Supported Locale for a tag like 'en', 'EN', 'en-US', 'bg_BG'; else None."""
    if isinstance(tag, Locale):
        return tag
    if not isinstance(tag, str) or not tag.strip():
        return None
    try:
        return Locale(tag.strip()[:2].lower())
    except ValueError:
        return None


def normalize_format(fmt: DetailsFormat | str) -> DetailsFormat:
    if isinstance(fmt, DetailsFormat):
        return fmt
    resolved = _FORMAT_ALIASES.get(str(fmt).strip().lower())
    if resolved is None:
        raise UnknownFormatError(str(fmt), [f.value for f in DetailsFormat])
    return resolved


def birth_order(serial: int, range_start: int, range_end: int) -> int:
    """1-based position of `serial` among same-parity serials in the range; 0 if outside."""
    parity = serial % 2
    first = range_start if range_start % 2 == parity else range_start + 1
    last = range_end if range_end % 2 == parity else range_end - 1
    if first > last or not first <= serial <= last:
        return 0
    return (serial - first) // 2 + 1


def age_on(birth_date: date, today: date) -> int:
    """Whole years elapsed from `birth_date` to `today`.

    A birth date after `today` is clamped to 0, not counted as the years
    remaining until birth.
    """
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return max(years, 0)


def render(details: OrderedDict, fmt: DetailsFormat) -> Any:
    """Project the canonical mapping into the requested shape."""
    if fmt is DetailsFormat.ORDERED:
        return details
    if fmt is DetailsFormat.OBJECT:
        return _to_namespace(details)
    return _to_plain(details)


def _to_plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _to_plain(v) for k, v in value.items()}
    return value


def _to_namespace(value: Any) -> Any:
    if isinstance(value, dict):
        return SimpleNamespace(**{k: _to_namespace(v) for k, v in value.items()})
    return value


class DetailsResolver:
    """Resolves region, zodiac, birth order and localized labels for an EGN."""

    def __init__(
        self,
        locale_provider: LocaleProvider | None = None,
        default_locale: Locale = DEFAULT_LOCALE,
        clock: Clock = date.today,
    ):
        self.locale_provider = locale_provider
        self.default_locale = default_locale
        self.clock = clock

    def resolve(
        self,
        code: str,
        format: DetailsFormat | str = DetailsFormat.PLAIN,
        locale: str | Locale | None = None,
        today: date | None = None,
    ) -> Any:
        """Details for `code` in `format`, or None if `code` is not a valid EGN."""
        parsed = codec.parse(code)
        if parsed is None:
            return None
        fmt = normalize_format(format)
        details = self.build(code, parsed, self.resolve_locale(locale), today)
        return render(details, fmt)

    def resolve_locale(self, locale: str | Locale | None = None) -> Locale:
        explicit = normalize_locale(locale)
        if explicit is not None:
            return explicit

        if self.locale_provider is not None:
            try:
                ambient = normalize_locale(self.locale_provider())
            except Exception:
                logger.warning("Locale provider failed, using default", exc_info=True)
                ambient = None
            if ambient is not None:
                return ambient

        logger.debug(
            "Falling back to default locale",
            extra={"locale": self.default_locale.value},
        )
        return self.default_locale

    def build(self, code: str, parsed: ParsedEgn, locale: Locale,
              today: date | None = None) -> OrderedDict:
        """Canonical ordered details mapping."""
        birth_date = parsed.birth_date
        serial = int(code[6:9])
        region = find_region(serial)
        zodiac = find_zodiac(parsed.month, parsed.day)
        zodiac_name = zodiac.names[locale]
        zodiac_range = zodiac.range_labels[locale]

        return OrderedDict([
            ("egn", code),
            ("valid", True),
            ("locale", locale.value),
            ("gender", gender_label(locale, parsed.gender)),
            ("gender_code", parsed.gender.value),
            ("birth_date", OrderedDict([
                ("iso", birth_date.isoformat()),
                ("year", parsed.year),
                ("month", parsed.month),
                ("day", parsed.day),
                ("weekday", weekday_name(locale, birth_date)),
                ("formatted", format_birth_date(locale, birth_date)),
            ])),
            ("age", age_on(birth_date, today or self.clock())),
            ("region", OrderedDict([
                ("code", serial),
                ("name", region.entry.names[locale]),
                ("range_start", region.range_start),
                ("range_end", region.range_end),
            ])),
            ("birth_order", birth_order(serial, region.range_start, region.range_end)),
            ("zodiac", OrderedDict([
                ("name", zodiac_name),
                ("range", zodiac_range),
                ("label", f"{zodiac_name} ({zodiac_range})"),
            ])),
        ])
