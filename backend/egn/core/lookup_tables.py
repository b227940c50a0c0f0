"""Lookup Tables - locale-keyed static data for details resolution.

Invariants:
    - REGIONS upper bounds strictly increase and end at 999 (total partition of 0..999)
    - ZODIAC has 12 entries covering every (month, day) exactly once;
      Capricorn is the only entry with start > end (wraps December -> January)
    - Every table has an entry for every Locale member
    - All tables are pure data; lookups are pure functions

Design Decisions:
    - Region lookup by bisect over the sorted upper bounds; the result is the same
      as a linear scan for "first bound >= serial"
    - MappingProxyType keeps module-level tables read-only for concurrent readers
"""

from bisect import bisect_left
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Mapping

from egn.core.domain_types import Gender, Locale

SERIAL_MAX: int = 999


@dataclass(frozen=True)
class RegionEntry:
    """Region whose serials end at `upper_bound` (inclusive)."""
    upper_bound: int
    names: Mapping[Locale, str]


@dataclass(frozen=True)
class RegionMatch:
    """A resolved region plus its inclusive serial range."""
    entry: RegionEntry
    range_start: int
    range_end: int


@dataclass(frozen=True)
class ZodiacEntry:
    """Sign spanning start..end, both as MM-DD keys."""
    start: str
    end: str
    names: Mapping[Locale, str]
    range_labels: Mapping[Locale, str]

    @property
    def wraps_year_end(self) -> bool:
        return self.start > self.end

    def contains(self, month_day: str) -> bool:
        if self.wraps_year_end:
            return month_day >= self.start or month_day <= self.end
        return self.start <= month_day <= self.end


def _names(bg: str, en: str) -> Mapping[Locale, str]:
    return MappingProxyType({Locale.BG: bg, Locale.EN: en})


# --- Regions (serial digits 7-9) ----------------------------------------------

REGIONS: tuple[RegionEntry, ...] = (
    RegionEntry(43, _names("Благоевград", "Blagoevgrad")),
    RegionEntry(93, _names("Бургас", "Burgas")),
    RegionEntry(139, _names("Варна", "Varna")),
    RegionEntry(169, _names("Велико Търново", "Veliko Tarnovo")),
    RegionEntry(183, _names("Видин", "Vidin")),
    RegionEntry(217, _names("Враца", "Vratsa")),
    RegionEntry(233, _names("Габрово", "Gabrovo")),
    RegionEntry(281, _names("Кърджали", "Kardzhali")),
    RegionEntry(301, _names("Кюстендил", "Kyustendil")),
    RegionEntry(319, _names("Ловеч", "Lovech")),
    RegionEntry(341, _names("Монтана", "Montana")),
    RegionEntry(377, _names("Пазарджик", "Pazardzhik")),
    RegionEntry(395, _names("Перник", "Pernik")),
    RegionEntry(435, _names("Плевен", "Pleven")),
    RegionEntry(501, _names("Пловдив", "Plovdiv")),
    RegionEntry(527, _names("Разград", "Razgrad")),
    RegionEntry(555, _names("Русе", "Ruse")),
    RegionEntry(575, _names("Силистра", "Silistra")),
    RegionEntry(601, _names("Сливен", "Sliven")),
    RegionEntry(623, _names("Смолян", "Smolyan")),
    RegionEntry(721, _names("София - град", "Sofia City")),
    RegionEntry(751, _names("София - окръг", "Sofia District")),
    RegionEntry(789, _names("Стара Загора", "Stara Zagora")),
    RegionEntry(821, _names("Добрич (Толбухин)", "Dobrich (Tolbukhin)")),
    RegionEntry(843, _names("Търговище", "Targovishte")),
    RegionEntry(871, _names("Хасково", "Haskovo")),
    RegionEntry(903, _names("Шумен", "Shumen")),
    RegionEntry(925, _names("Ямбол", "Yambol")),
    RegionEntry(999, _names("Друг/Неизвестен", "Other/Unknown")),
)

_REGION_BOUNDS: tuple[int, ...] = tuple(r.upper_bound for r in REGIONS)


# --- Calendar names -----------------------------------------------------------

_MONTHS: Mapping[Locale, tuple[str, ...]] = MappingProxyType({
    Locale.BG: (
        "януари", "февруари", "март", "април", "май", "юни",
        "юли", "август", "септември", "октомври", "ноември", "декември",
    ),
    Locale.EN: (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
})

# Indexed by date.weekday(): Monday == 0
_WEEKDAYS: Mapping[Locale, tuple[str, ...]] = MappingProxyType({
    Locale.BG: (
        "понеделник", "вторник", "сряда", "четвъртък",
        "петък", "събота", "неделя",
    ),
    Locale.EN: (
        "Monday", "Tuesday", "Wednesday", "Thursday",
        "Friday", "Saturday", "Sunday",
    ),
})

_GENDER_LABELS: Mapping[Locale, Mapping[Gender, str]] = MappingProxyType({
    Locale.BG: MappingProxyType({Gender.MALE: "мъж", Gender.FEMALE: "жена"}),
    Locale.EN: MappingProxyType({Gender.MALE: "male", Gender.FEMALE: "female"}),
})

_DATE_TEMPLATE: Mapping[Locale, str] = MappingProxyType({
    Locale.BG: "{day} {month} {year} г. ({weekday}) ({iso})",
    Locale.EN: "{day} {month} {year} ({weekday}) ({iso})",
})


# --- Zodiac -------------------------------------------------------------------

ZODIAC: tuple[ZodiacEntry, ...] = (
    ZodiacEntry("03-21", "04-19", _names("Овен", "Aries"),
                _names("21 март - 19 април", "21 March - 19 April")),
    ZodiacEntry("04-20", "05-20", _names("Телец", "Taurus"),
                _names("20 април - 20 май", "20 April - 20 May")),
    ZodiacEntry("05-21", "06-20", _names("Близнаци", "Gemini"),
                _names("21 май - 20 юни", "21 May - 20 June")),
    ZodiacEntry("06-21", "07-22", _names("Рак", "Cancer"),
                _names("21 юни - 22 юли", "21 June - 22 July")),
    ZodiacEntry("07-23", "08-22", _names("Лъв", "Leo"),
                _names("23 юли - 22 август", "23 July - 22 August")),
    ZodiacEntry("08-23", "09-22", _names("Дева", "Virgo"),
                _names("23 август - 22 септември", "23 August - 22 September")),
    ZodiacEntry("09-23", "10-22", _names("Везни", "Libra"),
                _names("23 септември - 22 октомври", "23 September - 22 October")),
    ZodiacEntry("10-23", "11-21", _names("Скорпион", "Scorpio"),
                _names("23 октомври - 21 ноември", "23 October - 21 November")),
    ZodiacEntry("11-22", "12-21", _names("Стрелец", "Sagittarius"),
                _names("22 ноември - 21 декември", "22 November - 21 December")),
    ZodiacEntry("12-22", "01-19", _names("Козирог", "Capricorn"),
                _names("22 декември - 19 януари", "22 December - 19 January")),
    ZodiacEntry("01-20", "02-18", _names("Водолей", "Aquarius"),
                _names("20 януари - 18 февруари", "20 January - 18 February")),
    ZodiacEntry("02-19", "03-20", _names("Риби", "Pisces"),
                _names("19 февруари - 20 март", "19 February - 20 March")),
)


# --- Public API ---------------------------------------------------------------


def find_region(serial: int) -> RegionMatch:
    """First region whose upper bound is >= serial, with its inclusive range."""
    if not 0 <= serial <= SERIAL_MAX:
        raise ValueError(f"Serial must be in range 0..{SERIAL_MAX}, got {serial}.")
    index = bisect_left(_REGION_BOUNDS, serial)
    range_start = _REGION_BOUNDS[index - 1] + 1 if index else 0
    return RegionMatch(REGIONS[index], range_start, REGIONS[index].upper_bound)


def find_zodiac(month: int, day: int) -> ZodiacEntry:
    """The sign whose MM-DD interval contains (month, day)."""
    month_day = f"{month:02d}-{day:02d}"
    for entry in ZODIAC:
        if entry.contains(month_day):
            return entry
    raise ValueError(f"No zodiac sign covers {month_day}.")


def month_name(locale: Locale, month: int) -> str:
    return _MONTHS[locale][month - 1]


def weekday_name(locale: Locale, day: date) -> str:
    return _WEEKDAYS[locale][day.weekday()]


def gender_label(locale: Locale, gender: Gender) -> str:
    return _GENDER_LABELS[locale][gender]


def format_birth_date(locale: Locale, day: date) -> str:
    """Localized long form, e.g. '26 February 1987 (Thursday) (1987-02-26)'."""
    return _DATE_TEMPLATE[locale].format(
        day=day.day,
        month=month_name(locale, day.month),
        year=day.year,
        weekday=weekday_name(locale, day),
        iso=day.isoformat(),
    )
