"""EGN Service - the public facade over codec, generator and details resolver.

Invariants:
    - validate() never raises; parse() and details() return None for invalid codes
    - Generation errors always propagate (caller contract violations)
    - Year range checked once, at construction
    - year_range always equals the generator's range

Design Decisions:
    - One service per configuration; get_egn_service() caches the settings-built one
    - locale_provider/clock passed per call or per service, never read from globals
"""

import logging
from datetime import date
from functools import lru_cache
from typing import Any, Mapping

from egn.config import Settings, get_settings
from egn.core import codec
from egn.core.details import DetailsResolver
from egn.core.domain_types import (
    DEFAULT_LOCALE, DetailsFormat, EgnCode, Locale, ParsedEgn, YearRange,
)
from egn.core.errors import InvalidOptionError
from egn.core.generator import EgnGenerator, GenerationOptions
from egn.core.protocols import Clock, LocaleProvider

logger = logging.getLogger(__name__)

Options = GenerationOptions | Mapping[str, Any] | None


class EgnService:
    """Validate, parse, enrich and generate Bulgarian EGNs."""

    def __init__(
        self,
        year_range: YearRange | None = None,
        default_locale: Locale = DEFAULT_LOCALE,
        locale_provider: LocaleProvider | None = None,
        generator: EgnGenerator | None = None,
        clock: Clock = date.today,
    ):
        if generator is None:
            generator = EgnGenerator(year_range or YearRange())
        elif year_range is not None and year_range != generator.year_range:
            raise InvalidOptionError(
                f"year_range {year_range.start_year}..{year_range.end_year} "
                f"conflicts with the generator's "
                f"{generator.year_range.start_year}..{generator.year_range.end_year}.",
                option="year_range",
            )
        self.generator = generator
        self.year_range = generator.year_range
        self.resolver = DetailsResolver(
            locale_provider=locale_provider,
            default_locale=default_locale,
            clock=clock,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "EgnService":
        return cls(
            year_range=settings.year_range,
            default_locale=settings.default_locale,
            **kwargs,
        )

    def validate(self, code: str) -> bool:
        return codec.is_valid(code)

    def parse(self, code: str) -> ParsedEgn | None:
        """Parsed birth date and gender if `code` is valid."""
        return codec.parse(code)

    def details(
        self,
        code: str,
        format: DetailsFormat | str = DetailsFormat.PLAIN,
        locale: str | Locale | None = None,
        today: date | None = None,
        locale_provider: LocaleProvider | None = None,
    ) -> Any:
        """Rich details as dict, OrderedDict or SimpleNamespace; None if invalid.

        `locale_provider` overrides the service-level provider for this call
        only (the API passes the request's Accept-Language this way).
        """
        resolver = self.resolver
        if locale_provider is not None:
            resolver = DetailsResolver(
                locale_provider=locale_provider,
                default_locale=resolver.default_locale,
                clock=resolver.clock,
            )
        return resolver.resolve(code, format=format, locale=locale, today=today)

    def generate_one(self, options: Options = None) -> EgnCode:
        return self.generator.generate_one(options)

    def generate(self, count: int = 1, options: Options = None) -> list[EgnCode]:
        codes = self.generator.generate(count, options)
        logger.info("Generated EGNs", extra={"count": len(codes)})
        return codes


@lru_cache
def get_egn_service() -> EgnService:
    """Process-wide service built from environment settings."""
    return EgnService.from_settings(get_settings())
