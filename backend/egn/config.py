"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Year range bounded to 1800..2099 and ordered, checked at load time
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - EGN_ env prefix with .env file support
    - Defaults cover every setting; no variable is required
"""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from egn.core.domain_types import (
    Locale, YearRange, MIN_SUPPORTED_YEAR, MAX_SUPPORTED_YEAR,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EGN_", env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Generation year range
    start_year: int = Field(MIN_SUPPORTED_YEAR, ge=MIN_SUPPORTED_YEAR, le=MAX_SUPPORTED_YEAR)
    end_year: int = Field(MAX_SUPPORTED_YEAR, ge=MIN_SUPPORTED_YEAR, le=MAX_SUPPORTED_YEAR)

    # Details
    default_locale: Locale = Locale.BG

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    max_generate_count: int = Field(1000, ge=1)

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("default_locale", mode="before")
    @classmethod
    def lowercase_locale(cls, v: object) -> object:
        """EGN_DEFAULT_LOCALE=EN and en-US both mean en."""
        if isinstance(v, str):
            return v.strip()[:2].lower()
        return v

    @model_validator(mode="after")
    def check_year_order(self) -> "Settings":
        if self.start_year > self.end_year:
            raise ValueError(
                f"Invalid EGN year range configuration: "
                f"start_year {self.start_year} > end_year {self.end_year}",
            )
        return self

    @property
    def year_range(self) -> YearRange:
        return YearRange(self.start_year, self.end_year)


@lru_cache
def get_settings() -> Settings:
    return Settings()
