"""EGN Schemas - Pydantic models and the EgnStr validation rule for API boundaries.

Invariants:
    - EgnStr accepts only codes the codec validates
    - Generation option ranges are checked by the core (InvalidOptionError),
      not duplicated here, so every option error has the same envelope
    - DetailsResponse mirrors the canonical details mapping key for key

Design Decisions:
    - Annotated type + AfterValidator: the rule composes into any model field
    - `date` exposed as an alias of exact_date; a field named `date` would
      shadow the datetime.date annotation inside the class body
"""

from datetime import date
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from egn.core import codec
from egn.core.generator import GenerationOptions

EGN_RULE_MESSAGE = "The value must be a valid Bulgarian EGN."


def _check_egn(value: str) -> str:
    if not codec.is_valid(value):
        raise ValueError(EGN_RULE_MESSAGE)
    return value


EgnStr = Annotated[str, AfterValidator(_check_egn)]


# --- Validate / parse ---------------------------------------------------------

class ValidateRequest(BaseModel):
    """Any string; invalid codes are answered with valid=false, not an error."""
    egn: str = Field(max_length=64)


class ValidateResponse(BaseModel):
    egn: str
    valid: bool


class ParsedEgnResponse(BaseModel):
    """Birth date and gender decoded from a valid EGN."""
    egn: EgnStr
    year: int
    month: int
    day: int
    gender: str


# --- Generate -----------------------------------------------------------------

class GenerateRequest(BaseModel):
    """Constraints for generated EGNs; every field optional."""
    model_config = ConfigDict(populate_by_name=True)

    count: int = 1
    exact_date: date | None = Field(None, alias="date")
    year: int | None = None
    month: int | None = None
    day: int | None = None
    gender: str | None = None
    region: int | None = None

    def to_options(self) -> GenerationOptions:
        return GenerationOptions(
            exact_date=self.exact_date,
            year=self.year,
            month=self.month,
            day=self.day,
            gender=self.gender,
            region=self.region,
        )


class GenerateResponse(BaseModel):
    egns: list[EgnStr]


# --- Details ------------------------------------------------------------------

class BirthDateDetails(BaseModel):
    iso: str
    year: int
    month: int
    day: int
    weekday: str
    formatted: str


class RegionDetails(BaseModel):
    code: int
    name: str
    range_start: int
    range_end: int


class ZodiacDetails(BaseModel):
    name: str
    range: str
    label: str


class DetailsResponse(BaseModel):
    """Localized details of a valid EGN."""
    egn: EgnStr
    valid: bool
    locale: str
    gender: str
    gender_code: str
    birth_date: BirthDateDetails
    age: int
    region: RegionDetails
    birth_order: int
    zodiac: ZodiacDetails
