"""EGN Routes - validate, parse, details and generate over HTTP.

Invariants:
    - POST /validate answers valid=false for bad codes; it never errors on them
    - GET /{egn} and /{egn}/details raise InvalidEgnError (404) for bad codes
    - Details locale: ?locale=, then Accept-Language, then configured default
    - Routes hold no business logic; everything delegates to EgnService
"""

import logging
from types import SimpleNamespace

from fastapi import APIRouter, Depends, Header, Query

from egn.config import get_settings
from egn.core.domain_types import DetailsFormat
from egn.core.errors import InvalidEgnError, InvalidOptionError
from egn.schemas.egn import (
    DetailsResponse,
    GenerateRequest,
    GenerateResponse,
    ParsedEgnResponse,
    ValidateRequest,
    ValidateResponse,
)
from egn.services.egn_service import EgnService, get_egn_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/egn", tags=["egn"])


def preferred_language(header: str | None) -> str | None:
    """Highest-weighted tag of an Accept-Language header."""
    if not header:
        return None
    ranked: list[tuple[float, int, str]] = []
    for position, part in enumerate(header.split(",")):
        tag, _, params = part.strip().partition(";")
        if not tag or tag == "*":
            continue
        weight = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                weight = float(params[2:])
            except ValueError:
                weight = 0.0
        ranked.append((-weight, position, tag.strip()))
    if not ranked:
        return None
    return min(ranked)[2]


@router.post("/validate", response_model=ValidateResponse)
async def validate_egn(
    body: ValidateRequest, service: EgnService = Depends(get_egn_service),
):
    """Check an EGN; invalid input is ordinary data here."""
    return ValidateResponse(egn=body.egn, valid=service.validate(body.egn))


@router.post("/generate", response_model=GenerateResponse)
async def generate_egns(
    body: GenerateRequest, service: EgnService = Depends(get_egn_service),
):
    """Generate `count` EGNs matching the optional constraints."""
    limit = get_settings().max_generate_count
    if body.count > limit:
        raise InvalidOptionError(f"Count must be <= {limit}.", option="count")
    return GenerateResponse(egns=service.generate(body.count, body.to_options()))


@router.get("/{egn}", response_model=ParsedEgnResponse)
async def parse_egn(egn: str, service: EgnService = Depends(get_egn_service)):
    """Decoded birth date and gender."""
    parsed = service.parse(egn)
    if parsed is None:
        raise InvalidEgnError(egn)
    return ParsedEgnResponse(egn=egn, **parsed.to_dict())


@router.get("/{egn}/details", response_model=DetailsResponse)
async def egn_details(
    egn: str,
    locale: str | None = Query(None, max_length=35),
    format: str = Query(DetailsFormat.PLAIN.value, max_length=16),
    accept_language: str | None = Header(None),
    service: EgnService = Depends(get_egn_service),
):
    """Localized region, zodiac, birth order and formatted birth date."""
    details = service.details(
        egn,
        format=format,
        locale=locale,
        locale_provider=lambda: preferred_language(accept_language),
    )
    if details is None:
        raise InvalidEgnError(egn)
    if isinstance(details, SimpleNamespace):
        details = _namespace_to_dict(details)
    return DetailsResponse.model_validate(details)


def _namespace_to_dict(value):
    if isinstance(value, SimpleNamespace):
        return {k: _namespace_to_dict(v) for k, v in vars(value).items()}
    return value
