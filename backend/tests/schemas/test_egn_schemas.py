"""EGN Schemas tests - EgnStr rule, generate request aliases, details model."""

from datetime import date

import pytest
from pydantic import BaseModel, TypeAdapter, ValidationError

from egn.core.details import DetailsResolver
from egn.schemas.egn import (
    EGN_RULE_MESSAGE, DetailsResponse, EgnStr, GenerateRequest, ParsedEgnResponse,
)


class _Person(BaseModel):
    egn: EgnStr


def test_egn_str_accepts_valid_code():
    assert TypeAdapter(EgnStr).validate_python("6101057509") == "6101057509"


@pytest.mark.parametrize("value", ["6101057508", "", "61010575090", "abcdefghij"])
def test_egn_str_rejects_invalid_code(value):
    with pytest.raises(ValidationError) as exc_info:
        TypeAdapter(EgnStr).validate_python(value)
    assert EGN_RULE_MESSAGE in str(exc_info.value)


def test_egn_str_composes_into_models():
    assert _Person(egn="8702260780").egn == "8702260780"
    with pytest.raises(ValidationError):
        _Person(egn="8702260781")


def test_parsed_response_rejects_invalid_egn():
    with pytest.raises(ValidationError):
        ParsedEgnResponse(egn="0000000000", year=1900, month=1, day=1, gender="male")


def test_generate_request_date_alias():
    request = GenerateRequest.model_validate({"date": "2004-02-29", "count": 3})
    assert request.exact_date == date(2004, 2, 29)
    assert request.to_options().exact_date == date(2004, 2, 29)


def test_generate_request_field_name_also_accepted():
    request = GenerateRequest(exact_date=date(2004, 2, 29))
    assert request.exact_date == date(2004, 2, 29)


def test_generate_request_defaults():
    request = GenerateRequest()
    assert request.count == 1
    options = request.to_options()
    assert (options.year, options.month, options.day) == (None, None, None)
    assert options.gender is None and options.region is None


def test_details_response_mirrors_canonical_mapping():
    details = DetailsResolver(clock=lambda: date(2026, 10, 19)).resolve("8702260780")
    model = DetailsResponse.model_validate(details)
    assert model.model_dump() == details
