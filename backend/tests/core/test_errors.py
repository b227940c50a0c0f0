"""Error Hierarchy tests - codes, categories, envelopes and masking.

Tests cover:
    - Each error carries its code, category and HTTP status
    - Caller-contract errors are ValueErrors
    - to_response() envelope shape
    - EGNs masked in messages
"""

import pytest

from egn.core.errors import (
    ChecksumMismatchError,
    DecodeError,
    EgnError,
    ErrorCategory,
    InvalidDateError,
    InvalidEgnError,
    InvalidMonthEncodingError,
    InvalidOptionError,
    MalformedInputError,
    UnknownFormatError,
    UnsatisfiableConstraintError,
    mask_egn,
)


@pytest.mark.parametrize("error,code,status", [
    (MalformedInputError(), "MALFORMED_INPUT", 400),
    (InvalidMonthEncodingError(13), "INVALID_MONTH_ENCODING", 400),
    (InvalidDateError(1961, 2, 32), "INVALID_DATE", 400),
    (ChecksumMismatchError("6101057508", 9), "CHECKSUM_MISMATCH", 400),
    (InvalidOptionError("bad", option="month"), "INVALID_OPTION", 400),
    (UnsatisfiableConstraintError("none"), "UNSATISFIABLE_CONSTRAINT", 400),
    (UnknownFormatError("xml", ["plain"]), "UNKNOWN_FORMAT", 400),
    (InvalidEgnError("6101057508"), "INVALID_EGN", 404),
])
def test_error_codes_and_status(error, code, status):
    assert isinstance(error, EgnError)
    assert error.code == code
    assert error.http_status == status


def test_decode_errors_are_not_value_errors():
    assert not issubclass(DecodeError, ValueError)


def test_contract_errors_are_value_errors():
    for cls in (InvalidOptionError, UnsatisfiableConstraintError, UnknownFormatError):
        assert issubclass(cls, ValueError)


def test_unsatisfiable_is_business_rule():
    assert UnsatisfiableConstraintError("x").category is ErrorCategory.BUSINESS_RULE


def test_to_response_envelope():
    error = InvalidOptionError('Option "month" must be in range 1..12.', option="month")
    body = error.to_response()["error"]
    assert body["code"] == "INVALID_OPTION"
    assert body["category"] == "validation"
    assert body["severity"] == "error"
    assert body["context"]["option"] == "month"
    assert "timestamp" in body


def test_unsatisfiable_reports_attempts():
    error = UnsatisfiableConstraintError("gave up", attempts=1000)
    assert error.to_response()["error"]["context"]["attempts"] == 1000


def test_mask_egn_hides_serial():
    assert mask_egn("8702260780") == "870226****"
    assert mask_egn("123") == "123"


def test_invalid_egn_message_is_masked():
    assert "870226****" in InvalidEgnError("8702260781").message
    assert "8702260781" not in InvalidEgnError("8702260781").message


def test_month_encoding_message_is_zero_padded():
    assert "00" in InvalidMonthEncodingError(0).message
