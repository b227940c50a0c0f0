"""Error Hierarchy - typed, categorized exceptions for all EGN failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Decode errors (malformed, month band, date, checksum) share DecodeError so
      parse() and details() can reduce them to None in one place
    - Caller-contract errors (options, format) also subclass ValueError
    - to_response() produces the REST envelope used by the API layer
    - No full EGN is echoed back in messages (masked to the date prefix)

Design Decisions:
    - Single hierarchy with EgnError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    option: str | None = None
    locale: str | None = None
    attempts: int | None = None
    debug_info: dict[str, Any] | None = None


def mask_egn(code: str) -> str:
    """Keep the date prefix, hide the serial and check digit."""
    if len(code) <= 6:
        return code
    return code[:6] + "*" * (len(code) - 6)


class EgnError(Exception):
    """Base exception for all EGN errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 400,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "option": self.context.option,
                    "locale": self.context.locale,
                    "attempts": self.context.attempts,
                },
            }
        }


# ─── Decode Errors ──────────────────────────────────────────────

class DecodeError(EgnError):
    """The digits do not form a valid EGN."""


class MalformedInputError(DecodeError):
    """Input is not exactly the expected number of ASCII digits."""
    def __init__(self, message: str = "EGN must be exactly 10 digits.",
                 context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidMonthEncodingError(DecodeError):
    """Month digits fall outside every century band."""
    def __init__(self, encoded_month: int, context: ErrorContext | None = None):
        super().__init__(
            f"Encoded month {encoded_month:02d} is outside 01-12, 21-32 and 41-52.",
            "INVALID_MONTH_ENCODING", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.encoded_month = encoded_month


class InvalidDateError(DecodeError):
    """Decoded year/month/day is not a calendar date."""
    def __init__(self, year: int, month: int, day: int,
                 context: ErrorContext | None = None):
        super().__init__(
            f"{year:04d}-{month:02d}-{day:02d} is not a valid calendar date.",
            "INVALID_DATE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.year = year
        self.month = month
        self.day = day


class ChecksumMismatchError(DecodeError):
    """Tenth digit does not match the weighted checksum."""
    def __init__(self, code: str, expected: int, context: ErrorContext | None = None):
        super().__init__(
            f"Checksum mismatch for {mask_egn(code)}: expected {expected}.",
            "CHECKSUM_MISMATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.expected = expected


# ─── Caller Contract Errors ─────────────────────────────────────

class InvalidOptionError(EgnError, ValueError):
    """Generation option or configuration value out of range or malformed."""
    def __init__(self, message: str, option: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.option = option
        super().__init__(
            message, "INVALID_OPTION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.option = option


class UnsatisfiableConstraintError(EgnError, ValueError):
    """Requested date constraints admit no calendar date in the year range."""
    def __init__(self, message: str, attempts: int | None = None,
                 context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.attempts = attempts
        super().__init__(
            message, "UNSATISFIABLE_CONSTRAINT", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )


class UnknownFormatError(EgnError, ValueError):
    """Details requested in a format that has no renderer."""
    def __init__(self, requested: str, supported: list[str],
                 context: ErrorContext | None = None):
        super().__init__(
            f"Format must be one of: {'|'.join(supported)}. Got '{requested}'.",
            "UNKNOWN_FORMAT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.requested = requested


# ─── Shell Errors ───────────────────────────────────────────────

class InvalidEgnError(EgnError):
    """A lookup route received a code that is not a valid EGN."""
    def __init__(self, code: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{mask_egn(code)}' is not a valid Bulgarian EGN.",
            "INVALID_EGN", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
