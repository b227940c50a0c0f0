"""Error Handlers - global exception handlers for the EGN API.

Invariants:
    - EgnError → structured JSON with error code, message, severity
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details
    - Logged paths and messages carry EGNs masked to the date prefix

Design Decisions:
    - Three-layer handler: domain (EgnError), validation (Pydantic), catch-all (Exception)
"""

import logging
import re

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from egn.core.errors import EgnError, ErrorSeverity, mask_egn

logger = logging.getLogger(__name__)

_DIGIT_RUN = re.compile(r"\d{7,}")


def mask_digits(text: str) -> str:
    """Mask every run of seven or more digits down to its first six."""
    return _DIGIT_RUN.sub(lambda m: mask_egn(m.group()), text)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_egn_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_egn_error_handler(app: FastAPI) -> None:
    """Register EGN domain error handler."""

    @app.exception_handler(EgnError)
    async def egn_error_handler(request: Request, exc: EgnError):
        """Handle all EGN domain errors."""
        log = logger.info if exc.http_status < 500 else logger.error
        log(
            f"EgnError: {exc.message}",
            extra={"error_code": exc.code, "path": mask_digits(request.url.path)},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        path = mask_digits(request.url.path)
        logger.warning(
            f"Validation error on {path}: {len(exc.errors())} field(s)",
            extra={"error_code": "VALIDATION_ERROR", "path": path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all, never leaks internal details."""
        logger.error(
            f"Unhandled exception on {mask_digits(request.url.path)}: "
            f"{mask_digits(str(exc))}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
