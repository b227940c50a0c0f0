"""EGN API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EgnError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from egn import __version__
from egn.api.error_handlers import register_error_handlers
from egn.api.routes import egn as egn_routes, health
from egn.config import get_settings
from egn.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        f"EGN API started (years {settings.start_year}..{settings.end_year})",
        extra={"locale": settings.default_locale.value},
    )
    yield
    logger.info("EGN API shutting down")


app = FastAPI(title="EGN API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(egn_routes.router)

register_error_handlers(app)
