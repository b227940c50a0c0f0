"""Health Probe - liveness endpoint for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up
    - Reports the configured generation year range
"""

import logging
from fastapi import APIRouter, status

from egn import __version__
from egn.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "egn-api",
        "version": __version__,
        "year_range": [settings.start_year, settings.end_year],
    }
