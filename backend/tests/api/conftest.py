"""API test fixtures - FastAPI test client with a fixed-clock EgnService.

Invariants:
    - get_egn_service dependency overridden so age is deterministic
    - dependency_overrides cleared after every test
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from egn.main import app
from egn.services.egn_service import EgnService, get_egn_service

TODAY = date(2026, 10, 19)


@pytest.fixture
def service():
    return EgnService(clock=lambda: TODAY)


@pytest.fixture
async def client(service):
    """FastAPI test client with the service dependency overridden."""
    app.dependency_overrides[get_egn_service] = lambda: service

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
