"""Root conftest - shared test configuration."""

import os

import pytest

from egn.core.codec import calculate_checksum

# Human-readable logs in test output; never pick up a developer's .env range
os.environ.setdefault("EGN_LOG_FORMAT", "text")
os.environ.setdefault("EGN_START_YEAR", "1800")
os.environ.setdefault("EGN_END_YEAR", "2099")


@pytest.fixture
def with_checksum():
    """Append the correct check digit to nine digits."""
    def _build(nine: str) -> str:
        return nine + str(calculate_checksum(nine))
    return _build
