"""
Pytest fixtures for rdmpass backend tests
"""

import base64
import os
import pytest
from typing import AsyncGenerator

# Set test environment before imports
os.environ.setdefault("FRONTEND_URL", "http://test")
os.environ.setdefault("GENERATE_TIMEOUT_SECONDS", "10")

from httpx import AsyncClient, ASGITransport
from rdmpass.main import app
from rdmpass.middleware import rate_limit
from rdmpass.services.telemetry import reset_counters


@pytest.fixture(autouse=True)
def fresh_limits():
    """Every test starts with empty rate-limit buckets and counters."""
    rate_limit.rate_limiter.reset()
    reset_counters()
    yield


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture
def zero_seed() -> bytes:
    """All-zero 256-bit seed used for golden vectors."""
    return bytes(32)


@pytest.fixture
def zero_entropy_b64(zero_seed: bytes) -> str:
    return base64.b64encode(zero_seed).decode("ascii")


@pytest.fixture
def lowercase_settings() -> dict:
    """Wire-format settings with only lowercase enabled."""
    return {
        "length": 8,
        "includeLowercase": True,
        "includeUppercase": False,
        "includeNumbers": False,
        "includeSymbols": False,
        "includeExtendedLatin": False,
        "customCharacters": "",
        "requireEachSelected": False,
    }
