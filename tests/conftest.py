"""Shared test fixtures."""

# ruff: noqa: E402  -- JWT_SECRET must be set before config.settings is imported

import os

os.environ.setdefault("JWT_SECRET", "test-secret-key-for-unit-tests")

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from src.cp_pricing.domain.models import Assumptions
from src.main import app


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def assumptions() -> Assumptions:
    """fee 15%, fixed 500 per seat, +/-50% price band, 20% alert threshold."""
    return Assumptions(
        urban_price_per_km=Decimal(1000),
        interurban_price_per_km=Decimal(800),
        fee_percentage=Decimal(15),
        fixed_rate=Decimal(500),
        price_limit_percentage=Decimal(50),
        alert_threshold_percentage=Decimal(20),
    )
