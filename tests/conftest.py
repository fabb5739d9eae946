"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment BEFORE importing app modules
os.environ["DEATH_COUNT"] = "500"
os.environ["RANDOM_SEED"] = "1234"
os.environ["MAP_IMAGE_URL"] = "http://map.test/wilderness.png"

TEST_SEED = 1234
TEST_DEATH_COUNT = 500


@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture(scope="session")
def snapshot():
    """Seeded snapshot shared by endpoint tests."""
    from app.services.death_data import build_snapshot

    return build_snapshot(TEST_DEATH_COUNT, seed=TEST_SEED)


@pytest.fixture
async def client(snapshot) -> AsyncGenerator[AsyncClient, None]:
    """Create test client serving the seeded snapshot."""
    from app.main import app
    from app.services.death_data import get_snapshot

    app.dependency_overrides[get_snapshot] = lambda: snapshot
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as test_client:
        yield test_client
    app.dependency_overrides.clear()
