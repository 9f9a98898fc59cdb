"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from src.lq_pool.domain.models import PoolContext
from src.main import app


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def ctx() -> PoolContext:
    return PoolContext(owner="0xuser", pool="0xpool", token_a="0xtka", token_b="0xusdc")
