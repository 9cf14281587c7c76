"""Integration-test fixtures.

Needs a migrated PostgreSQL and a Redis (see DATABASE_URL / REDIS_URL).
Skipped unless UNISTAKE_INTEGRATION=1.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool (created at import time) remains valid across
the entire test session.
"""

import os
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app

_ENABLED = os.environ.get("UNISTAKE_INTEGRATION") == "1"
_HERE = Path(__file__).parent


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if _ENABLED:
        return
    skip = pytest.mark.skip(reason="set UNISTAKE_INTEGRATION=1 to run against live stores")
    for item in items:
        if _HERE in item.path.parents:
            item.add_marker(skip)


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client: keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
