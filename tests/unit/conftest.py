"""Unit-test fixtures: in-memory ledger and a session stand-in."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.unit.ledger_fake import InMemoryLedger


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture
def db() -> MagicMock:
    """Session stand-in: only commit/rollback are awaited by the services."""
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session
