"""Repository Protocol: dependency inversion for testability.

Unit tests inject a mock or in-memory fake that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_common.enums import MarketResolution, Option
from src.uni_market.domain.models import Market, MarketSummary, PendingMarket


class MarketRepositoryProtocol(Protocol):
    async def get_market_by_id(
        self, db: AsyncSession, market_id: int
    ) -> Market | None: ...

    async def lock_market(
        self, db: AsyncSession, market_id: int
    ) -> Market | None:
        """SELECT ... FOR UPDATE; the lock is held until the caller's transaction ends."""
        ...

    async def add_to_pool(
        self, db: AsyncSession, market_id: int, option: Option, amount: int
    ) -> Market: ...

    async def mark_resolved(
        self, db: AsyncSession, market_id: int, resolution: MarketResolution
    ) -> Market: ...

    async def list_markets(self, db: AsyncSession) -> list[MarketSummary]: ...

    async def list_pending(self, db: AsyncSession) -> list[PendingMarket]: ...

    async def create_market(
        self,
        db: AsyncSession,
        title: str,
        option_a: str,
        option_b: str,
        category: str | None,
        end_date: datetime | None,
        creator_id: str,
        is_approved: bool,
        listing_fee: int,
    ) -> Market: ...

    async def approve_market(
        self, db: AsyncSession, market_id: int, admin_notes: str | None
    ) -> Market: ...

    async def delete_market(self, db: AsyncSession, market_id: int) -> None: ...
