"""Repository Protocol for bets and theses."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_betting.domain.models import Bet, BetWithMarket, Thesis, ThesisView
from src.uni_common.enums import Option


class BetRepositoryProtocol(Protocol):
    async def insert_bet(
        self,
        db: AsyncSession,
        user_id: str,
        market_id: int,
        option: Option,
        amount: int,
    ) -> Bet: ...

    async def insert_thesis(
        self, db: AsyncSession, bet: Bet, content: str
    ) -> Thesis: ...

    async def list_bets_for_market(
        self, db: AsyncSession, market_id: int
    ) -> list[Bet]: ...

    async def list_history(
        self, db: AsyncSession, user_id: str
    ) -> list[BetWithMarket]:
        """Newest first."""
        ...

    async def list_theses(
        self, db: AsyncSession, market_id: int
    ) -> list[ThesisView]:
        """Ordered by stake, largest first."""
        ...
