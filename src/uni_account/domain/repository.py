"""Repository Protocol: dependency inversion for testability.

Unit tests inject a mock or in-memory fake that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_account.domain.models import LeaderboardRow, LedgerEntry, User


class AccountRepositoryProtocol(Protocol):
    async def get_user_by_email(
        self, db: AsyncSession, email: str
    ) -> User | None: ...

    async def get_user_by_id(
        self, db: AsyncSession, user_id: str
    ) -> User | None: ...

    async def get_user_by_nickname(
        self, db: AsyncSession, nickname: str
    ) -> User | None: ...

    async def debit(
        self,
        db: AsyncSession,
        user_id: str,
        amount: int,
        entry_type: str,
        ref_type: str | None,
        ref_id: str | None,
        description: str,
    ) -> tuple[User, LedgerEntry]: ...

    async def credit(
        self,
        db: AsyncSession,
        user_id: str,
        amount: int,
        entry_type: str,
        ref_type: str | None,
        ref_id: str | None,
        description: str,
    ) -> tuple[User, LedgerEntry]: ...

    async def update_profile(
        self,
        db: AsyncSession,
        user_id: str,
        nickname: str,
        phone_number: str | None,
    ) -> User: ...

    async def list_ledger_entries(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
        entry_type: str | None,
    ) -> list[LedgerEntry]: ...

    async def leaderboard(
        self, db: AsyncSession, limit: int
    ) -> list[LeaderboardRow]: ...
