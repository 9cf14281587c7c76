"""AccountApplicationService: thin composition layer.

Deposit and profile updates commit their own transaction.
Other operations (get_balance, list_ledger, leaderboard) are read-only.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_account.application.schemas import (
    BalanceResponse,
    DepositResponse,
    LeaderboardItem,
    LedgerEntryItem,
    LedgerResponse,
    ProfileResponse,
    cursor_decode,
    cursor_encode,
)
from src.uni_account.domain.repository import AccountRepositoryProtocol
from src.uni_account.infrastructure.persistence import AccountRepository
from src.uni_common.enums import LedgerEntryType
from src.uni_common.errors import NicknameTakenError, UserNotFoundError
from src.uni_common.money import cents_to_display

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 100


class AccountApplicationService:
    def __init__(self, repo: AccountRepositoryProtocol | None = None) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()

    async def get_balance(self, db: AsyncSession, user_id: str) -> BalanceResponse:
        user = await self._repo.get_user_by_id(db, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return BalanceResponse.from_cents(user_id=user.id, balance=user.balance)

    async def deposit(
        self, db: AsyncSession, user_id: str, amount_cents: int
    ) -> DepositResponse:
        try:
            user, entry = await self._repo.credit(
                db,
                user_id,
                amount_cents,
                LedgerEntryType.DEPOSIT.value,
                "DEPOSIT",
                None,
                "Simulated deposit",
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Deposit: user=%s amount=%d", user_id, amount_cents)
        return DepositResponse.from_result(
            balance=user.balance, amount=amount_cents, entry_id=entry.id
        )

    async def update_profile(
        self,
        db: AsyncSession,
        user_id: str,
        nickname: str,
        phone_number: str | None,
    ) -> ProfileResponse:
        try:
            holder = await self._repo.get_user_by_nickname(db, nickname)
            if holder is not None and holder.id != user_id:
                raise NicknameTakenError(nickname)
            user = await self._repo.update_profile(db, user_id, nickname, phone_number)
            await db.commit()
        except IntegrityError:
            # Concurrent claim of the same nickname; the UNIQUE constraint is the final guard
            await db.rollback()
            raise NicknameTakenError(nickname) from None
        except Exception:
            await db.rollback()
            raise
        return ProfileResponse(
            user_id=user.id,
            email=user.email,
            nickname=user.nickname,
            phone_number=user.phone_number,
            balance_cents=user.balance,
        )

    async def list_ledger(
        self,
        db: AsyncSession,
        user_id: str,
        cursor: str | None,
        limit: int,
        entry_type: str | None,
    ) -> LedgerResponse:
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        entries = await self._repo.list_ledger_entries(
            db, user_id, cursor_id, limit + 1, entry_type
        )
        has_more = len(entries) > limit
        page = entries[:limit]

        items = [
            LedgerEntryItem(
                id=e.id,
                entry_type=e.entry_type,
                amount_cents=e.amount,
                amount_display=cents_to_display(e.amount),
                balance_after_cents=e.balance_after,
                balance_after_display=cents_to_display(e.balance_after),
                reference_type=e.reference_type,
                reference_id=e.reference_id,
                description=e.description,
                created_at=e.created_at.isoformat() if e.created_at else "",
            )
            for e in page
        ]

        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return LedgerResponse(items=items, next_cursor=next_cursor, has_more=has_more)

    async def leaderboard(self, db: AsyncSession) -> list[LeaderboardItem]:
        rows = await self._repo.leaderboard(db, LEADERBOARD_SIZE)
        return [
            LeaderboardItem(
                rank=rank,
                user_id=r.user_id,
                nickname=r.nickname,
                balance_cents=r.balance,
                balance_display=cents_to_display(r.balance),
                total_bets=r.total_bets,
                won_bets=r.won_bets,
                resolved_bets=r.resolved_bets,
                win_rate=r.win_rate,
            )
            for rank, r in enumerate(rows, start=1)
        ]
