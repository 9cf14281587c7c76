"""BettingService: the Trade Executor plus read-side bet history.

place_bet runs as one transaction and takes the market row lock before
touching any balance or pool, the same lock SettlementService takes.
A stake therefore lands entirely before a resolution or not at all.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.uni_account.domain.repository import AccountRepositoryProtocol
from src.uni_account.infrastructure.persistence import AccountRepository
from src.uni_betting.application.schemas import BetHistoryItem, BetResponse, ThesisItem
from src.uni_betting.domain.repository import BetRepositoryProtocol
from src.uni_betting.infrastructure.persistence import BetRepository
from src.uni_common.enums import LedgerEntryType, Option
from src.uni_common.errors import (
    MarketAlreadyResolvedError,
    MarketNotFoundError,
    MarketNotOpenError,
    UserNotFoundError,
)
from src.uni_market.domain.repository import MarketRepositoryProtocol
from src.uni_market.infrastructure.persistence import MarketRepository
from src.uni_settlement.application.service import schedule_from_settings
from src.uni_settlement.domain.payout import FeeSchedule, project_payout

logger = logging.getLogger(__name__)


class BettingService:
    def __init__(
        self,
        market_repo: MarketRepositoryProtocol | None = None,
        account_repo: AccountRepositoryProtocol | None = None,
        bet_repo: BetRepositoryProtocol | None = None,
        schedule: FeeSchedule | None = None,
        thesis_min_stake: int | None = None,
    ) -> None:
        self._markets: MarketRepositoryProtocol = market_repo or MarketRepository()
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()
        self._bets: BetRepositoryProtocol = bet_repo or BetRepository()
        self._schedule = schedule or schedule_from_settings()
        self._thesis_min_stake = (
            settings.THESIS_MIN_STAKE_CENTS if thesis_min_stake is None else thesis_min_stake
        )

    def _thesis_allowed(self, amount: int, thesis: str | None) -> bool:
        return bool(thesis and thesis.strip()) and amount >= self._thesis_min_stake

    async def place_bet(
        self,
        db: AsyncSession,
        email: str,
        market_id: int,
        option: Option,
        amount: int,
        thesis: str | None = None,
    ) -> BetResponse:
        try:
            market = await self._markets.lock_market(db, market_id)
            if market is None:
                raise MarketNotFoundError(market_id)
            if market.is_resolved:
                raise MarketAlreadyResolvedError(market_id)
            if not market.is_approved:
                raise MarketNotOpenError(market_id)

            user = await self._accounts.get_user_by_email(db, email)
            if user is None:
                raise UserNotFoundError(email)

            user, _ = await self._accounts.debit(
                db,
                user.id,
                amount,
                LedgerEntryType.BET_STAKE.value,
                "MARKET",
                str(market_id),
                f"Stake on {market.label_for(option)} in market {market_id}",
            )
            market = await self._markets.add_to_pool(db, market_id, option, amount)
            bet = await self._bets.insert_bet(db, user.id, market_id, option, amount)

            thesis_recorded = False
            if thesis is not None and self._thesis_allowed(amount, thesis):
                await self._bets.insert_thesis(db, bet, thesis.strip())
                thesis_recorded = True

            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Bet %s placed: user=%s market=%s option=%s amount=%d",
            bet.id, user.id, market_id, option.value, amount,
        )
        return BetResponse.from_result(
            bet,
            balance=user.balance,
            option_a_pool=market.option_a_pool,
            option_b_pool=market.option_b_pool,
            thesis_recorded=thesis_recorded,
        )

    async def get_history(self, db: AsyncSession, email: str) -> list[BetHistoryItem]:
        user = await self._accounts.get_user_by_email(db, email)
        if user is None:
            raise UserNotFoundError(email)
        rows = await self._bets.list_history(db, user.id)
        return [
            BetHistoryItem.from_projection(
                row,
                project_payout(row.bet.amount, row.bet.chosen_option, row.market, self._schedule),
            )
            for row in rows
        ]

    async def list_theses(self, db: AsyncSession, market_id: int) -> list[ThesisItem]:
        market = await self._markets.get_market_by_id(db, market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        views = await self._bets.list_theses(db, market_id)
        return [ThesisItem.from_view(v) for v in views]
