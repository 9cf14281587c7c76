"""SettlementService: resolve a market and pay it out in one transaction.

Flow:
  1. Lock the market row (same lock the Trade Executor takes)
  2. Reject missing, already-resolved or unapproved markets before any write
  3. Normalize the declared outcome to an Option
  4. Plan every credit (refund path or fee + pro-rata payout path)
  5. Apply the credits in user-id order, mark the market resolved
  6. Commit; any failure rolls back everything
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.uni_account.domain.repository import AccountRepositoryProtocol
from src.uni_account.infrastructure.persistence import AccountRepository
from src.uni_betting.domain.repository import BetRepositoryProtocol
from src.uni_betting.infrastructure.persistence import BetRepository
from src.uni_common.errors import (
    MarketAlreadyResolvedError,
    MarketNotFoundError,
    MarketNotOpenError,
    UserNotFoundError,
)
from src.uni_market.domain.repository import MarketRepositoryProtocol
from src.uni_market.infrastructure.persistence import MarketRepository
from src.uni_settlement.application.schemas import SettlementResponse
from src.uni_settlement.domain.outcome import normalize_outcome
from src.uni_settlement.domain.payout import FeeSchedule
from src.uni_settlement.domain.settlement import (
    SettlementPlan,
    StakeRef,
    is_one_sided,
    plan_refund,
    plan_settlement,
)

logger = logging.getLogger(__name__)


def schedule_from_settings() -> FeeSchedule:
    return FeeSchedule(
        fee_bps=settings.SETTLEMENT_FEE_BPS,
        creator_royalty_bps=settings.CREATOR_ROYALTY_BPS,
        fee_free_threshold=settings.FEE_FREE_POOL_THRESHOLD_CENTS,
    )


class SettlementService:
    def __init__(
        self,
        market_repo: MarketRepositoryProtocol | None = None,
        account_repo: AccountRepositoryProtocol | None = None,
        bet_repo: BetRepositoryProtocol | None = None,
        schedule: FeeSchedule | None = None,
        house_email: str | None = None,
    ) -> None:
        self._markets: MarketRepositoryProtocol = market_repo or MarketRepository()
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()
        self._bets: BetRepositoryProtocol = bet_repo or BetRepository()
        self._schedule = schedule or schedule_from_settings()
        # users.email is stored lower-cased; the seed migration normalizes the same way
        self._house_email = (house_email or settings.HOUSE_ACCOUNT_EMAIL).strip().lower()

    async def resolve_market(
        self, db: AsyncSession, market_id: int, declared: str
    ) -> SettlementResponse:
        try:
            plan = await self._settle(db, market_id, declared)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        if plan.refunded:
            logger.info(
                "Market %s refunded: %d cents returned to %d bets",
                market_id, plan.paid_to_bettors, len(plan.credits),
            )
        else:
            logger.info(
                "Market %s resolved %s: paid=%d house=%d (remainder=%d) creator=%d",
                market_id, plan.resolution.value, plan.paid_to_bettors,
                plan.house_fee, plan.rounding_remainder, plan.creator_royalty,
            )
        return SettlementResponse.from_plan(plan)

    async def _settle(
        self, db: AsyncSession, market_id: int, declared: str
    ) -> SettlementPlan:
        market = await self._markets.lock_market(db, market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        if market.is_resolved:
            raise MarketAlreadyResolvedError(market_id)
        if not market.is_approved:
            raise MarketNotOpenError(market_id)

        # Rejects bad input before any balance is touched
        winner = normalize_outcome(declared, market.option_a, market.option_b)

        stakes = [
            StakeRef(bet_id=b.id, user_id=b.user_id, option=b.chosen_option, amount=b.amount)
            for b in await self._bets.list_bets_for_market(db, market_id)
        ]

        if is_one_sided(market):
            plan = plan_refund(market, stakes)
        else:
            house = await self._accounts.get_user_by_email(db, self._house_email)
            plan = plan_settlement(
                market, winner, stakes, house.id if house else None, self._schedule
            )
            if house is None and plan.house_fee > 0:
                raise UserNotFoundError(self._house_email)

        for credit in plan.ordered_credits():
            await self._accounts.credit(
                db,
                credit.user_id,
                credit.amount,
                credit.entry_type.value,
                credit.reference_type,
                credit.reference_id,
                credit.description,
            )

        await self._markets.mark_resolved(db, market_id, plan.resolution)
        return plan
