"""Admin application service: approval queue and market review.

Resolution itself lives in SettlementService; the admin router only gates it.
"""

import logging

from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_account.domain.repository import AccountRepositoryProtocol
from src.uni_account.infrastructure.persistence import AccountRepository
from src.uni_common.enums import LedgerEntryType, ReviewAction
from src.uni_common.errors import MarketAlreadyReviewedError, MarketNotFoundError
from src.uni_market.application.schemas import MarketDetail, PendingMarketItem
from src.uni_market.domain.repository import MarketRepositoryProtocol
from src.uni_market.infrastructure.persistence import MarketRepository

logger = logging.getLogger(__name__)


class ReviewRequest(BaseModel):
    action: ReviewAction
    admin_notes: str | None = Field(None, max_length=1000)


class ReviewResponse(BaseModel):
    market_id: int
    action: str
    refunded_cents: int
    market: MarketDetail | None
    message: str


class AdminService:
    def __init__(
        self,
        market_repo: MarketRepositoryProtocol | None = None,
        account_repo: AccountRepositoryProtocol | None = None,
    ) -> None:
        self._markets: MarketRepositoryProtocol = market_repo or MarketRepository()
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()

    async def list_pending(self, db: AsyncSession) -> list[PendingMarketItem]:
        pending = await self._markets.list_pending(db)
        return [PendingMarketItem.from_pending(p) for p in pending]

    async def review_market(
        self,
        db: AsyncSession,
        market_id: int,
        action: ReviewAction,
        admin_notes: str | None,
    ) -> ReviewResponse:
        """Approve a queued market, or reject it: refund the listing fee and delete it."""
        refunded = 0
        try:
            market = await self._markets.lock_market(db, market_id)
            if market is None:
                raise MarketNotFoundError(market_id)
            if market.is_approved:
                raise MarketAlreadyReviewedError(market_id)

            if action is ReviewAction.APPROVE:
                market = await self._markets.approve_market(db, market_id, admin_notes)
            else:
                if market.creator_id is not None and market.listing_fee > 0:
                    await self._accounts.credit(
                        db,
                        market.creator_id,
                        market.listing_fee,
                        LedgerEntryType.LISTING_REFUND.value,
                        "MARKET",
                        str(market_id),
                        f"Listing fee refund: market {market_id} rejected",
                    )
                    refunded = market.listing_fee
                await self._markets.delete_market(db, market_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Market %s reviewed: action=%s refunded=%d", market_id, action.value, refunded
        )
        if action is ReviewAction.APPROVE:
            return ReviewResponse(
                market_id=market_id,
                action=action.value,
                refunded_cents=0,
                market=MarketDetail.from_domain(market),
                message="Market approved and now live",
            )
        return ReviewResponse(
            market_id=market_id,
            action=action.value,
            refunded_cents=refunded,
            market=None,
            message="Market rejected, listing fee refunded",
        )
