"""MarketApplicationService: market listing and creation.

Creation charges non-admin creators a listing fee and parks the market in
the approval queue; admin-created markets go live immediately.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.uni_account.domain.repository import AccountRepositoryProtocol
from src.uni_account.infrastructure.persistence import AccountRepository
from src.uni_common.enums import LedgerEntryType
from src.uni_common.errors import MarketNotFoundError, UserNotFoundError
from src.uni_market.application.schemas import (
    CreateMarketRequest,
    CreateMarketResponse,
    MarketDetail,
    MarketListItem,
)
from src.uni_market.domain.repository import MarketRepositoryProtocol
from src.uni_market.infrastructure.notifier import TelegramNotifier
from src.uni_market.infrastructure.persistence import MarketRepository

logger = logging.getLogger(__name__)


class MarketApplicationService:
    def __init__(
        self,
        repo: MarketRepositoryProtocol | None = None,
        account_repo: AccountRepositoryProtocol | None = None,
        notifier: TelegramNotifier | None = None,
        listing_fee: int | None = None,
    ) -> None:
        self._repo: MarketRepositoryProtocol = repo or MarketRepository()
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()
        self._notifier = notifier or TelegramNotifier()
        self._listing_fee = (
            settings.LISTING_FEE_CENTS if listing_fee is None else listing_fee
        )

    async def list_markets(self, db: AsyncSession) -> list[MarketListItem]:
        summaries = await self._repo.list_markets(db)
        return [MarketListItem.from_summary(s) for s in summaries]

    async def get_market(self, db: AsyncSession, market_id: int) -> MarketDetail:
        market = await self._repo.get_market_by_id(db, market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        return MarketDetail.from_domain(market)

    async def create_market(
        self, db: AsyncSession, creator_id: str, req: CreateMarketRequest
    ) -> CreateMarketResponse:
        try:
            creator = await self._accounts.get_user_by_id(db, creator_id)
            if creator is None:
                raise UserNotFoundError(creator_id)
            fee = 0 if creator.is_admin else self._listing_fee

            market = await self._repo.create_market(
                db,
                title=req.title,
                option_a=req.option_a,
                option_b=req.option_b,
                category=req.category,
                end_date=req.end_date,
                creator_id=creator.id,
                is_approved=creator.is_admin,
                listing_fee=fee,
            )
            if fee > 0:
                await self._accounts.debit(
                    db,
                    creator.id,
                    fee,
                    LedgerEntryType.LISTING_FEE.value,
                    "MARKET",
                    str(market.id),
                    f"Listing fee for market {market.id}",
                )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Market %s created by %s (approved=%s, fee=%d)",
            market.id, creator.id, market.is_approved, fee,
        )
        if not market.is_approved:
            await self._notifier.notify_pending_market(market, creator.email)

        return CreateMarketResponse(
            message="Market created!" if market.is_approved else "Market submitted for approval!",
            listing_fee_cents=fee,
            market=MarketDetail.from_domain(market),
        )
