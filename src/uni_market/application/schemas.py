"""Pydantic request/response schemas for uni_market API."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from src.uni_common.money import cents_to_display
from src.uni_market.domain.models import Market, MarketSummary, PendingMarket

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateMarketRequest(BaseModel):
    title: str = Field(..., min_length=5, max_length=500)
    option_a: str = Field(..., min_length=1, max_length=100)
    option_b: str = Field(..., min_length=1, max_length=100)
    category: str | None = Field(None, max_length=64)
    end_date: datetime | None = None

    @field_validator("title", "option_a", "option_b")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def distinct_options(self) -> "CreateMarketRequest":
        # Resolution matches labels case-insensitively, so they must differ that way too
        if self.option_a.casefold() == self.option_b.casefold():
            raise ValueError("option_a and option_b must differ")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class MarketDetail(BaseModel):
    id: int
    title: str
    option_a: str
    option_b: str
    category: str | None
    end_date: str | None
    option_a_pool_cents: int
    option_b_pool_cents: int
    total_pool_cents: int
    total_pool_display: str
    is_resolved: bool
    resolution: str | None
    resolved_at: str | None
    creator_id: str | None
    is_approved: bool

    @classmethod
    def from_domain(cls, m: Market) -> "MarketDetail":
        return cls(
            id=m.id,
            title=m.title,
            option_a=m.option_a,
            option_b=m.option_b,
            category=m.category,
            end_date=m.end_date.isoformat() if m.end_date else None,
            option_a_pool_cents=m.option_a_pool,
            option_b_pool_cents=m.option_b_pool,
            total_pool_cents=m.total_pool,
            total_pool_display=cents_to_display(m.total_pool),
            is_resolved=m.is_resolved,
            resolution=m.resolution.value if m.resolution else None,
            resolved_at=m.resolved_at.isoformat() if m.resolved_at else None,
            creator_id=m.creator_id,
            is_approved=m.is_approved,
        )


class MarketListItem(MarketDetail):
    traders_count: int

    @classmethod
    def from_summary(cls, s: MarketSummary) -> "MarketListItem":
        return cls(
            **MarketDetail.from_domain(s.market).model_dump(),
            traders_count=s.traders_count,
        )


class PendingMarketItem(MarketDetail):
    creator_email: str | None
    creator_nickname: str | None
    listing_fee_cents: int

    @classmethod
    def from_pending(cls, p: PendingMarket) -> "PendingMarketItem":
        return cls(
            **MarketDetail.from_domain(p.market).model_dump(),
            creator_email=p.creator_email,
            creator_nickname=p.creator_nickname,
            listing_fee_cents=p.market.listing_fee,
        )


class CreateMarketResponse(BaseModel):
    message: str
    listing_fee_cents: int
    market: MarketDetail
