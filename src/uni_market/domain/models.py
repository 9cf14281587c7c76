"""Domain models for uni_market: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.uni_common.enums import MarketResolution, Option


@dataclass
class Market:
    id: int
    title: str
    option_a: str
    option_b: str
    category: str | None
    end_date: datetime | None
    option_a_pool: int         # cents, sum of stakes on A
    option_b_pool: int         # cents, sum of stakes on B
    resolution: MarketResolution | None   # None while unresolved
    creator_id: str | None
    is_approved: bool
    listing_fee: int           # cents charged to the creator at submission
    admin_notes: str | None = None
    resolved_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_resolved(self) -> bool:
        return self.resolution is not None

    @property
    def total_pool(self) -> int:
        return self.option_a_pool + self.option_b_pool

    def pool_for(self, option: Option) -> int:
        return self.option_a_pool if option is Option.A else self.option_b_pool

    def label_for(self, option: Option) -> str:
        return self.option_a if option is Option.A else self.option_b


@dataclass
class MarketSummary:
    """Listing row: market plus the number of distinct bettors."""

    market: Market
    traders_count: int


@dataclass
class PendingMarket:
    """Approval-queue row: market plus the creator's display name."""

    market: Market
    creator_email: str | None
    creator_nickname: str | None
