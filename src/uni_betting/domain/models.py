"""Bet domain models: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.uni_common.enums import Option
from src.uni_market.domain.models import Market


@dataclass
class Bet:
    id: int
    user_id: str
    market_id: int
    chosen_option: Option
    amount: int  # cents, > 0
    placed_at: datetime | None = None


@dataclass
class Thesis:
    id: int
    bet_id: int
    user_id: str
    market_id: int
    content: str
    created_at: datetime | None = None


@dataclass
class ThesisView:
    """Thesis joined with its bet and the author's nickname."""

    thesis: Thesis
    nickname: str | None
    chosen_option: Option
    amount: int


@dataclass
class BetWithMarket:
    """History row: the bet plus a snapshot of its market for projection."""

    bet: Bet
    market: Market
