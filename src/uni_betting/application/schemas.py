"""Pydantic request/response schemas for uni_betting API."""

from pydantic import BaseModel, Field, field_validator

from src.uni_betting.domain.models import Bet, BetWithMarket, ThesisView
from src.uni_common.enums import Option
from src.uni_common.money import cents_to_display
from src.uni_settlement.domain.payout import PayoutProjection

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PlaceBetRequest(BaseModel):
    market_id: int = Field(..., gt=0)
    option: Option
    amount_cents: int = Field(..., gt=0, description="Stake in KES cents")
    thesis: str | None = Field(None, max_length=2000)

    @field_validator("option", mode="before")
    @classmethod
    def upper_option(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BetResponse(BaseModel):
    bet_id: int
    market_id: int
    chosen_option: str
    amount_cents: int
    amount_display: str
    balance_cents: int
    balance_display: str
    option_a_pool_cents: int
    option_b_pool_cents: int
    thesis_recorded: bool
    placed_at: str | None

    @classmethod
    def from_result(
        cls,
        bet: Bet,
        balance: int,
        option_a_pool: int,
        option_b_pool: int,
        thesis_recorded: bool,
    ) -> "BetResponse":
        return cls(
            bet_id=bet.id,
            market_id=bet.market_id,
            chosen_option=bet.chosen_option.value,
            amount_cents=bet.amount,
            amount_display=cents_to_display(bet.amount),
            balance_cents=balance,
            balance_display=cents_to_display(balance),
            option_a_pool_cents=option_a_pool,
            option_b_pool_cents=option_b_pool,
            thesis_recorded=thesis_recorded,
            placed_at=bet.placed_at.isoformat() if bet.placed_at else None,
        )


class BetHistoryItem(BaseModel):
    bet_id: int
    market_id: int
    market_title: str
    chosen_option: str
    chosen_label: str
    amount_cents: int
    amount_display: str
    status: str
    payout_cents: int
    payout_display: str
    potential_payout_cents: int | None
    placed_at: str | None

    @classmethod
    def from_projection(
        cls, row: BetWithMarket, projection: PayoutProjection
    ) -> "BetHistoryItem":
        bet, market = row.bet, row.market
        return cls(
            bet_id=bet.id,
            market_id=market.id,
            market_title=market.title,
            chosen_option=bet.chosen_option.value,
            chosen_label=market.label_for(bet.chosen_option),
            amount_cents=bet.amount,
            amount_display=cents_to_display(bet.amount),
            status=projection.status.value,
            payout_cents=projection.payout,
            payout_display=cents_to_display(projection.payout),
            potential_payout_cents=projection.potential_payout,
            placed_at=bet.placed_at.isoformat() if bet.placed_at else None,
        )


class ThesisItem(BaseModel):
    thesis_id: int
    bet_id: int
    nickname: str | None
    chosen_option: str
    amount_cents: int
    amount_display: str
    content: str
    created_at: str | None

    @classmethod
    def from_view(cls, v: ThesisView) -> "ThesisItem":
        return cls(
            thesis_id=v.thesis.id,
            bet_id=v.thesis.bet_id,
            nickname=v.nickname,
            chosen_option=v.chosen_option.value,
            amount_cents=v.amount,
            amount_display=cents_to_display(v.amount),
            content=v.thesis.content,
            created_at=v.thesis.created_at.isoformat() if v.thesis.created_at else None,
        )
