"""Pydantic schemas for the resolve endpoint."""

from pydantic import BaseModel, Field

from src.uni_common.money import cents_to_display
from src.uni_settlement.domain.settlement import SettlementPlan


class ResolveRequest(BaseModel):
    # Free text: "A", "b", or either option label; normalized server-side
    outcome: str = Field(..., min_length=1, max_length=100)


class SettlementResponse(BaseModel):
    market_id: int
    resolution: str
    refunded: bool
    house_fee_cents: int
    creator_royalty_cents: int
    rounding_remainder_cents: int
    paid_to_bettors_cents: int
    paid_to_bettors_display: str
    credited_bets: int
    message: str

    @classmethod
    def from_plan(cls, plan: SettlementPlan) -> "SettlementResponse":
        credited_bets = sum(
            1 for c in plan.credits if c.reference_type == "BET" and c.amount > 0
        )
        if plan.refunded:
            message = f"Market {plan.market_id} refunded: one side had no stakes"
        else:
            message = f"Market {plan.market_id} resolved to option {plan.resolution.value}"
        return cls(
            market_id=plan.market_id,
            resolution=plan.resolution.value,
            refunded=plan.refunded,
            house_fee_cents=plan.house_fee,
            creator_royalty_cents=plan.creator_royalty,
            rounding_remainder_cents=plan.rounding_remainder,
            paid_to_bettors_cents=plan.paid_to_bettors,
            paid_to_bettors_display=cents_to_display(plan.paid_to_bettors),
            credited_bets=credited_bets,
            message=message,
        )
