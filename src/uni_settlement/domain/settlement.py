"""Settlement planning: decide every credit before touching a balance.

Pure functions over a locked market snapshot and its bets. The application
service applies the resulting credits inside one transaction.

Conservation (normal path):
    sum(winner payouts) + house_fee + creator_royalty + rounding_remainder
        == win_pool + lose_pool
Conservation (refund path):
    sum(refunds) == total pool
"""

from dataclasses import dataclass, field

from src.uni_common.enums import LedgerEntryType, MarketResolution, Option
from src.uni_market.domain.models import Market
from src.uni_settlement.domain.payout import FeeSchedule, split_fee, winner_payout


@dataclass(frozen=True)
class StakeRef:
    """The slice of a bet the settlement math needs."""

    bet_id: int
    user_id: str
    option: Option
    amount: int


@dataclass(frozen=True)
class Credit:
    user_id: str
    amount: int
    entry_type: LedgerEntryType
    reference_type: str
    reference_id: str
    description: str


@dataclass
class SettlementPlan:
    market_id: int
    resolution: MarketResolution
    credits: list[Credit] = field(default_factory=list)
    house_fee: int = 0
    creator_royalty: int = 0
    rounding_remainder: int = 0
    paid_to_bettors: int = 0

    @property
    def refunded(self) -> bool:
        return self.resolution is MarketResolution.REFUNDED

    @property
    def total_credited(self) -> int:
        return sum(c.amount for c in self.credits)

    def ordered_credits(self) -> list[Credit]:
        """Non-zero credits sorted by user id, the lock order for balance rows."""
        return sorted(
            (c for c in self.credits if c.amount > 0),
            key=lambda c: (c.user_id, c.reference_type, c.reference_id),
        )


def is_one_sided(market: Market) -> bool:
    return market.option_a_pool == 0 or market.option_b_pool == 0


def plan_refund(market: Market, bets: list[StakeRef]) -> SettlementPlan:
    plan = SettlementPlan(market_id=market.id, resolution=MarketResolution.REFUNDED)
    for bet in bets:
        plan.credits.append(
            Credit(
                user_id=bet.user_id,
                amount=bet.amount,
                entry_type=LedgerEntryType.SETTLEMENT_REFUND,
                reference_type="BET",
                reference_id=str(bet.bet_id),
                description=f"Refund: market {market.id} had a one-sided pool",
            )
        )
        plan.paid_to_bettors += bet.amount
    return plan


def plan_settlement(
    market: Market,
    winner: Option,
    bets: list[StakeRef],
    house_user_id: str | None,
    schedule: FeeSchedule,
) -> SettlementPlan:
    """Plan a normal settlement. Both pools must be positive.

    ``bets`` may include losing bets; they receive nothing. Without a
    ``house_user_id`` the house fee is computed but no credit is emitted;
    the caller decides whether that is acceptable.
    """
    win_pool = market.pool_for(winner)
    lose_pool = market.pool_for(winner.other)
    if win_pool <= 0 or lose_pool <= 0:
        raise ValueError("plan_settlement needs two non-empty pools; use plan_refund")

    fees = split_fee(win_pool, lose_pool, market.creator_id is not None, schedule)
    plan = SettlementPlan(
        market_id=market.id,
        resolution=MarketResolution(winner.value),
        creator_royalty=fees.creator_royalty,
    )

    for bet in bets:
        if bet.option is not winner:
            continue
        payout = winner_payout(bet.amount, win_pool, lose_pool, schedule)
        plan.credits.append(
            Credit(
                user_id=bet.user_id,
                amount=payout,
                entry_type=LedgerEntryType.SETTLEMENT_PAYOUT,
                reference_type="BET",
                reference_id=str(bet.bet_id),
                description=f"Winnings: market {market.id} resolved {winner.value}",
            )
        )
        plan.paid_to_bettors += payout

    # Cents left after flooring every winner's share
    plan.rounding_remainder = win_pool + fees.distributable - plan.paid_to_bettors
    plan.house_fee = fees.house_fee + plan.rounding_remainder

    if fees.creator_royalty > 0 and market.creator_id is not None:
        plan.credits.append(
            Credit(
                user_id=market.creator_id,
                amount=fees.creator_royalty,
                entry_type=LedgerEntryType.CREATOR_ROYALTY,
                reference_type="MARKET",
                reference_id=str(market.id),
                description=f"Creator royalty: market {market.id}",
            )
        )
    if plan.house_fee > 0 and house_user_id is not None:
        plan.credits.append(
            Credit(
                user_id=house_user_id,
                amount=plan.house_fee,
                entry_type=LedgerEntryType.HOUSE_FEE,
                reference_type="MARKET",
                reference_id=str(market.id),
                description=f"House fee: market {market.id}",
            )
        )
    return plan
