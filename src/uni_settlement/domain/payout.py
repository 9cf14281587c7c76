"""Fee schedule and the single payout formula.

Both the Settlement Engine (which credits balances) and the Payout
Projection (which only displays) call ``winner_payout``; payouts are never
stored, so the two can never disagree.

All amounts are int cents. Per-bet profit shares are floored; the
leftover cents are the house's (see ``plan_settlement``).
"""

from dataclasses import dataclass

from src.uni_common.enums import BetStatus, MarketResolution, Option
from src.uni_common.money import bps_of_ceil, bps_of_floor
from src.uni_market.domain.models import Market


@dataclass(frozen=True)
class FeeSchedule:
    fee_bps: int = 500                   # 5% of the losing pool
    creator_royalty_bps: int = 50        # carved out of the fee for the market creator
    fee_free_threshold: int = 100_000    # total pool (cents) below which no fee is taken

    def fee_bps_for(self, total_pool: int) -> int:
        return 0 if total_pool < self.fee_free_threshold else self.fee_bps


@dataclass(frozen=True)
class FeeSplit:
    total_fee: int        # taken from the losing pool
    creator_royalty: int  # part of total_fee owed to the creator
    house_fee: int        # part of total_fee owed to the house
    distributable: int    # losing pool left for the winners


def split_fee(
    win_pool: int, lose_pool: int, has_creator: bool, schedule: FeeSchedule
) -> FeeSplit:
    fee_bps = schedule.fee_bps_for(win_pool + lose_pool)
    total_fee = bps_of_ceil(lose_pool, fee_bps)
    royalty = 0
    if fee_bps > 0 and has_creator:
        royalty = min(bps_of_floor(lose_pool, schedule.creator_royalty_bps), total_fee)
    return FeeSplit(
        total_fee=total_fee,
        creator_royalty=royalty,
        house_fee=total_fee - royalty,
        distributable=lose_pool - total_fee,
    )


def winner_payout(
    stake: int, win_pool: int, lose_pool: int, schedule: FeeSchedule
) -> int:
    """Stake back plus a pro-rata share of the losing pool net of the fee.

    payout = stake + floor(stake * distributable / win_pool)
    """
    if win_pool <= 0:
        raise ValueError("winning pool must be positive")
    distributable = split_fee(win_pool, lose_pool, False, schedule).distributable
    return stake + stake * distributable // win_pool


@dataclass(frozen=True)
class PayoutProjection:
    status: BetStatus
    payout: int                      # cents actually credited (or to be credited)
    potential_payout: int | None = None   # Pending only: payout if the chosen side won now


def project_payout(
    stake: int, chosen: Option, market: Market, schedule: FeeSchedule
) -> PayoutProjection:
    """Read-only outcome of one bet against the market's current state."""
    if market.resolution is None:
        own_pool = market.pool_for(chosen)
        potential = None
        if own_pool > 0:
            potential = winner_payout(stake, own_pool, market.pool_for(chosen.other), schedule)
        return PayoutProjection(BetStatus.PENDING, 0, potential)

    if market.resolution is MarketResolution.REFUNDED:
        return PayoutProjection(BetStatus.REFUNDED, stake)

    winner = Option(market.resolution.value)
    if chosen is not winner:
        return PayoutProjection(BetStatus.LOST, 0)
    return PayoutProjection(
        BetStatus.WON,
        winner_payout(stake, market.pool_for(winner), market.pool_for(winner.other), schedule),
    )
