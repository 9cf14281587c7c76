"""Tests for project_payout: the read-only view of a bet's outcome."""

from src.uni_common.enums import BetStatus, MarketResolution, Option
from src.uni_market.domain.models import Market
from src.uni_settlement.domain.payout import FeeSchedule, project_payout

SCHEDULE = FeeSchedule()


def _market(
    a_pool: int = 60_000, b_pool: int = 40_000, resolution: MarketResolution | None = None
) -> Market:
    return Market(
        id=1,
        title="Will it rain in Nairobi tomorrow?",
        option_a="Yes",
        option_b="No",
        category=None,
        end_date=None,
        option_a_pool=a_pool,
        option_b_pool=b_pool,
        resolution=resolution,
        creator_id=None,
        is_approved=True,
        listing_fee=0,
    )


class TestPending:
    def test_pending_pays_nothing_yet(self) -> None:
        p = project_payout(30_000, Option.A, _market(), SCHEDULE)
        assert p.status is BetStatus.PENDING
        assert p.payout == 0

    def test_potential_payout_uses_current_pools(self) -> None:
        assert project_payout(30_000, Option.A, _market(), SCHEDULE).potential_payout == 49_000
        # B side: 400 KES against 600 KES, fee 30 KES
        assert project_payout(40_000, Option.B, _market(), SCHEDULE).potential_payout == 97_000

    def test_no_potential_when_own_pool_empty(self) -> None:
        p = project_payout(100, Option.B, _market(b_pool=0), SCHEDULE)
        assert p.potential_payout is None


class TestResolved:
    def test_won(self) -> None:
        p = project_payout(30_000, Option.A, _market(resolution=MarketResolution.A), SCHEDULE)
        assert p.status is BetStatus.WON
        assert p.payout == 49_000
        assert p.potential_payout is None

    def test_lost(self) -> None:
        p = project_payout(40_000, Option.B, _market(resolution=MarketResolution.A), SCHEDULE)
        assert p.status is BetStatus.LOST
        assert p.payout == 0

    def test_refunded_returns_stake(self) -> None:
        market = _market(b_pool=0, resolution=MarketResolution.REFUNDED)
        p = project_payout(25_000, Option.A, market, SCHEDULE)
        assert p.status is BetStatus.REFUNDED
        assert p.payout == 25_000
