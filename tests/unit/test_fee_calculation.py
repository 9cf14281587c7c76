"""Tests for the fee schedule, fee split and the shared payout formula."""

import pytest

from src.uni_settlement.domain.payout import FeeSchedule, split_fee, winner_payout

SCHEDULE = FeeSchedule()


class TestFeeThreshold:
    def test_below_1000_kes_is_free(self) -> None:
        assert SCHEDULE.fee_bps_for(99_900) == 0
        assert SCHEDULE.fee_bps_for(99_999) == 0

    def test_at_1000_kes_pays_five_percent(self) -> None:
        assert SCHEDULE.fee_bps_for(100_000) == 500

    def test_custom_schedule(self) -> None:
        s = FeeSchedule(fee_bps=300, fee_free_threshold=0)
        assert s.fee_bps_for(1) == 300


class TestSplitFee:
    def test_600_400_example_without_creator(self) -> None:
        fees = split_fee(60_000, 40_000, has_creator=False, schedule=SCHEDULE)
        assert fees.total_fee == 2_000
        assert fees.creator_royalty == 0
        assert fees.house_fee == 2_000
        assert fees.distributable == 38_000

    def test_creator_royalty_carved_from_fee(self) -> None:
        fees = split_fee(60_000, 40_000, has_creator=True, schedule=SCHEDULE)
        assert fees.total_fee == 2_000
        assert fees.creator_royalty == 200
        assert fees.house_fee == 1_800
        assert fees.distributable == 38_000

    def test_no_royalty_when_fee_free(self) -> None:
        fees = split_fee(59_900, 40_000, has_creator=True, schedule=SCHEDULE)
        assert fees.total_fee == 0
        assert fees.creator_royalty == 0
        assert fees.distributable == 40_000

    def test_fee_rounds_up(self) -> None:
        fees = split_fee(100_000, 101, has_creator=False, schedule=SCHEDULE)
        assert fees.total_fee == 6
        assert fees.distributable == 95

    def test_parts_sum_to_losing_pool(self) -> None:
        fees = split_fee(123_457, 98_765, has_creator=True, schedule=SCHEDULE)
        assert fees.creator_royalty + fees.house_fee + fees.distributable == 98_765


class TestWinnerPayout:
    def test_600_400_example(self) -> None:
        # 300 KES of a 600 KES winning pool against 400 KES
        assert winner_payout(30_000, 60_000, 40_000, SCHEDULE) == 49_000

    def test_sole_winner_takes_everything_but_fee(self) -> None:
        assert winner_payout(60_000, 60_000, 40_000, SCHEDULE) == 98_000

    def test_fee_free_market(self) -> None:
        # 999 KES total: whole losing pool is shared
        assert winner_payout(59_900, 59_900, 40_000, SCHEDULE) == 99_900

    def test_floors_profit_share(self) -> None:
        assert winner_payout(33_333, 100_000, 100_000, SCHEDULE) == 33_333 + 31_666

    def test_creator_does_not_change_winner_payout(self) -> None:
        # Royalty is carved from the fee, not from the winners' share
        with_creator = split_fee(60_000, 40_000, True, SCHEDULE).distributable
        without = split_fee(60_000, 40_000, False, SCHEDULE).distributable
        assert with_creator == without

    def test_empty_winning_pool_rejected(self) -> None:
        with pytest.raises(ValueError):
            winner_payout(100, 0, 40_000, SCHEDULE)
