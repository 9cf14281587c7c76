"""Tests for uni_common.money: integer KES arithmetic."""

from src.uni_common.money import bps_of_ceil, bps_of_floor, cents_to_display


class TestCentsToDisplay:
    def test_basic(self) -> None:
        assert cents_to_display(150000) == "KES 1,500.00"

    def test_zero(self) -> None:
        assert cents_to_display(0) == "KES 0.00"

    def test_one_cent(self) -> None:
        assert cents_to_display(1) == "KES 0.01"

    def test_negative(self) -> None:
        assert cents_to_display(-1200) == "-KES 12.00"

    def test_large(self) -> None:
        assert cents_to_display(123456789) == "KES 1,234,567.89"


class TestBps:
    def test_ceil_exact(self) -> None:
        assert bps_of_ceil(40000, 500) == 2000

    def test_ceil_rounds_up(self) -> None:
        # 101 * 5% = 5.05 -> 6
        assert bps_of_ceil(101, 500) == 6

    def test_ceil_zero_rate(self) -> None:
        assert bps_of_ceil(999999, 0) == 0

    def test_ceil_zero_amount(self) -> None:
        assert bps_of_ceil(0, 500) == 0

    def test_floor_rounds_down(self) -> None:
        # 101 * 0.5% = 0.505 -> 0
        assert bps_of_floor(101, 50) == 0
        assert bps_of_floor(40000, 50) == 200
