"""Integer arithmetic utilities for KES amounts.

All stakes, pools, and balances are int cents (1 KES = 100 cents).
No float, no Decimal.
"""


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 150000 -> 'KES 1,500.00', -1200 -> '-KES 12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-KES {abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"KES {cents // 100:,}.{cents % 100:02d}"


def bps_of_ceil(amount: int, bps: int) -> int:
    """Basis-point share rounded up (the house never loses a fraction).

    ceil(amount * bps / 10000) using integer ceiling: (a + b - 1) // b
    """
    if amount == 0 or bps == 0:
        return 0
    return (amount * bps + 9999) // 10000


def bps_of_floor(amount: int, bps: int) -> int:
    """Basis-point share rounded down."""
    return amount * bps // 10000
