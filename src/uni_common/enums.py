"""Global enums: must match DB CHECK constraints exactly."""

from enum import Enum


class Option(str, Enum):
    """One side of a binary market. The only form a winner takes after parsing."""
    A = "A"
    B = "B"

    @property
    def other(self) -> "Option":
        return Option.B if self is Option.A else Option.A


class MarketResolution(str, Enum):
    A = "A"
    B = "B"
    REFUNDED = "REFUNDED"


class BetStatus(str, Enum):
    PENDING = "Pending"
    WON = "Won"
    LOST = "Lost"
    REFUNDED = "Refunded"


class ReviewAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class LedgerEntryType(str, Enum):
    DEPOSIT = "DEPOSIT"
    # Trade Executor
    BET_STAKE = "BET_STAKE"
    # Settlement Engine
    SETTLEMENT_PAYOUT = "SETTLEMENT_PAYOUT"
    SETTLEMENT_REFUND = "SETTLEMENT_REFUND"
    HOUSE_FEE = "HOUSE_FEE"
    CREATOR_ROYALTY = "CREATOR_ROYALTY"
    # Market listing
    LISTING_FEE = "LISTING_FEE"
    LISTING_REFUND = "LISTING_REFUND"
