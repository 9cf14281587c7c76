"""Domain models for uni_account: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    id: str
    email: str
    nickname: str | None
    phone_number: str | None
    is_admin: bool
    balance: int             # cents
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class LedgerEntry:
    id: int                          # BIGSERIAL
    user_id: str
    entry_type: str                  # LedgerEntryType value
    amount: int                      # cents, positive=income negative=expense
    balance_after: int               # cents, balance snapshot after op
    reference_type: str | None = None
    reference_id: str | None = None
    description: str | None = None
    created_at: datetime | None = None


@dataclass
class LeaderboardRow:
    user_id: str
    nickname: str
    balance: int
    total_bets: int
    won_bets: int
    resolved_bets: int

    @property
    def win_rate(self) -> int:
        """Whole-percent share of resolved bets that won."""
        if self.resolved_bets == 0:
            return 0
        return round(self.won_bets * 100 / self.resolved_bets)
