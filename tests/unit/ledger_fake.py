"""In-memory ledger fake for service-level property tests.

Implements the account, market and bet repository Protocols over plain
dicts. It is not transactional: the services validate everything before
their first write, which is exactly what these tests check.
"""

import dataclasses
from datetime import UTC, datetime

from src.uni_account.domain.models import LedgerEntry, User
from src.uni_betting.domain.models import Bet, BetWithMarket, Thesis, ThesisView
from src.uni_common.enums import MarketResolution, Option
from src.uni_common.errors import (
    InsufficientBalanceError,
    MarketAlreadyResolvedError,
    MarketNotFoundError,
    UserNotFoundError,
)
from src.uni_market.domain.models import Market

HOUSE_EMAIL = "house@unistake.local"


class InMemoryLedger:
    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.markets: dict[int, Market] = {}
        self.bets: list[Bet] = []
        self.theses: list[Thesis] = []
        self.entries: list[LedgerEntry] = []
        self.credit_calls: list[str] = []

    # -- seeding -----------------------------------------------------------

    def add_user(
        self, user_id: str, balance: int = 0, is_admin: bool = False, email: str | None = None
    ) -> User:
        user = User(
            id=user_id,
            email=email or f"{user_id}@example.com",
            nickname=user_id,
            phone_number=None,
            is_admin=is_admin,
            balance=balance,
        )
        self.users[user_id] = user
        return user

    def add_house(self) -> User:
        return self.add_user("house", email=HOUSE_EMAIL)

    def add_market(
        self,
        market_id: int = 1,
        option_a: str = "Yes",
        option_b: str = "No",
        creator_id: str | None = None,
        is_approved: bool = True,
        listing_fee: int = 0,
    ) -> Market:
        market = Market(
            id=market_id,
            title=f"Market {market_id}",
            option_a=option_a,
            option_b=option_b,
            category=None,
            end_date=None,
            option_a_pool=0,
            option_b_pool=0,
            resolution=None,
            creator_id=creator_id,
            is_approved=is_approved,
            listing_fee=listing_fee,
        )
        self.markets[market_id] = market
        return market

    def seed_bet(self, user_id: str, market_id: int, option: Option, amount: int) -> Bet:
        """Record a stake directly, bypassing the balance check."""
        market = self.markets[market_id]
        if option is Option.A:
            market.option_a_pool += amount
        else:
            market.option_b_pool += amount
        bet = Bet(
            id=len(self.bets) + 1,
            user_id=user_id,
            market_id=market_id,
            chosen_option=option,
            amount=amount,
            placed_at=datetime.now(UTC),
        )
        self.bets.append(bet)
        return bet

    def balance(self, user_id: str) -> int:
        return self.users[user_id].balance

    def total_money(self) -> int:
        """Balances plus every unresolved pool: constant under bets and settlement."""
        held = sum(u.balance for u in self.users.values())
        pooled = sum(m.total_pool for m in self.markets.values() if not m.is_resolved)
        return held + pooled

    # -- account repository ------------------------------------------------

    async def get_user_by_email(self, db: object, email: str) -> User | None:
        for user in self.users.values():
            if user.email == email:
                return dataclasses.replace(user)
        return None

    async def get_user_by_id(self, db: object, user_id: str) -> User | None:
        user = self.users.get(user_id)
        return dataclasses.replace(user) if user else None

    async def debit(
        self, db: object, user_id: str, amount: int, entry_type: str,
        ref_type: str | None, ref_id: str | None, description: str,
    ) -> tuple[User, LedgerEntry]:
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        if user.balance < amount:
            raise InsufficientBalanceError(amount, user.balance)
        user.balance -= amount
        return dataclasses.replace(user), self._journal(
            user, -amount, entry_type, ref_type, ref_id, description
        )

    async def credit(
        self, db: object, user_id: str, amount: int, entry_type: str,
        ref_type: str | None, ref_id: str | None, description: str,
    ) -> tuple[User, LedgerEntry]:
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        user.balance += amount
        self.credit_calls.append(user_id)
        return dataclasses.replace(user), self._journal(
            user, amount, entry_type, ref_type, ref_id, description
        )

    def _journal(
        self, user: User, amount: int, entry_type: str,
        ref_type: str | None, ref_id: str | None, description: str,
    ) -> LedgerEntry:
        entry = LedgerEntry(
            id=len(self.entries) + 1,
            user_id=user.id,
            entry_type=entry_type,
            amount=amount,
            balance_after=user.balance,
            reference_type=ref_type,
            reference_id=ref_id,
            description=description,
        )
        self.entries.append(entry)
        return entry

    # -- market repository -------------------------------------------------

    async def get_market_by_id(self, db: object, market_id: int) -> Market | None:
        market = self.markets.get(market_id)
        return dataclasses.replace(market) if market else None

    async def lock_market(self, db: object, market_id: int) -> Market | None:
        return await self.get_market_by_id(db, market_id)

    async def add_to_pool(
        self, db: object, market_id: int, option: Option, amount: int
    ) -> Market:
        market = self.markets[market_id]
        if market.is_resolved:
            raise MarketAlreadyResolvedError(market_id)
        if option is Option.A:
            market.option_a_pool += amount
        else:
            market.option_b_pool += amount
        return dataclasses.replace(market)

    async def mark_resolved(
        self, db: object, market_id: int, resolution: MarketResolution
    ) -> Market:
        market = self.markets[market_id]
        if market.is_resolved:
            raise MarketAlreadyResolvedError(market_id)
        market.resolution = resolution
        market.resolved_at = datetime.now(UTC)
        return dataclasses.replace(market)

    async def approve_market(
        self, db: object, market_id: int, admin_notes: str | None
    ) -> Market:
        market = self.markets.get(market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        market.is_approved = True
        market.admin_notes = admin_notes
        return dataclasses.replace(market)

    async def delete_market(self, db: object, market_id: int) -> None:
        self.markets.pop(market_id, None)

    # -- bet repository ----------------------------------------------------

    async def insert_bet(
        self, db: object, user_id: str, market_id: int, option: Option, amount: int
    ) -> Bet:
        bet = Bet(
            id=len(self.bets) + 1,
            user_id=user_id,
            market_id=market_id,
            chosen_option=option,
            amount=amount,
            placed_at=datetime.now(UTC),
        )
        self.bets.append(bet)
        return bet

    async def insert_thesis(self, db: object, bet: Bet, content: str) -> Thesis:
        thesis = Thesis(
            id=len(self.theses) + 1,
            bet_id=bet.id,
            user_id=bet.user_id,
            market_id=bet.market_id,
            content=content,
        )
        self.theses.append(thesis)
        return thesis

    async def list_bets_for_market(self, db: object, market_id: int) -> list[Bet]:
        return [b for b in self.bets if b.market_id == market_id]

    async def list_history(self, db: object, user_id: str) -> list[BetWithMarket]:
        rows = [
            BetWithMarket(bet=b, market=dataclasses.replace(self.markets[b.market_id]))
            for b in self.bets
            if b.user_id == user_id
        ]
        return list(reversed(rows))

    async def list_theses(self, db: object, market_id: int) -> list[ThesisView]:
        by_id = {b.id: b for b in self.bets}
        views = [
            ThesisView(
                thesis=t,
                nickname=self.users[t.user_id].nickname,
                chosen_option=by_id[t.bet_id].chosen_option,
                amount=by_id[t.bet_id].amount,
            )
            for t in self.theses
            if t.market_id == market_id
        ]
        return sorted(views, key=lambda v: -v.amount)
