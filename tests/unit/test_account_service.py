"""Unit tests for AccountApplicationService using a mock repository."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.uni_account.application.schemas import (
    BalanceResponse,
    DepositResponse,
    LedgerResponse,
    cursor_decode,
    cursor_encode,
)
from src.uni_account.application.service import AccountApplicationService
from src.uni_account.domain.models import LeaderboardRow, LedgerEntry, User
from src.uni_common.errors import NicknameTakenError, UserNotFoundError


def _make_user(balance: int = 150000, nickname: str | None = "wanjiku") -> User:
    return User(
        id="user-1",
        email="wanjiku@example.com",
        nickname=nickname,
        phone_number=None,
        is_admin=False,
        balance=balance,
        created_at=datetime.now(UTC),
        updated_at=datetime.now(UTC),
    )


def _make_ledger_entry(entry_id: int = 1, amount: int = 10000) -> LedgerEntry:
    return LedgerEntry(
        id=entry_id,
        user_id="user-1",
        entry_type="DEPOSIT",
        amount=amount,
        balance_after=160000,
        created_at=datetime.now(UTC),
    )


@pytest.fixture
def db() -> MagicMock:
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


class TestGetBalance:
    async def test_returns_balance_response(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.get_user_by_id.return_value = _make_user(150000)
        svc = AccountApplicationService(repo=repo)

        result = await svc.get_balance(db, "user-1")

        assert isinstance(result, BalanceResponse)
        assert result.balance_cents == 150000
        assert result.balance_display == "KES 1,500.00"

    async def test_unknown_user(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.get_user_by_id.return_value = None
        with pytest.raises(UserNotFoundError):
            await AccountApplicationService(repo=repo).get_balance(db, "nobody")


class TestDeposit:
    async def test_credits_and_commits(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.credit.return_value = (_make_user(160000), _make_ledger_entry(9))
        svc = AccountApplicationService(repo=repo)

        result = await svc.deposit(db, "user-1", 10000)

        assert isinstance(result, DepositResponse)
        assert result.balance_cents == 160000
        assert result.deposited_cents == 10000
        assert result.ledger_entry_id == 9
        assert repo.credit.call_args.args[3] == "DEPOSIT"
        db.commit.assert_awaited_once()

    async def test_rolls_back_on_failure(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.credit.side_effect = UserNotFoundError("user-1")
        with pytest.raises(UserNotFoundError):
            await AccountApplicationService(repo=repo).deposit(db, "user-1", 10000)
        db.rollback.assert_awaited_once()


class TestUpdateProfile:
    async def test_sets_nickname(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.get_user_by_nickname.return_value = None
        repo.update_profile.return_value = _make_user(nickname="kamau")
        result = await AccountApplicationService(repo=repo).update_profile(
            db, "user-1", "kamau", "+254700000000"
        )
        assert result.nickname == "kamau"
        db.commit.assert_awaited_once()

    async def test_keeping_own_nickname_is_fine(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.get_user_by_nickname.return_value = _make_user()
        repo.update_profile.return_value = _make_user()
        await AccountApplicationService(repo=repo).update_profile(db, "user-1", "wanjiku", None)
        repo.update_profile.assert_awaited_once()

    async def test_nickname_held_by_someone_else(self, db: MagicMock) -> None:
        other = _make_user()
        other.id = "user-2"
        repo = AsyncMock()
        repo.get_user_by_nickname.return_value = other
        with pytest.raises(NicknameTakenError):
            await AccountApplicationService(repo=repo).update_profile(
                db, "user-1", "wanjiku", None
            )
        repo.update_profile.assert_not_awaited()

    async def test_unique_violation_race(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.get_user_by_nickname.return_value = None
        repo.update_profile.side_effect = IntegrityError("UPDATE", {}, Exception("dup"))
        with pytest.raises(NicknameTakenError):
            await AccountApplicationService(repo=repo).update_profile(
                db, "user-1", "kamau", None
            )
        db.rollback.assert_awaited_once()


class TestLedger:
    async def test_pagination(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.list_ledger_entries.return_value = [_make_ledger_entry(i) for i in (5, 4, 3)]
        svc = AccountApplicationService(repo=repo)

        result = await svc.list_ledger(db, "user-1", None, 2, None)

        assert isinstance(result, LedgerResponse)
        assert [i.id for i in result.items] == [5, 4]
        assert result.has_more
        assert cursor_decode(result.next_cursor) == 4
        # limit + 1 requested to detect another page
        assert repo.list_ledger_entries.call_args.args[3] == 3

    async def test_last_page(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.list_ledger_entries.return_value = [_make_ledger_entry(1)]
        result = await AccountApplicationService(repo=repo).list_ledger(
            db, "user-1", cursor_encode(2), 20, None
        )
        assert not result.has_more
        assert result.next_cursor is None
        assert repo.list_ledger_entries.call_args.args[2] == 2


class TestCursor:
    def test_round_trip(self) -> None:
        assert cursor_decode(cursor_encode(12345)) == 12345

    def test_garbage_is_ignored(self) -> None:
        assert cursor_decode("not-base64!!") is None
        assert cursor_decode(None) is None


class TestLeaderboard:
    async def test_ranks_and_win_rate(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.leaderboard.return_value = [
            LeaderboardRow("u1", "top", 500000, total_bets=4, won_bets=3, resolved_bets=4),
            LeaderboardRow("u2", "new", 0, total_bets=1, won_bets=0, resolved_bets=0),
        ]
        items = await AccountApplicationService(repo=repo).leaderboard(db)

        assert [i.rank for i in items] == [1, 2]
        assert items[0].win_rate == 75
        assert items[1].win_rate == 0
        assert items[0].balance_display == "KES 5,000.00"
