"""AccountRepository: concrete implementation of AccountRepositoryProtocol.

All balance-mutating operations use atomic PostgreSQL UPDATE ... RETURNING.
A debit returning 0 rows means the balance could not cover the amount.
Every mutation appends one ledger_entries row in the same transaction.

Transaction ownership: The CALLER (application service) is responsible for
committing or rolling back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_account.domain.models import LeaderboardRow, LedgerEntry, User
from src.uni_common.errors import InsufficientBalanceError, InternalError, UserNotFoundError

# ---------------------------------------------------------------------------
# SQL: users
# ---------------------------------------------------------------------------

_USER_COLUMNS = (
    "id, email, nickname, phone_number, is_admin, balance, created_at, updated_at"
)

_GET_BY_EMAIL_SQL = text(f"SELECT {_USER_COLUMNS} FROM users WHERE email = :email")

_GET_BY_ID_SQL = text(f"SELECT {_USER_COLUMNS} FROM users WHERE id = :user_id")

_GET_BY_NICKNAME_SQL = text(
    f"SELECT {_USER_COLUMNS} FROM users WHERE LOWER(nickname) = LOWER(:nickname)"
)

_CREDIT_SQL = text(f"""
    UPDATE users
    SET balance = balance + :amount,
        updated_at = NOW()
    WHERE id = :user_id
    RETURNING {_USER_COLUMNS}
""")

_DEBIT_SQL = text(f"""
    UPDATE users
    SET balance = balance - :amount,
        updated_at = NOW()
    WHERE id = :user_id AND balance >= :amount
    RETURNING {_USER_COLUMNS}
""")

_UPDATE_PROFILE_SQL = text(f"""
    UPDATE users
    SET nickname = :nickname,
        phone_number = :phone_number,
        updated_at = NOW()
    WHERE id = :user_id
    RETURNING {_USER_COLUMNS}
""")

# ---------------------------------------------------------------------------
# SQL: ledger_entries
# ---------------------------------------------------------------------------

_INSERT_LEDGER_SQL = text("""
    INSERT INTO ledger_entries
        (user_id, entry_type, amount, balance_after,
         reference_type, reference_id, description)
    VALUES
        (:user_id, :entry_type, :amount, :balance_after,
         :reference_type, :reference_id, :description)
    RETURNING id, user_id, entry_type, amount, balance_after,
              reference_type, reference_id, description, created_at
""")

_LIST_LEDGER_SQL = text("""
    SELECT id, user_id, entry_type, amount, balance_after,
           reference_type, reference_id, description, created_at
    FROM ledger_entries
    WHERE user_id = :user_id
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < CAST(:cursor_id AS BIGINT))
      AND (CAST(:entry_type AS TEXT) IS NULL OR entry_type = CAST(:entry_type AS TEXT))
    ORDER BY id DESC
    LIMIT :limit
""")

# ---------------------------------------------------------------------------
# SQL: leaderboard
# ---------------------------------------------------------------------------

_LEADERBOARD_SQL = text("""
    SELECT u.id AS user_id, u.nickname, u.balance,
           COUNT(b.id) AS total_bets,
           COUNT(CASE WHEN m.resolution = b.chosen_option THEN 1 END) AS won_bets,
           COUNT(CASE WHEN m.resolution IS NOT NULL THEN 1 END) AS resolved_bets
    FROM users u
    LEFT JOIN bets b ON u.id = b.user_id
    LEFT JOIN markets m ON b.market_id = m.id
    WHERE u.nickname IS NOT NULL
    GROUP BY u.id, u.nickname, u.balance
    ORDER BY won_bets DESC, u.balance DESC
    LIMIT :limit
""")


def _row_to_user(row: object) -> User:
    return User(
        id=str(row.id),  # type: ignore[attr-defined]
        email=row.email,  # type: ignore[attr-defined]
        nickname=row.nickname,  # type: ignore[attr-defined]
        phone_number=row.phone_number,  # type: ignore[attr-defined]
        is_admin=row.is_admin,  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_ledger(row: object) -> LedgerEntry:
    return LedgerEntry(
        id=row.id,  # type: ignore[attr-defined]
        user_id=str(row.user_id),  # type: ignore[attr-defined]
        entry_type=row.entry_type,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        balance_after=row.balance_after,  # type: ignore[attr-defined]
        reference_type=row.reference_type,  # type: ignore[attr-defined]
        reference_id=row.reference_id,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class AccountRepository:
    """Concrete repository: all operations atomic at the SQL level."""

    async def get_user_by_email(self, db: AsyncSession, email: str) -> User | None:
        row = (await db.execute(_GET_BY_EMAIL_SQL, {"email": email})).fetchone()
        return _row_to_user(row) if row else None

    async def get_user_by_id(self, db: AsyncSession, user_id: str) -> User | None:
        row = (await db.execute(_GET_BY_ID_SQL, {"user_id": user_id})).fetchone()
        return _row_to_user(row) if row else None

    async def get_user_by_nickname(self, db: AsyncSession, nickname: str) -> User | None:
        row = (await db.execute(_GET_BY_NICKNAME_SQL, {"nickname": nickname})).fetchone()
        return _row_to_user(row) if row else None

    async def debit(
        self,
        db: AsyncSession,
        user_id: str,
        amount: int,
        entry_type: str,
        ref_type: str | None,
        ref_id: str | None,
        description: str,
    ) -> tuple[User, LedgerEntry]:
        row = (
            await db.execute(_DEBIT_SQL, {"user_id": user_id, "amount": amount})
        ).fetchone()
        if row is None:
            current = await self.get_user_by_id(db, user_id)
            if current is None:
                raise UserNotFoundError(user_id)
            raise InsufficientBalanceError(amount, current.balance)
        user = _row_to_user(row)
        entry = await self._append_ledger(
            db, user, -amount, entry_type, ref_type, ref_id, description
        )
        return user, entry

    async def credit(
        self,
        db: AsyncSession,
        user_id: str,
        amount: int,
        entry_type: str,
        ref_type: str | None,
        ref_id: str | None,
        description: str,
    ) -> tuple[User, LedgerEntry]:
        row = (
            await db.execute(_CREDIT_SQL, {"user_id": user_id, "amount": amount})
        ).fetchone()
        if row is None:
            raise UserNotFoundError(user_id)
        user = _row_to_user(row)
        entry = await self._append_ledger(
            db, user, amount, entry_type, ref_type, ref_id, description
        )
        return user, entry

    async def update_profile(
        self,
        db: AsyncSession,
        user_id: str,
        nickname: str,
        phone_number: str | None,
    ) -> User:
        row = (
            await db.execute(
                _UPDATE_PROFILE_SQL,
                {"user_id": user_id, "nickname": nickname, "phone_number": phone_number},
            )
        ).fetchone()
        if row is None:
            raise UserNotFoundError(user_id)
        return _row_to_user(row)

    async def list_ledger_entries(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
        entry_type: str | None,
    ) -> list[LedgerEntry]:
        result = await db.execute(
            _LIST_LEDGER_SQL,
            {
                "user_id": user_id,
                "cursor_id": cursor_id,
                "entry_type": entry_type,
                "limit": limit,
            },
        )
        return [_row_to_ledger(row) for row in result.fetchall()]

    async def leaderboard(self, db: AsyncSession, limit: int) -> list[LeaderboardRow]:
        result = await db.execute(_LEADERBOARD_SQL, {"limit": limit})
        return [
            LeaderboardRow(
                user_id=str(row.user_id),
                nickname=row.nickname,
                balance=row.balance,
                total_bets=int(row.total_bets),
                won_bets=int(row.won_bets),
                resolved_bets=int(row.resolved_bets),
            )
            for row in result.fetchall()
        ]

    async def _append_ledger(
        self,
        db: AsyncSession,
        user: User,
        signed_amount: int,
        entry_type: str,
        ref_type: str | None,
        ref_id: str | None,
        description: str,
    ) -> LedgerEntry:
        ledger_row = (
            await db.execute(
                _INSERT_LEDGER_SQL,
                {
                    "user_id": user.id,
                    "entry_type": entry_type,
                    "amount": signed_amount,
                    "balance_after": user.balance,
                    "reference_type": ref_type,
                    "reference_id": ref_id,
                    "description": description,
                },
            )
        ).fetchone()
        if ledger_row is None:
            raise InternalError("Ledger insert returned no rows")
        return _row_to_ledger(ledger_row)
