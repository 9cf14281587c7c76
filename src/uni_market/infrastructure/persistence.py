"""MarketRepository: concrete implementation of MarketRepositoryProtocol.

All queries use raw text() SQL (no ORM).
Pool and resolution writes carry `resolution IS NULL` so that a resolved
market can never be mutated, even by a caller that skipped the lock.
"""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_common.enums import MarketResolution, Option
from src.uni_common.errors import (
    InternalError,
    MarketAlreadyResolvedError,
    MarketNotFoundError,
)
from src.uni_market.domain.models import Market, MarketSummary, PendingMarket

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_MARKET_COLUMNS = """
    id, title, option_a, option_b, category, end_date,
    option_a_pool, option_b_pool, resolution, resolved_at,
    creator_id, is_approved, listing_fee, admin_notes,
    created_at, updated_at
"""

_GET_MARKET_SQL = text(f"SELECT {_MARKET_COLUMNS} FROM markets WHERE id = :market_id")

_LOCK_MARKET_SQL = text(
    f"SELECT {_MARKET_COLUMNS} FROM markets WHERE id = :market_id FOR UPDATE"
)

# One statement per column: the column name is never built from input
_ADD_TO_POOL_SQL = {
    Option.A: text(f"""
        UPDATE markets
        SET option_a_pool = option_a_pool + :amount, updated_at = NOW()
        WHERE id = :market_id AND resolution IS NULL
        RETURNING {_MARKET_COLUMNS}
    """),
    Option.B: text(f"""
        UPDATE markets
        SET option_b_pool = option_b_pool + :amount, updated_at = NOW()
        WHERE id = :market_id AND resolution IS NULL
        RETURNING {_MARKET_COLUMNS}
    """),
}

_MARK_RESOLVED_SQL = text(f"""
    UPDATE markets
    SET resolution = :resolution, resolved_at = NOW(), updated_at = NOW()
    WHERE id = :market_id AND resolution IS NULL
    RETURNING {_MARKET_COLUMNS}
""")

_LIST_MARKETS_SQL = text("""
    SELECT m.id, m.title, m.option_a, m.option_b, m.category, m.end_date,
           m.option_a_pool, m.option_b_pool, m.resolution, m.resolved_at,
           m.creator_id, m.is_approved, m.listing_fee, m.admin_notes,
           m.created_at, m.updated_at,
           COUNT(DISTINCT b.user_id) AS traders_count
    FROM markets m
    LEFT JOIN bets b ON m.id = b.market_id
    WHERE m.is_approved = TRUE
    GROUP BY m.id
    ORDER BY m.id DESC
""")

_LIST_PENDING_SQL = text("""
    SELECT m.id, m.title, m.option_a, m.option_b, m.category, m.end_date,
           m.option_a_pool, m.option_b_pool, m.resolution, m.resolved_at,
           m.creator_id, m.is_approved, m.listing_fee, m.admin_notes,
           m.created_at, m.updated_at,
           u.email AS creator_email, u.nickname AS creator_nickname
    FROM markets m
    LEFT JOIN users u ON m.creator_id = u.id
    WHERE m.is_approved = FALSE
    ORDER BY m.id
""")

_INSERT_MARKET_SQL = text(f"""
    INSERT INTO markets
        (title, option_a, option_b, category, end_date,
         creator_id, is_approved, listing_fee)
    VALUES
        (:title, :option_a, :option_b, :category, :end_date,
         :creator_id, :is_approved, :listing_fee)
    RETURNING {_MARKET_COLUMNS}
""")

_APPROVE_MARKET_SQL = text(f"""
    UPDATE markets
    SET is_approved = TRUE, admin_notes = :admin_notes, updated_at = NOW()
    WHERE id = :market_id
    RETURNING {_MARKET_COLUMNS}
""")

_DELETE_MARKET_SQL = text("DELETE FROM markets WHERE id = :market_id")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def row_to_market(row: object) -> Market:
    resolution = row.resolution  # type: ignore[attr-defined]
    creator_id = row.creator_id  # type: ignore[attr-defined]
    return Market(
        id=row.id,  # type: ignore[attr-defined]
        title=row.title,  # type: ignore[attr-defined]
        option_a=row.option_a,  # type: ignore[attr-defined]
        option_b=row.option_b,  # type: ignore[attr-defined]
        category=row.category,  # type: ignore[attr-defined]
        end_date=row.end_date,  # type: ignore[attr-defined]
        option_a_pool=row.option_a_pool,  # type: ignore[attr-defined]
        option_b_pool=row.option_b_pool,  # type: ignore[attr-defined]
        resolution=MarketResolution(resolution) if resolution else None,
        creator_id=str(creator_id) if creator_id else None,
        is_approved=row.is_approved,  # type: ignore[attr-defined]
        listing_fee=row.listing_fee,  # type: ignore[attr-defined]
        admin_notes=row.admin_notes,  # type: ignore[attr-defined]
        resolved_at=row.resolved_at,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class MarketRepository:
    """Concrete repository: single-statement reads and guarded writes."""

    async def get_market_by_id(self, db: AsyncSession, market_id: int) -> Market | None:
        row = (await db.execute(_GET_MARKET_SQL, {"market_id": market_id})).fetchone()
        return row_to_market(row) if row else None

    async def lock_market(self, db: AsyncSession, market_id: int) -> Market | None:
        row = (await db.execute(_LOCK_MARKET_SQL, {"market_id": market_id})).fetchone()
        return row_to_market(row) if row else None

    async def add_to_pool(
        self, db: AsyncSession, market_id: int, option: Option, amount: int
    ) -> Market:
        row = (
            await db.execute(
                _ADD_TO_POOL_SQL[option], {"market_id": market_id, "amount": amount}
            )
        ).fetchone()
        if row is None:
            raise MarketAlreadyResolvedError(market_id)
        return row_to_market(row)

    async def mark_resolved(
        self, db: AsyncSession, market_id: int, resolution: MarketResolution
    ) -> Market:
        row = (
            await db.execute(
                _MARK_RESOLVED_SQL,
                {"market_id": market_id, "resolution": resolution.value},
            )
        ).fetchone()
        if row is None:
            raise MarketAlreadyResolvedError(market_id)
        return row_to_market(row)

    async def list_markets(self, db: AsyncSession) -> list[MarketSummary]:
        rows = (await db.execute(_LIST_MARKETS_SQL)).fetchall()
        return [
            MarketSummary(market=row_to_market(r), traders_count=int(r.traders_count))
            for r in rows
        ]

    async def list_pending(self, db: AsyncSession) -> list[PendingMarket]:
        rows = (await db.execute(_LIST_PENDING_SQL)).fetchall()
        return [
            PendingMarket(
                market=row_to_market(r),
                creator_email=r.creator_email,
                creator_nickname=r.creator_nickname,
            )
            for r in rows
        ]

    async def create_market(
        self,
        db: AsyncSession,
        title: str,
        option_a: str,
        option_b: str,
        category: str | None,
        end_date: datetime | None,
        creator_id: str,
        is_approved: bool,
        listing_fee: int,
    ) -> Market:
        row = (
            await db.execute(
                _INSERT_MARKET_SQL,
                {
                    "title": title,
                    "option_a": option_a,
                    "option_b": option_b,
                    "category": category,
                    "end_date": end_date,
                    "creator_id": creator_id,
                    "is_approved": is_approved,
                    "listing_fee": listing_fee,
                },
            )
        ).fetchone()
        if row is None:
            raise InternalError("Market insert returned no rows")
        return row_to_market(row)

    async def approve_market(
        self, db: AsyncSession, market_id: int, admin_notes: str | None
    ) -> Market:
        row = (
            await db.execute(
                _APPROVE_MARKET_SQL, {"market_id": market_id, "admin_notes": admin_notes}
            )
        ).fetchone()
        if row is None:
            raise MarketNotFoundError(market_id)
        return row_to_market(row)

    async def delete_market(self, db: AsyncSession, market_id: int) -> None:
        await db.execute(_DELETE_MARKET_SQL, {"market_id": market_id})
