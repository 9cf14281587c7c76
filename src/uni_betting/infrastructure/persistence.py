"""BetRepository: raw SQL over the append-only bets and theses tables.

Transaction ownership: The CALLER (application service) is responsible for
committing or rolling back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_betting.domain.models import Bet, BetWithMarket, Thesis, ThesisView
from src.uni_common.enums import Option
from src.uni_common.errors import InternalError
from src.uni_market.infrastructure.persistence import row_to_market

_BET_COLUMNS = "id, user_id, market_id, chosen_option, amount, placed_at"

_INSERT_BET_SQL = text(f"""
    INSERT INTO bets (user_id, market_id, chosen_option, amount)
    VALUES (:user_id, :market_id, :chosen_option, :amount)
    RETURNING {_BET_COLUMNS}
""")

_INSERT_THESIS_SQL = text("""
    INSERT INTO theses (bet_id, user_id, market_id, content)
    VALUES (:bet_id, :user_id, :market_id, :content)
    RETURNING id, bet_id, user_id, market_id, content, created_at
""")

_LIST_MARKET_BETS_SQL = text(f"""
    SELECT {_BET_COLUMNS}
    FROM bets
    WHERE market_id = :market_id
    ORDER BY id
""")

# Market columns keep their own names so row_to_market can map them
_LIST_HISTORY_SQL = text("""
    SELECT b.id AS bet_id, b.user_id AS bet_user_id, b.chosen_option,
           b.amount, b.placed_at,
           m.id, m.title, m.option_a, m.option_b, m.category, m.end_date,
           m.option_a_pool, m.option_b_pool, m.resolution, m.resolved_at,
           m.creator_id, m.is_approved, m.listing_fee, m.admin_notes,
           m.created_at, m.updated_at
    FROM bets b
    JOIN markets m ON b.market_id = m.id
    WHERE b.user_id = :user_id
    ORDER BY b.placed_at DESC, b.id DESC
""")

_LIST_THESES_SQL = text("""
    SELECT t.id, t.bet_id, t.user_id, t.market_id, t.content, t.created_at,
           u.nickname, b.chosen_option, b.amount
    FROM theses t
    JOIN bets b ON t.bet_id = b.id
    JOIN users u ON t.user_id = u.id
    WHERE t.market_id = :market_id
    ORDER BY b.amount DESC, t.id
""")


def _row_to_bet(row: object) -> Bet:
    return Bet(
        id=row.id,  # type: ignore[attr-defined]
        user_id=str(row.user_id),  # type: ignore[attr-defined]
        market_id=row.market_id,  # type: ignore[attr-defined]
        chosen_option=Option(row.chosen_option),  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        placed_at=row.placed_at,  # type: ignore[attr-defined]
    )


def _row_to_thesis(row: object) -> Thesis:
    return Thesis(
        id=row.id,  # type: ignore[attr-defined]
        bet_id=row.bet_id,  # type: ignore[attr-defined]
        user_id=str(row.user_id),  # type: ignore[attr-defined]
        market_id=row.market_id,  # type: ignore[attr-defined]
        content=row.content,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class BetRepository:
    async def insert_bet(
        self,
        db: AsyncSession,
        user_id: str,
        market_id: int,
        option: Option,
        amount: int,
    ) -> Bet:
        row = (
            await db.execute(
                _INSERT_BET_SQL,
                {
                    "user_id": user_id,
                    "market_id": market_id,
                    "chosen_option": option.value,
                    "amount": amount,
                },
            )
        ).fetchone()
        if row is None:
            raise InternalError("Bet insert returned no rows")
        return _row_to_bet(row)

    async def insert_thesis(self, db: AsyncSession, bet: Bet, content: str) -> Thesis:
        row = (
            await db.execute(
                _INSERT_THESIS_SQL,
                {
                    "bet_id": bet.id,
                    "user_id": bet.user_id,
                    "market_id": bet.market_id,
                    "content": content,
                },
            )
        ).fetchone()
        if row is None:
            raise InternalError("Thesis insert returned no rows")
        return _row_to_thesis(row)

    async def list_bets_for_market(self, db: AsyncSession, market_id: int) -> list[Bet]:
        result = await db.execute(_LIST_MARKET_BETS_SQL, {"market_id": market_id})
        return [_row_to_bet(row) for row in result.fetchall()]

    async def list_history(self, db: AsyncSession, user_id: str) -> list[BetWithMarket]:
        result = await db.execute(_LIST_HISTORY_SQL, {"user_id": user_id})
        history = []
        for row in result.fetchall():
            market = row_to_market(row)
            bet = Bet(
                id=row.bet_id,
                user_id=str(row.bet_user_id),
                market_id=market.id,
                chosen_option=Option(row.chosen_option),
                amount=row.amount,
                placed_at=row.placed_at,
            )
            history.append(BetWithMarket(bet=bet, market=market))
        return history

    async def list_theses(self, db: AsyncSession, market_id: int) -> list[ThesisView]:
        result = await db.execute(_LIST_THESES_SQL, {"market_id": market_id})
        return [
            ThesisView(
                thesis=_row_to_thesis(row),
                nickname=row.nickname,
                chosen_option=Option(row.chosen_option),
                amount=row.amount,
            )
            for row in result.fetchall()
        ]
