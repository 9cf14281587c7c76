"""004: create bets and theses tables

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE bets (
            id              BIGSERIAL       PRIMARY KEY,
            user_id         UUID            NOT NULL REFERENCES users (id),
            market_id       BIGINT          NOT NULL REFERENCES markets (id),
            chosen_option   CHAR(1)         NOT NULL,
            amount          BIGINT          NOT NULL,
            placed_at       TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_bets_option       CHECK (chosen_option IN ('A', 'B')),
            CONSTRAINT ck_bets_amount_gt_0  CHECK (amount > 0)
        );
    """)
    op.execute("CREATE INDEX idx_bets_market ON bets (market_id);")
    op.execute("CREATE INDEX idx_bets_user_time ON bets (user_id, placed_at DESC);")
    op.execute("COMMENT ON TABLE bets IS 'Stakes: Append-Only';")

    op.execute("""
        CREATE TABLE theses (
            id              BIGSERIAL       PRIMARY KEY,
            bet_id          BIGINT          NOT NULL REFERENCES bets (id),
            user_id         UUID            NOT NULL REFERENCES users (id),
            market_id       BIGINT          NOT NULL REFERENCES markets (id),
            content         TEXT            NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_theses_bet            UNIQUE (bet_id),
            CONSTRAINT ck_theses_content_len    CHECK (LENGTH(TRIM(content)) > 0)
        );
    """)
    op.execute("CREATE INDEX idx_theses_market ON theses (market_id);")
    for table in ("bets", "theses"):
        op.execute(f"""
            CREATE TRIGGER trg_{table}_append_only
            BEFORE UPDATE OR DELETE ON {table}
            FOR EACH ROW EXECUTE FUNCTION fn_reject_mutation();
        """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS theses CASCADE;")
    op.execute("DROP TABLE IF EXISTS bets CASCADE;")
