"""003: create markets table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE markets (
            id              BIGSERIAL       PRIMARY KEY,
            title           VARCHAR(500)    NOT NULL,
            option_a        VARCHAR(100)    NOT NULL,
            option_b        VARCHAR(100)    NOT NULL,
            category        VARCHAR(64),
            end_date        TIMESTAMPTZ,
            option_a_pool   BIGINT          NOT NULL DEFAULT 0,
            option_b_pool   BIGINT          NOT NULL DEFAULT 0,
            resolution      VARCHAR(10),
            resolved_at     TIMESTAMPTZ,
            creator_id      UUID            REFERENCES users (id) ON DELETE SET NULL,
            is_approved     BOOLEAN         NOT NULL DEFAULT FALSE,
            listing_fee     BIGINT          NOT NULL DEFAULT 0,
            admin_notes     TEXT,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_markets_pool_a_gte_0  CHECK (option_a_pool >= 0),
            CONSTRAINT ck_markets_pool_b_gte_0  CHECK (option_b_pool >= 0),
            CONSTRAINT ck_markets_listing_fee   CHECK (listing_fee >= 0),
            CONSTRAINT ck_markets_resolution    CHECK (
                resolution IS NULL OR resolution IN ('A', 'B', 'REFUNDED')
            ),
            CONSTRAINT ck_markets_resolved_at   CHECK (
                (resolution IS NULL) = (resolved_at IS NULL)
            ),
            CONSTRAINT ck_markets_options_differ CHECK (
                LOWER(TRIM(option_a)) <> LOWER(TRIM(option_b))
            )
        );
    """)
    op.execute("CREATE INDEX idx_markets_approved ON markets (is_approved, id DESC);")
    op.execute("""
        CREATE TRIGGER trg_markets_updated_at
            BEFORE UPDATE ON markets
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE markets IS 'Binary markets; pools in cents, resolution write-once';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS markets CASCADE;")
