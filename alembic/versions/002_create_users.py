"""002: create users table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE users (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            email           VARCHAR(255)    NOT NULL,
            nickname        VARCHAR(64),
            phone_number    VARCHAR(32),
            password_hash   VARCHAR(255),
            is_admin        BOOLEAN         NOT NULL DEFAULT FALSE,
            balance         BIGINT          NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_users_email           UNIQUE (email),
            CONSTRAINT ck_users_balance_gte_0   CHECK (balance >= 0),
            CONSTRAINT ck_users_email_lower     CHECK (email = LOWER(email))
        );
    """)
    op.execute("CREATE UNIQUE INDEX uq_users_nickname_ci ON users (LOWER(nickname));")
    op.execute("""
        CREATE TRIGGER trg_users_updated_at
            BEFORE UPDATE ON users
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE users IS 'Users and their KES balance in cents';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
