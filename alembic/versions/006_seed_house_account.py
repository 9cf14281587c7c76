"""006: seed the house account

Revision ID: 006
Revises: 005
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

from config.settings import settings

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # No password: the house account collects fees and never signs in
    op.execute(
        sa.text("""
            INSERT INTO users (email, nickname, is_admin, balance)
            VALUES (:email, NULL, FALSE, 0)
            ON CONFLICT (email) DO NOTHING;
        """).bindparams(email=settings.HOUSE_ACCOUNT_EMAIL.strip().lower())
    )


def downgrade() -> None:
    op.execute(
        sa.text("DELETE FROM users WHERE email = :email;").bindparams(
            email=settings.HOUSE_ACCOUNT_EMAIL.strip().lower()
        )
    )
