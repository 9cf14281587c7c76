"""User domain service: register, login, refresh.

All DB operations use the injected AsyncSession. Transactions are managed
by the caller (router layer) via `async with db.begin()`.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_common.errors import (
    EmailExistsError,
    InvalidCredentialsError,
    PasswordNotSetError,
)
from src.uni_gateway.auth.jwt_handler import (
    create_access_token,
    decode_token,
    issue_token_pair,
)
from src.uni_gateway.auth.password import hash_password, verify_password
from src.uni_gateway.user.db_models import UserModel

logger = logging.getLogger(__name__)


class UserService:
    """Stateless service: instantiate once, reuse across requests."""

    async def register(
        self,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> UserModel:
        """Register a new user with a zero balance.

        The caller must wrap this in `async with db.begin()`.
        """
        result = await db.execute(select(UserModel).where(UserModel.email == email))
        if result.scalar_one_or_none() is not None:
            raise EmailExistsError()

        user = UserModel(
            email=email,
            password_hash=hash_password(password),
            is_admin=False,
            balance=0,
        )
        db.add(user)
        await db.flush()  # Get user.id and server defaults without committing
        await db.refresh(user)
        logger.info("Registered user %s", user.id)
        return user

    async def login(
        self,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str, str]:
        """Authenticate user and return (user, access_token, refresh_token).

        Note: "User not found" and "Wrong password" both raise InvalidCredentialsError
        intentionally: prevents email enumeration.
        """
        result = await db.execute(select(UserModel).where(UserModel.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            raise InvalidCredentialsError()

        # Accounts created outside password registration have no hash
        if user.password_hash is None:
            raise PasswordNotSetError()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        access_token, refresh_token = issue_token_pair(str(user.id))
        return user, access_token, refresh_token

    async def refresh(self, refresh_token: str) -> str:
        """Validate refresh token and return a new access token."""
        payload = decode_token(refresh_token, expected_type="refresh")
        user_id: str = str(payload["sub"])
        return create_access_token(user_id)
