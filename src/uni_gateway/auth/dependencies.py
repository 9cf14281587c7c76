"""FastAPI dependencies resolving the caller from a Bearer access token.

    @router.post("/bets")
    async def place(user: Annotated[UserModel, Depends(get_current_user)]): ...

Admin-only routes (resolve, approval queue) depend on ``require_admin``.
"""

import uuid
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_common.database import get_db_session
from src.uni_common.errors import AdminRequiredError, InvalidCredentialsError
from src.uni_gateway.auth.jwt_handler import decode_token
from src.uni_gateway.user.db_models import UserModel

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )


def subject_user_id(token: str) -> uuid.UUID:
    """User id named by a valid access token; 401 for anything else."""
    try:
        claims = decode_token(token, expected_type="access")
        return uuid.UUID(str(claims["sub"]))
    except (InvalidCredentialsError, ValueError):
        raise _unauthorized() from None


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserModel:
    user_id = subject_user_id(token)
    result = await db.execute(select(UserModel).where(UserModel.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        # Token outlived its account
        raise _unauthorized()
    return user


async def require_admin(
    current_user: Annotated[UserModel, Depends(get_current_user)],
) -> UserModel:
    if not current_user.is_admin:
        raise AdminRequiredError()
    return current_user
