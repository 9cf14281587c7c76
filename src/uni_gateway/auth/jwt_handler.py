"""Session tokens for UniStake.

Access and refresh tokens are HS256 JWTs signed with JWT_SECRET. Each carries
the user id in ``sub``, the token kind in ``type`` and ``iss`` set to the
service name; decode_token rejects anything else. There is no revocation
list, so a token lives until ``exp``.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, Literal

from jose import JWTError, jwt

from config.settings import settings
from src.uni_common.errors import InvalidCredentialsError, InvalidRefreshTokenError

TokenType = Literal["access", "refresh"]

ISSUER = "unistake"
_ALGORITHM = settings.JWT_ALGORITHM
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
_REFRESH_EXPIRE = timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS)


def _issue(user_id: str, token_type: TokenType, ttl: timedelta) -> str:
    issued_at = datetime.now(UTC)
    claims: dict[str, Any] = {
        "iss": ISSUER,
        "sub": user_id,
        "type": token_type,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return str(jwt.encode(claims, settings.JWT_SECRET, algorithm=_ALGORITHM))


def create_access_token(user_id: str) -> str:
    return _issue(user_id, "access", _ACCESS_EXPIRE)


def create_refresh_token(user_id: str) -> str:
    return _issue(user_id, "refresh", _REFRESH_EXPIRE)


def issue_token_pair(user_id: str) -> tuple[str, str]:
    """(access, refresh) for a freshly authenticated user."""
    return create_access_token(user_id), create_refresh_token(user_id)


def _rejected(expected_type: TokenType) -> Exception:
    # A bad bearer token is a login failure; a bad refresh token asks the
    # client to sign in again.
    if expected_type == "access":
        return InvalidCredentialsError()
    return InvalidRefreshTokenError()


def decode_token(token: str, expected_type: TokenType) -> dict[str, Any]:
    """Verify signature, expiry, issuer and kind; return the claims.

    Raises InvalidCredentialsError for access tokens and
    InvalidRefreshTokenError for refresh tokens.
    """
    try:
        claims: dict[str, Any] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],
            issuer=ISSUER,
        )
    except JWTError as exc:
        raise _rejected(expected_type) from exc

    if claims.get("type") != expected_type or not claims.get("sub"):
        raise _rejected(expected_type)
    return claims
