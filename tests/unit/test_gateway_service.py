"""Unit tests for user service (mocked DB)."""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.uni_common.errors import (
    EmailExistsError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    PasswordNotSetError,
)
from src.uni_gateway.auth.jwt_handler import create_access_token, create_refresh_token
from src.uni_gateway.user.db_models import UserModel
from src.uni_gateway.user.service import UserService


def _make_user(password_hash: str | None = "$2b$10$fakehash") -> UserModel:
    user = UserModel()
    user.id = uuid.uuid4()
    user.email = "alice@example.com"
    user.nickname = None
    user.password_hash = password_hash
    user.is_admin = False
    user.balance = 0
    return user


def _result(value: object) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


@pytest.fixture
def mock_db() -> AsyncMock:
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def service() -> UserService:
    return UserService()


class TestRegister:
    async def test_duplicate_email_raises_error(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_result(_make_user()))

        with pytest.raises(EmailExistsError):
            await service.register("alice@example.com", "Pass1word", mock_db)
        mock_db.add.assert_not_called()

    async def test_new_user_starts_with_zero_balance(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_result(None))

        with patch("src.uni_gateway.user.service.hash_password", return_value="hashed"):
            user = await service.register("new@example.com", "Pass1word", mock_db)

        assert user.email == "new@example.com"
        assert user.balance == 0
        assert user.password_hash == "hashed"
        assert user.is_admin is False
        mock_db.flush.assert_awaited_once()


class TestLogin:
    async def test_unknown_email_raises_credentials_error(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_result(None))
        with pytest.raises(InvalidCredentialsError):
            await service.login("nobody@example.com", "Pass1word", mock_db)

    async def test_wrong_password_raises_credentials_error(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_result(_make_user()))
        with (
            patch("src.uni_gateway.user.service.verify_password", return_value=False),
            pytest.raises(InvalidCredentialsError),
        ):
            await service.login("alice@example.com", "WrongPass1", mock_db)

    async def test_account_without_password(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_result(_make_user(password_hash=None)))
        with pytest.raises(PasswordNotSetError):
            await service.login("alice@example.com", "Pass1word", mock_db)

    async def test_success_returns_token_pair(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        user = _make_user()
        mock_db.execute = AsyncMock(return_value=_result(user))

        with patch("src.uni_gateway.user.service.verify_password", return_value=True):
            returned_user, access, refresh = await service.login(
                "alice@example.com", "Pass1word", mock_db
            )

        assert returned_user is user
        assert len(access) > 20
        assert access != refresh


class TestRefresh:
    async def test_valid_refresh_issues_access(self, service: UserService) -> None:
        token = await service.refresh(create_refresh_token("user-123"))
        assert isinstance(token, str)

    async def test_invalid_refresh_token_raises_error(self, service: UserService) -> None:
        with pytest.raises(InvalidRefreshTokenError):
            await service.refresh("not.a.real.token")

    async def test_access_token_used_as_refresh_raises_error(
        self, service: UserService
    ) -> None:
        with pytest.raises(InvalidRefreshTokenError):
            await service.refresh(create_access_token("user-123"))
