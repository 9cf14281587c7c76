"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Account
  3xxx: Market / Settlement
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/User ---

class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Email already registered", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid email or password", 401)


class InvalidRefreshTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "Refresh token is invalid or expired", 401)


class NicknameTakenError(AppError):
    def __init__(self, nickname: str) -> None:
        super().__init__(1006, f"Nickname already taken: {nickname}", 409)


class PasswordNotSetError(AppError):
    def __init__(self) -> None:
        super().__init__(1007, "Password sign-in is not enabled for this account", 401)


class AdminRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1008, "Admin privileges required", 403)


# --- 2xxx: Account ---

class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient balance: required {required} cents, available {available} cents",
            422,
        )


class UserNotFoundError(AppError):
    def __init__(self, identity: str) -> None:
        super().__init__(2002, f"User not found: {identity}", 404)


# --- 3xxx: Market / Settlement ---

class MarketNotFoundError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3001, f"Market not found: {market_id}", 404)


class MarketNotOpenError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3002, f"Market is not open for betting: {market_id}", 422)


class MarketAlreadyResolvedError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3003, f"Market already resolved: {market_id}", 409)


class InvalidOutcomeError(AppError):
    def __init__(self, declared: str) -> None:
        super().__init__(
            3004, f"Declared outcome matches neither option: {declared!r}", 422
        )


class MarketAlreadyReviewedError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3005, f"Market is not awaiting approval: {market_id}", 409)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class StoreFailureError(AppError):
    def __init__(self, detail: str = "Storage backend unavailable") -> None:
        super().__init__(9003, detail, 503)
