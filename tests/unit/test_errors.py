"""Tests for uni_common.errors and uni_common.response."""

from src.uni_common.errors import (
    AdminRequiredError,
    AppError,
    InsufficientBalanceError,
    InvalidOutcomeError,
    MarketAlreadyResolvedError,
    MarketAlreadyReviewedError,
    MarketNotFoundError,
    MarketNotOpenError,
    StoreFailureError,
    UserNotFoundError,
)
from src.uni_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_custom_http_status(self) -> None:
        err = AppError(code=1002, message="Email taken", http_status=409)
        assert err.http_status == 409

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1, message="x"), Exception)


class TestSpecificErrors:
    def test_insufficient_balance(self) -> None:
        err = InsufficientBalanceError(required=6500, available=3000)
        assert err.code == 2001
        assert err.http_status == 422
        assert "6500" in err.message
        assert "3000" in err.message

    def test_user_not_found(self) -> None:
        err = UserNotFoundError("bob@example.com")
        assert (err.code, err.http_status) == (2002, 404)
        assert "bob@example.com" in err.message

    def test_market_not_found(self) -> None:
        err = MarketNotFoundError(42)
        assert (err.code, err.http_status) == (3001, 404)

    def test_market_not_open(self) -> None:
        assert MarketNotOpenError(42).http_status == 422

    def test_already_resolved_is_conflict(self) -> None:
        err = MarketAlreadyResolvedError(42)
        assert (err.code, err.http_status) == (3003, 409)

    def test_invalid_outcome_quotes_input(self) -> None:
        err = InvalidOutcomeError("maybe")
        assert err.code == 3004
        assert "'maybe'" in err.message

    def test_already_reviewed(self) -> None:
        assert MarketAlreadyReviewedError(1).code == 3005

    def test_admin_required(self) -> None:
        assert AdminRequiredError().http_status == 403

    def test_store_failure(self) -> None:
        err = StoreFailureError()
        assert (err.code, err.http_status) == (9003, 503)


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"id": 7})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"id": 7}

    def test_error(self) -> None:
        resp = error_response(2001, "Insufficient balance")
        assert resp.code == 2001
        assert resp.data is None

    def test_serialization(self) -> None:
        d = success_response({"pool": 100}).model_dump()
        for key in ("code", "message", "data", "timestamp", "request_id"):
            assert key in d

    def test_request_id_taken_from_request_state(self) -> None:
        class _State:
            request_id = "req_abc"

        class _Req:
            state = _State()

        resp = success_response(None, _Req())  # type: ignore[arg-type]
        assert resp.request_id == "req_abc"

    def test_default_request_id(self) -> None:
        assert isinstance(ApiResponse().request_id, str)

    def test_error_carries_request_id(self) -> None:
        class _State:
            request_id = "req_err"

        class _Req:
            state = _State()

        resp = error_response(3001, "Market not found", _Req())  # type: ignore[arg-type]
        assert resp.request_id == "req_err"
        assert resp.data is None
