"""Auth API: password registration, login and token refresh."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_common.database import get_db_session
from src.uni_common.response import ApiResponse, success_response
from src.uni_gateway.user.schemas import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
)
from src.uni_gateway.user.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])
_service = UserService()

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def _ok(request: Request, data: dict, message: str) -> ApiResponse:
    resp = success_response(data, request)
    resp.message = message
    return resp


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(request: Request, body: RegisterRequest, db: DbSession) -> ApiResponse:
    async with db.begin():
        user = await _service.register(body.email, body.password, db)
    return _ok(
        request, RegisterResponse.from_model(user).model_dump(), "Account created, choose a nickname"
    )


@router.post("/login")
async def login(request: Request, body: LoginRequest, db: DbSession) -> ApiResponse:
    user, access_token, refresh_token = await _service.login(body.email, body.password, db)
    data = LoginResponse.issue(user, access_token, refresh_token)
    return _ok(request, data.model_dump(), "Login successful")


@router.post("/refresh")
async def refresh(request: Request, body: RefreshRequest) -> ApiResponse:
    access_token = await _service.refresh(body.refresh_token)
    return _ok(request, RefreshResponse.issue(access_token).model_dump(), "Token refreshed")
