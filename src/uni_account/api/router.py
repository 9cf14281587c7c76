"""uni_account REST API: balance, deposit, ledger, profile, leaderboard."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_account.application.schemas import DepositRequest, ProfileRequest
from src.uni_account.application.service import AccountApplicationService
from src.uni_common.database import get_db_session
from src.uni_common.response import ApiResponse, success_response
from src.uni_gateway.auth.dependencies import get_current_user
from src.uni_gateway.user.db_models import UserModel

router = APIRouter(prefix="/account", tags=["account"])
leaderboard_router = APIRouter(tags=["leaderboard"])

_service = AccountApplicationService()


@router.get("/balance")
async def get_balance(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(db, str(current_user.id))
    return success_response(data.model_dump(), request)


@router.post("/deposit")
async def deposit(
    body: DepositRequest,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.deposit(db, str(current_user.id), body.amount_cents)
    return success_response(data.model_dump(), request)


@router.put("/profile")
async def update_profile(
    body: ProfileRequest,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.update_profile(
        db, str(current_user.id), body.nickname, body.phone_number
    )
    return success_response(data.model_dump(), request)


@router.get("/ledger")
async def list_ledger(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    entry_type: str | None = Query(None, description="Filter by LedgerEntryType"),
) -> ApiResponse:
    data = await _service.list_ledger(
        db, str(current_user.id), cursor, limit, entry_type
    )
    return success_response(data.model_dump(), request)


@leaderboard_router.get("/leaderboard")
async def leaderboard(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    items = await _service.leaderboard(db)
    return success_response([i.model_dump() for i in items], request)
