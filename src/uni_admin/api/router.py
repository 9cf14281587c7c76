"""Admin REST API. Every route requires the admin flag."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_admin.application.service import AdminService, ReviewRequest
from src.uni_common.database import get_db_session
from src.uni_common.response import ApiResponse, success_response
from src.uni_gateway.auth.dependencies import require_admin
from src.uni_gateway.user.db_models import UserModel
from src.uni_settlement.application.schemas import ResolveRequest
from src.uni_settlement.application.service import SettlementService

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()
_settlement = SettlementService()


@router.post("/markets/{market_id}/resolve")
async def resolve_market(
    market_id: int,
    body: ResolveRequest,
    request: Request,
    admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _settlement.resolve_market(db, market_id, body.outcome)
    return success_response(result.model_dump(), request)


@router.get("/markets/pending")
async def list_pending(
    request: Request,
    admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.list_pending(db)
    return success_response([i.model_dump() for i in items], request)


@router.post("/markets/{market_id}/review")
async def review_market(
    market_id: int,
    body: ReviewRequest,
    request: Request,
    admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.review_market(db, market_id, body.action, body.admin_notes)
    return success_response(result.model_dump(), request)
