"""uni_market REST endpoints.

GET  /markets              : approved markets with traders count
GET  /markets/{market_id}  : full detail
POST /markets              : create (listing fee + approval queue for non-admins)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_common.database import get_db_session
from src.uni_common.response import ApiResponse, success_response
from src.uni_gateway.auth.dependencies import get_current_user
from src.uni_gateway.user.db_models import UserModel
from src.uni_market.application.schemas import CreateMarketRequest
from src.uni_market.application.service import MarketApplicationService

router = APIRouter(prefix="/markets", tags=["markets"])

_service = MarketApplicationService()


@router.get("")
async def list_markets(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.list_markets(db)
    return success_response([i.model_dump() for i in items], request)


@router.get("/{market_id}")
async def get_market(
    market_id: int,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_market(db, market_id)
    return success_response(result.model_dump(), request)


@router.post("")
async def create_market(
    body: CreateMarketRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_market(db, str(current_user.id), body)
    return success_response(result.model_dump(), request)
