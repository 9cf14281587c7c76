"""uni_betting REST endpoints.

POST /bets                     : place a stake
GET  /bets                     : caller's bet history with payout projection
GET  /markets/{market_id}/theses: theses on a market, largest stake first
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.uni_betting.application.schemas import PlaceBetRequest
from src.uni_betting.application.service import BettingService
from src.uni_common.database import get_db_session
from src.uni_common.response import ApiResponse, success_response
from src.uni_gateway.auth.dependencies import get_current_user
from src.uni_gateway.user.db_models import UserModel

router = APIRouter(prefix="/bets", tags=["bets"])
theses_router = APIRouter(prefix="/markets", tags=["markets"])

_service = BettingService()


@router.post("")
async def place_bet(
    body: PlaceBetRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.place_bet(
        db,
        current_user.email,
        body.market_id,
        body.option,
        body.amount_cents,
        body.thesis,
    )
    return success_response(result.model_dump(), request)


@router.get("")
async def bet_history(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.get_history(db, current_user.email)
    return success_response([i.model_dump() for i in items], request)


@theses_router.get("/{market_id}/theses")
async def list_theses(
    market_id: int,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.list_theses(db, market_id)
    return success_response([i.model_dump() for i in items], request)
