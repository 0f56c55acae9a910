"""cp_trip REST API — all endpoints require JWT authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.response import ApiResponse, respond
from src.cp_gateway.auth.dependencies import get_current_user_id
from src.cp_trip.application.schemas import PublishTripRequest
from src.cp_trip.application.service import TripLifecycleService

router = APIRouter(prefix="/trips", tags=["trips"])

_service = TripLifecycleService()


@router.post("/publish", status_code=201)
async def publish_trip(
    body: PublishTripRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.publish(db, user_id, body.to_command())
    return respond(request, data)


@router.get("/mine")
async def list_my_trips(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_my_trips(db, user_id)
    return respond(request, data)


@router.post("/{trip_id}/start")
async def start_trip(
    trip_id: int,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.start(db, user_id, trip_id)
    return respond(request, data)


@router.post("/{trip_id}/cancel")
async def cancel_trip(
    trip_id: int,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.cancel(db, user_id, trip_id)
    return respond(request, data)


@router.post("/{trip_id}/finish")
async def finish_trip(
    trip_id: int,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.finish(db, user_id, trip_id)
    return respond(request, data)
