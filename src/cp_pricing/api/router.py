"""cp_pricing REST endpoints — public, no authentication required.

GET  /assumptions/current-pricing
POST /assumptions/calculate-trip-price
POST /assumptions/calculate-suggested-price
POST /assumptions/calculate-fee
POST /assumptions/calculate-total-price
POST /assumptions/publishing-costs
POST /assumptions/seat-commission
POST /assumptions/validate-price
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.response import ApiResponse, respond
from src.cp_pricing.application.schemas import (
    FeeRequest,
    PublishingCostsRequest,
    SeatCommissionRequest,
    SuggestedPriceRequest,
    TripPriceRequest,
    ValidatePriceRequest,
)
from src.cp_pricing.application.service import PricingApplicationService

router = APIRouter(prefix="/assumptions", tags=["pricing"])

_service = PricingApplicationService()


@router.get("/current-pricing")
async def current_pricing(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return respond(request, await _service.current_pricing(db))


@router.post("/calculate-trip-price")
async def calculate_trip_price(
    body: TripPriceRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return respond(request, await _service.trip_price(db, body.distance_km, body.is_urban))


@router.post("/calculate-suggested-price")
async def calculate_suggested_price(
    body: SuggestedPriceRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return respond(
        request, await _service.suggested_price(db, body.distance_km, body.is_urban)
    )


@router.post("/calculate-fee")
async def calculate_fee(
    body: FeeRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return respond(request, await _service.fee(db, body.trip_price))


@router.post("/calculate-total-price")
async def calculate_total_price(
    body: TripPriceRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return respond(request, await _service.total_price(db, body.distance_km, body.is_urban))


@router.post("/publishing-costs")
async def publishing_costs(
    body: PublishingCostsRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return respond(
        request, await _service.publishing_costs(db, body.seats, body.price_per_seat)
    )


@router.post("/seat-commission")
async def seat_commission(
    body: SeatCommissionRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return respond(request, await _service.seat_commission(db, body.price_per_seat))


@router.post("/validate-price")
async def validate_price(
    body: ValidatePriceRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return respond(
        request, await _service.validate_price(db, body.current_price, body.suggested_price)
    )
