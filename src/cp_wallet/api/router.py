"""cp_wallet REST API — all endpoints require JWT authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.enums import TransactionType
from src.cp_common.response import ApiResponse, respond
from src.cp_gateway.auth.dependencies import get_current_user_id
from src.cp_wallet.application.schemas import CheckBalanceRequest
from src.cp_wallet.application.service import WalletApplicationService

router = APIRouter(prefix="/wallet", tags=["wallet"])

_service = WalletApplicationService()


@router.get("/info")
async def get_info(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_info(db, user_id)
    return respond(request, data)


@router.get("/balance")
async def get_balance(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(db, user_id)
    return respond(request, data)


@router.post("/check-balance")
async def check_balance(
    body: CheckBalanceRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.check_balance(db, user_id, body.seats, body.price_per_seat)
    return respond(request, data)


@router.get("/transactions")
async def list_transactions(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    transaction_type: TransactionType | None = Query(None, description="cobro | devolución"),
) -> ApiResponse:
    data = await _service.list_transactions(
        db,
        user_id,
        cursor,
        limit,
        transaction_type.value if transaction_type else None,
    )
    return respond(request, data)
