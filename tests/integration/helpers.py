"""DB helpers for integration tests: seed wallets, simulate seat bookings."""

import uuid
from decimal import Decimal

from sqlalchemy import text

from src.cp_common.database import async_session_factory
from src.cp_gateway.auth.jwt_handler import create_access_token


async def create_driver(balance: Decimal) -> tuple[str, dict[str, str]]:
    """Insert a wallet for a fresh user id and return (user_id, auth headers)."""
    user_id = f"driver_{uuid.uuid4().hex[:8]}"
    async with async_session_factory() as session:
        await session.execute(
            text("INSERT INTO wallets (user_id, balance) VALUES (:user_id, :balance)"),
            {"user_id": user_id, "balance": balance},
        )
        await session.commit()
    return user_id, {"Authorization": f"Bearer {create_access_token(user_id)}"}


async def reserve_seats(trip_id: int, count: int) -> None:
    """Simulate passengers buying seats (booking lives outside this service)."""
    async with async_session_factory() as session:
        await session.execute(
            text(
                "UPDATE trips SET seats = seats - :n, seats_reserved = seats_reserved + :n "
                "WHERE id = :trip_id"
            ),
            {"n": count, "trip_id": trip_id},
        )
        await session.commit()
