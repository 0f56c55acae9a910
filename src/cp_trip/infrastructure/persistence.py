"""TripRepository — concrete implementation of TripRepositoryProtocol.

All queries use raw text() SQL (no ORM). Legacy status spellings are
normalized in the row mapper and matched in the guarded UPDATE, so the
rest of the code only ever sees the canonical vocabulary.

Lifecycle transitions lock the trip row (SELECT ... FOR UPDATE) and then
issue a status-guarded UPDATE; two concurrent transitions on one trip can
never both succeed.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.enums import TripStatus
from src.cp_common.errors import InternalError
from src.cp_trip.domain.draft import PublishCommand
from src.cp_trip.domain.models import Trip, normalize_status, stored_forms

_TRIP_COLUMNS = """
    id, user_id, seats, seats_reserved, price_per_seat, status, date_time,
    origin_id, destination_id, route_id, vehicle_id, description, created_at,
    fee_percentage, frozen_guarantee
"""

_GET_FOR_UPDATE_SQL = text(f"""
    SELECT {_TRIP_COLUMNS}
    FROM trips
    WHERE id = :trip_id
    FOR UPDATE
""")

_LIST_BY_USER_SQL = text(f"""
    SELECT {_TRIP_COLUMNS}
    FROM trips
    WHERE user_id = :user_id
    ORDER BY date_time, id
""")

_INSERT_SQL = text(f"""
    INSERT INTO trips
        (user_id, origin_id, destination_id, route_id, vehicle_id,
         date_time, seats, seats_reserved, price_per_seat, status, description,
         fee_percentage, frozen_guarantee)
    VALUES
        (:user_id, :origin_id, :destination_id, :route_id, :vehicle_id,
         :date_time, :seats, 0, :price_per_seat, :status, :description,
         :fee_percentage, :frozen_guarantee)
    RETURNING {_TRIP_COLUMNS}
""")

_TRANSITION_SQL = text(f"""
    UPDATE trips
    SET status = :new_status,
        updated_at = NOW()
    WHERE id = :trip_id
      AND status = ANY(CAST(:accepted AS TEXT[]))
    RETURNING {_TRIP_COLUMNS}
""")


def _row_to_trip(row: object) -> Trip:
    return Trip(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        seats=row.seats or 0,  # type: ignore[attr-defined]
        seats_reserved=row.seats_reserved or 0,  # type: ignore[attr-defined]
        price_per_seat=row.price_per_seat,  # type: ignore[attr-defined]
        status=normalize_status(row.status),  # type: ignore[attr-defined]
        date_time=row.date_time,  # type: ignore[attr-defined]
        origin_id=row.origin_id,  # type: ignore[attr-defined]
        destination_id=row.destination_id,  # type: ignore[attr-defined]
        route_id=row.route_id,  # type: ignore[attr-defined]
        vehicle_id=row.vehicle_id,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        fee_percentage=row.fee_percentage,  # type: ignore[attr-defined]
        frozen_guarantee=row.frozen_guarantee,  # type: ignore[attr-defined]
    )


class TripRepository:
    async def get_for_update(self, db: AsyncSession, trip_id: int) -> Trip | None:
        result = await db.execute(_GET_FOR_UPDATE_SQL, {"trip_id": trip_id})
        row = result.fetchone()
        return _row_to_trip(row) if row else None

    async def list_by_user(self, db: AsyncSession, user_id: str) -> list[Trip]:
        result = await db.execute(_LIST_BY_USER_SQL, {"user_id": user_id})
        return [_row_to_trip(row) for row in result.fetchall()]

    async def insert(
        self,
        db: AsyncSession,
        user_id: str,
        command: PublishCommand,
        fee_percentage: Decimal,
        frozen_guarantee: Decimal,
    ) -> Trip:
        result = await db.execute(
            _INSERT_SQL,
            {
                "user_id": user_id,
                "origin_id": command.origin_id,
                "destination_id": command.destination_id,
                "route_id": command.route_id,
                "vehicle_id": command.vehicle_id,
                "date_time": command.date_time,
                "seats": command.seats,
                "price_per_seat": command.price_per_seat,
                "status": TripStatus.ACTIVE.value,
                "description": command.description,
                "fee_percentage": fee_percentage,
                "frozen_guarantee": frozen_guarantee,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Trip insert returned no rows")
        return _row_to_trip(row)

    async def transition_status(
        self,
        db: AsyncSession,
        trip_id: int,
        expected: TripStatus,
        new_status: TripStatus,
    ) -> Trip | None:
        """Move the trip to new_status only if it is still in expected. None otherwise."""
        result = await db.execute(
            _TRANSITION_SQL,
            {
                "trip_id": trip_id,
                "new_status": new_status.value,
                "accepted": stored_forms(expected),
            },
        )
        row = result.fetchone()
        return _row_to_trip(row) if row else None
