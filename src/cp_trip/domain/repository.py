"""Repository Protocol — dependency inversion for testability."""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.enums import TripStatus
from src.cp_trip.domain.draft import PublishCommand
from src.cp_trip.domain.models import Trip


class TripRepositoryProtocol(Protocol):
    async def get_for_update(self, db: AsyncSession, trip_id: int) -> Trip | None: ...

    async def list_by_user(self, db: AsyncSession, user_id: str) -> list[Trip]: ...

    async def insert(
        self,
        db: AsyncSession,
        user_id: str,
        command: PublishCommand,
        fee_percentage: Decimal,
        frozen_guarantee: Decimal,
    ) -> Trip: ...

    async def transition_status(
        self,
        db: AsyncSession,
        trip_id: int,
        expected: TripStatus,
        new_status: TripStatus,
    ) -> Trip | None: ...
