"""Unit tests for TripRepository using MagicMock AsyncSession."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cp_common.enums import TripStatus
from src.cp_trip.domain.draft import PublishCommand
from src.cp_trip.infrastructure.persistence import TripRepository


def _make_trip_row(**kwargs) -> MagicMock:  # type: ignore[no-untyped-def]
    row = MagicMock()
    row.id = kwargs.get("id", 7)
    row.user_id = kwargs.get("user_id", "driver-1")
    row.seats = kwargs.get("seats", 2)
    row.seats_reserved = kwargs.get("seats_reserved", 0)
    row.price_per_seat = Decimal(kwargs.get("price_per_seat", 10000))
    row.status = kwargs.get("status", "active")
    row.date_time = datetime(2026, 11, 1, 8, 0, tzinfo=UTC)
    row.origin_id = 1
    row.destination_id = 2
    row.route_id = None
    row.vehicle_id = None
    row.description = None
    row.created_at = datetime.now(UTC)
    row.fee_percentage = kwargs.get("fee_percentage")
    row.frozen_guarantee = kwargs.get("frozen_guarantee")
    return row


def _result(row: object) -> MagicMock:
    result = MagicMock()
    result.fetchone.return_value = row
    return result


@pytest.fixture
def db() -> MagicMock:
    return MagicMock()


class TestGetForUpdate:
    async def test_legacy_status_normalized(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_result(_make_trip_row(status="in_progress")))
        trip = await TripRepository().get_for_update(db, 7)
        assert trip is not None
        assert trip.status == "started"

    async def test_missing_returns_none(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_result(None))
        assert await TripRepository().get_for_update(db, 404) is None


class TestTransitionStatus:
    async def test_passes_expected_aliases(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_result(_make_trip_row(status="finished")))

        trip = await TripRepository().transition_status(
            db, 7, TripStatus.STARTED, TripStatus.FINISHED
        )

        assert trip is not None
        assert trip.status == "finished"
        params = db.execute.await_args.args[1]
        assert params["new_status"] == "finished"
        assert params["accepted"] == ["started", "in_progress"]

    async def test_lost_race_returns_none(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_result(None))
        trip = await TripRepository().transition_status(
            db, 7, TripStatus.ACTIVE, TripStatus.STARTED
        )
        assert trip is None


class TestInsertAndList:
    async def test_insert_starts_active(self, db: MagicMock) -> None:
        row = _make_trip_row(seats=3, fee_percentage=Decimal(15), frozen_guarantee=Decimal(6000))
        db.execute = AsyncMock(return_value=_result(row))
        cmd = PublishCommand(
            origin_id=1,
            destination_id=2,
            route_id=None,
            distance_km=Decimal(12),
            is_urban=True,
            date_time=datetime(2026, 11, 1, 8, 0, tzinfo=UTC),
            seats=3,
            price_per_seat=Decimal(10000),
            vehicle_id=None,
            description=None,
        )

        trip = await TripRepository().insert(db, "driver-1", cmd, Decimal(15), Decimal(6000))

        assert trip.seats == 3
        assert trip.fee_percentage == Decimal(15)
        assert trip.frozen_guarantee == Decimal(6000)
        params = db.execute.await_args.args[1]
        assert params["status"] == "active"
        assert params["user_id"] == "driver-1"
        assert params["fee_percentage"] == Decimal(15)
        assert params["frozen_guarantee"] == Decimal(6000)

    async def test_list_by_user(self, db: MagicMock) -> None:
        result = MagicMock()
        result.fetchall.return_value = [_make_trip_row(id=1, status="cancelled"), _make_trip_row(id=2)]
        db.execute = AsyncMock(return_value=result)

        trips = await TripRepository().list_by_user(db, "driver-1")

        assert [t.id for t in trips] == [1, 2]
        assert trips[0].status == "canceled"
        assert trips[0].fee_percentage is None
