"""Unit tests for cp_trip domain: status normalization and the publish draft."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from src.cp_common.enums import TripStatus
from src.cp_common.errors import InvalidSeatCountError
from src.cp_trip.domain.draft import IncompleteDraftError, TripDraft
from src.cp_trip.domain.models import Trip, normalize_status, stored_forms


class TestNormalizeStatus:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("in_progress", "started"),
            ("completed", "finished"),
            ("cancelled", "canceled"),
            ("ACTIVE", "active"),
            (" started ", "started"),
            ("canceled", "canceled"),
        ],
    )
    def test_known_values(self, raw: str, expected: str) -> None:
        assert normalize_status(raw) == expected

    def test_unknown_value_kept(self) -> None:
        assert normalize_status("Paused") == "paused"

    def test_none_becomes_empty(self) -> None:
        assert normalize_status(None) == ""

    def test_stored_forms_include_legacy(self) -> None:
        assert stored_forms(TripStatus.STARTED) == ["started", "in_progress"]
        assert stored_forms(TripStatus.ACTIVE) == ["active"]


class TestTrip:
    def test_total_seats_published(self) -> None:
        trip = Trip(id=1, user_id="u", seats=2, seats_reserved=3, price_per_seat=Decimal(1), status="active")
        assert trip.total_seats_published == 5
        assert trip.is_active


def _complete_draft() -> TripDraft:
    return (
        TripDraft()
        .with_origin(1)
        .with_destination(2)
        .with_route(9, Decimal(12), is_urban=True)
        .with_schedule(datetime(2026, 11, 1, 8, 0, tzinfo=UTC))
        .with_seats_and_price(3, Decimal(10000))
    )


class TestTripDraft:
    def test_steps_do_not_mutate(self) -> None:
        empty = TripDraft()
        with_origin = empty.with_origin(1)
        assert empty.origin_id is None
        assert with_origin.origin_id == 1

    def test_complete_draft_builds_command(self) -> None:
        cmd = _complete_draft().with_vehicle(4, "Sin mascotas").to_publish_command()
        assert cmd.seats == 3
        assert cmd.price_per_seat == Decimal(10000)
        assert cmd.distance_km == Decimal(12)
        assert cmd.vehicle_id == 4
        assert cmd.description == "Sin mascotas"

    def test_missing_fields_reported(self) -> None:
        draft = TripDraft().with_origin(1)
        with pytest.raises(IncompleteDraftError) as exc_info:
            draft.to_publish_command()
        assert "destination_id" in exc_info.value.missing
        assert "origin_id" not in exc_info.value.missing

    def test_new_route_resets_price(self) -> None:
        draft = _complete_draft().with_route(10, Decimal(30), is_urban=False)
        assert draft.price_per_seat is None
        assert "price_per_seat" in draft.missing_fields()

    def test_negative_distance_rejected(self) -> None:
        with pytest.raises(ValueError):
            TripDraft().with_route(None, Decimal(-1), is_urban=True)

    @pytest.mark.parametrize("seats", [0, 6])
    def test_seat_bounds(self, seats: int) -> None:
        with pytest.raises(InvalidSeatCountError):
            TripDraft().with_seats_and_price(seats, Decimal(10000))

    def test_price_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            TripDraft().with_seats_and_price(2, Decimal(0))
