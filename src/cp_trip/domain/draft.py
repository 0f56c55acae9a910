"""TripDraft — the publish wizard's state as an explicit value object.

Each wizard step takes the current draft and returns a new one; nothing is
kept in ambient/global storage. The client (or a server-side draft store
keyed by user) holds the value between steps. to_publish_command() is the
only way out of the wizard and validates completeness.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal

from src.cp_common.errors import InvalidSeatCountError
from src.cp_pricing.domain.models import MAX_SEATS, MIN_SEATS


class IncompleteDraftError(ValueError):
    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Trip draft is missing: {', '.join(missing)}")


@dataclass(frozen=True)
class PublishCommand:
    origin_id: int
    destination_id: int
    route_id: int | None
    distance_km: Decimal
    is_urban: bool
    date_time: datetime
    seats: int
    price_per_seat: Decimal
    vehicle_id: int | None
    description: str | None


@dataclass(frozen=True)
class TripDraft:
    origin_id: int | None = None
    destination_id: int | None = None
    route_id: int | None = None
    distance_km: Decimal | None = None
    is_urban: bool = True
    date_time: datetime | None = None
    seats: int | None = None
    price_per_seat: Decimal | None = None
    vehicle_id: int | None = None
    description: str | None = None

    def with_origin(self, origin_id: int) -> "TripDraft":
        return replace(self, origin_id=origin_id)

    def with_destination(self, destination_id: int) -> "TripDraft":
        return replace(self, destination_id=destination_id)

    def with_route(self, route_id: int | None, distance_km: Decimal, is_urban: bool) -> "TripDraft":
        if distance_km < 0:
            raise ValueError(f"distance_km must be >= 0, got {distance_km}")
        # price_per_seat belongs to the previous route
        return replace(
            self, route_id=route_id, distance_km=distance_km, is_urban=is_urban, price_per_seat=None
        )

    def with_schedule(self, date_time: datetime) -> "TripDraft":
        return replace(self, date_time=date_time)

    def with_seats_and_price(self, seats: int, price_per_seat: Decimal) -> "TripDraft":
        if not MIN_SEATS <= seats <= MAX_SEATS:
            raise InvalidSeatCountError(seats, MIN_SEATS, MAX_SEATS)
        if price_per_seat <= 0:
            raise ValueError(f"price_per_seat must be > 0, got {price_per_seat}")
        return replace(self, seats=seats, price_per_seat=price_per_seat)

    def with_vehicle(self, vehicle_id: int | None, description: str | None = None) -> "TripDraft":
        return replace(self, vehicle_id=vehicle_id, description=description)

    def missing_fields(self) -> list[str]:
        required = ("origin_id", "destination_id", "distance_km", "date_time", "seats", "price_per_seat")
        return [name for name in required if getattr(self, name) is None]

    def to_publish_command(self) -> PublishCommand:
        missing = self.missing_fields()
        if missing:
            raise IncompleteDraftError(missing)
        return PublishCommand(
            origin_id=self.origin_id,  # type: ignore[arg-type]
            destination_id=self.destination_id,  # type: ignore[arg-type]
            route_id=self.route_id,
            distance_km=self.distance_km,  # type: ignore[arg-type]
            is_urban=self.is_urban,
            date_time=self.date_time,  # type: ignore[arg-type]
            seats=self.seats,  # type: ignore[arg-type]
            price_per_seat=self.price_per_seat,  # type: ignore[arg-type]
            vehicle_id=self.vehicle_id,
            description=self.description,
        )
