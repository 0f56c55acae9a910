"""Pydantic schemas for cp_trip API."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from src.cp_common.money import money_to_display
from src.cp_pricing.domain.models import MAX_SEATS, MIN_SEATS
from src.cp_trip.domain.draft import PublishCommand, TripDraft
from src.cp_trip.domain.models import Trip
from src.cp_trip.domain.ordering import get_trip_priority
from src.cp_wallet.domain.models import CancelSettlement, StartSettlement, Wallet

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PublishTripRequest(BaseModel):
    origin_id: int
    destination_id: int
    route_id: int | None = None
    distance_km: Decimal = Field(..., ge=0)
    is_urban: bool = True
    date_time: datetime
    seats: int = Field(..., ge=MIN_SEATS, le=MAX_SEATS)
    price_per_seat: Decimal = Field(..., gt=0)
    vehicle_id: int | None = None
    description: str | None = Field(None, max_length=500)

    def to_command(self) -> PublishCommand:
        """Replay the wizard steps in order; the route step precedes pricing."""
        draft = (
            TripDraft()
            .with_origin(self.origin_id)
            .with_destination(self.destination_id)
            .with_route(self.route_id, self.distance_km, self.is_urban)
            .with_schedule(self.date_time)
            .with_seats_and_price(self.seats, self.price_per_seat)
            .with_vehicle(self.vehicle_id, self.description)
        )
        return draft.to_publish_command()


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TripItem(BaseModel):
    id: int
    status: str
    seats: int
    seats_reserved: int
    price_per_seat: Decimal
    price_per_seat_display: str
    date_time: str | None
    origin_id: int | None
    destination_id: int | None
    route_id: int | None
    vehicle_id: int | None
    description: str | None
    priority_level: int
    priority_label: str
    has_notifications: bool

    @classmethod
    def from_domain(cls, t: Trip) -> "TripItem":
        priority = get_trip_priority(t)
        return cls(
            id=t.id,
            status=t.status,
            seats=t.seats,
            seats_reserved=t.seats_reserved,
            price_per_seat=t.price_per_seat,
            price_per_seat_display=money_to_display(t.price_per_seat),
            date_time=t.date_time.isoformat() if t.date_time else None,
            origin_id=t.origin_id,
            destination_id=t.destination_id,
            route_id=t.route_id,
            vehicle_id=t.vehicle_id,
            description=t.description,
            priority_level=priority.level,
            priority_label=priority.label,
            has_notifications=priority.has_notifications,
        )


class TripListResponse(BaseModel):
    items: list[TripItem]


class PublishTripResponse(BaseModel):
    trip: TripItem
    required_guarantee: Decimal
    required_guarantee_display: str
    balance: Decimal
    frozen_balance: Decimal


class StartTripResponse(BaseModel):
    trip_id: int
    status: str
    commission_per_seat: Decimal
    fee_on_sold_seats: Decimal
    fee_refund_unsold_seats: Decimal
    total_frozen_amount: Decimal
    retained_frozen_amount: Decimal | None = None
    balance: Decimal
    frozen_balance: Decimal

    @classmethod
    def from_domain(cls, trip: Trip, s: StartSettlement, w: Wallet) -> "StartTripResponse":
        return cls(
            trip_id=trip.id,
            status=trip.status,
            commission_per_seat=s.commission_per_seat,
            fee_on_sold_seats=s.fee_on_sold_seats,
            fee_refund_unsold_seats=s.fee_refund_unsold_seats,
            total_frozen_amount=s.total_frozen_amount,
            retained_frozen_amount=s.retained_amount,
            balance=w.balance,
            frozen_balance=w.frozen_balance,
        )


class CancelTripResponse(BaseModel):
    trip_id: int
    status: str
    refunded_amount: Decimal
    refunded_amount_display: str
    retained_frozen_amount: Decimal | None = None
    balance: Decimal
    frozen_balance: Decimal

    @classmethod
    def from_domain(cls, trip: Trip, c: CancelSettlement, w: Wallet) -> "CancelTripResponse":
        return cls(
            trip_id=trip.id,
            status=trip.status,
            refunded_amount=c.refunded_amount,
            refunded_amount_display=money_to_display(c.refunded_amount),
            retained_frozen_amount=c.retained_amount,
            balance=w.balance,
            frozen_balance=w.frozen_balance,
        )


class BalanceSummary(BaseModel):
    """Read-only view of the wallet once the trip is finished."""

    balance: Decimal
    balance_display: str
    frozen_balance: Decimal


class FinishTripResponse(BaseModel):
    trip_id: int
    status: str
    balance_summary: BalanceSummary

    @classmethod
    def from_domain(cls, trip: Trip, w: Wallet) -> "FinishTripResponse":
        return cls(
            trip_id=trip.id,
            status=trip.status,
            balance_summary=BalanceSummary(
                balance=w.balance,
                balance_display=money_to_display(w.balance),
                frozen_balance=w.frozen_balance,
            ),
        )
