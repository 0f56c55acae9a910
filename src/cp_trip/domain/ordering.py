"""Priority ordering of a driver's trip list.

Order:
  1. Active trips with reserved seats (passengers waiting) first
  2. Status rank: started < active < finished < canceled < anything else
  3. Within a status: finished/canceled most recent first, others soonest first

sorted() is stable, so trips with equal keys keep their input order.
"""

from dataclasses import dataclass
from datetime import timezone

from src.cp_common.enums import TripStatus
from src.cp_trip.domain.models import Trip

_STATUS_RANK: dict[str, int] = {
    TripStatus.STARTED.value: 1,
    TripStatus.ACTIVE.value: 2,
    TripStatus.FINISHED.value: 3,
    TripStatus.CANCELED.value: 4,
}
_UNKNOWN_RANK = 5

_STATUS_LABEL: dict[str, str] = {
    TripStatus.STARTED.value: "En Progreso",
    TripStatus.ACTIVE.value: "Activo",
    TripStatus.FINISHED.value: "Terminado",
    TripStatus.CANCELED.value: "Cancelado",
}
_UNKNOWN_LABEL = "Desconocido"

_PAST_FIRST = (TripStatus.FINISHED.value, TripStatus.CANCELED.value)


@dataclass(frozen=True)
class TripPriority:
    level: int  # 0 when passengers are waiting, else the status rank
    label: str
    has_notifications: bool


def trip_has_notifications(trip: Trip) -> bool:
    return trip.seats_reserved > 0 and trip.is_active


def _timestamp(trip: Trip) -> float:
    if trip.date_time is None:
        return 0.0
    dt = trip.date_time
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def _priority_key(trip: Trip) -> tuple[int, int, float]:
    ts = _timestamp(trip)
    return (
        0 if trip_has_notifications(trip) else 1,
        _STATUS_RANK.get(trip.status, _UNKNOWN_RANK),
        -ts if trip.status in _PAST_FIRST else ts,
    )


def sort_trips_by_priority(trips: list[Trip]) -> list[Trip]:
    """Return a new list in display priority order; the input is not mutated."""
    return sorted(trips, key=_priority_key)


def get_trip_priority(trip: Trip) -> TripPriority:
    has_notifications = trip_has_notifications(trip)
    level = _STATUS_RANK.get(trip.status, _UNKNOWN_RANK)
    label = _STATUS_LABEL.get(trip.status, _UNKNOWN_LABEL)
    if has_notifications:
        return TripPriority(level=0, label=f"{label} (Con Notificaciones)", has_notifications=True)
    return TripPriority(level=level, label=label, has_notifications=False)
