"""Trip domain model — pure dataclass, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.cp_common.enums import TripStatus

# Historical status vocabulary still found in older rows and clients.
_LEGACY_STATUS_ALIASES: dict[str, str] = {
    "in_progress": TripStatus.STARTED.value,
    "completed": TripStatus.FINISHED.value,
    "cancelled": TripStatus.CANCELED.value,
}


def normalize_status(raw: str | None) -> str:
    """Map any stored status onto the canonical vocabulary.

    Unknown values are kept verbatim (lower-cased) so they can still be
    displayed and ranked last; only the persistence boundary calls this.
    """
    if raw is None:
        return ""
    value = raw.strip().lower()
    return _LEGACY_STATUS_ALIASES.get(value, value)


def stored_forms(status: TripStatus) -> list[str]:
    """Every raw value that normalizes to status (canonical first)."""
    legacy = [raw for raw, canonical in _LEGACY_STATUS_ALIASES.items() if canonical == status.value]
    return [status.value, *legacy]


@dataclass
class Trip:
    id: int
    user_id: str
    seats: int                 # seats still available (unsold)
    seats_reserved: int        # seats sold
    price_per_seat: Decimal
    status: str                # TripStatus value, or an unknown raw status
    date_time: datetime | None = None
    origin_id: int | None = None
    destination_id: int | None = None
    route_id: int | None = None
    vehicle_id: int | None = None
    description: str | None = None
    created_at: datetime | None = None
    # Recorded at publish; None on rows published before they were stored
    fee_percentage: Decimal | None = None
    frozen_guarantee: Decimal | None = None

    @property
    def total_seats_published(self) -> int:
        """Seats originally published, rebuilt from what remains plus what sold."""
        return self.seats + self.seats_reserved

    @property
    def is_active(self) -> bool:
        return self.status == TripStatus.ACTIVE
