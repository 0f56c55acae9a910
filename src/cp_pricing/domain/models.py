"""Domain models for cp_pricing — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any

from src.cp_common.enums import PriceStatus

MIN_SEATS = 1
MAX_SEATS = 5


@dataclass(frozen=True)
class Assumptions:
    """Globally configured pricing parameters (single row, read-only here)."""

    urban_price_per_km: Decimal
    interurban_price_per_km: Decimal
    fee_percentage: Decimal          # commission on trip value, 0-100
    fixed_rate: Decimal              # fixed commission per published seat
    price_limit_percentage: Decimal  # max deviation of driver price from suggested
    alert_threshold_percentage: Decimal  # deviation that flags a price high/low

    def __post_init__(self) -> None:
        for name, value in asdict(self).items():
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")

    def to_cache(self) -> dict[str, Any]:
        return {name: str(value) for name, value in asdict(self).items()}

    @classmethod
    def from_cache(cls, payload: dict[str, Any]) -> "Assumptions":
        return cls(**{name: Decimal(payload[name]) for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class GuaranteeBreakdown:
    trip_value: Decimal
    percentage_fee: Decimal      # ceil(trip_value x fee%)
    fixed_rate_total: Decimal    # fixed_rate x seats
    required_guarantee: Decimal


@dataclass(frozen=True)
class SeatCommission:
    """Commission retained when a single seat is validated."""

    percentage_commission: Decimal
    fixed_rate: Decimal
    total_commission: Decimal
    refund_amount: Decimal


@dataclass(frozen=True)
class TotalPrice:
    base_price: Decimal
    fee: Decimal
    total_price: Decimal


@dataclass(frozen=True)
class PriceCheck:
    status: PriceStatus
    deviation_percent: Decimal
