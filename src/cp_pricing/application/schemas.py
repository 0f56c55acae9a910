"""Pydantic schemas for cp_pricing API.

Money fields are Decimal and serialize as strings in JSON ("6000.00"), each
paired with a *_display string for the client.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from src.cp_common.money import money_to_display
from src.cp_pricing.domain.models import (
    MAX_SEATS,
    MIN_SEATS,
    Assumptions,
    GuaranteeBreakdown,
    PriceCheck,
    SeatCommission,
    TotalPrice,
)

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class TripPriceRequest(BaseModel):
    distance_km: Decimal = Field(..., ge=0, description="Route distance in km")
    is_urban: bool = True


class SuggestedPriceRequest(BaseModel):
    distance_km: Decimal | None = Field(None, ge=0, description="Route distance; omit if unknown")
    is_urban: bool = True


class FeeRequest(BaseModel):
    trip_price: Decimal = Field(..., ge=0)


class PublishingCostsRequest(BaseModel):
    seats: int = Field(..., ge=MIN_SEATS, le=MAX_SEATS)
    price_per_seat: Decimal = Field(..., gt=0)


class SeatCommissionRequest(BaseModel):
    price_per_seat: Decimal = Field(..., gt=0)


class ValidatePriceRequest(BaseModel):
    current_price: Decimal = Field(..., ge=0)
    suggested_price: Decimal = Field(..., ge=0)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CurrentPricingResponse(BaseModel):
    urban_price_per_km: Decimal
    interurban_price_per_km: Decimal
    fee_percentage: Decimal
    fixed_rate: Decimal
    price_limit_percentage: Decimal
    alert_threshold_percentage: Decimal

    @classmethod
    def from_domain(cls, a: Assumptions) -> "CurrentPricingResponse":
        return cls(
            urban_price_per_km=a.urban_price_per_km,
            interurban_price_per_km=a.interurban_price_per_km,
            fee_percentage=a.fee_percentage,
            fixed_rate=a.fixed_rate,
            price_limit_percentage=a.price_limit_percentage,
            alert_threshold_percentage=a.alert_threshold_percentage,
        )


class TripPriceResponse(BaseModel):
    distance_km: Decimal
    is_urban: bool
    base_price: Decimal
    base_price_display: str


class SuggestedPriceResponse(BaseModel):
    suggested_price_per_seat: Decimal
    suggested_price_display: str
    min_price: Decimal
    max_price: Decimal


class FeeResponse(BaseModel):
    trip_price: Decimal
    fee: Decimal
    fee_display: str


class TotalPriceResponse(BaseModel):
    base_price: Decimal
    fee: Decimal
    total_price: Decimal
    total_price_display: str

    @classmethod
    def from_domain(cls, t: TotalPrice) -> "TotalPriceResponse":
        return cls(
            base_price=t.base_price,
            fee=t.fee,
            total_price=t.total_price,
            total_price_display=money_to_display(t.total_price),
        )


class PublishingCostsResponse(BaseModel):
    seats: int
    price_per_seat: Decimal
    trip_value: Decimal
    percentage_fee: Decimal
    fixed_rate_total: Decimal
    required_guarantee: Decimal
    required_guarantee_display: str

    @classmethod
    def from_domain(
        cls, seats: int, price_per_seat: Decimal, g: GuaranteeBreakdown
    ) -> "PublishingCostsResponse":
        return cls(
            seats=seats,
            price_per_seat=price_per_seat,
            trip_value=g.trip_value,
            percentage_fee=g.percentage_fee,
            fixed_rate_total=g.fixed_rate_total,
            required_guarantee=g.required_guarantee,
            required_guarantee_display=money_to_display(g.required_guarantee),
        )


class SeatCommissionResponse(BaseModel):
    percentage_commission: Decimal
    fixed_rate: Decimal
    total_commission: Decimal
    refund_amount: Decimal

    @classmethod
    def from_domain(cls, c: SeatCommission) -> "SeatCommissionResponse":
        return cls(
            percentage_commission=c.percentage_commission,
            fixed_rate=c.fixed_rate,
            total_commission=c.total_commission,
            refund_amount=c.refund_amount,
        )


class PriceValidationResponse(BaseModel):
    status: str
    deviation_percent: Decimal
    clamped_price: Decimal
    min_price: Decimal
    max_price: Decimal

    @classmethod
    def from_domain(
        cls, check: PriceCheck, clamped: Decimal, limits: tuple[Decimal, Decimal]
    ) -> "PriceValidationResponse":
        return cls(
            status=check.status.value,
            deviation_percent=check.deviation_percent,
            clamped_price=clamped,
            min_price=limits[0],
            max_price=limits[1],
        )
