"""PricingEngine — suggested seat prices and publishing guarantees.

Pure computation over an Assumptions snapshot. No I/O; the application
service loads the snapshot and hands it in.

Guarantee (frozen from the driver's wallet at publish time):
    trip_value        = seats x price_per_seat
    percentage_fee    = ceil(trip_value x fee_percentage / 100)
    fixed_rate_total  = fixed_rate x seats
    required          = percentage_fee + fixed_rate_total

The percentage fee is rounded UP to the whole peso, never to nearest.
"""

from decimal import Decimal

from src.cp_common.enums import PriceStatus
from src.cp_common.errors import ConfigUnavailableError
from src.cp_common.money import ZERO, ceil_whole, percent_of, quantize_cents, to_decimal
from src.cp_pricing.domain.models import (
    Assumptions,
    GuaranteeBreakdown,
    PriceCheck,
    SeatCommission,
    TotalPrice,
)

DEFAULT_REFERENCE_OCCUPANCY = 4
DEFAULT_PRICE_FLOOR = Decimal(5000)


class PricingEngine:
    def __init__(
        self,
        assumptions: Assumptions | None,
        reference_occupancy: int = DEFAULT_REFERENCE_OCCUPANCY,
        price_floor: Decimal = DEFAULT_PRICE_FLOOR,
    ) -> None:
        if reference_occupancy <= 0:
            raise ValueError(f"reference_occupancy must be > 0, got {reference_occupancy}")
        self._assumptions = assumptions
        self._reference_occupancy = reference_occupancy
        self._price_floor = to_decimal(price_floor)

    @property
    def assumptions(self) -> Assumptions:
        if self._assumptions is None:
            raise ConfigUnavailableError()
        return self._assumptions

    def current_pricing(self) -> Assumptions:
        return self.assumptions

    # ------------------------------------------------------------------
    # Route pricing
    # ------------------------------------------------------------------

    def calculate_trip_price(self, distance_km: Decimal, is_urban: bool = True) -> Decimal:
        distance = to_decimal(distance_km)
        if distance < 0:
            raise ValueError(f"distance_km must be >= 0, got {distance}")
        a = self.assumptions
        rate = a.urban_price_per_km if is_urban else a.interurban_price_per_km
        return distance * rate

    def calculate_suggested_price_per_seat(
        self, distance_km: Decimal | None, is_urban: bool = True
    ) -> Decimal:
        """Trip price split over the reference occupancy, whatever the published seats.

        Falls back to the price floor when the distance is unknown or zero.
        """
        if self._assumptions is None:
            raise ConfigUnavailableError()
        if distance_km is None or to_decimal(distance_km) == 0:
            return self._price_floor
        return self.calculate_trip_price(distance_km, is_urban) / self._reference_occupancy

    def calculate_fee(self, trip_price: Decimal) -> Decimal:
        return percent_of(to_decimal(trip_price), self.assumptions.fee_percentage)

    def calculate_total_price(self, distance_km: Decimal, is_urban: bool = True) -> TotalPrice:
        base = self.calculate_trip_price(distance_km, is_urban)
        fee = self.calculate_fee(base)
        return TotalPrice(base_price=base, fee=fee, total_price=base + fee)

    # ------------------------------------------------------------------
    # Commissions
    # ------------------------------------------------------------------

    def calculate_required_guarantee(
        self, seats: int, price_per_seat: Decimal
    ) -> GuaranteeBreakdown:
        if seats < 0:
            raise ValueError(f"seats must be >= 0, got {seats}")
        price = to_decimal(price_per_seat)
        if price < 0:
            raise ValueError(f"price_per_seat must be >= 0, got {price}")
        a = self.assumptions
        trip_value = price * seats
        percentage_fee = ceil_whole(percent_of(trip_value, a.fee_percentage))
        fixed_rate_total = a.fixed_rate * seats
        return GuaranteeBreakdown(
            trip_value=trip_value,
            percentage_fee=percentage_fee,
            fixed_rate_total=fixed_rate_total,
            required_guarantee=percentage_fee + fixed_rate_total,
        )

    def calculate_seat_commission(self, price_per_seat: Decimal) -> SeatCommission:
        price = to_decimal(price_per_seat)
        a = self.assumptions
        percentage_commission = ceil_whole(percent_of(price, a.fee_percentage))
        total = percentage_commission + a.fixed_rate
        return SeatCommission(
            percentage_commission=percentage_commission,
            fixed_rate=a.fixed_rate,
            total_commission=total,
            refund_amount=price - total,
        )

    # ------------------------------------------------------------------
    # Driver price validation
    # ------------------------------------------------------------------

    def validate_price_range(self, current_price: Decimal, suggested_price: Decimal) -> PriceCheck:
        current = to_decimal(current_price)
        suggested = to_decimal(suggested_price)
        if suggested == 0:
            return PriceCheck(status=PriceStatus.NORMAL, deviation_percent=ZERO)

        threshold = self.assumptions.alert_threshold_percentage
        deviation = (current - suggested) / suggested * 100
        if deviation > threshold:
            status = PriceStatus.HIGH
        elif deviation < -threshold:
            status = PriceStatus.LOW
        else:
            status = PriceStatus.NORMAL
        return PriceCheck(status=status, deviation_percent=quantize_cents(deviation))

    def price_limits(self, suggested_price: Decimal) -> tuple[Decimal, Decimal]:
        """Return (min_price, max_price) allowed around the suggested price."""
        suggested = to_decimal(suggested_price)
        limit_factor = self.assumptions.price_limit_percentage / 100
        return suggested * (1 - limit_factor), suggested * (1 + limit_factor)

    def clamp_price_to_limit(self, candidate_price: Decimal, suggested_price: Decimal) -> Decimal:
        candidate = to_decimal(candidate_price)
        if to_decimal(suggested_price) == 0:
            return candidate
        min_price, max_price = self.price_limits(suggested_price)
        return max(min_price, min(max_price, candidate))
