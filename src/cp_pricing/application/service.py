"""PricingApplicationService — loads the assumptions snapshot, runs PricingEngine.

All methods are read-only; no commit/rollback needed.
Snapshot lookup is cache-aside: Redis first, then the assumptions table.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cp_common.money import money_to_display
from src.cp_pricing.application.schemas import (
    CurrentPricingResponse,
    FeeResponse,
    PriceValidationResponse,
    PublishingCostsResponse,
    SeatCommissionResponse,
    SuggestedPriceResponse,
    TotalPriceResponse,
    TripPriceResponse,
)
from src.cp_pricing.domain.engine import PricingEngine
from src.cp_pricing.domain.models import Assumptions
from src.cp_pricing.domain.repository import AssumptionsRepositoryProtocol
from src.cp_pricing.infrastructure.cache import AssumptionsCache
from src.cp_pricing.infrastructure.persistence import AssumptionsRepository


class PricingApplicationService:
    def __init__(
        self,
        repo: AssumptionsRepositoryProtocol | None = None,
        cache: AssumptionsCache | None = None,
    ) -> None:
        self._repo: AssumptionsRepositoryProtocol = repo or AssumptionsRepository()
        self._cache = cache or AssumptionsCache(settings.ASSUMPTIONS_CACHE_TTL_SECONDS)

    async def load_assumptions(self, db: AsyncSession) -> Assumptions | None:
        cached = await self._cache.get()
        if cached is not None:
            return cached
        assumptions = await self._repo.get_current(db)
        if assumptions is not None:
            await self._cache.put(assumptions)
        return assumptions

    async def get_engine(self, db: AsyncSession) -> PricingEngine:
        """Engine bound to the current snapshot. A missing snapshot surfaces as
        ConfigUnavailableError on the first calculation."""
        return PricingEngine(
            await self.load_assumptions(db),
            reference_occupancy=settings.REFERENCE_OCCUPANCY,
            price_floor=Decimal(settings.SUGGESTED_PRICE_FLOOR),
        )

    async def current_pricing(self, db: AsyncSession) -> CurrentPricingResponse:
        engine = await self.get_engine(db)
        return CurrentPricingResponse.from_domain(engine.current_pricing())

    async def trip_price(
        self, db: AsyncSession, distance_km: Decimal, is_urban: bool
    ) -> TripPriceResponse:
        engine = await self.get_engine(db)
        base = engine.calculate_trip_price(distance_km, is_urban)
        return TripPriceResponse(
            distance_km=distance_km,
            is_urban=is_urban,
            base_price=base,
            base_price_display=money_to_display(base),
        )

    async def suggested_price(
        self, db: AsyncSession, distance_km: Decimal | None, is_urban: bool
    ) -> SuggestedPriceResponse:
        engine = await self.get_engine(db)
        suggested = engine.calculate_suggested_price_per_seat(distance_km, is_urban)
        min_price, max_price = engine.price_limits(suggested)
        return SuggestedPriceResponse(
            suggested_price_per_seat=suggested,
            suggested_price_display=money_to_display(suggested),
            min_price=min_price,
            max_price=max_price,
        )

    async def fee(self, db: AsyncSession, trip_price: Decimal) -> FeeResponse:
        engine = await self.get_engine(db)
        fee = engine.calculate_fee(trip_price)
        return FeeResponse(trip_price=trip_price, fee=fee, fee_display=money_to_display(fee))

    async def total_price(
        self, db: AsyncSession, distance_km: Decimal, is_urban: bool
    ) -> TotalPriceResponse:
        engine = await self.get_engine(db)
        return TotalPriceResponse.from_domain(engine.calculate_total_price(distance_km, is_urban))

    async def publishing_costs(
        self, db: AsyncSession, seats: int, price_per_seat: Decimal
    ) -> PublishingCostsResponse:
        engine = await self.get_engine(db)
        guarantee = engine.calculate_required_guarantee(seats, price_per_seat)
        return PublishingCostsResponse.from_domain(seats, price_per_seat, guarantee)

    async def seat_commission(
        self, db: AsyncSession, price_per_seat: Decimal
    ) -> SeatCommissionResponse:
        engine = await self.get_engine(db)
        return SeatCommissionResponse.from_domain(engine.calculate_seat_commission(price_per_seat))

    async def validate_price(
        self, db: AsyncSession, current_price: Decimal, suggested_price: Decimal
    ) -> PriceValidationResponse:
        engine = await self.get_engine(db)
        check = engine.validate_price_range(current_price, suggested_price)
        clamped = engine.clamp_price_to_limit(current_price, suggested_price)
        return PriceValidationResponse.from_domain(
            check, clamped, engine.price_limits(suggested_price)
        )
