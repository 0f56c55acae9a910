"""TripLifecycleService — publish/start/cancel/finish with wallet reconciliation.

Every transition runs in one DB transaction: the trip row is locked, the
BalanceGate plan is computed from that snapshot, then the status-guarded
UPDATE and the wallet delta (plus ledger lines) are written. Any failure
rolls back all of it.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.enums import TripAction, TripStatus
from src.cp_common.errors import (
    CancellationBlockedError,
    ConfigUnavailableError,
    InsufficientBalanceError,
    InvalidStateTransitionError,
    PriceOutOfRangeError,
    TripNotFoundError,
    WalletNotFoundError,
)
from src.cp_common.money import money_to_display
from src.cp_pricing.application.service import PricingApplicationService
from src.cp_pricing.domain.models import Assumptions
from src.cp_trip.application.schemas import (
    CancelTripResponse,
    FinishTripResponse,
    PublishTripResponse,
    StartTripResponse,
    TripItem,
    TripListResponse,
)
from src.cp_trip.domain.draft import PublishCommand
from src.cp_trip.domain.models import Trip
from src.cp_trip.domain.ordering import sort_trips_by_priority
from src.cp_trip.domain.repository import TripRepositoryProtocol
from src.cp_trip.infrastructure.persistence import TripRepository
from src.cp_wallet.domain.balance_gate import (
    check_sufficient_balance,
    plan_cancel,
    plan_finish,
    plan_publish,
    plan_start,
)
from src.cp_wallet.domain.models import CancellationBlocked, Wallet
from src.cp_wallet.domain.repository import WalletRepositoryProtocol
from src.cp_wallet.infrastructure.persistence import WalletRepository

logger = logging.getLogger(__name__)


class TripLifecycleService:
    def __init__(
        self,
        trip_repo: TripRepositoryProtocol | None = None,
        wallet_repo: WalletRepositoryProtocol | None = None,
        pricing: PricingApplicationService | None = None,
    ) -> None:
        self._trips: TripRepositoryProtocol = trip_repo or TripRepository()
        self._wallets: WalletRepositoryProtocol = wallet_repo or WalletRepository()
        self._pricing = pricing or PricingApplicationService()

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    async def _require_assumptions(self, db: AsyncSession) -> Assumptions:
        assumptions = await self._pricing.load_assumptions(db)
        if assumptions is None:
            raise ConfigUnavailableError()
        return assumptions

    async def _get_wallet(self, db: AsyncSession, user_id: str) -> Wallet:
        wallet = await self._wallets.get_wallet_by_user_id(db, user_id)
        if wallet is None:
            raise WalletNotFoundError(user_id)
        return wallet

    async def _assumptions_for(self, db: AsyncSession, trip: Trip) -> Assumptions | None:
        """Live assumptions, needed only when the trip did not record its fee rate."""
        if trip.fee_percentage is not None:
            return None
        return await self._require_assumptions(db)

    def _log_retained(self, trip_id: int, retained: Decimal | None) -> None:
        if retained:
            logger.info("Trip %s keeps %s frozen (fixed rate and fee rounding)", trip_id, retained)

    async def _load_owned_trip(self, db: AsyncSession, user_id: str, trip_id: int) -> Trip:
        trip = await self._trips.get_for_update(db, trip_id)
        # Someone else's trip is reported as missing
        if trip is None or trip.user_id != user_id:
            raise TripNotFoundError(trip_id)
        return trip

    async def _transition(
        self,
        db: AsyncSession,
        trip: Trip,
        expected: TripStatus,
        new_status: TripStatus,
        action: TripAction,
    ) -> Trip:
        updated = await self._trips.transition_status(db, trip.id, expected, new_status)
        if updated is None:
            raise InvalidStateTransitionError(trip.id, trip.status, action.value)
        return updated

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------

    async def publish(
        self, db: AsyncSession, user_id: str, command: PublishCommand
    ) -> PublishTripResponse:
        engine = await self._pricing.get_engine(db)
        suggested = engine.calculate_suggested_price_per_seat(command.distance_km, command.is_urban)
        if suggested > 0:
            min_price, max_price = engine.price_limits(suggested)
            if not min_price <= command.price_per_seat <= max_price:
                raise PriceOutOfRangeError(command.price_per_seat, min_price, max_price)

        guarantee = engine.calculate_required_guarantee(command.seats, command.price_per_seat)
        required = guarantee.required_guarantee
        wallet = await self._get_wallet(db, user_id)
        check = check_sufficient_balance(required, wallet)
        if not check.sufficient:
            raise InsufficientBalanceError(required, wallet.balance)

        try:
            trip = await self._trips.insert(
                db, user_id, command, engine.assumptions.fee_percentage, required
            )
            wallet, _ = await self._wallets.apply_delta(db, user_id, plan_publish(required), trip.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Trip %s published by %s, guarantee frozen %s", trip.id, user_id, required)
        return PublishTripResponse(
            trip=TripItem.from_domain(trip),
            required_guarantee=required,
            required_guarantee_display=money_to_display(required),
            balance=wallet.balance,
            frozen_balance=wallet.frozen_balance,
        )

    async def start(self, db: AsyncSession, user_id: str, trip_id: int) -> StartTripResponse:
        try:
            trip = await self._load_owned_trip(db, user_id, trip_id)
            settlement = plan_start(trip, await self._assumptions_for(db, trip))
            trip = await self._transition(
                db, trip, TripStatus.ACTIVE, TripStatus.STARTED, TripAction.START
            )
            wallet, _ = await self._wallets.apply_delta(db, user_id, settlement.delta, trip.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Trip %s started: charged %s, refunded %s",
            trip.id,
            settlement.fee_on_sold_seats,
            settlement.fee_refund_unsold_seats,
        )
        self._log_retained(trip.id, settlement.retained_amount)
        return StartTripResponse.from_domain(trip, settlement, wallet)

    async def cancel(self, db: AsyncSession, user_id: str, trip_id: int) -> CancelTripResponse:
        try:
            trip = await self._load_owned_trip(db, user_id, trip_id)
            outcome = plan_cancel(trip, await self._assumptions_for(db, trip))
            if isinstance(outcome, CancellationBlocked):
                raise CancellationBlockedError(outcome.trip_id, outcome.seats_reserved)
            trip = await self._transition(
                db, trip, TripStatus.ACTIVE, TripStatus.CANCELED, TripAction.CANCEL
            )
            wallet, _ = await self._wallets.apply_delta(db, user_id, outcome.delta, trip.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Trip %s canceled, refunded %s", trip.id, outcome.refunded_amount)
        self._log_retained(trip.id, outcome.retained_amount)
        return CancelTripResponse.from_domain(trip, outcome, wallet)

    async def finish(self, db: AsyncSession, user_id: str, trip_id: int) -> FinishTripResponse:
        try:
            trip = await self._load_owned_trip(db, user_id, trip_id)
            plan_finish(trip)
            trip = await self._transition(
                db, trip, TripStatus.STARTED, TripStatus.FINISHED, TripAction.FINISH
            )
            wallet = await self._get_wallet(db, user_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Trip %s finished", trip.id)
        return FinishTripResponse.from_domain(trip, wallet)

    async def list_my_trips(self, db: AsyncSession, user_id: str) -> TripListResponse:
        trips = await self._trips.list_by_user(db, user_id)
        return TripListResponse(items=[TripItem.from_domain(t) for t in sort_trips_by_priority(trips)])
