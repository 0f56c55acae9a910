"""BalanceGate — publish eligibility and lifecycle wallet reconciliation.

Pure functions: nothing here touches the DB or mutates a Wallet. Each
transition returns the deltas plus the ledger lines the caller must persist
atomically.

Start (active -> started), with c = floor_cents(price_per_seat x fee_percentage / 100)
and fee_percentage the rate recorded on the trip at publish:
    charge  (cobro)       = seats_reserved x c
    refund  (devolución)  = seats x c            (unsold seats)
    balance        += refund
    frozen_balance -= (seats_reserved + seats) x c
so charge + refund == total frozen, exactly, also after NUMERIC(14, 2) storage.

Publish froze ceil(fee) + fixed_rate x seats, so start and cancel leave the
fixed-rate part and the ceiling residue frozen. The settlements report it as
retained_amount.

Cancel (active, no seats sold):
    total = (seats + seats_reserved) x c
    balance += total, frozen_balance -= total, one devolución.

Finish (started -> finished): no client-side wallet mutation.
"""

from decimal import Decimal

from src.cp_common.enums import TransactionType, TripAction, TripStatus
from src.cp_common.errors import ConfigUnavailableError, InvalidStateTransitionError
from src.cp_common.money import ZERO, floor_cents, percent_of
from src.cp_pricing.domain.models import Assumptions
from src.cp_trip.domain.models import Trip
from src.cp_wallet.domain.models import (
    BalanceCheck,
    CancellationBlocked,
    CancelSettlement,
    LedgerLine,
    StartSettlement,
    Wallet,
    WalletDelta,
)


def check_sufficient_balance(required_guarantee: Decimal, wallet: Wallet) -> BalanceCheck:
    """Compare the guarantee with the wallet's total balance.

    frozen_balance is not subtracted: "available" means the whole balance.
    """
    deficit = max(ZERO, required_guarantee - wallet.balance)
    return BalanceCheck(sufficient=deficit == 0, deficit=deficit)


def commission_per_seat(trip: Trip, assumptions: Assumptions | None = None) -> Decimal:
    """Per-seat commission at the rate in force when the trip was published.

    assumptions is only consulted for trips that predate the recorded rate.
    """
    rate = trip.fee_percentage
    if rate is None:
        if assumptions is None:
            raise ConfigUnavailableError()
        rate = assumptions.fee_percentage
    return floor_cents(percent_of(trip.price_per_seat, rate))


def retained_after_release(trip: Trip, released: Decimal) -> Decimal | None:
    """What stays frozen once released is returned. None if the guarantee was not recorded."""
    if trip.frozen_guarantee is None:
        return None
    return trip.frozen_guarantee - released


def _require_status(trip: Trip, expected: TripStatus, action: TripAction) -> None:
    if trip.status != expected:
        raise InvalidStateTransitionError(trip.id, trip.status, action.value)


def plan_publish(required_guarantee: Decimal) -> WalletDelta:
    """Freeze the guarantee at publish time. No ledger line: only charges and
    refunds are recorded as transactions."""
    return WalletDelta(
        balance_delta=-required_guarantee,
        frozen_balance_delta=required_guarantee,
    )


def plan_start(trip: Trip, assumptions: Assumptions | None = None) -> StartSettlement:
    _require_status(trip, TripStatus.ACTIVE, TripAction.START)

    per_seat = commission_per_seat(trip, assumptions)
    fee_on_sold = trip.seats_reserved * per_seat
    refund_unsold = trip.seats * per_seat
    total_frozen = trip.total_seats_published * per_seat

    ledger = (
        LedgerLine(
            transaction_type=TransactionType.CHARGE,
            amount=fee_on_sold,
            detail=f"Comisión por {trip.seats_reserved} cupo(s) vendido(s) - viaje #{trip.id}",
        ),
        LedgerLine(
            transaction_type=TransactionType.REFUND,
            amount=refund_unsold,
            detail=f"Devolución por {trip.seats} cupo(s) no vendido(s) - viaje #{trip.id}",
        ),
    )
    return StartSettlement(
        commission_per_seat=per_seat,
        fee_on_sold_seats=fee_on_sold,
        fee_refund_unsold_seats=refund_unsold,
        total_frozen_amount=total_frozen,
        retained_amount=retained_after_release(trip, total_frozen),
        delta=WalletDelta(
            balance_delta=refund_unsold,
            frozen_balance_delta=-total_frozen,
            ledger_entries=ledger,
        ),
    )


def plan_cancel(
    trip: Trip, assumptions: Assumptions | None = None
) -> CancelSettlement | CancellationBlocked:
    _require_status(trip, TripStatus.ACTIVE, TripAction.CANCEL)
    if trip.seats_reserved > 0:
        return CancellationBlocked(trip_id=trip.id, seats_reserved=trip.seats_reserved)

    total_frozen = trip.total_seats_published * commission_per_seat(trip, assumptions)
    return CancelSettlement(
        refunded_amount=total_frozen,
        retained_amount=retained_after_release(trip, total_frozen),
        delta=WalletDelta(
            balance_delta=total_frozen,
            frozen_balance_delta=-total_frozen,
            ledger_entries=(
                LedgerLine(
                    transaction_type=TransactionType.REFUND,
                    amount=total_frozen,
                    detail=f"Devolución de garantía por cancelación - viaje #{trip.id}",
                ),
            ),
        ),
    )


def plan_finish(trip: Trip) -> None:
    """Validate the finish transition. Refunds were already settled at start."""
    _require_status(trip, TripStatus.STARTED, TripAction.FINISH)
