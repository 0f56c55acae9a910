"""Domain models for cp_wallet — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from src.cp_common.enums import TransactionStatus, TransactionType
from src.cp_common.money import ZERO


@dataclass
class Wallet:
    id: int
    user_id: str
    balance: Decimal         # unfrozen, spendable
    frozen_balance: Decimal  # held as trip guarantees
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class WalletTransaction:
    """Append-only ledger row. amount is always >= 0; the type carries the sign."""

    wallet_id: int
    transaction_type: TransactionType
    amount: Decimal
    detail: str
    status: TransactionStatus = TransactionStatus.COMPLETED
    id: int | None = None
    transaction_date: datetime | None = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"transaction amount must be >= 0, got {self.amount}")


@dataclass(frozen=True)
class BalanceCheck:
    sufficient: bool
    deficit: Decimal


@dataclass(frozen=True)
class LedgerLine:
    """A ledger entry not yet bound to a wallet id."""

    transaction_type: TransactionType
    amount: Decimal
    detail: str


@dataclass(frozen=True)
class WalletDelta:
    """Wallet mutation computed for one lifecycle transition.

    The caller applies balance/frozen deltas and inserts every ledger line in
    a single DB transaction.
    """

    balance_delta: Decimal = ZERO
    frozen_balance_delta: Decimal = ZERO
    ledger_entries: tuple[LedgerLine, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return (
            self.balance_delta == 0
            and self.frozen_balance_delta == 0
            and not self.ledger_entries
        )


@dataclass(frozen=True)
class StartSettlement:
    """Charge/refund split when a trip starts."""

    commission_per_seat: Decimal
    fee_on_sold_seats: Decimal
    fee_refund_unsold_seats: Decimal
    total_frozen_amount: Decimal
    delta: WalletDelta
    retained_amount: Decimal | None = None


@dataclass(frozen=True)
class CancelSettlement:
    refunded_amount: Decimal
    delta: WalletDelta
    retained_amount: Decimal | None = None


@dataclass(frozen=True)
class CancellationBlocked:
    """Typed result: the trip has sold seats and cannot be canceled by the driver."""

    trip_id: int
    seats_reserved: int
    delta: WalletDelta = field(default_factory=WalletDelta)
