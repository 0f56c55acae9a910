"""Pydantic schemas and cursor utilities for cp_wallet API."""

import base64
import json
from decimal import Decimal

from pydantic import BaseModel, Field

from src.cp_common.money import money_to_display
from src.cp_pricing.domain.models import MAX_SEATS, MIN_SEATS
from src.cp_wallet.domain.models import Wallet, WalletTransaction

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: int) -> str:
    """Encode a BIGINT primary key into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CheckBalanceRequest(BaseModel):
    seats: int = Field(..., ge=MIN_SEATS, le=MAX_SEATS)
    price_per_seat: Decimal = Field(..., gt=0)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class WalletInfoResponse(BaseModel):
    id: int
    user_id: str
    balance: Decimal
    frozen_balance: Decimal
    created_at: str | None
    updated_at: str | None

    @classmethod
    def from_domain(cls, w: Wallet) -> "WalletInfoResponse":
        return cls(
            id=w.id,
            user_id=w.user_id,
            balance=w.balance,
            frozen_balance=w.frozen_balance,
            created_at=w.created_at.isoformat() if w.created_at else None,
            updated_at=w.updated_at.isoformat() if w.updated_at else None,
        )


class BalanceResponse(BaseModel):
    balance: Decimal
    balance_display: str
    frozen_balance: Decimal
    frozen_balance_display: str

    @classmethod
    def from_domain(cls, w: Wallet) -> "BalanceResponse":
        return cls(
            balance=w.balance,
            balance_display=money_to_display(w.balance),
            frozen_balance=w.frozen_balance,
            frozen_balance_display=money_to_display(w.frozen_balance),
        )


class CheckBalanceResponse(BaseModel):
    sufficient: bool
    required_guarantee: Decimal
    required_guarantee_display: str
    balance: Decimal
    deficit: Decimal
    deficit_display: str


class TransactionItem(BaseModel):
    id: int | None
    wallet_id: int
    transaction_type: str
    amount: Decimal
    amount_display: str
    detail: str
    status: str
    transaction_date: str | None  # ISO8601 string

    @classmethod
    def from_domain(cls, t: WalletTransaction) -> "TransactionItem":
        return cls(
            id=t.id,
            wallet_id=t.wallet_id,
            transaction_type=t.transaction_type.value,
            amount=t.amount,
            amount_display=money_to_display(t.amount),
            detail=t.detail,
            status=t.status.value,
            transaction_date=t.transaction_date.isoformat() if t.transaction_date else None,
        )


class TransactionsResponse(BaseModel):
    items: list[TransactionItem]
    next_cursor: str | None
    has_more: bool
