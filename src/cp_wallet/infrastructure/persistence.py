"""WalletRepository — concrete implementation of WalletRepositoryProtocol.

Balance mutations are a single guarded UPDATE ... RETURNING: neither
balance nor frozen_balance may go negative. A result of 0 rows means the
guard rejected the delta (or the wallet does not exist).

Transaction ownership: the CALLER (application service) commits or rolls
back. The wallet update and every ledger insert of one delta run in the
caller's transaction, so they persist together or not at all.
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.enums import TransactionStatus, TransactionType
from src.cp_common.errors import TransactionWriteFailureError, WalletNotFoundError
from src.cp_wallet.domain.models import Wallet, WalletDelta, WalletTransaction

logger = logging.getLogger(__name__)

_GET_WALLET_SQL = text("""
    SELECT id, user_id, balance, frozen_balance, created_at, updated_at
    FROM wallets
    WHERE user_id = :user_id
""")

_APPLY_DELTA_SQL = text("""
    UPDATE wallets
    SET balance        = balance        + :balance_delta,
        frozen_balance = frozen_balance + :frozen_delta,
        updated_at = NOW()
    WHERE user_id = :user_id
      AND balance        + :balance_delta >= 0
      AND frozen_balance + :frozen_delta  >= 0
    RETURNING id, user_id, balance, frozen_balance, created_at, updated_at
""")

_INSERT_TRANSACTION_SQL = text("""
    INSERT INTO wallet_transactions
        (wallet_id, trip_id, transaction_type, amount, detail, status)
    VALUES
        (:wallet_id, :trip_id, :transaction_type, :amount, :detail, :status)
    RETURNING id, wallet_id, transaction_type, amount, detail, status, transaction_date
""")

_LIST_TRANSACTIONS_SQL = text("""
    SELECT id, wallet_id, transaction_type, amount, detail, status, transaction_date
    FROM wallet_transactions
    WHERE wallet_id = :wallet_id
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < CAST(:cursor_id AS BIGINT))
      AND (CAST(:transaction_type AS TEXT) IS NULL
           OR transaction_type = CAST(:transaction_type AS TEXT))
    ORDER BY id DESC
    LIMIT :limit
""")


def _row_to_wallet(row: object) -> Wallet:
    return Wallet(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
        frozen_balance=row.frozen_balance,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_transaction(row: object) -> WalletTransaction:
    return WalletTransaction(
        id=row.id,  # type: ignore[attr-defined]
        wallet_id=row.wallet_id,  # type: ignore[attr-defined]
        transaction_type=TransactionType(row.transaction_type),  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        detail=row.detail or "",  # type: ignore[attr-defined]
        status=TransactionStatus(row.status),  # type: ignore[attr-defined]
        transaction_date=row.transaction_date,  # type: ignore[attr-defined]
    )


class WalletRepository:
    """Concrete repository — every mutation atomic at the SQL level."""

    async def get_wallet_by_user_id(
        self, db: AsyncSession, user_id: str
    ) -> Wallet | None:
        result = await db.execute(_GET_WALLET_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_wallet(row) if row else None

    async def apply_delta(
        self,
        db: AsyncSession,
        user_id: str,
        delta: WalletDelta,
        trip_id: int | None,
    ) -> tuple[Wallet, list[WalletTransaction]]:
        result = await db.execute(
            _APPLY_DELTA_SQL,
            {
                "user_id": user_id,
                "balance_delta": delta.balance_delta,
                "frozen_delta": delta.frozen_balance_delta,
            },
        )
        row = result.fetchone()
        if row is None:
            existing = await self.get_wallet_by_user_id(db, user_id)
            if existing is None:
                raise WalletNotFoundError(user_id)
            raise TransactionWriteFailureError(
                f"delta rejected for user {user_id}: balance={existing.balance} "
                f"frozen={existing.frozen_balance} "
                f"balance_delta={delta.balance_delta} frozen_delta={delta.frozen_balance_delta}"
            )
        wallet = _row_to_wallet(row)

        transactions: list[WalletTransaction] = []
        for line in delta.ledger_entries:
            try:
                tx_result = await db.execute(
                    _INSERT_TRANSACTION_SQL,
                    {
                        "wallet_id": wallet.id,
                        "trip_id": trip_id,
                        "transaction_type": line.transaction_type.value,
                        "amount": line.amount,
                        "detail": line.detail,
                        "status": TransactionStatus.COMPLETED.value,
                    },
                )
            except DBAPIError as exc:
                raise TransactionWriteFailureError(
                    f"ledger insert failed ({line.transaction_type.value})"
                ) from exc
            tx_row = tx_result.fetchone()
            if tx_row is None:
                raise TransactionWriteFailureError(
                    f"ledger insert returned no rows ({line.transaction_type.value})"
                )
            transactions.append(_row_to_transaction(tx_row))

        logger.info(
            "Wallet %s updated: balance_delta=%s frozen_delta=%s, %d ledger entries (trip=%s)",
            wallet.id,
            delta.balance_delta,
            delta.frozen_balance_delta,
            len(transactions),
            trip_id,
        )
        return wallet, transactions

    async def list_transactions(
        self,
        db: AsyncSession,
        wallet_id: int,
        cursor_id: int | None,
        limit: int,
        transaction_type: str | None,
    ) -> list[WalletTransaction]:
        result = await db.execute(
            _LIST_TRANSACTIONS_SQL,
            {
                "wallet_id": wallet_id,
                "cursor_id": cursor_id,
                "transaction_type": transaction_type,
                "limit": limit,
            },
        )
        return [_row_to_transaction(row) for row in result.fetchall()]
