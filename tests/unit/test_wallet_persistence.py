"""Unit tests for WalletRepository using MagicMock AsyncSession."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import DBAPIError

from src.cp_common.enums import TransactionType
from src.cp_common.errors import TransactionWriteFailureError, WalletNotFoundError
from src.cp_wallet.domain.models import LedgerLine, WalletDelta
from src.cp_wallet.infrastructure.persistence import WalletRepository


def _make_wallet_row(balance: int = 10000, frozen: int = 0) -> MagicMock:
    row = MagicMock()
    row.id = 1
    row.user_id = "driver-1"
    row.balance = Decimal(balance)
    row.frozen_balance = Decimal(frozen)
    row.created_at = datetime.now(UTC)
    row.updated_at = datetime.now(UTC)
    return row


def _make_tx_row(tx_id: int, tx_type: str, amount: int) -> MagicMock:
    row = MagicMock()
    row.id = tx_id
    row.wallet_id = 1
    row.transaction_type = tx_type
    row.amount = Decimal(amount)
    row.detail = "detail"
    row.status = "completed"
    row.transaction_date = datetime.now(UTC)
    return row


def _result(row: object) -> MagicMock:
    result = MagicMock()
    result.fetchone.return_value = row
    return result


_START_DELTA = WalletDelta(
    balance_delta=Decimal(3000),
    frozen_balance_delta=Decimal(-7500),
    ledger_entries=(
        LedgerLine(TransactionType.CHARGE, Decimal(4500), "cobro"),
        LedgerLine(TransactionType.REFUND, Decimal(3000), "devolución"),
    ),
)


@pytest.fixture
def db() -> MagicMock:
    return MagicMock()


class TestApplyDelta:
    async def test_updates_wallet_and_inserts_every_line(self, db: MagicMock) -> None:
        db.execute = AsyncMock(
            side_effect=[
                _result(_make_wallet_row(13000, 0)),
                _result(_make_tx_row(10, "cobro", 4500)),
                _result(_make_tx_row(11, "devolución", 3000)),
            ]
        )

        wallet, txs = await WalletRepository().apply_delta(db, "driver-1", _START_DELTA, 7)

        assert wallet.balance == Decimal(13000)
        assert [t.transaction_type for t in txs] == [TransactionType.CHARGE, TransactionType.REFUND]
        assert db.execute.await_count == 3
        update_params = db.execute.await_args_list[0].args[1]
        assert update_params["balance_delta"] == Decimal(3000)
        assert update_params["frozen_delta"] == Decimal(-7500)
        insert_params = db.execute.await_args_list[1].args[1]
        assert insert_params["trip_id"] == 7
        assert insert_params["transaction_type"] == "cobro"

    async def test_guard_rejection_raises_write_failure(self, db: MagicMock) -> None:
        db.execute = AsyncMock(
            side_effect=[_result(None), _result(_make_wallet_row(0, 100))]
        )
        with pytest.raises(TransactionWriteFailureError):
            await WalletRepository().apply_delta(db, "driver-1", _START_DELTA, 7)

    async def test_missing_wallet_raises_not_found(self, db: MagicMock) -> None:
        db.execute = AsyncMock(side_effect=[_result(None), _result(None)])
        with pytest.raises(WalletNotFoundError):
            await WalletRepository().apply_delta(db, "ghost", _START_DELTA, 7)

    async def test_ledger_insert_error_raises_write_failure(self, db: MagicMock) -> None:
        db.execute = AsyncMock(
            side_effect=[
                _result(_make_wallet_row()),
                DBAPIError("INSERT", {}, Exception("check violation")),
            ]
        )
        with pytest.raises(TransactionWriteFailureError):
            await WalletRepository().apply_delta(db, "driver-1", _START_DELTA, 7)

    async def test_delta_without_lines_only_updates(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_result(_make_wallet_row(4000, 6000)))
        delta = WalletDelta(balance_delta=Decimal(-6000), frozen_balance_delta=Decimal(6000))

        wallet, txs = await WalletRepository().apply_delta(db, "driver-1", delta, 7)

        assert wallet.frozen_balance == Decimal(6000)
        assert txs == []
        assert db.execute.await_count == 1


class TestListTransactions:
    async def test_maps_rows(self, db: MagicMock) -> None:
        result = MagicMock()
        result.fetchall.return_value = [_make_tx_row(2, "devolución", 3000), _make_tx_row(1, "cobro", 4500)]
        db.execute = AsyncMock(return_value=result)

        txs = await WalletRepository().list_transactions(db, 1, None, 21, "devolución")

        assert [t.id for t in txs] == [2, 1]
        assert txs[0].transaction_type == TransactionType.REFUND
        params = db.execute.await_args.args[1]
        assert params["transaction_type"] == "devolución"
        assert params["limit"] == 21
