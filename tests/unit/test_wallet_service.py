"""Unit tests for WalletApplicationService using a mock repository."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cp_common.enums import TransactionType
from src.cp_common.errors import WalletNotFoundError
from src.cp_pricing.application.service import PricingApplicationService
from src.cp_pricing.domain.models import Assumptions
from src.cp_wallet.application.schemas import cursor_decode, cursor_encode
from src.cp_wallet.application.service import WalletApplicationService
from src.cp_wallet.domain.models import Wallet, WalletTransaction


def _make_wallet(balance: int = 4000, frozen: int = 0) -> Wallet:
    return Wallet(
        id=1,
        user_id="driver-1",
        balance=Decimal(balance),
        frozen_balance=Decimal(frozen),
        created_at=datetime.now(UTC),
        updated_at=datetime.now(UTC),
    )


def _make_tx(tx_id: int) -> WalletTransaction:
    return WalletTransaction(
        id=tx_id,
        wallet_id=1,
        transaction_type=TransactionType.REFUND,
        amount=Decimal(3000),
        detail="Devolución",
        transaction_date=datetime.now(UTC),
    )


def _make_service(wallet: Wallet | None, assumptions: Assumptions | None = None) -> WalletApplicationService:
    repo = AsyncMock()
    repo.get_wallet_by_user_id.return_value = wallet
    assumptions_repo = AsyncMock()
    assumptions_repo.get_current.return_value = assumptions
    cache = AsyncMock()
    cache.get.return_value = None
    pricing = PricingApplicationService(repo=assumptions_repo, cache=cache)
    return WalletApplicationService(repo=repo, pricing=pricing)


class TestBalance:
    async def test_returns_display_strings(self) -> None:
        svc = _make_service(_make_wallet(150000, 6000))

        result = await svc.get_balance(MagicMock(), "driver-1")

        assert result.balance == Decimal(150000)
        assert result.balance_display == "$150,000"
        assert result.frozen_balance_display == "$6,000"

    async def test_missing_wallet(self) -> None:
        svc = _make_service(None)
        with pytest.raises(WalletNotFoundError):
            await svc.get_info(MagicMock(), "ghost")


class TestCheckBalance:
    async def test_insufficient_is_a_result_not_an_error(self, assumptions: Assumptions) -> None:
        svc = _make_service(_make_wallet(4000), assumptions)

        result = await svc.check_balance(MagicMock(), "driver-1", 3, Decimal(10000))

        assert result.sufficient is False
        assert result.required_guarantee == Decimal(6000)
        assert result.deficit == Decimal(2000)
        assert result.deficit_display == "$2,000"

    async def test_sufficient(self, assumptions: Assumptions) -> None:
        svc = _make_service(_make_wallet(6000), assumptions)

        result = await svc.check_balance(MagicMock(), "driver-1", 3, Decimal(10000))

        assert result.sufficient is True
        assert result.deficit == 0


class TestListTransactions:
    async def test_has_more_and_cursor(self) -> None:
        svc = _make_service(_make_wallet())
        svc._repo.list_transactions.return_value = [_make_tx(5), _make_tx(4), _make_tx(3)]  # type: ignore[attr-defined]

        result = await svc.list_transactions(MagicMock(), "driver-1", None, 2, None)

        assert [i.id for i in result.items] == [5, 4]
        assert result.has_more is True
        assert cursor_decode(result.next_cursor) == 4

    async def test_last_page(self) -> None:
        svc = _make_service(_make_wallet())
        svc._repo.list_transactions.return_value = [_make_tx(1)]  # type: ignore[attr-defined]

        result = await svc.list_transactions(MagicMock(), "driver-1", cursor_encode(2), 20, "devolución")

        assert result.has_more is False
        assert result.next_cursor is None
        args = svc._repo.list_transactions.await_args.args  # type: ignore[attr-defined]
        assert args[2] == 2
        assert args[3] == 21
        assert args[4] == "devolución"


class TestCursor:
    def test_garbage_cursor_is_ignored(self) -> None:
        assert cursor_decode("not-base64!!") is None
        assert cursor_decode(None) is None
