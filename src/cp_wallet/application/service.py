"""WalletApplicationService — thin composition layer.

Read-only: wallet info, balance, transaction history and the publish
eligibility pre-check. Mutations happen only through trip lifecycle
transitions (cp_trip.application.service).
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.errors import WalletNotFoundError
from src.cp_common.money import money_to_display
from src.cp_pricing.application.service import PricingApplicationService
from src.cp_wallet.application.schemas import (
    BalanceResponse,
    CheckBalanceResponse,
    TransactionItem,
    TransactionsResponse,
    WalletInfoResponse,
    cursor_decode,
    cursor_encode,
)
from src.cp_wallet.domain.balance_gate import check_sufficient_balance
from src.cp_wallet.domain.models import Wallet
from src.cp_wallet.domain.repository import WalletRepositoryProtocol
from src.cp_wallet.infrastructure.persistence import WalletRepository


class WalletApplicationService:
    def __init__(
        self,
        repo: WalletRepositoryProtocol | None = None,
        pricing: PricingApplicationService | None = None,
    ) -> None:
        self._repo: WalletRepositoryProtocol = repo or WalletRepository()
        self._pricing = pricing or PricingApplicationService()

    async def _get_wallet(self, db: AsyncSession, user_id: str) -> Wallet:
        wallet = await self._repo.get_wallet_by_user_id(db, user_id)
        if wallet is None:
            raise WalletNotFoundError(user_id)
        return wallet

    async def get_info(self, db: AsyncSession, user_id: str) -> WalletInfoResponse:
        return WalletInfoResponse.from_domain(await self._get_wallet(db, user_id))

    async def get_balance(self, db: AsyncSession, user_id: str) -> BalanceResponse:
        return BalanceResponse.from_domain(await self._get_wallet(db, user_id))

    async def check_balance(
        self, db: AsyncSession, user_id: str, seats: int, price_per_seat: Decimal
    ) -> CheckBalanceResponse:
        """Publish eligibility. An insufficient balance is a normal answer, not an error."""
        engine = await self._pricing.get_engine(db)
        guarantee = engine.calculate_required_guarantee(seats, price_per_seat)
        wallet = await self._get_wallet(db, user_id)
        check = check_sufficient_balance(guarantee.required_guarantee, wallet)
        return CheckBalanceResponse(
            sufficient=check.sufficient,
            required_guarantee=guarantee.required_guarantee,
            required_guarantee_display=money_to_display(guarantee.required_guarantee),
            balance=wallet.balance,
            deficit=check.deficit,
            deficit_display=money_to_display(check.deficit),
        )

    async def list_transactions(
        self,
        db: AsyncSession,
        user_id: str,
        cursor: str | None,
        limit: int,
        transaction_type: str | None,
    ) -> TransactionsResponse:
        wallet = await self._get_wallet(db, user_id)
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        rows = await self._repo.list_transactions(
            db, wallet.id, cursor_id, limit + 1, transaction_type
        )
        has_more = len(rows) > limit
        page = rows[:limit]
        next_cursor = (
            cursor_encode(page[-1].id) if has_more and page and page[-1].id is not None else None
        )
        return TransactionsResponse(
            items=[TransactionItem.from_domain(t) for t in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )
