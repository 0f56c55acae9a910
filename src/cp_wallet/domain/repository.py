"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_wallet.domain.models import Wallet, WalletDelta, WalletTransaction


class WalletRepositoryProtocol(Protocol):
    async def get_wallet_by_user_id(
        self, db: AsyncSession, user_id: str
    ) -> Wallet | None: ...

    async def apply_delta(
        self,
        db: AsyncSession,
        user_id: str,
        delta: WalletDelta,
        trip_id: int | None,
    ) -> tuple[Wallet, list[WalletTransaction]]: ...

    async def list_transactions(
        self,
        db: AsyncSession,
        wallet_id: int,
        cursor_id: int | None,
        limit: int,
        transaction_type: str | None,
    ) -> list[WalletTransaction]: ...
