"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_pricing.domain.models import Assumptions


class AssumptionsRepositoryProtocol(Protocol):
    async def get_current(self, db: AsyncSession) -> Assumptions | None: ...
