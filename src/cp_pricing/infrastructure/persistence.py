"""AssumptionsRepository — reads the single pricing configuration row.

The table is expected to hold exactly one row; the most recently updated one
wins if an operator inserted more. No row -> None (callers fail closed).
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_pricing.domain.models import Assumptions

_GET_CURRENT_SQL = text("""
    SELECT urban_price_per_km, interurban_price_per_km,
           fee_percentage, fixed_rate,
           price_limit_percentage, alert_threshold_percentage
    FROM assumptions
    ORDER BY updated_at DESC, id DESC
    LIMIT 1
""")


def _row_to_assumptions(row: object) -> Assumptions:
    return Assumptions(
        urban_price_per_km=row.urban_price_per_km,  # type: ignore[attr-defined]
        interurban_price_per_km=row.interurban_price_per_km,  # type: ignore[attr-defined]
        fee_percentage=row.fee_percentage,  # type: ignore[attr-defined]
        fixed_rate=row.fixed_rate,  # type: ignore[attr-defined]
        price_limit_percentage=row.price_limit_percentage,  # type: ignore[attr-defined]
        alert_threshold_percentage=row.alert_threshold_percentage,  # type: ignore[attr-defined]
    )


class AssumptionsRepository:
    async def get_current(self, db: AsyncSession) -> Assumptions | None:
        result = await db.execute(_GET_CURRENT_SQL)
        row = result.fetchone()
        return _row_to_assumptions(row) if row else None
