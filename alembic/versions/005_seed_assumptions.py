"""005: seed pricing assumptions

Revision ID: 005
Revises: 004
Create Date: 2026-10-17
"""

from typing import Sequence, Union

from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        INSERT INTO assumptions (
            urban_price_per_km, interurban_price_per_km,
            fee_percentage, fixed_rate,
            price_limit_percentage, alert_threshold_percentage
        ) VALUES (1000, 800, 10, 0, 50, 20);
    """)


def downgrade() -> None:
    op.execute("DELETE FROM assumptions;")
