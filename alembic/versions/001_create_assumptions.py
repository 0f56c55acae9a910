"""001: create assumptions table and the updated_at trigger function

Revision ID: 001
Revises:
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_update_timestamp()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TABLE assumptions (
            id                          BIGSERIAL      PRIMARY KEY,
            urban_price_per_km          NUMERIC(14, 2) NOT NULL,
            interurban_price_per_km     NUMERIC(14, 2) NOT NULL,
            fee_percentage              NUMERIC(5, 2)  NOT NULL,
            fixed_rate                  NUMERIC(14, 2) NOT NULL DEFAULT 0,
            price_limit_percentage      NUMERIC(5, 2)  NOT NULL,
            alert_threshold_percentage  NUMERIC(5, 2)  NOT NULL,
            created_at                  TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            updated_at                  TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_assumptions_urban_gte_0       CHECK (urban_price_per_km >= 0),
            CONSTRAINT ck_assumptions_interurban_gte_0  CHECK (interurban_price_per_km >= 0),
            CONSTRAINT ck_assumptions_fee_pct_range     CHECK (fee_percentage BETWEEN 0 AND 100),
            CONSTRAINT ck_assumptions_fixed_rate_gte_0  CHECK (fixed_rate >= 0),
            CONSTRAINT ck_assumptions_limit_gte_0       CHECK (price_limit_percentage >= 0),
            CONSTRAINT ck_assumptions_alert_gte_0       CHECK (alert_threshold_percentage >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_assumptions_updated_at
            BEFORE UPDATE ON assumptions
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE assumptions IS 'Pricing parameters — latest row is authoritative';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS assumptions CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_update_timestamp();")
