"""002: create wallets table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE wallets (
            id              BIGSERIAL      PRIMARY KEY,
            user_id         VARCHAR(64)    NOT NULL,
            balance         NUMERIC(14, 2) NOT NULL DEFAULT 0,
            frozen_balance  NUMERIC(14, 2) NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_wallets_user_id        UNIQUE (user_id),
            CONSTRAINT ck_wallets_balance_gte_0  CHECK (balance >= 0),
            CONSTRAINT ck_wallets_frozen_gte_0   CHECK (frozen_balance >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_wallets_updated_at
            BEFORE UPDATE ON wallets
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE wallets IS 'Driver wallet — amounts in pesos, frozen_balance holds trip guarantees';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wallets CASCADE;")
