"""004: create wallet_transactions table

Revision ID: 004
Revises: 003
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE wallet_transactions (
            id                BIGSERIAL      PRIMARY KEY,
            wallet_id         BIGINT         NOT NULL REFERENCES wallets (id),
            trip_id           BIGINT         REFERENCES trips (id),
            transaction_type  VARCHAR(20)    NOT NULL,
            amount            NUMERIC(14, 2) NOT NULL,
            detail            TEXT           NOT NULL DEFAULT '',
            status            VARCHAR(20)    NOT NULL DEFAULT 'completed',
            transaction_date  TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_wallet_tx_type        CHECK (transaction_type IN ('cobro', 'devolución')),
            CONSTRAINT ck_wallet_tx_amount_gte_0 CHECK (amount >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_wallet_tx_wallet_id ON wallet_transactions (wallet_id, id DESC);")
    op.execute("CREATE INDEX idx_wallet_tx_trip_id ON wallet_transactions (trip_id);")
    op.execute("COMMENT ON TABLE wallet_transactions IS 'Append-only wallet ledger — never UPDATE or DELETE';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wallet_transactions CASCADE;")
