"""003: create trips table

Revision ID: 003
Revises: 002
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # fee_percentage and frozen_guarantee: rate and amount frozen at publish.
    # Legacy spellings (in_progress, completed, cancelled) are not constrained
    # away: rows imported from older clients keep them and are normalized on read.
    op.execute("""
        CREATE TABLE trips (
            id              BIGSERIAL      PRIMARY KEY,
            user_id         VARCHAR(64)    NOT NULL,
            origin_id       BIGINT,
            destination_id  BIGINT,
            route_id        BIGINT,
            vehicle_id      BIGINT,
            date_time       TIMESTAMPTZ,
            seats           INT            NOT NULL DEFAULT 0,
            seats_reserved  INT            NOT NULL DEFAULT 0,
            price_per_seat  NUMERIC(14, 2) NOT NULL,
            fee_percentage  NUMERIC(5, 2),
            frozen_guarantee NUMERIC(14, 2),
            status          VARCHAR(20)    NOT NULL DEFAULT 'active',
            description     TEXT,
            created_at      TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_trips_seats_gte_0           CHECK (seats >= 0),
            CONSTRAINT ck_trips_seats_reserved_gte_0  CHECK (seats_reserved >= 0),
            CONSTRAINT ck_trips_price_gte_0           CHECK (price_per_seat >= 0),
            CONSTRAINT ck_trips_guarantee_gte_0       CHECK (frozen_guarantee >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_trips_user_date ON trips (user_id, date_time);")
    op.execute("""
        CREATE TRIGGER trg_trips_updated_at
            BEFORE UPDATE ON trips
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS trips CASCADE;")
