"""create charging sessions and mileage records

Revision ID: 3b7e91c4d2a0
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3b7e91c4d2a0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "charging_sessions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("provider", sa.String(length=100), nullable=False),
        sa.Column("session_id", sa.String(length=200), nullable=False),
        sa.Column("evse_id", sa.String(length=200), nullable=True),
        sa.Column("location_name", sa.Text(), nullable=True),
        sa.Column("location_address", sa.Text(), nullable=True),
        sa.Column("transaction_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("transaction_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_minutes", sa.Float(), nullable=False),
        sa.Column("total_energy_kwh", sa.Float(), nullable=False),
        sa.Column("maximum_power_kw", sa.Float(), nullable=False),
        sa.Column("total_cost", sa.Float(), nullable=False),
        sa.Column("energy_cost", sa.Float(), nullable=False),
        sa.Column("time_cost", sa.Float(), nullable=False),
        sa.UniqueConstraint(
            "provider", "session_id", name="uq_charging_session_provider_session"
        ),
    )
    op.create_index("ix_charging_sessions_provider", "charging_sessions", ["provider"])
    op.create_index(
        "ix_charging_sessions_transaction_start", "charging_sessions", ["transaction_start"]
    )

    op.create_table(
        "mileage_records",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("odometer_reading", sa.Integer(), nullable=False),
        sa.Column("recorded_date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_index("ix_mileage_records_recorded_date", "mileage_records", ["recorded_date"])


def downgrade() -> None:
    op.drop_index("ix_mileage_records_recorded_date", table_name="mileage_records")
    op.drop_table("mileage_records")
    op.drop_index("ix_charging_sessions_transaction_start", table_name="charging_sessions")
    op.drop_index("ix_charging_sessions_provider", table_name="charging_sessions")
    op.drop_table("charging_sessions")
