from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ev_charge_log.core.models import Base, IntegerPrimaryKey, Timestamped


class ChargingSession(IntegerPrimaryKey, Timestamped, Base):
    __tablename__ = "charging_sessions"
    __table_args__ = (
        UniqueConstraint("provider", "session_id", name="uq_charging_session_provider_session"),
    )

    provider: Mapped[str] = mapped_column(String(100), index=True)
    session_id: Mapped[str] = mapped_column(String(200))

    evse_id: Mapped[str | None] = mapped_column(String(200), nullable=True)
    location_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_address: Mapped[str | None] = mapped_column(Text, nullable=True)

    transaction_start: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    transaction_end: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    duration_minutes: Mapped[float] = mapped_column(Float, default=0.0)

    total_energy_kwh: Mapped[float] = mapped_column(Float, default=0.0)
    maximum_power_kw: Mapped[float] = mapped_column(Float, default=0.0)
    total_cost: Mapped[float] = mapped_column(Float, default=0.0)
    energy_cost: Mapped[float] = mapped_column(Float, default=0.0)
    time_cost: Mapped[float] = mapped_column(Float, default=0.0)
