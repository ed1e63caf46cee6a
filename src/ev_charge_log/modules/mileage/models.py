from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from ev_charge_log.core.models import Base, IntegerPrimaryKey, Timestamped


class MileageRecord(IntegerPrimaryKey, Timestamped, Base):
    __tablename__ = "mileage_records"

    odometer_reading: Mapped[int] = mapped_column(Integer)
    recorded_date: Mapped[date] = mapped_column(Date, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
