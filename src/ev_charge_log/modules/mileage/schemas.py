from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel


class MileageRecordIn(BaseModel):
    odometer_reading: int | None = None
    recorded_date: date | None = None
    notes: str | None = None


class MileageRecordCreatedOut(BaseModel):
    id: int
    message: str


class MileageRecordOut(BaseModel):
    id: int
    odometer_reading: int
    recorded_date: date
    notes: str | None
    created_at: datetime
    updated_at: datetime
