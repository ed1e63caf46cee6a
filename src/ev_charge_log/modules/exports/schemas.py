from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from ev_charge_log.modules.mileage.schemas import MileageRecordOut
from ev_charge_log.modules.sessions.schemas import ChargingSessionOut


class DataExportOut(BaseModel):
    export_date: datetime
    sessions: list[ChargingSessionOut]
    mileage_records: list[MileageRecordOut]


class DataImportIn(BaseModel):
    sessions: Any = None
    mileage_records: list[dict] | None = Field(
        default=None, validation_alias=AliasChoices("mileage_records", "mileageRecords")
    )


class DataImportOut(BaseModel):
    message: str
    imported_sessions: int
    imported_mileage: int
    errors: int = 0
