from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, field_validator


class ChargingSessionCreateIn(BaseModel):
    provider: str = ""
    session_id: str = ""
    evse_id: str | None = None
    location_name: str | None = None
    location_address: str | None = None
    transaction_start: datetime | None = None
    transaction_end: datetime | None = None
    duration_minutes: float = 0.0
    total_energy_kwh: float = 0.0
    maximum_power_kw: float = 0.0
    total_cost: float | None = None
    energy_cost: float = 0.0
    time_cost: float = 0.0


class ChargingSessionCreatedOut(BaseModel):
    id: int
    message: str


class ChargingSessionOut(BaseModel):
    id: int
    provider: str
    session_id: str
    evse_id: str | None
    location_name: str | None
    location_address: str | None
    transaction_start: datetime | None
    transaction_end: datetime | None
    duration_minutes: float
    total_energy_kwh: float
    maximum_power_kw: float
    total_cost: float
    energy_cost: float
    time_cost: float
    created_at: datetime
    updated_at: datetime

    @field_validator(
        "transaction_start", "transaction_end", "created_at", "updated_at", mode="after"
    )
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # SQLite hands back naive values; everything is stored in UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
