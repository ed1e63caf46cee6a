from __future__ import annotations

from pydantic import BaseModel

from ev_charge_log.modules.receipts.parsers.base import Provider


class ReceiptIn(BaseModel):
    text: str
    provider: Provider | None = None


class ParsedReceiptOut(BaseModel):
    provider: str
    evse_id: str
    location_name: str
    location_address: str
    transaction_start: str | None
    transaction_end: str | None
    duration_minutes: float
    total_energy_kwh: float
    maximum_power_kw: float
    total_cost: float
    energy_cost: float
    time_cost: float
    session_id: str
