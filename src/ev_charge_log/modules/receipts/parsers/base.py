from __future__ import annotations

import enum
from dataclasses import dataclass


class Provider(str, enum.Enum):
    AMPUP = "AmpUp"
    ELECTRIFY_AMERICA = "Electrify America"
    CHARGEPOINT = "ChargePoint"
    EVGO = "EVgo"


@dataclass(frozen=True)
class ParsedChargingSession:
    provider: str
    evse_id: str = ""
    location_name: str = ""
    location_address: str = ""
    transaction_start: str | None = None
    transaction_end: str | None = None
    duration_minutes: float = 0.0
    total_energy_kwh: float = 0.0
    maximum_power_kw: float = 0.0
    total_cost: float = 0.0
    energy_cost: float = 0.0
    time_cost: float = 0.0
    session_id: str = ""


class ReceiptParseError(Exception):
    """Base class for receipt conditions the parser layer reports."""

    provider: str | None = None


class UnrecognizedReceiptFormat(ReceiptParseError):
    provider = "Unknown"

    def __init__(self) -> None:
        super().__init__("Unknown receipt format. Please specify the charging provider.")


class ParserNotImplemented(ReceiptParseError):
    def __init__(self, provider: Provider) -> None:
        self.provider = provider.value
        super().__init__(f"{provider.value} parser not yet implemented")
