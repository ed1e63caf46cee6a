from __future__ import annotations

from ev_charge_log.modules.receipts.parsers.base import (
    ParsedChargingSession,
    ParserNotImplemented,
    Provider,
)


def parse_evgo_receipt(text: str) -> ParsedChargingSession:
    raise ParserNotImplemented(Provider.EVGO)
