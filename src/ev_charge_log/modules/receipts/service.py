from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict

from sqlalchemy.orm import Session

from ev_charge_log.core.logging import get_logger, log_event
from ev_charge_log.modules.receipts.parsers.ampup import parse_ampup_receipt
from ev_charge_log.modules.receipts.parsers.base import (
    ParsedChargingSession,
    Provider,
    UnrecognizedReceiptFormat,
)
from ev_charge_log.modules.receipts.parsers.chargepoint import parse_chargepoint_receipt
from ev_charge_log.modules.receipts.parsers.electrify_america import (
    parse_electrify_america_receipt,
)
from ev_charge_log.modules.receipts.parsers.evgo import parse_evgo_receipt
from ev_charge_log.modules.sessions.models import ChargingSession
from ev_charge_log.modules.sessions.service import create_session

logger = get_logger(__name__)

PARSERS: dict[Provider, Callable[[str], ParsedChargingSession]] = {
    Provider.AMPUP: parse_ampup_receipt,
    Provider.ELECTRIFY_AMERICA: parse_electrify_america_receipt,
    Provider.CHARGEPOINT: parse_chargepoint_receipt,
    Provider.EVGO: parse_evgo_receipt,
}

# checked in order; the first provider with a matching keyword wins
_KEYWORDS: tuple[tuple[Provider, tuple[str, ...]], ...] = (
    (Provider.AMPUP, ("ampup", "evse id:")),
    (Provider.ELECTRIFY_AMERICA, ("electrify america",)),
    (Provider.CHARGEPOINT, ("chargepoint",)),
    (Provider.EVGO, ("evgo",)),
)


def detect_provider(text: str) -> Provider | None:
    lower = text.lower()
    for provider, keywords in _KEYWORDS:
        if any(k in lower for k in keywords):
            return provider
    return None


def parse_receipt(text: str, *, provider: Provider | None = None) -> ParsedChargingSession:
    """Parse receipt text with the parser registered for ``provider``.

    When no provider is given it is sniffed from the text. Raises
    UnrecognizedReceiptFormat when nothing matches and ParserNotImplemented for
    providers that only have a placeholder parser.
    """
    if provider is None:
        provider = detect_provider(text)
    if provider is None:
        raise UnrecognizedReceiptFormat()
    parsed = PARSERS[provider](text)
    log_event(
        logger,
        "receipt.parsed",
        provider=parsed.provider,
        session_id=parsed.session_id or None,
        total_cost=parsed.total_cost,
    )
    return parsed


def import_receipt(
    session: Session, *, text: str, provider: Provider | None = None
) -> ChargingSession:
    parsed = parse_receipt(text, provider=provider)
    return create_session(session, **asdict(parsed))
