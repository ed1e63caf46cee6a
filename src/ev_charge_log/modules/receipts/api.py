from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ev_charge_log.core.db import db_session
from ev_charge_log.core.logging import get_logger, log_event
from ev_charge_log.modules.receipts.parsers.base import (
    ParserNotImplemented,
    ReceiptParseError,
    UnrecognizedReceiptFormat,
)
from ev_charge_log.modules.receipts.schemas import ParsedReceiptOut, ReceiptIn
from ev_charge_log.modules.receipts.service import import_receipt, parse_receipt
from ev_charge_log.modules.sessions.schemas import ChargingSessionOut

router = APIRouter(tags=["receipts"])
logger = get_logger(__name__)


def _to_http_error(exc: ReceiptParseError) -> HTTPException:
    log_event(logger, "receipt.rejected", reason=type(exc).__name__, provider=exc.provider)
    if isinstance(exc, ParserNotImplemented):
        return HTTPException(status_code=status.HTTP_501_NOT_IMPLEMENTED, detail=str(exc))
    if isinstance(exc, UnrecognizedReceiptFormat):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("/receipts/parse", response_model=ParsedReceiptOut)
def parse_receipt_endpoint(payload: ReceiptIn) -> ParsedReceiptOut:
    if not payload.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Please paste a receipt to parse."
        )
    try:
        parsed = parse_receipt(payload.text, provider=payload.provider)
    except ReceiptParseError as e:
        raise _to_http_error(e) from e
    return ParsedReceiptOut.model_validate(parsed, from_attributes=True)


@router.post("/receipts", response_model=ChargingSessionOut, status_code=201)
def import_receipt_endpoint(
    payload: ReceiptIn,
    session: Session = Depends(db_session),
) -> ChargingSessionOut:
    if not payload.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Please paste a receipt to parse."
        )
    try:
        row = import_receipt(session, text=payload.text, provider=payload.provider)
    except ReceiptParseError as e:
        raise _to_http_error(e) from e
    return ChargingSessionOut.model_validate(row, from_attributes=True)
