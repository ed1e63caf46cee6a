from __future__ import annotations

from datetime import UTC, datetime

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ev_charge_log.core.logging import get_logger, log_event
from ev_charge_log.modules.sessions.models import ChargingSession

logger = get_logger(__name__)


class MissingRequiredField(HTTPException):
    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required fields: {', '.join(fields)}",
        )


class DuplicateSession(HTTPException):
    def __init__(self, *, provider: str, session_id: str) -> None:
        self.provider = provider
        self.session_id = session_id
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail="This charging session has already been recorded.",
        )


def validate_required_fields(
    *, provider: str | None, session_id: str | None, total_cost: float | None
) -> None:
    missing: list[str] = []
    if not (provider or "").strip():
        missing.append("provider")
    if not (session_id or "").strip():
        missing.append("session_id")
    if not total_cost:
        missing.append("total_cost")
    if missing:
        log_event(logger, "session.rejected", missing=missing, session_id=session_id or None)
        raise MissingRequiredField(missing)


def list_sessions(session: Session) -> list[ChargingSession]:
    return list(
        session.scalars(
            select(ChargingSession).order_by(
                ChargingSession.transaction_start.desc(), ChargingSession.id.desc()
            )
        )
    )


def find_session(session: Session, *, provider: str, session_id: str) -> ChargingSession | None:
    return session.scalar(
        select(ChargingSession)
        .where(ChargingSession.provider == provider, ChargingSession.session_id == session_id)
        .limit(1)
    )


def create_session(
    session: Session,
    *,
    provider: str,
    session_id: str,
    total_cost: float | None,
    evse_id: str | None = None,
    location_name: str | None = None,
    location_address: str | None = None,
    transaction_start: datetime | str | None = None,
    transaction_end: datetime | str | None = None,
    duration_minutes: float = 0.0,
    total_energy_kwh: float = 0.0,
    maximum_power_kw: float = 0.0,
    energy_cost: float = 0.0,
    time_cost: float = 0.0,
) -> ChargingSession:
    validate_required_fields(provider=provider, session_id=session_id, total_cost=total_cost)
    provider = provider.strip()
    session_id = session_id.strip()

    if find_session(session, provider=provider, session_id=session_id):
        log_event(logger, "session.duplicate", provider=provider, session_id=session_id)
        raise DuplicateSession(provider=provider, session_id=session_id)

    row = ChargingSession(
        provider=provider,
        session_id=session_id,
        evse_id=evse_id or None,
        location_name=location_name or None,
        location_address=location_address or None,
        transaction_start=_coerce_datetime(transaction_start),
        transaction_end=_coerce_datetime(transaction_end),
        duration_minutes=duration_minutes or 0.0,
        total_energy_kwh=total_energy_kwh or 0.0,
        maximum_power_kw=maximum_power_kw or 0.0,
        total_cost=total_cost,
        energy_cost=energy_cost or 0.0,
        time_cost=time_cost or 0.0,
    )
    session.add(row)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        log_event(logger, "session.duplicate", provider=provider, session_id=session_id)
        raise DuplicateSession(provider=provider, session_id=session_id) from e
    session.refresh(row)
    log_event(
        logger,
        "session.created",
        id=row.id,
        provider=row.provider,
        session_id=row.session_id,
        total_cost=row.total_cost,
    )
    return row


def insert_session(session: Session, **fields) -> int:
    return create_session(session, **fields).id


def delete_session(session: Session, *, id: int) -> None:
    row = session.scalar(select(ChargingSession).where(ChargingSession.id == id))
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    session.delete(row)
    session.commit()
    log_event(logger, "session.deleted", id=id)


def _coerce_datetime(value: datetime | str | None) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value
