from __future__ import annotations

from datetime import date

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from ev_charge_log.core.logging import get_logger, log_event
from ev_charge_log.modules.mileage.models import MileageRecord

logger = get_logger(__name__)


def list_mileage_records(session: Session) -> list[MileageRecord]:
    return list(
        session.scalars(
            select(MileageRecord).order_by(
                MileageRecord.recorded_date.desc(), MileageRecord.created_at.desc()
            )
        )
    )


def get_latest_mileage(session: Session) -> MileageRecord | None:
    return session.scalar(
        select(MileageRecord)
        .order_by(
            MileageRecord.recorded_date.desc(),
            MileageRecord.created_at.desc(),
            MileageRecord.id.desc(),
        )
        .limit(1)
    )


def assert_odometer_not_decreasing(session: Session, *, odometer_reading: int) -> None:
    latest = get_latest_mileage(session)
    if latest and odometer_reading < latest.odometer_reading:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                "Odometer reading cannot be less than the latest reading "
                f"({latest.odometer_reading:,})."
            ),
        )


def create_mileage_record(
    session: Session,
    *,
    odometer_reading: int | None,
    recorded_date: date | None,
    notes: str | None = None,
    require_increasing: bool = False,
) -> MileageRecord:
    odometer_reading, recorded_date = _validate(odometer_reading, recorded_date)
    if require_increasing:
        assert_odometer_not_decreasing(session, odometer_reading=odometer_reading)
    record = MileageRecord(
        odometer_reading=odometer_reading,
        recorded_date=recorded_date,
        notes=_clean_notes(notes),
    )
    session.add(record)
    session.commit()
    session.refresh(record)
    log_event(
        logger,
        "mileage.created",
        id=record.id,
        odometer_reading=record.odometer_reading,
        recorded_date=record.recorded_date,
    )
    return record


def update_mileage_record(
    session: Session,
    *,
    id: int,
    odometer_reading: int | None,
    recorded_date: date | None,
    notes: str | None = None,
) -> MileageRecord:
    record = session.scalar(select(MileageRecord).where(MileageRecord.id == id))
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Mileage record not found"
        )
    odometer_reading, recorded_date = _validate(odometer_reading, recorded_date)
    record.odometer_reading = odometer_reading
    record.recorded_date = recorded_date
    record.notes = _clean_notes(notes)
    session.add(record)
    session.commit()
    session.refresh(record)
    log_event(logger, "mileage.updated", id=record.id, odometer_reading=odometer_reading)
    return record


def delete_mileage_record(session: Session, *, id: int) -> None:
    record = session.scalar(select(MileageRecord).where(MileageRecord.id == id))
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Mileage record not found"
        )
    session.delete(record)
    session.commit()
    log_event(logger, "mileage.deleted", id=id)


def _validate(odometer_reading: int | None, recorded_date: date | None) -> tuple[int, date]:
    if odometer_reading is None or recorded_date is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: odometer_reading and recorded_date are required",
        )
    if isinstance(odometer_reading, bool) or odometer_reading < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="odometer_reading must be a non-negative integer",
        )
    return odometer_reading, recorded_date


def _clean_notes(notes: str | None) -> str | None:
    if notes is None or not notes.strip():
        return None
    return notes.strip()
