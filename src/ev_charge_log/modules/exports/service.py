from __future__ import annotations

import io
from datetime import UTC, datetime

from openpyxl import Workbook
from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ev_charge_log.core.logging import get_logger, log_event
from ev_charge_log.modules.exports.schemas import DataExportOut, DataImportOut
from ev_charge_log.modules.mileage.models import MileageRecord
from ev_charge_log.modules.mileage.schemas import MileageRecordIn, MileageRecordOut
from ev_charge_log.modules.sessions.models import ChargingSession
from ev_charge_log.modules.sessions.schemas import ChargingSessionCreateIn, ChargingSessionOut

logger = get_logger(__name__)

_SESSION_COLUMNS = (
    ("Provider", "provider"),
    ("Session ID", "session_id"),
    ("EVSE ID", "evse_id"),
    ("Location", "location_name"),
    ("Address", "location_address"),
    ("Start", "transaction_start"),
    ("End", "transaction_end"),
    ("Duration (min)", "duration_minutes"),
    ("Energy (kWh)", "total_energy_kwh"),
    ("Max power (kW)", "maximum_power_kw"),
    ("Energy cost", "energy_cost"),
    ("Time cost", "time_cost"),
    ("Total cost", "total_cost"),
)


def export_data(session: Session) -> DataExportOut:
    sessions = session.scalars(select(ChargingSession).order_by(ChargingSession.created_at))
    mileage = session.scalars(select(MileageRecord).order_by(MileageRecord.recorded_date))
    return DataExportOut(
        export_date=datetime.now(UTC),
        sessions=[ChargingSessionOut.model_validate(s, from_attributes=True) for s in sessions],
        mileage_records=[
            MileageRecordOut.model_validate(m, from_attributes=True) for m in mileage
        ],
    )


def import_data(
    session: Session, *, sessions: list[dict], mileage_records: list[dict] | None
) -> DataImportOut:
    """Replace every stored session and mileage record with the given rows.

    Rows that fail validation, lack a provider or session_id, or repeat a
    (provider, session_id) pair are skipped and counted as errors; the remaining rows are still imported.
    """
    session.execute(delete(ChargingSession))
    session.execute(delete(MileageRecord))

    imported_sessions = 0
    imported_mileage = 0
    errors = 0

    seen: set[tuple[str, str]] = set()
    for raw in sessions:
        try:
            data = ChargingSessionCreateIn.model_validate(raw)
        except ValidationError:
            errors += 1
            continue
        key = (data.provider.strip(), data.session_id.strip())
        if not all(key) or key in seen:
            errors += 1
            continue
        seen.add(key)
        session.add(_session_from_import(data))
        imported_sessions += 1

    for raw in mileage_records or []:
        try:
            rec = MileageRecordIn.model_validate(raw)
        except ValidationError:
            errors += 1
            continue
        if rec.odometer_reading is None or rec.recorded_date is None or rec.odometer_reading < 0:
            errors += 1
            continue
        session.add(
            MileageRecord(
                odometer_reading=rec.odometer_reading,
                recorded_date=rec.recorded_date,
                notes=rec.notes or None,
            )
        )
        imported_mileage += 1

    session.commit()
    log_event(
        logger,
        "data.imported",
        imported_sessions=imported_sessions,
        imported_mileage=imported_mileage,
        errors=errors,
    )
    return DataImportOut(
        message="Import completed with errors" if errors else "Data imported successfully",
        imported_sessions=imported_sessions,
        imported_mileage=imported_mileage,
        errors=errors,
    )


def build_export_xlsx(session: Session) -> bytes:
    data = export_data(session)

    wb = Workbook()
    ws = wb.active
    ws.title = "Sessions"
    for col, (header, _) in enumerate(_SESSION_COLUMNS, start=1):
        ws.cell(row=1, column=col, value=header)
    for row, item in enumerate(data.sessions, start=2):
        for col, (_, attr) in enumerate(_SESSION_COLUMNS, start=1):
            value = getattr(item, attr)
            if isinstance(value, datetime) and value.tzinfo is not None:
                # openpyxl cannot store tz-aware datetimes
                value = value.astimezone(UTC).replace(tzinfo=None)
            ws.cell(row=row, column=col, value=value)

    ws_m = wb.create_sheet("Mileage")
    for col, header in enumerate(("Date", "Odometer", "Notes"), start=1):
        ws_m.cell(row=1, column=col, value=header)
    for row, rec in enumerate(data.mileage_records, start=2):
        ws_m.cell(row=row, column=1, value=rec.recorded_date)
        ws_m.cell(row=row, column=2, value=rec.odometer_reading)
        ws_m.cell(row=row, column=3, value=rec.notes)

    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()


def _session_from_import(data: ChargingSessionCreateIn) -> ChargingSession:
    return ChargingSession(
        provider=data.provider.strip(),
        session_id=data.session_id.strip(),
        evse_id=data.evse_id,
        location_name=data.location_name,
        location_address=data.location_address,
        transaction_start=data.transaction_start,
        transaction_end=data.transaction_end,
        duration_minutes=data.duration_minutes,
        total_energy_kwh=data.total_energy_kwh,
        maximum_power_kw=data.maximum_power_kw,
        total_cost=data.total_cost or 0.0,
        energy_cost=data.energy_cost,
        time_cost=data.time_cost,
    )
