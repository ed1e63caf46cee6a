from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from ev_charge_log.core.db import db_session
from ev_charge_log.modules.exports.schemas import DataExportOut, DataImportIn
from ev_charge_log.modules.exports.service import build_export_xlsx, export_data, import_data

router = APIRouter(tags=["exports"])


@router.get("/export", response_model=DataExportOut)
def export_endpoint(session: Session = Depends(db_session)) -> DataExportOut:
    return export_data(session)


@router.get("/export.xlsx")
def export_xlsx_endpoint(session: Session = Depends(db_session)) -> Response:
    body = build_export_xlsx(session)
    return Response(
        content=body,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": 'attachment; filename="ev_charging_export.xlsx"'},
    )


@router.post("/import")
def import_endpoint(payload: DataImportIn, session: Session = Depends(db_session)) -> JSONResponse:
    if not isinstance(payload.sessions, list):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Sessions must be an array"
        )
    result = import_data(
        session, sessions=payload.sessions, mileage_records=payload.mileage_records
    )
    status_code = 207 if result.errors else 200
    return JSONResponse(status_code=status_code, content=result.model_dump())
