from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ev_charge_log.core.db import db_session
from ev_charge_log.modules.mileage.schemas import (
    MileageRecordCreatedOut,
    MileageRecordIn,
    MileageRecordOut,
)
from ev_charge_log.modules.mileage.service import (
    create_mileage_record,
    delete_mileage_record,
    get_latest_mileage,
    list_mileage_records,
    update_mileage_record,
)

router = APIRouter(tags=["mileage"])


@router.get("/mileage", response_model=list[MileageRecordOut])
def list_mileage_endpoint(session: Session = Depends(db_session)) -> list[MileageRecordOut]:
    rows = list_mileage_records(session)
    return [MileageRecordOut.model_validate(r, from_attributes=True) for r in rows]


@router.get("/mileage/latest", response_model=MileageRecordOut | None)
def latest_mileage_endpoint(session: Session = Depends(db_session)) -> MileageRecordOut | None:
    row = get_latest_mileage(session)
    if not row:
        return None
    return MileageRecordOut.model_validate(row, from_attributes=True)


@router.post("/mileage", response_model=MileageRecordCreatedOut, status_code=201)
def create_mileage_endpoint(
    payload: MileageRecordIn,
    session: Session = Depends(db_session),
) -> MileageRecordCreatedOut:
    row = create_mileage_record(session, **payload.model_dump(), require_increasing=True)
    return MileageRecordCreatedOut(id=row.id, message="Mileage record created successfully")


@router.put("/mileage/{id}", response_model=MileageRecordOut)
def update_mileage_endpoint(
    id: int,
    payload: MileageRecordIn,
    session: Session = Depends(db_session),
) -> MileageRecordOut:
    row = update_mileage_record(session, id=id, **payload.model_dump())
    return MileageRecordOut.model_validate(row, from_attributes=True)


@router.delete("/mileage/{id}")
def delete_mileage_endpoint(id: int, session: Session = Depends(db_session)) -> dict[str, str]:
    delete_mileage_record(session, id=id)
    return {"message": "Mileage record deleted successfully"}
