from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ev_charge_log.core.db import db_session
from ev_charge_log.modules.sessions.schemas import (
    ChargingSessionCreatedOut,
    ChargingSessionCreateIn,
    ChargingSessionOut,
)
from ev_charge_log.modules.sessions.service import (
    delete_session,
    find_session,
    insert_session,
    list_sessions,
)

router = APIRouter(tags=["sessions"])


@router.get("/sessions", response_model=list[ChargingSessionOut])
def list_sessions_endpoint(session: Session = Depends(db_session)) -> list[ChargingSessionOut]:
    rows = list_sessions(session)
    return [ChargingSessionOut.model_validate(s, from_attributes=True) for s in rows]


@router.get("/sessions/{provider}/{session_id}", response_model=ChargingSessionOut | None)
def find_session_endpoint(
    provider: str,
    session_id: str,
    session: Session = Depends(db_session),
) -> ChargingSessionOut | None:
    row = find_session(session, provider=provider, session_id=session_id)
    if not row:
        return None
    return ChargingSessionOut.model_validate(row, from_attributes=True)


@router.post("/sessions", response_model=ChargingSessionCreatedOut, status_code=201)
def create_session_endpoint(
    payload: ChargingSessionCreateIn,
    session: Session = Depends(db_session),
) -> ChargingSessionCreatedOut:
    new_id = insert_session(session, **payload.model_dump())
    return ChargingSessionCreatedOut(id=new_id, message="Session created successfully")


@router.delete("/sessions/{id}")
def delete_session_endpoint(id: int, session: Session = Depends(db_session)) -> dict[str, str]:
    delete_session(session, id=id)
    return {"message": "Session deleted successfully"}
