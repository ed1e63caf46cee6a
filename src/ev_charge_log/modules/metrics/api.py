from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ev_charge_log.core.db import db_session
from ev_charge_log.modules.metrics.schemas import EfficiencyMetricsOut, SessionSummaryOut
from ev_charge_log.modules.metrics.service import efficiency_metrics, session_summary

router = APIRouter(tags=["metrics"])


@router.get("/metrics/efficiency", response_model=EfficiencyMetricsOut)
def efficiency_endpoint(session: Session = Depends(db_session)) -> EfficiencyMetricsOut:
    return efficiency_metrics(session)


@router.get("/metrics/summary", response_model=SessionSummaryOut)
def summary_endpoint(session: Session = Depends(db_session)) -> SessionSummaryOut:
    return session_summary(session)
