from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from ev_charge_log.core.db import engine
from ev_charge_log.core.logging import get_logger, log_exception
from ev_charge_log.modules.exports.api import router as exports_router
from ev_charge_log.modules.metrics.api import router as metrics_router
from ev_charge_log.modules.mileage.api import router as mileage_router
from ev_charge_log.modules.receipts.api import router as receipts_router
from ev_charge_log.modules.sessions.api import router as sessions_router

router = APIRouter()
logger = get_logger(__name__)

router.include_router(receipts_router, prefix="/api")
router.include_router(sessions_router, prefix="/api")
router.include_router(mileage_router, prefix="/api")
router.include_router(metrics_router, prefix="/api")
router.include_router(exports_router, prefix="/api")


@router.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/health")
def health() -> JSONResponse:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database = "Connected"
    except Exception:
        log_exception(logger, "health.database.error")
        database = "Unavailable"
    ok = database == "Connected"
    return JSONResponse(
        status_code=200 if ok else 503,
        content={
            "status": "OK" if ok else "ERROR",
            "timestamp": datetime.now(UTC).isoformat(),
            "database": database,
        },
    )
