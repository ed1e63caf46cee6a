from __future__ import annotations

import ev_charge_log.models  # noqa: F401
from ev_charge_log.core.config import settings
from ev_charge_log.core.db import engine
from ev_charge_log.core.logging import get_logger, log_event
from ev_charge_log.core.models import Base

logger = get_logger(__name__)


def bootstrap() -> None:
    if settings.environment in {"dev", "test"} and str(settings.database_url).startswith("sqlite"):
        Base.metadata.create_all(engine)
        log_event(logger, "bootstrap.schema_created", database_url=settings.database_url)
