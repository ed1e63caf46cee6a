"""
Alembic model import hook.

Importing this module ensures all SQLAlchemy models are registered on Base.metadata.
"""

from __future__ import annotations

from ev_charge_log.modules.mileage.models import MileageRecord  # noqa: F401
from ev_charge_log.modules.sessions.models import ChargingSession  # noqa: F401
