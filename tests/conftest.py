from __future__ import annotations

import os

import pytest

# Set env before any ev_charge_log imports (settings/engine are created at import time).
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///./.ev_charge_log_test.db")

SAMPLE_RECEIPT = """
AmpUp Charging Receipt

EVSE ID: E123
Location Name: Main Street Garage
Location Address: 100 Main St, Springfield, CA 90000
Transaction Start: 01/05/2024 10:23 AM
Transaction End: 01/05/2024 11:46 AM
Transaction Duration: 1 hr 23 min 45 sec
Total Energy: 10.50 kWh
Maximum Power: 7.2 kW (AC)

Price Breakdown
Energy: $2.65
Time (Charging): $0.50

Total Price: $3.15
Session ID: S999
"""


@pytest.fixture(autouse=True)
def _reset_db() -> None:
    import ev_charge_log.models  # noqa: F401
    from ev_charge_log.core.db import engine
    from ev_charge_log.core.models import Base

    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)

    yield


@pytest.fixture()
def sample_receipt() -> str:
    return SAMPLE_RECEIPT
