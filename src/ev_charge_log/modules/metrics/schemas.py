from __future__ import annotations

from pydantic import BaseModel


class EfficiencyMetricsOut(BaseModel):
    start_mileage: int
    end_mileage: int
    total_miles: int
    total_cost: float
    total_energy_kwh: float
    total_sessions: int
    cost_per_mile: float
    kwh_per_100_miles: float
    miles_per_100_kwh: float


class SessionSummaryOut(BaseModel):
    total_sessions: int
    total_cost: float
    total_energy_kwh: float
    avg_cost_per_kwh: float
