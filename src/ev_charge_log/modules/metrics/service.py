from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ev_charge_log.modules.metrics.schemas import EfficiencyMetricsOut, SessionSummaryOut
from ev_charge_log.modules.mileage.models import MileageRecord
from ev_charge_log.modules.sessions.models import ChargingSession


def session_summary(session: Session) -> SessionSummaryOut:
    total_sessions, total_cost, total_energy = _charging_totals(session)
    return SessionSummaryOut(
        total_sessions=total_sessions,
        total_cost=total_cost,
        total_energy_kwh=total_energy,
        avg_cost_per_kwh=total_cost / total_energy if total_energy > 0 else 0.0,
    )


def efficiency_metrics(session: Session) -> EfficiencyMetricsOut:
    """Driving efficiency over the whole odometer range.

    Distance is the spread between the lowest and highest odometer reading;
    cost and energy are summed over every recorded charging session.
    """
    start_mileage, end_mileage = session.execute(
        select(func.min(MileageRecord.odometer_reading), func.max(MileageRecord.odometer_reading))
    ).one()
    start_mileage = start_mileage or 0
    end_mileage = end_mileage or 0
    total_miles = end_mileage - start_mileage

    total_sessions, total_cost, total_energy = _charging_totals(session)

    cost_per_mile = kwh_per_100_miles = miles_per_100_kwh = 0.0
    if total_miles > 0:
        cost_per_mile = round(total_cost / total_miles, 4)
        kwh_per_100_miles = round(total_energy / total_miles * 100, 2)
    if total_energy > 0:
        miles_per_100_kwh = round(total_miles / total_energy * 100, 2)

    return EfficiencyMetricsOut(
        start_mileage=start_mileage,
        end_mileage=end_mileage,
        total_miles=total_miles,
        total_cost=total_cost,
        total_energy_kwh=total_energy,
        total_sessions=total_sessions,
        cost_per_mile=cost_per_mile,
        kwh_per_100_miles=kwh_per_100_miles,
        miles_per_100_kwh=miles_per_100_kwh,
    )


def _charging_totals(session: Session) -> tuple[int, float, float]:
    count, cost, energy = session.execute(
        select(
            func.count(ChargingSession.id),
            func.sum(ChargingSession.total_cost),
            func.sum(ChargingSession.total_energy_kwh),
        )
    ).one()
    return int(count or 0), float(cost or 0.0), float(energy or 0.0)
