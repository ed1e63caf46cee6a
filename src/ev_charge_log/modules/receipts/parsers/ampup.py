from __future__ import annotations

import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta, timezone
from typing import Any

from ev_charge_log.modules.receipts.parsers.base import ParsedChargingSession, Provider

_DURATION_RE = re.compile(r"(\d+) hr (\d+) min (\d+) sec")
_LEADING_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_ENERGY_COST_RE = re.compile(r"Energy: \$(\d+\.\d+)")
_TIME_COST_RE = re.compile(r"Time \(Charging\): \$(\d+\.\d+)")
_TRAILING_ZONE_RE = re.compile(r"\s+(?!AM$|PM$)([A-Z]{2,5})$")

_ZONE_OFFSETS_HOURS = {
    "UTC": 0,
    "GMT": 0,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}

_DATETIME_FORMATS = (
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y, %I:%M %p",
    "%m/%d/%Y, %I:%M:%S %p",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%b %d, %Y %I:%M %p",
    "%b %d, %Y, %I:%M %p",
    "%b %d, %Y %I:%M:%S %p",
    "%b %d, %Y, %I:%M:%S %p",
    "%B %d, %Y %I:%M %p",
    "%B %d, %Y, %I:%M %p",
    "%B %d, %Y %I:%M:%S %p",
    "%B %d, %Y, %I:%M:%S %p",
    "%a, %b %d, %Y %I:%M %p",
    "%a %b %d %Y %H:%M:%S",
    "%Y-%m-%d %I:%M %p",
    "%Y-%m-%d %I:%M:%S %p",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y",
    "%b %d, %Y",
    "%B %d, %Y",
)


def parse_ampup_receipt(text: str) -> ParsedChargingSession:
    """Parse an AmpUp receipt pasted as plain text.

    Never raises for missing or garbled fields: anything that cannot be read is
    left at its default ("" for text, 0.0 for numbers, None for timestamps).
    Required-field checks belong to the caller.
    """
    lines = [ln.strip() for ln in text.split("\n") if ln.strip()]
    fields = _extract_labeled_fields(lines)
    fields.update(_extract_cost_breakdown(text))
    return ParsedChargingSession(provider=Provider.AMPUP.value, **fields)


def parse_duration_minutes(s: str) -> float:
    # hours, minutes and seconds must all be present; "23 min" alone gives 0
    m = _DURATION_RE.search(s)
    if not m:
        return 0.0
    hours, minutes, seconds = (int(g) for g in m.groups())
    return hours * 60 + minutes + seconds / 60


def parse_timestamp(s: str) -> str | None:
    dt = _parse_datetime(s)
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC)
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{dt.microsecond // 1000:03d}Z"


def _parse_datetime(s: str) -> datetime | None:
    raw = s.strip()
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        pass
    zone = None
    m = _TRAILING_ZONE_RE.search(raw)
    if m:
        # an abbreviation we cannot place is unreadable, not UTC
        if m.group(1) not in _ZONE_OFFSETS_HOURS:
            return None
        zone = timezone(timedelta(hours=_ZONE_OFFSETS_HOURS[m.group(1)]))
        raw = raw[: m.start()]
    for fmt in _DATETIME_FORMATS:
        try:
            dt = datetime.strptime(raw, fmt)
        except ValueError:
            continue
        return dt.replace(tzinfo=zone) if zone is not None else dt
    return None


def _leading_float(s: str) -> float:
    m = _LEADING_NUMBER_RE.match(s.strip())
    if not m:
        return 0.0
    return float(m.group(0))


def _kwh(value: str) -> float:
    return _leading_float(value.replace(" kWh", ""))


def _kw_ac(value: str) -> float:
    return _leading_float(value.replace(" kW (AC)", ""))


def _dollars(value: str) -> float:
    return _leading_float(value.replace("$", "", 1))


_LABELS: tuple[tuple[str, str, Callable[[str], Any]], ...] = (
    ("EVSE ID:", "evse_id", str),
    ("Location Name:", "location_name", str),
    ("Location Address:", "location_address", str),
    ("Transaction Start:", "transaction_start", parse_timestamp),
    ("Transaction End:", "transaction_end", parse_timestamp),
    ("Transaction Duration:", "duration_minutes", parse_duration_minutes),
    ("Total Energy:", "total_energy_kwh", _kwh),
    ("Maximum Power:", "maximum_power_kw", _kw_ac),
    ("Total Price:", "total_cost", _dollars),
    ("Session ID:", "session_id", str),
)


def _extract_labeled_fields(lines: list[str]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for line in lines:
        for label, name, transform in _LABELS:
            if line.startswith(label):
                # repeated labels overwrite; the last line wins
                fields[name] = transform(line[len(label) :].strip())
                break
    return fields


def _extract_cost_breakdown(text: str) -> dict[str, float]:
    costs: dict[str, float] = {}
    m = _ENERGY_COST_RE.search(text)
    if m:
        costs["energy_cost"] = float(m.group(1))
    m = _TIME_COST_RE.search(text)
    if m:
        costs["time_cost"] = float(m.group(1))
    return costs
