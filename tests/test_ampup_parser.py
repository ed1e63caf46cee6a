from __future__ import annotations

from ev_charge_log.modules.receipts.parsers.ampup import (
    parse_ampup_receipt,
    parse_duration_minutes,
    parse_timestamp,
)


def test_sample_receipt_end_to_end(sample_receipt):
    parsed = parse_ampup_receipt(sample_receipt)

    assert parsed.provider == "AmpUp"
    assert parsed.evse_id == "E123"
    assert parsed.location_name == "Main Street Garage"
    assert parsed.location_address == "100 Main St, Springfield, CA 90000"
    assert parsed.total_energy_kwh == 10.5
    assert parsed.maximum_power_kw == 7.2
    assert parsed.total_cost == 3.15
    assert parsed.session_id == "S999"
    assert parsed.duration_minutes == 83.75
    assert parsed.energy_cost == 2.65
    assert parsed.time_cost == 0.5
    assert parsed.transaction_start == "2024-01-05T10:23:00.000Z"
    assert parsed.transaction_end == "2024-01-05T11:46:00.000Z"


def test_total_price_parses_two_decimal_literal():
    parsed = parse_ampup_receipt("EVSE ID: X\nTotal Price: $12.34\n")
    assert parsed.total_cost == 12.34


def test_duration_requires_hours_minutes_and_seconds():
    assert parse_duration_minutes("1 hr 23 min 45 sec") == 83.75
    assert parse_duration_minutes("0 hr 5 min 30 sec") == 5.5
    assert parse_duration_minutes("23 min") == 0
    assert parse_duration_minutes("5 min 30 sec") == 0
    assert parse_duration_minutes("1 hr 23 min") == 0

    parsed = parse_ampup_receipt("Transaction Duration: 23 min")
    assert parsed.duration_minutes == 0


def test_cost_breakdown_found_regardless_of_line_order():
    text = (
        "Time (Charging): $1.50\n"
        "Session ID: S1\n"
        "Total Price: $6.50\n"
        "Breakdown: Energy: $5.00 (incl. tax)\n"
    )
    parsed = parse_ampup_receipt(text)
    assert parsed.energy_cost == 5.0
    assert parsed.time_cost == 1.5


def test_total_energy_line_is_not_mistaken_for_energy_cost():
    parsed = parse_ampup_receipt("Total Energy: 10.50 kWh\n")
    assert parsed.total_energy_kwh == 10.5
    assert parsed.energy_cost == 0


def test_missing_fields_default_to_empty_and_zero():
    parsed = parse_ampup_receipt("AmpUp\nsomething unrelated\n")
    assert parsed.session_id == ""
    assert parsed.evse_id == ""
    assert parsed.total_cost == 0
    assert parsed.energy_cost == 0
    assert parsed.time_cost == 0
    assert parsed.transaction_start is None
    assert parsed.transaction_end is None


def test_garbled_values_degrade_instead_of_raising():
    text = (
        "Total Energy: n/a kWh\n"
        "Maximum Power: ??\n"
        "Total Price: free\n"
        "Transaction Start: sometime yesterday\n"
    )
    parsed = parse_ampup_receipt(text)
    assert parsed.total_energy_kwh == 0
    assert parsed.maximum_power_kw == 0
    assert parsed.total_cost == 0
    assert parsed.transaction_start is None


def test_labels_are_case_sensitive_prefixes_and_last_one_wins():
    text = (
        "session id: lower\n"
        "Session ID: first\n"
        "  Session ID:   second  \n"
        "Note Session ID: ignored\n"
    )
    parsed = parse_ampup_receipt(text)
    assert parsed.session_id == "second"


def test_parsing_is_idempotent(sample_receipt):
    assert parse_ampup_receipt(sample_receipt) == parse_ampup_receipt(sample_receipt)


def test_parse_timestamp_formats():
    assert parse_timestamp("2024-01-05T10:23:00Z") == "2024-01-05T10:23:00.000Z"
    assert parse_timestamp("2024-01-05T10:23:00-08:00") == "2024-01-05T18:23:00.000Z"
    assert parse_timestamp("Jan 5, 2024 10:23 AM") == "2024-01-05T10:23:00.000Z"
    assert parse_timestamp("January 5, 2024, 10:23:15 PM") == "2024-01-05T22:23:15.000Z"
    assert parse_timestamp("") is None
    assert parse_timestamp("not a date") is None


def test_parse_timestamp_keeps_meridiem_on_iso_style_dates():
    assert parse_timestamp("2024-01-05 10:23 PM") == "2024-01-05T22:23:00.000Z"
    assert parse_timestamp("2024-01-05 10:23:30 AM") == "2024-01-05T10:23:30.000Z"
    assert parse_timestamp("2024-01-05 12:05 AM") == "2024-01-05T00:05:00.000Z"


def test_parse_timestamp_applies_us_zone_abbreviations():
    assert parse_timestamp("01/05/2024 10:23 AM PST") == "2024-01-05T18:23:00.000Z"
    assert parse_timestamp("07/04/2024 9:00 PM PDT") == "2024-07-05T04:00:00.000Z"
    assert parse_timestamp("Jan 5, 2024 10:23 AM EST") == "2024-01-05T15:23:00.000Z"
    assert parse_timestamp("01/05/2024 10:23 AM UTC") == "2024-01-05T10:23:00.000Z"


def test_parse_timestamp_rejects_unknown_zone_abbreviation():
    assert parse_timestamp("01/05/2024 10:23 AM XYZT") is None
