from __future__ import annotations

import io
from datetime import datetime

from fastapi.testclient import TestClient
from openpyxl import load_workbook

from ev_charge_log.main import app


def _client() -> TestClient:
    return TestClient(app)


def test_health_reports_database_connected():
    resp = _client().get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["database"] == "Connected"
    assert resp.headers["x-request-id"]


def test_parse_receipt_preview_does_not_persist(sample_receipt):
    client = _client()
    resp = client.post("/api/receipts/parse", json={"text": sample_receipt})
    assert resp.status_code == 200
    body = resp.json()
    assert body["evse_id"] == "E123"
    assert body["total_energy_kwh"] == 10.5
    assert body["maximum_power_kw"] == 7.2
    assert body["total_cost"] == 3.15
    assert body["session_id"] == "S999"

    assert client.get("/api/sessions").json() == []


def test_receipt_error_status_codes():
    client = _client()
    resp = client.post("/api/receipts/parse", json={"text": "hello world"})
    assert resp.status_code == 422
    assert "Unknown receipt format" in resp.json()["detail"]

    resp = client.post("/api/receipts/parse", json={"text": "ChargePoint receipt"})
    assert resp.status_code == 501

    resp = client.post("/api/receipts/parse", json={"text": "   "})
    assert resp.status_code == 400


def test_import_receipt_then_duplicate(sample_receipt):
    client = _client()
    resp = client.post("/api/receipts", json={"text": sample_receipt})
    assert resp.status_code == 201
    created = resp.json()
    assert created["session_id"] == "S999"
    assert created["transaction_start"].endswith("Z")
    preview = client.post("/api/receipts/parse", json={"text": sample_receipt}).json()
    assert datetime.fromisoformat(created["transaction_start"]) == datetime.fromisoformat(
        preview["transaction_start"]
    )
    listed = client.get("/api/sessions").json()
    assert listed[0]["transaction_start"] == created["transaction_start"]

    dup = client.post("/api/receipts", json={"text": sample_receipt})
    assert dup.status_code == 409
    assert dup.json()["detail"] == "This charging session has already been recorded."

    found = client.get("/api/sessions/AmpUp/S999")
    assert found.status_code == 200
    assert found.json()["id"] == created["id"]

    assert client.get("/api/sessions/AmpUp/missing").json() is None


def test_import_receipt_missing_session_id():
    resp = _client().post("/api/receipts", json={"text": "AmpUp\nTotal Price: $3.00"})
    assert resp.status_code == 400
    assert "session_id" in resp.json()["detail"]


def test_session_crud():
    client = _client()
    resp = client.post(
        "/api/sessions",
        json={"provider": "AmpUp", "session_id": "S1", "total_cost": 4.2},
    )
    assert resp.status_code == 201
    new_id = resp.json()["id"]

    missing = client.post("/api/sessions", json={"provider": "AmpUp", "session_id": "S2"})
    assert missing.status_code == 400

    assert [s["id"] for s in client.get("/api/sessions").json()] == [new_id]

    assert client.delete(f"/api/sessions/{new_id}").status_code == 200
    assert client.delete(f"/api/sessions/{new_id}").status_code == 404


def test_mileage_crud_and_monotonic_check():
    client = _client()
    assert client.get("/api/mileage/latest").json() is None

    resp = client.post(
        "/api/mileage", json={"odometer_reading": 1000, "recorded_date": "2024-01-01"}
    )
    assert resp.status_code == 201
    first_id = resp.json()["id"]

    resp = client.post(
        "/api/mileage",
        json={"odometer_reading": 1250, "recorded_date": "2024-02-01", "notes": " trip "},
    )
    assert resp.status_code == 201

    lower = client.post(
        "/api/mileage", json={"odometer_reading": 900, "recorded_date": "2024-03-01"}
    )
    assert lower.status_code == 400
    assert "cannot be less than the latest reading" in lower.json()["detail"]

    negative = client.post(
        "/api/mileage", json={"odometer_reading": -1, "recorded_date": "2024-03-01"}
    )
    assert negative.status_code == 400

    incomplete = client.post("/api/mileage", json={"recorded_date": "2024-03-01"})
    assert incomplete.status_code == 400

    latest = client.get("/api/mileage/latest").json()
    assert latest["odometer_reading"] == 1250
    assert latest["notes"] == "trip"

    records = client.get("/api/mileage").json()
    assert [r["odometer_reading"] for r in records] == [1250, 1000]

    updated = client.put(
        f"/api/mileage/{first_id}",
        json={"odometer_reading": 1010, "recorded_date": "2024-01-01", "notes": "fixed"},
    )
    assert updated.status_code == 200
    assert updated.json()["odometer_reading"] == 1010

    assert client.put(
        "/api/mileage/9999", json={"odometer_reading": 1, "recorded_date": "2024-01-01"}
    ).status_code == 404
    assert client.delete(f"/api/mileage/{first_id}").status_code == 200
    assert client.delete(f"/api/mileage/{first_id}").status_code == 404


def test_efficiency_metrics():
    client = _client()
    empty = client.get("/api/metrics/efficiency").json()
    assert empty["total_miles"] == 0
    assert empty["cost_per_mile"] == 0
    assert empty["miles_per_100_kwh"] == 0

    client.post("/api/mileage", json={"odometer_reading": 1000, "recorded_date": "2024-01-01"})
    client.post("/api/mileage", json={"odometer_reading": 1300, "recorded_date": "2024-02-01"})
    client.post(
        "/api/sessions",
        json={"provider": "AmpUp", "session_id": "A", "total_cost": 20.0, "total_energy_kwh": 60},
    )
    client.post(
        "/api/sessions",
        json={"provider": "AmpUp", "session_id": "B", "total_cost": 10.0, "total_energy_kwh": 30},
    )

    m = client.get("/api/metrics/efficiency").json()
    assert m["start_mileage"] == 1000
    assert m["end_mileage"] == 1300
    assert m["total_miles"] == 300
    assert m["total_sessions"] == 2
    assert m["total_cost"] == 30.0
    assert m["total_energy_kwh"] == 90.0
    assert m["cost_per_mile"] == 0.1
    assert m["kwh_per_100_miles"] == 30.0
    assert m["miles_per_100_kwh"] == 333.33

    summary = client.get("/api/metrics/summary").json()
    assert summary["total_sessions"] == 2
    assert summary["avg_cost_per_kwh"] == 30.0 / 90.0


def test_export_and_import_round_trip_replaces_data(sample_receipt):
    client = _client()
    client.post("/api/receipts", json={"text": sample_receipt})
    client.post("/api/mileage", json={"odometer_reading": 500, "recorded_date": "2024-01-01"})

    exported = client.get("/api/export").json()
    assert len(exported["sessions"]) == 1
    assert len(exported["mileage_records"]) == 1

    client.post(
        "/api/sessions", json={"provider": "AmpUp", "session_id": "extra", "total_cost": 1.0}
    )

    resp = client.post(
        "/api/import",
        json={"sessions": exported["sessions"], "mileageRecords": exported["mileage_records"]},
    )
    assert resp.status_code == 200
    assert resp.json()["imported_sessions"] == 1
    assert resp.json()["imported_mileage"] == 1
    assert [s["session_id"] for s in client.get("/api/sessions").json()] == ["S999"]


def test_import_reports_partial_failures():
    client = _client()
    resp = client.post(
        "/api/import",
        json={
            "sessions": [
                {"provider": "AmpUp", "session_id": "A", "total_cost": 1.0},
                {"provider": "AmpUp", "session_id": "A", "total_cost": 2.0},
                "garbage",
                {"total_cost": 1.0},
                {"provider": "  ", "session_id": "B", "total_cost": 1.0},
            ],
            "mileage_records": [{"notes": "no reading"}],
        },
    )
    assert resp.status_code == 207
    body = resp.json()
    assert body["imported_sessions"] == 1
    assert body["imported_mileage"] == 0
    assert body["errors"] == 5
    stored = client.get("/api/sessions").json()
    assert [(s["provider"], s["session_id"]) for s in stored] == [("AmpUp", "A")]


def test_import_requires_sessions_list():
    resp = _client().post("/api/import", json={"sessions": "nope"})
    assert resp.status_code == 400


def test_export_xlsx_has_session_and_mileage_sheets(sample_receipt):
    client = _client()
    client.post("/api/receipts", json={"text": sample_receipt})
    resp = client.get("/api/export.xlsx")
    assert resp.status_code == 200

    wb = load_workbook(io.BytesIO(resp.content))
    assert wb.sheetnames == ["Sessions", "Mileage"]
    ws = wb["Sessions"]
    assert ws.cell(row=1, column=2).value == "Session ID"
    assert ws.cell(row=2, column=2).value == "S999"
    assert ws.cell(row=2, column=13).value == 3.15
