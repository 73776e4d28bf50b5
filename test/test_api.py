"""
HTTP surface: /validate, /status-codes, /health, /metrics via FastAPI TestClient.
"""
import pytest
from fastapi.testclient import TestClient

from shipment_validator.config import settings
from shipment_validator.main import app

from _helper import HAPPY_PATH, events, shipment


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _payload(*records):
    return [r.model_dump() for r in records]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_validate_batch(client):
    body = _payload(
        shipment(events(*HAPPY_PATH), shipment_no="S1"),
        shipment(events(1000, 1900), shipment_no="S2"),
    )
    resp = client.post("/validate", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["summary"] == {
        "total_shipments": 2,
        "valid_shipments": 1,
        "invalid_shipments": 1,
        "anomalies_detected": 4,
    }
    assert data["anomaly_summary"]["skipped_states"] == 3
    assert [s["shipment_no"] for s in data["shipments"]] == ["S1", "S2"]


def test_validate_filter_invalid(client):
    body = _payload(
        shipment(events(*HAPPY_PATH), shipment_no="S1"),
        shipment([], shipment_no="S2"),
    )
    data = client.post("/validate", params={"status": "invalid"}, json=body).json()
    assert [s["shipment_no"] for s in data["shipments"]] == ["S2"]
    assert data["summary"]["total_shipments"] == 2


def test_validate_rejects_bad_filter(client):
    resp = client.post("/validate", params={"status": "maybe"}, json=[])
    assert resp.status_code == 422


def test_validate_rejects_malformed_record(client):
    resp = client.post("/validate", json=[{"tracking_id": "T1"}])
    assert resp.status_code == 422


def test_validate_accepts_missing_events_field(client):
    data = client.post("/validate", json=[{"shipment_no": "S1", "tracking_id": "T1"}]).json()
    assert data["shipments"][0]["anomalies"][0]["type"] == "no_events"


def test_validate_rejects_oversized_batch(client, monkeypatch):
    monkeypatch.setattr(settings, "max_batch_size", 1)
    body = _payload(shipment([], shipment_no="S1"), shipment([], shipment_no="S2"))
    resp = client.post("/validate", json=body)
    assert resp.status_code == 413
    assert resp.json()["status"] == "rejected"


def test_large_batch_is_offloaded_with_same_result(client, monkeypatch):
    monkeypatch.setattr(settings, "offload_threshold", 1)
    body = _payload(shipment(events(*HAPPY_PATH)))
    data = client.post("/validate", json=body).json()
    assert data["summary"]["valid_shipments"] == 1


def test_status_codes_listing(client):
    data = client.get("/status-codes").json()
    by_code = {entry["code"]: entry for entry in data["status_codes"]}
    assert by_code[1900]["terminal"] is True
    assert by_code[1000]["valid_start"] is True
    assert by_code[1700]["phase"] == "delivery"
    assert 1900 in by_code[1700]["next_states"]


def test_metrics_exposes_validation_counters(client):
    client.post("/validate", json=_payload(shipment([])))
    text = client.get("/metrics").text
    assert "validation_batches_total" in text
    assert 'anomalies_detected_total{category="no_events"}' in text


def test_null_timestamp_is_reported_not_rejected(client):
    body = _payload(shipment(events(*HAPPY_PATH), shipment_no="S1"))
    body.append({
        "shipment_no": "S2",
        "tracking_id": "T2",
        "tracking_events": [{"status_code": 1010, "status_name": "Shipment Booked", "timestamp": None}],
    })
    resp = client.post("/validate", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["summary"]["total_shipments"] == 2
    assert data["summary"]["valid_shipments"] == 1
    second = data["shipments"][1]
    assert [(a["type"], a["event_index"]) for a in second["anomalies"]] == [("invalid_timestamp", 0)]
    assert data["anomaly_summary"]["time_anomalies"] == 1
