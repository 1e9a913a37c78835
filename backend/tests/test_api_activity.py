import pytest
from fastapi.testclient import TestClient

from glucoview.main import app

client = TestClient(app)


def test_cob_status():
    response = client.post("/api/activity/cob", json={
        "at": "2024-05-01T12:45:00Z",
        "events": [
            {"kind": "carbs", "timestamp": "2024-05-01T12:00:00Z", "carbs_grams": 40},
            {"kind": "insulin", "timestamp": "2024-05-01T09:15:00Z", "units_delivered": 2},
        ],
    })
    assert response.status_code == 200
    body = response.json()

    assert body["current_cob"] == pytest.approx(20.0)
    assert body["insulin_on_board"] == pytest.approx(1.0)
    assert body["estimated_glucose_impact"] == pytest.approx(3.0)
    assert body["active_entries"][0]["original_carbs"] == 40


def test_cob_projection_with_custom_config():
    response = client.post("/api/activity/cob/projection", json={
        "at": "2024-05-01T12:00:00Z",
        "events": [{"kind": "carbs", "timestamp": "2024-05-01T12:00:00Z", "carbs_grams": 40}],
        "config": {"carb_half_life_minutes": 15},
    })
    assert response.status_code == 200
    points = response.json()

    assert len(points) == 25
    assert points[1]["cob"] == pytest.approx(20.0)


def test_iob_projection():
    response = client.post("/api/activity/iob/projection", json={
        "start": "2024-05-01T12:00:00Z",
        "hours": 1,
        "interval_minutes": 30,
        "events": [{"kind": "insulin", "timestamp": "2024-05-01T12:00:00Z", "units_delivered": 2}],
    })
    assert response.status_code == 200
    assert [p["iob"] for p in response.json()] == [0.0, 1.0, 2.0]


def test_cob_daily_summary():
    response = client.post("/api/activity/cob/summary", json={
        "day": "2024-05-01",
        "notes": [
            {"timestamp": "2024-05-01T08:00:00Z", "carbs": 40, "insulin": 4, "glucose_value": 6.0, "meal": "Breakfast"},
            {"timestamp": "2024-05-01T13:00:00Z", "carbs": 60, "insulin": 6, "glucose_value": 9.0},
            {"timestamp": "2024-04-30T20:00:00Z", "carbs": 80, "insulin": 8},
        ],
    })
    assert response.status_code == 200
    body = response.json()

    assert body["total_carbs"] == 100
    assert body["total_insulin"] == 10.0
    assert body["average_glucose"] == 7.5
    assert body["carb_insulin_ratio"] == 10.0
    assert body["note_count"] == 2


def test_cob_daily_summary_rejects_non_finite_reading():
    response = client.post(
        "/api/activity/cob/summary",
        content='{"notes": [{"timestamp": "2024-05-01T08:00:00Z", "glucose_value": NaN}]}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
