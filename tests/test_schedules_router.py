# tests/test_schedules_router.py
"""API tests for the schedule endpoints, backed by the in-memory store."""

import pytest
from datetime import date, timedelta
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from compliance_scheduler.database import get_db
from compliance_scheduler.errors import StoreUnavailable
from compliance_scheduler.main import app
from compliance_scheduler.routers.schedules import get_store
from conftest import TENANT_A, TENANT_B, VEHICLE_1, make_schedule

BASE = f"/api/v1/tenants/{TENANT_A}/schedules"


@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def today():
    return date.today()


class TestSchedulesRouter:
    def test_inspection_type_catalogue(self, client):
        resp = client.get("/api/v1/inspection-types")
        assert resp.status_code == 200
        defaults = {t["value"]: t["default_frequency_weeks"] for t in resp.json()}
        assert defaults == {"safety_inspection": 26, "tax": 52, "mot": 52, "tacho_calibration": 8}

    def test_create_recurring_series_covers_horizon(self, client):
        resp = client.post(f"{BASE}/recurring", json={
            "vehicle_id": VEHICLE_1, "inspection_type": "tacho_calibration",
            "start_date": today().isoformat(), "frequency_weeks": 8,
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["created"] == 7
        assert body["errors"] == []
        assert body["schedules"][-1]["scheduled_date"] == (today() + timedelta(weeks=48)).isoformat()

    def test_create_recurring_series_twice_is_idempotent(self, client):
        payload = {"vehicle_id": VEHICLE_1, "inspection_type": "mot",
                   "start_date": today().isoformat(), "frequency_weeks": 52, "desired_count": 2}
        client.post(f"{BASE}/recurring", json=payload)
        resp = client.post(f"{BASE}/recurring", json=payload)
        assert resp.json()["created"] == 0
        assert len(client.get(BASE).json()) == 2

    @pytest.mark.parametrize("frequency", [0, 105])
    def test_bad_frequency_rejected(self, client, frequency):
        resp = client.post(f"{BASE}/recurring", json={
            "vehicle_id": VEHICLE_1, "inspection_type": "tax",
            "start_date": today().isoformat(), "frequency_weeks": frequency,
        })
        assert resp.status_code == 422
        assert client.get(BASE).json() == []

    def test_list_with_due_status(self, client, store):
        store.insert_schedule(make_schedule(today() - timedelta(days=1)))
        store.insert_schedule(make_schedule(today() + timedelta(days=7)))
        store.insert_schedule(make_schedule(today() + timedelta(days=8)))

        rows = client.get(BASE).json()
        assert [r["due_status"] for r in rows] == ["overdue", "due_this_week", "upcoming"]
        assert [r["days_until_due"] for r in rows] == [-1, 7, 8]

        overdue = client.get(BASE, params={"status": "overdue"}).json()
        assert len(overdue) == 1

    def test_list_is_tenant_scoped(self, client, store):
        store.insert_schedule(make_schedule(today(), tenant_id=TENANT_B))
        assert client.get(BASE).json() == []

    def test_stats(self, client, store):
        store.insert_schedule(make_schedule(today() - timedelta(days=3)))
        store.insert_schedule(make_schedule(today() + timedelta(days=2), inspection_type="tax", frequency_weeks=52))
        stats = client.get(f"{BASE}/stats").json()
        assert stats["total_scheduled"] == 2
        assert stats["overdue_count"] == 1
        assert stats["due_this_week_count"] == 1
        assert stats["upcoming_count"] == 0
        assert stats["recurring_types"] == {"safety_inspection-8w": 1, "tax-52w": 1}

    def test_maintain(self, client, store):
        store.insert_schedule(make_schedule(today(), frequency_weeks=26))
        resp = client.post(f"{BASE}/maintain", json={"horizon_weeks": 52})
        assert resp.status_code == 200
        assert resp.json() == {"series_processed": 1, "schedules_created": 2, "errors": []}

    def test_maintain_without_body_uses_default_horizon(self, client, store):
        store.insert_schedule(make_schedule(today(), frequency_weeks=52))
        resp = client.post(f"{BASE}/maintain")
        assert resp.json()["schedules_created"] == 1

    def test_complete_rolls_series_forward(self, client, store):
        done = store.insert_schedule(make_schedule(today(), frequency_weeks=26))
        resp = client.post(f"{BASE}/{done.id}/complete")
        assert resp.status_code == 200
        assert resp.json()["created"] == 2

    def test_complete_unknown_schedule_is_404(self, client):
        assert client.post(f"{BASE}/nope/complete").status_code == 404

    def test_store_outage_is_503(self, client):
        broken = MagicMock()
        broken.list_active_schedules.side_effect = StoreUnavailable("connection refused")
        app.dependency_overrides[get_store] = lambda: broken
        assert client.get(BASE).status_code == 503
