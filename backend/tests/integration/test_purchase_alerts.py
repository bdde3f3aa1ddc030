"""
Integration Tests: Purchase Alert Endpoints

Tests:
- GET /api/v1/purchase-alerts with filters
- Summary and critical views
- PATCH /api/v1/purchase-alerts/{id}/status workflow
"""
import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def alert_id(client: TestClient, product, order):
    resp = client.post(
        "/api/v1/materials/stock-check",
        json={"products": [{"product_id": 7, "quantity": 20}], "order_id": order.id},
    )
    return resp.json()["alerts"][0]["id"]


class TestPurchaseAlerts:

    def test_list_and_filter(self, client: TestClient, alert_id):
        assert [a["id"] for a in client.get("/api/v1/purchase-alerts").json()] == [alert_id]
        assert client.get("/api/v1/purchase-alerts", params={"status": "ordered"}).json() == []

        alert = client.get("/api/v1/purchase-alerts", params={"priority": "critical"}).json()[0]
        assert alert["material_name"] == "Drill Fabric"
        assert alert["is_overdue"] is False

    def test_summary_and_critical(self, client: TestClient, alert_id):
        summary = client.get("/api/v1/purchase-alerts/summary").json()
        assert summary["total"] == 1
        assert summary["critical"] == 1
        assert summary["by_status"]["pending"] == 1

        critical = client.get("/api/v1/purchase-alerts/critical").json()
        assert [a["id"] for a in critical] == [alert_id]

    def test_procurement_workflow(self, client: TestClient, alert_id):
        resp = client.patch(
            f"/api/v1/purchase-alerts/{alert_id}/status",
            json={"status": "ordered", "expected_date": "2026-10-30T10:00:00"},
            headers={"X-User-ID": "8"},
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "ordered"

        resp = client.patch(f"/api/v1/purchase-alerts/{alert_id}/status", json={"status": "fulfilled"})
        assert resp.status_code == 200
        assert client.get("/api/v1/purchase-alerts/critical").json() == []

    def test_invalid_target_status_is_rejected(self, client: TestClient, alert_id):
        resp = client.patch(f"/api/v1/purchase-alerts/{alert_id}/status", json={"status": "pending"})
        assert resp.status_code == 422

    def test_terminal_alert_cannot_reopen(self, client: TestClient, alert_id):
        client.patch(f"/api/v1/purchase-alerts/{alert_id}/status", json={"status": "cancelled"})

        resp = client.patch(f"/api/v1/purchase-alerts/{alert_id}/status", json={"status": "ordered"})

        assert resp.status_code == 409

    def test_unknown_alert(self, client: TestClient):
        resp = client.patch("/api/v1/purchase-alerts/404/status", json={"status": "cancelled"})
        assert resp.status_code == 404


class TestHealth:

    def test_health(self, client: TestClient):
        assert client.get("/health").json()["status"] == "healthy"

    def test_request_id_is_echoed(self, client: TestClient):
        resp = client.get("/", headers={"X-Request-ID": "req-123"})
        assert resp.headers["X-Request-ID"] == "req-123"
