"""
Integration Tests: Material Stock Endpoints
"""
from decimal import Decimal

from fastapi.testclient import TestClient


class TestMaterialStock:

    def test_stock_check_preview(self, client: TestClient, product):
        resp = client.post("/api/v1/materials/stock-check", json={"products": [{"product_id": 7, "quantity": 20}]})

        assert resp.status_code == 200
        data = resp.json()
        assert data["can_proceed"] is True
        assert data["alerts"] == []
        assert data["warnings"] == ["Drill Fabric: 15m < 10m (safety level)"]
        assert Decimal(str(data["total_materials_needed"]["3"])) == Decimal("20")
        assert data["stock_analysis"][0]["severity"] == "critical"

    def test_stock_check_for_order_records_alert(self, client: TestClient, product, order):
        resp = client.post(
            "/api/v1/materials/stock-check",
            json={"products": [{"product_id": 7, "quantity": 20}], "order_id": order.id},
        )

        assert len(resp.json()["alerts"]) == 1
        assert len(client.get("/api/v1/purchase-alerts", params={"order_id": order.id}).json()) == 1

    def test_material_status(self, client: TestClient, material):
        resp = client.get(f"/api/v1/materials/{material.id}/status")

        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "normal"
        assert data["severity"] == "low"

    def test_material_status_unknown(self, client: TestClient):
        assert client.get("/api/v1/materials/999/status").status_code == 404

    def test_stock_issues(self, client: TestClient, make_material):
        make_material(name="Poplin", qty_on_hand=Decimal("2"), safety_stock=Decimal("10"))
        make_material(name="Canvas", qty_on_hand=Decimal("50"), safety_stock=Decimal("10"))

        resp = client.get("/api/v1/materials/stock-issues")

        assert resp.status_code == 200
        assert [m["material_name"] for m in resp.json()] == ["Poplin"]

    def test_stock_check_for_unknown_order_returns_404(self, client: TestClient, product):
        resp = client.post(
            "/api/v1/materials/stock-check",
            json={"products": [{"product_id": 7, "quantity": 20}], "order_id": 4242},
        )

        assert resp.status_code == 404
        assert client.get("/api/v1/purchase-alerts").json() == []
