from decimal import Decimal

import pytest
from fastapi import HTTPException

from app.models.purchase_alert import PurchaseAlert
from app.schemas.stock import OrderLineItem
from app.services.material_stock_service import MaterialStockService
from app.services.purchase_alert_service import PurchaseAlertService


def _items(*pairs):
    return [OrderLineItem(product_id=pid, quantity=Decimal(str(qty))) for pid, qty in pairs]


def test_requirements_are_summed_per_material(db, make_material, make_product):
    cotton = make_material(name="Cotton")
    lining = make_material(name="Lining")
    p1 = make_product(cotton, name="Shirt")
    p2 = make_product(lining, name="Blazer")

    requirements = MaterialStockService(db).aggregate_requirements(_items((p1.id, 3), (p2.id, 5), (p1.id, 2)))

    assert requirements == {cotton.id: Decimal("5"), lining.id: Decimal("5")}


def test_products_without_material_are_skipped(db, make_product, product):
    unlinked = make_product(None, name="Alteration Service")

    requirements = MaterialStockService(db).aggregate_requirements(_items((unlinked.id, 4), (product.id, 1)))

    assert requirements == {3: Decimal("1")}


def test_order_that_overdraws_material_raises_critical_alert(db, product, order):
    report = MaterialStockService(db).check_order_stock(_items((7, 20)), order_id=order.id, user_id=11)

    assert report.can_proceed is True
    assert report.total_materials_needed == {3: Decimal("20")}
    assert report.warnings == ["Drill Fabric: 15m < 10m (safety level)"]

    assert len(report.alerts) == 1
    alert = report.alerts[0]
    assert alert.material_id == 3
    assert alert.order_id == order.id
    assert alert.required_stock == Decimal("15")
    assert alert.status == "pending"
    assert alert.priority == "critical"
    assert alert.unit == "m"

    analysis = report.stock_analysis[0]
    assert analysis.stock_after_order == Decimal("-5")
    assert analysis.will_be_out_of_stock is True

    row = db.query(PurchaseAlert).one()
    assert row.created_by == 11
    assert "Material needed: 20 m" in row.notes


def test_sufficient_stock_produces_clean_report(db, make_material, make_product, order):
    material = make_material(qty_on_hand=Decimal("500"), safety_stock=Decimal("100"))
    product = make_product(material)

    report = MaterialStockService(db).check_order_stock(_items((product.id, 50)), order_id=order.id)

    assert report.alerts == []
    assert report.warnings == []
    assert report.stock_analysis[0].severity == "low"
    assert db.query(PurchaseAlert).count() == 0


def test_preview_without_order_records_no_alert(db, product):
    report = MaterialStockService(db).check_order_stock(_items((7, 20)))

    assert report.alerts == []
    assert len(report.warnings) == 1
    assert db.query(PurchaseAlert).count() == 0


def test_repeated_check_keeps_single_alert_with_largest_shortage(db, product, order):
    service = MaterialStockService(db)

    service.check_order_stock(_items((7, 20)), order_id=order.id)
    service.check_order_stock(_items((7, 30)), order_id=order.id)
    report = service.check_order_stock(_items((7, 10)), order_id=order.id)

    alerts = db.query(PurchaseAlert).all()
    assert len(alerts) == 1
    assert alerts[0].required_stock == Decimal("25")
    assert report.alerts[0].id == alerts[0].id
    assert "Updated: required quantity increased to 10 m" in alerts[0].notes


def test_check_can_always_proceed_even_when_everything_is_out(db, make_material, make_product, order):
    empty = make_material(qty_on_hand=Decimal("0"), safety_stock=Decimal("5"))
    product = make_product(empty)

    report = MaterialStockService(db).check_order_stock(_items((product.id, 1)), order_id=order.id)

    assert report.can_proceed is True
    assert report.alerts[0].priority == "critical"


def test_missing_material_is_reported_as_warning(db, make_product, order):
    orphan = make_product(None, name="Orphan")
    orphan.material_id = 999
    db.commit()

    report = MaterialStockService(db).check_order_stock(_items((orphan.id, 2)), order_id=order.id)

    assert report.warnings == ["Material ID 999 not found in database"]
    assert report.can_proceed is True


def test_failed_alert_write_becomes_warning(db, product, order, monkeypatch):
    alerts = PurchaseAlertService(db)
    monkeypatch.setattr(alerts, "upsert_alert", lambda *args, **kwargs: None)

    report = MaterialStockService(db, alert_service=alerts).check_order_stock(_items((7, 20)), order_id=order.id)

    assert report.alerts == []
    assert "Could not create purchase alert for Drill Fabric" in report.warnings
    assert report.can_proceed is True


def test_failure_for_one_material_does_not_stop_the_others(db, make_material, make_product, product, order, monkeypatch):
    other = make_product(make_material(name="Buttons", unit="pcs"), name="Coat")
    service = MaterialStockService(db)
    real_get = service._material_repo.get_by_id

    def flaky_get(material_id):
        if material_id == 3:
            raise RuntimeError("connection reset")
        return real_get(material_id)

    monkeypatch.setattr(service._material_repo, "get_by_id", flaky_get)

    report = service.check_order_stock(_items((7, 1), (other.id, 1)), order_id=order.id)

    assert "Could not check stock for material ID 3" in report.warnings
    assert [a.material_name for a in report.stock_analysis] == ["Buttons"]
    assert report.can_proceed is True


def test_aggregation_failure_returns_degraded_report(db, monkeypatch):
    service = MaterialStockService(db)

    def broken(line_items):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(service, "aggregate_requirements", broken)

    report = service.check_order_stock(_items((7, 1)), order_id=1)

    assert report.warnings == ["Stock checking failed: database unavailable"]
    assert report.alerts == []
    assert report.can_proceed is True


def test_get_stock_warnings(db, product):
    warnings = MaterialStockService(db).get_stock_warnings(_items((7, 20)))

    assert warnings == ["Drill Fabric: 15m < 10m (safety level)"]


def test_check_material_status(db, make_material):
    material = make_material(qty_on_hand=Decimal("8"), safety_stock=Decimal("10"))

    status = MaterialStockService(db).check_material_status(material.id)

    assert status.status == "below_safety"
    assert status.is_below_safety is True
    assert status.severity == "medium"


def test_check_material_status_unknown_material(db):
    with pytest.raises(HTTPException) as exc:
        MaterialStockService(db).check_material_status(404)
    assert exc.value.status_code == 404


def test_materials_with_stock_issues(db, make_material):
    make_material(name="Plenty", qty_on_hand=Decimal("100"), safety_stock=Decimal("10"))
    make_material(name="Low", qty_on_hand=Decimal("4"), safety_stock=Decimal("10"))
    make_material(name="Empty", qty_on_hand=Decimal("0"), safety_stock=Decimal("0"))
    make_material(name="Retired", qty_on_hand=Decimal("0"), safety_stock=Decimal("5"), is_active=False)

    issues = MaterialStockService(db).get_materials_with_stock_issues()

    assert [i.material_name for i in issues] == ["Empty", "Low"]
    low = issues[1]
    assert low.shortage_amount == Decimal("6")
    assert low.severity == "high"
    assert issues[0].status == "out_of_stock"


def test_stock_check_for_unknown_order_is_rejected(db, product):
    with pytest.raises(HTTPException) as exc:
        MaterialStockService(db).check_stock_for_order(_items((7, 20)), order_id=4242)

    assert exc.value.status_code == 404
    assert db.query(PurchaseAlert).count() == 0


def test_stock_check_for_existing_order_records_alert(db, product, order):
    report = MaterialStockService(db).check_stock_for_order(_items((7, 20)), order_id=order.id)

    assert [a.order_id for a in report.alerts] == [order.id]


def test_stock_check_without_order_is_a_preview(db, product):
    report = MaterialStockService(db).check_stock_for_order(_items((7, 20)))

    assert report.alerts == []
    assert report.warnings == ["Drill Fabric: 15m < 10m (safety level)"]
