"""
Material Stock Service: stock sufficiency checks for orders.

Order line items are resolved to their linked material (one material unit per
product unit), summed per material and compared against on-hand and safety
stock. Shortages raise or refresh a purchase alert for the order. The check
is advisory: it reports problems but never blocks order placement and never
raises.
"""
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import EntityNotFoundException, to_http_exception
from app.repositories.material_repository import MaterialRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.schemas.stock import (
    MaterialStockAnalysis,
    MaterialStockIssue,
    MaterialStockSnapshot,
    MaterialStockStatus,
    OrderLineItem,
    StockAnalysisResult,
    StockCheckReport,
)
from app.services.purchase_alert_service import PurchaseAlertService
from app.utils.quantities import format_qty, to_decimal

logger = logging.getLogger(__name__)

# Material units consumed per product unit until products carry a real bill of materials.
MATERIAL_UNITS_PER_PRODUCT = Decimal("1")


def calculate_severity(current_stock: Decimal, safety_stock: Decimal, stock_after_order: Decimal) -> str:
    """First matching rule wins."""
    if current_stock <= 0 or stock_after_order <= 0:
        return "critical"
    if current_stock < safety_stock * Decimal("0.5"):
        return "high"
    if stock_after_order < safety_stock * Decimal("0.25"):
        return "high"
    if current_stock < safety_stock:
        return "medium"
    if stock_after_order < safety_stock:
        return "medium"
    return "low"


def analyze_material_stock(snapshot: MaterialStockSnapshot, required_qty) -> StockAnalysisResult:
    current_stock = to_decimal(snapshot.qty_on_hand)
    safety_stock = to_decimal(snapshot.safety_stock)
    required_qty = to_decimal(required_qty)
    stock_after_order = current_stock - required_qty

    is_below_safety = current_stock < safety_stock
    will_be_below_safety = stock_after_order < safety_stock
    shortage_amount = Decimal("0")
    if will_be_below_safety:
        shortage_amount = max(Decimal("0"), safety_stock - stock_after_order)

    return StockAnalysisResult(
        current_stock=current_stock,
        safety_stock=safety_stock,
        required_qty=required_qty,
        stock_after_order=stock_after_order,
        is_below_safety=is_below_safety,
        will_be_below_safety=will_be_below_safety,
        is_out_of_stock=current_stock <= 0,
        will_be_out_of_stock=stock_after_order <= 0,
        needs_alert=is_below_safety or will_be_below_safety,
        shortage_amount=shortage_amount,
        severity=calculate_severity(current_stock, safety_stock, stock_after_order),
    )


class MaterialStockService:

    def __init__(self, db: Session, alert_service: Optional[PurchaseAlertService] = None):
        self._material_repo = MaterialRepository(db)
        self._product_repo = ProductRepository(db)
        self._order_repo = OrderRepository(db)
        self._alerts = alert_service or PurchaseAlertService(db)

    def aggregate_requirements(self, line_items: Iterable[OrderLineItem]) -> Dict[int, Decimal]:
        requirements: Dict[int, Decimal] = {}
        for item in line_items:
            material_id = self._product_repo.get_material_id(item.product_id)
            if material_id is None:
                # TODO: surface unlinked products as a warning once products carry a bill of materials
                logger.warning(
                    "product_without_material",
                    extra={"product_id": item.product_id, "quantity": item.quantity},
                )
                continue
            needed = to_decimal(item.quantity) * MATERIAL_UNITS_PER_PRODUCT
            requirements[material_id] = requirements.get(material_id, Decimal("0")) + needed
        return requirements

    def analyze(self, snapshot: MaterialStockSnapshot, required_qty) -> StockAnalysisResult:
        return analyze_material_stock(snapshot, required_qty)

    def check_order_stock(
        self,
        line_items: List[OrderLineItem],
        order_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> StockCheckReport:
        report = StockCheckReport()
        try:
            requirements = self.aggregate_requirements(line_items)
        except Exception as exc:
            logger.exception("stock_check_failed", extra={"order_id": order_id})
            return StockCheckReport(warnings=[f"Stock checking failed: {exc}"])
        report.total_materials_needed = requirements

        for material_id, required_qty in requirements.items():
            try:
                self._check_material(report, material_id, required_qty, order_id, user_id)
            except Exception:
                logger.exception(
                    "material_stock_check_failed",
                    extra={"material_id": material_id, "order_id": order_id},
                )
                report.warnings.append(f"Could not check stock for material ID {material_id}")

        report.can_proceed = True
        return report

    def check_stock_for_order(
        self,
        line_items: List[OrderLineItem],
        order_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> StockCheckReport:
        """Stock check requested from outside order placement; alerts need an existing order."""
        if order_id is not None and not self._order_repo.get_active(order_id):
            raise to_http_exception(EntityNotFoundException("Order", order_id))
        return self.check_order_stock(line_items, order_id=order_id, user_id=user_id)

    def get_stock_warnings(self, line_items: List[OrderLineItem]) -> List[str]:
        return self.check_order_stock(line_items).warnings

    def check_material_status(self, material_id: int) -> MaterialStockStatus:
        material = self._material_repo.get_by_id(material_id)
        if not material:
            raise to_http_exception(EntityNotFoundException("Material", material_id))
        analysis = self.analyze(MaterialStockSnapshot.model_validate(material), Decimal("0"))
        return MaterialStockStatus(
            material_id=material.id,
            material_name=material.name,
            current_stock=analysis.current_stock,
            safety_stock=analysis.safety_stock,
            unit=material.unit,
            is_below_safety=analysis.is_below_safety,
            severity=analysis.severity,
            status=_stock_status(analysis),
        )

    def get_materials_with_stock_issues(self) -> List[MaterialStockIssue]:
        issues = []
        for material in self._material_repo.get_with_stock_issues():
            analysis = self.analyze(MaterialStockSnapshot.model_validate(material), Decimal("0"))
            issues.append(
                MaterialStockIssue(
                    material_id=material.id,
                    material_name=material.name,
                    material_code=material.code,
                    current_stock=analysis.current_stock,
                    safety_stock=analysis.safety_stock,
                    unit=material.unit,
                    severity=analysis.severity,
                    status=_stock_status(analysis),
                    shortage_amount=max(Decimal("0"), analysis.safety_stock - analysis.current_stock),
                )
            )
        return issues

    def _check_material(
        self,
        report: StockCheckReport,
        material_id: int,
        required_qty: Decimal,
        order_id: Optional[int],
        user_id: Optional[int],
    ) -> None:
        material = self._material_repo.get_by_id(material_id)
        if not material:
            report.warnings.append(f"Material ID {material_id} not found in database")
            return

        snapshot = MaterialStockSnapshot.model_validate(material)
        analysis = self.analyze(snapshot, required_qty)
        report.stock_analysis.append(
            MaterialStockAnalysis(
                material_id=material.id,
                material_name=material.name,
                **analysis.model_dump(),
            )
        )

        if analysis.needs_alert and order_id:
            alert = self._alerts.upsert_alert(material, required_qty, order_id, analysis, user_id)
            if alert:
                report.alerts.append(alert)
            else:
                report.warnings.append(f"Could not create purchase alert for {material.name}")

        if analysis.is_below_safety or analysis.will_be_below_safety:
            report.warnings.append(
                f"{snapshot.name}: {format_qty(snapshot.qty_on_hand)}{snapshot.unit} "
                f"< {format_qty(snapshot.safety_stock)}{snapshot.unit} (safety level)"
            )


def _stock_status(analysis: StockAnalysisResult) -> str:
    if analysis.is_out_of_stock:
        return "out_of_stock"
    if analysis.is_below_safety:
        return "below_safety"
    return "normal"
