"""
Purchase Alert Service: owns every write to the purchase alert table.

Alerts are raised by the stock checker while an order is placed and then
driven through the procurement workflow (pending → ordered → fulfilled, or
cancelled) by buyers.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.exceptions import (
    EntityNotFoundException,
    InvalidStatusTransitionException,
    to_http_exception,
)
from app.models.material import Material
from app.models.purchase_alert import PurchaseAlert
from app.repositories.purchase_alert_repository import PurchaseAlertRepository
from app.schemas.purchase_alert import (
    PurchaseAlertStatusUpdate,
    PurchaseAlertSummary,
    PurchaseAlertView,
)
from app.schemas.stock import StockAnalysisResult
from app.utils.quantities import format_qty, to_decimal

logger = logging.getLogger(__name__)

ALERT_STATUSES = ("pending", "ordered", "fulfilled", "cancelled")
ALERT_PRIORITIES = ("low", "medium", "high", "critical")

ALERT_STATUS_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    "pending": frozenset({"ordered", "cancelled"}),
    "ordered": frozenset({"fulfilled", "cancelled"}),
    "fulfilled": frozenset(),
    "cancelled": frozenset(),
}


class PurchaseAlertService:

    def __init__(self, db: Session):
        self._db = db
        self._repo = PurchaseAlertRepository(db)

    def upsert_alert(
        self,
        material: Material,
        required_qty: Decimal,
        order_id: Optional[int],
        analysis: StockAnalysisResult,
        user_id: Optional[int] = None,
    ) -> Optional[PurchaseAlertView]:
        """
        Record the shortage for ``(material, order)``.

        At most one active alert exists per pair: a repeated check updates it,
        keeping the larger shortage. Persistence failures are logged and
        reported as ``None`` so order placement is never blocked.
        """
        try:
            existing = self._repo.get_active_by_material_and_order(material.id, order_id)
            if existing:
                note = f"Updated: required quantity increased to {format_qty(required_qty)} {material.unit}"
                alert = self._repo.update(
                    existing,
                    {
                        "current_stock": analysis.current_stock,
                        "required_stock": max(to_decimal(existing.required_stock), analysis.shortage_amount),
                        "priority": analysis.severity,
                        "notes": f"{existing.notes}\n{note}" if existing.notes else note,
                    },
                )
                logger.info(
                    "purchase_alert_updated",
                    extra={"alert_id": alert.id, "material_id": material.id, "order_id": order_id},
                )
            else:
                alert = self._repo.create(
                    PurchaseAlert(
                        material_id=material.id,
                        order_id=order_id,
                        current_stock=analysis.current_stock,
                        safety_stock=analysis.safety_stock,
                        required_stock=analysis.shortage_amount,
                        priority=analysis.severity,
                        status="pending",
                        created_by=user_id,
                        notes=(
                            f"Auto-generated alert for order {order_id}. "
                            f"Material needed: {format_qty(required_qty)} {material.unit}"
                        ),
                    )
                )
                logger.info(
                    "purchase_alert_created",
                    extra={
                        "alert_id": alert.id,
                        "material_id": material.id,
                        "order_id": order_id,
                        "priority": alert.priority,
                    },
                )
            return self.format_alert_view(alert, material)
        except SQLAlchemyError:
            self._db.rollback()
            logger.exception(
                "purchase_alert_upsert_failed",
                extra={"material_id": material.id, "order_id": order_id},
            )
            return None

    def format_alert_view(
        self,
        alert: PurchaseAlert,
        material: Material,
        now: Optional[datetime] = None,
    ) -> PurchaseAlertView:
        now = now or datetime.utcnow()
        return PurchaseAlertView(
            id=alert.id,
            material_id=material.id,
            material_name=material.name,
            material_code=material.code,
            order_id=alert.order_id,
            current_stock=alert.current_stock,
            safety_stock=alert.safety_stock,
            required_stock=alert.required_stock,
            priority=alert.priority,
            status=alert.status,
            unit=material.unit,
            notes=alert.notes,
            alert_date=alert.alert_date,
            expected_date=alert.expected_date,
            is_overdue=alert.is_overdue(settings.ALERT_OVERDUE_DAYS, now=now),
            alert_age=alert.alert_age_days(now),
        )

    def list_alerts(
        self,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        material_id: Optional[int] = None,
        order_id: Optional[int] = None,
    ) -> List[PurchaseAlertView]:
        alerts = self._repo.list_filtered(
            status=status, priority=priority, material_id=material_id, order_id=order_id,
        )
        return [self.format_alert_view(a, a.material) for a in alerts]

    def get_critical_alerts(self) -> List[PurchaseAlertView]:
        return [self.format_alert_view(a, a.material) for a in self._repo.list_active_critical()]

    def get_summary(self) -> PurchaseAlertSummary:
        by_status = {s: 0 for s in ALERT_STATUSES}
        by_priority = {p: 0 for p in ALERT_PRIORITIES}
        total = 0
        critical = 0
        for (status, priority), count in self._repo.count_by_status_and_priority().items():
            total += count
            by_status[status] = by_status.get(status, 0) + count
            by_priority[priority] = by_priority.get(priority, 0) + count
            if priority == "critical" and status in ("pending", "ordered"):
                critical += count
        return PurchaseAlertSummary(
            total=total, by_status=by_status, by_priority=by_priority, critical=critical,
        )

    def update_status(
        self,
        alert_id: int,
        payload: PurchaseAlertStatusUpdate,
        user_id: Optional[int] = None,
    ) -> PurchaseAlertView:
        alert = self._repo.get_by_id(alert_id)
        if not alert:
            raise to_http_exception(EntityNotFoundException("PurchaseAlert", alert_id))
        if payload.status not in ALERT_STATUS_TRANSITIONS.get(alert.status, frozenset()):
            raise to_http_exception(
                InvalidStatusTransitionException("PurchaseAlert", alert.status, payload.status)
            )

        now = datetime.utcnow()
        updates = {"status": payload.status}
        if payload.notes:
            updates["notes"] = payload.notes
        if payload.status == "ordered":
            updates["order_date"] = now
            updates["expected_date"] = payload.expected_date
        else:
            updates["resolved_at"] = now
            updates["resolved_by"] = user_id

        old_status = alert.status
        alert = self._repo.update(alert, updates)
        logger.info(
            "purchase_alert_status_changed",
            extra={"alert_id": alert.id, "old_status": old_status, "new_status": alert.status},
        )
        return self.format_alert_view(alert, alert.material, now=now)
