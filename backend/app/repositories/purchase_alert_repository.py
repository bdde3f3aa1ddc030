"""
Purchase Alert Repository
"""
from typing import Dict, List, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.models.purchase_alert import ACTIVE_ALERT_STATUSES, PurchaseAlert
from app.repositories.base import BaseRepository

_PRIORITY_RANK = case(
    {"critical": 0, "high": 1, "medium": 2, "low": 3},
    value=PurchaseAlert.priority,
    else_=4,
)


class PurchaseAlertRepository(BaseRepository[PurchaseAlert]):

    def __init__(self, db: Session):
        super().__init__(PurchaseAlert, db)

    def get_active_by_material_and_order(
        self,
        material_id: int,
        order_id: Optional[int],
    ) -> Optional[PurchaseAlert]:
        q = self.db.query(PurchaseAlert).filter(
            PurchaseAlert.material_id == material_id,
            PurchaseAlert.status.in_(ACTIVE_ALERT_STATUSES),
        )
        if order_id is None:
            q = q.filter(PurchaseAlert.order_id.is_(None))
        else:
            q = q.filter(PurchaseAlert.order_id == order_id)
        return q.order_by(PurchaseAlert.alert_date.desc()).first()

    def list_filtered(
        self,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        material_id: Optional[int] = None,
        order_id: Optional[int] = None,
    ) -> List[PurchaseAlert]:
        q = self.db.query(PurchaseAlert)
        if status:
            q = q.filter(PurchaseAlert.status == status)
        if priority:
            q = q.filter(PurchaseAlert.priority == priority)
        if material_id:
            q = q.filter(PurchaseAlert.material_id == material_id)
        if order_id:
            q = q.filter(PurchaseAlert.order_id == order_id)
        return q.order_by(_PRIORITY_RANK, PurchaseAlert.alert_date.asc()).all()

    def list_active_critical(self) -> List[PurchaseAlert]:
        return (
            self.db.query(PurchaseAlert)
            .filter(
                PurchaseAlert.priority == "critical",
                PurchaseAlert.status.in_(ACTIVE_ALERT_STATUSES),
            )
            .order_by(PurchaseAlert.alert_date.asc())
            .all()
        )

    def count_by_status_and_priority(self) -> Dict[Tuple[str, str], int]:
        rows = (
            self.db.query(PurchaseAlert.status, PurchaseAlert.priority, func.count(PurchaseAlert.id))
            .group_by(PurchaseAlert.status, PurchaseAlert.priority)
            .all()
        )
        return {(status, priority): count for status, priority, count in rows}
