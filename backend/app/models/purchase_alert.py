from datetime import datetime
from math import ceil

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from app.database import Base

ACTIVE_ALERT_STATUSES = ("pending", "ordered")


class PurchaseAlert(Base):
    __tablename__ = "material_purchase_alerts"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'ordered', 'fulfilled', 'cancelled')",
            name="ck_purchase_alert_status",
        ),
        CheckConstraint(
            "priority IN ('low', 'medium', 'high', 'critical')",
            name="ck_purchase_alert_priority",
        ),
        Index("ix_purchase_alerts_material_status", "material_id", "status"),
        Index("ix_purchase_alerts_order_date", "order_id", "alert_date"),
        Index("ix_purchase_alerts_status_priority", "status", "priority"),
    )

    id = Column(Integer, primary_key=True, index=True)
    material_id = Column(Integer, ForeignKey("materials.id"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True, index=True)
    current_stock = Column(Numeric(12, 2), nullable=False)
    safety_stock = Column(Numeric(12, 2), nullable=False)
    required_stock = Column(Numeric(12, 2), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    priority = Column(String(10), nullable=False, default="medium")
    alert_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    order_date = Column(DateTime, nullable=True)
    expected_date = Column(DateTime, nullable=True)
    resolved_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    created_by = Column(Integer, nullable=True)
    resolved_by = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    material = relationship("Material")

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_ALERT_STATUSES

    def alert_age_days(self, now: datetime = None) -> int:
        """Whole days (rounded up) since the alert was raised."""
        if not self.alert_date:
            return 0
        now = now or datetime.utcnow()
        seconds = (now - self.alert_date).total_seconds()
        return max(0, ceil(seconds / 86400))

    def is_overdue(self, threshold_days: int, now: datetime = None) -> bool:
        """
        An active alert is overdue once its supplier delivery date has passed,
        or, when no delivery date was recorded, once it is older than
        ``threshold_days``.
        """
        if not self.is_active:
            return False
        now = now or datetime.utcnow()
        if self.expected_date is not None:
            return now > self.expected_date
        return self.alert_age_days(now) > threshold_days
