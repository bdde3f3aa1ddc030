"""
Order Repository
"""
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.models.order import Order, OrderProduct, OrderStatusChange
from app.repositories.base import BaseRepository


class OrderRepository(BaseRepository[Order]):

    def __init__(self, db: Session):
        super().__init__(Order, db)

    def get_active(self, order_id: int) -> Optional[Order]:
        return (
            self.db.query(Order)
            .filter(Order.id == order_id, Order.is_active.is_(True))
            .first()
        )

    def list_active(
        self,
        page: int = 1,
        page_size: int = 20,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Order], int]:
        q = self.db.query(Order).filter(Order.is_active.is_(True))
        if status:
            q = q.filter(Order.status == status)
        if priority:
            q = q.filter(Order.priority == priority)
        if search:
            pattern = f"%{search}%"
            q = q.filter(
                or_(
                    Order.order_number.ilike(pattern),
                    Order.customer_note.ilike(pattern),
                    Order.description.ilike(pattern),
                )
            )
        total = q.count()
        items = (
            q.order_by(Order.created_at.desc(), Order.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return items, total

    def count_active_by(self, column_name: str) -> Dict[str, int]:
        column = getattr(Order, column_name)
        rows = (
            self.db.query(column, func.count(Order.id))
            .filter(Order.is_active.is_(True))
            .group_by(column)
            .all()
        )
        return {key: count for key, count in rows}

    def next_order_number(self, prefix: str) -> str:
        # Soft-deleted orders keep their number, so count every row.
        return f"{prefix}-{self.count() + 1:06d}"

    def replace_lines(self, order: Order, lines: List[OrderProduct]) -> Order:
        order.lines = lines
        self.db.commit()
        self.db.refresh(order)
        return order

    def add_status_change(self, change: OrderStatusChange) -> OrderStatusChange:
        self.db.add(change)
        self.db.commit()
        return change

    def list_status_changes(self, order_id: int) -> List[OrderStatusChange]:
        return (
            self.db.query(OrderStatusChange)
            .filter(OrderStatusChange.order_id == order_id)
            .order_by(OrderStatusChange.id.asc())
            .all()
        )
