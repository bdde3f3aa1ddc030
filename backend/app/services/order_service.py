"""
Order Service: Service Layer (SRP / DIP)

Creating or re-planning an order always runs the material stock check; the
result is returned alongside the order and never prevents it from being saved.
"""
import logging
from datetime import datetime
from decimal import Decimal
from math import ceil
from typing import List, Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.core.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    InvalidStatusTransitionException,
    to_http_exception,
)
from app.core.order_status import CREATED, OrderStatusMachine
from app.models.order import Order, OrderProduct, OrderStatusChange
from app.repositories.contact_repository import ContactRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.schemas.order import (
    OrderCreate,
    OrderDeleteResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatusChangeResponse,
    OrderStatusTransitions,
    OrderUpdate,
    OrderWithStockResponse,
    StockResults,
)
from app.schemas.stock import OrderLineItem, StockCheckReport
from app.services.material_stock_service import MaterialStockService
from app.services.tailor_directory_service import TAILORS_CACHE_KEY
from app.utils.cache import TTLCache

logger = logging.getLogger(__name__)


class OrderService:

    def __init__(
        self,
        db: Session,
        tailor_cache: Optional[TTLCache] = None,
        stock_service: Optional[MaterialStockService] = None,
        status_machine: Optional[OrderStatusMachine] = None,
    ):
        self._repo = OrderRepository(db)
        self._product_repo = ProductRepository(db)
        self._contact_repo = ContactRepository(db)
        self._stock = stock_service or MaterialStockService(db)
        self._machine = status_machine or OrderStatusMachine()
        self._tailor_cache = tailor_cache

    def list_orders(
        self,
        page: int = 1,
        page_size: int = 20,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        search: Optional[str] = None,
    ) -> OrderListResponse:
        items, total = self._repo.list_active(
            page=page, page_size=page_size, status=status, priority=priority, search=search,
        )
        return OrderListResponse(
            items=[OrderResponse.model_validate(o) for o in items],
            total=total,
            page=page,
            page_size=page_size,
            total_pages=ceil(total / page_size) if total else 0,
            status_counts=self._repo.count_active_by("status"),
            priority_counts=self._repo.count_active_by("priority"),
        )

    def get_order(self, order_id: int) -> Order:
        order = self._repo.get_active(order_id)
        if not order:
            raise to_http_exception(EntityNotFoundException("Order", order_id))
        return order

    def create_order(self, payload: OrderCreate, user_id: Optional[int] = None) -> OrderWithStockResponse:
        self._validate_products(payload.products)
        if payload.tailor_contact_id:
            self._validate_tailor(payload.tailor_contact_id)

        order = Order(
            order_number=self._repo.next_order_number(settings.ORDER_NUMBER_PREFIX),
            status=CREATED,
            priority=payload.priority,
            due_date=payload.due_date,
            customer_note=payload.customer_note,
            description=payload.description,
            tailor_contact_id=payload.tailor_contact_id,
            target_pcs=_target_pcs(payload.products),
            completed_pcs=0,
            user_id=user_id,
            is_active=True,
            lines=_order_lines(payload.products),
        )
        order = self._repo.create(order)
        logger.info(
            "order_created",
            extra={"order_id": order.id, "order_number": order.order_number, "user_id": user_id},
        )

        report = self._stock.check_order_stock(payload.products, order.id, user_id)
        if payload.tailor_contact_id:
            self._invalidate_tailors()

        return OrderWithStockResponse(
            message="Order created successfully",
            order=OrderResponse.model_validate(order),
            stock_results=_stock_results(report),
        )

    def update_order(
        self,
        order_id: int,
        payload: OrderUpdate,
        user_id: Optional[int] = None,
    ) -> OrderWithStockResponse:
        order = self.get_order(order_id)
        updates = payload.model_dump(exclude_unset=True)
        products = updates.pop("products", None)
        new_status = updates.pop("status", None)

        # Nothing is written until the whole payload has been validated.
        if updates.get("tailor_contact_id"):
            self._validate_tailor(updates["tailor_contact_id"])
        if products is not None:
            self._validate_products(payload.products)
        if new_status is not None:
            self._check_transition(order.status, new_status)
        tailor_changed = (
            "tailor_contact_id" in updates and updates["tailor_contact_id"] != order.tailor_contact_id
        )

        if new_status is not None:
            self.update_status(order_id, new_status, user_id=user_id)
            order = self.get_order(order_id)

        report = None
        if products is not None:
            line_items = payload.products
            order = self._repo.replace_lines(order, _order_lines(line_items))
            updates["target_pcs"] = _target_pcs(line_items)
            report = self._stock.check_order_stock(line_items, order.id, user_id)

        if updates:
            order = self._repo.update(order, updates)
        if tailor_changed:
            self._invalidate_tailors()

        logger.info("order_updated", extra={"order_id": order.id, "fields": sorted(updates)})
        return OrderWithStockResponse(
            message="Order updated successfully",
            order=OrderResponse.model_validate(order),
            stock_results=_stock_results(report) if report is not None else None,
        )

    def update_status(
        self,
        order_id: int,
        status: str,
        user_id: Optional[int] = None,
        note: Optional[str] = None,
    ) -> Order:
        order = self.get_order(order_id)
        self._check_transition(order.status, status)
        if order.status == status:
            return order

        old_status = order.status
        order = self._repo.update(order, {"status": status})
        self._repo.add_status_change(
            OrderStatusChange(
                order_id=order.id,
                old_status=old_status,
                new_status=status,
                changed_by=user_id,
                note=note,
            )
        )
        logger.info(
            "order_status_changed",
            extra={"order_id": order.id, "old_status": old_status, "new_status": status},
        )
        return order

    def get_status_transitions(self, order_id: int) -> OrderStatusTransitions:
        order = self.get_order(order_id)
        return OrderStatusTransitions(
            order_id=order.id,
            status=order.status,
            allowed=self._machine.allowed_targets(order.status),
            deletable=self._machine.can_delete(order.status),
        )

    def get_status_history(self, order_id: int) -> List[OrderStatusChangeResponse]:
        order = self.get_order(order_id)
        return [
            OrderStatusChangeResponse.model_validate(c)
            for c in self._repo.list_status_changes(order.id)
        ]

    def delete_order(self, order_id: int, user_id: Optional[int] = None) -> OrderDeleteResponse:
        order = self.get_order(order_id)
        if not self._machine.can_delete(order.status):
            raise to_http_exception(
                BusinessRuleViolationException(
                    f"Cannot delete order with status: {order.status}. Work on this order has already started."
                )
            )
        deleted_at = datetime.utcnow()
        order = self._repo.update(
            order, {"is_active": False, "deleted_at": deleted_at, "deleted_by": user_id},
        )
        logger.info(
            "order_deleted",
            extra={"order_id": order.id, "order_number": order.order_number, "user_id": user_id},
        )
        return OrderDeleteResponse(
            message=f"Order {order.order_number} deleted successfully",
            order_id=order.id,
            order_number=order.order_number,
            deleted_at=deleted_at,
        )

    def _check_transition(self, current: str, target: str) -> None:
        if not self._machine.is_known(target):
            raise to_http_exception(BusinessRuleViolationException(f"Invalid status '{target}'"))
        try:
            self._machine.ensure_transition(current, target)
        except InvalidStatusTransitionException as exc:
            raise to_http_exception(exc)

    def _validate_products(self, line_items: List[OrderLineItem]) -> None:
        requested = {item.product_id for item in line_items}
        found = {p.id for p in self._product_repo.get_active_by_ids(requested)}
        missing = sorted(requested - found)
        if missing:
            raise to_http_exception(
                BusinessRuleViolationException(f"One or more products not found: {missing}")
            )

    def _validate_tailor(self, contact_id: int) -> None:
        if not self._contact_repo.get_active_tailor(contact_id):
            raise to_http_exception(BusinessRuleViolationException("Invalid tailor selected"))

    def _invalidate_tailors(self) -> None:
        if self._tailor_cache is not None:
            self._tailor_cache.invalidate(TAILORS_CACHE_KEY)


def _order_lines(line_items: List[OrderLineItem]) -> List[OrderProduct]:
    return [OrderProduct(product_id=item.product_id, qty=item.quantity) for item in line_items]


def _target_pcs(line_items: List[OrderLineItem]) -> int:
    return int(sum((item.quantity for item in line_items), Decimal("0")))


def _stock_results(report: StockCheckReport) -> StockResults:
    return StockResults(
        alerts=report.alerts,
        warnings=report.warnings,
        has_stock_issues=bool(report.warnings or report.alerts),
    )
