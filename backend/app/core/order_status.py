"""
Order status state machine.

Every status change an order goes through is checked against
``ORDER_STATUS_TRANSITIONS``; no other module decides whether a transition is
legal.
"""
from typing import Dict, FrozenSet, List

from app.core.exceptions import InvalidStatusTransitionException

CREATED = "created"
CONFIRMED = "confirmed"
NEED_MATERIAL = "need_material"
PROCESSING = "processing"
COMPLETED = "completed"
SHIPPED = "shipped"
DELIVERED = "delivered"
CANCELLED = "cancelled"

ORDER_STATUSES = (
    CREATED,
    CONFIRMED,
    NEED_MATERIAL,
    PROCESSING,
    COMPLETED,
    SHIPPED,
    DELIVERED,
    CANCELLED,
)

ORDER_STATUS_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    CREATED: frozenset({CONFIRMED, NEED_MATERIAL, PROCESSING, CANCELLED}),
    CONFIRMED: frozenset({NEED_MATERIAL, PROCESSING, CANCELLED}),
    NEED_MATERIAL: frozenset({CONFIRMED, PROCESSING, CANCELLED}),
    PROCESSING: frozenset({NEED_MATERIAL, COMPLETED, CANCELLED}),
    COMPLETED: frozenset({SHIPPED}),
    SHIPPED: frozenset({DELIVERED}),
    DELIVERED: frozenset(),
    CANCELLED: frozenset(),
}

# Work has started on these orders; they can no longer be deleted.
PROTECTED_STATUSES = frozenset({PROCESSING, COMPLETED, SHIPPED, DELIVERED})


class OrderStatusMachine:

    def __init__(self, transitions: Dict[str, FrozenSet[str]] = None):
        self._transitions = transitions if transitions is not None else ORDER_STATUS_TRANSITIONS

    def is_known(self, status: str) -> bool:
        return status in self._transitions

    def allowed_targets(self, from_status: str) -> List[str]:
        targets = self._transitions.get(from_status, frozenset())
        return [s for s in ORDER_STATUSES if s in targets]

    def can_transition(self, from_status: str, to_status: str) -> bool:
        if not self.is_known(from_status) or not self.is_known(to_status):
            return False
        if from_status == to_status:
            return True
        return to_status in self._transitions[from_status]

    def ensure_transition(self, from_status: str, to_status: str) -> None:
        if not self.can_transition(from_status, to_status):
            raise InvalidStatusTransitionException("Order", from_status, to_status)

    def is_terminal(self, status: str) -> bool:
        return self.is_known(status) and not self._transitions[status]

    def can_delete(self, status: str) -> bool:
        return status not in PROTECTED_STATUSES
