import pytest

from app.core.exceptions import InvalidStatusTransitionException
from app.core.order_status import (
    ORDER_STATUS_TRANSITIONS,
    ORDER_STATUSES,
    OrderStatusMachine,
)


@pytest.fixture()
def machine() -> OrderStatusMachine:
    return OrderStatusMachine()


def test_every_status_has_a_transition_entry():
    assert set(ORDER_STATUS_TRANSITIONS) == set(ORDER_STATUSES)


@pytest.mark.parametrize(
    "from_status, to_status",
    [
        ("created", "confirmed"),
        ("created", "need_material"),
        ("confirmed", "processing"),
        ("need_material", "confirmed"),
        ("processing", "need_material"),
        ("processing", "completed"),
        ("completed", "shipped"),
        ("shipped", "delivered"),
        ("confirmed", "cancelled"),
    ],
)
def test_allowed_transitions(machine, from_status, to_status):
    assert machine.can_transition(from_status, to_status) is True


@pytest.mark.parametrize(
    "from_status, to_status",
    [
        ("created", "completed"),
        ("completed", "processing"),
        ("completed", "cancelled"),
        ("delivered", "created"),
        ("cancelled", "confirmed"),
        ("shipped", "processing"),
    ],
)
def test_rejected_transitions(machine, from_status, to_status):
    assert machine.can_transition(from_status, to_status) is False
    with pytest.raises(InvalidStatusTransitionException) as exc:
        machine.ensure_transition(from_status, to_status)
    assert exc.value.http_status == 409


def test_same_status_is_allowed(machine):
    assert machine.can_transition("processing", "processing") is True


def test_unknown_status_is_rejected(machine):
    assert machine.is_known("on_hold") is False
    assert machine.can_transition("created", "on_hold") is False


def test_allowed_targets_follow_lifecycle_order(machine):
    assert machine.allowed_targets("created") == ["confirmed", "need_material", "processing", "cancelled"]
    assert machine.allowed_targets("delivered") == []


def test_terminal_statuses(machine):
    assert machine.is_terminal("delivered") is True
    assert machine.is_terminal("cancelled") is True
    assert machine.is_terminal("shipped") is False


@pytest.mark.parametrize("status", ["processing", "completed", "shipped", "delivered"])
def test_started_orders_cannot_be_deleted(machine, status):
    assert machine.can_delete(status) is False


@pytest.mark.parametrize("status", ["created", "confirmed", "need_material", "cancelled"])
def test_unstarted_orders_can_be_deleted(machine, status):
    assert machine.can_delete(status) is True


def test_custom_transition_table():
    machine = OrderStatusMachine({"draft": frozenset({"live"}), "live": frozenset()})

    assert machine.can_transition("draft", "live") is True
    assert machine.can_transition("live", "draft") is False
