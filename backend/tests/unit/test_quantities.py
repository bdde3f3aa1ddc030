from decimal import Decimal

from app.utils.quantities import format_qty, to_decimal


def test_to_decimal_handles_none_and_floats():
    assert to_decimal(None) == Decimal("0")
    assert to_decimal(2.5) == Decimal("2.5")
    assert to_decimal(Decimal("7.25")) == Decimal("7.25")


def test_format_qty_drops_trailing_zeros():
    assert format_qty(Decimal("15.00")) == "15"
    assert format_qty(Decimal("12.50")) == "12.5"
    assert format_qty(Decimal("100")) == "100"
    assert format_qty(3) == "3"
