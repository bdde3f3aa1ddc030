from decimal import Decimal


def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_qty(value) -> str:
    """Render a quantity without trailing zeros: 15.00 -> '15', 12.50 -> '12.5'."""
    qty = to_decimal(value)
    if qty == qty.to_integral_value():
        return str(qty.quantize(Decimal(1)))
    return format(qty.normalize(), "f")
