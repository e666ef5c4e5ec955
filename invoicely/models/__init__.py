from __future__ import annotations

from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")


def parse_decimal(value: str | int | float | Decimal | None) -> Decimal:
    """Parse a stored decimal string into a Decimal. Returns 0 on invalid input.

    Accepts '85', '85.00', ' 1200.5 ' and numeric values. Non-finite values
    ('NaN', 'Infinity') are treated as invalid.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, float):
        value = repr(value)
    text = str(value).strip()
    if not text:
        return ZERO
    try:
        result = Decimal(text)
    except InvalidOperation:
        return ZERO
    if not result.is_finite():
        return ZERO
    return result


def decimal_to_str(value: Decimal | int | None) -> str:
    """Format a Decimal for storage: '85' -> '85', Decimal('244.80') -> '244.80'."""
    if value is None:
        return "0"
    return format(Decimal(value), "f")
