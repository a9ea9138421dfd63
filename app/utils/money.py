"""
Money helpers.

All amounts are Decimal quantized to 2 places.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def round2(amount: Decimal | int | str) -> Decimal:
    """Quantize amount to 2 decimal places (half up)."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def parse_money(raw: str | None) -> Decimal | None:
    """
    Parse a stored or typed amount.

    Args:
        raw: Cell value or user input

    Returns:
        Quantized Decimal, or None if absent/unparsable
    """
    if raw is None:
        return None
    raw = raw.strip().replace(",", "")
    if not raw:
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    try:
        return round2(value)
    except InvalidOperation:
        # Too many digits for the context precision
        return None


def format_money(amount: Decimal) -> str:
    """Format amount for storage and display (e.g. "123.45")."""
    return f"{round2(amount):.2f}"
