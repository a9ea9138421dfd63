"""Text utility functions for bot."""

import re
from decimal import Decimal

from app.utils.exceptions import ValidationError
from app.utils.money import parse_money

USER_ID_PATTERN = re.compile(r"[0-9]{1,20}")
WHOLE_NUMBER_PATTERN = re.compile(r"[0-9]{1,9}")


def parse_user_id(raw: str) -> str:
    """
    Canonical user ID from admin input.

    Raises:
        ValidationError: not a plain decimal ID
    """
    value = raw.strip()
    if not USER_ID_PATTERN.fullmatch(value):
        raise ValidationError("User ID must be a number")
    return value


def parse_positive_int(raw: str) -> int | None:
    """ASCII digits above zero, else None."""
    value = raw.strip()
    if not WHOLE_NUMBER_PATTERN.fullmatch(value) or int(value) <= 0:
        return None
    return int(value)


def parse_face_value(raw: str) -> int:
    """
    Voucher face value (positive integer, e.g. ``500``).

    Raises:
        ValidationError: not a positive integer
    """
    value = parse_positive_int(raw)
    if value is None:
        raise ValidationError("Value must be a positive whole number")
    return value


def parse_price(raw: str) -> Decimal:
    """
    Positive price from admin input.

    Raises:
        ValidationError: unparsable or not above zero
    """
    price = parse_money(raw)
    if price is None or price <= 0:
        raise ValidationError("Price must be a number greater than zero")
    return price
