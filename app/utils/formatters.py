"""
Formatters
Utility functions for formatting message text
"""

from decimal import Decimal

from app.utils.money import format_money


def escape_md(text: str | None) -> str:
    """
    Escape special characters for Markdown V1.

    Escapes: _ * ` [

    Args:
        text: Input text

    Returns:
        Escaped text safe for Markdown
    """
    if not text:
        return ""
    result = str(text)
    for char in ["_", "*", "`", "["]:
        result = result.replace(char, f"\\{char}")
    return result


def format_amount(amount: Decimal, currency: str = "₹") -> str:
    """Format money with currency symbol (e.g. "₹123.45")."""
    return f"{currency}{format_money(amount)}"


def status_emoji(status: str) -> str:
    return {"Successful": "✅", "Declined": "❌"}.get(status, "⏳")
