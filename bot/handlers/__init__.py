"""
Handlers.

Conversation flow handlers, dispatched by the session state machine.
"""

from bot.handlers import (
    buy,
    menu,
    orders,
    support,
    verification,
)

__all__ = [
    "buy",
    "menu",
    "orders",
    "support",
    "verification",
]
