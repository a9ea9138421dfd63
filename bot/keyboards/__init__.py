"""
Keyboards.

Reply menus and inline keyboards as transport-neutral markup.
"""

from bot.keyboards.inline import (
    admin_hub_keyboard,
    categories_keyboard,
    join_channel_keyboard,
    payment_keyboard,
    quantity_keyboard,
)
from bot.keyboards.reply import (
    main_menu_reply_keyboard,
    support_keyboard as support_reply_keyboard,
)

__all__ = [
    # Reply keyboards
    "main_menu_reply_keyboard",
    "support_reply_keyboard",
    # Inline keyboards
    "admin_hub_keyboard",
    "categories_keyboard",
    "join_channel_keyboard",
    "payment_keyboard",
    "quantity_keyboard",
]
