"""
Reply keyboards.

Persistent menus shown under the input field. Built as transport-neutral
Menu objects; the aiogram messenger renders them.
"""

from app.services.messenger import Menu
from bot.utils.constants import (
    CMD_CANCEL,
    MENU_BUY,
    MENU_DISCLAIMER,
    MENU_ORDERS,
    MENU_RECOVER,
    MENU_SUPPORT,
)


def main_menu_reply_keyboard() -> Menu:
    """Main menu for verified users."""
    return Menu(
        rows=(
            (MENU_BUY,),
            (MENU_ORDERS, MENU_RECOVER),
            (MENU_SUPPORT, MENU_DISCLAIMER),
        )
    )


def support_keyboard() -> Menu:
    """Support mode: only the exit command."""
    return Menu(rows=((CMD_CANCEL,),))

