"""
Inline keyboards.

Inline keyboard builders for interactive menus.
"""

from decimal import Decimal

from app.models.category import Category
from app.models.enums import PriceTier
from app.services.messenger import Button, InlineKeyboard
from app.utils.formatters import format_amount
from bot.utils.constants import (
    CB_ADMIN_ADD_CATEGORY,
    CB_ADMIN_BLOCK,
    CB_ADMIN_BROADCAST,
    CB_ADMIN_DELETE_CATEGORY,
    CB_ADMIN_DELETE_MENU,
    CB_ADMIN_DM,
    CB_ADMIN_EXIT,
    CB_ADMIN_HUB,
    CB_ADMIN_PRICES,
    CB_ADMIN_PRICES_MENU,
    CB_ADMIN_REMOVE_CODE,
    CB_ADMIN_STATS,
    CB_ADMIN_STOCK,
    CB_ADMIN_STOCK_MENU,
    CB_ADMIN_TIER,
    CB_BACK_TO_CATEGORIES,
    CB_CATEGORY,
    CB_CHECK_JOIN,
    CB_CUSTOM_QUANTITY,
    CB_QUANTITY,
    CB_SUBMIT_PROOF,
    QUICK_QUANTITIES,
)


def join_channel_keyboard(channel_url: str, orders_channel_url: str) -> InlineKeyboard:
    """Join links plus the verify button."""
    return [
        [Button("📢 Join Main Channel", url=channel_url)],
        [Button("📦 Join Orders Channel", url=orders_channel_url)],
        [Button("✅ I've Joined - Verify", data=CB_CHECK_JOIN)],
    ]


def categories_keyboard(
    categories: list[Category], currency: str = "₹"
) -> InlineKeyboard:
    """
    One button per category with its face value and stock.

    Args:
        categories: Categories to list
        currency: Currency symbol

    Returns:
        Inline keyboard
    """
    return [
        [
            Button(
                f"{currency}{category.face_value} ({category.pool_size} left)",
                data=f"{CB_CATEGORY}{category.category_id}",
            )
        ]
        for category in categories
    ]


def quantity_keyboard(category_id: str) -> InlineKeyboard:
    """Quick quantities, custom entry and back."""
    quick = [
        Button(str(n), data=f"{CB_QUANTITY}{n}:{category_id}")
        for n in QUICK_QUANTITIES
    ]
    return [
        quick[:3],
        quick[3:],
        [Button("✏️ Custom Quantity", data=f"{CB_CUSTOM_QUANTITY}{category_id}")],
        [Button("⬅️ Back", data=CB_BACK_TO_CATEGORIES)],
    ]


def payment_keyboard() -> InlineKeyboard:
    return [[Button("✅ Paid - Submit Proof", data=CB_SUBMIT_PROOF)]]


# Admin


def admin_hub_keyboard() -> InlineKeyboard:
    return [
        [
            Button("➕ Add Category", data=CB_ADMIN_ADD_CATEGORY),
            Button("🗑 Delete Category", data=CB_ADMIN_DELETE_MENU),
        ],
        [
            Button("📥 Add Stock", data=CB_ADMIN_STOCK_MENU),
            Button("💲 Set Prices", data=CB_ADMIN_PRICES_MENU),
        ],
        [Button("❌ Remove Code", data=CB_ADMIN_REMOVE_CODE)],
        [
            Button("📢 Broadcast", data=CB_ADMIN_BROADCAST),
            Button("✉️ Message User", data=CB_ADMIN_DM),
        ],
        [
            Button("🚫 Block/Unblock", data=CB_ADMIN_BLOCK),
            Button("📊 Stats", data=CB_ADMIN_STATS),
        ],
        [Button("🏠 Main Menu", data=CB_ADMIN_EXIT)],
    ]


def admin_category_picker(
    categories: list[Category], action_prefix: str
) -> InlineKeyboard:
    """
    Category list for an admin action.

    Args:
        categories: Categories to list
        action_prefix: Callback prefix, the category ID is appended

    Returns:
        Inline keyboard ending with a back-to-hub button
    """
    rows = [
        [
            Button(
                f"{category.category_id} (stock {category.pool_size})",
                data=f"{action_prefix}{category.category_id}",
            )
        ]
        for category in categories
    ]
    rows.append([Button("⬅️ Back", data=CB_ADMIN_HUB)])
    return rows


def admin_delete_picker(categories: list[Category]) -> InlineKeyboard:
    return admin_category_picker(categories, CB_ADMIN_DELETE_CATEGORY)


def admin_stock_picker(categories: list[Category]) -> InlineKeyboard:
    return admin_category_picker(categories, CB_ADMIN_STOCK)


def admin_prices_picker(categories: list[Category]) -> InlineKeyboard:
    return admin_category_picker(categories, CB_ADMIN_PRICES)


def admin_tier_keyboard(category: Category, currency: str = "₹") -> InlineKeyboard:
    """One button per tier showing its current price."""

    def shown(price: Decimal | None) -> str:
        return format_amount(price, currency) if price is not None else "not set"

    rows = [
        [
            Button(
                f"Qty {tier.label}: {shown(category.tier_price(tier))}",
                data=f"{CB_ADMIN_TIER}{tier.value}:{category.category_id}",
            )
        ]
        for tier in PriceTier
    ]
    rows.append([Button("⬅️ Back", data=CB_ADMIN_PRICES_MENU)])
    return rows


def back_to_hub_keyboard() -> InlineKeyboard:
    return [[Button("⬅️ Admin Panel", data=CB_ADMIN_HUB)]]
