"""
Admin catalog management.

Categories, tier prices, stock upload and single-code removal.
"""

from app.models.enums import LogAction, PriceTier
from app.services.catalog_service import category_id_for, parse_codes
from app.utils.exceptions import NotFoundError, ValidationError
from app.utils.formatters import format_amount
from bot.context import FlowContext
from bot.events import ChatEvent
from bot.handlers.admin.panel import enter_admin_hub
from bot.keyboards.inline import (
    admin_delete_picker,
    admin_prices_picker,
    admin_stock_picker,
    admin_tier_keyboard,
    back_to_hub_keyboard,
)
from bot.states.session_states import (
    AdminAwaitingCategoryPrice,
    AdminAwaitingCategoryValue,
    AdminAwaitingCodeToRemove,
    AdminAwaitingStockCodes,
    AdminAwaitingTierPrice,
)
from bot.utils.text_utils import parse_face_value, parse_price


async def _pick_category(
    ctx: FlowContext, event: ChatEvent, title: str, picker
) -> None:
    categories = await ctx.services.catalog.list_categories()
    if not categories:
        await ctx.reply(event, "📭 No categories yet.", back_to_hub_keyboard())
        return
    await ctx.reply(event, title, picker(categories))


# Add category


async def on_add_category(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    ctx.set_state(event.user_id, AdminAwaitingCategoryValue())
    await ctx.reply(
        event, "➕ *New category*\n\nSend the voucher face value (e.g. `500`):"
    )


async def handle_category_value(
    ctx: FlowContext, event: ChatEvent, state: AdminAwaitingCategoryValue
) -> None:
    try:
        face_value = parse_face_value(event.stripped_text)
    except ValidationError as e:
        await ctx.reply(event, f"❌ {e}. Send the face value again:")
        return

    category_id = category_id_for(face_value)
    if await ctx.services.catalog.find_category(category_id) is not None:
        await ctx.reply(
            event, f"⚠️ `{category_id}` already exists. Send another value:"
        )
        return

    ctx.set_state(event.user_id, AdminAwaitingCategoryPrice(face_value))
    await ctx.reply(
        event,
        f"💲 Send the selling price per code for the "
        f"{ctx.config.currency}{face_value} voucher:",
    )


async def handle_category_price(
    ctx: FlowContext, event: ChatEvent, state: AdminAwaitingCategoryPrice
) -> None:
    try:
        price = parse_price(event.stripped_text)
    except ValidationError as e:
        await ctx.reply(event, f"❌ {e}. Send the price again:")
        return

    category = await ctx.services.catalog.add_category(state.face_value, price)
    await ctx.services.admin_log.log_action(
        event.user_id,
        LogAction.CATEGORY_ADDED,
        f"{category.category_id} price={category.base_price}",
    )
    await enter_admin_hub(
        ctx,
        event.user_id,
        f"✅ Category `{category.category_id}` created at "
        f"{format_amount(category.base_price, ctx.config.currency)} per code.",
    )


# Delete category


async def on_delete_menu(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    await _pick_category(
        ctx, event, "🗑 *Delete which category?*", admin_delete_picker
    )


async def on_delete_category(
    ctx: FlowContext, event: ChatEvent, category_id: str
) -> None:
    """
    Raises:
        NotFoundError: category already gone
    """
    await ctx.services.catalog.delete_category(category_id)
    await ctx.services.admin_log.log_action(
        event.user_id, LogAction.CATEGORY_DELETED, category_id
    )
    await enter_admin_hub(ctx, event.user_id, f"🗑 Category `{category_id}` deleted.")


# Stock


async def on_stock_menu(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    await _pick_category(
        ctx, event, "📥 *Add stock to which category?*", admin_stock_picker
    )


async def on_stock_category(
    ctx: FlowContext, event: ChatEvent, category_id: str
) -> None:
    category = await ctx.services.catalog.get_category(category_id)
    ctx.set_state(event.user_id, AdminAwaitingStockCodes(category_id))
    await ctx.reply(
        event,
        f"📥 `{category_id}` has {category.pool_size} code(s).\n\n"
        f"Send the new codes, one per line:",
    )


async def handle_stock_codes(
    ctx: FlowContext, event: ChatEvent, state: AdminAwaitingStockCodes
) -> None:
    codes = parse_codes(event.text or "")
    if not codes:
        await ctx.reply(event, "❌ No codes found. Send codes, one per line:")
        return

    category = await ctx.services.catalog.append_codes(state.category_id, codes)
    await ctx.services.admin_log.log_action(
        event.user_id,
        LogAction.STOCK_ADDED,
        f"{state.category_id} +{len(codes)}",
    )
    await enter_admin_hub(
        ctx,
        event.user_id,
        f"✅ Added {len(codes)} code(s) to `{state.category_id}`. "
        f"Stock: {category.stock_count}.",
    )


# Prices


async def on_prices_menu(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    await _pick_category(
        ctx, event, "💲 *Set prices for which category?*", admin_prices_picker
    )


async def on_prices_category(
    ctx: FlowContext, event: ChatEvent, category_id: str
) -> None:
    category = await ctx.services.catalog.get_category(category_id)
    await ctx.reply(
        event,
        f"💲 `{category_id}` tier prices\n"
        f"Base price: {format_amount(category.base_price, ctx.config.currency)}\n\n"
        f"Pick a tier to change:",
        admin_tier_keyboard(category, ctx.config.currency),
    )


async def on_tier(ctx: FlowContext, event: ChatEvent, payload: str) -> None:
    """Tier button: ``<tier>:<category_id>``."""
    raw_tier, _, category_id = payload.partition(":")
    try:
        tier = PriceTier(raw_tier)
    except ValueError as e:
        raise ValidationError(f"Unknown price tier {raw_tier!r}") from e

    await ctx.services.catalog.get_category(category_id)
    ctx.set_state(event.user_id, AdminAwaitingTierPrice(category_id, tier))
    await ctx.reply(
        event,
        f"💲 Send the unit price for `{category_id}` at quantity {tier.label}:",
    )


async def handle_tier_price(
    ctx: FlowContext, event: ChatEvent, state: AdminAwaitingTierPrice
) -> None:
    try:
        price = parse_price(event.stripped_text)
    except ValidationError as e:
        await ctx.reply(event, f"❌ {e}. Send the price again:")
        return

    await ctx.services.catalog.set_tier_price(state.category_id, state.tier, price)
    await ctx.services.admin_log.log_action(
        event.user_id,
        LogAction.PRICE_SET,
        f"{state.category_id} {state.tier}={price}",
    )
    await enter_admin_hub(
        ctx,
        event.user_id,
        f"✅ `{state.category_id}` qty {state.tier.label} price set to "
        f"{format_amount(price, ctx.config.currency)}.",
    )


# Remove code


async def on_remove_code(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    ctx.set_state(event.user_id, AdminAwaitingCodeToRemove())
    await ctx.reply(event, "❌ Send the exact voucher code to remove:")


async def handle_code_to_remove(
    ctx: FlowContext, event: ChatEvent, state: AdminAwaitingCodeToRemove
) -> None:
    code = event.stripped_text
    if not code:
        await ctx.reply(event, "✏️ Send the code as text:")
        return

    try:
        category_id = await ctx.services.catalog.remove_code(code)
    except NotFoundError:
        await enter_admin_hub(
            ctx, event.user_id, "❌ Code not found in any category."
        )
        return

    await ctx.services.admin_log.log_action(
        event.user_id, LogAction.CODE_REMOVED, f"{category_id} {code}"
    )
    await enter_admin_hub(
        ctx,
        event.user_id,
        f"✅ Code `{code}` removed from `{category_id}`.",
    )
