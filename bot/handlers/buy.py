"""
Purchase handler.

Category -> quantity -> QR payment -> screenshot -> UTR -> Pending order.
"""

from loguru import logger

from app.models.category import Category
from app.utils.exceptions import (
    InsufficientStockError,
    NotPricedError,
    ValidationError,
)
from app.utils.formatters import escape_md, format_amount
from bot.context import FlowContext
from bot.events import ChatEvent
from bot.keyboards.inline import (
    categories_keyboard,
    payment_keyboard,
    quantity_keyboard,
)
from bot.states.session_states import (
    AwaitingCategorySelection,
    AwaitingCustomQuantity,
    AwaitingPaymentProof,
    AwaitingQuantitySelection,
    AwaitingScreenshot,
    AwaitingUtr,
)
from bot.utils.text_utils import parse_positive_int

SESSION_EXPIRED = (
    "⌛ This purchase session has expired. "
    "Tap 🛍️ Buy Vouchers to start again."
)


def parse_quantity(raw: str) -> int:
    """
    Parse a positive integer quantity.

    Raises:
        ValidationError: not a positive integer
    """
    quantity = parse_positive_int(raw)
    if quantity is None:
        raise ValidationError("Quantity must be a positive whole number")
    return quantity


async def open_catalog(ctx: FlowContext, event: ChatEvent) -> None:
    """Buy Vouchers menu button."""
    if await ctx.require_shopper(event) is None:
        return

    categories = await ctx.services.catalog.list_categories()
    if not categories:
        ctx.clear_state(event.user_id)
        await ctx.reply(event, "😔 No vouchers are available right now.")
        return

    ctx.set_state(event.user_id, AwaitingCategorySelection())
    await ctx.reply(
        event,
        "🛍️ *Choose a voucher:*",
        categories_keyboard(categories, ctx.config.currency),
    )


async def on_back_to_categories(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    await open_catalog(ctx, event)


async def send_quantity_prompt(
    ctx: FlowContext, event: ChatEvent, category: Category
) -> None:
    try:
        rate = format_amount(
            ctx.services.pricing.resolve_price(category, 1), ctx.config.currency
        )
    except NotPricedError:
        rate = "not set"

    await ctx.reply(
        event,
        f"🎟 *{ctx.config.currency}{category.face_value} Voucher*\n"
        f"Rate: {rate} per code\n"
        f"In stock: {category.pool_size}\n\n"
        f"How many codes do you want?",
        quantity_keyboard(category.category_id),
    )


async def on_category(ctx: FlowContext, event: ChatEvent, category_id: str) -> None:
    """
    Category button press.

    Raises:
        NotFoundError: category deleted meanwhile
    """
    if await ctx.require_shopper(event) is None:
        return

    category = await ctx.services.catalog.get_category(category_id)
    ctx.set_state(event.user_id, AwaitingQuantitySelection(category_id))
    await send_quantity_prompt(ctx, event, category)


async def on_quantity(ctx: FlowContext, event: ChatEvent, payload: str) -> None:
    """Quick quantity button: ``<n>:<category_id>``."""
    raw_quantity, _, category_id = payload.partition(":")
    state = ctx.get_state(event.user_id)
    if (
        not isinstance(state, AwaitingQuantitySelection)
        or state.category_id != category_id
    ):
        await ctx.reply(event, SESSION_EXPIRED)
        return

    await process_quantity(ctx, event, category_id, parse_quantity(raw_quantity))


async def on_custom_quantity(
    ctx: FlowContext, event: ChatEvent, category_id: str
) -> None:
    state = ctx.get_state(event.user_id)
    if (
        not isinstance(state, AwaitingQuantitySelection)
        or state.category_id != category_id
    ):
        await ctx.reply(event, SESSION_EXPIRED)
        return

    ctx.set_state(event.user_id, AwaitingCustomQuantity(category_id))
    await ctx.reply(event, "✏️ Enter the number of codes you want:")


async def process_quantity(
    ctx: FlowContext, event: ChatEvent, category_id: str, quantity: int
) -> None:
    """
    Quote the order and show the payment QR.

    Raises:
        NotFoundError: category missing
        InsufficientStockError: quantity above current stock
        NotPricedError: no price resolvable
    """
    category = await ctx.services.catalog.get_category(category_id)
    if quantity > category.pool_size:
        raise InsufficientStockError(category_id, quantity, category.pool_size)

    pricing = ctx.services.pricing
    unit_price = pricing.resolve_price(category, quantity)
    total = pricing.total_cost(category, quantity)

    ctx.set_state(
        event.user_id, AwaitingPaymentProof(category_id, quantity, total)
    )
    currency = ctx.config.currency
    await ctx.messenger.send_photo(
        event.chat_id,
        ctx.config.payment_qr_url,
        f"🧾 *Order Summary*\n"
        f"Voucher: {currency}{category.face_value}\n"
        f"Quantity: {quantity}\n"
        f"Unit price: {format_amount(unit_price, currency)}\n"
        f"*Total: {format_amount(total, currency)}*\n\n"
        f"Scan the QR code to pay, then tap *Paid - Submit Proof*.",
        payment_keyboard(),
    )


async def handle_category_selection(
    ctx: FlowContext, event: ChatEvent, state: AwaitingCategorySelection
) -> None:
    await ctx.reply(event, "👆 Please pick a voucher from the list above.")


async def handle_quantity_selection(
    ctx: FlowContext, event: ChatEvent, state: AwaitingQuantitySelection
) -> None:
    """Typed quantity while the quantity buttons are shown."""
    try:
        quantity = parse_quantity(event.stripped_text)
    except ValidationError:
        await ctx.reply(
            event, "🔢 Tap a quantity button or type a whole number."
        )
        return
    await process_quantity(ctx, event, state.category_id, quantity)


async def handle_custom_quantity(
    ctx: FlowContext, event: ChatEvent, state: AwaitingCustomQuantity
) -> None:
    try:
        quantity = parse_quantity(event.stripped_text)
    except ValidationError:
        await ctx.reply(event, "❌ Invalid number. Enter a whole number above 0:")
        return
    await process_quantity(ctx, event, state.category_id, quantity)


async def on_submit_proof(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    """Paid button press."""
    state = ctx.get_state(event.user_id)
    if not isinstance(state, AwaitingPaymentProof):
        await ctx.reply(event, SESSION_EXPIRED)
        return

    ctx.set_state(
        event.user_id,
        AwaitingScreenshot(state.category_id, state.quantity, state.total_cost),
    )
    await ctx.reply(event, "📸 Send a screenshot of your payment.")


async def handle_payment_proof(
    ctx: FlowContext, event: ChatEvent, state: AwaitingPaymentProof
) -> None:
    await ctx.reply(
        event, "💳 After paying, tap *Paid - Submit Proof* under the QR code."
    )


async def handle_screenshot(
    ctx: FlowContext, event: ChatEvent, state: AwaitingScreenshot
) -> None:
    if not event.photo_ref:
        await ctx.reply(event, "📸 Please send the payment screenshot as a photo.")
        return

    ctx.set_state(
        event.user_id,
        AwaitingUtr(
            state.category_id, state.quantity, state.total_cost, event.photo_ref
        ),
    )
    await ctx.reply(
        event, "🔢 Now send the 12-digit UTR / transaction ID of your payment."
    )


async def handle_utr(ctx: FlowContext, event: ChatEvent, state: AwaitingUtr) -> None:
    """
    Final step: create the Pending order.

    Raises:
        StoreError: order could not be written (session kept for retry)
    """
    if await ctx.require_shopper(event) is None:
        ctx.clear_state(event.user_id)
        return

    try:
        order = await ctx.services.orders.submit(
            user_id=event.user_id,
            user_name=event.display_name,
            category_id=state.category_id,
            quantity=state.quantity,
            total_amount=state.total_cost,
            utr=event.stripped_text,
            proof_ref=state.proof_ref,
        )
    except ValidationError:
        await ctx.reply(
            event, "❌ Invalid UTR. It must be exactly 12 digits. Try again:"
        )
        return

    ctx.clear_state(event.user_id)
    logger.info(f"User {event.user_id} submitted {order.order_id}")
    await ctx.show_main_menu(
        event,
        f"✅ *Order submitted!*\n\n"
        f"Order ID: `{order.order_id}`\n"
        f"Total: {escape_md(format_amount(order.total_amount, ctx.config.currency))}\n\n"
        f"You will receive your codes once the admin verifies the payment.",
    )
