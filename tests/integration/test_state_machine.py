"""
Integration tests for the conversation flows.

Drives SessionStateMachine end to end over the in-memory row store and a
recording messenger.
"""

import re
from decimal import Decimal

import pytest

from app.models.enums import LogAction, OrderStatus, PriceTier, Table
from app.repositories.category_repository import CategoryRepository
from app.services.messenger import MembershipStatus
from bot.machine import RETRY_TEXT
from bot.states.session_states import (
    AdminAwaitingBroadcastText,
    AwaitingCaptcha,
    AwaitingCustomQuantity,
    AwaitingPaymentProof,
    AwaitingQuantitySelection,
    AwaitingScreenshot,
    AwaitingUtr,
    AwaitingVerification,
    InSupportMode,
)
from bot.utils.constants import (
    MENU_BUY,
    MENU_DISCLAIMER,
    MENU_ORDERS,
    MENU_RECOVER,
    MENU_SUPPORT,
)
from tests.conftest import ADMIN_ID, ORDERS_CHANNEL
from tests.helpers.bot_test_client import seed_category, seed_user

pytestmark = pytest.mark.integration

BUYER = "1001"
STRANGER = "2002"
UTR = "123456789012"
CODES = tuple(f"SHEIN-{i:03d}" for i in range(10))
TIERS = {
    PriceTier.TIER_1: "50",
    PriceTier.TIER_5: "45",
    PriceTier.TIER_10: "40",
    PriceTier.TIER_20_PLUS: "35",
}
CAPTCHA = re.compile(r"What is (\d+) \+ (\d+)\?")


def captcha_answer(text: str) -> str:
    match = CAPTCHA.search(text)
    assert match, text
    return str(int(match.group(1)) + int(match.group(2)))


async def verify(client, messenger, user_id: str = BUYER) -> None:
    messenger.memberships[user_id] = MembershipStatus.MEMBER
    await client.send(user_id, "/start")
    await client.press(user_id, "check_join")
    await client.send(user_id, captcha_answer(client.last_text(user_id)))


async def place_order(client, user_id: str = BUYER, quantity: int = 5) -> str:
    """Walk the purchase flow and return the new order ID."""
    await client.send(user_id, MENU_BUY)
    await client.press(user_id, "cat:cat_500")
    await client.press(user_id, f"qty:{quantity}:cat_500")
    await client.press(user_id, "submit_proof")
    await client.send(user_id, photo_ref="proof-file")
    await client.send(user_id, UTR)
    match = re.search(r"SVH-[A-Z0-9]{7}-[A-Z0-9]{6}", client.last_text(user_id))
    assert match, client.last_text(user_id)
    return match.group(0)


class TestVerification:
    """/start -> join check -> captcha."""

    @pytest.mark.asyncio
    async def test_start_prompts_join(self, client, sessions):
        await client.send(BUYER, "/start")

        assert "join our channels" in client.last_text(BUYER)
        assert "check_join" in client.last_buttons(BUYER)
        assert sessions.get(BUYER) == AwaitingVerification()

    @pytest.mark.asyncio
    async def test_not_joined_stays_unverified(self, client, sessions, messenger):
        await client.send(BUYER, "/start")
        await client.press(BUYER, "check_join")

        assert "Verification failed" in client.last_text(BUYER)
        assert sessions.get(BUYER) == AwaitingVerification()
        assert messenger.answered == ["cb-1"]

    @pytest.mark.asyncio
    async def test_wrong_answer_regenerates_captcha(self, client, sessions, messenger):
        messenger.memberships[BUYER] = MembershipStatus.MEMBER
        await client.send(BUYER, "/start")
        await client.press(BUYER, "check_join")
        expected = sessions.get(BUYER).expected_answer

        await client.send(BUYER, str(expected + 1))

        assert "Wrong answer" in client.last_text(BUYER)
        assert isinstance(sessions.get(BUYER), AwaitingCaptcha)
        assert int(captcha_answer(client.last_text(BUYER))) == (
            sessions.get(BUYER).expected_answer
        )

    @pytest.mark.asyncio
    async def test_non_numeric_answer_regenerates(self, client, sessions, messenger):
        messenger.memberships[BUYER] = MembershipStatus.MEMBER
        await client.send(BUYER, "/start")
        await client.press(BUYER, "check_join")

        await client.send(BUYER, "eleven")

        assert "Wrong answer" in client.last_text(BUYER)
        assert isinstance(sessions.get(BUYER), AwaitingCaptcha)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer", ["²", "①", "--5", "١٢"])
    async def test_unicode_digits_are_a_wrong_answer(
        self, client, sessions, messenger, answer
    ):
        messenger.memberships[BUYER] = MembershipStatus.MEMBER
        await client.send(BUYER, "/start")
        await client.press(BUYER, "check_join")

        await client.send(BUYER, answer)

        assert "Wrong answer" in client.last_text(BUYER)
        assert isinstance(sessions.get(BUYER), AwaitingCaptcha)
        assert ADMIN_ID not in {m.recipient_id for m in messenger.sent}

    @pytest.mark.asyncio
    async def test_block_during_captcha_is_kept(
        self, client, sessions, messenger, services
    ):
        messenger.memberships[BUYER] = MembershipStatus.MEMBER
        await client.send(BUYER, "/start")
        await client.press(BUYER, "check_join")
        await services.users.toggle_block(BUYER)

        await client.send(BUYER, captcha_answer(client.last_text(BUYER)))

        assert "Access Denied" in client.last_text(BUYER)
        assert sessions.get(BUYER) is None
        assert (await services.users.get_user(BUYER)).is_blocked
        await client.send(BUYER, MENU_BUY)
        assert "blocked" in client.last_text(BUYER)

    @pytest.mark.asyncio
    async def test_correct_answer_verifies(self, client, sessions, messenger, services, store):
        await verify(client, messenger)

        assert "Verification successful" in client.last_text(BUYER)
        assert client.last_menu(BUYER) is not None
        assert sessions.get(BUYER) is None
        assert (await services.users.get_user(BUYER)).can_shop
        actions = [row["Action"] for row in await store.list_rows(Table.LOGS)]
        assert LogAction.USER_VERIFIED in actions

    @pytest.mark.asyncio
    async def test_verified_user_welcomed_back(self, client, store):
        await seed_user(store, BUYER)

        await client.send(BUYER, "/start")

        assert "Welcome back" in client.last_text(BUYER)

    @pytest.mark.asyncio
    async def test_blocked_user_denied(self, client, store, sessions):
        await seed_user(store, BUYER, blocked=True)

        await client.send(BUYER, "/start")

        assert "Access Denied" in client.last_text(BUYER)
        assert sessions.get(BUYER) is None

    @pytest.mark.asyncio
    async def test_membership_lookup_failure(self, client, messenger):
        messenger.membership_error = True
        await client.send(BUYER, "/start")

        await client.press(BUYER, "check_join")

        assert client.last_text(BUYER) == RETRY_TEXT
        assert "membership lookup failed" in messenger.last_to(ADMIN_ID).text

    @pytest.mark.asyncio
    async def test_menu_requires_verification(self, client):
        await client.send(BUYER, MENU_BUY)
        assert "verify first" in client.last_text(BUYER)


class TestPurchaseToDelivery:
    """A verified user buys 5 codes and the admin approves."""

    @pytest.mark.asyncio
    @pytest.mark.critical
    async def test_full_purchase(self, client, messenger, sessions, store, services):
        await seed_category(store, tiers=TIERS, codes=CODES)
        await verify(client, messenger)

        await client.send(BUYER, MENU_BUY)
        assert client.last_buttons(BUYER) == ["cat:cat_500"]

        await client.press(BUYER, "cat:cat_500")
        assert "Rate: ₹50.00" in client.last_text(BUYER)
        assert sessions.get(BUYER) == AwaitingQuantitySelection("cat_500")

        await client.press(BUYER, "qty:5:cat_500")
        quote = messenger.last_to(BUYER)
        assert quote.photo_ref == "https://example.com/qr.jpg"
        assert "Total: ₹225.00" in quote.text
        assert sessions.get(BUYER) == AwaitingPaymentProof(
            "cat_500", 5, Decimal("225.00")
        )

        await client.press(BUYER, "submit_proof")
        assert isinstance(sessions.get(BUYER), AwaitingScreenshot)

        await client.send(BUYER, "here it is")
        assert "screenshot" in client.last_text(BUYER)
        assert isinstance(sessions.get(BUYER), AwaitingScreenshot)

        await client.send(BUYER, photo_ref="proof-file")
        assert sessions.get(BUYER) == AwaitingUtr(
            "cat_500", 5, Decimal("225.00"), "proof-file"
        )

        await client.send(BUYER, "12345")
        assert "Invalid UTR" in client.last_text(BUYER)
        assert isinstance(sessions.get(BUYER), AwaitingUtr)

        await client.send(BUYER, UTR)
        assert "Order submitted" in client.last_text(BUYER)
        assert sessions.get(BUYER) is None
        order_id = re.search(r"SVH-\S+?(?=`)", client.last_text(BUYER)).group(0)

        # Stock untouched until approval
        category = await CategoryRepository(store).get("cat_500")
        assert category.pool_size == 10

        admin_message = messenger.last_to(ADMIN_ID)
        assert admin_message.photo_ref == "proof-file"
        assert f"adm:approve:{order_id}" in admin_message.callback_data

        await client.press(ADMIN_ID, f"adm:approve:{order_id}")

        assert "approved" in client.last_text(ADMIN_ID)
        assert "\n".join(CODES[:5]) in client.last_text(BUYER)
        assert messenger.to(ORDERS_CHANNEL)
        order = await services.orders.order_repo.get(order_id)
        assert order.status is OrderStatus.SUCCESSFUL
        assert order.delivered_codes == CODES[:5]
        category = await CategoryRepository(store).get("cat_500")
        assert category.code_pool == CODES[5:]
        assert category.stock_count == 5

        await client.send(BUYER, MENU_RECOVER)
        await client.send(BUYER, order_id.lower())
        assert "\n".join(CODES[:5]) in client.last_text(BUYER)

        await client.send(BUYER, MENU_ORDERS)
        assert order_id in client.last_text(BUYER)

    @pytest.mark.asyncio
    async def test_custom_quantity(self, client, messenger, sessions, store):
        await seed_category(store, tiers=TIERS, codes=CODES)
        await verify(client, messenger)
        await client.send(BUYER, MENU_BUY)
        await client.press(BUYER, "cat:cat_500")

        await client.press(BUYER, "qty:custom:cat_500")
        await client.send(BUYER, "zero")
        assert "Invalid number" in client.last_text(BUYER)

        await client.send(BUYER, "7")
        assert "Total: ₹315.00" in messenger.last_to(BUYER).text
        assert sessions.get(BUYER) == AwaitingPaymentProof(
            "cat_500", 7, Decimal("315.00")
        )

    @pytest.mark.asyncio
    async def test_unicode_digits_rejected_as_quantity(
        self, client, messenger, sessions, store
    ):
        await seed_category(store, tiers=TIERS, codes=CODES)
        await verify(client, messenger)
        await client.send(BUYER, MENU_BUY)
        await client.press(BUYER, "cat:cat_500")

        await client.send(BUYER, "²")
        assert "Tap a quantity button" in client.last_text(BUYER)
        assert sessions.get(BUYER) == AwaitingQuantitySelection("cat_500")

        await client.press(BUYER, "qty:custom:cat_500")
        await client.send(BUYER, "①")
        assert "Invalid number" in client.last_text(BUYER)
        await client.send(BUYER, "²")
        assert "Invalid number" in client.last_text(BUYER)
        assert isinstance(sessions.get(BUYER), AwaitingCustomQuantity)

    @pytest.mark.asyncio
    async def test_blocked_mid_purchase_cannot_submit(
        self, client, messenger, sessions, store, services
    ):
        await seed_category(store, tiers=TIERS, codes=CODES)
        await verify(client, messenger)
        await client.send(BUYER, MENU_BUY)
        await client.press(BUYER, "cat:cat_500")
        await client.press(BUYER, "qty:2:cat_500")
        await client.press(BUYER, "submit_proof")
        await client.send(BUYER, photo_ref="proof-file")
        await services.users.toggle_block(BUYER)

        await client.send(BUYER, UTR)

        assert "blocked" in client.last_text(BUYER)
        assert sessions.get(BUYER) is None
        assert await store.list_rows(Table.ORDERS) == []

    @pytest.mark.asyncio
    async def test_stale_quantity_button(self, client, messenger, store):
        await seed_category(store, codes=CODES)
        await verify(client, messenger)

        await client.press(BUYER, "qty:2:cat_500")

        assert "expired" in client.last_text(BUYER)

    @pytest.mark.asyncio
    async def test_empty_catalog(self, client, messenger):
        await verify(client, messenger)
        await client.send(BUYER, MENU_BUY)
        assert "No vouchers" in client.last_text(BUYER)


class TestInsufficientStock:
    """Quantity above the pool is refused at selection time."""

    @pytest.mark.asyncio
    async def test_quantity_above_stock(self, client, messenger, sessions, store):
        await seed_category(store, codes=CODES[:3])
        await verify(client, messenger)
        await client.send(BUYER, MENU_BUY)
        await client.press(BUYER, "cat:cat_500")

        await client.press(BUYER, "qty:5:cat_500")

        assert "Only 3 code(s) left" in client.last_text(BUYER)
        assert sessions.get(BUYER) == AwaitingQuantitySelection("cat_500")
        assert (await CategoryRepository(store).get("cat_500")).pool_size == 3

        await client.send(BUYER, "3")
        assert isinstance(sessions.get(BUYER), AwaitingPaymentProof)

    @pytest.mark.asyncio
    async def test_stock_gone_before_approval(self, client, messenger, store, services):
        await seed_category(store, codes=CODES[:5])
        await verify(client, messenger)
        order_id = await place_order(client, quantity=5)
        await services.catalog.remove_code(CODES[0])

        await client.press(ADMIN_ID, f"adm:approve:{order_id}")

        assert "Not enough stock" in client.last_text(ADMIN_ID)
        order = await services.orders.order_repo.get(order_id)
        assert order.is_pending


class TestAdminDecisions:
    """Approve/Decline buttons."""

    @pytest.mark.asyncio
    @pytest.mark.critical
    async def test_double_approve_delivers_once(self, client, messenger, store):
        await seed_category(store, codes=CODES)
        await verify(client, messenger)
        order_id = await place_order(client, quantity=2)

        await client.press(ADMIN_ID, f"adm:approve:{order_id}")
        await client.press(ADMIN_ID, f"adm:approve:{order_id}")

        assert "already Successful" in client.last_text(ADMIN_ID)
        deliveries = [t for t in messenger.texts_to(BUYER) if "Order Approved" in t]
        assert len(deliveries) == 1
        assert (await CategoryRepository(store).get("cat_500")).pool_size == 8

    @pytest.mark.asyncio
    async def test_decline(self, client, messenger, store, services):
        await seed_category(store, codes=CODES)
        await verify(client, messenger)
        order_id = await place_order(client, quantity=2)

        await client.press(ADMIN_ID, f"adm:decline:{order_id}")

        assert "declined" in client.last_text(ADMIN_ID)
        assert "Declined" in client.last_text(BUYER)
        assert (await CategoryRepository(store).get("cat_500")).pool_size == 10

        await client.press(ADMIN_ID, f"adm:approve:{order_id}")
        assert "already Declined" in client.last_text(ADMIN_ID)

    @pytest.mark.asyncio
    async def test_non_admin_cannot_approve(self, client, messenger, store, services):
        await seed_category(store, codes=CODES)
        await verify(client, messenger)
        order_id = await place_order(client, quantity=2)

        await client.press(BUYER, f"adm:approve:{order_id}")

        assert client.last_text(BUYER) == "🚫 Access Denied."
        assert (await services.orders.order_repo.get(order_id)).is_pending


class TestRecovery:
    """Recover Vouchers."""

    @pytest.mark.asyncio
    @pytest.mark.critical
    async def test_non_owner_learns_nothing(self, client, messenger, store):
        await seed_category(store, codes=CODES)
        await verify(client, messenger)
        await verify(client, messenger, STRANGER)
        order_id = await place_order(client, quantity=2)
        await client.press(ADMIN_ID, f"adm:approve:{order_id}")

        await client.send(STRANGER, MENU_RECOVER)
        await client.send(STRANGER, order_id)

        reply = client.last_text(STRANGER)
        assert "Order not found" in reply
        assert not any(code in reply for code in CODES)

        await client.send(STRANGER, MENU_RECOVER)
        await client.send(STRANGER, "SVH-0000000-000000")
        assert client.last_text(STRANGER) == reply

    @pytest.mark.asyncio
    async def test_pending_order(self, client, messenger, store):
        await seed_category(store, codes=CODES)
        await verify(client, messenger)
        order_id = await place_order(client, quantity=2)

        await client.send(BUYER, MENU_RECOVER)
        await client.send(BUYER, order_id)

        assert "is Pending" in client.last_text(BUYER)


class TestCancelAndSupport:
    """Global /cancel and support mode."""

    @pytest.mark.asyncio
    async def test_cancel_mid_purchase(self, client, messenger, sessions, store):
        await seed_category(store, codes=CODES)
        await verify(client, messenger)
        await client.send(BUYER, MENU_BUY)
        await client.press(BUYER, "cat:cat_500")

        await client.send(BUYER, "/cancel")

        assert "Cancelled" in client.last_text(BUYER)
        assert sessions.get(BUYER) is None
        assert client.last_menu(BUYER) is not None

    @pytest.mark.asyncio
    async def test_cancel_when_idle(self, client):
        await client.send(BUYER, "/cancel")
        assert "Main Menu" in client.last_text(BUYER)

    @pytest.mark.asyncio
    async def test_support_relays_to_admin(self, client, messenger, sessions):
        await client.send(BUYER, MENU_SUPPORT, name="Asha")
        assert sessions.get(BUYER) == InSupportMode()

        await client.send(BUYER, "my code does not work", name="Asha")
        relayed = messenger.last_to(ADMIN_ID)
        assert "my code does not work" in relayed.text
        assert f"/msg {BUYER}" in relayed.text
        assert "Sent to the admin" in client.last_text(BUYER)

        await client.send(BUYER, photo_ref="shot", caption="see", name="Asha")
        assert messenger.last_to(ADMIN_ID).photo_ref == "shot"
        assert sessions.get(BUYER) == InSupportMode()

        await client.send(BUYER, "/cancel")
        assert "Exited support mode" in client.last_text(BUYER)
        assert sessions.get(BUYER) is None

    @pytest.mark.asyncio
    async def test_blocked_user_can_reach_support(self, client, messenger, store):
        await seed_user(store, BUYER, blocked=True)

        await client.send(BUYER, MENU_SUPPORT)
        await client.send(BUYER, "please unblock me")

        assert "please unblock me" in messenger.last_to(ADMIN_ID).text

    @pytest.mark.asyncio
    async def test_admin_unreachable(self, client, messenger):
        messenger.failing_recipients.add(ADMIN_ID)
        await client.send(BUYER, MENU_SUPPORT)

        await client.send(BUYER, "hello?")

        assert "Could not reach the admin" in client.last_text(BUYER)

    @pytest.mark.asyncio
    async def test_disclaimer_and_fallback(self, client):
        await client.send(BUYER, MENU_DISCLAIMER)
        assert "Disclaimer" in client.last_text(BUYER)

        await client.send(BUYER, "what?")
        assert "didn't understand" in client.last_text(BUYER)


class TestAdminPanel:
    """Admin hub flows."""

    @pytest.mark.asyncio
    async def test_non_admin_denied(self, client, sessions):
        await client.send(BUYER, "/admin")
        assert client.last_text(BUYER) == "🚫 Access Denied."

        await client.press(BUYER, "adm:hub")
        assert client.last_text(BUYER) == "🚫 Access Denied."
        assert sessions.get(BUYER) is None

    @pytest.mark.asyncio
    async def test_stale_admin_state_discarded(self, client, sessions):
        sessions.set(BUYER, AdminAwaitingBroadcastText())

        await client.send(BUYER, "hello everyone")

        assert sessions.get(BUYER) is None
        assert "didn't understand" in client.last_text(BUYER)

    @pytest.mark.asyncio
    async def test_add_category_stock_and_price(self, client, services):
        await client.send(ADMIN_ID, "/admin")
        assert "adm:add_cat" in client.last_buttons(ADMIN_ID)

        await client.press(ADMIN_ID, "adm:add_cat")
        await client.send(ADMIN_ID, "abc")
        assert "positive whole number" in client.last_text(ADMIN_ID)
        await client.send(ADMIN_ID, "1000")
        await client.send(ADMIN_ID, "90")
        assert "cat_1000" in client.last_text(ADMIN_ID)
        assert "Admin Panel" in client.last_text(ADMIN_ID)

        await client.press(ADMIN_ID, "adm:add_cat")
        await client.send(ADMIN_ID, "1000")
        assert "already exists" in client.last_text(ADMIN_ID)
        await client.send(ADMIN_ID, "/cancel")

        await client.press(ADMIN_ID, "adm:stock:cat_1000")
        await client.send(ADMIN_ID, "X1\nX2\n\nX3")
        assert "Added 3 code(s)" in client.last_text(ADMIN_ID)

        await client.press(ADMIN_ID, "adm:prices:cat_1000")
        assert "adm:tier:Price10:cat_1000" in client.last_buttons(ADMIN_ID)
        await client.press(ADMIN_ID, "adm:tier:Price10:cat_1000")
        await client.send(ADMIN_ID, "80")

        category = await services.catalog.get_category("cat_1000")
        assert category.code_pool == ("X1", "X2", "X3")
        assert category.base_price == Decimal("90.00")
        assert category.tier_price(PriceTier.TIER_10) == Decimal("80.00")
        assert category.tier_price(PriceTier.TIER_1) == Decimal("90.00")

    @pytest.mark.asyncio
    async def test_malformed_value_and_price_reprompt(self, client, services):
        await client.press(ADMIN_ID, "adm:add_cat")

        await client.send(ADMIN_ID, "²")
        assert "positive whole number" in client.last_text(ADMIN_ID)
        await client.send(ADMIN_ID, "1000")
        await client.send(ADMIN_ID, "1e50")
        assert "Send the price again" in client.last_text(ADMIN_ID)
        assert await services.catalog.find_category("cat_1000") is None

        await client.send(ADMIN_ID, "90")
        assert (await services.catalog.get_category("cat_1000")).base_price == (
            Decimal("90.00")
        )

    @pytest.mark.asyncio
    async def test_unknown_tier(self, client, store):
        await seed_category(store)
        await client.press(ADMIN_ID, "adm:tier:Price7:cat_500")
        assert "Unknown price tier" in client.last_text(ADMIN_ID)

    @pytest.mark.asyncio
    async def test_remove_code_and_delete_category(self, client, store, services):
        await seed_category(store, codes=("A", "B"))

        await client.press(ADMIN_ID, "adm:remove_code")
        await client.send(ADMIN_ID, "B")
        assert "removed" in client.last_text(ADMIN_ID)

        await client.press(ADMIN_ID, "adm:remove_code")
        await client.send(ADMIN_ID, "B")
        assert "Code not found" in client.last_text(ADMIN_ID)

        await client.press(ADMIN_ID, "adm:del:cat_500")
        assert "deleted" in client.last_text(ADMIN_ID)
        assert await services.catalog.find_category("cat_500") is None

        await client.press(ADMIN_ID, "adm:del:cat_500")
        assert "Not found" in client.last_text(ADMIN_ID)

    @pytest.mark.asyncio
    async def test_block_and_unblock(self, client, store, services):
        await seed_user(store, BUYER)

        await client.press(ADMIN_ID, "adm:block")
        await client.send(ADMIN_ID, ADMIN_ID)
        assert "cannot block yourself" in client.last_text(ADMIN_ID)
        await client.send(ADMIN_ID, BUYER)
        assert "blocked" in client.last_text(ADMIN_ID)
        assert (await services.users.get_user(BUYER)).is_blocked

        await client.send(BUYER, MENU_BUY)
        assert "Access Denied" in client.last_text(BUYER)

        await client.press(ADMIN_ID, "adm:block")
        await client.send(ADMIN_ID, BUYER)
        assert "unblocked" in client.last_text(ADMIN_ID)
        assert (await services.users.get_user(BUYER)).can_shop

    @pytest.mark.asyncio
    async def test_msg_command(self, client, messenger, store, sessions):
        sessions.set(ADMIN_ID, AdminAwaitingBroadcastText())

        await client.send(ADMIN_ID, f"/msg {BUYER} Your code is on its way")

        assert "Your code is on its way" in client.last_text(BUYER)
        assert "Message sent" in client.last_text(ADMIN_ID)
        assert sessions.get(ADMIN_ID) == AdminAwaitingBroadcastText()
        actions = [row["Action"] for row in await store.list_rows(Table.LOGS)]
        assert LogAction.ADMIN_DM in actions

        await client.send(ADMIN_ID, "/msg nobody hi")
        assert "Invalid User ID" in client.last_text(ADMIN_ID)
        await client.send(ADMIN_ID, "/msg")
        assert "Usage" in client.last_text(ADMIN_ID)

    @pytest.mark.asyncio
    async def test_msg_is_ordinary_text_for_users(self, client, messenger):
        await client.send(BUYER, f"/msg {STRANGER} hi")

        assert messenger.to(STRANGER) == []
        assert "didn't understand" in client.last_text(BUYER)

    @pytest.mark.asyncio
    async def test_dm_flow(self, client):
        await client.press(ADMIN_ID, "adm:dm")
        await client.send(ADMIN_ID, "not-an-id")
        assert "Invalid User ID" in client.last_text(ADMIN_ID)
        await client.send(ADMIN_ID, BUYER)
        await client.send(ADMIN_ID, "Hello from the shop")

        assert "Hello from the shop" in client.last_text(BUYER)
        assert "Message sent" in client.last_text(ADMIN_ID)

    @pytest.mark.asyncio
    async def test_stats(self, client, store):
        await seed_user(store, BUYER)
        await seed_category(store, codes=CODES[:4])

        await client.press(ADMIN_ID, "adm:stats")

        text = client.last_text(ADMIN_ID)
        assert "Users: 1" in text
        assert "cat\\_500: 4" in text

    @pytest.mark.asyncio
    async def test_exit_to_main_menu(self, client, sessions):
        await client.send(ADMIN_ID, "/admin")
        await client.press(ADMIN_ID, "adm:exit")

        assert client.last_menu(ADMIN_ID) is not None
        assert sessions.get(ADMIN_ID) is None


@pytest.mark.asyncio
async def test_unknown_button(client):
    await client.press(BUYER, "something_old")
    assert "no longer active" in client.last_text(BUYER)
