"""
Aiogram router.

Converts every Telegram message and callback query into a ChatEvent and
hands it to the session state machine.
"""

from aiogram import Router
from aiogram.types import CallbackQuery, Message, User

from bot.events import ChatEvent
from bot.machine import SessionStateMachine

router = Router(name="voucher_hub")


def display_name(user: User) -> str:
    if user.full_name:
        return user.full_name
    return f"@{user.username}" if user.username else str(user.id)


def event_from_message(message: Message) -> ChatEvent | None:
    user = message.from_user
    if user is None:
        return None
    return ChatEvent(
        user_id=str(user.id),
        chat_id=str(message.chat.id),
        display_name=display_name(user),
        text=message.text,
        photo_ref=message.photo[-1].file_id if message.photo else None,
        caption=message.caption,
    )


def event_from_callback(callback: CallbackQuery) -> ChatEvent:
    user = callback.from_user
    chat_id = callback.message.chat.id if callback.message else user.id
    return ChatEvent(
        user_id=str(user.id),
        chat_id=str(chat_id),
        display_name=display_name(user),
        callback_data=callback.data or "",
        interaction_id=callback.id,
    )


@router.message()
async def handle_message(message: Message, machine: SessionStateMachine) -> None:
    """Private-chat messages only; channel posts and groups are ignored."""
    if message.chat.type != "private":
        return
    event = event_from_message(message)
    if event is not None:
        await machine.dispatch(event)


@router.callback_query()
async def handle_callback(
    callback: CallbackQuery, machine: SessionStateMachine
) -> None:
    await machine.dispatch(event_from_callback(callback))
