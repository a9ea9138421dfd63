"""
Bot main entry point.

Initializes and runs the Telegram bot with aiogram 3.x.
"""

import asyncio
import sys

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import ErrorEvent
from loguru import logger

from app.config.database import (
    close_db,
    create_engine,
    create_session_maker,
    init_db,
)
from app.config.settings import Settings, get_settings
from app.repositories.sql_row_store import SqlRowStore
from app.services.container import build_services
from app.utils.distributed_lock import build_lock
from bot.context import BotConfig, FlowContext
from bot.machine import SessionStateMachine
from bot.messenger import AiogramMessenger
from bot.middlewares.error_handler import ErrorHandlerMiddleware
from bot.middlewares.logger_middleware import LoggerMiddleware
from bot.router import router
from bot.storage.session_store import SessionStore


def configure_logging(settings: Settings) -> None:
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    logger.add(
        "logs/bot.log",
        rotation="1 day",
        retention="7 days",
        level="INFO",
    )


async def evict_idle_sessions(sessions: SessionStore, ttl: int) -> None:
    """Periodic sweep of idle sessions."""
    interval = max(ttl // 4, 30)
    while True:
        await asyncio.sleep(interval)
        sessions.evict_idle(ttl)


def build_dispatcher(
    settings: Settings, machine: SessionStateMachine
) -> Dispatcher:
    dp = Dispatcher()
    dp["machine"] = machine

    logger_middleware = LoggerMiddleware()
    dp.message.outer_middleware(logger_middleware)
    dp.callback_query.outer_middleware(logger_middleware)
    error_middleware = ErrorHandlerMiddleware(settings.admin_telegram_id)
    dp.message.middleware(error_middleware)
    dp.callback_query.middleware(error_middleware)

    @dp.error()
    async def global_error_handler(event: ErrorEvent) -> bool:
        logger.exception(f"Update {event.update.update_id} failed: {event.exception}")
        return True

    dp.include_router(router)
    return dp


async def main() -> None:
    """Initialize and run the bot."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting Voucher Hub Bot...")

    engine = create_engine(settings)
    await init_db(engine)
    store = SqlRowStore(create_session_maker(engine))

    bot = Bot(
        token=settings.telegram_bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.MARKDOWN),
    )
    lock = build_lock(settings.redis_url, timeout=settings.lock_timeout)
    services = build_services(
        store,
        AiogramMessenger(bot),
        lock,
        admin_id=settings.admin_telegram_id,
        orders_channel_id=settings.orders_notify_channel_id,
        currency=settings.currency_symbol,
        broadcast_rate_limit=settings.broadcast_rate_limit,
    )
    sessions = SessionStore()
    machine = SessionStateMachine(
        FlowContext(services, sessions, BotConfig.from_settings(settings))
    )
    dp = build_dispatcher(settings, machine)

    try:
        bot_info = await bot.get_me()
        logger.info(f"Bot connected: @{bot_info.username} (ID: {bot_info.id})")
    except Exception as e:
        logger.error(f"Failed to connect to Telegram API: {e}")
        await bot.session.close()
        await close_db(engine)
        raise

    sweeper: asyncio.Task | None = None
    if settings.session_idle_ttl:
        sweeper = asyncio.create_task(
            evict_idle_sessions(sessions, settings.session_idle_ttl)
        )
        logger.info(f"Idle sessions expire after {settings.session_idle_ttl}s")

    try:
        logger.info("Starting polling...")
        await dp.start_polling(
            bot, allowed_updates=dp.resolve_used_update_types()
        )
    finally:
        if sweeper:
            sweeper.cancel()
        await bot.session.close()
        await close_db(engine)
        logger.info("Graceful shutdown complete")


def run() -> None:
    """Console entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (KeyboardInterrupt)")
    except Exception as e:
        logger.exception(f"Bot crashed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
