"""
Pytest configuration and shared fixtures.

Services and flows run against the in-memory row store, a recording
messenger and in-process locks.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config.database import create_session_maker
from app.models.tables import metadata
from app.repositories.row_store import InMemoryRowStore
from app.repositories.sql_row_store import SqlRowStore
from app.services.container import ServiceContainer, build_services
from app.utils.distributed_lock import InProcessLock
from bot.context import BotConfig, FlowContext
from bot.machine import SessionStateMachine
from bot.storage.session_store import SessionStore
from tests.helpers.bot_test_client import BotTestClient, RecordingMessenger

ADMIN_ID = "900000001"
ORDERS_CHANNEL = "@orders_test"

# ==================== PYTEST CONFIGURATION ====================


def pytest_configure(config: Any) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "critical: marks tests as critical")
    config.addinivalue_line("markers", "integration: marks integration tests")
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


# ==================== STORE FIXTURES ====================


@pytest.fixture
def store() -> InMemoryRowStore:
    return InMemoryRowStore()


@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with the row-store tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_store(sqlite_engine: AsyncEngine) -> SqlRowStore:
    return SqlRowStore(create_session_maker(sqlite_engine))


# ==================== SERVICE FIXTURES ====================


@pytest.fixture
def messenger() -> RecordingMessenger:
    return RecordingMessenger()


@pytest.fixture
def lock() -> InProcessLock:
    return InProcessLock()


@pytest.fixture
def services(
    store: InMemoryRowStore,
    messenger: RecordingMessenger,
    lock: InProcessLock,
) -> ServiceContainer:
    return build_services(
        store,
        messenger,
        lock,
        admin_id=ADMIN_ID,
        orders_channel_id=ORDERS_CHANNEL,
        broadcast_rate_limit=1000,
    )


# ==================== BOT FIXTURES ====================


@pytest.fixture
def bot_config() -> BotConfig:
    return BotConfig(
        admin_id=ADMIN_ID,
        required_channel="@voucher_main",
        required_channel_url="https://t.me/voucher_main",
        orders_channel_url="https://t.me/orders_test",
        payment_qr_url="https://example.com/qr.jpg",
    )


@pytest.fixture
def sessions() -> SessionStore:
    return SessionStore()


@pytest.fixture
def flow_context(
    services: ServiceContainer,
    sessions: SessionStore,
    bot_config: BotConfig,
) -> FlowContext:
    return FlowContext(services, sessions, bot_config)


@pytest.fixture
def machine(flow_context: FlowContext) -> SessionStateMachine:
    return SessionStateMachine(flow_context)


@pytest.fixture
def client(
    machine: SessionStateMachine, messenger: RecordingMessenger
) -> BotTestClient:
    return BotTestClient(machine, messenger)
