"""
Keyed critical sections.

Serializes read-modify-write sequences against the row store, which has no
native transactions. In-process asyncio locks cover a single bot instance;
the Redis lock covers several instances sharing one store.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Protocol

import redis.asyncio as redis
from loguru import logger
from redis.exceptions import LockError, RedisError

from app.utils.exceptions import StoreError


class KeyedLock(Protocol):
    """Provides one mutually exclusive section per key."""

    def lock(self, key: str) -> AbstractAsyncContextManager[None]:
        """Return an async context manager holding the section for key."""
        ...


class InProcessLock:
    """
    One asyncio.Lock per key.

    Locks are created lazily and dropped once nobody holds or waits on them.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @asynccontextmanager
    async def lock(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                logger.debug(f"Lock acquired: {key}")
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                self._locks.pop(key, None)
            logger.debug(f"Lock released: {key}")

    def is_locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return bool(lock and lock.locked())


class RedisLock:
    """
    Redis-backed lock for multi-instance deployments.

    Uses SET NX with expiry through redis-py's Lock so a crashed holder
    cannot block a category forever.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        timeout: int = 30,
        blocking_timeout: float = 10.0,
    ) -> None:
        """
        Initialize Redis lock.

        Args:
            redis_client: Redis client
            timeout: Lock expiry in seconds
            blocking_timeout: Max time to wait for the lock
        """
        self.redis_client = redis_client
        self.timeout = timeout
        self.blocking_timeout = blocking_timeout

    @asynccontextmanager
    async def lock(self, key: str) -> AsyncIterator[None]:
        redis_lock = self.redis_client.lock(
            f"lock:{key}",
            timeout=self.timeout,
            blocking_timeout=self.blocking_timeout,
        )
        try:
            acquired = await redis_lock.acquire()
        except RedisError as e:
            raise StoreError(f"Redis lock failed for {key}: {e}") from e
        if not acquired:
            logger.warning(
                f"Distributed lock timeout: {key} "
                f"(waited {self.blocking_timeout}s)"
            )
            raise StoreError(f"Could not acquire lock {key}")

        logger.debug(f"Distributed lock acquired: {key}")
        try:
            yield
        finally:
            try:
                await redis_lock.release()
                logger.debug(f"Distributed lock released: {key}")
            except LockError as e:
                # Expired while held; the next holder may already own it.
                logger.error(f"Distributed lock {key} expired before release: {e}")


def build_lock(redis_url: str | None, timeout: int = 30) -> KeyedLock:
    """
    Pick the lock implementation for this deployment.

    Args:
        redis_url: Redis URL, or None for a single instance
        timeout: Redis lock expiry in seconds

    Returns:
        KeyedLock
    """
    if redis_url:
        logger.info("Using Redis locks for category inventory")
        return RedisLock(redis.from_url(redis_url), timeout=timeout)
    logger.info("Using in-process locks for category inventory")
    return InProcessLock()
