"""
Inventory allocator.

Reserves voucher codes from a category pool. Every pool mutation runs inside
the category's critical section and re-reads the row first, so two approvals
on one category can never hand out overlapping codes.
"""

from dataclasses import dataclass

from loguru import logger

from app.models.category import Category
from app.repositories.category_repository import CategoryRepository
from app.utils.distributed_lock import KeyedLock
from app.utils.exceptions import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)


def category_lock_key(category_id: str) -> str:
    return f"category:{category_id}"


@dataclass(frozen=True)
class ReservedCodes:
    """Codes taken from a pool, oldest first."""

    category_id: str
    codes: tuple[str, ...]
    remaining: int


class InventoryAllocator:
    """Single writer for category code pools."""

    def __init__(self, category_repo: CategoryRepository, lock: KeyedLock) -> None:
        """
        Initialize allocator.

        Args:
            category_repo: Category repository
            lock: Keyed lock shared with every other pool writer
        """
        self.category_repo = category_repo
        self.lock = lock

    async def _load(self, category_id: str) -> Category:
        category = await self.category_repo.get(category_id)
        if category is None:
            raise NotFoundError(f"Category {category_id} not found")
        return category

    async def _commit_pool(self, category: Category) -> None:
        if not await self.category_repo.save_pool(category):
            raise NotFoundError(f"Category {category.category_id} vanished")

    async def reserve(self, category_id: str, quantity: int) -> ReservedCodes:
        """
        Take the first ``quantity`` codes out of the pool.

        Args:
            category_id: Category ID
            quantity: Number of codes (> 0)

        Returns:
            ReservedCodes

        Raises:
            ValidationError: quantity <= 0
            NotFoundError: category missing
            InsufficientStockError: pool smaller than quantity
            StoreError: pool write failed (nothing reserved)
        """
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")

        async with self.lock.lock(category_lock_key(category_id)):
            category = await self._load(category_id)
            if quantity > category.pool_size:
                raise InsufficientStockError(
                    category_id, quantity, category.pool_size
                )

            taken = category.code_pool[:quantity]
            updated = category.with_pool(category.code_pool[quantity:])
            await self._commit_pool(updated)

        logger.info(
            f"Reserved {quantity} codes from {category_id}, "
            f"{updated.pool_size} left"
        )
        return ReservedCodes(
            category_id=category_id, codes=taken, remaining=updated.pool_size
        )

    async def append(self, category_id: str, codes: list[str]) -> Category:
        """Append codes to the end of the pool."""
        async with self.lock.lock(category_lock_key(category_id)):
            category = await self._load(category_id)
            updated = category.with_pool(category.code_pool + tuple(codes))
            await self._commit_pool(updated)
        return updated

    async def remove(self, category_id: str, code: str) -> bool:
        """
        Remove the first exact occurrence of code.

        Returns:
            True if the code was in the pool
        """
        async with self.lock.lock(category_lock_key(category_id)):
            category = await self._load(category_id)
            if code not in category.code_pool:
                return False
            pool = list(category.code_pool)
            pool.remove(code)
            await self._commit_pool(category.with_pool(pool))
        return True

