"""
Catalog service.

Admin-side management of voucher categories, prices and stock.
"""

from decimal import Decimal

from loguru import logger

from app.models.category import Category
from app.models.enums import PriceTier
from app.repositories.category_repository import CategoryRepository
from app.services.inventory_allocator import InventoryAllocator, category_lock_key
from app.utils.exceptions import NotFoundError, ValidationError
from app.utils.money import round2


def category_id_for(face_value: int) -> str:
    return f"cat_{face_value}"


class CatalogService:
    """Reads and writes voucher categories."""

    def __init__(
        self,
        category_repo: CategoryRepository,
        allocator: InventoryAllocator,
    ) -> None:
        """
        Initialize catalog service.

        Args:
            category_repo: Category repository
            allocator: Pool writer (owns the category critical sections)
        """
        self.category_repo = category_repo
        self.allocator = allocator

    async def list_categories(self) -> list[Category]:
        return await self.category_repo.find_all()

    async def find_category(self, category_id: str) -> Category | None:
        return await self.category_repo.get(category_id)

    async def get_category(self, category_id: str) -> Category:
        """
        Get category.

        Raises:
            NotFoundError: category missing
        """
        category = await self.category_repo.get(category_id)
        if category is None:
            raise NotFoundError(f"Category {category_id} not found")
        return category

    async def add_category(self, face_value: int, base_price: Decimal) -> Category:
        """
        Create a category with every tier at the base price and no stock.

        Args:
            face_value: Voucher face value (positive integer)
            base_price: Default selling price per code

        Returns:
            Created category

        Raises:
            ValidationError: bad value/price or duplicate category
        """
        if face_value <= 0:
            raise ValidationError("Face value must be a positive number")
        if base_price <= 0:
            raise ValidationError("Price must be greater than zero")

        category_id = category_id_for(face_value)
        async with self.allocator.lock.lock(category_lock_key(category_id)):
            if await self.category_repo.get(category_id) is not None:
                raise ValidationError(f"Category {category_id} already exists")

            price = round2(base_price)
            category = Category(
                category_id=category_id,
                face_value=face_value,
                base_price=price,
                tier_prices={tier: price for tier in PriceTier},
            )
            await self.category_repo.create(category)

        logger.info(f"Category created: {category_id} at {price}")
        return category

    async def set_tier_price(
        self, category_id: str, tier: PriceTier, price: Decimal
    ) -> Category:
        """
        Set the unit price of one tier.

        Raises:
            ValidationError: price <= 0
            NotFoundError: category missing
        """
        if price <= 0:
            raise ValidationError("Price must be greater than zero")

        category = (await self.get_category(category_id)).with_tier_price(
            tier, round2(price)
        )
        if not await self.category_repo.save_tier_price(category, tier):
            raise NotFoundError(f"Category {category_id} not found")

        logger.info(f"Price set: {category_id} {tier} = {price}")
        return category

    async def append_codes(self, category_id: str, codes: list[str]) -> Category:
        """
        Append codes to the pool; duplicates are kept as given.

        Raises:
            ValidationError: no codes
            NotFoundError: category missing
        """
        if not codes:
            raise ValidationError("No codes given")

        category = await self.allocator.append(category_id, codes)
        logger.info(
            f"Stock added: {len(codes)} codes to {category_id}, "
            f"now {category.stock_count}"
        )
        return category

    async def remove_code(self, code: str) -> str:
        """
        Remove the first exact match of code across all categories.

        Returns:
            ID of the category the code was removed from

        Raises:
            NotFoundError: code in no pool
        """
        code = code.strip()
        for category in await self.category_repo.find_all():
            if code not in category.code_pool:
                continue
            if await self.allocator.remove(category.category_id, code):
                logger.info(f"Code removed from {category.category_id}")
                return category.category_id

        raise NotFoundError("Code not found in any category")

    async def delete_category(self, category_id: str) -> None:
        """
        Hard-delete a category and its unused codes.

        Raises:
            NotFoundError: category missing
        """
        async with self.allocator.lock.lock(category_lock_key(category_id)):
            if not await self.category_repo.delete(category_id):
                raise NotFoundError(f"Category {category_id} not found")
        logger.warning(f"Category deleted: {category_id}")


def parse_codes(raw: str) -> list[str]:
    """Split admin input into codes, one per line."""
    return [line.strip() for line in raw.splitlines() if line.strip()]
