"""Category repository."""

from app.models.category import Category
from app.models.enums import PriceTier, Table
from app.repositories.base import BaseRepository
from app.repositories.row_store import RowStore
from app.utils.money import format_money


class CategoryRepository(BaseRepository[Category]):
    """Repository for the ``Categories`` table."""

    def __init__(self, store: RowStore) -> None:
        super().__init__(store, Table.CATEGORIES, "CategoryID", Category.from_row)

    async def save_pool(self, category: Category) -> bool:
        """Persist pool and stock count in one row update."""
        return await self.update(category.category_id, category.pool_patch())

    async def save_tier_price(self, category: Category, tier: PriceTier) -> bool:
        price = category.tier_price(tier)
        return await self.update(
            category.category_id,
            {tier.value: format_money(price) if price is not None else ""},
        )
