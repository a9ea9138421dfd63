"""
Unit tests for CatalogService.

Admin-side category, price and stock management.
"""

from decimal import Decimal

import pytest

from app.models.enums import PriceTier
from app.services.catalog_service import category_id_for, parse_codes
from app.utils.exceptions import NotFoundError, ValidationError
from tests.helpers.bot_test_client import seed_category


def test_category_id_for():
    assert category_id_for(500) == "cat_500"


def test_parse_codes_skips_blank_lines():
    assert parse_codes("AAA\n\n  BBB \n\t\nCCC\n") == ["AAA", "BBB", "CCC"]


@pytest.mark.asyncio
async def test_add_category_defaults(services):
    """
    GIVEN no categories
    WHEN a 500 category is added at 45.5
    THEN every tier starts at the base price with an empty pool
    """
    category = await services.catalog.add_category(500, Decimal("45.5"))

    assert category.category_id == "cat_500"
    assert category.base_price == Decimal("45.50")
    assert all(
        category.tier_price(tier) == Decimal("45.50") for tier in PriceTier
    )
    assert category.stock_count == 0
    assert category.code_pool == ()

    stored = await services.catalog.get_category("cat_500")
    assert stored.base_price == Decimal("45.50")
    assert stored.tier_price(PriceTier.TIER_20_PLUS) == Decimal("45.50")


@pytest.mark.asyncio
async def test_add_duplicate_category_rejected(services):
    await services.catalog.add_category(500, Decimal("45"))
    with pytest.raises(ValidationError, match="already exists"):
        await services.catalog.add_category(500, Decimal("40"))
    assert len(await services.catalog.list_categories()) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("value,price", [(0, "10"), (-5, "10"), (500, "0"), (500, "-1")])
async def test_add_category_validation(services, value, price):
    with pytest.raises(ValidationError):
        await services.catalog.add_category(value, Decimal(price))


@pytest.mark.asyncio
async def test_set_tier_price(services, store):
    await seed_category(store)

    await services.catalog.set_tier_price("cat_500", PriceTier.TIER_10, Decimal("39.999"))

    category = await services.catalog.get_category("cat_500")
    assert category.tier_price(PriceTier.TIER_10) == Decimal("40.00")
    assert category.tier_price(PriceTier.TIER_5) == Decimal("50.00")


@pytest.mark.asyncio
async def test_set_tier_price_rejects_non_positive(services, store):
    await seed_category(store)
    with pytest.raises(ValidationError):
        await services.catalog.set_tier_price("cat_500", PriceTier.TIER_1, Decimal("0"))


@pytest.mark.asyncio
async def test_set_tier_price_unknown_category(services):
    with pytest.raises(NotFoundError):
        await services.catalog.set_tier_price("cat_9", PriceTier.TIER_1, Decimal("5"))


@pytest.mark.asyncio
async def test_append_codes_grows_stock(services, store):
    await seed_category(store, codes=("A",))

    category = await services.catalog.append_codes("cat_500", ["B", "C"])

    assert category.stock_count == 3
    assert category.code_pool == ("A", "B", "C")


@pytest.mark.asyncio
async def test_append_no_codes_rejected(services, store):
    await seed_category(store)
    with pytest.raises(ValidationError):
        await services.catalog.append_codes("cat_500", [])


@pytest.mark.asyncio
async def test_remove_code_scans_all_categories(services, store):
    await seed_category(store, codes=("A", "B"))
    await seed_category(store, "cat_1000", 1000, codes=("X", "Y"))

    owner = await services.catalog.remove_code(" Y ")

    assert owner == "cat_1000"
    category = await services.catalog.get_category("cat_1000")
    assert category.code_pool == ("X",)
    assert category.stock_count == 1


@pytest.mark.asyncio
async def test_remove_unknown_code(services, store):
    await seed_category(store, codes=("A",))
    with pytest.raises(NotFoundError, match="Code not found"):
        await services.catalog.remove_code("NOPE")


@pytest.mark.asyncio
async def test_delete_category(services, store):
    await seed_category(store, codes=("A",))

    await services.catalog.delete_category("cat_500")

    assert await services.catalog.find_category("cat_500") is None
    with pytest.raises(NotFoundError):
        await services.catalog.delete_category("cat_500")
