"""
Pricing resolver.

Maps (category, quantity) to a unit price using tiered breakpoints.
"""

from decimal import Decimal

from app.models.category import Category
from app.models.enums import PriceTier
from app.utils.exceptions import NotPricedError, ValidationError
from app.utils.money import round2

# Highest breakpoint first
TIERS_DESCENDING = (
    PriceTier.TIER_20_PLUS,
    PriceTier.TIER_10,
    PriceTier.TIER_5,
    PriceTier.TIER_1,
)


def tier_for_quantity(quantity: int) -> PriceTier:
    """Highest tier whose breakpoint is <= quantity."""
    for tier in TIERS_DESCENDING:
        if quantity >= tier.threshold:
            return tier
    return PriceTier.TIER_1


class PricingResolver:
    """Resolves unit prices and totals for a category."""

    @staticmethod
    def _usable(price: Decimal | None) -> bool:
        return price is not None and price > 0

    def resolve_price(self, category: Category, quantity: int) -> Decimal:
        """
        Resolve unit price for quantity.

        Scans from the matching tier down to tier 1, then the base price.
        Unset or non-positive tiers are skipped.

        Args:
            category: Category
            quantity: Number of codes

        Returns:
            Unit price (2 decimal places)

        Raises:
            ValidationError: quantity <= 0
            NotPricedError: nothing resolvable
        """
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")

        start = TIERS_DESCENDING.index(tier_for_quantity(quantity))
        for tier in TIERS_DESCENDING[start:]:
            price = category.tier_price(tier)
            if self._usable(price):
                return round2(price)

        if self._usable(category.base_price):
            return round2(category.base_price)

        raise NotPricedError(
            f"No price configured for {category.category_id} at quantity {quantity}"
        )

    def total_cost(self, category: Category, quantity: int) -> Decimal:
        """round2(unit_price * quantity)."""
        return round2(self.resolve_price(category, quantity) * quantity)
