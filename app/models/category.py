"""Voucher category record."""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Mapping, Sequence

from app.models.enums import PriceTier
from app.utils.money import format_money, parse_money


def split_codes(raw: str | None) -> tuple[str, ...]:
    """Split a newline-joined code cell, dropping blank lines."""
    if not raw:
        return ()
    return tuple(code.strip() for code in raw.split("\n") if code.strip())


def join_codes(codes: Sequence[str]) -> str:
    return "\n".join(codes)


@dataclass(frozen=True)
class Category:
    """
    Purchasable voucher denomination.

    ``code_pool`` is ordered oldest first; ``stock_count`` mirrors its
    length after every committed mutation.
    """

    category_id: str
    face_value: int
    base_price: Decimal | None = None
    tier_prices: dict[PriceTier, Decimal | None] = field(default_factory=dict)
    stock_count: int = 0
    code_pool: tuple[str, ...] = ()

    @property
    def pool_size(self) -> int:
        return len(self.code_pool)

    def tier_price(self, tier: PriceTier) -> Decimal | None:
        return self.tier_prices.get(tier)

    def with_pool(self, codes: Sequence[str]) -> "Category":
        """Copy with a new pool and a matching stock count."""
        pool = tuple(codes)
        return replace(self, code_pool=pool, stock_count=len(pool))

    def with_tier_price(self, tier: PriceTier, price: Decimal) -> "Category":
        prices = dict(self.tier_prices)
        prices[tier] = price
        return replace(self, tier_prices=prices)

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> "Category":
        pool = split_codes(row.get("VoucherCodes"))
        try:
            stock = int(row.get("Stock", ""))
        except ValueError:
            stock = len(pool)
        try:
            face_value = int(row.get("Value", "0"))
        except ValueError:
            face_value = 0
        return cls(
            category_id=row["CategoryID"],
            face_value=face_value,
            base_price=parse_money(row.get("Price")),
            tier_prices={tier: parse_money(row.get(tier)) for tier in PriceTier},
            stock_count=stock,
            code_pool=pool,
        )

    def to_values(self) -> list[str]:
        """Values in ``Categories`` header order."""

        def money(value: Decimal | None) -> str:
            return format_money(value) if value is not None else ""

        return [
            self.category_id,
            str(self.face_value),
            money(self.base_price),
            money(self.tier_price(PriceTier.TIER_1)),
            money(self.tier_price(PriceTier.TIER_5)),
            money(self.tier_price(PriceTier.TIER_10)),
            money(self.tier_price(PriceTier.TIER_20_PLUS)),
            str(self.stock_count),
            join_codes(self.code_pool),
        ]

    def pool_patch(self) -> dict[str, str]:
        """Row patch that persists the pool together with its stock count."""
        return {
            "Stock": str(len(self.code_pool)),
            "VoucherCodes": join_codes(self.code_pool),
        }
