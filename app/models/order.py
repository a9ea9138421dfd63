"""Order record."""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Mapping

from app.models.category import join_codes, split_codes
from app.models.enums import OrderStatus
from app.utils.money import format_money, parse_money


@dataclass(frozen=True)
class Order:
    """
    One purchase.

    ``delivered_codes`` is non-empty iff the order is Successful.
    """

    order_id: str
    user_id: str
    user_name: str
    category_id: str
    quantity: int
    total_amount: Decimal
    utr: str
    status: OrderStatus = OrderStatus.PENDING
    delivered_codes: tuple[str, ...] = ()
    created_at: str = ""

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING

    @property
    def is_successful(self) -> bool:
        return self.status == OrderStatus.SUCCESSFUL

    def delivered(self, codes: tuple[str, ...]) -> "Order":
        return replace(self, status=OrderStatus.SUCCESSFUL, delivered_codes=codes)

    def declined(self) -> "Order":
        return replace(self, status=OrderStatus.DECLINED)

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> "Order":
        try:
            quantity = int(row.get("Quantity", "0"))
        except ValueError:
            quantity = 0
        raw_status = row.get("Status", OrderStatus.PENDING)
        status = next(
            (s for s in OrderStatus if s.value == raw_status),
            OrderStatus.PENDING,
        )
        return cls(
            order_id=row["OrderID"],
            user_id=row.get("UserID", ""),
            user_name=row.get("UserName", ""),
            category_id=row.get("CategoryID", ""),
            quantity=quantity,
            total_amount=parse_money(row.get("Total")) or Decimal("0.00"),
            utr=row.get("UTR", ""),
            status=status,
            delivered_codes=split_codes(row.get("VoucherCodeDelivered")),
            created_at=row.get("CreatedAt", ""),
        )

    def to_values(self) -> list[str]:
        """Values in ``Orders`` header order."""
        return [
            self.order_id,
            self.user_id,
            self.user_name,
            self.category_id,
            str(self.quantity),
            format_money(self.total_amount),
            self.utr,
            str(self.status),
            join_codes(self.delivered_codes),
            self.created_at,
        ]

    def decision_patch(self) -> dict[str, str]:
        """Row patch for the admin decision columns."""
        return {
            "Status": str(self.status),
            "VoucherCodeDelivered": join_codes(self.delivered_codes),
        }
