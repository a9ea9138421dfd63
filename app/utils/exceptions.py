"""
Domain exceptions.

Every failure a handler can recover from derives from VoucherHubError.
"""


class VoucherHubError(Exception):
    """Base class for recoverable domain errors."""


class ValidationError(VoucherHubError):
    """Malformed user input (captcha answer, quantity, UTR, IDs)."""


class NotFoundError(VoucherHubError):
    """Category, order, user or code does not exist."""


class InsufficientStockError(VoucherHubError):
    """Requested quantity exceeds the category pool."""

    def __init__(self, category_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {category_id}: "
            f"requested {requested}, available {available}"
        )
        self.category_id = category_id
        self.requested = requested
        self.available = available


class NotPricedError(VoucherHubError):
    """No unit price resolvable for a category/quantity."""


class PermissionDeniedError(VoucherHubError):
    """Non-admin attempted an admin action."""


class StoreError(VoucherHubError):
    """Row-store or messenger I/O failure."""


class InventoryInconsistencyError(StoreError):
    """
    Pool write committed but the order write failed.

    Requires manual reconciliation; never reported to the user as success.
    """

    def __init__(self, order_id: str, category_id: str, codes: tuple[str, ...]) -> None:
        super().__init__(
            f"Order {order_id}: {len(codes)} codes left {category_id} "
            f"but the order row was not updated"
        )
        self.order_id = order_id
        self.category_id = category_id
        self.codes = codes
