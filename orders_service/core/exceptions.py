"""
Order creation errors

Every failure of the order workflow is terminal for the current request.
The API layer translates these into HTTP responses using ``status_code``.
"""
from typing import Iterable, List, Optional
from uuid import UUID


class OrderCreationError(Exception):
    """Base class for everything CreateOrderService can raise"""

    kind = "order_creation_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class CustomerNotFound(OrderCreationError):
    """The requested customer does not exist"""

    kind = "customer_not_found"

    def __init__(self, customer_id: UUID):
        super().__init__(f"Cannot create an order for a non-existent customer: {customer_id}")
        self.customer_id = customer_id


class ProductNotFound(OrderCreationError):
    """One or more requested products do not exist"""

    kind = "product_not_found"

    def __init__(self, missing_ids: Iterable[UUID]):
        self.missing_ids: List[UUID] = list(missing_ids)
        ids = ", ".join(str(product_id) for product_id in self.missing_ids)
        super().__init__(f"Cannot create an order with non-existent products: {ids}")


class InsufficientStockOrInvalidQuantity(OrderCreationError):
    """A line would drive stock negative, or asks for zero (or fewer) units"""

    kind = "insufficient_stock_or_invalid_quantity"

    def __init__(self, message: str, product_id: Optional[UUID] = None):
        super().__init__(message)
        self.product_id = product_id


class OrderPersistenceError(OrderCreationError):
    """The order store failed; inventory has not been touched"""

    kind = "order_persistence_error"
    status_code = 500


class InventoryUpdateError(OrderCreationError):
    """The order was written but the stock decrement failed"""

    kind = "inventory_update_error"
    status_code = 500


class StockConflictError(Exception):
    """
    Raised by a guarded stock update when the stored quantity no longer
    matches the quantity read during validation.
    """

    def __init__(self, product_ids: Iterable[UUID]):
        self.product_ids: List[UUID] = list(product_ids)
        ids = ", ".join(str(product_id) for product_id in self.product_ids)
        super().__init__(f"Stock changed concurrently for products: {ids}")
