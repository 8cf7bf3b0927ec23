"""
Repository ports - abstract data access capabilities

The order workflow programs against these interfaces; the psycopg2
repositories in this package implement them, and tests swap in
in-memory versions.
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence
from uuid import UUID

from orders_service.domain.customer import Customer
from orders_service.domain.order import Order, OrderLineItem
from orders_service.domain.product import Product, QuantityUpdate


class CustomerLookup(ABC):
    """Read access to customers"""

    @abstractmethod
    def find_by_id(self, customer_id: UUID) -> Optional[Customer]:
        """Return the customer or None if it does not exist"""
        ...


class ProductLookup(ABC):
    """Read access to products plus the stock update used after ordering"""

    @abstractmethod
    def find_all_by_id(self, product_ids: Iterable[UUID]) -> List[Product]:
        """
        Return the products whose IDs are in ``product_ids``.

        Missing IDs are simply absent from the result.
        """
        ...

    @abstractmethod
    def update_quantities(self, updates: Sequence[QuantityUpdate]) -> None:
        """
        Set new stock levels.

        Raises:
            StockConflictError: a product's stored quantity no longer equals
                its ``expected_quantity``
        """
        ...


class OrderStore(ABC):
    """Order persistence"""

    @abstractmethod
    def create(self, customer: Customer, items: Sequence[OrderLineItem]) -> Order:
        """Persist an order with its line items and return it with IDs and timestamps"""
        ...

    @abstractmethod
    def find_by_id(self, order_id: UUID) -> Optional[Order]:
        """Return the order with its line items or None if not found"""
        ...
