"""
In-memory repositories for tests

They implement the repository ports without a database and record what
the order service asked of them.
"""
import uuid
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from orders_service.core.exceptions import StockConflictError
from orders_service.domain.customer import Customer
from orders_service.domain.order import Order, OrderLineItem
from orders_service.domain.product import Product, QuantityUpdate
from orders_service.repositories.base import CustomerLookup, OrderStore, ProductLookup


class InMemoryCustomerRepository(CustomerLookup):

    def __init__(self, customers: Iterable[Customer] = ()):
        self.customers: Dict[UUID, Customer] = {c.id: c for c in customers}
        self.lookups: List[UUID] = []

    def find_by_id(self, customer_id: UUID) -> Optional[Customer]:
        self.lookups.append(customer_id)
        return self.customers.get(customer_id)


class InMemoryProductRepository(ProductLookup):

    def __init__(self, products: Iterable[Product] = ()):
        self.products: Dict[UUID, Product] = {p.id: p for p in products}
        self.lookups: List[List[UUID]] = []
        self.updates: List[List[QuantityUpdate]] = []
        self.fail_updates_with: Optional[Exception] = None

    def find_all_by_id(self, product_ids: Iterable[UUID]) -> List[Product]:
        ids = list(product_ids)
        self.lookups.append(ids)
        return [self.products[pid].model_copy() for pid in ids if pid in self.products]

    def update_quantities(self, updates: Sequence[QuantityUpdate]) -> None:
        self.updates.append(list(updates))
        if self.fail_updates_with is not None:
            raise self.fail_updates_with

        conflicts = [
            u.product_id for u in updates
            if self.products[u.product_id].quantity != u.expected_quantity
        ]
        if conflicts:
            raise StockConflictError(conflicts)

        for update in updates:
            product = self.products[update.product_id]
            self.products[update.product_id] = product.model_copy(update={'quantity': update.quantity})

    def stock_of(self, product_id: UUID) -> int:
        return self.products[product_id].quantity


class InMemoryOrderRepository(OrderStore):

    def __init__(self):
        self.orders: Dict[UUID, Order] = {}
        self.fail_with: Optional[Exception] = None

    def create(self, customer: Customer, items: Sequence[OrderLineItem]) -> Order:
        if self.fail_with is not None:
            raise self.fail_with

        now = datetime.now(timezone.utc)
        order_id = uuid.uuid4()
        order = Order(
            id=order_id,
            customer=customer,
            items=[
                item.model_copy(update={'id': uuid.uuid4(), 'order_id': order_id, 'created_at': now})
                for item in items
            ],
            created_at=now,
            updated_at=now
        )
        self.orders[order.id] = order
        return order

    def find_by_id(self, order_id: UUID) -> Optional[Order]:
        return self.orders.get(order_id)
