"""
Order Service
Creates orders: validates the customer and requested stock, captures
line prices, writes the order and decrements inventory.
"""
import logging
from typing import Dict, List, Sequence
from uuid import UUID

from orders_service.core.exceptions import (
    CustomerNotFound,
    InsufficientStockOrInvalidQuantity,
    InventoryUpdateError,
    OrderPersistenceError,
    ProductNotFound,
)
from orders_service.domain.order import Order, OrderLineItem, OrderLineRequest
from orders_service.domain.product import Product, QuantityUpdate
from orders_service.repositories.base import CustomerLookup, OrderStore, ProductLookup

logger = logging.getLogger(__name__)


class CreateOrderService:
    """
    Service for placing orders

    Steps:
    1. Validate customer
    2. Validate that every product exists (duplicate lines are merged first)
    3. Validate requested quantities, then stock for every line (all or nothing)
    4. Build line items with the current product price
    5. Persist the order
    6. Decrement inventory

    Failures in steps 1-3 happen before anything is written. Steps 5 and 6
    only commit together when the repositories share a transaction
    (see core.database.transaction).
    """

    def __init__(
        self,
        customers: CustomerLookup,
        products: ProductLookup,
        orders: OrderStore
    ):
        self.customers = customers
        self.products = products
        self.orders = orders

    @staticmethod
    def merge_lines(lines: Sequence[OrderLineRequest]) -> Dict[UUID, int]:
        """
        Sum requested quantities per product

        Keeps the position of each product's first appearance.
        """
        quantities: Dict[UUID, int] = {}
        for line in lines:
            quantities[line.product_id] = quantities.get(line.product_id, 0) + line.quantity

        return quantities

    @staticmethod
    def validate_quantities(lines: Sequence[OrderLineRequest]) -> None:
        """
        Reject an empty request or any line asking for zero or fewer units

        Raises:
            InsufficientStockOrInvalidQuantity
        """
        if not lines:
            logger.warning("Order rejected: no products requested")
            raise InsufficientStockOrInvalidQuantity(
                "Cannot create an order without products"
            )

        for line in lines:
            if line.quantity <= 0:
                logger.warning(f"Order rejected: invalid quantity {line.quantity} for product {line.product_id}")
                raise InsufficientStockOrInvalidQuantity(
                    f"Invalid quantity {line.quantity} for product {line.product_id}",
                    product_id=line.product_id
                )

    def execute(self, customer_id: UUID, lines: Sequence[OrderLineRequest]) -> Order:
        """
        Create an order

        Args:
            customer_id: Customer placing the order
            lines: Requested products and quantities

        Returns:
            The persisted Order

        Raises:
            CustomerNotFound, ProductNotFound, InsufficientStockOrInvalidQuantity,
            OrderPersistenceError, InventoryUpdateError
        """
        logger.info(f"Creating order for customer {customer_id} with {len(lines)} line(s)")

        # 1. Customer
        customer = self.customers.find_by_id(customer_id)
        if customer is None:
            logger.warning(f"Order rejected: customer {customer_id} not found")
            raise CustomerNotFound(customer_id)

        requested = self.merge_lines(lines)

        # 2. Products
        found = self.products.find_all_by_id(list(requested))
        by_id: Dict[UUID, Product] = {product.id: product for product in found}

        missing = [product_id for product_id in requested if product_id not in by_id]
        if missing:
            logger.warning(f"Order rejected: products not found {missing}")
            raise ProductNotFound(missing)

        # 3. Quantities and stock
        self.validate_quantities(lines)

        for product_id, quantity in requested.items():
            product = by_id[product_id]
            if not product.has_stock_for(quantity):
                logger.warning(
                    f"Order rejected: product {product_id} has {product.quantity} "
                    f"in stock, {quantity} requested"
                )
                raise InsufficientStockOrInvalidQuantity(
                    f"Cannot create an order with unavailable quantity for product "
                    f"{product_id}: {quantity} requested, {product.quantity} in stock",
                    product_id=product_id
                )

        # 4. Line items, priced at the current product price
        items: List[OrderLineItem] = [
            OrderLineItem(
                product_id=product_id,
                price=by_id[product_id].price,
                quantity=quantity
            )
            for product_id, quantity in requested.items()
        ]

        # 5. Persist
        try:
            order = self.orders.create(customer, items)
        except Exception as e:
            logger.error(f"Error persisting order for customer {customer_id}: {e}")
            raise OrderPersistenceError(f"Could not save order: {e}") from e

        # 6. Inventory
        updates = [
            QuantityUpdate(
                product_id=product_id,
                quantity=by_id[product_id].quantity - quantity,
                expected_quantity=by_id[product_id].quantity
            )
            for product_id, quantity in requested.items()
        ]

        try:
            self.products.update_quantities(updates)
        except Exception as e:
            logger.error(f"Error updating inventory for order {order.id}: {e}")
            raise InventoryUpdateError(
                f"Order {order.id} was created but inventory could not be updated: {e}"
            ) from e

        logger.info(
            f"Order {order.id} created: {order.item_count} item(s), "
            f"{order.total_quantity} unit(s), total {order.total}"
        )
        return order
