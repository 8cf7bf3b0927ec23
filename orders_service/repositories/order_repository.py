"""
Order Repository - Data Access Layer for Orders

Writes orders with their line items (table orders_products) and reads
them back as Order domain models.
"""
import uuid
from typing import Optional, Sequence
from uuid import UUID

from orders_service.domain.customer import Customer
from orders_service.domain.order import Order, OrderLineItem
from orders_service.repositories.base import OrderStore
from orders_service.repositories.postgres import PostgresRepository


class OrderRepository(PostgresRepository, OrderStore):
    """
    Repository for Order data access

    All SQL queries for orders are centralized here.
    Returns Order domain models with customer and items.
    """

    def create(self, customer: Customer, items: Sequence[OrderLineItem]) -> Order:
        """
        Insert an order and its line items

        Line items get clock_timestamp() as creation time so reading the
        order back returns them in insertion order.

        Args:
            customer: Customer placing the order
            items: Line items with captured price and quantity

        Returns:
            The persisted Order with IDs and timestamps
        """
        with self._cursor(write=True) as cursor:
            cursor.execute("""
                INSERT INTO orders (id, customer_id)
                VALUES (%s, %s)
                RETURNING id, created_at, updated_at
            """, (uuid.uuid4(), customer.id))
            order_row = cursor.fetchone()

            persisted_items = []
            for item in items:
                cursor.execute("""
                    INSERT INTO orders_products (
                        id, order_id, product_id, price, quantity,
                        created_at, updated_at
                    ) VALUES (
                        %s, %s, %s, %s, %s, clock_timestamp(), clock_timestamp()
                    )
                    RETURNING id, order_id, product_id, price, quantity, created_at, updated_at
                """, (uuid.uuid4(), order_row['id'], item.product_id, item.price, item.quantity))
                persisted_items.append(OrderLineItem(**cursor.fetchone()))

            return Order(
                id=order_row['id'],
                customer=customer,
                items=persisted_items,
                created_at=order_row['created_at'],
                updated_at=order_row['updated_at']
            )

    def find_by_id(self, order_id: UUID) -> Optional[Order]:
        """
        Find order by ID with customer and items

        Args:
            order_id: Order ID

        Returns:
            Order with all related data or None if not found
        """
        with self._cursor() as cursor:
            cursor.execute("""
                SELECT
                    o.id, o.created_at, o.updated_at,
                    c.id as customer_id,
                    c.name as customer_name,
                    c.email as customer_email,
                    c.created_at as customer_created_at,
                    c.updated_at as customer_updated_at
                FROM orders o
                JOIN customers c ON o.customer_id = c.id
                WHERE o.id = %s
            """, (order_id,))

            row = cursor.fetchone()
            if not row:
                return None

            cursor.execute("""
                SELECT id, order_id, product_id, price, quantity, created_at, updated_at
                FROM orders_products
                WHERE order_id = %s
                ORDER BY created_at, id
            """, (order_id,))

            items = cursor.fetchall()

            customer = Customer(
                id=row['customer_id'],
                name=row['customer_name'],
                email=row['customer_email'],
                created_at=row['customer_created_at'],
                updated_at=row['customer_updated_at']
            )

            return Order(
                id=row['id'],
                customer=customer,
                items=[OrderLineItem(**item) for item in items],
                created_at=row['created_at'],
                updated_at=row['updated_at']
            )
