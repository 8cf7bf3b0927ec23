"""
Customer Repository - Data Access Layer for Customers
"""
from typing import Optional
from uuid import UUID

from orders_service.domain.customer import Customer
from orders_service.repositories.base import CustomerLookup
from orders_service.repositories.postgres import PostgresRepository


class CustomerRepository(PostgresRepository, CustomerLookup):
    """Repository for Customer data access"""

    def find_by_id(self, customer_id: UUID) -> Optional[Customer]:
        """
        Find customer by ID

        Args:
            customer_id: Customer ID

        Returns:
            Customer or None if not found
        """
        with self._cursor() as cursor:
            cursor.execute("""
                SELECT id, name, email, created_at, updated_at
                FROM customers
                WHERE id = %s
            """, (customer_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return Customer(**row)
