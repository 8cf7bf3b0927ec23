"""
Product Repository - Data Access Layer for Products

Handles the product queries the order workflow needs and returns
Product domain models.
"""
import logging
from typing import Iterable, List, Sequence
from uuid import UUID

from orders_service.core.exceptions import StockConflictError
from orders_service.domain.product import Product, QuantityUpdate
from orders_service.repositories.base import ProductLookup
from orders_service.repositories.postgres import PostgresRepository

logger = logging.getLogger(__name__)


class ProductRepository(PostgresRepository, ProductLookup):
    """
    Repository for Product data access

    Args:
        conn: Connection to run on (optional, see PostgresRepository)
        lock_rows: Lock fetched rows with FOR UPDATE until the surrounding
            transaction ends. Only meaningful together with ``conn``.
    """

    def __init__(self, conn=None, lock_rows: bool = False):
        super().__init__(conn)
        self.lock_rows = lock_rows

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        """Helper method to map database row to Product domain model"""
        return Product(
            id=row['id'],
            name=row['name'],
            price=row['price'],
            quantity=row['quantity'],
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at')
        )

    def find_all_by_id(self, product_ids: Iterable[UUID]) -> List[Product]:
        """
        Find every product whose ID is in ``product_ids``

        Args:
            product_ids: Product IDs to look up

        Returns:
            List of found products, ordered by name. Missing IDs are absent.
        """
        ids = list(product_ids)
        if not ids:
            return []

        lock_clause = "FOR UPDATE" if self.lock_rows else ""

        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT id, name, price, quantity, created_at, updated_at
                FROM products
                WHERE id = ANY(%s)
                ORDER BY name
                {lock_clause}
            """, (ids,))

            rows = cursor.fetchall()
            return [self._map_row_to_product(row) for row in rows]

    def update_quantities(self, updates: Sequence[QuantityUpdate]) -> None:
        """
        Set new stock levels, guarded by the quantity seen at validation time

        Each row is only written while its stored quantity still equals
        ``expected_quantity``.

        Args:
            updates: New stock levels

        Raises:
            StockConflictError: One or more products changed in between
        """
        if not updates:
            return

        conflicts = []

        with self._cursor(write=True) as cursor:
            for update in updates:
                cursor.execute("""
                    UPDATE products
                    SET quantity = %s, updated_at = now()
                    WHERE id = %s AND quantity = %s
                """, (update.quantity, update.product_id, update.expected_quantity))

                if cursor.rowcount != 1:
                    conflicts.append(update.product_id)

            if conflicts:
                logger.warning(f"Stock conflict on {len(conflicts)} product(s): {conflicts}")
                raise StockConflictError(conflicts)
