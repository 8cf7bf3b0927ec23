"""
Schema migrations, applied in list order by MigrationRunner

Each migration module exposes NAME, upgrade(cursor) and downgrade(cursor).
"""
from orders_service.migrations import (
    m0000_create_base_tables,
    m0001_add_order_id_to_orders_products,
    m0002_add_product_id_to_orders_products,
)

MIGRATIONS = [
    m0000_create_base_tables,
    m0001_add_order_id_to_orders_products,
    m0002_add_product_id_to_orders_products,
]

__all__ = ['MIGRATIONS']
