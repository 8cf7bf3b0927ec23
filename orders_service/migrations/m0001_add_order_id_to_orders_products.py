"""
Link line items to their order

Deleting an order keeps its line items with order_id set to NULL.
"""
NAME = "0001_add_order_id_to_orders_products"


def upgrade(cursor):
    cursor.execute("ALTER TABLE orders_products ADD COLUMN order_id UUID NULL")
    cursor.execute("""
        ALTER TABLE orders_products
        ADD CONSTRAINT orders_products_order_fk
        FOREIGN KEY (order_id) REFERENCES orders(id)
        ON DELETE SET NULL
    """)


def downgrade(cursor):
    cursor.execute("ALTER TABLE orders_products DROP CONSTRAINT orders_products_order_fk")
    cursor.execute("ALTER TABLE orders_products DROP COLUMN order_id")
