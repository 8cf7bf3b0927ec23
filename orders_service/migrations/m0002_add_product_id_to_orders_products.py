"""
Link line items to the ordered product

Deleting a product keeps past line items with product_id set to NULL.
"""
NAME = "0002_add_product_id_to_orders_products"


def upgrade(cursor):
    cursor.execute("ALTER TABLE orders_products ADD COLUMN product_id UUID NULL")
    cursor.execute("""
        ALTER TABLE orders_products
        ADD CONSTRAINT orders_products_product_fk
        FOREIGN KEY (product_id) REFERENCES products(id)
        ON DELETE SET NULL
    """)


def downgrade(cursor):
    cursor.execute("ALTER TABLE orders_products DROP CONSTRAINT orders_products_product_fk")
    cursor.execute("ALTER TABLE orders_products DROP COLUMN product_id")
