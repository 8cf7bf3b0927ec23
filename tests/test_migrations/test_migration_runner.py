"""
Unit tests for MigrationRunner and the orders_products migrations

The connection is a MagicMock; applied migrations are tracked in a list
the fake cursor reads from.
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from orders_service.migrations import (
    MIGRATIONS,
    m0001_add_order_id_to_orders_products as add_order_id,
    m0002_add_product_id_to_orders_products as add_product_id,
)
from orders_service.migrations.runner import MigrationError, MigrationRunner


def fake_migration(name, calls, fail=False):
    def upgrade(cursor):
        if fail:
            raise RuntimeError("syntax error")
        calls.append(('up', name))

    def downgrade(cursor):
        calls.append(('down', name))

    return SimpleNamespace(NAME=name, upgrade=upgrade, downgrade=downgrade)


@pytest.fixture
def conn():
    """Connection whose cursor answers SELECT name FROM schema_migrations"""
    conn = MagicMock()
    conn.applied = []
    cursor = conn.cursor.return_value
    cursor.fetchall.side_effect = lambda: [{'name': name} for name in conn.applied]
    return conn


def executed_sql(cursor):
    return [" ".join(call[0][0].split()) for call in cursor.execute.call_args_list]


class TestMigrationRunner:

    def test_upgrade_applies_pending_in_order(self, conn):
        calls = []
        migrations = [fake_migration('0000_a', calls), fake_migration('0001_b', calls)]
        conn.applied = ['0000_a']

        applied = MigrationRunner(conn, migrations).upgrade()

        assert applied == ['0001_b']
        assert calls == [('up', '0001_b')]
        inserts = [
            call for call in conn.cursor.return_value.execute.call_args_list
            if 'INSERT INTO schema_migrations' in call[0][0]
        ]
        assert inserts[0][0][1] == ('0001_b',)
        conn.commit.assert_called()

    def test_upgrade_dry_run_changes_nothing(self, conn):
        calls = []
        migrations = [fake_migration('0000_a', calls)]

        assert MigrationRunner(conn, migrations).upgrade(dry_run=True) == ['0000_a']
        assert calls == []

    def test_failed_migration_rolls_back_and_stops(self, conn):
        calls = []
        migrations = [
            fake_migration('0000_a', calls),
            fake_migration('0001_b', calls, fail=True),
            fake_migration('0002_c', calls),
        ]

        with pytest.raises(MigrationError) as exc_info:
            MigrationRunner(conn, migrations).upgrade()

        assert exc_info.value.name == '0001_b'
        assert calls == [('up', '0000_a')]
        conn.rollback.assert_called_once()

    def test_downgrade_reverts_newest_first(self, conn):
        calls = []
        migrations = [fake_migration(name, calls) for name in ('0000_a', '0001_b', '0002_c')]
        conn.applied = ['0000_a', '0001_b', '0002_c']

        reverted = MigrationRunner(conn, migrations).downgrade(steps=2)

        assert reverted == ['0002_c', '0001_b']
        assert calls == [('down', '0002_c'), ('down', '0001_b')]

    def test_downgrade_zero_steps_does_nothing(self, conn):
        calls = []
        migrations = [fake_migration('0000_a', calls)]
        conn.applied = ['0000_a']

        assert MigrationRunner(conn, migrations).downgrade(steps=0) == []
        assert calls == []

    def test_default_migrations_are_ordered(self):
        names = [migration.NAME for migration in MIGRATIONS]

        assert names == sorted(names)
        assert names[1:] == [
            '0001_add_order_id_to_orders_products',
            '0002_add_product_id_to_orders_products',
        ]


class TestOrdersProductsMigrations:

    @pytest.mark.parametrize("migration, column, table, constraint", [
        (add_order_id, 'order_id', 'orders', 'orders_products_order_fk'),
        (add_product_id, 'product_id', 'products', 'orders_products_product_fk'),
    ])
    def test_upgrade_adds_nullable_fk_with_set_null(self, migration, column, table, constraint):
        cursor = MagicMock()

        migration.upgrade(cursor)

        add_column, add_fk = executed_sql(cursor)
        assert add_column == f"ALTER TABLE orders_products ADD COLUMN {column} UUID NULL"
        assert f"ADD CONSTRAINT {constraint}" in add_fk
        assert f"FOREIGN KEY ({column}) REFERENCES {table}(id)" in add_fk
        assert "ON DELETE SET NULL" in add_fk

    @pytest.mark.parametrize("migration, column, constraint", [
        (add_order_id, 'order_id', 'orders_products_order_fk'),
        (add_product_id, 'product_id', 'orders_products_product_fk'),
    ])
    def test_downgrade_drops_constraint_then_column(self, migration, column, constraint):
        cursor = MagicMock()

        migration.downgrade(cursor)

        assert executed_sql(cursor) == [
            f"ALTER TABLE orders_products DROP CONSTRAINT {constraint}",
            f"ALTER TABLE orders_products DROP COLUMN {column}",
        ]
