"""
Migration runner

Keeps the list of applied migrations in the schema_migrations table and
applies or reverts migrations one transaction each.
"""
import logging
from typing import List, Optional

from orders_service.migrations import MIGRATIONS

logger = logging.getLogger(__name__)


class MigrationError(Exception):
    """A migration failed and its transaction was rolled back"""

    def __init__(self, name: str, error: Exception):
        super().__init__(f"Migration {name} failed: {error}")
        self.name = name
        self.error = error


class MigrationRunner:
    """
    Apply and revert schema migrations

    Args:
        conn: psycopg2 connection with RealDictCursor
        migrations: Ordered migration modules (default: MIGRATIONS)
    """

    def __init__(self, conn, migrations: Optional[list] = None):
        self.conn = conn
        self.migrations = list(MIGRATIONS if migrations is None else migrations)

    def ensure_table(self):
        """Create schema_migrations if it does not exist"""
        cursor = self.conn.cursor()
        try:
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_migrations (
                    name VARCHAR PRIMARY KEY,
                    applied_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now()
                )
            """)
            self.conn.commit()
        finally:
            cursor.close()

    def applied(self) -> List[str]:
        """Names of applied migrations, oldest first"""
        cursor = self.conn.cursor()
        try:
            cursor.execute("SELECT name FROM schema_migrations ORDER BY name")
            return [row['name'] for row in cursor.fetchall()]
        finally:
            cursor.close()

    def pending(self) -> list:
        """Migration modules not applied yet, in order"""
        done = set(self.applied())
        return [migration for migration in self.migrations if migration.NAME not in done]

    def upgrade(self, dry_run: bool = False) -> List[str]:
        """
        Apply every pending migration

        Returns:
            Names of the migrations applied (or that would be, on a dry run)

        Raises:
            MigrationError: A migration failed; earlier ones stay applied
        """
        self.ensure_table()
        names = []

        for migration in self.pending():
            if dry_run:
                logger.info(f"[DRY RUN] Would apply {migration.NAME}")
            else:
                self._run(migration, migration.upgrade, """
                    INSERT INTO schema_migrations (name) VALUES (%s)
                """)
                logger.info(f"Applied {migration.NAME}")
            names.append(migration.NAME)

        return names

    def downgrade(self, steps: int = 1, dry_run: bool = False) -> List[str]:
        """
        Revert the latest ``steps`` applied migrations, newest first

        Returns:
            Names of the migrations reverted (or that would be, on a dry run)

        Raises:
            MigrationError: A migration failed; later ones stay reverted
        """
        self.ensure_table()
        done = set(self.applied())
        applied = [migration for migration in self.migrations if migration.NAME in done]
        names = []

        for migration in reversed(applied[-steps:] if steps > 0 else []):
            if dry_run:
                logger.info(f"[DRY RUN] Would revert {migration.NAME}")
            else:
                self._run(migration, migration.downgrade, """
                    DELETE FROM schema_migrations WHERE name = %s
                """)
                logger.info(f"Reverted {migration.NAME}")
            names.append(migration.NAME)

        return names

    def _run(self, migration, step, bookkeeping_sql: str):
        cursor = self.conn.cursor()
        try:
            step(cursor)
            cursor.execute(bookkeeping_sql, (migration.NAME,))
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            logger.error(f"Migration {migration.NAME} failed: {e}")
            raise MigrationError(migration.NAME, e) from e
        finally:
            cursor.close()
