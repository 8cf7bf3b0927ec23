"""
Shared connection handling for the psycopg2 repositories

A repository built with a connection runs on it and leaves commit and
rollback to the owner of that connection (see core.database.transaction).
A repository built without one opens a connection per call, commits its
own writes and closes the connection afterwards.
"""
from contextlib import contextmanager

from orders_service.core.database import get_db_connection_dict


class PostgresRepository:
    """Base class for repositories backed by psycopg2"""

    def __init__(self, conn=None):
        self._conn = conn

    @contextmanager
    def _cursor(self, write: bool = False):
        should_close = self._conn is None
        conn = get_db_connection_dict() if should_close else self._conn
        cursor = conn.cursor()

        try:
            yield cursor
            if write and should_close:
                conn.commit()
        except Exception:
            if should_close:
                conn.rollback()
            raise
        finally:
            cursor.close()
            if should_close:
                conn.close()
