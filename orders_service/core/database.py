"""
PostgreSQL connection helpers

This module centralizes every way the service reaches the database:
- plain psycopg2 connections with RealDictCursor (rows as dicts)
- connections with retry on transient connection failures
- a transaction scope shared by several repositories
"""
import time
import logging
from contextlib import contextmanager
from typing import Iterator

import psycopg2
import psycopg2.extras
from psycopg2.extras import RealDictCursor

from .config import settings

logger = logging.getLogger(__name__)

CONNECTION_TIMEOUT = settings.DB_CONNECT_TIMEOUT

# UUID columns come back as uuid.UUID instead of str
psycopg2.extras.register_uuid()


def get_db_connection_dict():
    """
    Get a database connection with RealDictCursor (returns dictionaries)

    Returns:
        psycopg2 connection with RealDictCursor

    Raises:
        RuntimeError if DATABASE_URL is not configured
    """
    database_url = settings.DATABASE_URL
    if not database_url:
        raise RuntimeError("DATABASE_URL not configured")

    return psycopg2.connect(
        database_url,
        cursor_factory=RealDictCursor,
        connect_timeout=CONNECTION_TIMEOUT
    )


def get_db_connection_dict_with_retry(max_retries=None, retry_delay=None):
    """
    Get a RealDictCursor connection with automatic retry on connection failures

    Retries psycopg2.OperationalError with exponential backoff. Any other
    error fails immediately.

    Args:
        max_retries: Maximum number of connection attempts (default: settings.DB_CONNECT_RETRIES)
        retry_delay: Initial delay between retries in seconds (default: settings.DB_RETRY_DELAY)

    Returns:
        psycopg2 connection with RealDictCursor

    Raises:
        psycopg2.OperationalError: If all retry attempts fail
    """
    if max_retries is None:
        max_retries = settings.DB_CONNECT_RETRIES
    if retry_delay is None:
        retry_delay = settings.DB_RETRY_DELAY

    last_error = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.debug(f"Database connection attempt {attempt}/{max_retries}")
            conn = get_db_connection_dict()

            # Test connection with a simple query
            try:
                cursor = conn.cursor()
                cursor.execute("SELECT 1")
                cursor.close()
            except Exception:
                conn.close()
                raise

            logger.debug(f"Database connection successful on attempt {attempt}")
            return conn

        except psycopg2.OperationalError as e:
            last_error = e
            logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {e}")

            if attempt < max_retries:
                delay = retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)
            else:
                logger.error(f"All {max_retries} connection attempts failed")

    raise last_error if last_error else RuntimeError("Connection failed after all retries")


@contextmanager
def transaction() -> Iterator:
    """
    Transaction scope over a single connection

    Commits when the block exits normally and rolls back on any exception,
    then closes the connection. Repositories built on the yielded
    connection never commit on their own.

    Usage:
        with transaction() as conn:
            orders = OrderRepository(conn)
            products = ProductRepository(conn)
            ...
    """
    conn = get_db_connection_dict_with_retry()
    try:
        yield conn
        conn.commit()
    except Exception:
        logger.warning("Rolling back transaction")
        conn.rollback()
        raise
    finally:
        conn.close()


def get_transaction():
    """
    FastAPI dependency yielding a connection inside a transaction

    Usage:
        @router.post("/items")
        def create_item(conn=Depends(get_transaction)):
            ...
    """
    with transaction() as conn:
        yield conn
