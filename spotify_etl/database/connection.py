"""
Database connection management module.

This module handles connection pool creation, connection checkout and
pool cleanup for the load stage.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from ..models import DatabaseConfig

try:
    import psycopg
    from psycopg_pool import ConnectionPool
except ImportError:
    psycopg = None
    ConnectionPool = None

logger = logging.getLogger(__name__)


def create_db_connection_pool(config: DatabaseConfig) -> Optional["ConnectionPool"]:
    """
    Create the one-connection pool the load stage borrows from.

    The load runs its batches sequentially, so a single connection is kept
    open and the query timeout is applied as a server-side statement_timeout.

    Args:
        config: Database configuration settings

    Returns:
        Connection pool or None if psycopg is not available

    Raises:
        Exception: If unable to create connection pool
    """
    if psycopg is None:
        logger.error(
            "psycopg not available. Install with: pip install 'psycopg[binary]' psycopg_pool"
        )
        return None

    try:
        logger.info(
            f"Opening database connection (timeout={config.connection_timeout}s, "
            f"statement_timeout={config.query_timeout}s)"
        )

        connection_pool = ConnectionPool(
            config.url,
            min_size=1,
            max_size=1,
            timeout=config.connection_timeout,
            kwargs={"options": f"-c statement_timeout={config.query_timeout * 1000}"},
            open=True,
        )

        logger.info("Database connection pool created successfully")
        return connection_pool

    except Exception as e:
        logger.error(f"Failed to create database connection pool: {str(e)}")
        raise


@contextmanager
def get_db_connection(pool: "ConnectionPool") -> Iterator["psycopg.Connection"]:
    """
    Borrow a connection from the pool for the duration of a ``with`` block.

    Raises:
        ValueError: If the pool is None
    """
    if pool is None:
        raise ValueError("Connection pool is None")

    with pool.connection() as connection:
        logger.debug("Retrieved database connection from pool")
        yield connection


def close_db_connection_pool(pool: "ConnectionPool") -> None:
    """
    Close the database connection pool.

    Args:
        pool: Database connection pool to close
    """
    if pool is None:
        logger.debug("Connection pool is None, nothing to close")
        return

    try:
        logger.info("Closing database connection pool")
        pool.close()
        logger.info("Database connection pool closed successfully")

    except Exception as e:
        logger.error(f"Error closing database connection pool: {str(e)}")
