#!/usr/bin/env python3
"""
Database Models

This module contains data structures related to the load stage's
connection settings and batch insert results.
"""

from typing import Optional, NamedTuple

from ..constants import DEFAULT_CONNECTION_TIMEOUT, DEFAULT_QUERY_TIMEOUT


class DatabaseConfig(NamedTuple):
    """
    Connection settings for the single-connection load stage.

    Attributes:
        url: PostgreSQL connection URL
        connection_timeout: Seconds to wait for the connection
        query_timeout: Server-side statement timeout in seconds
    """

    url: str
    connection_timeout: int = DEFAULT_CONNECTION_TIMEOUT
    query_timeout: int = DEFAULT_QUERY_TIMEOUT


class DatabaseResult(NamedTuple):
    """
    Result of one batch insert.

    Attributes:
        success: Whether the batch was committed
        rows_affected: Rows reported by the driver for the batch
        error: Error message if the batch failed
    """

    success: bool
    rows_affected: int
    error: Optional[str] = None
