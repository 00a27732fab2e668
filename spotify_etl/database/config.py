"""
Database configuration module.

Validates the PostgreSQL URL and timeouts for the load stage and bundles
them into a DatabaseConfig.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

from ..models import DatabaseConfig
from ..constants import DEFAULT_CONNECTION_TIMEOUT, DEFAULT_QUERY_TIMEOUT

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("postgresql", "postgres")


def database_url_problem(url: Optional[str]) -> Optional[str]:
    """
    Describe what is wrong with a PostgreSQL URL.

    Returns:
        A human-readable problem, or None if the URL is usable
    """
    if not url:
        return "Database URL is empty"

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as e:
        return f"Invalid database URL format: {e}"

    if parsed.scheme not in SUPPORTED_SCHEMES:
        return (
            f"Database URL scheme {parsed.scheme!r} not supported, "
            "use postgresql:// or postgres://"
        )
    if not hostname:
        return "Database URL missing hostname"
    if not parsed.username:
        return "Database URL missing username"
    if parsed.path in ("", "/"):
        return "Database URL missing database name"
    return None


def validate_database_url(url: Optional[str]) -> bool:
    """Return True if ``url`` names a PostgreSQL database; log the problem otherwise."""
    problem = database_url_problem(url)
    if problem:
        logger.error(problem)
        return False
    return True


def create_database_config(
    url: str,
    connection_timeout: Optional[int] = None,
    query_timeout: Optional[int] = None,
) -> Optional[DatabaseConfig]:
    """
    Build the load stage's connection settings.

    Args:
        url: PostgreSQL connection URL
        connection_timeout: Seconds to wait for the connection
            (default: DEFAULT_CONNECTION_TIMEOUT)
        query_timeout: Statement timeout in seconds (default: DEFAULT_QUERY_TIMEOUT)

    Returns:
        DatabaseConfig, or None if the URL or a timeout is invalid
    """
    if not validate_database_url(url):
        return None

    timeouts = {
        "connection_timeout": (
            DEFAULT_CONNECTION_TIMEOUT if connection_timeout is None else connection_timeout
        ),
        "query_timeout": DEFAULT_QUERY_TIMEOUT if query_timeout is None else query_timeout,
    }
    for name, seconds in timeouts.items():
        if seconds < 1:
            logger.error(f"{name} must be at least 1 second, got {seconds}")
            return None

    return DatabaseConfig(url=url, **timeouts)
