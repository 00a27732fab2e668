#!/usr/bin/env python3
"""
Database package for the Spotify dataset ETL pipeline.

This package provides database connection management, configuration,
schema creation, batch loading, and utilities for the load stage.
"""

from .connection import (
    create_db_connection_pool,
    get_db_connection,
    close_db_connection_pool,
)

from .config import (
    database_url_problem,
    validate_database_url,
    create_database_config,
)

from .operations import (
    DatabaseLoadError,
    get_table_name,
    retry_with_exponential_backoff,
    build_insert_query,
    record_values,
    insert_batch,
    insert_records,
    load_rows,
    load_transform_result,
)

from .schema import (
    schema_statements,
    create_schema,
)

from .utils import (
    classify_database_error,
)

__all__ = [
    # Connection management
    "create_db_connection_pool",
    "get_db_connection",
    "close_db_connection_pool",
    # Configuration
    "database_url_problem",
    "validate_database_url",
    "create_database_config",
    # Operations
    "DatabaseLoadError",
    "get_table_name",
    "retry_with_exponential_backoff",
    "build_insert_query",
    "record_values",
    "insert_batch",
    "insert_records",
    "load_rows",
    "load_transform_result",
    # Schema
    "schema_statements",
    "create_schema",
    # Utilities
    "classify_database_error",
]
