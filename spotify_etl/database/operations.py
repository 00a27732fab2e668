"""
Database operations module.

This module inserts transformed records into PostgreSQL in fixed-size
batches. Inserts ignore primary-key conflicts so re-running a load is
harmless, and each batch is retried with exponential backoff on
transient errors.
"""

import logging
import time
from functools import wraps
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from ..constants import DEFAULT_BATCH_SIZE
from ..models import ARTIST_OUTPUT_COLUMNS, TRACK_OUTPUT_COLUMNS, DatabaseResult, TransformResult
from ..core.output import result_rows
from ..utils import chunked, create_progress_bar, log_stage_event
from .utils import classify_database_error

try:
    from psycopg import sql
except ImportError:
    sql = None

logger = logging.getLogger(__name__)


class DatabaseLoadError(Exception):
    """Raised when a batch can't be inserted and the load must abort."""
    pass


def get_table_name(base_name: str, test_mode: bool = False) -> str:
    """
    Get the table (or view) name based on environment/mode.

    Args:
        base_name: Production name, e.g. "tracks"
        test_mode: If True, return the test_ prefixed name

    Returns:
        Table name string
    """
    return f"test_{base_name}" if test_mode else base_name


def retry_with_exponential_backoff(max_retries: int = 3, base_delay: float = 1.0):
    """
    Decorator to retry database operations with exponential backoff.

    Args:
        max_retries: Maximum number of retry attempts
        base_delay: Base delay between retries in seconds
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            last_exception = None

            for attempt in range(max_retries + 1):  # +1 for initial attempt
                try:
                    return func(*args, **kwargs)

                except Exception as e:
                    last_exception = e
                    error_type = classify_database_error(e)

                    # Don't retry permanent or systemic errors
                    if error_type in ["permanent", "systemic"]:
                        logger.warning(f"Database error ({error_type}): {str(e)} - not retrying")
                        break

                    if attempt >= max_retries:
                        logger.error(f"Database operation failed after {max_retries} retries: {str(e)}")
                        break

                    delay = base_delay * (2 ** attempt)
                    logger.warning(f"Database operation failed (attempt {attempt + 1}/{max_retries + 1}): {str(e)} - retrying in {delay:.1f}s")
                    time.sleep(delay)

            # If we get here, all retries failed - return error result
            error_type = classify_database_error(last_exception)
            return DatabaseResult(
                success=False,
                rows_affected=0,
                error=f"Database operation failed ({error_type}): {str(last_exception)}"
            )

        return wrapper
    return decorator


def build_insert_query(table_name: str, columns: Sequence[str]) -> "sql.Composed":
    """Build ``INSERT ... ON CONFLICT DO NOTHING`` for the given columns."""
    if sql is None:
        raise RuntimeError("psycopg not available. Install with: pip install 'psycopg[binary]'")

    return sql.SQL(
        "INSERT INTO {table} ({columns}) VALUES ({values}) ON CONFLICT DO NOTHING"
    ).format(
        table=sql.Identifier(table_name),
        columns=sql.SQL(", ").join(map(sql.Identifier, columns)),
        values=sql.SQL(", ").join(sql.Placeholder() * len(columns)),
    )


def record_values(
    records: Iterable[Dict[str, Any]], columns: Sequence[str]
) -> List[Tuple[Any, ...]]:
    """
    Order each record's fields by ``columns`` for executemany.

    Raises:
        DatabaseLoadError: If a record lacks one of the columns
    """
    values = []
    for index, record in enumerate(records):
        try:
            values.append(tuple(record[column] for column in columns))
        except KeyError as e:
            raise DatabaseLoadError(
                f"Record {index} (id={record.get('id')!r}) is missing column {e.args[0]!r}"
            ) from e
    return values


@retry_with_exponential_backoff(max_retries=3)
def insert_batch(
    connection: "psycopg.Connection",
    table_name: str,
    query: "sql.Composed",
    values: List[Tuple[Any, ...]],
) -> DatabaseResult:
    """
    Insert one batch of rows in its own transaction.

    Args:
        connection: Database connection
        table_name: Target table, for logging
        query: Statement from build_insert_query
        values: Row tuples in the query's column order

    Returns:
        DatabaseResult with operation status
    """
    if connection is None:
        return DatabaseResult(
            success=False,
            rows_affected=0,
            error="Database connection is None"
        )

    try:
        with connection.cursor() as cursor:
            cursor.executemany(query, values)
            rows_affected = cursor.rowcount

        connection.commit()
        logger.debug(f"Inserted {rows_affected} of {len(values)} rows into {table_name}")

        return DatabaseResult(
            success=True,
            rows_affected=max(rows_affected, 0),
            error=None
        )

    except Exception as e:
        try:
            connection.rollback()
        except Exception as rollback_error:
            logger.debug(f"Rollback failed: {rollback_error}")

        error_type = classify_database_error(e)
        logger.error(f"Database error ({error_type}) inserting into {table_name}: {str(e)}")

        # Let the retry decorator handle this
        raise


def insert_records(
    connection: "psycopg.Connection",
    table_name: str,
    columns: Sequence[str],
    records: Iterable[Dict[str, Any]],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> int:
    """
    Insert records in batches of ``batch_size``.

    Args:
        connection: Database connection
        table_name: Target table
        columns: Column names, in insert order
        records: Records keyed by column name
        batch_size: Records per batch

    Returns:
        Number of rows actually inserted (conflicts excluded)

    Raises:
        DatabaseLoadError: If a record is missing a column or any batch
            fails after retries
    """
    if batch_size < 1:
        raise ValueError(f"Batch size must be at least 1, got {batch_size}")

    query = build_insert_query(table_name, columns)
    rows = record_values(records, columns)
    total_batches = (len(rows) + batch_size - 1) // batch_size
    inserted = 0

    logger.info(f"Inserting {len(rows)} records into {table_name} ({total_batches} batches of {batch_size})")

    for batch_num, batch in enumerate(chunked(rows, batch_size), 1):
        result = insert_batch(connection, table_name, query, batch)
        if not result.success:
            raise DatabaseLoadError(
                f"Batch {batch_num}/{total_batches} into {table_name} failed: {result.error}"
            )

        inserted += result.rows_affected
        logger.debug(
            f"{table_name} {create_progress_bar(batch_num, total_batches)} "
            f"batch {batch_num}/{total_batches}"
        )

    logger.info(f"Inserted {inserted} new rows into {table_name} ({len(rows) - inserted} already present)")
    return inserted


def load_rows(
    connection: "psycopg.Connection",
    track_rows: Iterable[Dict[str, Any]],
    artist_rows: Iterable[Dict[str, Any]],
    batch_size: int = DEFAULT_BATCH_SIZE,
    test_mode: bool = False,
) -> Dict[str, int]:
    """
    Load artists and then tracks, so every track row's artist exists first.

    Returns:
        Rows inserted per table
    """
    start_time = time.time()
    artists_table = get_table_name("artists", test_mode)
    tracks_table = get_table_name("tracks", test_mode)

    counts = {
        artists_table: insert_records(
            connection, artists_table, ARTIST_OUTPUT_COLUMNS, artist_rows, batch_size
        ),
        tracks_table: insert_records(
            connection, tracks_table, TRACK_OUTPUT_COLUMNS, track_rows, batch_size
        ),
    }

    details = dict(counts)
    details["duration"] = round(time.time() - start_time, 3)
    log_stage_event("load", details, logger=logger)
    return counts


def load_transform_result(
    connection: "psycopg.Connection",
    result: TransformResult,
    batch_size: int = DEFAULT_BATCH_SIZE,
    test_mode: bool = False,
) -> Dict[str, int]:
    """Materialize a transformation result and load it."""
    track_rows, artist_rows = result_rows(result)
    return load_rows(connection, track_rows, artist_rows, batch_size, test_mode)
