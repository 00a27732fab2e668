"""
Database utilities module.

This module provides error classification for database operations.
"""


def classify_database_error(exception: Exception) -> str:
    """
    Classify database errors into permanent, transient, or systemic categories.

    Args:
        exception: Database exception to classify

    Returns:
        Error type: "permanent", "transient", or "systemic"
    """
    error_str = str(exception).lower()

    # Permanent errors - don't retry these
    permanent_indicators = [
        "constraint violation",
        "foreign key constraint",
        "check constraint",
        "not null violation",
        "invalid input syntax",
        "relation does not exist",
        "column does not exist",
        "out of range",
    ]

    for indicator in permanent_indicators:
        if indicator in error_str:
            return "permanent"

    # Systemic errors - abort processing
    systemic_indicators = [
        "authentication failed",
        "permission denied",
        "role does not exist",
        "database does not exist",
        "ssl required",
        "password authentication failed",
    ]

    for indicator in systemic_indicators:
        if indicator in error_str:
            return "systemic"

    # Default to transient - can retry these
    # Includes: connection timeout, temporary network issues, deadlocks, etc.
    return "transient"
