"""
Utilities module for the Spotify dataset ETL pipeline.

This module provides shared utility functions organized by concern:
- Logging utilities for consistent logging setup and stage records
- General helper functions for common operations
- Validation utilities for data validation
"""

# Logging utilities
from .logging import setup_logging, log_stage_event

# General helper utilities
from .helpers import create_progress_bar, chunked

# Validation utilities
from .validation import _is_output_dir_writable

__all__ = [
    "setup_logging",
    "log_stage_event",
    "create_progress_bar",
    "chunked",
    "_is_output_dir_writable",
]
