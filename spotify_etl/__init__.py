#!/usr/bin/env python3
"""
Spotify ETL Package

A Python package that downloads the Spotify 600k tracks dataset from
Kaggle, cleans and normalizes its tracks and artists tables, stores the
result in S3, and loads it into PostgreSQL with derived views.

This package provides both a command-line interface and a programmatic API
for every pipeline stage.
"""

__version__ = "1.0.0"
__author__ = "Spotify ETL"
__description__ = (
    "Batch ETL for the Spotify 600k tracks dataset with S3 and PostgreSQL sinks"
)
__license__ = "MIT"

# Import models for public API
from .models import (
    Track,
    TransformedTrack,
    Artist,
    DatasetConfig,
    DatabaseConfig,
    DatabaseResult,
    TransformStats,
    TransformResult,
)

# Import constants for public API
from .constants import (
    EXIT_SUCCESS,
    EXIT_INPUT_ERROR,
    EXIT_CONFIG_ERROR,
    EXIT_PIPELINE_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_UNEXPECTED_ERROR,
    MIN_TRACK_DURATION_MS,
    DEFAULT_BATCH_SIZE,
)

# Import core functionality for public API
from .core import (
    load_all_rows,
    parse_string_array,
    parse_track_row,
    parse_artist_row,
    run_transform,
    transform_dataset,
    materialize_track_rows,
    write_transform_outputs,
    download_dataset,
)

# Import database functions for public API
from .database import (
    create_db_connection_pool,
    validate_database_url,
    create_schema,
    insert_records,
    load_transform_result,
)

# Import pipeline orchestration for public API
from .pipeline import (
    PipelineOptions,
    run_pipeline,
)

# Import CLI functionality for public API
from .cli import (
    main,
    create_argument_parser,
)

# Import utilities for public API
from .utils import (
    setup_logging,
)

# Public API exports
__all__ = [
    # Package metadata
    "__version__",
    "__author__",
    "__description__",
    # Data models
    "Track",
    "TransformedTrack",
    "Artist",
    "DatasetConfig",
    "DatabaseConfig",
    "DatabaseResult",
    "TransformStats",
    "TransformResult",
    # Constants
    "EXIT_SUCCESS",
    "EXIT_INPUT_ERROR",
    "EXIT_CONFIG_ERROR",
    "EXIT_PIPELINE_FAILURE",
    "EXIT_INTERRUPTED",
    "EXIT_UNEXPECTED_ERROR",
    "MIN_TRACK_DURATION_MS",
    "DEFAULT_BATCH_SIZE",
    # Core functionality
    "load_all_rows",
    "parse_string_array",
    "parse_track_row",
    "parse_artist_row",
    "run_transform",
    "transform_dataset",
    "materialize_track_rows",
    "write_transform_outputs",
    "download_dataset",
    # Database functions
    "create_db_connection_pool",
    "validate_database_url",
    "create_schema",
    "insert_records",
    "load_transform_result",
    # Pipeline
    "PipelineOptions",
    "run_pipeline",
    # CLI functions
    "main",
    "create_argument_parser",
    # Utilities
    "setup_logging",
]
