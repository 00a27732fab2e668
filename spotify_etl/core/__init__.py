#!/usr/bin/env python3
"""
Core package for the Spotify dataset ETL pipeline.

This package provides the core business logic: CSV loading, row parsing,
the two-phase track/artist transformation, and output materialization.
"""

from .csv_source import (
    CsvParseError,
    load_all_rows,
)

from .parser import (
    safe_int,
    to_float,
    to_bool,
    parse_string_array,
    is_skippable_row,
    parse_track_row,
    parse_artist_row,
)

from .transform import (
    bucket_danceability,
    explode_release_date,
    is_retained_track,
    transform_track,
    build_artist_track_map,
    filter_artists,
    run_transform,
    transform_dataset,
)

from .output import (
    materialize_track_rows,
    artist_rows,
    result_rows,
    write_jsonl_records,
    read_jsonl_records,
    write_transform_outputs,
)

from .download import (
    DatasetDownloadError,
    dataset_files_present,
    download_dataset,
)

__all__ = [
    # CSV source
    "CsvParseError",
    "load_all_rows",
    # Row parsing
    "safe_int",
    "to_float",
    "to_bool",
    "parse_string_array",
    "is_skippable_row",
    "parse_track_row",
    "parse_artist_row",
    # Transformation
    "bucket_danceability",
    "explode_release_date",
    "is_retained_track",
    "transform_track",
    "build_artist_track_map",
    "filter_artists",
    "run_transform",
    "transform_dataset",
    # Output
    "materialize_track_rows",
    "artist_rows",
    "result_rows",
    "write_jsonl_records",
    "read_jsonl_records",
    "write_transform_outputs",
    # Dataset download
    "DatasetDownloadError",
    "dataset_files_present",
    "download_dataset",
]
