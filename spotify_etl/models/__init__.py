#!/usr/bin/env python3
"""
Data Models Module

This module contains all data structures and type definitions used
throughout the Spotify dataset ETL pipeline.
"""

from .track import Track, TransformedTrack, TRACK_OUTPUT_COLUMNS
from .artist import Artist, ARTIST_OUTPUT_COLUMNS
from .dataset import DatasetConfig
from .database import DatabaseConfig, DatabaseResult
from .stats import TransformStats, TransformResult

__all__ = [
    "Track",
    "TransformedTrack",
    "TRACK_OUTPUT_COLUMNS",
    "Artist",
    "ARTIST_OUTPUT_COLUMNS",
    "DatasetConfig",
    "DatabaseConfig",
    "DatabaseResult",
    "TransformStats",
    "TransformResult",
]
