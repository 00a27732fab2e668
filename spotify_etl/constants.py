#!/usr/bin/env python3
"""
Application Constants

This module contains all configuration constants and exit codes used
throughout the Spotify dataset ETL pipeline.
"""

# Exit codes for different failure modes
EXIT_SUCCESS = 0
EXIT_INPUT_ERROR = 2
EXIT_CONFIG_ERROR = 3
EXIT_PIPELINE_FAILURE = 4
EXIT_INTERRUPTED = 130  # Conventional exit code for Ctrl+C
EXIT_UNEXPECTED_ERROR = 10

# Kaggle dataset coordinates
DEFAULT_DATASET_OWNER = "yamaerenay"
DEFAULT_DATASET_NAME = "spotify-dataset-19212020-600k-tracks"
DEFAULT_DATA_DIR = "artifacts"
TRACKS_FILE_NAME = "tracks.csv"
ARTISTS_FILE_NAME = "artists.csv"

# Transformation rules
MIN_TRACK_DURATION_MS = 60000
DANCEABILITY_LOW_THRESHOLD = 0.5  # below -> Low
DANCEABILITY_HIGH_THRESHOLD = 0.6  # above -> High
HEADER_TOKEN = "id"
PLACEHOLDER_CELL = "0"

# Raw tracks.csv column positions
TRACK_COLUMN_COUNT = 20
TEMPO_COLUMN = 18
TIME_SIGNATURE_COLUMN = 19

# Raw artists.csv width
ARTIST_COLUMN_COUNT = 5

# Output defaults
DEFAULT_OUTPUT_DIR = "output"
TRACKS_OUTPUT_NAME = "tracks.jsonl"
ARTISTS_OUTPUT_NAME = "artists.jsonl"
DEFAULT_S3_TRACKS_KEY = "transformed/tracks.jsonl"
DEFAULT_S3_ARTISTS_KEY = "transformed/artists.jsonl"

# Database constants
DEFAULT_BATCH_SIZE = 500
DEFAULT_CONNECTION_TIMEOUT = 30  # seconds
DEFAULT_QUERY_TIMEOUT = 60  # seconds
