#!/usr/bin/env python3
"""
Statistics Models

This module contains data structures describing the outcome of a
transformation run.
"""

from typing import Mapping, NamedTuple, Tuple

from .artist import Artist
from .track import TransformedTrack


class TransformStats(NamedTuple):
    """
    Row counters for one transformation run.

    Attributes:
        track_rows: Raw rows read from tracks.csv
        skipped_track_rows: Header/placeholder/blank track rows
        retained_tracks: Tracks that passed the retention filter
        dropped_tracks: Tracks with no name or shorter than one minute
        rejected_release_dates: Otherwise retained tracks with no usable year
        artist_rows: Raw rows read from artists.csv
        skipped_artist_rows: Header/blank artist rows
        retained_artists: Artists referenced by at least one retained track
        dropped_artists: Artists with no retained track
        start_time: Run start timestamp
        end_time: Run end timestamp
        duration: Run duration in seconds
    """

    track_rows: int
    skipped_track_rows: int
    retained_tracks: int
    dropped_tracks: int
    rejected_release_dates: int
    artist_rows: int
    skipped_artist_rows: int
    retained_artists: int
    dropped_artists: int
    start_time: float
    end_time: float
    duration: float


class TransformResult(NamedTuple):
    """
    Output of a full two-phase transformation run.

    Attributes:
        tracks: Unique retained tracks in input order
        artist_tracks: Read-only fan-out map, artist ID -> tracks
        artists: Retained artists in input order
        stats: Row counters for the run
    """

    tracks: Tuple[TransformedTrack, ...]
    artist_tracks: Mapping[str, Tuple[TransformedTrack, ...]]
    artists: Tuple[Artist, ...]
    stats: TransformStats
