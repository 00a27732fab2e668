#!/usr/bin/env python3
"""
Track Data Models

This module contains the parsed and transformed track records produced
by the transformation stage.
"""

from typing import Dict, Any, Optional, NamedTuple, Tuple


class Track(NamedTuple):
    """
    A typed tracks.csv row, before any filtering or derivation.

    ``artists`` and ``id_artists`` are kept as the raw pseudo-list strings
    found in the CSV; they are only decoded by the transform rule.
    """

    id: str
    name: str
    popularity: int
    duration: int  # milliseconds
    explicit: bool
    artists: str
    id_artists: str
    release_date: str  # yyyy[-mm[-dd]]
    danceability: float
    energy: float
    key: int
    loudness: float
    mode: int
    speechiness: float
    acousticness: float
    instrumentalness: float
    liveness: float
    valence: float
    tempo: float
    time_signature: int


# Column order of the tracks table, artist_id last
TRACK_OUTPUT_COLUMNS = (
    "id",
    "name",
    "popularity",
    "duration",
    "explicit",
    "energy",
    "key",
    "loudness",
    "mode",
    "speechiness",
    "acousticness",
    "instrumentalness",
    "liveness",
    "valence",
    "tempo",
    "time_signature",
    "year",
    "month",
    "day",
    "danceability",
    "artist_id",
)


class TransformedTrack(NamedTuple):
    """
    A retained track after date explosion and danceability bucketing.

    One instance is created per surviving raw row and shared by every
    artist it belongs to.

    Attributes:
        year: Release year
        month: Release month, None when absent
        day: Release day, None when absent
        danceability: "Low", "Medium" or "High"
        id_artists: Decoded artist IDs, duplicates removed, source order kept
    """

    id: str
    name: str
    popularity: int
    duration: int
    explicit: bool
    energy: float
    key: int
    loudness: float
    mode: int
    speechiness: float
    acousticness: float
    instrumentalness: float
    liveness: float
    valence: float
    tempo: float
    time_signature: int
    year: int
    month: Optional[int]
    day: Optional[int]
    danceability: str
    id_artists: Tuple[str, ...]

    def to_row(self, artist_id: str) -> Dict[str, Any]:
        """Build one tracks-table row linking this track to ``artist_id``."""
        row = self._asdict()
        del row["id_artists"]
        row["artist_id"] = artist_id
        return {column: row[column] for column in TRACK_OUTPUT_COLUMNS}
