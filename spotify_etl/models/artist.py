#!/usr/bin/env python3
"""
Artist Data Models

This module contains the parsed artist record.
"""

from typing import Any, Dict, NamedTuple, Tuple


ARTIST_OUTPUT_COLUMNS = ("id", "followers", "genres", "name", "popularity")


class Artist(NamedTuple):
    """
    Represents a parsed artists.csv row.

    Attributes:
        id: Spotify artist ID
        followers: Follower count (0 when unparsable)
        genres: Decoded genre names
        name: Artist name
        popularity: Popularity score (0 when unparsable)
    """

    id: str
    followers: int
    genres: Tuple[str, ...]
    name: str
    popularity: int

    def to_row(self) -> Dict[str, Any]:
        """Build the artists-table row for this artist."""
        return {
            "id": self.id,
            "followers": self.followers,
            "genres": list(self.genres),
            "name": self.name,
            "popularity": self.popularity,
        }
