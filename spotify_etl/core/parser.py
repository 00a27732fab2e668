"""
Row parsing module.

This module turns raw tracks.csv and artists.csv rows into typed records.
Parsing is lenient: a cell that fails coercion is logged and replaced with
a default value, it never aborts the row.

Integer and float fields deliberately follow different policies. Integer
fields use a safe parse that falls back to 0, float fields fall back to NaN
and NaN is passed through untouched.
"""

import logging
import math
import re
from typing import List, Optional, Sequence

from ..constants import (
    HEADER_TOKEN,
    PLACEHOLDER_CELL,
    TEMPO_COLUMN,
    TIME_SIGNATURE_COLUMN,
    TRACK_COLUMN_COUNT,
    ARTIST_COLUMN_COUNT,
)
from ..models import Artist, Track

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def safe_int(value: Optional[str], field: str = "value") -> int:
    """
    Parse the leading integer of a cell, substituting 0 on failure.

    "120.5" parses as 120 and "91.0" as 91, matching how the dataset stores
    counts. Anything without a leading integer is logged and becomes 0.
    """
    if value is not None:
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))

    logger.warning(f"Cannot coerce {field} value {value!r} to int, using 0")
    return 0


def to_float(value: Optional[str], field: str = "value") -> float:
    """Parse a float cell; failures become NaN and are logged."""
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Cannot coerce {field} value {value!r} to float, using NaN")
        return math.nan


def to_bool(value: Optional[str]) -> bool:
    """A cell is true only when it is exactly "1"."""
    return value == "1"


def parse_string_array(value: Optional[str]) -> List[str]:
    """
    Decode a pseudo-list string such as "['Pop', 'Rock']".

    The brackets are removed, the content is split on commas, and each
    element is trimmed and loses at most one leading and one trailing single
    quote. Quoted commas and escaped quotes are not supported. "[]" and
    "[ ]" decode to an empty list; otherwise empty elements are kept, so
    "['a', '']" decodes to ["a", ""].

    Args:
        value: Raw cell content

    Returns:
        Decoded strings; empty for blank or malformed input
    """
    if value is None or not value.strip():
        return []

    if not value.startswith("[") or not value.endswith("]"):
        logger.warning(f"Malformed list value {value!r}, expected '[...]'; using []")
        return []

    content = value[1:-1]
    if not content.strip():
        return []

    items = []
    for item in content.split(","):
        item = item.strip()
        if item.startswith("'"):
            item = item[1:]
        if item.endswith("'"):
            item = item[:-1]
        items.append(item)
    return items


def is_skippable_row(row: Sequence[str], placeholder_check: bool = True) -> bool:
    """
    Decide whether a raw row carries no record.

    A row is skipped when its first cell is empty or missing, when the first
    cell is the header token, or (with ``placeholder_check``) when the second
    cell is the literal "0" used by the dataset's placeholder line.
    """
    if not row or not row[0]:
        return True
    if row[0] == HEADER_TOKEN:
        return True
    if placeholder_check and len(row) > 1 and row[1] == PLACEHOLDER_CELL:
        return True
    return False


def _pad(row: Sequence[str], width: int) -> List[str]:
    cells = list(row)
    if len(cells) < width:
        cells.extend([""] * (width - len(cells)))
    return cells


def parse_track_row(
    row: Sequence[str], fix_time_signature_column: bool = False
) -> Optional[Track]:
    """
    Parse one tracks.csv row.

    ``time_signature`` is read from the tempo column (18) unless
    ``fix_time_signature_column`` is set, in which case column 19 is used.
    Column 18 is what existing outputs were produced with.

    Args:
        row: Raw CSV cells in tracks.csv order
        fix_time_signature_column: Read time_signature from its own column

    Returns:
        Parsed Track, or None for header/placeholder/blank rows
    """
    if is_skippable_row(row):
        return None

    cells = _pad(row, TRACK_COLUMN_COUNT)
    time_signature_column = (
        TIME_SIGNATURE_COLUMN if fix_time_signature_column else TEMPO_COLUMN
    )

    return Track(
        id=cells[0],
        name=cells[1],
        popularity=safe_int(cells[2], "popularity"),
        duration=safe_int(cells[3], "duration"),
        explicit=to_bool(cells[4]),
        artists=cells[5],
        id_artists=cells[6],
        release_date=cells[7],
        danceability=to_float(cells[8], "danceability"),
        energy=to_float(cells[9], "energy"),
        key=safe_int(cells[10], "key"),
        loudness=to_float(cells[11], "loudness"),
        mode=safe_int(cells[12], "mode"),
        speechiness=to_float(cells[13], "speechiness"),
        acousticness=to_float(cells[14], "acousticness"),
        instrumentalness=to_float(cells[15], "instrumentalness"),
        liveness=to_float(cells[16], "liveness"),
        valence=to_float(cells[17], "valence"),
        tempo=to_float(cells[TEMPO_COLUMN], "tempo"),
        time_signature=safe_int(cells[time_signature_column], "time_signature"),
    )


def parse_artist_row(row: Sequence[str]) -> Optional[Artist]:
    """
    Parse one artists.csv row.

    A followers count of "0" is a real value here, so the track placeholder
    check does not apply.
    """
    if is_skippable_row(row, placeholder_check=False):
        return None

    cells = _pad(row, ARTIST_COLUMN_COUNT)
    return Artist(
        id=cells[0],
        followers=safe_int(cells[1], "followers"),
        genres=tuple(parse_string_array(cells[2])),
        name=cells[3],
        popularity=safe_int(cells[4], "popularity"),
    )
