"""
Output module.

This module materializes transformation results into flat output rows
and writes them as JSON Lines files, one object per line.
"""

import json
import logging
import os
import tempfile
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from ..constants import ARTISTS_OUTPUT_NAME, TRACKS_OUTPUT_NAME
from ..models import Artist, TransformedTrack, TransformResult

logger = logging.getLogger(__name__)


def materialize_track_rows(
    tracks: Iterable[TransformedTrack], retained_artist_ids: Iterable[str]
) -> Iterator[Dict[str, Any]]:
    """
    Expand each track into one row per retained artist.

    The fan-out map holds every artist ID seen on a retained track, including
    IDs missing from artists.csv. Membership is checked here against the
    retained artist set so no row points at an artist that won't be stored.

    Args:
        tracks: Unique transformed tracks
        retained_artist_ids: IDs of the artists that will be stored

    Yields:
        Tracks-table rows, each with a single artist_id
    """
    retained = set(retained_artist_ids)
    for track in tracks:
        for artist_id in track.id_artists:
            if artist_id in retained:
                yield track.to_row(artist_id)


def artist_rows(artists: Iterable[Artist]) -> Iterator[Dict[str, Any]]:
    """Yield artists-table rows."""
    for artist in artists:
        yield artist.to_row()


def result_rows(
    result: TransformResult,
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Return (track_rows, artist_rows) for a transformation result."""
    artists = list(artist_rows(result.artists))
    tracks = list(
        materialize_track_rows(result.tracks, (artist.id for artist in result.artists))
    )
    return tracks, artists


def write_jsonl_records(records: Iterable[Dict[str, Any]], output_path: str) -> int:
    """
    Write records to a JSON Lines file.

    The records go to a temporary file in the same directory which then
    replaces ``output_path``, so a failed write leaves any previous file
    untouched.

    Args:
        records: Records to write
        output_path: Path to the output file (parent directories are created)

    Returns:
        Number of records written
    """
    directory = os.path.dirname(output_path) or "."
    os.makedirs(directory, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=".jsonl_tmp_", dir=directory)
    count = 0
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(record, ensure_ascii=False) + "\n")
                count += 1
        os.replace(tmp_path, output_path)

        logger.info(f"Successfully wrote {count} records to {output_path}")
        return count

    except Exception as e:
        logger.error(f"Failed to write JSONL output to {output_path}: {e}")
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def read_jsonl_records(input_path: str) -> List[Dict[str, Any]]:
    """
    Read records back from a JSON Lines file, ignoring blank lines.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a line is not valid JSON
    """
    records = []
    with open(input_path, "r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise ValueError(f"{input_path}, line {line_num}: invalid JSON: {e}") from e

    logger.info(f"Read {len(records)} records from {input_path}")
    return records


def write_transform_outputs(result: TransformResult, output_dir: str) -> Tuple[str, str]:
    """
    Write both output streams into ``output_dir``.

    Returns:
        Paths of the tracks and artists files
    """
    tracks_path = os.path.join(output_dir, TRACKS_OUTPUT_NAME)
    artists_path = os.path.join(output_dir, ARTISTS_OUTPUT_NAME)

    retained_ids = [artist.id for artist in result.artists]
    write_jsonl_records(materialize_track_rows(result.tracks, retained_ids), tracks_path)
    write_jsonl_records(artist_rows(result.artists), artists_path)

    return tracks_path, artists_path
