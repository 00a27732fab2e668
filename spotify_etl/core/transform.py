"""
Transformation module.

This module holds the business rules that turn parsed tracks and artists
into the normalized records loaded downstream. The run has two phases:

1. The track pass filters and reshapes every track and builds the fan-out
   map from artist ID to the tracks referencing it.
2. The artist pass keeps only artists present in that completed map.

The artist pass never starts before the track pass has consumed every row.
"""

import logging
import time
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from ..constants import (
    DANCEABILITY_HIGH_THRESHOLD,
    DANCEABILITY_LOW_THRESHOLD,
    MIN_TRACK_DURATION_MS,
)
from ..models import (
    Artist,
    DatasetConfig,
    Track,
    TransformedTrack,
    TransformResult,
    TransformStats,
)
from ..utils import log_stage_event
from .csv_source import load_all_rows
from .parser import parse_artist_row, parse_string_array, parse_track_row

logger = logging.getLogger(__name__)

ArtistTrackMap = Mapping[str, Tuple[TransformedTrack, ...]]


class TrackPass(NamedTuple):
    """Outcome of phase 1."""

    tracks: Tuple[TransformedTrack, ...]
    artist_tracks: ArtistTrackMap
    row_count: int
    skipped_rows: int
    dropped_tracks: int
    rejected_release_dates: int


class ArtistPass(NamedTuple):
    """Outcome of phase 2."""

    artists: Tuple[Artist, ...]
    row_count: int
    skipped_rows: int
    dropped_artists: int


def bucket_danceability(value: float) -> str:
    """
    Map a 0.0-1.0 danceability score to Low, Medium or High.

    0.5 and 0.6 are both Medium. NaN fails both comparisons and lands in High.
    """
    if value < DANCEABILITY_LOW_THRESHOLD:
        return "Low"
    elif value <= DANCEABILITY_HIGH_THRESHOLD:
        return "Medium"
    return "High"


def explode_release_date(
    value: Optional[str],
) -> Tuple[Optional[int], Optional[int], Optional[int]]:
    """
    Split a yyyy[-mm[-dd]] date into year, month and day.

    Components that are absent, non-numeric or zero come back as None.
    """
    components: List[Optional[int]] = []
    for part in (value or "").split("-")[:3]:
        try:
            number = int(part)
        except ValueError:
            number = None
        components.append(number or None)

    components.extend([None] * (3 - len(components)))
    year, month, day = components
    return year, month, day


def is_retained_track(track: Track) -> bool:
    """A track survives when it has a name and lasts at least one minute."""
    return bool(track.name) and track.duration >= MIN_TRACK_DURATION_MS


def transform_track(track: Track) -> Optional[TransformedTrack]:
    """
    Reshape a retained track.

    Returns None when the track fails the retention filter or carries no
    usable release year.
    """
    if not is_retained_track(track):
        return None

    year, month, day = explode_release_date(track.release_date)
    if year is None:
        logger.warning(
            f"Track {track.id}: no usable year in release_date {track.release_date!r}, skipping"
        )
        return None

    # dict.fromkeys keeps first-seen order; an empty id names no artist
    id_artists = tuple(
        dict.fromkeys(artist_id for artist_id in parse_string_array(track.id_artists) if artist_id)
    )

    return TransformedTrack(
        id=track.id,
        name=track.name,
        popularity=track.popularity,
        duration=track.duration,
        explicit=track.explicit,
        energy=track.energy,
        key=track.key,
        loudness=track.loudness,
        mode=track.mode,
        speechiness=track.speechiness,
        acousticness=track.acousticness,
        instrumentalness=track.instrumentalness,
        liveness=track.liveness,
        valence=track.valence,
        tempo=track.tempo,
        time_signature=track.time_signature,
        year=year,
        month=month,
        day=day,
        danceability=bucket_danceability(track.danceability),
        id_artists=id_artists,
    )


def build_artist_track_map(
    rows: Iterable[Sequence[str]], fix_time_signature_column: bool = False
) -> TrackPass:
    """
    Run the track pass over raw tracks.csv rows.

    Each retained track is created once and the same object is appended
    under every artist ID it references, in input order.

    Args:
        rows: Raw tracks.csv rows
        fix_time_signature_column: Passed through to the row parser

    Returns:
        TrackPass with the unique tracks and a read-only fan-out map
    """
    tracks: List[TransformedTrack] = []
    artist_tracks: Dict[str, List[TransformedTrack]] = {}
    row_count = 0
    skipped_rows = 0
    dropped_tracks = 0
    rejected_release_dates = 0

    for row in rows:
        row_count += 1
        track = parse_track_row(row, fix_time_signature_column=fix_time_signature_column)
        if track is None:
            skipped_rows += 1
            continue

        if not is_retained_track(track):
            dropped_tracks += 1
            continue

        transformed = transform_track(track)
        if transformed is None:
            rejected_release_dates += 1
            continue

        tracks.append(transformed)
        for artist_id in transformed.id_artists:
            artist_tracks.setdefault(artist_id, []).append(transformed)

    frozen = MappingProxyType(
        {artist_id: tuple(items) for artist_id, items in artist_tracks.items()}
    )
    logger.info(
        f"Track pass: {len(tracks)} retained, {dropped_tracks} dropped, "
        f"{rejected_release_dates} without release year, {len(frozen)} artists referenced"
    )

    return TrackPass(
        tracks=tuple(tracks),
        artist_tracks=frozen,
        row_count=row_count,
        skipped_rows=skipped_rows,
        dropped_tracks=dropped_tracks,
        rejected_release_dates=rejected_release_dates,
    )


def filter_artists(rows: Iterable[Sequence[str]], artist_ids: Iterable[str]) -> ArtistPass:
    """
    Run the artist pass: keep artists referenced by a retained track.

    Args:
        rows: Raw artists.csv rows
        artist_ids: Key set of the completed fan-out map

    Returns:
        ArtistPass with retained artists in input order
    """
    referenced = artist_ids if isinstance(artist_ids, (set, frozenset)) else set(artist_ids)
    artists: List[Artist] = []
    row_count = 0
    skipped_rows = 0
    dropped_artists = 0

    for row in rows:
        row_count += 1
        artist = parse_artist_row(row)
        if artist is None:
            skipped_rows += 1
            continue

        if artist.id in referenced:
            artists.append(artist)
        else:
            dropped_artists += 1

    logger.info(f"Artist pass: {len(artists)} retained, {dropped_artists} dropped")

    return ArtistPass(
        artists=tuple(artists),
        row_count=row_count,
        skipped_rows=skipped_rows,
        dropped_artists=dropped_artists,
    )


def _build_result(track_pass: TrackPass, artist_pass: ArtistPass, start_time: float) -> TransformResult:
    end_time = time.time()
    stats = TransformStats(
        track_rows=track_pass.row_count,
        skipped_track_rows=track_pass.skipped_rows,
        retained_tracks=len(track_pass.tracks),
        dropped_tracks=track_pass.dropped_tracks,
        rejected_release_dates=track_pass.rejected_release_dates,
        artist_rows=artist_pass.row_count,
        skipped_artist_rows=artist_pass.skipped_rows,
        retained_artists=len(artist_pass.artists),
        dropped_artists=artist_pass.dropped_artists,
        start_time=start_time,
        end_time=end_time,
        duration=end_time - start_time,
    )

    details = stats._asdict()
    details["duration"] = round(stats.duration, 3)
    log_stage_event("transform", details, logger=logger)

    return TransformResult(
        tracks=track_pass.tracks,
        artist_tracks=track_pass.artist_tracks,
        artists=artist_pass.artists,
        stats=stats,
    )


def run_transform(
    track_rows: Iterable[Sequence[str]],
    artist_rows: Iterable[Sequence[str]],
    fix_time_signature_column: bool = False,
) -> TransformResult:
    """
    Transform already-loaded tracks and artists rows.

    Args:
        track_rows: Raw tracks.csv rows
        artist_rows: Raw artists.csv rows
        fix_time_signature_column: Read time_signature from column 19

    Returns:
        TransformResult with both output streams and run statistics
    """
    start_time = time.time()
    track_pass = build_artist_track_map(track_rows, fix_time_signature_column)
    artist_pass = filter_artists(artist_rows, frozenset(track_pass.artist_tracks))
    return _build_result(track_pass, artist_pass, start_time)


def transform_dataset(
    dataset: DatasetConfig, fix_time_signature_column: bool = False
) -> TransformResult:
    """
    Load the dataset CSVs and transform them.

    artists.csv is only read once the track pass has finished.

    Raises:
        FileNotFoundError: If either CSV file is missing
        CsvParseError: If either CSV file is malformed
    """
    start_time = time.time()

    logger.info("Transforming tracks. This might take a while...")
    track_pass = build_artist_track_map(
        load_all_rows(dataset.tracks_path), fix_time_signature_column
    )

    logger.info("Transforming artists. This might take a while...")
    artist_pass = filter_artists(
        load_all_rows(dataset.artists_path), frozenset(track_pass.artist_tracks)
    )

    return _build_result(track_pass, artist_pass, start_time)
