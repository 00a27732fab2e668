"""
Database schema module.

This module creates the tracks and artists tables and the views derived
from them. Every statement is idempotent so the schema can be applied
before each load.
"""

import logging

from .operations import get_table_name

try:
    from psycopg import sql
except ImportError:
    sql = None

logger = logging.getLogger(__name__)

ARTISTS_DDL = """
CREATE TABLE IF NOT EXISTS {artists} (
    id TEXT PRIMARY KEY,
    followers BIGINT NOT NULL DEFAULT 0,
    genres TEXT[] NOT NULL DEFAULT '{{}}',
    name TEXT NOT NULL,
    popularity INTEGER NOT NULL DEFAULT 0
)
"""

TRACKS_DDL = """
CREATE TABLE IF NOT EXISTS {tracks} (
    id TEXT NOT NULL,
    name TEXT NOT NULL,
    popularity INTEGER NOT NULL,
    duration INTEGER NOT NULL,
    explicit BOOLEAN NOT NULL,
    energy DOUBLE PRECISION,
    key INTEGER,
    loudness DOUBLE PRECISION,
    mode INTEGER,
    speechiness DOUBLE PRECISION,
    acousticness DOUBLE PRECISION,
    instrumentalness DOUBLE PRECISION,
    liveness DOUBLE PRECISION,
    valence DOUBLE PRECISION,
    tempo DOUBLE PRECISION,
    time_signature INTEGER,
    year INTEGER NOT NULL,
    month INTEGER,
    day INTEGER,
    danceability TEXT NOT NULL CHECK (danceability IN ('Low', 'Medium', 'High')),
    artist_id TEXT NOT NULL REFERENCES {artists} (id),
    PRIMARY KEY (id, artist_id)
)
"""

TRACKS_ARTIST_INDEX_DDL = """
CREATE INDEX IF NOT EXISTS {index} ON {tracks} (artist_id)
"""

# One row per artist, with counts over the tracks linked to it
ARTIST_TRACK_SUMMARY_VIEW = """
CREATE OR REPLACE VIEW {view} AS
SELECT
    a.id AS artist_id,
    a.name,
    a.followers,
    a.popularity,
    COUNT(t.id) AS track_count,
    AVG(t.popularity) AS avg_track_popularity,
    MIN(t.year) AS first_release_year,
    MAX(t.year) AS last_release_year
FROM {artists} a
LEFT JOIN {tracks} t ON t.artist_id = a.id
GROUP BY a.id, a.name, a.followers, a.popularity
"""

# Tracks appear once per artist in the table, so aggregate over distinct ids
YEARLY_TRACK_STATS_VIEW = """
CREATE OR REPLACE VIEW {view} AS
SELECT
    t.year,
    COUNT(*) AS track_count,
    AVG(t.popularity) AS avg_popularity,
    AVG(t.energy) AS avg_energy,
    AVG(t.duration) AS avg_duration,
    COUNT(*) FILTER (WHERE t.explicit) AS explicit_count,
    COUNT(*) FILTER (WHERE t.danceability = 'Low') AS low_danceability_count,
    COUNT(*) FILTER (WHERE t.danceability = 'Medium') AS medium_danceability_count,
    COUNT(*) FILTER (WHERE t.danceability = 'High') AS high_danceability_count
FROM (SELECT DISTINCT ON (id) * FROM {tracks} ORDER BY id) t
GROUP BY t.year
"""


def schema_statements(test_mode: bool = False) -> list:
    """
    Build the DDL statements in dependency order.

    Args:
        test_mode: If True, target the test_ tables and views

    Returns:
        List of composed SQL statements
    """
    if sql is None:
        raise RuntimeError("psycopg not available. Install with: pip install 'psycopg[binary]'")

    artists = sql.Identifier(get_table_name("artists", test_mode))
    tracks = sql.Identifier(get_table_name("tracks", test_mode))

    return [
        sql.SQL(ARTISTS_DDL).format(artists=artists),
        sql.SQL(TRACKS_DDL).format(tracks=tracks, artists=artists),
        sql.SQL(TRACKS_ARTIST_INDEX_DDL).format(
            index=sql.Identifier(get_table_name("tracks_artist_id_idx", test_mode)),
            tracks=tracks,
        ),
        sql.SQL(ARTIST_TRACK_SUMMARY_VIEW).format(
            view=sql.Identifier(get_table_name("artist_track_summary", test_mode)),
            artists=artists,
            tracks=tracks,
        ),
        sql.SQL(YEARLY_TRACK_STATS_VIEW).format(
            view=sql.Identifier(get_table_name("yearly_track_stats", test_mode)),
            tracks=tracks,
        ),
    ]


def create_schema(connection: "psycopg.Connection", test_mode: bool = False) -> None:
    """
    Create tables, index and views in a single transaction.

    Raises:
        Exception: Any database error, after rolling back
    """
    statements = schema_statements(test_mode)
    try:
        with connection.cursor() as cursor:
            for statement in statements:
                cursor.execute(statement)
        connection.commit()
        logger.info(f"Database schema ready{' (test mode)' if test_mode else ''}")

    except Exception as e:
        logger.error(f"Failed to create database schema: {e}")
        connection.rollback()
        raise
