#!/usr/bin/env python3
"""
ETL Pipeline

This module chains the pipeline stages for one run: optional dataset
download, transformation, JSONL output, optional S3 upload, and optional
PostgreSQL load. Any stage failure propagates and aborts the run, so a
partially transformed dataset is never uploaded or loaded.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .config import ConfigError, Env
from .constants import ARTISTS_OUTPUT_NAME, DEFAULT_OUTPUT_DIR, TRACKS_OUTPUT_NAME
from .core import (
    download_dataset,
    read_jsonl_records,
    transform_dataset,
    write_transform_outputs,
)
from .database import (
    close_db_connection_pool,
    create_database_config,
    create_db_connection_pool,
    create_schema,
    get_db_connection,
    load_rows,
    load_transform_result,
)
from .models import TransformResult
from .storage import create_s3_client, download_file, upload_file
from .utils import log_stage_event

logger = logging.getLogger(__name__)


@dataclass
class PipelineOptions:
    """Which stages to run, as selected on the command line."""

    download: bool = False
    force_download: bool = False
    output_dir: str = DEFAULT_OUTPUT_DIR
    upload: bool = False
    fetch_from_s3: bool = False
    load_db: bool = False
    test_mode: bool = False


@dataclass
class PipelineSummary:
    """What a run produced."""

    tracks_path: str
    artists_path: str
    result: Optional[TransformResult] = None
    uploaded: bool = False
    loaded: Dict[str, int] = field(default_factory=dict)


def _require_bucket(env: Env) -> str:
    if not env.S3_BUCKET_NAME:
        raise ConfigError(
            "S3 bucket is required. Set S3_BUCKET_NAME environment variable or use --s3-bucket"
        )
    return env.S3_BUCKET_NAME


def upload_outputs(env: Env, tracks_path: str, artists_path: str, client: Any = None) -> None:
    """Upload both output files to the configured bucket."""
    bucket = _require_bucket(env)
    client = client or create_s3_client(env.AWS_REGION)

    upload_file(client, bucket, env.S3_TRACKS_KEY, tracks_path)
    upload_file(client, bucket, env.S3_ARTISTS_KEY, artists_path)
    log_stage_event(
        "upload",
        {"bucket": bucket, "tracks_key": env.S3_TRACKS_KEY, "artists_key": env.S3_ARTISTS_KEY},
        logger=logger,
    )


def fetch_outputs(env: Env, tracks_path: str, artists_path: str, client: Any = None) -> None:
    """Download previously uploaded output files from the configured bucket."""
    bucket = _require_bucket(env)
    client = client or create_s3_client(env.AWS_REGION)

    download_file(client, bucket, env.S3_TRACKS_KEY, tracks_path)
    download_file(client, bucket, env.S3_ARTISTS_KEY, artists_path)


def load_outputs(
    env: Env,
    tracks_path: str,
    artists_path: str,
    result: Optional[TransformResult] = None,
    test_mode: bool = False,
) -> Dict[str, int]:
    """
    Create the schema and load the outputs into PostgreSQL.

    An in-memory result is loaded directly; otherwise the JSONL files are
    read back.

    Raises:
        ConfigError: If DATABASE_URL is missing or invalid
        DatabaseLoadError: If a batch fails
    """
    if not env.DATABASE_URL:
        raise ConfigError(
            "Database URL is required. Set DATABASE_URL environment variable or use --db-url"
        )

    db_config = create_database_config(
        url=env.DATABASE_URL,
        connection_timeout=env.DB_CONNECTION_TIMEOUT,
        query_timeout=env.DB_QUERY_TIMEOUT,
    )
    if db_config is None:
        raise ConfigError("Invalid database settings (see DATABASE_URL and DB_*_TIMEOUT)")

    db_pool = create_db_connection_pool(db_config)
    if db_pool is None:
        raise ConfigError("Database driver unavailable")

    try:
        with get_db_connection(db_pool) as connection:
            create_schema(connection, test_mode=test_mode)
            if result is not None:
                return load_transform_result(
                    connection, result, batch_size=env.BATCH_SIZE, test_mode=test_mode
                )
            return load_rows(
                connection,
                read_jsonl_records(tracks_path),
                read_jsonl_records(artists_path),
                batch_size=env.BATCH_SIZE,
                test_mode=test_mode,
            )
    finally:
        close_db_connection_pool(db_pool)


def run_pipeline(env: Env, options: PipelineOptions) -> PipelineSummary:
    """
    Run the selected stages in order.

    Args:
        env: Validated configuration
        options: Stage selection

    Returns:
        PipelineSummary describing the run
    """
    dataset = env.dataset_config()
    summary = PipelineSummary(
        tracks_path=os.path.join(options.output_dir, TRACKS_OUTPUT_NAME),
        artists_path=os.path.join(options.output_dir, ARTISTS_OUTPUT_NAME),
    )

    if options.fetch_from_s3:
        fetch_outputs(env, summary.tracks_path, summary.artists_path)
    else:
        if options.download:
            download_dataset(dataset, force=options.force_download)
            log_stage_event("download", {"dataset": dataset.slug, "data_dir": dataset.data_dir}, logger=logger)

        summary.result = transform_dataset(
            dataset, fix_time_signature_column=env.FIX_TIME_SIGNATURE_COLUMN
        )
        write_transform_outputs(summary.result, options.output_dir)

        if options.upload:
            upload_outputs(env, summary.tracks_path, summary.artists_path)
            summary.uploaded = True

    if options.load_db:
        summary.loaded = load_outputs(
            env,
            summary.tracks_path,
            summary.artists_path,
            result=summary.result,
            test_mode=options.test_mode,
        )

    return summary
