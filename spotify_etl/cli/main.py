"""
CLI main application module.

This module contains the main application entry point and maps pipeline
failures to process exit codes.
"""

import json
import logging
import math
import sys

from ..constants import (
    EXIT_CONFIG_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_PIPELINE_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_UNEXPECTED_ERROR,
)

from ..core import (
    CsvParseError,
    DatasetDownloadError,
    download_dataset,
    result_rows,
    transform_dataset,
)

from ..database import DatabaseLoadError
from ..storage import StorageError

from .parser import (
    create_argument_parser,
)

from ..utils import (
    setup_logging,
    _is_output_dir_writable,
)

from ..config import ConfigError, Env
from ..pipeline import PipelineOptions, run_pipeline

logger = logging.getLogger(__name__)


def _printable(record: dict) -> dict:
    return {
        key: None if isinstance(value, float) and math.isnan(value) else value
        for key, value in record.items()
    }


def _dry_run(env: Env, args) -> None:
    """Transform and print the first five records of each output."""
    dataset = env.dataset_config()
    if args.download:
        download_dataset(dataset, force=args.force_download)

    result = transform_dataset(dataset, fix_time_signature_column=env.FIX_TIME_SIGNATURE_COLUMN)
    track_rows, artist_rows = result_rows(result)

    logger.info("=" * 70)
    logger.info("DRY RUN MODE - SHOWING FIRST 5 RECORDS OF EACH OUTPUT")
    logger.info("=" * 70)
    for label, rows in (("tracks", track_rows), ("artists", artist_rows)):
        print(f"{label}: {len(rows)} records")
        for i, row in enumerate(rows[:5], 1):
            print(f"{i}. {json.dumps(_printable(row), ensure_ascii=False)}")
        if len(rows) > 5:
            print(f"... and {len(rows) - 5} more {label}")

    logger.info("=" * 70)
    logger.info("DRY RUN COMPLETED SUCCESSFULLY")
    logger.info("=" * 70)


def main(argv=None):
    """Main entry point for the script."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    try:
        env = Env.load(cli_args=args)
        logger.debug(f"Configuration: {env.mask()}")
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(EXIT_CONFIG_ERROR)

    try:
        if args.dry_run:
            _dry_run(env, args)
            return

        ok, reason = _is_output_dir_writable(args.output_dir)
        if not ok:
            logger.error(f"Invalid output directory: {reason}")
            sys.exit(EXIT_INPUT_ERROR)

        options = PipelineOptions(
            download=args.download,
            force_download=args.force_download,
            output_dir=args.output_dir,
            upload=args.upload,
            fetch_from_s3=args.fetch_from_s3,
            load_db=args.load_db,
            test_mode=args.test_mode,
        )
        summary = run_pipeline(env, options)

        if summary.result is not None:
            stats = summary.result.stats
            logger.info(
                f"Transformed {stats.retained_tracks} tracks and {stats.retained_artists} artists "
                f"in {stats.duration:.2f}s"
            )
        logger.info(f"Outputs: {summary.tracks_path}, {summary.artists_path}")
        for table, count in summary.loaded.items():
            logger.info(f"Loaded {count} new rows into {table}")
        logger.info("Done!")

    except KeyboardInterrupt:
        logger.warning("Processing interrupted by user (Ctrl+C)")
        sys.exit(EXIT_INTERRUPTED)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(EXIT_CONFIG_ERROR)
    except (FileNotFoundError, UnicodeDecodeError, PermissionError, CsvParseError) as e:
        logger.error(f"Failed to read input data: {e}")
        sys.exit(EXIT_INPUT_ERROR)
    except (DatasetDownloadError, StorageError, DatabaseLoadError) as e:
        logger.error(f"Pipeline failed: {e}")
        sys.exit(EXIT_PIPELINE_FAILURE)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        sys.exit(EXIT_UNEXPECTED_ERROR)
