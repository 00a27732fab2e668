"""
Logging utilities for the Spotify dataset ETL pipeline.

This module provides centralized logging configuration and structured
stage logging so that every run leaves a machine-readable trail.
"""

import json
import logging
import math
import time
from typing import Any, Dict, Optional


def setup_logging(verbose: bool = False):
    """Setup logging configuration with appropriate level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    format_string = "%(asctime)s - %(levelname)s - %(message)s"

    logging.basicConfig(level=level, format=format_string, datefmt="%Y-%m-%d %H:%M:%S")

    # Set specific logger levels
    logging.getLogger("botocore").setLevel(logging.WARNING)  # Reduce AWS SDK noise
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)  # Reduce HTTP client noise
    logging.getLogger("psycopg").setLevel(logging.WARNING)


def _json_safe(value: Any) -> Any:
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    return value


def log_stage_event(
    stage: str,
    details: Dict[str, Any],
    success: bool = True,
    timestamp: Optional[float] = None,
    logger: Optional[logging.Logger] = None,
):
    """
    Log a structured record describing the outcome of a pipeline stage.

    The record is emitted as ``STAGE: {json}`` so runs can be audited by
    grepping the log.

    Args:
        stage: Stage name (download, transform, write, upload, load)
        details: Stage-specific counters and paths
        success: Whether the stage completed
        timestamp: Event timestamp (defaults to current time)
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if timestamp is None:
        timestamp = time.time()

    record = {
        "event_type": "pipeline_stage",
        "stage": stage,
        "timestamp": timestamp,
        "success": success,
    }
    record.update({key: _json_safe(value) for key, value in details.items()})

    if success:
        logger.info(f"STAGE: {json.dumps(record, ensure_ascii=False)}")
    else:
        logger.error(f"STAGE_FAILURE: {json.dumps(record, ensure_ascii=False)}")
