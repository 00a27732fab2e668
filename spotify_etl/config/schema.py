"""
Configuration schema definition using Pydantic.

This module defines the declarative configuration schema that serves as
the single source of truth for all configuration in the application.
"""

from typing import Optional, Any
from pydantic import BaseModel, Field, field_validator

from ..constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_CONNECTION_TIMEOUT,
    DEFAULT_DATA_DIR,
    DEFAULT_DATASET_NAME,
    DEFAULT_DATASET_OWNER,
    DEFAULT_QUERY_TIMEOUT,
    DEFAULT_S3_ARTISTS_KEY,
    DEFAULT_S3_TRACKS_KEY,
)


class ConfigSchema(BaseModel):
    """
    Declarative configuration schema.

    Each field can be set via environment variables or CLI arguments.
    """

    # Dataset configuration
    kaggle_dataset_owner: str = Field(
        DEFAULT_DATASET_OWNER,
        description="Kaggle dataset owner",
        json_schema_extra={
            "env_var": "KAGGLE_DATASET_OWNER",
            "cli_arg": "dataset_owner",
        }
    )

    kaggle_dataset_name: str = Field(
        DEFAULT_DATASET_NAME,
        description="Kaggle dataset name",
        json_schema_extra={
            "env_var": "KAGGLE_DATASET_NAME",
            "cli_arg": "dataset_name",
        }
    )

    data_dir: str = Field(
        DEFAULT_DATA_DIR,
        description="Directory holding tracks.csv and artists.csv",
        json_schema_extra={
            "env_var": "DATA_DIR",
            "cli_arg": "data_dir",
        }
    )

    # Transformation configuration
    fix_time_signature_column: bool = Field(
        False,
        description="Read time_signature from its own column instead of the tempo column",
        json_schema_extra={
            "env_var": "FIX_TIME_SIGNATURE_COLUMN",
            "cli_arg": "fix_time_signature_column",
            "cli_choices": ["true", "false"],
        }
    )

    # Object storage configuration
    aws_region: Optional[str] = Field(
        None,
        description="AWS region of the S3 bucket",
        json_schema_extra={
            "env_var": "AWS_REGION",
            "cli_arg": "aws_region",
        }
    )

    s3_bucket: Optional[str] = Field(
        None,
        description="S3 bucket receiving the transformed outputs",
        json_schema_extra={
            "env_var": "S3_BUCKET_NAME",
            "cli_arg": "s3_bucket",
        }
    )

    s3_tracks_key: str = Field(
        DEFAULT_S3_TRACKS_KEY,
        description="S3 object key for the tracks output",
        json_schema_extra={
            "env_var": "S3_TRACKS_KEY",
            "cli_arg": "s3_tracks_key",
        }
    )

    s3_artists_key: str = Field(
        DEFAULT_S3_ARTISTS_KEY,
        description="S3 object key for the artists output",
        json_schema_extra={
            "env_var": "S3_ARTISTS_KEY",
            "cli_arg": "s3_artists_key",
        }
    )

    # Database configuration
    database_url: Optional[str] = Field(
        None,
        description="Database connection URL",
        json_schema_extra={
            "env_var": "DATABASE_URL",
            "cli_arg": "db_url",
            "sensitive": True,
        }
    )

    batch_size: int = Field(
        DEFAULT_BATCH_SIZE,
        ge=1,
        le=10000,
        description="Records per database insert batch (1-10000)",
        json_schema_extra={
            "env_var": "BATCH_SIZE",
            "cli_arg": "batch_size",
        }
    )

    db_connection_timeout: int = Field(
        DEFAULT_CONNECTION_TIMEOUT,
        ge=1,
        description="Seconds to wait for the database connection",
        json_schema_extra={
            "env_var": "DB_CONNECTION_TIMEOUT",
            "cli_arg": "db_connection_timeout",
        }
    )

    db_query_timeout: int = Field(
        DEFAULT_QUERY_TIMEOUT,
        ge=1,
        description="Statement timeout in seconds for each insert batch",
        json_schema_extra={
            "env_var": "DB_QUERY_TIMEOUT",
            "cli_arg": "db_query_timeout",
        }
    )

    @field_validator('fix_time_signature_column', mode='before')
    @classmethod
    def parse_bool(cls, v: Any) -> bool:
        """Parse boolean from string values."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            v_lower = v.strip().lower()
            if v_lower in ('1', 'true', 'yes', 'on'):
                return True
            elif v_lower in ('0', 'false', 'no', 'off'):
                return False
            else:
                raise ValueError(f"Invalid boolean value: {v}")
        return bool(v)

    model_config = {
        "validate_assignment": True,
        "extra": "forbid"
    }
