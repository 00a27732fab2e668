"""
Environment configuration module.

This module provides the immutable Env container handed to the pipeline.
It is built from the validated schema and passed explicitly; there is no
process-wide instance.
"""

from __future__ import annotations

import logging
from argparse import Namespace
from dataclasses import asdict, dataclass
from typing import Mapping, Optional

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
from ..models import DatasetConfig
from .schema import ConfigSchema
from .loader import ConfigLoader

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass(frozen=True)
class Env:
    """Immutable configuration container for environment variables."""

    DATABASE_URL: Optional[str] = None
    AWS_REGION: Optional[str] = None
    S3_BUCKET_NAME: Optional[str] = None
    S3_TRACKS_KEY: str = DEFAULT_S3_TRACKS_KEY
    S3_ARTISTS_KEY: str = DEFAULT_S3_ARTISTS_KEY
    KAGGLE_DATASET_OWNER: str = DEFAULT_DATASET_OWNER
    KAGGLE_DATASET_NAME: str = DEFAULT_DATASET_NAME
    DATA_DIR: str = DEFAULT_DATA_DIR
    BATCH_SIZE: int = DEFAULT_BATCH_SIZE
    DB_CONNECTION_TIMEOUT: int = DEFAULT_CONNECTION_TIMEOUT
    DB_QUERY_TIMEOUT: int = DEFAULT_QUERY_TIMEOUT
    FIX_TIME_SIGNATURE_COLUMN: bool = False

    @staticmethod
    def load(
        cli_args: Optional[Namespace] = None,
        cli_overrides: Optional[Mapping[str, str]] = None,
    ) -> "Env":
        """
        Load configuration from all sources with precedence handling.

        Args:
            cli_args: Parsed command-line arguments
            cli_overrides: Optional mapping of env var names to values

        Returns:
            Configured Env instance

        Raises:
            ConfigError: If any value is invalid
        """
        try:
            config = ConfigLoader.load(
                schema=ConfigSchema, cli_args=cli_args, overrides=cli_overrides
            )
        except ValueError as e:
            raise ConfigError(str(e)) from e

        env = Env.from_config(config)
        logger.debug("Environment configuration loaded successfully")
        return env

    @staticmethod
    def from_config(config: ConfigSchema) -> "Env":
        """Create an Env instance from a validated schema instance."""
        return Env(
            DATABASE_URL=config.database_url,
            AWS_REGION=config.aws_region,
            S3_BUCKET_NAME=config.s3_bucket,
            S3_TRACKS_KEY=config.s3_tracks_key,
            S3_ARTISTS_KEY=config.s3_artists_key,
            KAGGLE_DATASET_OWNER=config.kaggle_dataset_owner,
            KAGGLE_DATASET_NAME=config.kaggle_dataset_name,
            DATA_DIR=config.data_dir,
            BATCH_SIZE=config.batch_size,
            DB_CONNECTION_TIMEOUT=config.db_connection_timeout,
            DB_QUERY_TIMEOUT=config.db_query_timeout,
            FIX_TIME_SIGNATURE_COLUMN=config.fix_time_signature_column,
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "Env":
        """
        Create Env instance from mapping (useful for testing).

        Only the mapping is consulted; the process environment is ignored.

        Raises:
            ConfigError: If any value is invalid
        """
        values = {}
        for field_name, field_info in ConfigSchema.model_fields.items():
            env_var = (field_info.json_schema_extra or {}).get("env_var")
            value = mapping.get(env_var)
            if isinstance(value, str):
                value = value.strip() or None
            if value is not None:
                values[field_name] = value

        try:
            config = ConfigSchema(**values)
        except ValueError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        return cls.from_config(config)

    def dataset_config(self) -> DatasetConfig:
        """Dataset coordinates for the download and transform stages."""
        return DatasetConfig(
            owner=self.KAGGLE_DATASET_OWNER,
            name=self.KAGGLE_DATASET_NAME,
            data_dir=self.DATA_DIR,
        )

    def to_dict(self) -> dict:
        """
        Convert environment to dictionary representation.

        Returns:
            Dictionary with all configuration values
        """
        return asdict(self)

    def mask(self) -> dict:
        """
        Return masked version for safe logging (hides sensitive values).

        Returns:
            Dictionary with sensitive values masked
        """
        masked = self.to_dict()
        masked["DATABASE_URL"] = "***" if self.DATABASE_URL else None
        return masked
