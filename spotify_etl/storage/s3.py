"""
S3 storage module.

This module uploads transformed output files to S3 and downloads
previously uploaded outputs back to local disk.
"""

import logging
import os
from typing import Any, Optional

try:
    import boto3
    from botocore.exceptions import BotoCoreError, ClientError
except ImportError:
    boto3 = None
    BotoCoreError = ClientError = None

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when an object storage transfer fails."""
    pass


def _transfer_errors() -> tuple:
    if BotoCoreError is None:
        return ()
    return (BotoCoreError, ClientError)


def create_s3_client(region: Optional[str] = None) -> Any:
    """
    Create an S3 client.

    Credentials are resolved by boto3's usual chain (environment, shared
    config, instance profile).

    Raises:
        StorageError: If boto3 is not installed
    """
    if boto3 is None:
        raise StorageError("boto3 not available. Install with: pip install boto3")

    logger.debug(f"Creating S3 client (region={region or 'default'})")
    return boto3.client("s3", region_name=region)


def upload_file(client: Any, bucket: str, key: str, file_path: str) -> None:
    """
    Upload a local file to ``s3://bucket/key``.

    Raises:
        FileNotFoundError: If the local file doesn't exist
        StorageError: If the upload fails
    """
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"Upload source not found: {file_path}")

    logger.info(f"Uploading {file_path} to s3://{bucket}/{key}")
    try:
        client.upload_file(file_path, bucket, key)
    except _transfer_errors() as e:
        raise StorageError(f"Failed to upload file to S3: {e}") from e

    logger.info(f"Uploaded s3://{bucket}/{key}")


def download_file(client: Any, bucket: str, key: str, download_path: str) -> None:
    """
    Download ``s3://bucket/key`` to a local path.

    Raises:
        StorageError: If the download fails
    """
    download_dir = os.path.dirname(download_path)
    if download_dir:
        os.makedirs(download_dir, exist_ok=True)

    logger.info(f"Downloading s3://{bucket}/{key} to {download_path}")
    try:
        client.download_file(bucket, key, download_path)
    except _transfer_errors() as e:
        raise StorageError(f"Failed to download file from S3: {e}") from e
