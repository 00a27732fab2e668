#!/usr/bin/env python3
"""
Storage package for the Spotify dataset ETL pipeline.

This package moves output files between local disk and S3.
"""

from .s3 import (
    StorageError,
    create_s3_client,
    upload_file,
    download_file,
)

__all__ = [
    "StorageError",
    "create_s3_client",
    "upload_file",
    "download_file",
]
