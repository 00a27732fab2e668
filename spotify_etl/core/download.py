"""
Dataset download module.

This module fetches the Kaggle dataset archive with the official kaggle
CLI and extracts its CSV files into the data directory.
"""

import logging
import os
import shutil
import subprocess
import zipfile

from ..models import DatasetConfig

logger = logging.getLogger(__name__)


class DatasetDownloadError(Exception):
    """Raised when the dataset can't be downloaded or extracted."""
    pass


def dataset_files_present(dataset: DatasetConfig) -> bool:
    """Check whether both dataset CSV files already exist locally."""
    return os.path.isfile(dataset.tracks_path) and os.path.isfile(dataset.artists_path)


def download_dataset(dataset: DatasetConfig, force: bool = False) -> None:
    """
    Download and extract the dataset into ``dataset.data_dir``.

    Args:
        dataset: Dataset coordinates
        force: Download even when both CSV files are already present

    Raises:
        DatasetDownloadError: If the kaggle CLI is missing, fails, or the
            archive can't be extracted
    """
    if not force and dataset_files_present(dataset):
        logger.info(f"Dataset files already present in {dataset.data_dir}, skipping download")
        return

    if shutil.which("kaggle") is None:
        raise DatasetDownloadError(
            "kaggle CLI not found. Install with: pip install kaggle"
        )

    os.makedirs(dataset.data_dir, exist_ok=True)
    command = ["kaggle", "datasets", "download", "-d", dataset.slug, "-p", dataset.data_dir]

    logger.info(f"Downloading dataset {dataset.slug} into {dataset.data_dir}")
    try:
        completed = subprocess.run(command, capture_output=True, text=True, check=True)
    except subprocess.CalledProcessError as e:
        output = (e.stderr or e.stdout or "").strip()
        raise DatasetDownloadError(
            f"Failed to download dataset {dataset.slug}: {output}"
        ) from e

    logger.debug(completed.stdout.strip())
    extract_dataset(dataset)


def extract_dataset(dataset: DatasetConfig) -> None:
    """
    Unzip the downloaded archive and remove it.

    Raises:
        DatasetDownloadError: If the archive is missing or corrupt
    """
    archive_path = dataset.archive_path
    logger.info(f"Unzipping files for dataset {dataset.slug}...")

    try:
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(dataset.data_dir)
    except FileNotFoundError as e:
        raise DatasetDownloadError(f"Dataset archive not found: {archive_path}") from e
    except zipfile.BadZipFile as e:
        raise DatasetDownloadError(f"Dataset archive is corrupt: {archive_path}") from e

    os.remove(archive_path)
    logger.info("Unzip completed.")
