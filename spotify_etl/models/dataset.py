#!/usr/bin/env python3
"""
Dataset Models

This module contains the configuration struct describing where the
Kaggle dataset comes from and where its files live locally.
"""

import os
from typing import NamedTuple

from ..constants import (
    ARTISTS_FILE_NAME,
    DEFAULT_DATA_DIR,
    DEFAULT_DATASET_NAME,
    DEFAULT_DATASET_OWNER,
    TRACKS_FILE_NAME,
)


class DatasetConfig(NamedTuple):
    """
    Dataset coordinates, passed explicitly to whatever needs them.

    Attributes:
        owner: Kaggle dataset owner
        name: Kaggle dataset name
        data_dir: Directory the dataset files are extracted into
    """

    owner: str = DEFAULT_DATASET_OWNER
    name: str = DEFAULT_DATASET_NAME
    data_dir: str = DEFAULT_DATA_DIR

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def archive_path(self) -> str:
        return os.path.join(self.data_dir, f"{self.name}.zip")

    @property
    def tracks_path(self) -> str:
        return os.path.join(self.data_dir, TRACKS_FILE_NAME)

    @property
    def artists_path(self) -> str:
        return os.path.join(self.data_dir, ARTISTS_FILE_NAME)
