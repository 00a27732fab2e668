#!/usr/bin/env python3
"""
Tests for the Kaggle dataset download step.

The kaggle CLI itself is never invoked; subprocess.run is patched and a
real zip archive is written where the CLI would leave it.
"""

import os
import shutil
import subprocess
import tempfile
import unittest
import zipfile
from unittest.mock import patch

from spotify_etl.core import DatasetDownloadError, dataset_files_present, download_dataset
from spotify_etl.core.download import extract_dataset
from spotify_etl.models import DatasetConfig


class TestDownloadDataset(unittest.TestCase):
    """Test cases for download_dataset and extract_dataset."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.dataset = DatasetConfig(data_dir=os.path.join(self.temp_dir, "artifacts"))

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def _write_archive(self):
        os.makedirs(self.dataset.data_dir, exist_ok=True)
        with zipfile.ZipFile(self.dataset.archive_path, "w") as archive:
            archive.writestr("tracks.csv", "id,name\n")
            archive.writestr("artists.csv", "id,followers\n")

    def _fake_kaggle(self, command, **kwargs):
        self._write_archive()
        return subprocess.CompletedProcess(command, 0, stdout="Downloading...\n", stderr="")

    @patch("spotify_etl.core.download.subprocess.run")
    @patch("spotify_etl.core.download.shutil.which", return_value="/usr/bin/kaggle")
    def test_downloads_and_extracts(self, mock_which, mock_run):
        mock_run.side_effect = self._fake_kaggle

        download_dataset(self.dataset)

        command = mock_run.call_args[0][0]
        self.assertEqual(
            command,
            [
                "kaggle", "datasets", "download",
                "-d", "yamaerenay/spotify-dataset-19212020-600k-tracks",
                "-p", self.dataset.data_dir,
            ],
        )
        self.assertTrue(dataset_files_present(self.dataset))
        self.assertFalse(os.path.exists(self.dataset.archive_path))

    @patch("spotify_etl.core.download.subprocess.run")
    def test_skips_when_files_present(self, mock_run):
        os.makedirs(self.dataset.data_dir)
        for path in (self.dataset.tracks_path, self.dataset.artists_path):
            with open(path, "w") as f:
                f.write("id\n")

        download_dataset(self.dataset)

        mock_run.assert_not_called()

    @patch("spotify_etl.core.download.subprocess.run")
    @patch("spotify_etl.core.download.shutil.which", return_value="/usr/bin/kaggle")
    def test_force_downloads_again(self, mock_which, mock_run):
        mock_run.side_effect = self._fake_kaggle
        os.makedirs(self.dataset.data_dir)
        for path in (self.dataset.tracks_path, self.dataset.artists_path):
            with open(path, "w") as f:
                f.write("stale\n")

        download_dataset(self.dataset, force=True)

        mock_run.assert_called_once()
        with open(self.dataset.tracks_path) as f:
            self.assertEqual(f.read(), "id,name\n")

    @patch("spotify_etl.core.download.shutil.which", return_value=None)
    def test_missing_cli(self, mock_which):
        with self.assertRaises(DatasetDownloadError) as cm:
            download_dataset(self.dataset)
        self.assertIn("kaggle", str(cm.exception))

    @patch("spotify_etl.core.download.subprocess.run")
    @patch("spotify_etl.core.download.shutil.which", return_value="/usr/bin/kaggle")
    def test_cli_failure(self, mock_which, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(
            1, ["kaggle"], output="", stderr="401 - Unauthorized"
        )

        with self.assertRaises(DatasetDownloadError) as cm:
            download_dataset(self.dataset)
        self.assertIn("401 - Unauthorized", str(cm.exception))

    def test_extract_missing_archive(self):
        with self.assertRaises(DatasetDownloadError):
            extract_dataset(self.dataset)

    def test_extract_corrupt_archive(self):
        os.makedirs(self.dataset.data_dir)
        with open(self.dataset.archive_path, "wb") as f:
            f.write(b"not a zip")

        with self.assertRaises(DatasetDownloadError):
            extract_dataset(self.dataset)


if __name__ == "__main__":
    unittest.main()
