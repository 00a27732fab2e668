#!/usr/bin/env python3
"""
Tests for the command-line entry point and its exit codes.
"""

import importlib
import json
import os
import shutil
import sys
import tempfile
import unittest
from io import StringIO
from unittest.mock import patch

# Add parent directory to path to import helpers
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from helpers.dataset import ARTISTS_HEADER, SCENARIO_TRACK_ROW, TRACKS_HEADER, artist_row, track_row, write_csv

from spotify_etl.cli import main
from spotify_etl.constants import (
    EXIT_CONFIG_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_INTERRUPTED,
    EXIT_PIPELINE_FAILURE,
    EXIT_UNEXPECTED_ERROR,
)
from spotify_etl.database import DatabaseLoadError
from spotify_etl.storage import StorageError

# spotify_etl.cli re-exports main(), which shadows the submodule attribute
cli_main_module = importlib.import_module("spotify_etl.cli.main")


@patch.dict(os.environ, {}, clear=True)
@patch('spotify_etl.config.loader._load_from_dotenv_file')
class TestCliMain(unittest.TestCase):
    """Test cases for main()."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.data_dir = os.path.join(self.temp_dir, "artifacts")
        self.output_dir = os.path.join(self.temp_dir, "output")

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def _write_dataset(self, extra_tracks=0):
        tracks = [TRACKS_HEADER, SCENARIO_TRACK_ROW]
        tracks.extend(track_row(f"t{i}") for i in range(extra_tracks))
        write_csv(os.path.join(self.data_dir, "tracks.csv"), tracks)
        write_csv(os.path.join(self.data_dir, "artists.csv"), [ARTISTS_HEADER, artist_row("A1")])

    def _args(self, *extra):
        return ["--data-dir", self.data_dir, "--output-dir", self.output_dir, *extra]

    def _exit_code(self, argv):
        with self.assertRaises(SystemExit) as cm:
            main(argv)
        return cm.exception.code

    def test_writes_outputs(self, mock_dotenv):
        self._write_dataset()

        main(self._args())

        with open(os.path.join(self.output_dir, "tracks.jsonl"), encoding="utf-8") as f:
            tracks = [json.loads(line) for line in f]
        self.assertEqual(len(tracks), 1)
        self.assertEqual(tracks[0]["artist_id"], "A1")
        self.assertTrue(os.path.exists(os.path.join(self.output_dir, "artists.jsonl")))

    def test_dry_run_prints_first_five_and_writes_nothing(self, mock_dotenv):
        self._write_dataset(extra_tracks=6)

        with patch('sys.stdout', new_callable=StringIO) as stdout:
            main(self._args("--dry-run"))

        output = stdout.getvalue()
        self.assertIn("tracks: 7 records", output)
        self.assertIn("... and 2 more tracks", output)
        self.assertIn("artists: 1 records", output)
        self.assertFalse(os.path.exists(self.output_dir))

    def test_missing_input_exits_with_input_error(self, mock_dotenv):
        self.assertEqual(self._exit_code(self._args()), EXIT_INPUT_ERROR)

    def test_invalid_batch_size_exits_with_config_error(self, mock_dotenv):
        self.assertEqual(self._exit_code(self._args("--batch-size", "0")), EXIT_CONFIG_ERROR)

    def test_upload_without_bucket_exits_with_config_error(self, mock_dotenv):
        self._write_dataset()
        self.assertEqual(self._exit_code(self._args("--upload")), EXIT_CONFIG_ERROR)

    def test_load_without_database_url_exits_with_config_error(self, mock_dotenv):
        self._write_dataset()
        self.assertEqual(self._exit_code(self._args("--load-db")), EXIT_CONFIG_ERROR)

    @patch.object(cli_main_module, 'run_pipeline')
    def test_stage_failures_exit_with_pipeline_failure(self, mock_run, mock_dotenv):
        for error in [DatabaseLoadError("batch failed"), StorageError("access denied")]:
            with self.subTest(error=error):
                mock_run.side_effect = error
                self.assertEqual(self._exit_code(self._args()), EXIT_PIPELINE_FAILURE)

    @patch.object(cli_main_module, 'run_pipeline', side_effect=RuntimeError("boom"))
    def test_unexpected_error(self, mock_run, mock_dotenv):
        self.assertEqual(self._exit_code(self._args()), EXIT_UNEXPECTED_ERROR)

    @patch.object(cli_main_module, 'run_pipeline', side_effect=KeyboardInterrupt)
    def test_interrupted(self, mock_run, mock_dotenv):
        self.assertEqual(self._exit_code(self._args()), EXIT_INTERRUPTED)

    @patch.object(cli_main_module, 'run_pipeline')
    def test_flags_become_pipeline_options(self, mock_run, mock_dotenv):
        mock_run.return_value.result = None
        mock_run.return_value.loaded = {}

        main(self._args("--download", "--upload", "--load-db", "--test-mode"))

        env, options = mock_run.call_args[0]
        self.assertTrue(options.download)
        self.assertFalse(options.force_download)
        self.assertTrue(options.upload)
        self.assertTrue(options.load_db)
        self.assertTrue(options.test_mode)
        self.assertEqual(options.output_dir, self.output_dir)
        self.assertEqual(env.DATA_DIR, self.data_dir)


if __name__ == "__main__":
    unittest.main()
