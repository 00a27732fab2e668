"""
CSV source module.

This module reads the raw dataset CSV files into memory as lists of cells.
No header handling happens here; header rows are left to the row parser.
"""

import csv
import logging
from typing import List

logger = logging.getLogger(__name__)


class CsvParseError(Exception):
    """Raised when a CSV file is structurally malformed."""
    pass


def load_all_rows(file_path: str) -> List[List[str]]:
    """
    Load every row of a CSV file.

    Args:
        file_path: Path to the CSV file

    Returns:
        All rows, each a list of string cells

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the file can't be read
        CsvParseError: If the CSV syntax is malformed
    """
    try:
        with open(file_path, "r", encoding="utf-8", newline="") as f:
            csv_reader = csv.reader(f, strict=True)
            rows = []
            try:
                for row in csv_reader:
                    rows.append(row)
            except csv.Error as e:
                raise CsvParseError(
                    f"{file_path}, line {csv_reader.line_num}: {e}"
                ) from e

    except FileNotFoundError:
        logger.error(f"Input file not found: {file_path}")
        raise
    except UnicodeDecodeError as e:
        logger.error(f"Unable to decode file as UTF-8: {file_path}, error: {e}")
        raise CsvParseError(f"{file_path}: {e}") from e
    except CsvParseError as e:
        logger.error(f"Malformed CSV: {e}")
        raise

    logger.info(f"Loaded dataset containing {len(rows)} rows from {file_path}")
    return rows
