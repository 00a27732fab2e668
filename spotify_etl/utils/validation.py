"""
Validation utilities for the Spotify dataset ETL pipeline.

This module provides validation functions for paths and other
data validation needs across the application.
"""

import os
from pathlib import Path
from typing import Optional, Tuple


def _is_output_dir_writable(path_str: str) -> Tuple[bool, Optional[str]]:
    """Check whether an output directory exists (or can be created) and is writable."""
    try:
        path = Path(path_str)
        target = path
        while not target.exists():
            if target.parent == target:
                return False, f"Output directory has no existing parent: {path}"
            target = target.parent
        if not target.is_dir():
            return False, f"Output path is not a directory: {target}"
        if not os.access(target, os.W_OK):
            return False, f"No write permission for directory: {target}"
        return True, None
    except Exception as e:
        return False, f"Unable to validate output directory '{path_str}': {e}"
