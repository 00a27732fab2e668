#!/usr/bin/env python3
"""
Test runner script for the Spotify ETL project.

This script discovers the unittest suites under tests/<area>/ and
provides a summary of results.
"""

import sys
import unittest
from pathlib import Path


def discover_and_run_tests(pattern: str = "test_*.py") -> bool:
    """Discover and run every test module below tests/."""
    script_dir = Path(__file__).parent
    test_dir = script_dir / "tests"

    if not test_dir.exists():
        print(f"Tests directory not found: {test_dir}")
        return False

    # tests/helpers is imported as a top-level package by the suites
    if str(test_dir) not in sys.path:
        sys.path.insert(0, str(test_dir))
    if str(script_dir) not in sys.path:
        sys.path.insert(0, str(script_dir))

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    for area in sorted(p for p in test_dir.iterdir() if p.is_dir() and p.name != "helpers"):
        area_suite = loader.discover(str(area), pattern=pattern, top_level_dir=str(area))
        print(f"Loaded {area_suite.countTestCases()} tests from {area.name}/")
        suite.addTests(area_suite)

    runner = unittest.TextTestRunner(verbosity=2, stream=sys.stdout)
    result = runner.run(suite)

    print("\n" + "=" * 60)
    print(f"Tests run: {result.testsRun}")
    print(f"Failures: {len(result.failures)}")
    print(f"Errors: {len(result.errors)}")
    print(f"Skipped: {len(result.skipped)}")
    print("=" * 60)

    return result.wasSuccessful()


if __name__ == "__main__":
    sys.exit(0 if discover_and_run_tests() else 1)
