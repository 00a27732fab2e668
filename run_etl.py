#!/usr/bin/env python3
"""
Spotify ETL - Entry Point Wrapper

Simple wrapper script for running the pipeline from a source checkout
without installing the console script.
"""

import sys

from spotify_etl.cli import main as cli_main, create_argument_parser


def main():
    """Main entry point that delegates to the package CLI."""
    try:
        cli_main()
    except KeyboardInterrupt:
        sys.exit(130)  # Standard exit code for Ctrl+C


__all__ = ['main', 'create_argument_parser']

if __name__ == "__main__":
    main()
