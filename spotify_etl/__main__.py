#!/usr/bin/env python3
"""
Enable execution of the spotify_etl package as a module.

This allows running the package with: python -m spotify_etl
"""

from .cli.main import main

if __name__ == "__main__":
    main()
