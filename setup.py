#!/usr/bin/env python3
"""
Setup script for the Spotify ETL package.
"""

import re

from setuptools import setup, find_packages

# Read metadata from package without importing it
with open("spotify_etl/__init__.py") as f:
    source = f.read()


def _metadata(name):
    return re.search(rf'^{name} = \(?\s*"([^"]+)"', source, re.M).group(1)


# Read requirements
with open("requirements.txt") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="spotify-etl",
    version=_metadata("__version__"),
    author=_metadata("__author__"),
    description=_metadata("__description__"),
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "spotify-etl=spotify_etl.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Database",
    ],
    keywords="etl spotify kaggle s3 postgresql",
)
