"""
CLI argument parser module.

The parser is generated from the configuration schema, plus the
stage-selection flags that only exist on the command line.
"""

from ..config.loader import ConfigLoader


def create_argument_parser():
    """Create and configure the argument parser."""
    return ConfigLoader.generate_cli_parser()
