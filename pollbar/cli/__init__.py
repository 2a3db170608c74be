"""
CLI Module

Argument parsing for the demo runner.
"""

from pollbar.cli.config import parse_arguments

__all__ = [
    'parse_arguments',
]
