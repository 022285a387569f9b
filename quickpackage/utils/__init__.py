"""Utility functions for quickpackage"""

from .version_utils import parse_version, is_valid_version

__all__ = [
    "parse_version",
    "is_valid_version",
]
