"""Version utilities"""

from typing import Optional

from packaging.version import parse, Version, InvalidVersion


def parse_version(version_str: str) -> Optional[Version]:
    """
    Parse version string

    Args:
        version_str: Version string

    Returns:
        Version object or None if invalid
    """
    try:
        return parse(version_str)
    except InvalidVersion:
        return None


def is_valid_version(version_str: str) -> bool:
    """Check that a package version parses and starts with a digit"""
    return bool(version_str) and version_str[0].isdigit() and parse_version(version_str) is not None
