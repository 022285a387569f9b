# quickpackage/api/__init__.py
"""API layer for quickpackage"""

from .exceptions import (
    QuickPackageError,
    ConfigError,
    GlobError,
    PathError,
    CopyError,
    StagingNotFoundError,
    ScriptError,
    ServiceError,
    ServiceTimeoutError,
    PackageError,
)
from .lifecycle import Lifecycle, build, install, uninstall, package

__all__ = [
    # Main class
    "Lifecycle",

    # Convenience functions
    "build",
    "install",
    "uninstall",
    "package",

    # Exceptions
    "QuickPackageError",
    "ConfigError",
    "GlobError",
    "PathError",
    "CopyError",
    "StagingNotFoundError",
    "ScriptError",
    "ServiceError",
    "ServiceTimeoutError",
    "PackageError",
]
