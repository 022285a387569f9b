# quickpackage/models/__init__.py
"""Data models for quickpackage"""

from .config import AppConfig, FileEntry
from .settings import Settings
from .unit import ServiceUnit, SystemUnit, TemplatedUnit, unit_from_config
from .result import (
    OperationStatus,
    ValidationResult,
    Result,
    BuildResult,
    InstallResult,
    UninstallResult,
    PackageResult,
)

__all__ = [
    # Config models
    "AppConfig",
    "FileEntry",
    "Settings",

    # Unit models
    "ServiceUnit",
    "SystemUnit",
    "TemplatedUnit",
    "unit_from_config",

    # Result models
    "OperationStatus",
    "ValidationResult",
    "Result",
    "BuildResult",
    "InstallResult",
    "UninstallResult",
    "PackageResult",
]
