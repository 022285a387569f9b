"""QuickPackage - declarative build, install and uninstall for single-application deployments.

A small config document describes which files to build and install, which
scripts to run at each stage and whether the application runs as a systemd
service. The same document can also produce a Debian source package.
"""

from .__version__ import __version__, __version_info__, __author__, __license__

# Exceptions
from .api.exceptions import (
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

# Core API
from .api.lifecycle import Lifecycle, build, install, uninstall, package

# Data models
from .models import (
    AppConfig,
    FileEntry,
    Settings,
    SystemUnit,
    TemplatedUnit,
    BuildResult,
    InstallResult,
    UninstallResult,
    PackageResult,
)

# Config loading
from .services.config_service import load_config

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__license__",

    # Main class
    "Lifecycle",

    # Core API functions
    "build",
    "install",
    "uninstall",
    "package",
    "load_config",

    # Data models
    "AppConfig",
    "FileEntry",
    "Settings",
    "SystemUnit",
    "TemplatedUnit",
    "BuildResult",
    "InstallResult",
    "UninstallResult",
    "PackageResult",

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
