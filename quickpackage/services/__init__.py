# quickpackage/services/__init__.py
"""Business logic services for quickpackage"""

from .config_service import ConfigService
from .unit_manager import ServiceUnitManager
from .build_service import BuildService
from .install_service import InstallService
from .uninstall_service import UninstallService
from .package_service import PackageService

__all__ = [
    "ConfigService",
    "ServiceUnitManager",
    "BuildService",
    "InstallService",
    "UninstallService",
    "PackageService",
]
