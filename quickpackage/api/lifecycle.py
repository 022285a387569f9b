"""Lifecycle API for build, install, uninstall and package operations"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..core.script_runner import ScriptRunner
from ..core.staging import StagingArea
from ..core.systemctl import Systemctl
from ..models import AppConfig, Settings, BuildResult, InstallResult, UninstallResult, PackageResult
from ..services import (
    ServiceUnitManager,
    BuildService,
    InstallService,
    UninstallService,
    PackageService,
)

logger = logging.getLogger(__name__)


class Lifecycle:
    """Wires the stages together around one set of settings"""

    def __init__(self, settings: Optional[Settings] = None,
                 systemctl: Optional[Systemctl] = None):
        """
        Initialize lifecycle

        Args:
            settings: Runtime settings (defaults to Settings.from_env())
            systemctl: systemctl wrapper shared by every stage
        """
        self.settings = settings or Settings.from_env()
        self.staging = StagingArea(self.settings.temp_dir)
        self.script_runner = ScriptRunner()
        self.unit_manager = ServiceUnitManager(self.settings, systemctl)

        self.build_service = BuildService(
            self.settings, staging=self.staging, script_runner=self.script_runner
        )
        self.install_service = InstallService(
            self.settings,
            unit_manager=self.unit_manager,
            staging=self.staging,
            script_runner=self.script_runner,
        )
        self.uninstall_service = UninstallService(
            self.settings, unit_manager=self.unit_manager, script_runner=self.script_runner
        )
        self.package_service = PackageService(
            self.settings,
            build_service=self.build_service,
            install_service=self.install_service,
            staging=self.staging,
            script_runner=self.script_runner,
        )

    def build(self, config: AppConfig) -> BuildResult:
        """Stage build files and run the build script"""
        return self.build_service.build(config)

    def install(self, config: AppConfig, skip_build: bool = False) -> InstallResult:
        """
        Build, then install from the staging directory the build produced

        Args:
            config: Validated app config
            skip_build: Reuse the staging directory of an earlier build
                instead of building now

        Returns:
            InstallResult
        """
        staging_dir = None
        if not skip_build:
            staging_dir = self.build_service.build(config).staging_dir
        else:
            logger.info("Skipping build, looking for an earlier staging directory")
        return self.install_service.install(config, staging_dir=staging_dir)

    def uninstall(self, config: AppConfig) -> UninstallResult:
        """Tear down the service and delete the install root"""
        return self.uninstall_service.uninstall(config)

    def package(self, config: AppConfig,
                output_dir: Union[str, Path, None] = None,
                build: bool = True) -> PackageResult:
        """Generate a Debian tree and optionally build the package"""
        return self.package_service.package(
            config, Path(output_dir) if output_dir else None, build=build
        )


def build(config: AppConfig, settings: Optional[Settings] = None) -> BuildResult:
    """
    Run the build stage (convenience function)

    Args:
        config: Validated app config
        settings: Runtime settings

    Returns:
        BuildResult
    """
    return Lifecycle(settings).build(config)


def install(config: AppConfig, settings: Optional[Settings] = None,
            skip_build: bool = False) -> InstallResult:
    """
    Run the build stage then the install stage (convenience function)

    Args:
        config: Validated app config
        settings: Runtime settings
        skip_build: Reuse an earlier build's staging directory

    Returns:
        InstallResult
    """
    return Lifecycle(settings).install(config, skip_build=skip_build)


def uninstall(config: AppConfig, settings: Optional[Settings] = None) -> UninstallResult:
    """Run the uninstall stage (convenience function)"""
    return Lifecycle(settings).uninstall(config)


def package(config: AppConfig, settings: Optional[Settings] = None,
            output_dir: Union[str, Path, None] = None,
            build: bool = True) -> PackageResult:
    """Generate a Debian tree (convenience function)"""
    return Lifecycle(settings).package(config, output_dir=output_dir, build=build)
