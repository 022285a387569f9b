"""Install stage: place files, run the install script, (re)start the service"""

import logging
from pathlib import Path
from typing import List, Optional

from ..api.exceptions import CopyError, ServiceError, ServiceTimeoutError, StagingNotFoundError
from ..constants import FileSource
from ..core.path_resolver import PathResolver, PathPair
from ..core.script_runner import ScriptRunner
from ..core.staging import StagingArea
from ..models.config import AppConfig, FileEntry
from ..models.result import InstallResult
from ..models.settings import Settings
from .unit_manager import ServiceUnitManager

logger = logging.getLogger(__name__)


class InstallService:
    """Copies install files into the install root around a service restart

    Order of operations:

    1. stop the running service (if managed)
    2. create the install root
    3. locate the staging directory
    4. copy install files by provenance
    5. run the install script in the install root
    6. write/enable/start the unit, so the new version is in place first
    7. remove every staging directory of the app
    """

    def __init__(self,
                 settings: Settings,
                 unit_manager: Optional[ServiceUnitManager] = None,
                 staging: Optional[StagingArea] = None,
                 script_runner: Optional[ScriptRunner] = None):
        self.settings = settings
        self.unit_manager = unit_manager or ServiceUnitManager(settings)
        self.staging = staging or StagingArea(settings.temp_dir)
        self.script_runner = script_runner or ScriptRunner()

    def install(self, config: AppConfig, staging_dir: Optional[Path] = None) -> InstallResult:
        """
        Install an app

        Args:
            config: Validated app config
            staging_dir: Staging directory returned by the build stage; when
                omitted, an earlier build's directory is looked up by prefix

        Returns:
            InstallResult

        Raises:
            CopyError: If a source is missing, a provenance is unknown or copying fails
            StagingNotFoundError: If a build file is needed but nothing was built
            ScriptError: If the install script exits non-zero
            ServiceError: If the unit cannot be installed or started
            ServiceTimeoutError: If the running service does not stop in time
        """
        install_root = config.install_root(self.settings.install_path)
        result = InstallResult(app_name=config.app_name, install_root=install_root)

        stopped: List[str] = []
        if config.service_enabled:
            stopped = self._stop_service(config, result)

        try:
            install_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CopyError(f"Failed to create install root {install_root}: {e}")

        build_dir = staging_dir
        if build_dir is None and config.requires_build():
            build_dir = self.staging.discover(config.app_name)
        result.staging_dir = build_dir

        result.installed = self.place_files(config, build_dir, install_root)

        if config.install_script:
            source = config.script_path(config.install_script, self.settings.project_root)
            logger.info("Running install script %s", config.install_script)
            self.script_runner.stage_and_run(source, install_root)
            result.script_ran = True

        if config.service_enabled:
            unit_path, started = self.unit_manager.install(config, restart_units=stopped)
            result.unit_path = unit_path
            result.started_units = started

        result.removed_staging = self.staging.cleanup(config.app_name)

        result.message = f"Installed {len(result.installed)} path(s) to {install_root}"
        result.complete()
        return result

    def _stop_service(self, config: AppConfig, result: InstallResult) -> List[str]:
        try:
            return self.unit_manager.stop_if_active(config)
        except ServiceTimeoutError:
            raise
        except ServiceError as e:
            logger.warning("Could not stop %s before install: %s", config.app_name, e)
            result.add_warning(f"Pre-install stop failed: {e}")
            return []

    def place_files(self, config: AppConfig, build_dir: Optional[Path],
                    dest_root: Path) -> List[PathPair]:
        """Copy every install file under dest_root according to its provenance

        Args:
            config: App config
            build_dir: Staging directory for build-provenance files, or None
            dest_root: Directory to copy into

        Returns:
            List of (source, destination) pairs
        """
        placed: List[PathPair] = []
        for entry in config.install_files:
            placed.extend(self._place(config, entry, build_dir, dest_root))
        return placed

    def _place(self, config: AppConfig, entry: FileEntry,
               build_dir: Optional[Path], dest_root: Path) -> List[PathPair]:
        provenance = entry.provenance

        if provenance == FileSource.CWD:
            base = self.settings.project_root
        elif provenance == FileSource.BUILD:
            if build_dir is None:
                raise StagingNotFoundError(config.app_name, entry.file)
            base = build_dir
        else:
            raise CopyError(f"Unknown source '{entry.source}' for install file {entry.file}")

        return PathResolver(base).copy(entry.file, dest_root, required=True)
