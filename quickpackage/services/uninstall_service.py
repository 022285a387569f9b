"""Uninstall stage: tear down the service, run the uninstall script, delete the install root"""

import logging
import shutil
from typing import Optional

from ..api.exceptions import CopyError
from ..core.script_runner import ScriptRunner
from ..models.config import AppConfig
from ..models.result import UninstallResult
from ..models.settings import Settings
from .unit_manager import ServiceUnitManager

logger = logging.getLogger(__name__)


class UninstallService:
    """Removes an installed app"""

    def __init__(self,
                 settings: Settings,
                 unit_manager: Optional[ServiceUnitManager] = None,
                 script_runner: Optional[ScriptRunner] = None):
        self.settings = settings
        self.unit_manager = unit_manager or ServiceUnitManager(settings)
        self.script_runner = script_runner or ScriptRunner()

    def uninstall(self, config: AppConfig) -> UninstallResult:
        """
        Uninstall an app

        Service teardown is best-effort. The uninstall script runs in the
        install root before it is deleted; the root is removed whatever the
        script left behind.

        Args:
            config: Validated app config

        Returns:
            UninstallResult

        Raises:
            CopyError: If the uninstall script or the install root is missing;
                the install root is removed before the error propagates
            ScriptError: If the uninstall script exits non-zero
        """
        install_root = config.install_root(self.settings.install_path)
        result = UninstallResult(app_name=config.app_name, install_root=install_root)

        if config.service_enabled:
            removed, warnings = self.unit_manager.teardown(config)
            result.unit_removed = removed
            for warning in warnings:
                result.add_warning(warning)

        try:
            if config.uninstall_script:
                source = config.script_path(config.uninstall_script, self.settings.project_root)
                logger.info("Running uninstall script %s", config.uninstall_script)
                self.script_runner.stage_and_run(source, install_root)
                result.script_ran = True
        finally:
            # Runs even when the script is missing or fails; its error still propagates.
            self._remove_root(install_root)
            result.root_removed = True

        result.message = f"Removed {install_root}"
        result.complete()
        return result

    @staticmethod
    def _remove_root(install_root) -> None:
        if not install_root.exists():
            logger.info("Install root %s already absent", install_root)
            return
        try:
            shutil.rmtree(install_root)
        except OSError as e:
            raise CopyError(f"Failed to remove install root {install_root}: {e}")
        logger.info("Removed %s", install_root)
