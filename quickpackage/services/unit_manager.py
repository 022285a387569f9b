"""Service unit lifecycle management"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..api.exceptions import QuickPackageError, ServiceError, ServiceTimeoutError
from ..core.systemctl import Systemctl
from ..models.config import AppConfig
from ..models.settings import Settings
from ..models.unit import ServiceUnit, unit_from_config

logger = logging.getLogger(__name__)


class ServiceUnitManager:
    """Drives a unit through absent -> installed -> running -> stopped -> removed"""

    def __init__(self, settings: Settings, systemctl: Optional[Systemctl] = None):
        """Initialize unit manager

        Args:
            settings: Runtime settings (unit directory, install path, stop timing)
            systemctl: systemctl wrapper, replaced by a fake in tests
        """
        self.settings = settings
        self.systemctl = systemctl or Systemctl()

    def unit(self, config: AppConfig) -> ServiceUnit:
        """Unit identity for a config"""
        return unit_from_config(config, self.settings.install_path)

    def unit_path(self, config: AppConfig) -> Path:
        return self.unit(config).unit_path(self.settings.unit_dir)

    def generate_unit_file(self, config: AppConfig) -> str:
        """Render the unit file text for a config"""
        return self.unit(config).render()

    def stop_if_active(self, config: AppConfig) -> List[str]:
        """Stop the unit (every instance, for templates) and wait until it is down

        Returns:
            Names of the units that were running before the stop

        Raises:
            ServiceError: If the stop command fails
            ServiceTimeoutError: If the unit is still active after stop_timeout
        """
        unit = self.unit(config)
        target = unit.wildcard

        if not self.systemctl.is_active(target):
            logger.info("%s is not active", target)
            return []

        if unit.is_template:
            running = self.systemctl.list_active(target)
        else:
            running = [unit.file_name]

        logger.info("Stopping %s", target)
        self.systemctl.stop(target)
        self._wait_inactive(target)
        return running

    def _wait_inactive(self, target: str) -> None:
        timeout = self.settings.stop_timeout
        interval = self.settings.stop_poll_interval
        deadline = time.monotonic() + timeout

        while self.systemctl.is_active(target):
            if time.monotonic() >= deadline:
                raise ServiceTimeoutError(target, timeout)
            logger.debug("Waiting for %s to stop", target)
            time.sleep(interval)

        logger.info("%s stopped", target)

    def install(self, config: AppConfig,
                restart_units: Sequence[str] = ()) -> Tuple[Path, List[str]]:
        """Write the unit file, reload systemd and bring the service up

        A system unit is enabled and started. A templated unit has no
        concrete instance to enable here, so only the instances in
        restart_units (those stopped before the install) are started again.

        Args:
            config: App config
            restart_units: Instances to start again (templated units only)

        Returns:
            (unit file path, units started)

        Raises:
            ServiceError: If writing the unit or any systemctl call fails
        """
        unit = self.unit(config)
        path = unit.unit_path(self.settings.unit_dir)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(unit.render(), encoding="utf-8")
        except OSError as e:
            raise ServiceError(f"Failed to write unit file {path}: {e}")
        logger.info("Wrote unit file %s", path)

        self.systemctl.daemon_reload()

        started: List[str] = []
        if unit.is_template:
            if restart_units:
                self.systemctl.start(list(restart_units))
                started = list(restart_units)
            else:
                logger.info(
                    "%s is a template; enable instances with 'systemctl enable --now %s'",
                    unit.file_name, unit.instance("<user>")
                )
        else:
            self.systemctl.enable_now(unit.name)
            started = [unit.file_name]

        return path, started

    def teardown(self, config: AppConfig) -> Tuple[bool, List[str]]:
        """Stop, disable and remove the unit, tolerating failures

        Returns:
            (whether the unit file is gone, warnings for the steps that failed)
        """
        unit = self.unit(config)
        path = unit.unit_path(self.settings.unit_dir)
        warnings: List[str] = []

        try:
            self.stop_if_active(config)
        except QuickPackageError as e:
            warnings.append(f"stop failed: {e}")

        try:
            self.systemctl.disable(unit.wildcard)
        except ServiceError as e:
            warnings.append(f"disable failed: {e}")

        try:
            path.unlink()
            logger.info("Removed unit file %s", path)
        except FileNotFoundError:
            logger.info("Unit file %s already absent", path)
        except OSError as e:
            warnings.append(f"removing {path} failed: {e}")

        try:
            self.systemctl.daemon_reload()
        except ServiceError as e:
            warnings.append(f"daemon-reload failed: {e}")

        for warning in warnings:
            logger.warning("%s: %s", unit.wildcard, warning)

        return not path.exists(), warnings

    def status(self, config: AppConfig) -> Dict[str, Any]:
        """Current state of the unit"""
        unit = self.unit(config)
        path = unit.unit_path(self.settings.unit_dir)
        return {
            "unit": unit.file_name,
            "target": unit.wildcard,
            "template": unit.is_template,
            "unit_path": str(path),
            "installed": path.exists(),
            "active": self.systemctl.is_active(unit.wildcard),
            "active_units": self.systemctl.list_active(unit.wildcard) if unit.is_template else [],
        }
