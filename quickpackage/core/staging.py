"""Staging directory management"""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from ..constants import STAGING_PREFIX

logger = logging.getLogger(__name__)


class StagingArea:
    """Creates, finds and removes per-app staging directories

    Staging directories live in the temp directory and are named
    ``quickpackage-<app>-<random>``. The build stage hands the one it
    created to the install stage directly; scanning by prefix is only
    used when no handle is available and for cleanup.
    """

    def __init__(self, temp_dir: Union[str, Path, None] = None):
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())

    @staticmethod
    def prefix(app_name: str) -> str:
        """Directory name prefix for an app"""
        return f"{STAGING_PREFIX}{app_name}-"

    def create(self, app_name: str) -> Path:
        """Create a fresh, uniquely named staging directory"""
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        path = Path(tempfile.mkdtemp(prefix=self.prefix(app_name), dir=self.temp_dir))
        logger.info("Created staging directory %s", path)
        return path

    def find_all(self, app_name: str) -> List[Path]:
        """All staging directories for an app, newest first"""
        if not self.temp_dir.is_dir():
            return []

        prefix = self.prefix(app_name)
        matches = [
            p for p in self.temp_dir.iterdir()
            if p.name.startswith(prefix) and p.is_dir()
        ]
        return sorted(matches, key=lambda p: (p.stat().st_mtime, p.name), reverse=True)

    def discover(self, app_name: str) -> Optional[Path]:
        """Best-effort lookup of a staging directory left by an earlier build

        Returns:
            The most recently modified match, or None
        """
        matches = self.find_all(app_name)
        if not matches:
            logger.info("No staging directory found for %s in %s", app_name, self.temp_dir)
            return None

        if len(matches) > 1:
            logger.warning(
                "Found %d staging directories for %s, using newest: %s",
                len(matches), app_name, matches[0]
            )
        return matches[0]

    def cleanup(self, app_name: str) -> List[Path]:
        """Remove every staging directory of an app

        Failures are logged and skipped.

        Returns:
            Directories that were removed
        """
        removed = []
        for path in self.find_all(app_name):
            try:
                shutil.rmtree(path)
                removed.append(path)
                logger.info("Removed staging directory %s", path)
            except OSError as e:
                logger.warning("Failed to remove staging directory %s: %s", path, e)
        return removed
