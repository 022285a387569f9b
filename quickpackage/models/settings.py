"""Runtime settings threaded through every stage"""

import os
import tempfile
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from ..constants import (
    DEFAULT_INSTALL_PATH,
    DEFAULT_UNIT_DIR,
    DEFAULT_STOP_TIMEOUT,
    DEFAULT_STOP_POLL_INTERVAL,
    ENV_INSTALL_PATH,
    ENV_UNIT_DIR,
    ENV_TEMP_DIR,
    ENV_STOP_TIMEOUT,
)


@dataclass(frozen=True)
class Settings:
    """Host locations and timing used by the lifecycle stages"""

    install_path: Path = Path(DEFAULT_INSTALL_PATH)
    unit_dir: Path = Path(DEFAULT_UNIT_DIR)
    temp_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    project_root: Path = field(default_factory=Path.cwd)
    stop_timeout: float = DEFAULT_STOP_TIMEOUT
    stop_poll_interval: float = DEFAULT_STOP_POLL_INTERVAL

    @classmethod
    def from_env(cls, install_path: Optional[str] = None,
                 project_root: Optional[str] = None) -> 'Settings':
        """Build settings from environment variables

        Args:
            install_path: Explicit install path, overrides the environment
            project_root: Explicit project root, defaults to cwd

        Returns:
            Settings instance
        """
        env = os.environ
        return cls(
            install_path=Path(install_path or env.get(ENV_INSTALL_PATH, DEFAULT_INSTALL_PATH)),
            unit_dir=Path(env.get(ENV_UNIT_DIR, DEFAULT_UNIT_DIR)),
            temp_dir=Path(env.get(ENV_TEMP_DIR) or tempfile.gettempdir()),
            project_root=Path(project_root) if project_root else Path.cwd(),
            stop_timeout=float(env.get(ENV_STOP_TIMEOUT, DEFAULT_STOP_TIMEOUT)),
        )

    def with_install_path(self, install_path: Optional[str]) -> 'Settings':
        """Copy with a different install path (no-op for None)"""
        if not install_path:
            return self
        return replace(self, install_path=Path(install_path))
