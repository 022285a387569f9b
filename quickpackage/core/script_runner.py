"""User script staging and execution"""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Union

from ..api.exceptions import CopyError, ScriptError
from .path_resolver import copy_path

logger = logging.getLogger(__name__)


class ScriptRunner:
    """Copies a user script into a working directory and runs it there"""

    def stage(self, source: Union[str, Path], work_dir: Union[str, Path]) -> Path:
        """Copy a script into work_dir unless a copy is already there

        Args:
            source: Script source file
            work_dir: Directory to stage into (must exist)

        Returns:
            Path of the staged script

        Raises:
            CopyError: If work_dir or the source is missing, or copy fails
        """
        source = Path(source)
        work_dir = Path(work_dir)

        if not work_dir.is_dir():
            raise CopyError(f"Script directory does not exist: {work_dir}")

        target = work_dir / source.name
        if target.exists():
            logger.info("Script %s already staged, keeping existing copy", target)
            return target

        if not source.is_file():
            raise CopyError(f"Script not found: {source}")

        copy_path(source, target)
        target.chmod(target.stat().st_mode | 0o111)
        return target

    def run(self, script: Union[str, Path], work_dir: Union[str, Path]) -> None:
        """Run a script with work_dir as its working directory

        Standard streams are inherited so output reaches the operator.

        Raises:
            ScriptError: If the script cannot be started or exits non-zero
        """
        script = Path(script).resolve()
        argv = [str(script)]
        logger.info("Running %s in %s", shlex.join(argv), work_dir)

        try:
            completed = subprocess.run(argv, cwd=str(work_dir))
        except OSError as e:
            logger.error("Failed to start %s: %s", script, e)
            raise ScriptError(str(script), 127) from e

        if completed.returncode != 0:
            raise ScriptError(str(script), completed.returncode)

    def stage_and_run(self, source: Union[str, Path], work_dir: Union[str, Path]) -> Path:
        """Stage a script into work_dir and run it there"""
        staged = self.stage(source, work_dir)
        self.run(staged, work_dir)
        return staged
