"""systemctl command wrapper"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import List, Sequence

from ..api.exceptions import ServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: List[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class Systemctl:
    """Runs systemctl subcommands as external processes"""

    def __init__(self, binary: str = "systemctl"):
        self.binary = binary

    def run(self, *args: str, check: bool = True) -> CmdResult:
        """Run a systemctl subcommand

        Args:
            *args: Subcommand and its arguments
            check: Raise ServiceError on a non-zero exit

        Returns:
            CmdResult with captured output
        """
        argv = [self.binary, *args]
        logger.debug("CMD %s", shlex.join(argv))

        try:
            p = subprocess.run(argv, text=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        except OSError as e:
            raise ServiceError(f"Failed to run {shlex.join(argv)}: {e}", command=argv)

        if p.stdout:
            logger.debug("STDOUT %s", p.stdout.strip())
        if p.stderr:
            logger.debug("STDERR %s", p.stderr.strip())

        result = CmdResult(argv=argv, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)
        if check and not result.ok:
            raise ServiceError(
                f"Command failed ({p.returncode}): {shlex.join(argv)}\n{p.stderr.strip()}",
                command=argv,
                returncode=p.returncode,
            )
        return result

    def is_active(self, unit: str) -> bool:
        """Check if a unit (or any unit matching a pattern) is active"""
        return self.run("is-active", "--quiet", unit, check=False).ok

    def list_active(self, pattern: str) -> List[str]:
        """Names of active service units matching a pattern"""
        result = self.run(
            "list-units", "--type=service", "--state=active",
            "--plain", "--no-legend", "--no-pager", pattern,
            check=False,
        )
        if not result.ok:
            return []
        return [line.split()[0] for line in result.stdout.splitlines() if line.strip()]

    def stop(self, unit: str) -> CmdResult:
        return self.run("stop", unit)

    def start(self, units: Sequence[str]) -> CmdResult:
        return self.run("start", *units)

    def enable_now(self, unit: str) -> CmdResult:
        return self.run("enable", "--now", unit)

    def disable(self, unit: str) -> CmdResult:
        return self.run("disable", unit)

    def daemon_reload(self) -> CmdResult:
        return self.run("daemon-reload")
