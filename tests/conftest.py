"""Shared pytest configuration and fixtures for all tests."""

import fnmatch
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import pytest

from quickpackage.api.exceptions import ServiceError
from quickpackage.constants import PROJECT_DIR
from quickpackage.core.systemctl import CmdResult, Systemctl
from quickpackage.models import AppConfig, Settings


# =============================================================================
# Fake service manager
# =============================================================================


class FakeSystemctl(Systemctl):
    """Records systemctl calls and simulates unit state in memory.

    ``running`` holds unit file names (``demo.service``, ``demo@alice.service``).
    Targets are matched against it the way systemctl matches unit patterns.
    """

    def __init__(self, running: Optional[Set[str]] = None,
                 fail: Optional[Set[str]] = None,
                 stop_takes_effect: bool = True):
        super().__init__(binary="systemctl")
        self.running: Set[str] = set(running or ())
        self.fail: Set[str] = set(fail or ())
        self.stop_takes_effect = stop_takes_effect
        self.calls: List[List[str]] = []

    def _matching(self, target: str) -> List[str]:
        return sorted(
            u for u in self.running
            if u == target or u == target + ".service" or fnmatch.fnmatch(u, target)
        )

    def run(self, *args: str, check: bool = True) -> CmdResult:
        argv = [self.binary, *args]
        self.calls.append(list(args))
        sub = args[0]
        returncode, stdout = 0, ""

        if sub in self.fail:
            returncode = 1
        elif sub == "is-active":
            returncode = 0 if self._matching(args[-1]) else 3
        elif sub == "list-units":
            stdout = "".join(
                f"{u} loaded active running test unit\n" for u in self._matching(args[-1])
            )
        elif sub == "stop" and self.stop_takes_effect:
            for unit in self._matching(args[-1]):
                self.running.discard(unit)
        elif sub == "start":
            self.running.update(args[1:])
        elif sub == "enable" and "--now" in args:
            name = args[-1]
            self.running.add(name if name.endswith(".service") else name + ".service")

        result = CmdResult(argv=argv, returncode=returncode, stdout=stdout, stderr="")
        if check and not result.ok:
            raise ServiceError(f"fake {sub} failed", command=argv, returncode=returncode)
        return result

    def subcommands(self) -> List[str]:
        """First word of every recorded call"""
        return [call[0] for call in self.calls]

    def calls_for(self, sub: str) -> List[List[str]]:
        return [call for call in self.calls if call[0] == sub]


# =============================================================================
# Helpers
# =============================================================================


def write_script(path: Path, body: str) -> Path:
    """Write an executable /bin/sh script."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n" + body + "\n")
    path.chmod(0o755)
    return path


def config_dict(**overrides: Any) -> Dict[str, Any]:
    """Minimal valid config document for the demo app."""
    data: Dict[str, Any] = {
        "app_name": "demo",
        "build_files": [],
        "install_files": [{"file": "bin/demo", "from": "cwd"}],
        "systemd": False,
    }
    data.update(overrides)
    return data


def make_config(**overrides: Any) -> AppConfig:
    return AppConfig.from_dict(config_dict(**overrides))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def project(tmp_path, monkeypatch) -> Path:
    """Project directory with a .qp dir and a demo binary, used as cwd."""
    root = tmp_path / "project"
    (root / PROJECT_DIR).mkdir(parents=True)
    (root / "bin").mkdir()
    (root / "bin" / "demo").write_text("#!/bin/sh\necho demo\n")
    (root / "src").mkdir()
    (root / "src" / "main.c").write_text("int main(void) { return 0; }\n")
    (root / "src" / "util.c").write_text("int util(void) { return 1; }\n")
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def settings(tmp_path, project) -> Settings:
    """Settings pointing every host location into tmp_path."""
    return Settings(
        install_path=tmp_path / "opt",
        unit_dir=tmp_path / "units",
        temp_dir=tmp_path / "tmp",
        project_root=project,
        stop_timeout=0.05,
        stop_poll_interval=0.01,
    )


@pytest.fixture
def host_env(tmp_path, monkeypatch, project) -> Path:
    """Point Settings.from_env() into tmp_path, for CLI tests."""
    monkeypatch.setenv("QP_INSTALL_PATH", str(tmp_path / "opt"))
    monkeypatch.setenv("QP_UNIT_DIR", str(tmp_path / "units"))
    monkeypatch.setenv("QP_TEMP_DIR", str(tmp_path / "tmp"))
    monkeypatch.setenv("QP_STOP_TIMEOUT", "0.05")
    return tmp_path


@pytest.fixture
def systemctl() -> FakeSystemctl:
    return FakeSystemctl()


@pytest.fixture
def write_config(project):
    """Write .qp/config.json for the demo app with overrides."""
    def _write(**overrides: Any) -> Path:
        path = project / PROJECT_DIR / "config.json"
        path.write_text(json.dumps(config_dict(**overrides), indent=2))
        return path
    return _write
