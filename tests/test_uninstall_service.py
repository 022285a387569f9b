"""Tests for the uninstall stage."""

import pytest

from quickpackage.api.exceptions import CopyError, ScriptError
from quickpackage.services.install_service import InstallService
from quickpackage.services.uninstall_service import UninstallService
from quickpackage.services.unit_manager import ServiceUnitManager

from conftest import FakeSystemctl, make_config, write_script


def make_services(settings, systemctl):
    manager = ServiceUnitManager(settings, systemctl)
    return (
        InstallService(settings, unit_manager=manager),
        UninstallService(settings, unit_manager=manager),
    )


def test_removes_install_root(settings, systemctl):
    installer, uninstaller = make_services(settings, systemctl)
    installer.install(make_config())
    root = settings.install_path / "demo"
    (root / "runtime.log").write_text("created at runtime")

    result = uninstaller.uninstall(make_config())

    assert not root.exists()
    assert result.root_removed
    assert systemctl.calls == []


def test_script_runs_in_root_before_removal(settings, systemctl, project, tmp_path, monkeypatch):
    marker = tmp_path / "marker"
    monkeypatch.setenv("MARKER", str(marker))
    write_script(project / ".qp" / "uninstall.sh", 'ls bin > "$MARKER"')
    installer, uninstaller = make_services(settings, systemctl)
    config = make_config(uninstall_script="uninstall.sh")
    installer.install(config)

    result = uninstaller.uninstall(config)

    assert result.script_ran
    assert marker.read_text().strip() == "demo"
    assert not (settings.install_path / "demo").exists()


def test_failing_script_still_removes_root(settings, systemctl, project):
    write_script(project / ".qp" / "uninstall.sh", "exit 4")
    installer, uninstaller = make_services(settings, systemctl)
    config = make_config(uninstall_script="uninstall.sh")
    installer.install(config)

    with pytest.raises(ScriptError):
        uninstaller.uninstall(config)

    assert not (settings.install_path / "demo").exists()


def test_missing_root_with_script(settings, systemctl, project):
    write_script(project / ".qp" / "uninstall.sh", "exit 0")
    _, uninstaller = make_services(settings, systemctl)

    with pytest.raises(CopyError, match="does not exist"):
        uninstaller.uninstall(make_config(uninstall_script="uninstall.sh"))


def test_missing_root_without_script(settings, systemctl):
    _, uninstaller = make_services(settings, systemctl)
    assert uninstaller.uninstall(make_config()).is_success


def test_service_torn_down(settings):
    systemctl = FakeSystemctl()
    installer, uninstaller = make_services(settings, systemctl)
    config = make_config(systemd=True, exec="/opt/demo/bin/demo")
    installer.install(config)
    systemctl.calls.clear()

    result = uninstaller.uninstall(config)

    assert result.unit_removed
    assert not (settings.unit_dir / "demo.service").exists()
    assert ["stop", "demo"] in systemctl.calls
    assert ["disable", "demo"] in systemctl.calls
    assert systemctl.calls[-1] == ["daemon-reload"]


def test_teardown_failures_do_not_block_removal(settings):
    systemctl = FakeSystemctl()
    installer, uninstaller = make_services(settings, systemctl)
    config = make_config(systemd=True, exec="/opt/demo/bin/demo")
    installer.install(config)
    systemctl.fail = {"stop", "disable"}

    result = uninstaller.uninstall(config)

    assert result.is_success
    assert len(result.warnings) == 2
    assert not (settings.install_path / "demo").exists()
