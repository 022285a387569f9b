"""Tests for unit identity and the service unit manager."""

import logging
from pathlib import Path

import pytest

from quickpackage.api.exceptions import ServiceError, ServiceTimeoutError
from quickpackage.models import SystemUnit, TemplatedUnit, unit_from_config
from quickpackage.services.unit_manager import ServiceUnitManager

from conftest import FakeSystemctl, make_config


SYSTEM_UNIT_TEXT = """[Unit]
Description=demo service
After=network.target

[Service]
Type=simple
ExecStart=/opt/demo/bin/demo
WorkingDirectory=/opt/demo
Restart=always
User=root

[Install]
WantedBy=multi-user.target
"""


def service_config(**overrides):
    return make_config(systemd=True, exec="/opt/demo/bin/demo", **overrides)


class TestUnitIdentity:
    def test_system_unit(self):
        unit = unit_from_config(service_config(), Path("/opt"))

        assert isinstance(unit, SystemUnit)
        assert unit.file_name == "demo.service"
        assert unit.wildcard == "demo"
        assert unit.unit_path(Path("/usr/lib/systemd/system")) == Path("/usr/lib/systemd/system/demo.service")
        assert unit.render() == SYSTEM_UNIT_TEXT

    def test_templated_unit(self):
        unit = unit_from_config(service_config(systemdRunAsUser=True), Path("/opt"))

        assert isinstance(unit, TemplatedUnit)
        assert unit.file_name == "demo@.service"
        assert unit.wildcard == "demo@*"
        assert unit.instance("alice") == "demo@alice.service"

        text = unit.render()
        assert "Description=demo service running as user %i\n" in text
        assert "User=%i\n" in text

    def test_working_directory_follows_install_path(self):
        unit = unit_from_config(service_config(), Path("/srv"))
        assert "WorkingDirectory=/srv/demo\n" in unit.render()


class TestStop:
    def test_inactive_unit_is_left_alone(self, settings, systemctl):
        manager = ServiceUnitManager(settings, systemctl)

        assert manager.stop_if_active(service_config()) == []
        assert systemctl.subcommands() == ["is-active"]

    def test_active_system_unit(self, settings):
        systemctl = FakeSystemctl(running={"demo.service"})
        manager = ServiceUnitManager(settings, systemctl)

        assert manager.stop_if_active(service_config()) == ["demo.service"]
        assert systemctl.calls_for("stop") == [["stop", "demo"]]
        assert not systemctl.running

    def test_templated_unit_stops_every_instance(self, settings):
        systemctl = FakeSystemctl(running={"demo@alice.service", "demo@bob.service", "other.service"})
        manager = ServiceUnitManager(settings, systemctl)

        stopped = manager.stop_if_active(service_config(systemdRunAsUser=True))

        assert stopped == ["demo@alice.service", "demo@bob.service"]
        assert systemctl.calls_for("stop") == [["stop", "demo@*"]]
        assert systemctl.calls_for("is-active")[0] == ["is-active", "--quiet", "demo@*"]
        assert systemctl.running == {"other.service"}

    def test_stop_times_out(self, settings):
        systemctl = FakeSystemctl(running={"demo.service"}, stop_takes_effect=False)
        manager = ServiceUnitManager(settings, systemctl)

        with pytest.raises(ServiceTimeoutError) as excinfo:
            manager.stop_if_active(service_config())

        assert excinfo.value.error_code == "QP008"
        assert isinstance(excinfo.value, ServiceError)


class TestInstall:
    def test_system_unit_enabled_and_started(self, settings, systemctl):
        manager = ServiceUnitManager(settings, systemctl)

        path, started = manager.install(service_config())

        assert path == settings.unit_dir / "demo.service"
        assert path.read_text() == manager.generate_unit_file(service_config())
        assert systemctl.calls == [["daemon-reload"], ["enable", "--now", "demo"]]
        assert started == ["demo.service"]

    def test_templated_unit_restarts_previous_instances(self, settings, systemctl):
        manager = ServiceUnitManager(settings, systemctl)
        config = service_config(systemdRunAsUser=True)

        path, started = manager.install(config, restart_units=["demo@alice.service"])

        assert path.name == "demo@.service"
        assert systemctl.calls == [["daemon-reload"], ["start", "demo@alice.service"]]
        assert started == ["demo@alice.service"]

    def test_templated_unit_without_instances_enables_nothing(self, settings, systemctl):
        manager = ServiceUnitManager(settings, systemctl)

        _, started = manager.install(service_config(systemdRunAsUser=True))

        assert started == []
        assert systemctl.subcommands() == ["daemon-reload"]

    def test_templated_unit_hint_names_an_instance(self, settings, systemctl, caplog):
        manager = ServiceUnitManager(settings, systemctl)

        with caplog.at_level(logging.INFO):
            manager.install(service_config(systemdRunAsUser=True))

        assert "systemctl enable --now demo@<user>.service" in caplog.text

    def test_enable_failure_is_fatal(self, settings):
        manager = ServiceUnitManager(settings, FakeSystemctl(fail={"enable"}))

        with pytest.raises(ServiceError):
            manager.install(service_config())


class TestTeardown:
    def test_removes_unit(self, settings):
        systemctl = FakeSystemctl(running={"demo.service"})
        manager = ServiceUnitManager(settings, systemctl)
        manager.install(service_config())
        systemctl.calls.clear()

        removed, warnings = manager.teardown(service_config())

        assert removed is True
        assert warnings == []
        assert not manager.unit_path(service_config()).exists()
        assert systemctl.subcommands() == ["is-active", "stop", "is-active", "disable", "daemon-reload"]

    def test_failures_become_warnings(self, settings):
        systemctl = FakeSystemctl(running={"demo.service"}, fail={"stop", "disable", "daemon-reload"})
        manager = ServiceUnitManager(settings, systemctl)

        removed, warnings = manager.teardown(service_config())

        assert removed is True
        assert len(warnings) == 3
        assert warnings[0].startswith("stop failed")

    def test_status(self, settings):
        systemctl = FakeSystemctl(running={"demo@alice.service"})
        manager = ServiceUnitManager(settings, systemctl)

        status = manager.status(service_config(systemdRunAsUser=True))

        assert status["target"] == "demo@*"
        assert status["active"] is True
        assert status["active_units"] == ["demo@alice.service"]
        assert status["installed"] is False
