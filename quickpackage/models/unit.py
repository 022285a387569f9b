"""Service unit identity models

A unit is derived from the app config: it is never stored. There are two
identity strategies. A system unit is a single service running as root. A
templated unit (``name@.service``) is a family of per-user instances; every
status or stop operation on it targets the whole family through a wildcard.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from ..constants import SYSTEM_UNIT_USER, TEMPLATE_INSTANCE_SPECIFIER, UNIT_FILE_SUFFIX


@dataclass(frozen=True)
class ServiceUnit(ABC):
    """Base unit identity"""

    app_name: str
    exec_start: str
    working_directory: Path

    @property
    @abstractmethod
    def name(self) -> str:
        """Unit name without the .service suffix"""

    @property
    @abstractmethod
    def wildcard(self) -> str:
        """Pattern matching every running unit of this identity"""

    @property
    @abstractmethod
    def user(self) -> str:
        """Value for the User= directive"""

    @property
    @abstractmethod
    def description(self) -> str:
        """Value for the Description= directive"""

    @property
    def is_template(self) -> bool:
        return False

    @property
    def file_name(self) -> str:
        return self.name + UNIT_FILE_SUFFIX

    def unit_path(self, unit_dir: Path) -> Path:
        """Where the unit file lives"""
        return Path(unit_dir) / self.file_name

    def render(self) -> str:
        """Render the unit file text"""
        return (
            "[Unit]\n"
            f"Description={self.description}\n"
            "After=network.target\n"
            "\n"
            "[Service]\n"
            "Type=simple\n"
            f"ExecStart={self.exec_start}\n"
            f"WorkingDirectory={self.working_directory}\n"
            "Restart=always\n"
            f"User={self.user}\n"
            "\n"
            "[Install]\n"
            "WantedBy=multi-user.target\n"
        )


@dataclass(frozen=True)
class SystemUnit(ServiceUnit):
    """Singleton system unit running as root"""

    @property
    def name(self) -> str:
        return self.app_name

    @property
    def wildcard(self) -> str:
        return self.app_name

    @property
    def user(self) -> str:
        return SYSTEM_UNIT_USER

    @property
    def description(self) -> str:
        return f"{self.app_name} service"


@dataclass(frozen=True)
class TemplatedUnit(ServiceUnit):
    """Per-user templated unit, instantiated as name@user"""

    @property
    def name(self) -> str:
        return self.app_name + "@"

    @property
    def wildcard(self) -> str:
        return self.name + "*"

    @property
    def user(self) -> str:
        return TEMPLATE_INSTANCE_SPECIFIER

    @property
    def description(self) -> str:
        return f"{self.app_name} service running as user {TEMPLATE_INSTANCE_SPECIFIER}"

    @property
    def is_template(self) -> bool:
        return True

    def instance(self, user: str) -> str:
        """Concrete instance name for a user"""
        return f"{self.name}{user}{UNIT_FILE_SUFFIX}"


def unit_from_config(config, install_path: Path) -> ServiceUnit:
    """Derive the unit identity for an app config

    Args:
        config: AppConfig
        install_path: Install path the app root lives under

    Returns:
        SystemUnit or TemplatedUnit
    """
    unit_cls = TemplatedUnit if config.systemd_run_as_user else SystemUnit
    return unit_cls(
        app_name=config.app_name,
        exec_start=config.exec_start,
        working_directory=config.install_root(install_path),
    )
