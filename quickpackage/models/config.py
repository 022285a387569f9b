"""Configuration data models"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Any, Tuple

from ..constants import (
    FileSource,
    SCRIPTS_DIR,
    DEFAULT_PACKAGE_VERSION,
    DEFAULT_MAINTAINER,
    UNSAFE_NAME_PATTERN,
)
from ..utils.version_utils import is_valid_version
from .result import ValidationResult


@dataclass(frozen=True)
class FileEntry:
    """A file to install and where it comes from"""

    file: str
    source: str = FileSource.CWD.value

    @property
    def provenance(self) -> Optional[FileSource]:
        """FileSource for this entry, or None if the value is not recognised"""
        try:
            return FileSource(self.source)
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {"file": self.file, "from": self.source}

    @classmethod
    def from_dict(cls, data: Any) -> 'FileEntry':
        """Create from dictionary

        A bare string is accepted as shorthand for a working-tree file.
        """
        if isinstance(data, str):
            return cls(file=data)
        return cls(
            file=str(data.get("file") or ""),
            source=str(data.get("from", FileSource.CWD.value))
        )


@dataclass(frozen=True)
class AppConfig:
    """Deployment descriptor for a single application"""

    app_name: str
    install_files: Tuple[FileEntry, ...] = ()
    build_files: Tuple[str, ...] = ()

    # Script names, resolved against the scripts directory
    build_script: Optional[str] = None
    install_script: Optional[str] = None
    uninstall_script: Optional[str] = None

    # Service
    systemd: bool = False
    systemd_run_as_user: bool = False
    exec_start: str = ""

    # Packaging metadata
    version: str = DEFAULT_PACKAGE_VERSION
    maintainer: str = DEFAULT_MAINTAINER
    dependencies: Tuple[str, ...] = ()
    description: Optional[str] = None

    @property
    def service_enabled(self) -> bool:
        return self.systemd

    def script_path(self, name: str, project_root: Optional[Path] = None) -> Path:
        """Resolve a script name against the scripts directory

        Args:
            name: Bare script file name from the config
            project_root: Directory holding the scripts directory (defaults to cwd)

        Returns:
            Path to the script source
        """
        root = Path(project_root) if project_root else Path.cwd()
        return root / SCRIPTS_DIR / name

    def install_root(self, install_path: Path) -> Path:
        """Directory this app installs into"""
        return Path(install_path) / self.app_name

    def requires_build(self) -> bool:
        """Check whether any install file is taken from the build output"""
        return any(e.provenance == FileSource.BUILD for e in self.install_files)

    def validate(self) -> ValidationResult:
        """Check the descriptor invariants

        Returns:
            ValidationResult with errors for violated invariants and
            warnings for values that are accepted but risky
        """
        result = ValidationResult()

        if not self.app_name:
            result.add_error("app_name cannot be empty")
        elif UNSAFE_NAME_PATTERN.search(self.app_name):
            result.add_warning(
                f"app_name '{self.app_name}' contains path separators or glob characters"
            )

        if not self.install_files:
            result.add_error("install_files must list at least one file")

        for index, entry in enumerate(self.install_files):
            if not entry.file:
                result.add_error(f"install_files[{index}] has no 'file'")
            if entry.provenance is None:
                allowed = ", ".join(s.value for s in FileSource)
                result.add_error(
                    f"install_files[{index}] has unknown 'from' value "
                    f"'{entry.source}' (expected one of: {allowed})"
                )

        for pattern in self.build_files:
            if not pattern:
                result.add_error("build_files contains an empty pattern")

        if self.systemd and not self.exec_start.strip():
            result.add_error("'exec' is required when 'systemd' is enabled")

        if self.systemd_run_as_user and not self.systemd:
            result.add_warning("'systemdRunAsUser' has no effect without 'systemd'")

        if not is_valid_version(self.version):
            result.add_warning(f"version '{self.version}' is not a valid package version")

        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppConfig':
        """Create from dictionary"""
        return cls(
            app_name=str(data.get("app_name") or ""),
            install_files=tuple(
                FileEntry.from_dict(entry) for entry in (data.get("install_files") or [])
            ),
            build_files=tuple(str(p) for p in (data.get("build_files") or [])),
            build_script=data.get("build_script") or None,
            install_script=data.get("install_script") or None,
            uninstall_script=data.get("uninstall_script") or None,
            systemd=bool(data.get("systemd", False)),
            systemd_run_as_user=bool(data.get("systemdRunAsUser", False)),
            exec_start=str(data.get("exec") or ""),
            version=str(data.get("version") or DEFAULT_PACKAGE_VERSION),
            maintainer=str(data.get("maintainer") or DEFAULT_MAINTAINER),
            dependencies=tuple(str(d) for d in (data.get("dependencies") or [])),
            description=data.get("description"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data: Dict[str, Any] = {
            "app_name": self.app_name,
            "build_files": list(self.build_files),
            "install_files": [e.to_dict() for e in self.install_files],
            "systemd": self.systemd,
            "systemdRunAsUser": self.systemd_run_as_user,
        }

        if self.build_script:
            data["build_script"] = self.build_script
        if self.install_script:
            data["install_script"] = self.install_script
        if self.uninstall_script:
            data["uninstall_script"] = self.uninstall_script
        if self.exec_start:
            data["exec"] = self.exec_start

        data["version"] = self.version
        data["maintainer"] = self.maintainer
        if self.dependencies:
            data["dependencies"] = list(self.dependencies)
        if self.description:
            data["description"] = self.description

        return data
