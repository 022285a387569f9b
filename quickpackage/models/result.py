"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any, Tuple


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"
    IN_PROGRESS = "in_progress"


@dataclass
class ValidationResult:
    """Validation result container"""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add error message"""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add warning message"""
        self.warnings.append(message)

    def __str__(self) -> str:
        lines = []

        if self.errors:
            lines.append("Errors:")
            for error in self.errors:
                lines.append(f"  ✗ {error}")

        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  ⚠ {warning}")

        if self.is_valid and not self.warnings:
            lines.append("✓ All validations passed")

        return '\n'.join(lines)


@dataclass
class Result:
    """Base result class"""

    status: OperationStatus = OperationStatus.IN_PROGRESS
    message: str = ""
    warnings: List[str] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status == OperationStatus.SUCCESS

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_warning(self, message: str) -> None:
        """Add a warning"""
        self.warnings.append(message)

    def complete(self, status: OperationStatus = OperationStatus.SUCCESS) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.now()
        self.status = status


@dataclass
class BuildResult(Result):
    """Result of build stage"""

    app_name: str = ""
    staging_dir: Optional[Path] = None
    copied: List[Tuple[Path, Path]] = field(default_factory=list)
    script_ran: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "app_name": self.app_name,
            "staging_dir": str(self.staging_dir) if self.staging_dir else None,
            "copied": [[str(src), str(dst)] for src, dst in self.copied],
            "script_ran": self.script_ran,
            "warnings": self.warnings,
            "duration": self.duration,
        }


@dataclass
class InstallResult(Result):
    """Result of install stage"""

    app_name: str = ""
    install_root: Optional[Path] = None
    staging_dir: Optional[Path] = None
    installed: List[Tuple[Path, Path]] = field(default_factory=list)
    script_ran: bool = False
    unit_path: Optional[Path] = None
    started_units: List[str] = field(default_factory=list)
    removed_staging: List[Path] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "app_name": self.app_name,
            "install_root": str(self.install_root) if self.install_root else None,
            "staging_dir": str(self.staging_dir) if self.staging_dir else None,
            "installed": [[str(src), str(dst)] for src, dst in self.installed],
            "script_ran": self.script_ran,
            "unit_path": str(self.unit_path) if self.unit_path else None,
            "started_units": self.started_units,
            "removed_staging": [str(p) for p in self.removed_staging],
            "warnings": self.warnings,
            "duration": self.duration,
        }


@dataclass
class UninstallResult(Result):
    """Result of uninstall stage"""

    app_name: str = ""
    install_root: Optional[Path] = None
    script_ran: bool = False
    unit_removed: bool = False
    root_removed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "app_name": self.app_name,
            "install_root": str(self.install_root) if self.install_root else None,
            "script_ran": self.script_ran,
            "unit_removed": self.unit_removed,
            "root_removed": self.root_removed,
            "warnings": self.warnings,
            "duration": self.duration,
        }


@dataclass
class PackageResult(Result):
    """Result of Debian packaging"""

    app_name: str = ""
    build_dir: Optional[Path] = None
    debian_files: List[Path] = field(default_factory=list)
    built: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "app_name": self.app_name,
            "build_dir": str(self.build_dir) if self.build_dir else None,
            "debian_files": [str(p) for p in self.debian_files],
            "built": self.built,
            "warnings": self.warnings,
            "duration": self.duration,
        }
