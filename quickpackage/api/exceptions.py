"""Exception definitions for quickpackage API"""

from typing import Optional, Sequence

from ..constants import ErrorCode


class QuickPackageError(Exception):
    """Base exception for quickpackage"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(QuickPackageError):
    """Configuration missing, malformed or invalid"""

    def __init__(self, message: str, errors: Optional[Sequence[str]] = None):
        super().__init__(message, ErrorCode.CONFIG_ERROR)
        self.errors = list(errors or [])


class GlobError(QuickPackageError):
    """Invalid glob pattern"""

    def __init__(self, pattern: str, reason: str):
        message = f"Invalid glob pattern '{pattern}': {reason}"
        super().__init__(message, ErrorCode.GLOB_ERROR)
        self.pattern = pattern


class PathError(QuickPackageError):
    """Path related error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PATH_ERROR)


class CopyError(QuickPackageError):
    """File placement failed"""

    def __init__(self, message: str, error_code: str = ErrorCode.COPY_ERROR):
        super().__init__(message, error_code)


class StagingNotFoundError(CopyError):
    """An install file needs the staging directory but none exists"""

    def __init__(self, app_name: str, file: str):
        message = (
            f"No staging directory found for '{app_name}', "
            f"but '{file}' must be installed from the build. Run 'qp build' first."
        )
        super().__init__(message, ErrorCode.STAGING_NOT_FOUND)
        self.app_name = app_name
        self.file = file


class ScriptError(QuickPackageError):
    """User script exited non-zero"""

    def __init__(self, script: str, exit_code: int):
        message = f"Script {script} failed with exit code {exit_code}"
        super().__init__(message, ErrorCode.SCRIPT_FAILED)
        self.script = script
        self.exit_code = exit_code


class ServiceError(QuickPackageError):
    """Service manager command failed"""

    def __init__(self, message: str, command: Optional[Sequence[str]] = None,
                 returncode: Optional[int] = None, error_code: str = ErrorCode.SERVICE_FAILED):
        super().__init__(message, error_code)
        self.command = list(command or [])
        self.returncode = returncode


class ServiceTimeoutError(ServiceError):
    """Service did not stop within the allowed time"""

    def __init__(self, unit: str, timeout: float):
        message = f"Timed out after {timeout:g}s waiting for {unit} to stop"
        super().__init__(message, error_code=ErrorCode.SERVICE_TIMEOUT)
        self.unit = unit
        self.timeout = timeout


class PackageError(QuickPackageError):
    """Debian package generation or build failed"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PACKAGE_FAILED)
