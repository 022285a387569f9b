"""Global constants for quickpackage"""

from enum import Enum
import re

APP_NAME = "qp"
LOG_FORMAT = "%(message)s"

# Project layout
PROJECT_DIR = ".qp"
DEFAULT_CONFIG_PATH = ".qp/config.json"
SCRIPTS_DIR = PROJECT_DIR

# Host layout
DEFAULT_INSTALL_PATH = "/opt"
DEFAULT_UNIT_DIR = "/usr/lib/systemd/system"
UNIT_FILE_SUFFIX = ".service"

# Staging
STAGING_PREFIX = "quickpackage-"

# Service stop polling
DEFAULT_STOP_TIMEOUT = 30  # seconds
DEFAULT_STOP_POLL_INTERVAL = 1.0  # seconds

# Unit identities
SYSTEM_UNIT_USER = "root"
TEMPLATE_INSTANCE_SPECIFIER = "%i"

# Packaging defaults
DEFAULT_PACKAGE_VERSION = "0.1.0"
DEFAULT_MAINTAINER = "QuickPackage <root@localhost>"
DEBIAN_DIR = "debian"
DEFAULT_DIST_DIR = "dist"
DEBIAN_DEFAULT_DEPENDS = "${misc:Depends}"

# Characters that make an app name unsafe as a path or glob component
UNSAFE_NAME_PATTERN = re.compile(r"[/\\*?\[\]]")


class FileSource(Enum):
    """Where an install file is taken from"""
    CWD = "cwd"
    BUILD = "build"


# Error codes
class ErrorCode:
    CONFIG_ERROR = "QP001"
    GLOB_ERROR = "QP002"
    PATH_ERROR = "QP003"
    COPY_ERROR = "QP004"
    STAGING_NOT_FOUND = "QP005"
    SCRIPT_FAILED = "QP006"
    SERVICE_FAILED = "QP007"
    SERVICE_TIMEOUT = "QP008"
    PACKAGE_FAILED = "QP009"


# Environment variables
ENV_INSTALL_PATH = "QP_INSTALL_PATH"
ENV_UNIT_DIR = "QP_UNIT_DIR"
ENV_TEMP_DIR = "QP_TEMP_DIR"
ENV_STOP_TIMEOUT = "QP_STOP_TIMEOUT"
ENV_CONFIG_PATH = "QP_CONFIG"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_ARROW = "→"
EMOJI_PACKAGE = "📦"
EMOJI_FOLDER = "📁"

# Messages templates
MSG_BUILD_SUCCESS = f"{EMOJI_SUCCESS} Build staged in {{path}}"
MSG_INSTALL_SUCCESS = f"{EMOJI_SUCCESS} Installed {{app}} to {{path}}"
MSG_UNINSTALL_SUCCESS = f"{EMOJI_SUCCESS} Uninstalled {{app}} from {{path}}"
MSG_PACKAGE_SUCCESS = f"{EMOJI_PACKAGE} Debian tree written to {{path}}"
