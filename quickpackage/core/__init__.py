"""Core functionality for quickpackage"""

from .path_resolver import PathResolver, check_pattern, copy_path
from .staging import StagingArea
from .script_runner import ScriptRunner
from .systemctl import Systemctl, CmdResult

__all__ = [
    "PathResolver",
    "check_pattern",
    "copy_path",
    "StagingArea",
    "ScriptRunner",
    "Systemctl",
    "CmdResult",
]
