# quickpackage/cli/commands/__init__.py
"""CLI commands"""

from . import init
from . import build
from . import install
from . import uninstall
from . import package
from . import unit

__all__ = [
    "init",
    "build",
    "install",
    "uninstall",
    "package",
    "unit",
]
