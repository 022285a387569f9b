"""Version information for quickpackage"""

__version__ = "0.2.0"
__version_info__ = tuple(int(part) for part in __version__.split("."))
__author__ = "QuickPackage developers"
__license__ = "MIT"


def get_version():
    """Get the version string"""
    return __version__
