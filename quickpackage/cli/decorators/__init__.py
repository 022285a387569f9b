"""CLI decorators"""

from .config import config_required
from .errors import handle_errors

__all__ = [
    'config_required',
    'handle_errors',
]
