"""Config loading decorator for CLI commands"""

from functools import wraps
from pathlib import Path
from typing import Callable

import click
from rich.markup import escape

from ..utils.output import error_console
from ...api.exceptions import ConfigError
from ...constants import DEFAULT_CONFIG_PATH, ENV_CONFIG_PATH, EMOJI_ERROR
from ...services.config_service import ConfigService


def config_required(func: Callable) -> Callable:
    """Decorator that loads the app config before the command runs

    This decorator:
    1. Adds a --config option (also read from QP_CONFIG)
    2. Loads and validates the config document
    3. Stores the config on the CLI context object

    A missing or invalid config ends the command with exit code 1
    before anything touches the filesystem.

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(*args, config_path: Path, **kwargs):
        ctx = click.get_current_context()

        try:
            config = ConfigService(config_path).load_config()
        except ConfigError as e:
            error_console.print(f"{EMOJI_ERROR} {escape(str(e))}")
            for error in e.errors:
                error_console.print(f"  - {escape(error)}")
            ctx.exit(1)

        ctx.obj.config = config
        return func(*args, **kwargs)

    return click.option(
        '--config', '-c', 'config_path',
        type=click.Path(dir_okay=False, path_type=Path),
        default=DEFAULT_CONFIG_PATH,
        envvar=ENV_CONFIG_PATH,
        show_default=True,
        help='Path to the config document'
    )(wrapper)
