"""Error reporting decorator for CLI commands"""

from functools import wraps
from typing import Callable

import click
from rich.markup import escape

from ..utils.output import error_console, print_error
from ...api.exceptions import QuickPackageError, ScriptError, ServiceError


def handle_errors(func: Callable) -> Callable:
    """Decorator that turns QuickPackageError into an error message and exit code 1

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()

        try:
            return func(*args, **kwargs)
        except QuickPackageError as e:
            label = f"[{e.error_code}]" if e.error_code else "Failed"
            print_error(label, e)

            if isinstance(e, ServiceError) and e.command:
                error_console.print(f"  [dim]command: {escape(' '.join(e.command))}[/dim]")
            elif isinstance(e, ScriptError):
                error_console.print(f"  [dim]exit code: {e.exit_code}[/dim]")

            if ctx.obj is not None and ctx.obj.debug:
                error_console.print_exception()
            ctx.exit(1)

    return wrapper
