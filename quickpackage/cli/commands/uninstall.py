"""Uninstall command implementation"""

from pathlib import Path

import click
from rich.prompt import Confirm

from ..decorators import config_required, handle_errors
from ..utils.output import console, error_console, format_uninstall_result
from ...constants import EMOJI_WARNING, ENV_INSTALL_PATH


@click.command()
@click.option(
    '--install-path', '-p',
    type=click.Path(file_okay=False, path_type=Path),
    envvar=ENV_INSTALL_PATH,
    help='Directory the app is installed under (default: /opt)'
)
@click.option(
    '--yes', '-y',
    is_flag=True,
    help='Skip confirmation prompt'
)
@config_required
@handle_errors
@click.pass_obj
def uninstall(obj, install_path, yes):
    """Stop the service and delete the install root

    Everything under the install root is removed, including files the app
    created at runtime.

    Examples:
        qp uninstall
        qp uninstall --yes
    """
    config = obj.config
    lifecycle = obj.lifecycle(install_path)
    install_root = config.install_root(lifecycle.settings.install_path)

    if not yes:
        error_console.print(f"{EMOJI_WARNING} This deletes {install_root} and everything in it")
        if not Confirm.ask(f"Uninstall {config.app_name}?", default=False):
            console.print("[yellow]Uninstall cancelled[/yellow]")
            return

    result = lifecycle.uninstall(config)
    format_uninstall_result(result)
