"""Unit command implementation"""

from pathlib import Path

import click

from ..decorators import config_required, handle_errors
from ..utils.output import format_unit_status
from ...constants import ENV_INSTALL_PATH
from ...services.unit_manager import ServiceUnitManager


@click.command()
@click.option(
    '--install-path', '-p',
    type=click.Path(file_okay=False, path_type=Path),
    envvar=ENV_INSTALL_PATH,
    help='Directory the app is installed under (default: /opt)'
)
@click.option(
    '--status', 'show_status',
    is_flag=True,
    help='Show whether the unit is installed and running instead'
)
@config_required
@handle_errors
@click.pass_obj
def unit(obj, install_path, show_status):
    """Print the systemd unit file generated for the app

    Nothing is written or started. With --status, the installed unit file
    and the active units are reported.

    Examples:
        qp unit
        qp unit > /tmp/app.service
        qp unit --status
    """
    manager = ServiceUnitManager(obj.settings(install_path), obj.systemctl)

    if show_status:
        format_unit_status(manager.status(obj.config))
        return

    click.echo(manager.generate_unit_file(obj.config), nl=False)
