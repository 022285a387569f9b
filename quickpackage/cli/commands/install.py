"""Install command implementation"""

from pathlib import Path

import click

from ..decorators import config_required, handle_errors
from ..utils.output import console, format_install_result
from ...constants import EMOJI_ARROW, ENV_INSTALL_PATH


@click.command()
@click.option(
    '--install-path', '-p',
    type=click.Path(file_okay=False, path_type=Path),
    envvar=ENV_INSTALL_PATH,
    help='Directory the app is installed under (default: /opt)'
)
@click.option(
    '--skip-build',
    is_flag=True,
    help='Install from an earlier build instead of building now'
)
@config_required
@handle_errors
@click.pass_obj
def install(obj, install_path, skip_build):
    """Build the app and install it

    Stops the running service first, copies the install files, runs the
    install script and (re)starts the service.

    Examples:
        qp install
        qp install --install-path /srv
        qp build && qp install --skip-build
    """
    config = obj.config
    lifecycle = obj.lifecycle(install_path)

    console.print(
        f"{EMOJI_ARROW} Installing {config.app_name} into "
        f"{config.install_root(lifecycle.settings.install_path)}..."
    )

    result = lifecycle.install(config, skip_build=skip_build)
    format_install_result(result, verbose=obj.verbose)
