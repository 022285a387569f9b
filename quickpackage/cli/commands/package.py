"""Package command implementation"""

from pathlib import Path

import click

from ..decorators import config_required, handle_errors
from ..utils.output import console, format_package_result
from ...constants import EMOJI_PACKAGE, ENV_INSTALL_PATH


@click.command()
@click.option(
    '--output', '-o',
    type=click.Path(file_okay=False, path_type=Path),
    help='Directory for the Debian tree (default: dist/<app>-<version>)'
)
@click.option(
    '--install-path', '-p',
    type=click.Path(file_okay=False, path_type=Path),
    envvar=ENV_INSTALL_PATH,
    help='Directory the package installs under (default: /opt)'
)
@click.option(
    '--no-build',
    is_flag=True,
    help='Only generate the Debian tree, do not run dpkg-buildpackage'
)
@config_required
@handle_errors
@click.pass_obj
def package(obj, output, install_path, no_build):
    """Generate a Debian package for the app

    Examples:
        qp package
        qp package --no-build --output build/deb
    """
    config = obj.config
    console.print(f"\n{EMOJI_PACKAGE} Packaging {config.app_name} {config.version}...")

    result = obj.lifecycle(install_path).package(config, output_dir=output, build=not no_build)
    format_package_result(result)
