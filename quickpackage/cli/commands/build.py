"""Build command implementation"""

import click

from ..decorators import config_required, handle_errors
from ..utils.output import console, format_build_result
from ...constants import EMOJI_ARROW


@click.command()
@config_required
@handle_errors
@click.pass_obj
def build(obj):
    """Stage build files and run the build script

    The staging directory is kept so a later 'qp install --skip-build'
    can install from it.

    Examples:
        qp build
        qp build --config deploy/qp.json
    """
    config = obj.config
    console.print(f"{EMOJI_ARROW} Building {config.app_name}...")

    result = obj.lifecycle().build(config)
    format_build_result(result)
