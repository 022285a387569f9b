"""Initialize command for creating a starter config"""

from pathlib import Path

import click

from ..decorators import handle_errors
from ..utils.output import console, print_success, print_warning
from ...constants import DEFAULT_CONFIG_PATH
from ...services.config_service import ConfigService, default_config


@click.command()
@click.option(
    '--name', '-n',
    help='App name (default: current directory name)'
)
@click.option(
    '--force', '-f',
    is_flag=True,
    help='Overwrite an existing config'
)
@handle_errors
def init(name, force):
    """Write a starter .qp/config.json

    Examples:
        qp init
        qp init --name myapp
    """
    config_path = Path(DEFAULT_CONFIG_PATH)

    if config_path.exists() and not force:
        print_warning(f"Config already exists: {config_path}")
        console.print("Use --force to overwrite it")
        return

    config = default_config(name or Path.cwd().name)
    path = ConfigService(config_path).save_config(config, overwrite=force)

    print_success(f"Wrote {path}")
    console.print("\nNext steps:")
    console.print(f"1. Edit {path} to list your build and install files")
    console.print(f"2. Put build, install and uninstall scripts in {path.parent}/")
    console.print("3. Run 'qp install'")
