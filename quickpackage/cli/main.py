# quickpackage/cli/main.py
"""Main CLI entry point for quickpackage"""

import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..__version__ import get_version
from ..api.lifecycle import Lifecycle
from ..constants import APP_NAME, LOG_FORMAT
from ..core.systemctl import Systemctl
from ..models import AppConfig, Settings

# Import all commands
from .commands import (
    init,
    build,
    install,
    uninstall,
    package,
    unit,
)
from .utils.output import console, error_console


def setup_logging(verbose: bool = False, debug: bool = False, quiet: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
        quiet: Only log errors (ERROR level)
    """
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=error_console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )
    logging.getLogger().setLevel(level)


class Context:
    """CLI context object

    Carries the global flags, the config loaded by ``config_required`` and
    the systemctl wrapper every stage shares.
    """

    def __init__(self, systemctl: Optional[Systemctl] = None):
        self.verbose: bool = False
        self.debug: bool = False
        self.config: Optional[AppConfig] = None
        self.systemctl = systemctl

    def settings(self, install_path: Optional[Path] = None) -> Settings:
        """Runtime settings from the environment, with CLI overrides"""
        return Settings.from_env(install_path=str(install_path) if install_path else None)

    def lifecycle(self, install_path: Optional[Path] = None) -> Lifecycle:
        """Lifecycle wired to the current settings"""
        return Lifecycle(self.settings(install_path), systemctl=self.systemctl)


@click.group(name=APP_NAME)
@click.version_option(version=get_version(), prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """QuickPackage - build, install and uninstall an application

    The application is described by .qp/config.json: which files to stage
    and build, which files to install and whether it runs as a systemd
    service. Build, install and uninstall scripts live next to the config.
    """
    setup_logging(verbose=verbose, debug=debug, quiet=quiet)
    console.quiet = quiet

    # Keep a context object handed in by the caller
    if ctx.obj is None:
        ctx.obj = Context()
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(init.init)
cli.add_command(build.build)
cli.add_command(install.install)
cli.add_command(uninstall.uninstall)
cli.add_command(package.package)
cli.add_command(unit.unit)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        error_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        error_console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            error_console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
