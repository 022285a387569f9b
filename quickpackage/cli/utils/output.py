# quickpackage/cli/utils/output.py
"""Output formatting utilities"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...constants import (
    EMOJI_ARROW,
    EMOJI_FOLDER,
    EMOJI_WARNING,
    MSG_BUILD_SUCCESS,
    MSG_INSTALL_SUCCESS,
    MSG_UNINSTALL_SUCCESS,
    MSG_PACKAGE_SUCCESS,
)
from ...models import BuildResult, InstallResult, UninstallResult, PackageResult

console = Console()
# Errors, warnings and log records; stays on when -q silences console
error_console = Console(stderr=True)


def format_build_result(result: BuildResult) -> None:
    """Format and display build stage result"""
    lines = [
        MSG_BUILD_SUCCESS.format(path=result.staging_dir),
        "",
        f"[bold]App:[/bold] {result.app_name}",
        f"[bold]Staged:[/bold] {len(result.copied)} path(s)",
        f"[bold]Build script:[/bold] {'ran' if result.script_ran else 'none'}",
    ]
    _append_duration(lines, result.duration)

    console.print(Panel("\n".join(lines), title="Build Result", border_style="green"))
    _show_warnings(result.warnings)


def format_install_result(result: InstallResult, verbose: bool = False) -> None:
    """Format and display install stage result"""
    lines = [
        MSG_INSTALL_SUCCESS.format(app=result.app_name, path=result.install_root),
        "",
        f"[bold]Files:[/bold] {len(result.installed)} path(s)",
        f"[bold]Install script:[/bold] {'ran' if result.script_ran else 'none'}",
    ]

    if result.unit_path:
        lines.append(f"[bold]Unit:[/bold] {result.unit_path}")
        if result.started_units:
            lines.append(f"[bold]Started:[/bold] {', '.join(result.started_units)}")
        else:
            lines.append("[bold]Started:[/bold] [dim]nothing[/dim]")

    if verbose and result.installed:
        lines.append("")
        lines.extend(_format_pairs(result.installed, result.install_root))

    if result.removed_staging:
        lines.append(f"[dim]Removed {len(result.removed_staging)} staging director(ies)[/dim]")
    _append_duration(lines, result.duration)

    console.print(Panel("\n".join(lines), title="Install Result", border_style="green"))
    _show_warnings(result.warnings)


def format_uninstall_result(result: UninstallResult) -> None:
    """Format and display uninstall stage result"""
    lines = [
        MSG_UNINSTALL_SUCCESS.format(app=result.app_name, path=result.install_root),
        "",
        f"[bold]Uninstall script:[/bold] {'ran' if result.script_ran else 'none'}",
    ]
    if result.unit_removed:
        lines.append("[bold]Unit:[/bold] removed")
    _append_duration(lines, result.duration)

    border = "yellow" if result.warnings else "green"
    console.print(Panel("\n".join(lines), title="Uninstall Result", border_style=border))
    _show_warnings(result.warnings)


def format_package_result(result: PackageResult) -> None:
    """Format and display packaging result"""
    lines = [
        MSG_PACKAGE_SUCCESS.format(path=result.build_dir),
        "",
        f"[bold]Package:[/bold] {result.app_name}",
        f"[bold]Debian files:[/bold] {', '.join(p.name for p in result.debian_files)}",
    ]
    if result.built:
        lines.append(f"[bold]Built:[/bold] see {Path(result.build_dir).parent}")
    else:
        lines.append(f"[dim]Run 'dpkg-buildpackage -us -uc' in {result.build_dir} to build[/dim]")
    _append_duration(lines, result.duration)

    console.print(Panel("\n".join(lines), title="Package Result", border_style="green"))
    _show_warnings(result.warnings)


def format_unit_status(status: Dict[str, Any]) -> None:
    """Format and display the state of an app's systemd unit"""
    table = Table(title=f"Unit {status['unit']}", box=box.SIMPLE)
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Target", status["target"])
    table.add_row("Template", "yes" if status["template"] else "no")
    table.add_row("Unit file", escape(status["unit_path"]))
    table.add_row("Installed", "[green]yes[/green]" if status["installed"] else "[yellow]no[/yellow]")
    table.add_row("Active", "[green]yes[/green]" if status["active"] else "[yellow]no[/yellow]")
    if status["template"]:
        table.add_row("Running instances", ", ".join(status["active_units"]) or "none")

    console.print(table)


def _format_pairs(pairs: List[Tuple[Path, Path]], root: Optional[Path]) -> List[str]:
    lines = []
    for src, dst in pairs:
        try:
            shown = dst.relative_to(root) if root else dst
        except ValueError:
            shown = dst
        lines.append(f"  {EMOJI_FOLDER if src.is_dir() else ' '} {src} {EMOJI_ARROW} {shown}")
    return lines


def _append_duration(lines: List[str], duration: Optional[float]) -> None:
    if duration is not None:
        lines.append(f"[dim]Took {duration:.2f}s[/dim]")


def _show_warnings(warnings: List[str]) -> None:
    if not warnings:
        return
    console.print(f"\n[bold yellow]{EMOJI_WARNING} Warnings:[/bold yellow]")
    for warning in warnings:
        console.print(f"  • {escape(warning)}")


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Print error message"""
    if error:
        error_console.print(f"[red]Error:[/red] {escape(message)}: {escape(str(error))}")
    else:
        error_console.print(f"[red]Error:[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print warning message"""
    error_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_success(message: str) -> None:
    """Print success message"""
    console.print(f"[green]Success:[/green] {escape(message)}")
