"""CLI utility functions"""

from .output import (
    console,
    error_console,
    format_build_result,
    format_install_result,
    format_uninstall_result,
    format_package_result,
    format_unit_status,
    print_error,
    print_warning,
    print_success,
)

__all__ = [
    'console',
    'error_console',

    # Result formatting
    'format_build_result',
    'format_install_result',
    'format_uninstall_result',
    'format_package_result',
    'format_unit_status',

    # Messages
    'print_error',
    'print_warning',
    'print_success',
]
