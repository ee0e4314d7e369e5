"""Utility modules for dotlink.

This module exports commonly used utility functions.
"""

from dotlink.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from dotlink.utils.shell import CommandResult, command_exists, find_executable, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "find_executable",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
