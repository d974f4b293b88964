"""Utility modules for hdfsprune.

This module exports commonly used utility functions.
"""

from hdfsprune.utils.formatting import (
    console,
    err_console,
    print_command,
    print_error,
    print_info,
    print_success,
    print_warning,
    setup_logging,
)
from hdfsprune.utils.shell import (
    CommandResult,
    find_executable,
    run_command,
    run_interactive,
    stream_lines,
)

__all__ = [
    "CommandResult",
    "console",
    "err_console",
    "find_executable",
    "print_command",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "run_interactive",
    "setup_logging",
    "stream_lines",
]
