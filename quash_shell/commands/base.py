"""
Base utilities for command implementations.

This module provides common helper functions that command modules can use
to report errors consistently.
"""

from typing import Optional

from ..exceptions import ShellError, describe_os_error
from ..exit_codes import EXIT_FAILURE
from ..process import Process


def write_error(process: Process, message: str, prefix_command: bool = True):
    """
    Write an error message to stderr.

    Args:
        process: The process object
        message: The error message
        prefix_command: If True, prefix message with command name
    """
    if prefix_command:
        process.stderr.write(f"{process.name}: {message}\n")
    else:
        process.stderr.write(f"{message}\n")


def handle_os_error(process: Process, error: OSError, context: Optional[str] = None) -> int:
    """
    Report an OSError with the reason the operating system gave.

    Args:
        process: Process object with stderr stream
        error: The OSError that was caught
        context: Optional subject of the failed operation (path, pid, ...)

    Returns:
        Exit code (always 1 for errors)

    Example:
        try:
            process.context.system.chdir(path)
        except OSError as e:
            return handle_os_error(process, e, path)
    """
    reason = describe_os_error(error)
    if context:
        write_error(process, f"{context}: {reason}")
    else:
        write_error(process, reason)
    return EXIT_FAILURE


def handle_shell_error(process: Process, error: ShellError) -> int:
    """
    Report a ShellError whose message already names the command.

    Returns:
        The error's suggested exit code
    """
    write_error(process, error.message, prefix_command=False)
    return error.exit_code


__all__ = [
    'write_error',
    'handle_os_error',
    'handle_shell_error',
]
