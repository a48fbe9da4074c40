"""
Custom exception hierarchy for quash-shell.

This module defines a structured exception hierarchy that provides:
- Clear error categorization
- Consistent error messages
- Proper exit codes

Usage:
    from quash_shell.exceptions import InvalidArgumentError

    try:
        stage.command.check_arguments()
    except InvalidArgumentError as e:
        print(f"Error: {e}")
        return e.exit_code
"""

from .exit_codes import EXIT_FAILURE, EXIT_NOT_FOUND


class ShellError(Exception):
    """
    Base class for all shell errors.

    Attributes:
        message: Error message
        exit_code: Suggested exit code (default: 1)
    """

    def __init__(self, message: str, exit_code: int = EXIT_FAILURE):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def __str__(self):
        return self.message


# =============================================================================
# Command Errors
# =============================================================================

class CommandError(ShellError):
    """
    Base class for command-related errors.

    Raised when a command cannot be run as requested.
    """

    def __init__(self, command: str, message: str, exit_code: int = EXIT_FAILURE):
        super().__init__(message, exit_code)
        self.command = command


class CommandNotFoundError(CommandError):
    """
    Raised when an external program cannot be found.

    Example:
        raise CommandNotFoundError("nonexistent")
    """

    def __init__(self, command: str):
        message = f"{command}: command not found"
        super().__init__(command, message, exit_code=EXIT_NOT_FOUND)


class InvalidArgumentError(CommandError):
    """
    Raised when a command's arguments break its contract.

    Example:
        raise InvalidArgumentError("cd", "missing directory operand")
    """

    def __init__(self, command: str, details: str):
        message = f"{command}: {details}"
        super().__init__(command, message, exit_code=EXIT_FAILURE)
        self.details = details


# =============================================================================
# Pipeline Errors
# =============================================================================

class InvalidStageError(ShellError):
    """
    Raised when a pipeline stage's flags disagree with its redirection paths.

    Example:
        raise InvalidStageError("REDIRECT_OUT set without a path")
    """

    def __init__(self, details: str):
        super().__init__(f"invalid pipeline stage: {details}", exit_code=2)


class RedirectionError(ShellError):
    """
    Raised when a redirection target cannot be opened.

    Example:
        raise RedirectionError("/no/such/file", "No such file or directory")
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}", exit_code=EXIT_FAILURE)
        self.path = path
        self.reason = reason


class SpawnError(ShellError):
    """
    Raised when a process or pipe cannot be created for a stage.

    Example:
        raise SpawnError("fork", "Resource temporarily unavailable")
    """

    def __init__(self, operation: str, reason: str):
        super().__init__(f"{operation} failed: {reason}", exit_code=EXIT_FAILURE)
        self.operation = operation
        self.reason = reason


# =============================================================================
# Job Errors
# =============================================================================

class JobNotFoundError(ShellError):
    """
    Raised when a job id is not tracked by the job registry.

    Example:
        raise JobNotFoundError(3)
    """

    def __init__(self, job_id: int):
        super().__init__(f"{job_id}: no such job", exit_code=EXIT_FAILURE)
        self.job_id = job_id


def describe_os_error(error: OSError) -> str:
    """
    Return the human readable reason carried by an OSError.

    Falls back to str(error) when the error has no strerror set.

    Example:
        >>> describe_os_error(FileNotFoundError(2, 'No such file or directory'))
        'No such file or directory'
    """
    return error.strerror or str(error)
