"""Process class for one command invocation"""

import sys
from typing import Callable, Optional, TextIO

from .command import Command
from .context import CommandContext
from .exit_codes import EXIT_FAILURE, EXIT_NOT_FOUND


class Process:
    """Represents a single command being run by a built-in handler"""

    def __init__(
        self,
        command: Command,
        context: CommandContext,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        executor: Optional[Callable] = None,
    ):
        """
        Initialize a process

        Args:
            command: The command to run
            context: Shell session state the command reads and mutates
            stdout: Output stream (default: sys.stdout)
            stderr: Error stream (default: sys.stderr)
            executor: Callable that runs the command, taking this process
        """
        self.command = command
        self.context = context
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.executor = executor

        self.exit_code = 0

    @property
    def name(self) -> str:
        """Built-in name used to prefix error messages"""
        return self.command.name

    def execute(self) -> int:
        """
        Execute the process

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        if self.executor is None:
            self.stderr.write(f"Error: No such command '{self.name}'\n")
            self.exit_code = EXIT_NOT_FOUND
            return self.exit_code

        try:
            self.exit_code = self.executor(self)
        except KeyboardInterrupt:
            # Let KeyboardInterrupt propagate for proper Ctrl-C handling
            raise
        except Exception as e:
            self.stderr.write(f"Error executing '{self.name}': {e}\n")
            self.exit_code = EXIT_FAILURE

        self.flush()
        return self.exit_code

    def flush(self) -> None:
        """Flush both output streams"""
        self.stdout.flush()
        self.stderr.flush()

    def __repr__(self):
        return f"Process({self.command!r})"
