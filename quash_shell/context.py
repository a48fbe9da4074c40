"""
CommandContext - Encapsulates the shell-session state commands act on.

This module provides the CommandContext dataclass that holds the state a
shell session owns (working directory, environment, background jobs) and the
SystemInterface used to apply changes to the real process. Built-ins receive
it by reference, which keeps them testable without touching the process
environment.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from .job_registry import JobRegistry
from .system_interface import PosixSystem, SystemInterface


@dataclass
class CommandContext:
    """
    Encapsulates the shell session state.

    This provides commands with access to:
    - Current working directory
    - Environment variables (passed to external programs)
    - The background job registry
    - The system interface used for process-level effects

    Example:
        >>> from quash_shell.context import CommandContext
        >>> ctx = CommandContext(cwd='/tmp', env={'FOO': 'bar'})
        >>> ctx.get_variable('FOO')
        'bar'
        >>> ctx.resolve_path('file.txt')
        '/tmp/file.txt'
    """

    cwd: Optional[str] = None
    env: Dict[str, str] = field(default_factory=dict)
    system: SystemInterface = field(default_factory=PosixSystem)
    jobs: Optional[JobRegistry] = None

    def __post_init__(self):
        if self.cwd is None:
            self.cwd = self.system.getcwd()
        if self.jobs is None:
            self.jobs = JobRegistry(self.system)

    @classmethod
    def from_environment(cls, system: Optional[SystemInterface] = None) -> 'CommandContext':
        """
        Create a context seeded from the running process.

        The working directory comes from the system and the environment is a
        copy of os.environ.

        Args:
            system: SystemInterface to use (default: PosixSystem)

        Returns:
            A new CommandContext
        """
        system = system or PosixSystem()
        return cls(cwd=system.getcwd(), env=dict(os.environ), system=system)

    def resolve_path(self, path: str) -> str:
        """
        Resolve relative paths against the session working directory.

        Args:
            path: Path to resolve (relative or absolute)

        Returns:
            Absolute path, not yet checked for existence

        Examples:
            >>> ctx = CommandContext(cwd='/home/user')
            >>> ctx.resolve_path('../data')
            '/home/user/../data'
        """
        if path.startswith('/'):
            return path
        return os.path.join(self.cwd, path)

    def get_variable(self, name: str) -> Optional[str]:
        """
        Get an environment variable.

        Returns:
            Variable value or None if not set
        """
        return self.env.get(name)

    def set_variable(self, name: str, value: str) -> None:
        """
        Set an environment variable in the session and the shell process.

        Args:
            name: Variable name
            value: Variable value

        Raises:
            ValueError: If the system rejects the variable name
        """
        self.system.setenv(name, value)
        self.env[name] = value

    def __repr__(self):
        return (
            f"CommandContext(cwd={self.cwd!r}, "
            f"env_vars={len(self.env)}, "
            f"jobs={len(self.jobs)})"
        )
