"""
SystemInterface - Abstract interface for process-environment operations.

This module provides the SystemInterface abstract base class that lets
built-in commands and the job registry work against any implementation of
the shell's process environment (real POSIX, or an in-memory mock in tests).
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

LOGGER = logging.getLogger(__name__)


class SystemInterface(ABC):
    """
    Abstract interface for operations on the shell's own process.

    Implementations:
    - PosixSystem (production, backed by the os module)
    - MockSystem (testing, see tests/conftest.py)

    Errors are reported by raising OSError subclasses, exactly like the
    os module does.
    """

    @abstractmethod
    def getcwd(self) -> str:
        """
        Get the process working directory.

        Returns:
            Absolute path of the current working directory
        """
        pass

    @abstractmethod
    def realpath(self, path: str) -> str:
        """
        Resolve a path to its canonical absolute form.

        Args:
            path: Absolute path, possibly containing '..' or symlinks

        Returns:
            Canonical absolute path

        Raises:
            FileNotFoundError: If any component does not exist
        """
        pass

    @abstractmethod
    def chdir(self, path: str) -> None:
        """
        Change the process working directory.

        Raises:
            FileNotFoundError: If the directory doesn't exist
            NotADirectoryError: If path is not a directory
            PermissionError: If access denied
        """
        pass

    @abstractmethod
    def setenv(self, name: str, value: str) -> None:
        """
        Set a variable in the process environment, overwriting it.

        Raises:
            ValueError: If the name is not a valid variable name
        """
        pass

    @abstractmethod
    def kill(self, pid: int, signum: int) -> None:
        """
        Deliver a signal to a process.

        Raises:
            ProcessLookupError: If there is no such process
            PermissionError: If not allowed to signal it
        """
        pass

    @abstractmethod
    def exec_program(self, argv: Sequence[str], env: Dict[str, str]) -> None:
        """
        Replace the current process image with an external program.

        Searches PATH for argv[0]. Only returns by raising.

        Raises:
            FileNotFoundError: If the program cannot be found
            PermissionError: If the program is not executable
        """
        pass

    @abstractmethod
    def wait_pid(self, pid: int) -> Optional[int]:
        """
        Block until a child process exits.

        Returns:
            Raw wait status, or None if the child was already collected
        """
        pass

    @abstractmethod
    def poll_pid(self, pid: int) -> bool:
        """
        Check without blocking whether a child process has exited.

        A child that was already collected elsewhere counts as exited.

        Returns:
            True if the process has exited, False if it is still running
        """
        pass


class PosixSystem(SystemInterface):
    """SystemInterface backed by the real process via the os module"""

    def getcwd(self) -> str:
        return os.getcwd()

    def realpath(self, path: str) -> str:
        return os.path.realpath(path, strict=True)

    def chdir(self, path: str) -> None:
        os.chdir(path)

    def setenv(self, name: str, value: str) -> None:
        os.environ[name] = value

    def kill(self, pid: int, signum: int) -> None:
        os.kill(pid, signum)

    def exec_program(self, argv: Sequence[str], env: Dict[str, str]) -> None:
        os.execvpe(argv[0], list(argv), env)

    def wait_pid(self, pid: int) -> Optional[int]:
        try:
            _, status = os.waitpid(pid, 0)
        except ChildProcessError:
            LOGGER.debug("pid %d was already collected", pid)
            return None
        return status

    def poll_pid(self, pid: int) -> bool:
        try:
            reaped, _ = os.waitpid(pid, os.WNOHANG)
        except ChildProcessError:
            return True
        return reaped != 0
