"""
Pytest configuration and shared fixtures for quash-shell tests.

This module provides reusable test fixtures for:
- A mock system implementation (no real chdir, kill or exec)
- Command contexts and processes with captured output
- Helpers for tests that fork real processes
"""

import io
import os
import time
from typing import Dict, List, Optional, Sequence, Set, Tuple

import pytest

from quash_shell.system_interface import SystemInterface


# ============================================================================
# Mock System Implementation
# ============================================================================

class MockSystem(SystemInterface):
    """
    Mock system for testing without touching the real process.

    Directories are a set of absolute paths; processes are a set of pids
    that are "running" until marked exited.
    """

    def __init__(self, cwd: str = '/'):
        self.cwd = cwd
        self.directories: Set[str] = {'/'}
        self.environ: Dict[str, str] = {}
        self.running: Set[int] = set()
        self.signals: List[Tuple[int, int]] = []
        self.executed: List[Tuple[Tuple[str, ...], Dict[str, str]]] = []
        self.programs: Set[str] = set()
        self.waited: List[int] = []

    def add_directory(self, path: str) -> None:
        parts = path.strip('/').split('/')
        current = ''
        for part in parts:
            current += '/' + part
            self.directories.add(current)

    def getcwd(self) -> str:
        return self.cwd

    def realpath(self, path: str) -> str:
        resolved = os.path.normpath(path)
        if resolved.startswith('//'):
            resolved = '/' + resolved.lstrip('/')
        if resolved not in self.directories:
            raise FileNotFoundError(2, 'No such file or directory', path)
        return resolved

    def chdir(self, path: str) -> None:
        if path not in self.directories:
            raise FileNotFoundError(2, 'No such file or directory', path)
        self.cwd = path

    def setenv(self, name: str, value: str) -> None:
        if not name or '=' in name:
            raise ValueError('illegal environment variable name')
        self.environ[name] = value

    def kill(self, pid: int, signum: int) -> None:
        if pid not in self.running:
            raise ProcessLookupError(3, 'No such process')
        self.signals.append((pid, signum))

    def exec_program(self, argv: Sequence[str], env: Dict[str, str]) -> None:
        if argv[0] not in self.programs:
            raise FileNotFoundError(2, 'No such file or directory', argv[0])
        self.executed.append((tuple(argv), dict(env)))

    def wait_pid(self, pid: int) -> Optional[int]:
        self.waited.append(pid)
        self.running.discard(pid)
        return 0

    def poll_pid(self, pid: int) -> bool:
        return pid not in self.running


# ============================================================================
# Pytest Fixtures
# ============================================================================

@pytest.fixture
def mock_system():
    """
    Provides a mock system with a small directory tree.

    Returns:
        MockSystem: with /a/b, /home/test and /tmp present, cwd '/'
    """
    system = MockSystem()
    system.add_directory('/a/b')
    system.add_directory('/home/test')
    system.add_directory('/tmp')
    system.programs.update({'ls', 'cat', 'true'})
    return system


@pytest.fixture
def context(mock_system):
    """
    Provides a CommandContext bound to the mock system.

    Example:
        def test_cd(context):
            context.system.add_directory('/x')
    """
    from quash_shell.context import CommandContext

    return CommandContext(
        cwd=mock_system.getcwd(),
        env={'PATH': '/bin:/usr/bin', 'HOME': '/home/test'},
        system=mock_system,
    )


@pytest.fixture
def capture_output():
    """
    Provides StringIO objects for capturing command output.

    Returns:
        tuple: (stdout, stderr) StringIO objects
    """
    return io.StringIO(), io.StringIO()


@pytest.fixture
def make_process(context, capture_output):
    """
    Factory fixture building a Process for a command with captured output.

    Example:
        def test_echo(make_process):
            process = make_process(Echo(['hi']))
            cmd_echo(process)
    """
    from quash_shell.process import Process

    stdout, stderr = capture_output

    def factory(command, executor=None):
        return Process(command, context, stdout=stdout, stderr=stderr, executor=executor)

    return factory


@pytest.fixture
def real_context(tmp_path, monkeypatch):
    """
    Provides a CommandContext on the real system, rooted in tmp_path.

    The working directory and PWD are restored after the test.
    """
    from quash_shell.context import CommandContext

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('PWD', str(tmp_path))
    return CommandContext.from_environment()


@pytest.fixture
def runner(real_context, capture_output):
    """
    Provides a PipelineRunner on the real system with captured notices.
    """
    from quash_shell.executor import PipelineRunner

    stdout, stderr = capture_output
    pipeline_runner = PipelineRunner(real_context, stdout=stdout, stderr=stderr)
    yield pipeline_runner

    # Do not leave background children behind
    for job in real_context.jobs.list_active_jobs():
        try:
            os.kill(job.pid, 9)
            os.waitpid(job.pid, 0)
        except (ProcessLookupError, ChildProcessError):
            pass


# ============================================================================
# Helper Functions
# ============================================================================

def wait_until(predicate, timeout: float = 5.0, interval: float = 0.02) -> bool:
    """
    Poll predicate until it returns a truthy value or timeout expires.

    Returns:
        The last value returned by predicate
    """
    deadline = time.monotonic() + timeout
    result = predicate()
    while not result and time.monotonic() < deadline:
        time.sleep(interval)
        result = predicate()
    return result


pytest.wait_until = wait_until
