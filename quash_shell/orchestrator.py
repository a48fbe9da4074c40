"""
Process orchestration for pipeline stages.

The ProcessOrchestrator turns one PipelineStage into a running process:

1. create a pipe when the stage feeds the next one
2. fork
3. in the child: wire stdin/stdout (inherited pipe, own pipe, then explicit
   redirections, which win over pipes), run the child-side command and exit
4. in the shell: close the descriptors handed to the child, run the
   parent-side command, then either register a background job or
   (optionally) wait for the child
"""

import logging
import os
import signal
import sys
from dataclasses import dataclass
from typing import Iterable, Optional, TextIO

from .command import PipelineStage, StageFlags
from .config import ERROR_PREFIX, REDIRECT_FILE_MODE
from .context import CommandContext
from .dispatcher import run_child_command, run_parent_command
from .exceptions import InvalidArgumentError, RedirectionError, SpawnError, describe_os_error
from .exit_codes import EXIT_FAILURE
from .job_registry import format_job_started
from .process import Process

LOGGER = logging.getLogger(__name__)


@dataclass
class SpawnResult:
    """Outcome of spawning one stage.

    Attributes:
        pid: Process id of the spawned process, None if the stage was skipped
        read_fd: Read end of this stage's output pipe, to become the next
                 stage's stdin; None when the stage does not pipe out
        job_id: Job id when the stage was started in the background
    """

    pid: Optional[int] = None
    read_fd: Optional[int] = None
    job_id: Optional[int] = None


class ProcessOrchestrator:
    """Spawns pipeline stages as processes"""

    def __init__(
        self,
        context: CommandContext,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        """
        Initialize the orchestrator

        Args:
            context: Shell session state shared with parent-side built-ins
            stdout: Stream for job notices and parent-side output (default: sys.stdout)
            stderr: Stream for shell error reports (default: sys.stderr)
        """
        self.context = context
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def create_process(
        self,
        stage: PipelineStage,
        stdin_fd: Optional[int] = None,
        background: Optional[bool] = None,
        wait: bool = False,
    ) -> SpawnResult:
        """
        Spawn one stage.

        Ownership of stdin_fd passes to this call: it is closed in the shell
        once the child has inherited it.

        Args:
            stage: The stage to run
            stdin_fd: Read end of the previous stage's pipe, if any
            background: Override for the stage's BACKGROUND flag
            wait: Block until the spawned process exits (foreground only)

        Returns:
            SpawnResult describing the spawned process
        """
        command = stage.command
        if background is None:
            background = stage.background

        try:
            command.check_arguments()
        except InvalidArgumentError as e:
            self._report(e.message)
            return self._skip(stage, stdin_fd)

        read_fd = write_fd = None
        if stage.pipe_out:
            try:
                read_fd, write_fd = os.pipe()
            except OSError as e:
                self._report(str(SpawnError('pipe', describe_os_error(e))))
                return self._skip(stage, stdin_fd)

        self._flush()
        try:
            pid = os.fork()
        except OSError as e:
            LOGGER.warning("fork failed for %r: %s", command, e)
            self._report(str(SpawnError('fork', describe_os_error(e))))
            _close_fds(read_fd, write_fd)
            return self._skip(stage, stdin_fd)

        if pid == 0:
            self._run_child(stage, stdin_fd, read_fd, write_fd)

        LOGGER.debug("spawned pid %d for %r", pid, command)
        _close_fds(write_fd, stdin_fd)

        run_parent_command(Process(command, self.context, self.stdout, self.stderr))

        result = SpawnResult(pid=pid, read_fd=read_fd)
        if background:
            result.job_id = self.context.jobs.register_background_job(pid, command.display)
            job = self.context.jobs.get_job(result.job_id)
            self.stdout.write(format_job_started(job))
            self.stdout.flush()
        elif wait:
            self.wait_for([pid])

        return result

    def wait_for(self, pids: Iterable[int]) -> None:
        """
        Block until every given process has exited.

        Exit statuses are collected but not reported.
        """
        for pid in pids:
            status = self.context.system.wait_pid(pid)
            LOGGER.debug("pid %d exited with status %r", pid, status)

    def _run_child(
        self,
        stage: PipelineStage,
        stdin_fd: Optional[int],
        read_fd: Optional[int],
        write_fd: Optional[int],
    ) -> None:
        """Child half of create_process. Never returns."""
        status = EXIT_FAILURE
        try:
            # Python ignores SIGPIPE; programs we exec should not
            signal.signal(signal.SIGPIPE, signal.SIG_DFL)

            if stdin_fd is not None:
                os.dup2(stdin_fd, 0)
                os.close(stdin_fd)
            if write_fd is not None:
                os.dup2(write_fd, 1)
                _close_fds(write_fd, read_fd)

            self._apply_redirections(stage)

            stdout = open(1, 'w', closefd=False)
            stderr = open(2, 'w', closefd=False)
            status = run_child_command(Process(stage.command, self.context, stdout, stderr))
        except RedirectionError as e:
            _write_fd(2, f"{ERROR_PREFIX}: {e}\n")
        except Exception as e:
            _write_fd(2, f"{ERROR_PREFIX}: {stage.command.name}: {e}\n")
        finally:
            os._exit(status)

    def _apply_redirections(self, stage: PipelineStage) -> None:
        if stage.flags & StageFlags.REDIRECT_IN:
            self._redirect(stage.redirect_in, os.O_RDONLY, 0)
        if stage.flags & StageFlags.REDIRECT_OUT:
            self._redirect(stage.redirect_out, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 1)

    def _redirect(self, path: str, flags: int, target_fd: int) -> None:
        """
        Open path and install it as target_fd.

        Raises:
            RedirectionError: If the file cannot be opened
        """
        try:
            fd = os.open(self.context.resolve_path(path), flags, REDIRECT_FILE_MODE)
        except OSError as e:
            raise RedirectionError(path, describe_os_error(e)) from e
        if fd != target_fd:
            os.dup2(fd, target_fd)
            os.close(fd)

    def _skip(self, stage: PipelineStage, stdin_fd: Optional[int]) -> SpawnResult:
        """
        Abandon a stage without spawning it.

        A stage that should have fed the next one hands over the read end
        of an already-closed pipe, so the next stage sees end of input.
        """
        _close_fds(stdin_fd)
        if not stage.pipe_out:
            return SpawnResult()
        try:
            read_fd, write_fd = os.pipe()
        except OSError:
            return SpawnResult()
        os.close(write_fd)
        return SpawnResult(read_fd=read_fd)

    def _report(self, message: str) -> None:
        self.stderr.write(f"{ERROR_PREFIX}: {message}\n")
        self.stderr.flush()

    def _flush(self) -> None:
        # Buffered output would otherwise be written twice after fork
        for stream in (self.stdout, self.stderr, sys.stdout, sys.stderr):
            stream.flush()


def _close_fds(*fds: Optional[int]) -> None:
    for fd in fds:
        if fd is not None:
            os.close(fd)


def _write_fd(fd: int, text: str) -> None:
    os.write(fd, text.encode('utf-8', errors='replace'))
