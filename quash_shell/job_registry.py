"""Background job tracking for quash-shell.

This module provides the JobRegistry class which handles:
- Assigning job ids to background processes
- Noticing (by polling) which background processes have exited
- Reporting each finished job exactly once
- Listing the jobs still tracked
"""

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from .system_interface import PosixSystem, SystemInterface

LOGGER = logging.getLogger(__name__)


class JobState(enum.Enum):
    RUNNING = 'Running'
    FINISHED = 'Finished'


@dataclass
class Job:
    """A background process tracked by the registry.

    Attributes:
        job_id: Small positive id, unique among tracked jobs
        pid: Process id
        display: Command name/line shown to the user
        state: RUNNING until the process has exited
    """

    job_id: int
    pid: int
    display: str
    state: JobState = JobState.RUNNING

    def __repr__(self) -> str:
        return f"Job([{self.job_id}] pid={self.pid} {self.state.value} {self.display!r})"


def format_job(job: Job) -> str:
    """Format a job the way jobs, start and completion lines show it."""
    return f"[{job.job_id}]\t{job.pid}\t{job.display}\n"


def format_job_started(job: Job) -> str:
    return f"Background job started: {format_job(job)}"


def format_job_completed(job: Job) -> str:
    return f"Completed: \t{format_job(job)}"


class JobRegistry:
    """Registry of background jobs.

    Jobs are kept in insertion order. Finished jobs stay tracked until
    poll_finished_job() has reported them, after which their id is free
    for reuse. Every public method runs under one lock so that polling and
    insertion never interleave mid-update.

    Attributes:
        _jobs: Internal dictionary mapping job ids to jobs
        _system: SystemInterface used to poll child processes
    """

    def __init__(self, system: Optional[SystemInterface] = None):
        """Initialize an empty job registry.

        Args:
            system: SystemInterface used for non-blocking exit checks
                    (default: PosixSystem)
        """
        self._jobs: Dict[int, Job] = {}
        self._system = system or PosixSystem()
        self._lock = threading.RLock()

    def register_background_job(self, pid: int, display: str) -> int:
        """Track a newly spawned background process.

        Args:
            pid: Process id of the spawned process
            display: Command name/line to show for it

        Returns:
            The smallest positive job id not currently in use

        Examples:
            >>> registry = JobRegistry()
            >>> registry.register_background_job(4242, 'sleep 10')
            1
        """
        with self._lock:
            job_id = 1
            while job_id in self._jobs:
                job_id += 1
            self._jobs[job_id] = Job(job_id, pid, display)
            LOGGER.debug("registered job [%d] pid=%d %r", job_id, pid, display)
            return job_id

    def poll_finished_job(self) -> Optional[Job]:
        """Report one job whose process has exited, without blocking.

        The reported job is removed from the registry. Repeated calls drain
        all finished jobs; None means nothing is left to report.

        Returns:
            The finished Job, or None
        """
        with self._lock:
            self._reap()
            for job_id, job in self._jobs.items():
                if job.state is JobState.FINISHED:
                    del self._jobs[job_id]
                    LOGGER.debug("reporting finished job %r", job)
                    return job
            return None

    def list_active_jobs(self) -> List[Job]:
        """Get all tracked jobs in insertion order.

        Returns:
            List of jobs not yet reported as finished
        """
        with self._lock:
            return list(self._jobs.values())

    def get_job(self, job_id: int) -> Optional[Job]:
        """Get a tracked job by id.

        Args:
            job_id: Job id to look up

        Returns:
            The Job, or None if the id is not tracked
        """
        with self._lock:
            return self._jobs.get(job_id)

    def _reap(self) -> None:
        for job in self._jobs.values():
            if job.state is JobState.RUNNING and self._system.poll_pid(job.pid):
                job.state = JobState.FINISHED
                LOGGER.debug("job [%d] pid=%d has exited", job.job_id, job.pid)

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def __contains__(self, job_id: int) -> bool:
        with self._lock:
            return job_id in self._jobs
