"""
Pipeline runner.

Runs one parsed pipeline end to end:

1. an empty pipeline does nothing
2. finished background jobs are reported (notices appear at the start of
   the next pipeline, not when the job exits)
3. every stage is spawned in order, each stage's pipe read end becoming the
   next stage's stdin
4. a foreground pipeline is waited for until every stage has exited
"""

import logging
import os
from typing import List, Optional, Sequence, TextIO

from .command import PipelineStage, iter_stages
from .context import CommandContext
from .job_registry import format_job_completed
from .orchestrator import ProcessOrchestrator

LOGGER = logging.getLogger(__name__)


class PipelineRunner:
    """Executes pipelines against one shell session"""

    def __init__(
        self,
        context: Optional[CommandContext] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        """
        Initialize the runner

        Args:
            context: Shell session state (default: seeded from the running process)
            stdout: Stream for job notices (default: sys.stdout)
            stderr: Stream for shell error reports (default: sys.stderr)
        """
        self.context = context or CommandContext.from_environment()
        self.orchestrator = ProcessOrchestrator(self.context, stdout, stderr)

    @property
    def stdout(self) -> TextIO:
        return self.orchestrator.stdout

    def check_jobs(self) -> int:
        """
        Print a completion notice for every background job that finished.

        Returns:
            Number of jobs reported
        """
        reported = 0
        while True:
            job = self.context.jobs.poll_finished_job()
            if job is None:
                break
            self.stdout.write(format_job_completed(job))
            reported += 1

        if reported:
            self.stdout.flush()
        return reported

    def run(self, pipeline: Sequence[PipelineStage]) -> List[int]:
        """
        Run a pipeline.

        Background is decided by the first stage and applies to every stage.

        Args:
            pipeline: Stages terminated by an EndOfPipeline stage

        Returns:
            Process ids spawned, in stage order
        """
        stages = list(iter_stages(pipeline))
        if not stages:
            return []

        self.check_jobs()

        background = stages[0].background
        pids: List[int] = []
        read_fd = None

        for stage in stages:
            result = self.orchestrator.create_process(
                stage, stdin_fd=read_fd, background=background
            )
            read_fd = result.read_fd
            if result.pid is not None:
                pids.append(result.pid)

        if read_fd is not None:
            # Last stage asked to pipe out with nothing downstream
            os.close(read_fd)

        LOGGER.debug("pipeline spawned pids %s (background=%s)", pids, background)

        if not background:
            self.orchestrator.wait_for(pids)

        return pids
