"""
JOBS command - list background jobs.
"""

from ..command import ListJobs
from ..job_registry import format_job
from ..process import Process
from . import register_command


@register_command(ListJobs)
def cmd_jobs(process: Process) -> int:
    """
    List background jobs

    Usage: jobs

    Prints one "[id]<TAB>pid<TAB>command" line per tracked job, oldest
    first.
    """
    for job in process.context.jobs.list_active_jobs():
        process.stdout.write(format_job(job))

    return 0
