"""
KILL command - send a signal to a background job.
"""

from ..command import Kill
from ..exceptions import InvalidArgumentError, JobNotFoundError
from ..process import Process
from . import Routing, register_command
from .base import handle_os_error, handle_shell_error, write_error


@register_command(Kill, Routing.PARENT)
def cmd_kill(process: Process) -> int:
    """
    Send a signal to a job

    Usage: kill <signum> <job>

    The target is always a job id. Ids of jobs that are not tracked,
    including ones already reported as completed, are rejected without
    sending anything.
    """
    try:
        process.command.check_arguments()
    except InvalidArgumentError as e:
        return handle_shell_error(process, e)

    target = process.command.target
    job = process.context.jobs.get_job(target)
    if job is None:
        error = JobNotFoundError(target)
        write_error(process, error.message)
        return error.exit_code

    try:
        process.context.system.kill(job.pid, process.command.signum)
    except OSError as e:
        return handle_os_error(process, e, f"({job.pid})")

    return 0
