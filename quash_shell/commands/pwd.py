"""
PWD command - print working directory.
"""

from ..command import PrintWorkingDirectory
from ..process import Process
from . import register_command
from .base import handle_os_error


@register_command(PrintWorkingDirectory)
def cmd_pwd(process: Process) -> int:
    """
    Print working directory

    Usage: pwd
    """
    try:
        cwd = process.context.system.getcwd()
    except OSError as e:
        return handle_os_error(process, e)

    process.stdout.write(f"{cwd}\n")
    return 0
