"""
CD command - change the shell's working directory.
"""

from ..command import ChangeDirectory
from ..exceptions import InvalidArgumentError
from ..process import Process
from . import Routing, register_command
from .base import handle_os_error, handle_shell_error


@register_command(ChangeDirectory, Routing.PARENT)
def cmd_cd(process: Process) -> int:
    """
    Change the current working directory

    Usage: cd <path>

    The path is resolved to a canonical absolute path that must exist.
    On success the session cwd and PWD name the new directory; on any
    failure the working directory is left as it was.
    """
    try:
        process.command.check_arguments()
    except InvalidArgumentError as e:
        return handle_shell_error(process, e)

    path = process.command.path
    context = process.context
    system = context.system

    try:
        target = system.realpath(context.resolve_path(path))
        system.chdir(target)
    except OSError as e:
        return handle_os_error(process, e, path)

    cwd = system.getcwd()
    context.cwd = cwd
    context.set_variable('PWD', cwd)
    return 0
