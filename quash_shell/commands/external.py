"""
EXTERNAL command - run an external program in place of the current process.
"""

from ..command import RunExternal
from ..exceptions import CommandNotFoundError, InvalidArgumentError, describe_os_error
from ..exit_codes import EXIT_NOT_EXECUTABLE, EXIT_NOT_FOUND
from ..process import Process
from . import register_command
from .base import handle_shell_error, write_error


@register_command(RunExternal)
def cmd_external(process: Process) -> int:
    """
    Replace the process image with an external program

    The program inherits every open file descriptor, so pipes and
    redirections set up before this call stay in effect. It receives the
    session environment.

    Returns:
        Only on failure: 127 if the program was not found, 126 if it
        could not be executed
    """
    try:
        process.command.check_arguments()
    except InvalidArgumentError as e:
        return handle_shell_error(process, e)

    argv = process.command.argv
    process.flush()

    try:
        process.context.system.exec_program(argv, process.context.env)
    except FileNotFoundError:
        return handle_shell_error(process, CommandNotFoundError(argv[0]))
    except PermissionError as e:
        write_error(process, f"{argv[0]}: {describe_os_error(e)}", prefix_command=False)
        return EXIT_NOT_EXECUTABLE
    except OSError as e:
        write_error(process, f"{argv[0]}: {describe_os_error(e)}", prefix_command=False)
        return EXIT_NOT_FOUND

    # exec_program only returns when replaced by a test double
    return 0
