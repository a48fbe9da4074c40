"""
ECHO command - print arguments.
"""

from ..command import Echo
from ..process import Process
from . import register_command


@register_command(Echo)
def cmd_echo(process: Process) -> int:
    """
    Print arguments to standard output

    Usage: echo [arg ...]

    Every argument is followed by a single space, and the line ends with
    a newline, so 'echo a b' prints "a b \\n".
    """
    for arg in process.command.args:
        process.stdout.write(f"{arg} ")
    process.stdout.write("\n")
    return 0
