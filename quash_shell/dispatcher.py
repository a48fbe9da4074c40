"""
Command dispatcher.

Commands are routed by kind alone, never by argument values:

- child side: programs and built-ins without lasting effect (exec, echo,
  pwd, jobs) run in the spawned process and their effects end with it
- parent side: built-ins that change shell state (export, cd, kill) run in
  the shell's own process so the change outlives the spawned process
- anything else is a no-op on that side

This module loads the commands/ directory and exposes the two entry points
used by the process orchestrator.
"""

from typing import Callable, Optional

from .command import Command, EndOfPipeline
from .commands import CHILD_COMMANDS, PARENT_COMMANDS, Routing, load_all_commands
from .exit_codes import EXIT_FAILURE, EXIT_SUCCESS
from .process import Process

# Load all command modules to populate the routing tables
load_all_commands()


def route(command: Command) -> Routing:
    """
    Classify a command by kind.

    Returns:
        Routing.CHILD, Routing.PARENT, or Routing.NONE for the sentinel
        and unknown kinds

    Example:
        >>> route(Export('FOO', 'bar'))
        <Routing.PARENT: 'parent'>
    """
    kind = type(command)
    if kind in CHILD_COMMANDS:
        return Routing.CHILD
    if kind in PARENT_COMMANDS:
        return Routing.PARENT
    return Routing.NONE


def get_child_handler(command: Command) -> Optional[Callable]:
    return CHILD_COMMANDS.get(type(command))


def get_parent_handler(command: Command) -> Optional[Callable]:
    return PARENT_COMMANDS.get(type(command))


def run_child_command(process: Process) -> int:
    """
    Run the child-side half of a command inside the spawned process.

    Parent-side kinds and the sentinel are known here and do nothing.
    An unknown kind is reported.

    Returns:
        Exit status for the spawned process
    """
    command = process.command
    handler = get_child_handler(command)

    if handler is None:
        if type(command) in PARENT_COMMANDS or isinstance(command, EndOfPipeline):
            return EXIT_SUCCESS
        process.stderr.write("Unknown command type.\n")
        process.flush()
        return EXIT_FAILURE

    process.executor = handler
    return process.execute()


def run_parent_command(process: Process) -> Optional[int]:
    """
    Run the parent-side half of a command inside the shell process.

    Returns:
        Exit status of the built-in, or None when there is nothing to do
        for this kind on the parent side
    """
    handler = get_parent_handler(process.command)
    if handler is None:
        return None

    process.executor = handler
    return process.execute()
