"""
Built-in command registry.

Each command kind is implemented in its own module and registered with the
@register_command decorator, which records whether the handler runs in the
spawned child process or in the shell's own process.
"""

import enum
import importlib
from typing import Callable, Dict, Type

from ..command import Command


class Routing(enum.Enum):
    """Where a command kind is executed"""

    CHILD = 'child'
    PARENT = 'parent'
    NONE = 'none'


# Command class -> handler, per side
CHILD_COMMANDS: Dict[Type[Command], Callable] = {}
PARENT_COMMANDS: Dict[Type[Command], Callable] = {}

_COMMAND_MODULES = ('external', 'echo', 'export', 'cd', 'kill', 'pwd', 'jobs')


def register_command(kind: Type[Command], routing: Routing = Routing.CHILD):
    """
    Register a handler for a command kind.

    Args:
        kind: Command class the handler implements
        routing: Routing.CHILD for commands run in the spawned process,
                 Routing.PARENT for commands that mutate shell state

    Example:
        @register_command(Echo)
        def cmd_echo(process: Process) -> int:
            ...
    """
    if routing is Routing.CHILD:
        table = CHILD_COMMANDS
    elif routing is Routing.PARENT:
        table = PARENT_COMMANDS
    else:
        raise ValueError(f"cannot register a handler with routing {routing}")

    def decorator(func: Callable) -> Callable:
        table[kind] = func
        return func

    return decorator


def load_all_commands() -> None:
    """Import every command module so its handlers get registered."""
    for module in _COMMAND_MODULES:
        importlib.import_module(f'{__name__}.{module}')


__all__ = [
    'Routing',
    'CHILD_COMMANDS',
    'PARENT_COMMANDS',
    'register_command',
    'load_all_commands',
]
