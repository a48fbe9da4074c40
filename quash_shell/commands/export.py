"""
EXPORT command - set an environment variable in the shell.
"""

from ..command import Export
from ..process import Process
from . import Routing, register_command
from .base import handle_os_error, write_error


@register_command(Export, Routing.PARENT)
def cmd_export(process: Process) -> int:
    """
    Set an environment variable, overwriting any previous value

    Usage: export NAME=VALUE

    Runs in the shell process so that programs spawned later inherit it.
    """
    name = process.command.var_name
    value = process.command.value

    if not name or '=' in name:
        write_error(process, f"`{name}': not a valid identifier")
        return 1

    try:
        process.context.set_variable(name, value)
    except ValueError as e:
        write_error(process, f"{name}: {e}")
        return 1
    except OSError as e:
        return handle_os_error(process, e, name)

    return 0
