"""
Tests for the command dispatcher.

Tests cover:
- Routing by command kind
- Child-side dispatch (run, no-op, unknown)
- Parent-side dispatch (run, no-op)
"""

from dataclasses import dataclass

import pytest

from quash_shell.command import (
    ChangeDirectory,
    Command,
    Echo,
    EndOfPipeline,
    Export,
    Kill,
    ListJobs,
    PrintWorkingDirectory,
    RunExternal,
)
from quash_shell.commands import CHILD_COMMANDS, PARENT_COMMANDS, Routing, register_command
from quash_shell.dispatcher import route, run_child_command, run_parent_command


@dataclass(frozen=True)
class Unknown(Command):
    name = 'unknown'


class TestRouting:
    """Test the routing table."""

    @pytest.mark.parametrize('command', [
        RunExternal(['ls']),
        Echo(['x']),
        PrintWorkingDirectory(),
        ListJobs(),
    ])
    def test_child_side_kinds(self, command):
        """Test commands without lasting effect run in the child."""
        assert route(command) is Routing.CHILD

    @pytest.mark.parametrize('command', [
        Export('A', 'b'),
        ChangeDirectory('/tmp'),
        Kill(1, 9),
    ])
    def test_parent_side_kinds(self, command):
        """Test state-changing commands run in the shell."""
        assert route(command) is Routing.PARENT

    def test_sentinel_and_unknown(self):
        """Test the sentinel and unknown kinds are not routed."""
        assert route(EndOfPipeline()) is Routing.NONE
        assert route(Unknown()) is Routing.NONE

    def test_routing_ignores_arguments(self):
        """Test argument values never change the routing."""
        assert route(ChangeDirectory(None)) is route(ChangeDirectory('/'))
        assert route(RunExternal([])) is route(RunExternal(['cd']))

    def test_every_kind_registered_once(self):
        """Test no kind is registered on both sides."""
        assert not set(CHILD_COMMANDS) & set(PARENT_COMMANDS)

    def test_register_rejects_none_routing(self):
        """Test handlers cannot be registered as not routed."""
        with pytest.raises(ValueError):
            register_command(Unknown, Routing.NONE)


class TestChildDispatch:
    """Test run_child_command."""

    def test_runs_child_builtin(self, make_process, capture_output):
        """Test a child-side built-in runs."""
        stdout, _ = capture_output
        assert run_child_command(make_process(Echo(['hi']))) == 0
        assert stdout.getvalue() == "hi \n"

    def test_parent_kind_is_noop(self, make_process, capture_output, context):
        """Test parent-side kinds do nothing in the child."""
        stdout, stderr = capture_output
        assert run_child_command(make_process(Export('FOO', 'bar'))) == 0
        assert 'FOO' not in context.env
        assert stdout.getvalue() == stderr.getvalue() == ""

    def test_sentinel_is_noop(self, make_process):
        """Test the sentinel does nothing in the child."""
        assert run_child_command(make_process(EndOfPipeline())) == 0

    def test_unknown_kind_reported(self, make_process, capture_output):
        """Test an unrecognized kind is an error on the child side."""
        _, stderr = capture_output
        assert run_child_command(make_process(Unknown())) == 1
        assert stderr.getvalue() == "Unknown command type.\n"


class TestParentDispatch:
    """Test run_parent_command."""

    def test_runs_parent_builtin(self, make_process, context):
        """Test a parent-side built-in mutates session state."""
        assert run_parent_command(make_process(Export('FOO', 'bar'))) == 0
        assert context.env['FOO'] == 'bar'

    @pytest.mark.parametrize('command', [
        RunExternal(['ls']),
        Echo(['x']),
        EndOfPipeline(),
        Unknown(),
    ])
    def test_other_kinds_are_silent_noops(self, make_process, capture_output, command):
        """Test child-side, sentinel and unknown kinds do nothing."""
        stdout, stderr = capture_output
        assert run_parent_command(make_process(command)) is None
        assert stdout.getvalue() == stderr.getvalue() == ""
