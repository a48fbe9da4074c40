"""
Command and pipeline data model.

A command is one of a closed set of kinds, each modelled as its own frozen
dataclass carrying only the fields that kind needs:

- RunExternal: run an external program
- Echo: print arguments
- Export: set an environment variable
- ChangeDirectory: change the working directory
- Kill: send a signal to a job or process
- PrintWorkingDirectory: print the working directory
- ListJobs: list background jobs
- EndOfPipeline: sentinel closing a pipeline

Dispatch looks commands up by their class, so a field can never be read
through the wrong kind.
"""

import enum
from dataclasses import dataclass
from signal import SIGTERM
from typing import List, Optional, Sequence, Tuple

from .exceptions import InvalidArgumentError, InvalidStageError


class Command:
    """Base class for every command kind"""

    name = ''

    @property
    def display(self) -> str:
        """String shown in job start, completion and listing lines"""
        return self.name

    def check_arguments(self) -> None:
        """
        Validate the command's argument contract.

        Raises:
            InvalidArgumentError: If the arguments cannot be run
        """


@dataclass(frozen=True)
class RunExternal(Command):
    argv: Tuple[str, ...] = ()

    name = 'exec'

    def __post_init__(self):
        object.__setattr__(self, 'argv', tuple(self.argv))

    @property
    def display(self) -> str:
        return ' '.join(self.argv)

    def check_arguments(self) -> None:
        if not self.argv:
            raise InvalidArgumentError(self.name, "no command provided")


@dataclass(frozen=True)
class Echo(Command):
    args: Tuple[str, ...] = ()

    name = 'echo'

    def __post_init__(self):
        object.__setattr__(self, 'args', tuple(self.args))


@dataclass(frozen=True)
class Export(Command):
    var_name: str
    value: str

    name = 'export'


@dataclass(frozen=True)
class ChangeDirectory(Command):
    path: Optional[str] = None

    name = 'cd'

    def check_arguments(self) -> None:
        if self.path is None:
            raise InvalidArgumentError(self.name, "missing directory operand")


@dataclass(frozen=True)
class Kill(Command):
    target: int
    signum: int = int(SIGTERM)

    name = 'kill'

    def check_arguments(self) -> None:
        if self.target <= 0:
            raise InvalidArgumentError(self.name, f"{self.target}: invalid job id")


@dataclass(frozen=True)
class PrintWorkingDirectory(Command):
    name = 'pwd'


@dataclass(frozen=True)
class ListJobs(Command):
    name = 'jobs'


@dataclass(frozen=True)
class EndOfPipeline(Command):
    name = 'eoc'


class StageFlags(enum.Flag):
    """Per-stage flags"""

    NONE = 0
    BACKGROUND = enum.auto()
    PIPE_OUT = enum.auto()
    REDIRECT_IN = enum.auto()
    REDIRECT_OUT = enum.auto()


@dataclass(frozen=True)
class PipelineStage:
    """
    One command of a pipeline with its flags and redirections.

    The REDIRECT_IN / REDIRECT_OUT flags must be set exactly when the
    matching path is present and non-empty.

    Attributes:
        command: The command to run
        flags: StageFlags for this stage
        redirect_in: File to read stdin from
        redirect_out: File to write stdout to (created/truncated)

    Example:
        >>> PipelineStage(RunExternal(['ls']), StageFlags.REDIRECT_OUT,
        ...               redirect_out='listing.txt')
    """

    command: Command
    flags: StageFlags = StageFlags.NONE
    redirect_in: Optional[str] = None
    redirect_out: Optional[str] = None

    def __post_init__(self):
        if bool(self.flags & StageFlags.REDIRECT_IN) != bool(self.redirect_in):
            raise InvalidStageError("REDIRECT_IN flag and input path disagree")
        if bool(self.flags & StageFlags.REDIRECT_OUT) != bool(self.redirect_out):
            raise InvalidStageError("REDIRECT_OUT flag and output path disagree")

    @property
    def background(self) -> bool:
        return bool(self.flags & StageFlags.BACKGROUND)

    @property
    def pipe_out(self) -> bool:
        return bool(self.flags & StageFlags.PIPE_OUT)

    @property
    def is_end(self) -> bool:
        return isinstance(self.command, EndOfPipeline)


END_OF_PIPELINE = PipelineStage(EndOfPipeline())


def make_pipeline(*stages: PipelineStage) -> List[PipelineStage]:
    """
    Build a pipeline from stages, appending the EndOfPipeline sentinel.

    Example:
        >>> pipeline = make_pipeline(
        ...     PipelineStage(RunExternal(['ls']), StageFlags.PIPE_OUT),
        ...     PipelineStage(RunExternal(['wc', '-l'])),
        ... )
        >>> pipeline[-1].is_end
        True
    """
    return list(stages) + [END_OF_PIPELINE]


def iter_stages(pipeline: Sequence[PipelineStage]):
    """Yield the stages of a pipeline up to (not including) the sentinel."""
    for stage in pipeline:
        if stage.is_end:
            return
        yield stage
