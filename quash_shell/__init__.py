"""quash-shell - execution core for an interactive command shell"""

__version__ = "0.1.0"

from .command import (
    ChangeDirectory,
    Echo,
    EndOfPipeline,
    Export,
    Kill,
    ListJobs,
    PipelineStage,
    PrintWorkingDirectory,
    RunExternal,
    StageFlags,
    make_pipeline,
)
from .context import CommandContext
from .executor import PipelineRunner
from .job_registry import Job, JobRegistry, JobState

__all__ = [
    'ChangeDirectory',
    'CommandContext',
    'Echo',
    'EndOfPipeline',
    'Export',
    'Job',
    'JobRegistry',
    'JobState',
    'Kill',
    'ListJobs',
    'PipelineRunner',
    'PipelineStage',
    'PrintWorkingDirectory',
    'RunExternal',
    'StageFlags',
    'make_pipeline',
]
