"""
Command-line entry point.

Runs one literal command (no shell parsing) through the pipeline runner:

    python -m quash_shell [--background] [--stdin FILE] [--stdout FILE] COMMAND [ARG ...]
"""

import argparse
import sys

from .command import PipelineStage, RunExternal, StageFlags, make_pipeline
from .config import configure_logging
from .executor import PipelineRunner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='quash',
        description='Run a single command through the quash execution core',
    )
    parser.add_argument('-b', '--background', action='store_true',
                        help='start the command as a background job')
    parser.add_argument('-i', '--stdin', metavar='FILE',
                        help='read standard input from FILE')
    parser.add_argument('-o', '--stdout', metavar='FILE',
                        help='write standard output to FILE (truncated)')
    parser.add_argument('--log-level', default=None,
                        help='logging level (default: $QUASH_LOG_LEVEL or WARNING)')
    parser.add_argument('argv', nargs=argparse.REMAINDER,
                        help='command and its arguments')
    return parser


def stage_from_args(args: argparse.Namespace) -> PipelineStage:
    flags = StageFlags.NONE
    if args.background:
        flags |= StageFlags.BACKGROUND
    if args.stdin:
        flags |= StageFlags.REDIRECT_IN
    if args.stdout:
        flags |= StageFlags.REDIRECT_OUT

    return PipelineStage(
        RunExternal(args.argv),
        flags,
        redirect_in=args.stdin or None,
        redirect_out=args.stdout or None,
    )


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.argv and args.argv[0] == '--':
        args.argv = args.argv[1:]
    if not args.argv:
        parser.error('no command given')

    runner = PipelineRunner()
    runner.run(make_pipeline(stage_from_args(args)))
    return 0


if __name__ == '__main__':
    sys.exit(main())
