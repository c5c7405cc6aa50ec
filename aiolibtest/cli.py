"""Command line interface compatible with the libtest test harness."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import NoReturn

from aiolibtest.errors import ConfigurationError, HelpRequested
from aiolibtest.exit_status import ExitStatus
from aiolibtest.models.descriptor import TestDescriptor, TestKind
from aiolibtest.models.options import RunIgnored, RunOptions
from aiolibtest.runner import run_tests

log = logging.getLogger(__name__)

DESCRIPTION = """\
The FILTER string is tested against the name of all tests, and only those
tests whose names contain the filter are run."""


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser raising ConfigurationError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        """Report a parsing error to the caller."""
        raise ConfigurationError(message)


def parse_test_threads(value: str) -> int:
    """Parse the argument of --test-threads."""
    try:
        threads = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"argument for --test-threads must be a number > 0 (error: {exc})"
        ) from exc
    if threads <= 0:
        raise argparse.ArgumentTypeError("argument for --test-threads must not be 0")
    return threads


def build_parser(prog: str | None = None) -> ArgumentParser:
    """Build the libtest-compatible argument parser."""
    parser = ArgumentParser(
        prog=prog,
        usage="%(prog)s [OPTIONS] [FILTER]",
        description=DESCRIPTION,
        add_help=False,
    )
    parser.add_argument("filter", nargs="?", metavar="FILTER", help=argparse.SUPPRESS)
    ignored = parser.add_mutually_exclusive_group()
    ignored.add_argument(
        "--ignored", action="store_true", help="Run only ignored tests"
    )
    ignored.add_argument(
        "--include-ignored",
        action="store_true",
        help="Run ignored and not ignored tests",
    )
    parser.add_argument(
        "--test", action="store_true", help="Run tests and not benchmarks"
    )
    parser.add_argument(
        "--bench", action="store_true", help="Run benchmarks instead of tests"
    )
    parser.add_argument(
        "--list", action="store_true", help="List all tests and benchmarks"
    )
    parser.add_argument(
        "-h", "--help", action="store_true", help="Display this message"
    )
    parser.add_argument(
        "--logfile",
        type=Path,
        metavar="PATH",
        help="Write logs to the specified file (handled by the host program)",
    )
    parser.add_argument(
        "--nocapture",
        action="store_true",
        help="Don't capture stdout/stderr of each task, allow printing directly",
    )
    parser.add_argument(
        "--test-threads",
        type=parse_test_threads,
        metavar="n_threads",
        help="Number of tests driven concurrently (default: unbounded)",
    )
    parser.add_argument(
        "--skip",
        action="append",
        default=[],
        metavar="FILTER",
        help="Skip tests whose names contain FILTER (can be used multiple times)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Display one character per test instead of one line (--format=terse)",
    )
    parser.add_argument(
        "--exact",
        action="store_true",
        help="Exactly match filters rather than by substring",
    )
    parser.add_argument(
        "--color",
        choices=("auto", "always", "never"),
        default="auto",
        help="Configure coloring of output (default: auto, colorize on a tty)",
    )
    parser.add_argument(
        "--format",
        choices=("pretty", "terse", "json"),
        help="Configure formatting of output (default: pretty)",
    )
    return parser


def parse_args(
    argv: Sequence[str] | None = None, prog: str | None = None
) -> RunOptions:
    """Parse libtest command line arguments into run options.

    Args:
        argv: Arguments without the program name (default: ``sys.argv[1:]``)
        prog: Program name used in the usage message

    Returns:
        Validated run options

    Raises:
        HelpRequested: If ``-h``/``--help`` was given
        ConfigurationError: If the arguments are malformed

    """
    parser = build_parser(prog)
    args = parser.parse_args(argv)

    if args.help:
        raise HelpRequested(parser.format_help())

    kinds: set[TestKind] = set()
    if args.bench:
        kinds.add("bench")
    if args.test or not args.bench:
        kinds.add("test")

    run_ignored: RunIgnored
    if args.ignored:
        run_ignored = "only"
    elif args.include_ignored:
        run_ignored = "include"
    else:
        run_ignored = "exclude"

    return RunOptions(
        name_filter=None if args.exact else args.filter,
        exact_filter=args.filter if args.exact else None,
        skip=tuple(args.skip),
        run_ignored=run_ignored,
        kinds=frozenset(kinds),
        test_threads=args.test_threads,
        format=args.format or ("terse" if args.quiet else "pretty"),
        color=args.color,
        list_only=args.list,
        logfile=args.logfile,
        nocapture=args.nocapture,
    )


def main(
    tests: Iterable[TestDescriptor], argv: Sequence[str] | None = None
) -> NoReturn:
    """Parse the command line, run the tests and exit with the derived status.

    This is the process boundary: it is the only function that configures
    logging and terminates the process.
    """
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        options = parse_args(argv)
    except HelpRequested as exc:
        print(exc.usage, file=sys.stderr)
        ExitStatus.OK.exit()
    except ConfigurationError as exc:
        print(f"CLI argument error: {exc}", file=sys.stderr)
        ExitStatus.FAILED.exit()

    log.debug("Run options: %s", options)
    status = asyncio.run(run_tests(options, tests))
    status.exit()
