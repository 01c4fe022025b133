"""
Command-line interface for dart_dev.

This module parses the task name and flags into an overlay, resolves it
against the defaults and tool/dev.toml, and hands the result to the
dispatcher. Flags that were not given are left out of the overlay
entirely, so they never mask values from the project file.
"""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from . import __version__
from .config import RunOptions, Task, config_type, default_config, field_names
from .dispatch import dispatch
from .errors import EXIT_INTERRUPTED, DartDevError, UsageError
from .loader import FILE_TASKS, load_project_config
from .logging_utils import configure_logging
from .resolve import resolve

PROG = "dart_dev"

SUPPRESS = argparse.SUPPRESS


class DartDevArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.task_parsers: Dict[Task, argparse.ArgumentParser] = {}

    def error(self, message: str):
        raise UsageError(message, help_text=self.format_help())


@dataclass(frozen=True)
class Invocation:
    """A parsed command line: the task, its CLI overlay and the global flags."""

    task: Task
    overlay: Dict[str, Any]
    options: RunOptions


def _add_toggle(parser: argparse.ArgumentParser, name: str, help: str, short: Optional[str] = None) -> None:
    flag = name.replace("_", "-")
    names = [short, f"--{flag}"] if short else [f"--{flag}"]
    parser.add_argument(*names, dest=name, action="store_true", default=SUPPRESS, help=help)
    parser.add_argument(
        f"--no-{flag}",
        dest=name,
        action="store_false",
        default=SUPPRESS,
        help=f"Negate --{flag}.",
    )


def _add_paths(parser: argparse.ArgumentParser, flag: str, dest: str, help: str) -> None:
    parser.add_argument(flag, dest=dest, action="append", default=SUPPRESS, metavar="PATH", help=help)


def _global_flags(verbosity_dest: str = "verbosity") -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    _add_toggle(
        common,
        "color",
        "Colorize dart_dev's log output and the test runner's output (default: on). "
        "dartanalyzer and dartfmt output is relayed as is.",
    )
    common.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=SUPPRESS,
        help="Minimize logging output.",
    )
    common.add_argument(
        "-v",
        "--verbose",
        dest=verbosity_dest,
        action="count",
        default=SUPPRESS,
        help="Increase verbosity (can be specified multiple times).",
    )
    return common


def _configure_analyze(parser: argparse.ArgumentParser) -> None:
    _add_paths(
        parser,
        "--entry-point",
        "entry_points",
        "File or directory to analyze; repeat for several (default: lib/).",
    )
    _add_toggle(parser, "fatal_warnings", "Treat warnings as fatal (default: on).")
    _add_toggle(parser, "hints", "Show hint results (default: on).")


def _configure_examples(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--hostname",
        default=SUPPRESS,
        help="Host name to serve examples on (default: localhost).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=SUPPRESS,
        help="Port to serve examples on (default: 8080).",
    )


def _configure_format(parser: argparse.ArgumentParser) -> None:
    _add_toggle(parser, "check", "Dry-run; fail if any file would change (default: off).", short="-c")
    _add_paths(
        parser,
        "--directory",
        "directories",
        "Directory or file to format; repeat for several (default: lib/).",
    )


def _configure_init(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        default=SUPPRESS,
        help="Overwrite an existing tool/dev.toml.",
    )


def _configure_test(parser: argparse.ArgumentParser) -> None:
    _add_toggle(parser, "unit", "Run the unit tests (default: on).")
    _add_toggle(parser, "integration", "Run the integration tests (default: off).")
    _add_paths(parser, "--unit-test", "unit_tests", "Unit test file or directory (default: test/).")
    _add_paths(parser, "--integration-test", "integration_tests", "Integration test file or directory.")
    parser.add_argument(
        "-p",
        "--platform",
        dest="platforms",
        action="append",
        default=SUPPRESS,
        metavar="NAME",
        help="Platform to run tests on; repeat for several.",
    )


TASKS = {
    Task.ANALYZE: ("Run static analysis on the entry points.", _configure_analyze),
    Task.EXAMPLES: ("Serve the example/ directory.", _configure_examples),
    Task.FORMAT: ("Format (or check the formatting of) Dart sources.", _configure_format),
    Task.INIT: ("Write a starter tool/dev.toml.", _configure_init),
    Task.TEST: ("Run unit and/or integration tests.", _configure_test),
}


def build_arg_parser() -> DartDevArgumentParser:
    parser = DartDevArgumentParser(
        prog=PROG,
        description="Run Dart project tooling with per-project defaults.",
        parents=[_global_flags()],
        add_help=False,
    )
    parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        default=SUPPRESS,
        help="Show help and exit (task-specific if a task is given).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Counted separately so "-v task -v" adds up instead of the task's count winning.
    task_common = _global_flags(verbosity_dest="task_verbosity")
    subparsers = parser.add_subparsers(dest="task", metavar="task", title="tasks", required=True)
    for task, (summary, configure) in TASKS.items():
        sub = subparsers.add_parser(task.value, help=summary, description=summary, parents=[task_common])
        configure(sub)
        parser.task_parsers[task] = sub

    return parser


def print_help(parser: DartDevArgumentParser, argv: List[str]) -> None:
    """Print the help of the first task named in argv, or the main help."""

    for token in argv:
        try:
            task = Task(token)
        except ValueError:
            continue
        parser.task_parsers[task].print_help()
        return
    parser.print_help()


def parse_invocation(argv: Optional[List[str]] = None, root: Optional[str] = None) -> Invocation:
    """
    Parse argv into an Invocation.

    Raises UsageError for an unknown task or flag. -h/--help anywhere and
    --version exit through SystemExit(0) as argparse does.
    """

    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_arg_parser()
    if "-h" in argv or "--help" in argv:
        print_help(parser, argv)
        raise SystemExit(0)

    args, extras = parser.parse_known_args(argv)
    task = Task.parse(args.task)
    if extras:
        parser.task_parsers[task].error(f"unrecognized arguments: {' '.join(extras)}")

    overlay = {name: getattr(args, name) for name in field_names(config_type(task)) if hasattr(args, name)}
    options = RunOptions(
        color=getattr(args, "color", True),
        quiet=getattr(args, "quiet", False),
        verbosity=getattr(args, "verbosity", 0) + getattr(args, "task_verbosity", 0),
        root=root or os.getcwd(),
    )
    return Invocation(task=task, overlay=overlay, options=options)


def execute(invocation: Invocation) -> int:
    """Resolve the invocation's configuration and run its task."""

    task = invocation.task
    file_overlays = load_project_config(invocation.options.root) if task in FILE_TASKS else {}
    config = resolve(task, default_config(task), file_overlays.get(task), invocation.overlay)
    return dispatch(task, config, invocation.options)


def _report(exc: DartDevError) -> None:
    print(f"{PROG}: error: {exc}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        invocation = parse_invocation(argv)
    except UsageError as exc:
        if exc.help_text:
            sys.stderr.write(exc.help_text)
        _report(exc)
        return exc.exit_code
    except SystemExit as exc:
        # --help and --version
        return exc.code if isinstance(exc.code, int) else 0

    options = invocation.options
    configure_logging(verbosity=options.verbosity, quiet=options.quiet, color=options.color)

    try:
        return execute(invocation)
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except DartDevError as exc:
        _report(exc)
        return exc.exit_code


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
