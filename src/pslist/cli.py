"""pslist - command-line entry point."""

import argparse
import functools
import os
import sys
from collections.abc import Sequence

from pslist.config import DEFAULT_SNAPSHOT_INTERVAL, ListingOptions
from pslist.errors import ArgumentError, SelectionError
from pslist.log import configure_logging
from pslist.reporter import Reporter
from pslist.selector import UNC_PREFIX, select_processes

EXIT_OK = 0
EXIT_BAD_ARGUMENTS = 1
EXIT_SELECTION_FAILED = 2
EXIT_INTERRUPTED = 130

DESCRIPTION = "List processes with their CPU or memory usage."

USAGE = (
    "%(prog)s [-h]\n"
    "       %(prog)s [\\\\MACHINE-NAME] PROCESS [-m] [-s [DURATION]] [-r INTERVAL] [-v]"
)


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting."""

    def error(self, message: str) -> None:
        raise ArgumentError(message)


class _SelectorAction(argparse.Action):
    """Stores a process selector and rejects any second one, repeats included."""

    def __call__(self, parser, namespace, values, option_string=None):
        previous = getattr(namespace, "selector_flag", None)
        if previous is not None:
            parser.error(f"Multiple process options specified: {previous} and {option_string}")
        namespace.selector_flag = option_string
        setattr(namespace, self.dest, self.const if self.nargs == 0 else values)


def positive_int(value: str) -> int:
    """argparse type for a strictly positive integer."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be positive: {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the pslist argument parser."""
    parser = _Parser(
        prog="pslist",
        usage=USAGE,
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-h",
        "-?",
        "--help",
        action="store_true",
        help="Show this help.",
    )

    process = parser.add_argument_group("PROCESS")
    selectors = process.add_mutually_exclusive_group()
    selectors.add_argument(
        "-a",
        dest="all",
        action=_SelectorAction,
        nargs=0,
        const=True,
        default=False,
        help="List all processes.",
    )
    selectors.add_argument(
        "-i",
        dest="process_id",
        action=_SelectorAction,
        type=int,
        metavar="PROCESS-ID",
        help="List by process id.",
    )
    selectors.add_argument(
        "-n",
        dest="process_name",
        action=_SelectorAction,
        metavar="PROCESS-NAME",
        help="List by process name. (Case insensitive)",
    )
    selectors.add_argument(
        "-N",
        dest="process_name_regex",
        action=_SelectorAction,
        metavar="PROCESS-NAME-RE",
        help="List by process name regex. (Case insensitive)",
    )
    selectors.add_argument(
        "-f",
        dest="file_name",
        action=_SelectorAction,
        metavar="FILE-NAME",
        help="List by executable path.",
    )
    selectors.add_argument(
        "-F",
        dest="file_name_regex",
        action=_SelectorAction,
        metavar="FILE-NAME-RE",
        help="List by executable path regex. (Case insensitive)",
    )

    parser.add_argument(
        "-m",
        dest="memory",
        action="store_true",
        help="Show memory info instead of CPU.",
    )
    parser.add_argument(
        "-s",
        dest="snapshot_duration",
        nargs="?",
        type=positive_int,
        default=0,
        const=None,
        metavar="DURATION",
        help="Snapshot during DURATION seconds. Runs until interrupted without DURATION.",
    )
    parser.add_argument(
        "-r",
        dest="snapshot_interval",
        type=positive_int,
        default=DEFAULT_SNAPSHOT_INTERVAL,
        metavar="INTERVAL",
        help="Set snapshot INTERVAL seconds.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log diagnostics to stderr.",
    )
    return parser


def parse_args(argv: Sequence[str], parser: argparse.ArgumentParser | None = None) -> ListingOptions:
    """
    Parse pslist arguments.

    Anything that is not an option must be a machine name starting with ``\\\\``.

    Raises:
        ArgumentError: The arguments are malformed.
    """
    if not argv:
        return ListingOptions(help_requested=True)

    parser = parser or build_parser()
    args, extras = parser.parse_known_args(list(argv))

    args.machine_name = None
    for extra in extras:
        if extra.startswith("-"):
            raise ArgumentError(f"Unknown option: {extra}")
        if not extra.startswith(UNC_PREFIX):
            raise ArgumentError(f"Bad machine name: {extra}")
        args.machine_name = extra

    return ListingOptions.from_namespace(args)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for pslist."""
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    try:
        options = parse_args(argv, parser)
    except ArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return EXIT_BAD_ARGUMENTS

    if options.help_requested:
        parser.print_help(sys.stdout)
        return EXIT_OK

    configure_logging(options.verbose)

    refresh = functools.partial(select_processes, options.selection, options.machine_name)
    try:
        processes = refresh()
    except SelectionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_SELECTION_FAILED

    reporter = Reporter(
        refresh,
        display_mode=options.display_mode,
        duration=options.snapshot_duration,
        interval=options.snapshot_interval,
    )
    try:
        reporter.run(processes)
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except BrokenPipeError:
        # Reader closed the pipe (`pslist -a | head -1`). Stdout goes to devnull from here on.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        os.close(devnull)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
