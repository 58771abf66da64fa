"""Listing options assembled from the command line."""

import argparse
from dataclasses import dataclass

from pslist.models import DisplayMode, Selection

# Interval between snapshot passes when -r is not given
DEFAULT_SNAPSHOT_INTERVAL = 1


@dataclass(slots=True)
class ListingOptions:
    """Everything needed to select processes and report on them."""

    selection: Selection | None = None
    machine_name: str | None = None
    display_mode: DisplayMode = DisplayMode.CPU
    snapshot_duration: int | None = 0  # None: until interrupted, 0: single pass
    snapshot_interval: int = DEFAULT_SNAPSHOT_INTERVAL
    verbose: bool = False
    help_requested: bool = False

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "ListingOptions":
        """Build options from parsed ``pslist`` arguments."""
        selection = None
        if args.all:
            selection = Selection.all()
        elif args.process_id is not None:
            selection = Selection.by_id(args.process_id)
        elif args.process_name is not None:
            selection = Selection.by_name(args.process_name)
        elif args.process_name_regex is not None:
            selection = Selection.by_name_regex(args.process_name_regex)
        elif args.file_name is not None:
            selection = Selection.by_file_name(args.file_name)
        elif args.file_name_regex is not None:
            selection = Selection.by_file_name_regex(args.file_name_regex)

        return cls(
            selection=selection,
            machine_name=args.machine_name,
            display_mode=DisplayMode.MEMORY if args.memory else DisplayMode.CPU,
            snapshot_duration=args.snapshot_duration,
            snapshot_interval=args.snapshot_interval,
            verbose=args.verbose,
            # No selector at all means there is nothing to list
            help_requested=args.help or selection is None,
        )
