"""Periodic snapshot report for pslist."""

import logging
import sys
import time
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TextIO

import psutil

from pslist.errors import SelectionError
from pslist.models import DisplayMode, ProcessSnapshot
from pslist.snapshot import has_exited, take_snapshot

logger = logging.getLogger(__name__)

NO_PROCESS_FOUND = "No process found"

CPU_HEADER = ("Pid", "Name", "Pri", "Thd", "Hnd", "Priv", "CPU Time", "Elapsed Time")
MEMORY_HEADER = ("Pid", "Name", "VM", "WS", "Priv", "NonP", "Page")

SEPARATOR = "\t"


def header(display_mode: DisplayMode) -> str:
    """Header line for a display mode."""
    columns = MEMORY_HEADER if display_mode is DisplayMode.MEMORY else CPU_HEADER
    return SEPARATOR.join(columns)


def _thousands(value: int) -> str:
    return f"{value / 1000.0:.2f}"


def format_row(snapshot: ProcessSnapshot, display_mode: DisplayMode, now: datetime) -> str:
    """
    Format one process as a table row.

    Memory values are in thousands of bytes, times in seconds.
    """
    if display_mode is DisplayMode.MEMORY:
        columns = [
            str(snapshot.pid),
            snapshot.name,
            _thousands(snapshot.virtual_bytes),
            _thousands(snapshot.working_set_bytes),
            _thousands(snapshot.private_bytes),
            _thousands(snapshot.nonpaged_bytes),
            _thousands(snapshot.paged_bytes),
        ]
    else:
        columns = [
            str(snapshot.pid),
            snapshot.name,
            str(snapshot.priority),
            str(snapshot.threads),
            str(snapshot.handles),
            _thousands(snapshot.private_bytes),
            f"{snapshot.cpu_time:.2f}",
            f"{snapshot.elapsed_seconds(now):.2f}",
        ]
    return SEPARATOR.join(columns)


class Reporter:
    """
    Prints a process table once or repeatedly.

    Each pass after the first calls ``refresh`` to query the operating system
    again, so every row reflects live counters.
    """

    def __init__(
        self,
        refresh: Callable[[], Sequence[psutil.Process]],
        display_mode: DisplayMode = DisplayMode.CPU,
        duration: int | None = 0,
        interval: float = 1,
        out: TextIO | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the Reporter.

        Args:
            refresh: Re-runs the process selection.
            display_mode: Which column set to print.
            duration: Seconds to keep repeating passes. 0 prints a single
                pass, None repeats until interrupted.
            interval: Seconds to sleep between passes.
            out: Output stream. Defaults to ``sys.stdout``.
            clock: Monotonic time source.
            sleep: Sleep function.
        """
        self._refresh = refresh
        self._display_mode = display_mode
        self._duration = duration
        self._interval = interval
        self._out = out
        self._clock = clock
        self._sleep = sleep
        self.passes = 0

    def _print(self, line: str) -> None:
        print(line, file=self._out if self._out is not None else sys.stdout)

    def _is_done(self, started: float) -> bool:
        if self._duration is None:
            return False
        return int(self._clock() - started) >= self._duration

    def run(self, initial: Sequence[psutil.Process]) -> None:
        """
        Report on ``initial`` and then on each refreshed selection.

        Prints ``No process found`` and returns at once when ``initial`` is empty.
        """
        if not initial:
            self._print(NO_PROCESS_FOUND)
            return

        self._print(header(self._display_mode))

        processes = initial
        started = self._clock()
        while True:
            self.print_pass(processes)
            if self._is_done(started):
                break
            self._sleep(self._interval)
            processes = self._reselect()

    def _reselect(self) -> Sequence[psutil.Process]:
        try:
            return self._refresh()
        except SelectionError as e:
            # e.g. the selected pid exited since the last pass
            logger.debug("Selection is empty this pass: %s", e)
            return []

    def print_pass(self, processes: Sequence[psutil.Process]) -> None:
        """Print one row per live process."""
        self.passes += 1
        printed = 0
        for proc in processes:
            if has_exited(proc):
                logger.debug("Skipping exited process %d", proc.pid)
                continue

            snapshot = take_snapshot(proc)
            if snapshot is None:
                continue

            if not snapshot.has_modules:
                self._print(str(snapshot.pid))
            else:
                self._print(format_row(snapshot, self._display_mode, datetime.now()))
            printed += 1

        logger.debug("Pass %d printed %d of %d process(es)", self.passes, printed, len(processes))
