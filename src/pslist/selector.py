"""Process selection for pslist."""

import logging
import re
import socket
from collections.abc import Iterator

import psutil

from pslist.errors import SelectionError
from pslist.models import Selection, SelectionMode
from pslist.snapshot import display_name

logger = logging.getLogger(__name__)

UNC_PREFIX = "\\\\"
LOCAL_MACHINE = UNC_PREFIX + "."


def is_local_machine(machine_name: str | None) -> bool:
    """Check whether a machine name denotes this machine."""
    if not machine_name or machine_name == LOCAL_MACHINE:
        return True
    host = machine_name[len(UNC_PREFIX):] if machine_name.startswith(UNC_PREFIX) else machine_name
    return host.lower() in ("localhost", socket.gethostname().lower())


def _iter_processes(machine_name: str | None, attrs: list[str]) -> Iterator[psutil.Process]:
    """Iterate over the processes of a machine with ``attrs`` prefetched into ``info``."""
    if not is_local_machine(machine_name):
        raise SelectionError(f"Remote process listing is not supported: {machine_name}")
    try:
        yield from psutil.process_iter(attrs=attrs)
    except psutil.Error as e:
        raise SelectionError(f"Cannot enumerate processes: {e}") from e


def _compile(pattern: str, what: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise SelectionError(f"Bad {what} regex {pattern!r}: {e}") from e


def list_all_processes(machine_name: str | None = None) -> list[psutil.Process]:
    """List every process visible on the machine."""
    return list(_iter_processes(machine_name, ["name"]))


def list_by_process_id(pid: int, machine_name: str | None = None) -> list[psutil.Process]:
    """
    List the process with the given id.

    Raises:
        SelectionError: No such process exists.
    """
    if not is_local_machine(machine_name):
        raise SelectionError(f"Remote process listing is not supported: {machine_name}")
    try:
        return [psutil.Process(pid)]
    except (psutil.NoSuchProcess, ValueError) as e:
        raise SelectionError(f"No process with id {pid}") from e


def list_by_process_name(name: str, machine_name: str | None = None) -> list[psutil.Process]:
    """List processes whose name equals ``name``, ignoring case."""
    wanted = display_name(name).casefold()
    return [
        proc
        for proc in _iter_processes(machine_name, ["name"])
        if display_name(proc.info.get("name")).casefold() == wanted
    ]


def list_by_process_name_regex(pattern: str, machine_name: str | None = None) -> list[psutil.Process]:
    """
    List processes with a loaded executable whose name matches ``pattern``.

    Matching is case-insensitive and unanchored.

    Raises:
        SelectionError: The pattern is not a valid regular expression.
    """
    regex = _compile(pattern, "process name")
    return [
        proc
        for proc in _iter_processes(machine_name, ["name", "exe"])
        # exe is None when access was denied and "" when there is no image
        if proc.info.get("exe") != "" and regex.search(display_name(proc.info.get("name")))
    ]


def list_by_file_name(path: str, machine_name: str | None = None) -> list[psutil.Process]:
    """List processes whose executable path equals ``path``."""
    return [
        proc
        for proc in _iter_processes(machine_name, ["exe"])
        if proc.info.get("exe") and proc.info["exe"] == path
    ]


def list_by_file_name_regex(pattern: str, machine_name: str | None = None) -> list[psutil.Process]:
    """
    List processes whose executable path matches ``pattern``, ignoring case.

    Raises:
        SelectionError: The pattern is not a valid regular expression.
    """
    regex = _compile(pattern, "file name")
    return [
        proc
        for proc in _iter_processes(machine_name, ["exe"])
        if proc.info.get("exe") and regex.search(proc.info["exe"])
    ]


def select_processes(selection: Selection, machine_name: str | None = None) -> list[psutil.Process]:
    """
    Produce the processes matching a selection at call time.

    Every call queries the operating system again.

    Raises:
        SelectionError: The selection cannot be satisfied.
    """
    logger.debug("Selecting processes: mode=%s value=%r", selection.mode.value, selection.value)

    mode = selection.mode
    if mode is SelectionMode.ALL:
        processes = list_all_processes(machine_name)
    elif mode is SelectionMode.BY_ID:
        processes = list_by_process_id(int(selection.value), machine_name)
    elif mode is SelectionMode.BY_NAME:
        processes = list_by_process_name(str(selection.value), machine_name)
    elif mode is SelectionMode.BY_NAME_REGEX:
        processes = list_by_process_name_regex(str(selection.value), machine_name)
    elif mode is SelectionMode.BY_FILE_NAME:
        processes = list_by_file_name(str(selection.value), machine_name)
    elif mode is SelectionMode.BY_FILE_NAME_REGEX:
        processes = list_by_file_name_regex(str(selection.value), machine_name)
    else:
        raise SelectionError(f"Unknown selection mode: {mode}")

    logger.debug("Selected %d process(es)", len(processes))
    return processes
