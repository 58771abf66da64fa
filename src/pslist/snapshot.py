"""Point-in-time process snapshots read through psutil."""

import logging
from datetime import datetime

import psutil

from pslist.models import ProcessSnapshot

logger = logging.getLogger(__name__)

EXE_SUFFIX = ".exe"


def display_name(name: str | None) -> str:
    """Process name without a Windows executable suffix."""
    if not name:
        return ""
    if name.lower().endswith(EXE_SUFFIX):
        return name[: -len(EXE_SUFFIX)]
    return name


def has_exited(proc: psutil.Process) -> bool:
    """Check whether a process is gone or only lingers as a zombie."""
    try:
        return not proc.is_running() or proc.status() == psutil.STATUS_ZOMBIE
    except psutil.NoSuchProcess:
        return True
    except psutil.AccessDenied:
        # Still there, we just may not look at its status
        return False


def has_modules(proc: psutil.Process) -> bool:
    """
    Check whether a process exposes a loaded executable image.

    Kernel threads and system pseudo-processes have none. A process whose
    executable we may not read still has one; its other counters are read
    as usual.

    Raises:
        psutil.NoSuchProcess: The process exited.
    """
    try:
        return bool(proc.exe())
    except psutil.ZombieProcess:
        return False
    except psutil.AccessDenied:
        return True


def _private_bytes(mem) -> int:
    private = getattr(mem, "private", None)
    if private is not None:
        return private
    # Resident memory not shared with other processes
    return max(mem.rss - getattr(mem, "shared", 0), 0)


def _handle_count(proc: psutil.Process) -> int:
    if psutil.WINDOWS:
        return proc.num_handles()
    return proc.num_fds()


def _read(proc: psutil.Process, getter, default=0):
    """Read one counter, falling back to ``default`` when access is denied."""
    try:
        return getter(proc)
    except psutil.AccessDenied:
        logger.debug("Access denied reading a counter of pid %d", proc.pid)
        return default


def take_snapshot(proc: psutil.Process) -> ProcessSnapshot | None:
    """
    Read the current state of a process.

    Uses the ``oneshot()`` context manager so counters come from a single
    read of the process tables. Counters we may not read are reported as 0.

    Returns:
        The snapshot, or None if the process has exited.
    """
    try:
        with proc.oneshot():
            mem = _read(proc, lambda p: p.memory_info(), default=None)
            cpu = _read(proc, lambda p: p.cpu_times(), default=None)
            create_time = _read(proc, lambda p: p.create_time(), default=None)

            return ProcessSnapshot(
                pid=proc.pid,
                name=display_name(_read(proc, lambda p: p.name(), default="")),
                priority=_read(proc, lambda p: int(p.nice())),
                threads=_read(proc, lambda p: p.num_threads()),
                handles=_read(proc, _handle_count),
                private_bytes=_private_bytes(mem) if mem is not None else 0,
                virtual_bytes=mem.vms if mem is not None else 0,
                working_set_bytes=mem.rss if mem is not None else 0,
                nonpaged_bytes=getattr(mem, "nonpaged_pool", 0),
                paged_bytes=getattr(mem, "paged_pool", 0),
                cpu_time=cpu.user + cpu.system if cpu is not None else 0.0,
                start_time=(
                    datetime.fromtimestamp(create_time) if create_time is not None else datetime.now()
                ),
                has_modules=has_modules(proc),
            )
    except psutil.NoSuchProcess:
        # Covers ZombieProcess as well: the process died mid-read
        logger.debug("Process %d exited while taking its snapshot", proc.pid)
        return None
