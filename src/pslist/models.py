"""Data models for pslist."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SelectionMode(Enum):
    """Ways of choosing which processes to report."""

    ALL = "all"
    BY_ID = "id"
    BY_NAME = "name"
    BY_NAME_REGEX = "name-regex"
    BY_FILE_NAME = "file"
    BY_FILE_NAME_REGEX = "file-regex"


class DisplayMode(Enum):
    """Column sets for the report table."""

    CPU = "cpu"
    MEMORY = "memory"


@dataclass(slots=True, frozen=True)
class Selection:
    """A selection mode together with the value it selects on."""

    mode: SelectionMode
    value: str | int | None = None

    @classmethod
    def all(cls) -> "Selection":
        return cls(SelectionMode.ALL)

    @classmethod
    def by_id(cls, pid: int) -> "Selection":
        return cls(SelectionMode.BY_ID, pid)

    @classmethod
    def by_name(cls, name: str) -> "Selection":
        return cls(SelectionMode.BY_NAME, name)

    @classmethod
    def by_name_regex(cls, pattern: str) -> "Selection":
        return cls(SelectionMode.BY_NAME_REGEX, pattern)

    @classmethod
    def by_file_name(cls, path: str) -> "Selection":
        return cls(SelectionMode.BY_FILE_NAME, path)

    @classmethod
    def by_file_name_regex(cls, pattern: str) -> "Selection":
        return cls(SelectionMode.BY_FILE_NAME_REGEX, pattern)


@dataclass(slots=True, frozen=True)
class ProcessSnapshot:
    """Immutable point-in-time view of one process."""

    pid: int
    name: str
    priority: int
    threads: int
    handles: int  # Windows handles, open file descriptors elsewhere
    private_bytes: int
    virtual_bytes: int
    working_set_bytes: int
    nonpaged_bytes: int  # Windows only, 0 elsewhere
    paged_bytes: int  # Windows only, 0 elsewhere
    cpu_time: float  # Seconds, user + system
    start_time: datetime
    has_modules: bool = True

    def elapsed_seconds(self, now: datetime) -> float:
        """Seconds between process start and ``now``."""
        return (now - self.start_time).total_seconds()
