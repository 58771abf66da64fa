"""Shared fixtures for pslist tests."""

import time
from types import SimpleNamespace

import psutil
import pytest


class FakeProcess:
    """Stand-in for psutil.Process with fixed counters."""

    def __init__(
        self,
        pid: int,
        name: str = "fake",
        exe: str = "/usr/bin/fake",
        running: bool = True,
        vanish_on_read: bool = False,
        denied: tuple[str, ...] = (),
    ) -> None:
        self.pid = pid
        self._name = name
        self._exe = exe
        self._running = running
        self._vanish_on_read = vanish_on_read
        self._denied = denied
        self.info = {"name": name, "exe": exe}

    def _check(self, counter: str) -> None:
        if self._vanish_on_read:
            raise psutil.NoSuchProcess(self.pid)
        if counter in self._denied:
            raise psutil.AccessDenied(self.pid)

    def oneshot(self):
        return _NullContext()

    def is_running(self) -> bool:
        return self._running

    def status(self) -> str:
        return psutil.STATUS_RUNNING

    def name(self) -> str:
        self._check("name")
        return self._name

    def exe(self) -> str:
        self._check("exe")
        return self._exe

    def nice(self) -> int:
        self._check("nice")
        return 0

    def num_threads(self) -> int:
        self._check("num_threads")
        return 3

    def num_fds(self) -> int:
        self._check("num_fds")
        return 7

    def num_handles(self) -> int:
        self._check("num_handles")
        return 7

    def memory_info(self):
        self._check("memory_info")
        return SimpleNamespace(rss=3000, vms=9000, shared=1000)

    def cpu_times(self):
        self._check("cpu_times")
        return SimpleNamespace(user=1.25, system=0.25)

    def create_time(self) -> float:
        self._check("create_time")
        return time.time() - 10


class _NullContext:
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_process():
    """Factory for FakeProcess instances."""
    return FakeProcess
