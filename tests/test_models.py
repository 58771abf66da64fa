"""Tests for pslist data models."""

from datetime import datetime, timedelta

from pslist.models import DisplayMode, ProcessSnapshot, Selection, SelectionMode


def make_snapshot(**overrides) -> ProcessSnapshot:
    fields = dict(
        pid=123,
        name="test_process",
        priority=8,
        threads=4,
        handles=12,
        private_bytes=2048000,
        virtual_bytes=4096000,
        working_set_bytes=1024000,
        nonpaged_bytes=0,
        paged_bytes=0,
        cpu_time=1.5,
        start_time=datetime(2024, 1, 1, 12, 0, 0),
    )
    fields.update(overrides)
    return ProcessSnapshot(**fields)


def test_process_snapshot_creation():
    """Test ProcessSnapshot dataclass creation."""
    snapshot = make_snapshot()

    assert snapshot.pid == 123
    assert snapshot.name == "test_process"
    assert snapshot.priority == 8
    assert snapshot.threads == 4
    assert snapshot.handles == 12
    assert snapshot.private_bytes == 2048000
    assert snapshot.cpu_time == 1.5
    assert snapshot.has_modules is True


def test_process_snapshot_is_frozen():
    """Test that ProcessSnapshot is immutable (frozen)."""
    snapshot = make_snapshot()

    try:
        snapshot.pid = 999
        raise AssertionError("Should have raised FrozenInstanceError")
    except AttributeError:
        pass  # Expected behavior for frozen dataclass


def test_process_snapshot_uses_slots():
    """Test that ProcessSnapshot uses __slots__."""
    snapshot = make_snapshot()

    assert not hasattr(snapshot, "__dict__")


def test_elapsed_seconds():
    """Test elapsed time is measured from the process start."""
    snapshot = make_snapshot()
    now = snapshot.start_time + timedelta(minutes=2, seconds=3)

    assert snapshot.elapsed_seconds(now) == 123.0


class TestSelection:
    """Tests for the Selection variant."""

    def test_constructors_carry_mode_and_value(self):
        """Test each constructor tags the right mode."""
        assert Selection.all() == Selection(SelectionMode.ALL, None)
        assert Selection.by_id(42) == Selection(SelectionMode.BY_ID, 42)
        assert Selection.by_name("sshd") == Selection(SelectionMode.BY_NAME, "sshd")
        assert Selection.by_name_regex("^ss") == Selection(SelectionMode.BY_NAME_REGEX, "^ss")
        assert Selection.by_file_name("/usr/sbin/sshd").mode is SelectionMode.BY_FILE_NAME
        assert Selection.by_file_name_regex("sbin").mode is SelectionMode.BY_FILE_NAME_REGEX

    def test_selection_is_hashable(self):
        """Test frozen selections can be used as keys."""
        assert len({Selection.by_id(1), Selection.by_id(1), Selection.all()}) == 2


def test_display_mode_members():
    """Test DisplayMode has the two column sets."""
    assert {mode.value for mode in DisplayMode} == {"cpu", "memory"}
