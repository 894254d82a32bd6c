"""Tests for procstat data models."""

import dataclasses

import pytest

from procstat.models import ProcessRecord, TaskState, UnknownState
from procstat.schema import STAT_FIELDS


def make_record(**overrides) -> ProcessRecord:
    """Build a record with every numeric field set to 0."""
    values = {f.name: 0 for f in dataclasses.fields(ProcessRecord)}
    values.update(comm="init", state=TaskState.SLEEPING)
    values.update(overrides)
    return ProcessRecord(**values)


def test_process_record_creation():
    """Test ProcessRecord dataclass creation."""
    record = make_record(pid=1, ppid=0, start_time=15, vsize=172658688)

    assert record.pid == 1
    assert record.comm == "init"
    assert record.state is TaskState.SLEEPING
    assert record.ppid == 0
    assert record.start_time == 15
    assert record.vsize == 172658688


def test_process_record_is_frozen():
    """Test that ProcessRecord is immutable (frozen)."""
    record = make_record(pid=1)

    with pytest.raises(dataclasses.FrozenInstanceError):
        record.pid = 999


def test_process_record_uses_slots():
    """Test that ProcessRecord uses __slots__ for memory efficiency."""
    record = make_record()

    # Slots-based dataclasses don't have __dict__
    assert not hasattr(record, "__dict__")


def test_process_record_field_order_matches_schema():
    """Test the dataclass declares one field per record position, in order."""
    names = [f.name for f in dataclasses.fields(ProcessRecord)]

    assert len(names) == 52
    assert names == [spec.name for spec in STAT_FIELDS]


def test_as_dict_keeps_record_order_and_state_objects():
    """Test as_dict returns fields in record order without flattening values."""
    record = make_record(state=UnknownState("I"))
    values = record.as_dict()

    assert list(values)[:3] == ["pid", "comm", "state"]
    assert list(values)[-1] == "exit_code"
    assert values["state"] == UnknownState("I")


def test_records_with_same_values_are_equal():
    """Test records compare structurally."""
    assert make_record(pid=7) == make_record(pid=7)
    assert make_record(pid=7) != make_record(pid=8)


class TestTaskState:
    """Tests for the TaskState enum and its fallback."""

    def test_state_codes(self):
        """Test each member is keyed by its kernel state character."""
        assert TaskState("R") is TaskState.RUNNING
        assert TaskState("S") is TaskState.SLEEPING
        assert TaskState("D") is TaskState.DISK_SLEEP
        assert TaskState("Z") is TaskState.ZOMBIE
        assert TaskState("T") is TaskState.STOPPED
        assert TaskState("t") is TaskState.TRACING_STOP
        assert TaskState("X") is TaskState.DEAD
        assert TaskState("x") is TaskState.DEAD_LEGACY
        assert TaskState("K") is TaskState.WAKE_KILL
        assert TaskState("W") is TaskState.WAKING
        assert TaskState("P") is TaskState.PARKED

    def test_state_members(self):
        """Test the closed list has exactly eleven states."""
        assert len(list(TaskState)) == 11

    def test_every_state_has_description(self):
        """Test every member renders a description."""
        for state in TaskState:
            assert state.description

    def test_unknown_state_carries_code(self):
        """Test the fallback keeps the raw character."""
        state = UnknownState("I")

        assert state.value == "I"
        assert "I" in state.description
        assert state == UnknownState("I")
