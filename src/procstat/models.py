"""Data models for procstat."""

from dataclasses import dataclass, fields
from enum import Enum


class TaskState(Enum):
    """Task states reported in field 3 of /proc/<pid>/stat."""

    RUNNING = "R"
    SLEEPING = "S"  # Interruptible wait
    DISK_SLEEP = "D"  # Uninterruptible disk sleep
    ZOMBIE = "Z"
    STOPPED = "T"  # On a signal, or trace stopped before 2.6.33
    TRACING_STOP = "t"
    DEAD = "X"
    DEAD_LEGACY = "x"  # 2.6.33 to 3.13 only
    WAKE_KILL = "K"  # 2.6.33 to 3.13 only
    WAKING = "W"  # Waking (2.6.33 to 3.13) or paging (before 2.6.0)
    PARKED = "P"  # 3.9 to 3.13 only

    @property
    def description(self) -> str:
        """Human-readable name of the state."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    TaskState.RUNNING: "running",
    TaskState.SLEEPING: "sleeping",
    TaskState.DISK_SLEEP: "disk sleep",
    TaskState.ZOMBIE: "zombie",
    TaskState.STOPPED: "stopped",
    TaskState.TRACING_STOP: "tracing stop",
    TaskState.DEAD: "dead",
    TaskState.DEAD_LEGACY: "dead",
    TaskState.WAKE_KILL: "wakekill",
    TaskState.WAKING: "waking",
    TaskState.PARKED: "parked",
}


@dataclass(slots=True, frozen=True)
class UnknownState:
    """A state character the kernel reported that TaskState does not list."""

    value: str

    @property
    def description(self) -> str:
        return f"unknown ({self.value!r})"


State = TaskState | UnknownState


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """
    Immutable, fully decoded /proc/<pid>/stat record.

    Fields are declared in record order, so the n-th field of the dataclass
    is the n-th token of the line. Times are in clock ticks, addresses and
    signal masks are plain integers.
    """

    pid: int
    comm: str
    state: State
    ppid: int
    pgrp: int
    session: int
    tty_nr: int
    tpgid: int
    task_flags: int
    min_flt: int
    cmin_flt: int
    maj_flt: int
    cmaj_flt: int
    utime: int
    stime: int
    cutime: int
    cstime: int
    priority: int
    nice: int
    num_threads: int
    itreal_value: int
    start_time: int
    vsize: int  # Bytes
    rss: int  # Pages
    rss_lim: int  # Bytes
    start_code: int
    end_code: int
    start_stack: int
    kstk_esp: int
    kstk_eip: int
    signal: int
    blocked: int
    sig_ignore: int
    sig_catch: int
    wchan: int
    nswap: int
    cnswap: int
    exit_signal: int
    processor: int
    rt_priority: int
    policy: int
    delayacct_blkio_ticks: int
    guest_time: int
    cguest_time: int
    start_data: int
    end_data: int
    start_brk: int
    arg_start: int
    arg_end: int
    env_start: int
    env_end: int
    exit_code: int

    def as_dict(self) -> dict[str, object]:
        """Return the record as a field-name to value mapping, in record order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
