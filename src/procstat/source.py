"""
Byte acquisition for stat records.

Resolves a process id to its /proc/<pid>/stat file and reads it. Failures are
reported as AcquisitionError; retrying is left to the caller since the
process may simply have exited between resolution and read.
"""

import logging
from pathlib import Path

import psutil

from procstat import config
from procstat.decoder import decode_record
from procstat.errors import AcquisitionError
from procstat.models import ProcessRecord

logger = logging.getLogger(__name__)

DEFAULT_PROC_ROOT = "/proc"


def stat_path(pid: int | str = "self", proc_root: str | Path | None = None) -> Path:
    """
    Return the path of the stat record for ``pid``.

    Args:
        pid: Process id, or "self" for the calling process.
        proc_root: Root of the proc filesystem. Defaults to PROCSTAT_PROC_ROOT.
    """
    if isinstance(pid, int):
        if pid <= 0:
            raise AcquisitionError(f"invalid pid: {pid}")
    elif pid != "self":
        if not pid.isdigit() or int(pid) <= 0:
            raise AcquisitionError(f"invalid pid: {pid!r}")
    root = Path(proc_root if proc_root is not None else config.PROC_ROOT)
    return root / str(pid) / "stat"


def _read(path: Path, pid: int | str | None = None) -> bytes:
    try:
        return path.read_bytes()
    except (FileNotFoundError, ProcessLookupError) as e:
        if isinstance(pid, int) and str(path).startswith(DEFAULT_PROC_ROOT + "/"):
            if not psutil.pid_exists(pid):
                raise AcquisitionError(f"process {pid} does not exist or has exited") from e
        raise AcquisitionError(f"stat record not found: {path}") from e
    except PermissionError as e:
        raise AcquisitionError(f"permission denied reading {path}") from e
    except OSError as e:
        raise AcquisitionError(f"could not read {path}: {e}") from e


def read_stat(pid: int | str = "self", proc_root: str | Path | None = None) -> bytes:
    """
    Read the raw stat record of a process.

    Raises:
        AcquisitionError: The record is missing or unreadable.
    """
    if isinstance(pid, str) and pid.isdigit():
        pid = int(pid)
    path = stat_path(pid, proc_root)
    logger.debug("Reading %s", path)
    return _read(path, pid)


def load_record(pid: int | str = "self", proc_root: str | Path | None = None) -> ProcessRecord:
    """Read and decode the stat record of a process."""
    return decode_record(read_stat(pid, proc_root))


class ProcessStat:
    """
    Stat reader bound to a single record file.

    Each call to parse() reads the file again and returns a new, independent
    record; nothing is cached between calls.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Path of the record file."""
        return self._path

    @classmethod
    def for_pid(cls, pid: int | str = "self", proc_root: str | Path | None = None) -> "ProcessStat":
        """Create a reader for a process id."""
        return cls(stat_path(pid, proc_root))

    def read(self) -> bytes:
        """Return the raw record bytes."""
        return _read(self._path)

    def parse(self) -> ProcessRecord:
        """Read and decode the record."""
        return decode_record(self.read())
