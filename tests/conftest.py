"""Shared fixtures: realistic /proc/<pid>/stat lines."""

import pytest

# Fields of a stat line for pid 1, in record order.
INIT_FIELDS = [
    "1", "(init)", "S", "0", "1", "1", "0", "-1", "4210944", "10",
    "0", "0", "0", "5", "12", "30", "40", "20", "0", "1",
    "0", "15", "172658688", "3210", "18446744073709551615", "94245376237568",
    "94245377670648", "140737226123456", "0", "0",
    "0", "671173123", "4096", "1260", "1", "0", "0", "17", "3", "0",
    "0", "12", "0", "0", "94245378094816", "94245378395768", "94245404393472",
    "140737226129124", "140737226129159", "140737226129159",
    "140737226129389", "0",
]


def make_stat_line(overrides: dict[int, str] | None = None, newline: bool = True) -> bytes:
    """Build a stat line from INIT_FIELDS, replacing fields by 1-based position."""
    fields = list(INIT_FIELDS)
    for position, value in (overrides or {}).items():
        fields[position - 1] = value
    line = " ".join(fields)
    if newline:
        line += "\n"
    return line.encode("utf-8")


@pytest.fixture
def init_line() -> bytes:
    """A well-formed, newline-terminated stat line for pid 1."""
    return make_stat_line()


@pytest.fixture
def proc_root(tmp_path):
    """A fake proc filesystem holding a stat record for pid 123."""
    record_dir = tmp_path / "123"
    record_dir.mkdir()
    (record_dir / "stat").write_bytes(make_stat_line({1: "123", 2: "(worker)", 3: "R"}))
    return tmp_path
