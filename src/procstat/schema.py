"""
Positional schema for /proc/<pid>/stat and the per-field conversions.

Each position of the record maps to exactly one FieldSpec. The widths follow
the scanf formats documented in proc(5): %d and %u are 32-bit, %ld, %lu and
%llu are 64-bit. Conversions are pure functions of the token; values are
range-checked against the declared width and never truncated.
"""

import logging
import re
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

from procstat.errors import FieldOutOfRangeError, MalformedFieldError
from procstat.models import State, TaskState, UnknownState

if TYPE_CHECKING:
    from procstat.decoder import RecordBuilder

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(rb"-?[0-9]+")


class FieldKind(Enum):
    """How a token is converted."""

    INT = "int"
    UINT = "uint"
    TEXT = "text"
    STATE = "state"


class FieldSpec(NamedTuple):
    """Descriptor for a single record position."""

    position: int
    name: str
    kind: FieldKind
    bits: int = 0


_I32 = (FieldKind.INT, 32)
_U32 = (FieldKind.UINT, 32)
_I64 = (FieldKind.INT, 64)
_U64 = (FieldKind.UINT, 64)

STAT_FIELDS: tuple[FieldSpec, ...] = tuple(
    FieldSpec(position, name, *conversion)
    for position, (name, conversion) in enumerate(
        [
            ("pid", _I32),
            ("comm", (FieldKind.TEXT, 0)),
            ("state", (FieldKind.STATE, 0)),
            ("ppid", _I32),
            ("pgrp", _I32),
            ("session", _I32),
            ("tty_nr", _I32),
            ("tpgid", _I32),
            ("task_flags", _U32),
            ("min_flt", _U64),
            ("cmin_flt", _U64),
            ("maj_flt", _U64),
            ("cmaj_flt", _U64),
            ("utime", _U64),
            ("stime", _U64),
            ("cutime", _I64),
            ("cstime", _I64),
            ("priority", _I64),
            ("nice", _I64),
            ("num_threads", _I64),
            ("itreal_value", _I64),
            ("start_time", _U64),
            ("vsize", _U64),
            ("rss", _I64),
            ("rss_lim", _U64),
            ("start_code", _U64),
            ("end_code", _U64),
            ("start_stack", _U64),
            ("kstk_esp", _U64),
            ("kstk_eip", _U64),
            ("signal", _U64),
            ("blocked", _U64),
            ("sig_ignore", _U64),
            ("sig_catch", _U64),
            ("wchan", _U64),
            ("nswap", _U64),
            ("cnswap", _U64),
            ("exit_signal", _I32),
            ("processor", _I32),
            ("rt_priority", _U32),
            ("policy", _U32),
            ("delayacct_blkio_ticks", _U64),
            ("guest_time", _U64),
            ("cguest_time", _I64),
            ("start_data", _U64),
            ("end_data", _U64),
            ("start_brk", _U64),
            ("arg_start", _U64),
            ("arg_end", _U64),
            ("env_start", _U64),
            ("env_end", _U64),
            ("exit_code", _I32),
        ],
        start=1,
    )
)

FIELD_COUNT = len(STAT_FIELDS)


def field_spec(position: int) -> FieldSpec | None:
    """Return the spec for a 1-based position, or None outside the schema."""
    if 1 <= position <= FIELD_COUNT:
        return STAT_FIELDS[position - 1]
    return None


def parse_int(token: bytes, bits: int, signed: bool, position: int = 0, name: str = "") -> int:
    """
    Parse a base-10 token and check it fits the declared width.

    Raises:
        MalformedFieldError: The token is not a decimal integer.
        FieldOutOfRangeError: The value does not fit in ``bits`` bits.
    """
    if _DECIMAL.fullmatch(token) is None:
        raise MalformedFieldError(
            f"field {position} ({name}): {token!r} is not a decimal integer",
            position,
            name,
            token,
        )

    value = int(token)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1

    if not low <= value <= high:
        kind = "int" if signed else "uint"
        raise FieldOutOfRangeError(
            f"field {position} ({name}): {value} does not fit in {kind}{bits}",
            position,
            name,
            token,
        )
    return value


def parse_text(token: bytes) -> str:
    """Strip one surrounding pair of parentheses and decode the name."""
    if len(token) >= 2 and token.startswith(b"(") and token.endswith(b")"):
        token = token[1:-1]
    return token.decode("utf-8", errors="replace")


def parse_state(token: bytes) -> State:
    """Map the first character of the token to a TaskState; never fails."""
    code = token[:1].decode("latin-1")
    try:
        return TaskState(code)
    except ValueError:
        return UnknownState(code)


def convert(spec: FieldSpec, token: bytes) -> object:
    """Convert a token according to its field spec."""
    if spec.kind is FieldKind.INT:
        return parse_int(token, spec.bits, True, spec.position, spec.name)
    if spec.kind is FieldKind.UINT:
        return parse_int(token, spec.bits, False, spec.position, spec.name)
    if spec.kind is FieldKind.TEXT:
        return parse_text(token)
    if spec.kind is FieldKind.STATE:
        return parse_state(token)
    raise AssertionError(f"unhandled field kind {spec.kind}")


def apply_field(position: int, token: bytes, builder: "RecordBuilder") -> None:
    """
    Decode the token at ``position`` and hand the value to the builder.

    Positions past the end of the schema are ignored so that fields added by
    newer kernels do not break decoding.
    """
    spec = field_spec(position)
    if spec is None:
        logger.debug("Ignoring trailing field %d: %r", position, token)
        return
    builder.set(spec, convert(spec, token))
