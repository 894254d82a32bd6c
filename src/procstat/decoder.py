"""Record driver: turns one raw stat line into a ProcessRecord."""

import logging

from procstat.errors import MalformedFieldError
from procstat.models import ProcessRecord
from procstat.schema import STAT_FIELDS, FieldSpec, apply_field
from procstat.tokenizer import StatTokenizer

logger = logging.getLogger(__name__)


class RecordBuilder:
    """
    Collects decoded field values until every position is filled.

    Values must arrive in strictly increasing position order. The builder is
    the only mutable object of a decode and never escapes decode_record().
    """

    def __init__(self) -> None:
        self._values: dict[str, object] = {}
        self._last_position = 0

    @property
    def filled(self) -> int:
        """Number of fields set so far."""
        return len(self._values)

    def set(self, spec: FieldSpec, value: object) -> None:
        """Store the value for a field."""
        if spec.position <= self._last_position:
            raise ValueError(
                f"field {spec.position} ({spec.name}) set after field {self._last_position}"
            )
        self._values[spec.name] = value
        self._last_position = spec.position

    def build(self) -> ProcessRecord:
        """
        Return the finished record.

        Raises:
            MalformedFieldError: The record ended before all fields were seen.
        """
        for spec in STAT_FIELDS:
            if spec.name not in self._values:
                raise MalformedFieldError(
                    f"record ends before field {spec.position} ({spec.name})",
                    spec.position,
                    spec.name,
                )
        return ProcessRecord(**self._values)


def decode_record(buffer: bytes | str) -> ProcessRecord:
    """
    Decode one /proc/<pid>/stat record.

    Decoding is all-or-nothing: the first field that fails to convert aborts
    the whole record and its DecodeError propagates to the caller.

    Args:
        buffer: Raw record, newline-terminated or not. Anything after the
            first newline is ignored.

    Returns:
        The fully populated ProcessRecord.

    Raises:
        MalformedFieldError: A field is not parseable, or fields are missing.
        FieldOutOfRangeError: A field does not fit its declared width.
    """
    if isinstance(buffer, str):
        buffer = buffer.encode("utf-8")

    tokenizer = StatTokenizer(buffer)
    builder = RecordBuilder()
    position = 1
    for token in tokenizer:
        apply_field(position, token, builder)
        position += 1

    record = builder.build()
    logger.debug("Decoded stat record for pid %d (%d tokens)", record.pid, tokenizer.consumed)
    return record
