"""Exceptions raised while acquiring and decoding stat records."""


class ProcStatError(Exception):
    """Base class for all procstat errors."""


class AcquisitionError(ProcStatError):
    """The raw record could not be read (missing process, permissions, I/O)."""


class DecodeError(ProcStatError):
    """
    A field of the record could not be decoded.

    Attributes:
        position: 1-based field position within the record.
        field: Name of the field at that position.
        token: The raw token, or None when the field was missing entirely.
    """

    def __init__(self, message: str, position: int, field: str, token: bytes | None = None) -> None:
        super().__init__(message)
        self.position = position
        self.field = field
        self.token = token


class MalformedFieldError(DecodeError):
    """A token does not parse as its declared type, or a field is missing."""


class FieldOutOfRangeError(DecodeError):
    """A parsed integer does not fit the declared width of its field."""
