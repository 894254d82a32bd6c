"""Single-pass tokenizer for one /proc/<pid>/stat line."""

DELIMITER = ord(" ")
NEWLINE = ord("\n")
OPEN_PAREN = ord("(")
CLOSE_PAREN = b")"

# Position of the parenthesised executable name.
COMM_POSITION = 2


class StatTokenizer:
    """
    Splits a raw stat record into space-delimited tokens.

    The record ends at the first newline outside the executable name, or at
    the end of the buffer. Runs of spaces count as one delimiter. The second
    token, when it starts with "(", extends to the last ")" before the
    buffer's trailing newline, so names containing spaces, parentheses or
    newlines stay in one token. The buffer must therefore hold a single
    record.

    next_token() returns None once the record is exhausted; that is the
    normal end condition, not an error.
    """

    def __init__(self, buffer: bytes) -> None:
        self._data = buffer
        newline = buffer.find(NEWLINE)
        self._end = newline if newline != -1 else len(buffer)
        # Upper bound for the name scan: everything but a trailing newline.
        self._limit = len(buffer) - 1 if buffer.endswith(b"\n") else len(buffer)
        self._cursor = 0
        self._consumed = 0

    @property
    def consumed(self) -> int:
        """Number of tokens returned so far."""
        return self._consumed

    def _at_end(self) -> bool:
        return self._cursor >= self._end

    def _skip_delimiters(self) -> None:
        while not self._at_end() and self._data[self._cursor] == DELIMITER:
            self._cursor += 1

    def _comm_end(self) -> int | None:
        """Index just past the last ")" of the record, or None if there is none."""
        close = self._data.rfind(CLOSE_PAREN, self._cursor, self._limit)
        if close == -1:
            return None
        if close >= self._end:
            # The name holds a newline; the record ends at the next one.
            newline = self._data.find(NEWLINE, close)
            self._end = newline if newline != -1 else len(self._data)
        return close + 1

    def next_token(self) -> bytes | None:
        """Return the next token and advance past it, or None at end of record."""
        self._skip_delimiters()
        if self._at_end():
            return None

        start = self._cursor
        stop = None
        if self._consumed + 1 == COMM_POSITION and self._data[start] == OPEN_PAREN:
            stop = self._comm_end()

        if stop is None:
            stop = start
            while stop < self._end and self._data[stop] != DELIMITER:
                stop += 1

        self._cursor = stop
        self._consumed += 1
        return self._data[start:stop]

    def __iter__(self):
        return self

    def __next__(self) -> bytes:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token
