"""
Byte source with one byte of pushback and position tracking

Every consumer of matchertext (the core parser, the unmatched-matcher
scanner) reads through a ByteSource. Positions advance when a byte is
first read from the underlying stream; pushing a byte back and reading
it again does not move them.
"""

import io
from typing import IO, NamedTuple, Optional, Union

Readable = Union[bytes, bytearray, memoryview, str, IO[bytes]]

NEWLINE = 0x0A


class Position(NamedTuple):
    """Byte offset (0-based) with line and column (both 1-based)"""
    offset: int
    line: int
    column: int


class ByteSource:
    """
    Pull-style byte reader over bytes, text, or a binary stream

    Strings are encoded as UTF-8. Streams only need a read(n) method.

    Example:
        >>> src = ByteSource("a(b")
        >>> src.getc(), src.getc()
        (97, 40)
        >>> src.last
        Position(offset=1, line=1, column=2)
    """

    def __init__(self, source: Readable) -> None:
        if isinstance(source, str):
            source = source.encode("utf-8")
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        self.stream = source
        self.pushback: Optional[int] = None
        self.position = Position(0, 1, 1)
        self.last = self.position

    def getc(self) -> Optional[int]:
        """Return the next byte, or None at end of stream"""
        if self.pushback is not None:
            b = self.pushback
            self.pushback = None
            return b

        data = self.stream.read(1)
        if not data:
            return None
        if isinstance(data, str):
            raise TypeError("ByteSource needs a binary stream, got text")
        b = data[0]

        self.last = self.position
        offset, line, column = self.position
        if b == NEWLINE:
            self.position = Position(offset + 1, line + 1, 1)
        else:
            self.position = Position(offset + 1, line, column + 1)
        return b

    def ungetc(self, b: int) -> None:
        """Push back the byte most recently returned by getc()"""
        if self.pushback is not None:
            raise RuntimeError("only one byte of pushback is supported")
        self.pushback = b

    def peek(self) -> Optional[int]:
        """Return the next byte without consuming it"""
        b = self.getc()
        if b is not None:
            self.ungetc(b)
        return b

    @property
    def next(self) -> Position:
        """Position of the byte the next getc() will deliver"""
        if self.pushback is not None:
            return self.last
        return self.position
