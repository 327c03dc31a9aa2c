"""
Streaming recursive-descent matchertext parser

Confirms that parentheses, square brackets and curly braces nest
properly while handing every byte, and every matched pair, to a client
handler. The parser never recurses into a pair on its own: when it sees
an opener it pushes the opener back and calls handler.open(), and the
handler consumes the whole pair, normally by calling pair_read().
This lets layered parsers such as MinML decide what a pair means before
committing to reading it as literal text.

Example:
    >>> class Collect:
    ...     def __init__(self, p): self.p, self.out = p, bytearray()
    ...     def byte(self, b): self.out.append(b)
    ...     def open(self, o, c):
    ...         self.out.append(o)
    ...         self.p.pair_read(self, o, c)
    ...         self.out.append(c)
    >>> p = MatchertextParser("a(b[c]d)e")
    >>> h = Collect(p)
    >>> p.all_read(h)
    >>> bytes(h.out)
    b'a(b[c]d)e'
"""

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Protocol

from .errors import MatchertextSyntaxError
from .source import ByteSource, Position, Readable
from .syntax import closer_get, closer_is, opener_is

ErrorHook = Callable[[MatchertextSyntaxError], Optional[BaseException]]


class MatchertextHandler(Protocol):
    """Client callbacks for MatchertextParser"""

    def byte(self, b: int) -> None:
        """Handle one non-matcher byte"""
        ...

    def open(self, o: int, c: int) -> None:
        """Handle a pair starting at opener o; must consume it through closer c"""
        ...


class MatchertextParser:
    """
    Recursive-descent matchertext recognizer

    Attributes:
        source: ByteSource being read, None until reader_set() is called
        errorHook: Optional callable that sees every syntax error before it
                   is raised. It returns the exception to raise (the same
                   one or a substitute), or None to clear the error and let
                   parsing carry on.
    """

    def __init__(self, source: Optional[Readable] = None, errorHook: Optional[ErrorHook] = None) -> None:
        self.source: Optional[ByteSource] = None
        self.errorHook = errorHook
        if source is not None:
            self.reader_set(source)

    def reader_set(self, source: Readable) -> None:
        """Start reading a new stream, forgetting the previous one"""
        self.source = source if isinstance(source, ByteSource) else ByteSource(source)

    @property
    def position(self) -> Position:
        """Position of the next byte to be delivered"""
        return self.source.next

    def peek(self) -> Optional[int]:
        return self.source.peek()

    def text_read(self, handler: MatchertextHandler) -> Optional[int]:
        """
        Read matchertext up to the end of the current nesting level

        Non-matcher bytes go to handler.byte(). Openers are pushed back and
        passed to handler.open(). Returns the first unmatched closer, left
        unconsumed in the stream, or None at end of stream.
        """
        src = self.source
        while True:
            b = src.getc()
            if b is None:
                return None
            if opener_is(b):
                src.ungetc(b)
                handler.open(b, closer_get(b))
            elif closer_is(b):
                src.ungetc(b)
                return b
            else:
                handler.byte(b)

    def pair_read(self, handler: MatchertextHandler, o: int, c: int) -> None:
        """
        Read a complete pair: opener o, matchertext content, closer c

        Raises:
            MatchertextSyntaxError: opener missing, closer missing at end
                                    of stream, or closer mismatched
        """
        src = self.source
        at = src.next
        b = src.getc()
        if b != o:
            if b is not None:
                src.ungetc(b)
            self.syntaxError_raise(f"expected '{chr(o)}'", at)
            return

        closer = self.text_read(handler)
        if closer is None:
            self.syntaxError_raise(f"unclosed opener '{chr(o)}'", at)
            return

        src.getc()
        if closer != c:
            self.syntaxError_raise(
                f"mismatched matchers '{chr(o)}' and '{chr(closer)}'", src.last
            )

    def all_read(self, handler: MatchertextHandler) -> None:
        """
        Read the whole stream as matchertext

        Raises:
            MatchertextSyntaxError: on an unmatched closer at top level,
                                    on any error inside a pair, or when
                                    pairs nest deeper than the Python stack
        """
        with self.nesting_guarded():
            while True:
                closer = self.text_read(handler)
                if closer is None:
                    return
                self.source.getc()
                self.syntaxError_raise(f"unmatched closer '{chr(closer)}'", self.source.last)

    @contextmanager
    def nesting_guarded(self) -> Iterator[None]:
        """Report a RecursionError from deeply nested pairs as a syntax error"""
        try:
            yield
        except RecursionError:
            raise MatchertextSyntaxError("nesting too deep", self.position) from None

    def syntaxError_raise(self, message: str, at: Optional[Position] = None,
                          errorType: type = MatchertextSyntaxError) -> None:
        """
        Raise a syntax error, after offering it to the error hook

        Returns normally only if the hook cleared the error.
        """
        error: Optional[BaseException] = errorType(message, at or self.position)
        if self.errorHook is not None:
            error = self.errorHook(error)
        if error is not None:
            raise error
