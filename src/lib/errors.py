"""
Exception types for matchertext and MinML processing

Parse errors subclass the builtin SyntaxError so callers can catch them
the usual way, but carry the byte offset, line and column at which the
problem was detected.
"""

from typing import Optional

from .source import Position


class MatchertextSyntaxError(SyntaxError):
    """
    Raised when a stream violates matchertext structure

    Covers unmatched openers, unmatched closers, and mismatched
    opener/closer pairs.

    Attributes:
        message: Human-readable description of the problem
        position: Position(offset, line, column) where it was detected
        filename: Optional source name, filled in by callers that know it
    """

    def __init__(self, message: str, position: Position, filename: Optional[str] = None):
        super().__init__(message)
        self.msg = message
        self.position = position
        self.filename = filename
        self.lineno = position.line
        self.offset = position.offset

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def column(self) -> int:
        return self.position.column

    def __str__(self) -> str:
        where = f"line {self.position.line}, column {self.position.column} (offset {self.position.offset})"
        if self.filename:
            return f"{self.msg} in '{self.filename}', {where}"
        return f"{self.msg} at {where}"


class MinmlSyntaxError(MatchertextSyntaxError):
    """Raised on MinML grammar errors inside otherwise valid matchertext"""
    pass


class TransformerContractError(RuntimeError):
    """
    Raised when a transformer turns an attribute into a non-attribute node.

    This is a programming error in the transformer, not a parse condition.
    """
    pass


class WriterError(ValueError):
    """Raised when a tree writer meets a node it cannot encode"""
    pass
