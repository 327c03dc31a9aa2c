"""
MinML parser

Layered on MatchertextParser: the matchertext layer guarantees that
matchers nest, and this layer decides what each pair means. Bytes
between matchers accumulate in a buffer until an opener shows up; the
parser then looks backwards through the buffer to decide whether the
opener starts an element (name[...] or name{...}[...]), a raw section
(+[...]), a comment (-[...]), a character reference ([name]), or is just
literal text.

Results are delivered through client handlers, in the same pull style
the matchertext layer uses: on an element the parser calls
handler.element(name), and the handler calls back into element_read()
when it is ready for the attributes and content. Every upcall saves and
restores the parser's active handler context, so handlers may re-enter
the parser freely.

Space-sucking: '<' plus the whitespace before it is dropped when it
immediately precedes a bracket or brace, and '>' plus the whitespace
after it is dropped when it immediately follows one. Parentheses never
suck space.

Example:
    >>> class Show:
    ...     def __init__(self, p): self.p = p
    ...     def text(self, data, raw): print("text", data)
    ...     def reference(self, name): print("ref", name)
    ...     def element(self, name): print("element", name); self.p.element_read(name, self)
    ...     def attribute(self, name): self.p.attribute_read(name, self)
    ...     def content(self): self.p.content_read(self)
    >>> p = MinmlParser(b"x <em[> hi <]> [amp]")
    >>> p.all_read(Show(p))
    text b'x'
    element b'em'
    text b'hi'
    ref b'amp'
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol, runtime_checkable

from .core import ErrorHook, MatchertextParser
from .errors import MinmlSyntaxError
from .log import LOG
from .source import Position, Readable
from .syntax import (
    COMMENT_SIGIL, EQUALS, LBRACE, LBRACKET, LPAREN, RAW_SIGIL, RBRACE, RBRACKET,
    SUCK_LEFT, SUCK_RIGHT,
    opener_is, postSpace_scan, preSpace_scan, reference_is, space_is,
    ssCloser_is, ssMatcher_is, ssOpener_is, starter_scan, xmlName_is,
)


class TextHandler(Protocol):
    """Receives plain text and character references"""

    def text(self, data: bytes, raw: bool) -> None: ...

    def reference(self, name: bytes) -> None: ...


class MarkupHandler(TextHandler, Protocol):
    """
    Receives general markup: text, references and elements

    element() must call MinmlParser.element_read() exactly once.
    """

    def element(self, name: bytes) -> None: ...


class ElementHandler(Protocol):
    """
    Receives the parts of one element

    attribute() is called once per attribute and must call
    attribute_read(); content() is then called exactly once and must
    call content_read().
    """

    def attribute(self, name: bytes) -> None: ...

    def content(self) -> None: ...


@runtime_checkable
class CommentHandler(Protocol):
    """Optional extension of TextHandler; without it comments are dropped"""

    def comment(self, text: bytes) -> None: ...


@dataclass
class HandlerContext:
    """The client handlers active at one level of the parse"""
    markup: Optional[MarkupHandler] = None
    text: Optional[TextHandler] = None
    element: Optional[ElementHandler] = None


class _ValueEnd(Exception):
    """Whitespace ended an unquoted attribute value"""
    pass


class _MarkupScanner:
    """Matchertext callbacks for general markup and quoted values"""

    def __init__(self, parser: "MinmlParser") -> None:
        self.parser = parser

    def byte(self, b: int) -> None:
        self.parser.buf.append(b)

    def open(self, o: int, c: int) -> None:
        p = self.parser

        # Only brackets and braces can start elements, and only in
        # general markup (not in attribute values)
        if o != LPAREN and p.ctx.markup is not None:
            pos = starter_scan(p.buf)
            if pos >= 0:
                name = bytes(p.buf[pos:])
                del p.buf[pos:]

                # Suck space leading up to the name, then flush text before it
                p.space_suck(True)
                p.text_handle(len(p.buf), False)

                if name == bytes([RAW_SIGIL]):
                    p.rawText_read()
                elif name == bytes([COMMENT_SIGIL]):
                    p.comment_read()
                else:
                    p.element_handle(name)
                return

        p.literalPair_read(o, c)


class _AttributeScanner:
    """Matchertext callbacks inside an element's {...} attribute block"""

    def __init__(self, parser: "MinmlParser") -> None:
        self.parser = parser

    def byte(self, b: int) -> None:
        p = self.parser
        if space_is(b):
            p.attribute_flush()
            return
        if b != EQUALS:
            p.buf.append(b)
            return

        name = bytes(p.buf)
        p.buf.clear()
        if not xmlName_is(name):
            p.syntaxError_raise("invalid attribute name")
            return
        p.attribute_handle(name)

    def open(self, o: int, c: int) -> None:
        p = self.parser
        p.syntaxError_raise("attribute name expected")

        # The error was cleared: skip the pair
        start = len(p.buf)
        p.rawScanner.open(o, c)
        del p.buf[start:]


class _ValueScanner:
    """Matchertext callbacks for an unquoted attribute value"""

    def __init__(self, parser: "MinmlParser") -> None:
        self.parser = parser

    def byte(self, b: int) -> None:
        if space_is(b):
            raise _ValueEnd()
        self.parser.buf.append(b)

    def open(self, o: int, c: int) -> None:
        # Pairs inside an unquoted value are literal text
        self.parser.rawScanner.open(o, c)


class _RawScanner:
    """Matchertext callbacks copying raw sections and comments verbatim"""

    def __init__(self, parser: "MinmlParser") -> None:
        self.parser = parser

    def byte(self, b: int) -> None:
        self.parser.buf.append(b)

    def open(self, o: int, c: int) -> None:
        p = self.parser
        p.buf.append(o)
        p.mp.pair_read(self, o, c)
        p.buf.append(c)


class MinmlParser:
    """
    Streaming MinML parser

    One instance parses one stream at a time; reader_set() resets it
    onto a new one. Instances share no state and are not thread-safe.

    Attributes:
        mp: Underlying matchertext parser
        buf: Bytes read but not yet delivered to a handler
        lmb: Last bracket or brace seen, for post-space sucking (0 if none)
        lmp: Buffer position just after that matcher
        ctx: Handlers active at the current level
        upcalls: Count of handler upcalls, used to tell whether a pair's
                 content was delivered piecemeal
        sucks: Count of space-sucking events, used to tell whether a
               pair's bytes are exactly the input's
    """

    def __init__(self, source: Optional[Readable] = None, errorHook: Optional[ErrorHook] = None) -> None:
        self.mp = MatchertextParser(errorHook=errorHook)
        self.markupScanner = _MarkupScanner(self)
        self.attributeScanner = _AttributeScanner(self)
        self.valueScanner = _ValueScanner(self)
        self.rawScanner = _RawScanner(self)
        self.state_reset()
        if source is not None:
            self.reader_set(source)

    def state_reset(self) -> None:
        self.buf = bytearray()
        self.lmb = 0
        self.lmp = 0
        self.ctx = HandlerContext()
        self.upcalls = 0
        self.sucks = 0

    def reader_set(self, source: Readable) -> None:
        """Parse a new stream, discarding all buffered state"""
        self.state_reset()
        self.mp.reader_set(source)

    @property
    def position(self) -> Position:
        return self.mp.position

    # ------------------------------------------------------------------
    # Public reading entry points

    def all_read(self, hm: MarkupHandler) -> None:
        """
        Read a whole MinML stream

        Raises:
            MatchertextSyntaxError: matchers do not nest, or nest too deeply
            MinmlSyntaxError: MinML grammar error, including a closer
                              left over at top level
        """
        with self.mp.nesting_guarded():
            while True:
                closer = self.read(hm, hm)
                if closer is None:
                    return
                at = self.position
                self.mp.source.getc()
                self.syntaxError_raise(f"expected end of file, found '{chr(closer)}'", at)

    def markup_read(self, hm: MarkupHandler) -> Optional[int]:
        """
        Read text, references and elements up to the end of the current
        construct. Returns the closer that ended it, or None at EOF.
        """
        return self.read(hm, hm)

    def text_read(self, ht: TextHandler) -> Optional[int]:
        """Like markup_read(), but elements are not recognized"""
        return self.read(None, ht)

    def read(self, hm: Optional[MarkupHandler], ht: TextHandler) -> Optional[int]:
        self.ctx = HandlerContext(markup=hm, text=ht)
        closer = self.mp.text_read(self.markupScanner)
        self.markup_flush(False)
        return closer

    def element_read(self, name: bytes, he: ElementHandler) -> None:
        """
        Read the optional {attributes} and the [content] of an element

        Called by a MarkupHandler from its element() callback.
        """
        self.buf.clear()
        self.ctx = HandlerContext(element=he)

        if self.mp.peek() == LBRACE:
            self.mp.pair_read(self.attributeScanner, LBRACE, RBRACE)
            self.attribute_flush()

        he.content()

    def attribute_read(self, name: bytes, ht: TextHandler) -> None:
        """
        Read an attribute value, bracket-quoted or unquoted

        Called by an ElementHandler from its attribute() callback.
        """
        self.ctx = HandlerContext(text=ht)

        if self.mp.peek() == LBRACKET:
            self.markupPair_read()

            # Only whitespace or the end of the block may follow
            b = self.mp.peek()
            if b is not None and b != RBRACE and not space_is(b):
                self.syntaxError_raise("end of attribute value expected")
        else:
            try:
                self.mp.text_read(self.valueScanner)
            except _ValueEnd:
                pass

        self.markup_flush(False)

    def content_read(self, hm: MarkupHandler) -> None:
        """
        Read the [content] of an element

        Called by an ElementHandler from its content() callback.
        """
        self.ctx = HandlerContext(markup=hm, text=hm)
        self.markupPair_read()

    # ------------------------------------------------------------------
    # Constructs

    def literalPair_read(self, o: int, c: int) -> None:
        """
        Read a matcher pair as literal text, or as a character reference
        if it is a bracket pair around a plain reference name
        """
        self.space_suck(ssOpener_is(o))

        oPos = len(self.buf)
        self.buf.append(o)
        self.matcher_saw(o)
        upcalls, sucks = self.upcalls, self.sucks

        self.mp.pair_read(self.markupScanner, o, c)

        # A nested pair would have replaced the '[' in lmb
        maybeRef = self.lmb == LBRACKET
        self.space_suck(ssCloser_is(c))

        self.buf.append(c)
        self.matcher_saw(c)

        # Sucked space or nested constructs mean this was not written as
        # a reference
        if c != RBRACKET or self.upcalls != upcalls or self.sucks != sucks:
            return

        b = bytes(self.buf[oPos:])
        if len(b) == 5 and opener_is(b[1]) and b[2] in (SUCK_LEFT, SUCK_RIGHT):
            maybeRef = True     # matcher escape such as [(<)]
        if not maybeRef:
            return

        # [<] and [>] are not references
        if len(b) == 3 and b[1] in (SUCK_LEFT, SUCK_RIGHT):
            return

        ref = b[1:-1]
        if reference_is(ref):
            self.text_handle(oPos, False)
            self.buf.clear()
            self.matcher_saw(c)
            self.reference_handle(ref)

    def markupPair_read(self) -> None:
        """Read a [...] pair with the markup scanner and flush its text"""
        self.matcher_saw(LBRACKET)
        self.mp.pair_read(self.markupScanner, LBRACKET, RBRACKET)
        self.markup_flush(True)
        self.matcher_saw(RBRACKET)

    def rawText_read(self) -> None:
        """Read the [...] of a raw section +[...] verbatim"""
        self.mp.pair_read(self.rawScanner, LBRACKET, RBRACKET)
        self.text_handle(len(self.buf), True)
        self.matcher_saw(RBRACKET)

    def comment_read(self) -> None:
        """Read the [...] of a comment -[...] verbatim"""
        self.mp.pair_read(self.rawScanner, LBRACKET, RBRACKET)
        text = bytes(self.buf)
        self.buf.clear()
        if text:
            self.comment_handle(text)
        self.matcher_saw(RBRACKET)

    def attribute_flush(self) -> None:
        """Whitespace or the end of the block with a name but no '='"""
        if self.buf:
            self.buf.clear()
            self.syntaxError_raise("attribute value expected")

    def markup_flush(self, atEnd: bool) -> None:
        """Deliver buffered text, sucking space before the closer if atEnd"""
        self.space_suck(atEnd)
        self.text_handle(len(self.buf), False)

    # ------------------------------------------------------------------
    # Space-sucking

    def matcher_saw(self, b: int) -> None:
        """Remember a bracket or brace so space after it can be sucked"""
        if ssMatcher_is(b):
            self.lmb = b
            self.lmp = len(self.buf)

    def space_suck(self, atEnd: bool) -> bool:
        """
        Suck '> ...' after the last bracket or brace, if there was one,
        and '... <' at the end of the buffer if atEnd is set.

        Returns True if anything was removed.
        """
        sucked = False

        if self.lmb != 0:
            b = self.buf[self.lmp:]
            n = postSpace_scan(b)
            if n > 0 and n == len(b) - 1 and atEnd and b[n] == SUCK_LEFT:
                # "> ... <" between two constructs collapses to nothing
                del self.buf[self.lmp:]
                sucked = True
            elif n > 0:
                del self.buf[self.lmp:self.lmp + n]
                sucked = True
            self.lmb = 0

        if atEnd:
            n = preSpace_scan(self.buf)
            if n < len(self.buf):
                del self.buf[n:]
                sucked = True

        if sucked:
            self.sucks += 1
        return sucked

    # ------------------------------------------------------------------
    # Upcalls

    @contextmanager
    def context_saved(self) -> Iterator[HandlerContext]:
        """Save the handler context around an upcall that may re-enter us"""
        saved = self.ctx
        self.upcalls += 1
        try:
            yield saved
        finally:
            self.ctx = saved

    def text_handle(self, n: int, raw: bool) -> None:
        """Deliver the first n buffered bytes as text"""
        if n == 0:
            return
        data = bytes(self.buf[:n])
        del self.buf[:n]
        with self.context_saved() as ctx:
            ctx.text.text(data, raw)

    def reference_handle(self, name: bytes) -> None:
        with self.context_saved() as ctx:
            ctx.text.reference(name)

    def element_handle(self, name: bytes) -> None:
        LOG(f"element '{name.decode('utf-8', 'replace')}' at offset {self.position.offset}", level=3)
        with self.context_saved() as ctx:
            ctx.markup.element(name)

    def attribute_handle(self, name: bytes) -> None:
        with self.context_saved() as ctx:
            ctx.element.attribute(name)

    def comment_handle(self, text: bytes) -> None:
        with self.context_saved() as ctx:
            if isinstance(ctx.text, CommentHandler):
                ctx.text.comment(text)

    def syntaxError_raise(self, message: str, at: Optional[Position] = None) -> None:
        self.mp.syntaxError_raise(message, at, errorType=MinmlSyntaxError)
