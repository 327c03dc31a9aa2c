"""
MinML tree writer

Writes an AST back out as MinML such that parsing the output yields the
same AST. The literal text in the AST must already be valid matchertext;
run MatcherTransformer over it first if it may not be.

Text that would otherwise be misread is disambiguated with space-suckers,
which the parser removes again:

    Text("a[b]")       a <[b <]     not an element a[...], not a reference [b]
    Text("a"), [amp]   a <[amp]     not an element a[...]
    Text("[> x]")      [> > x]      the first '> ' is sucked, the second kept
    Text("[x <]")      [x < <]      the last ' <' is sucked, the first kept
    Text("[(<)]")      [(<) <]      not the matcher escape reference (<)

Some trees have no MinML spelling at all, and the writer raises
WriterError for them rather than emit text that parses differently:
elements named '+' or '-', an element name starting with '<' right
after whitespace, and reference names the parser would read as text.
Empty text, raw sections and comments are written but parse back as
nothing, and adjacent Text nodes parse back as one.
"""

from typing import List, Sequence, TextIO

from .errors import WriterError
from .log import LOG
from .syntax import xmlName_is
from ..models.ast import Attribute, Comment, Element, Node, Reference, Text

_OPENERS = "([{"
_CLOSERS = ")]}"
_SS_MATCHERS = "[]{}"
_SS_CLOSERS = "]}"
_SPACES = " \t\r\n"
_SUCKERS = "<>"
_SIGILS = ("+", "-")


def _nameChar_is(ch: str) -> bool:
    return ch not in _SPACES and ch not in _OPENERS and ch not in _CLOSERS


def _closer_get(ch: str) -> str:
    return _CLOSERS[_OPENERS.index(ch)]


def elementName_isWritable(name: str) -> bool:
    """True if name reads back as an element name rather than a sigil"""
    return bool(name) and all(_nameChar_is(ch) for ch in name) and name not in _SIGILS


def referenceName_isWritable(name: str) -> bool:
    """
    True if [name] reads back as a reference

    Names may not hold whitespace, and may hold matchers only as a
    matcher escape such as (<). A lone '<' or '>' is literal text.
    """
    if name in ("", "<", ">") or any(ch in _SPACES for ch in name):
        return False
    if not any(ch in _OPENERS or ch in _CLOSERS for ch in name):
        return True
    return (len(name) == 3 and name[0] in _OPENERS and name[1] in _SUCKERS
            and name[2] == _closer_get(name[0]))


class MinmlTreeWriter:
    """
    Write AST nodes to a text sink in MinML syntax

    Running state about the output written so far:
        last: The last character written
        pref: Whether the output ends with '[' plus a run of name
              characters, which a ']' would turn into a reference
        ss: Whether the last character was a bracket or brace, after
            which the parser sucks '>' plus whitespace
        tail: The last four characters written
    """

    def __init__(self, sink: TextIO) -> None:
        self.sink = sink
        self.out: List[str] = []
        self.last = "["
        self.pref = False
        self.ss = False
        self.tail = ""

    def ast_write(self, nodes: Sequence[Node]) -> None:
        """
        Write nodes, then flush the sink

        Raises:
            WriterError: a node that has no MinML encoding
        """
        # The document behaves as if it were inside a bracket pair
        self.out = []
        self.last, self.pref, self.ss, self.tail = "[", False, False, ""

        self.nodes_write(nodes)
        self.sink.write("".join(self.out))
        LOG(f"MinmlTreeWriter: wrote {len(nodes)} top-level nodes", level=2)

        flush = getattr(self.sink, "flush", None)
        if flush is not None:
            flush()

    def nodes_write(self, nodes: Sequence[Node]) -> None:
        for node in nodes:
            if isinstance(node, Text):
                if node.raw:
                    self.verbatim_write("+", node.content)
                else:
                    self.text_write(node.content, element=True)
            elif isinstance(node, Reference):
                self.reference_write(node.name)
            elif isinstance(node, Element):
                self.element_write(node)
            elif isinstance(node, Comment):
                self.verbatim_write("-", node.text)
            else:
                raise WriterError(f"unknown node {node!r}")

    def text_write(self, text: str, element: bool) -> None:
        """
        Write literal text, padding where the parser would otherwise find
        an element (only if element is set), a reference, or sucked space
        """
        for ch in text:
            if ch == ">" and self.ss:
                self.chars_write("> ")

            pad = False
            if ch in "[{":
                # A literal pair sucks space before it in attribute values too
                pad = (element and _nameChar_is(self.last)) or self.suckerTail_is()
            elif ch == "]":
                pad = (self.pref and _nameChar_is(self.last)) or self.escapeTail_is()
            if ch in _SS_CLOSERS and self.suckerTail_is():
                pad = True
            if pad:
                self.chars_write(" <")

            self.char_write(ch)

    def reference_write(self, name: str) -> None:
        if not referenceName_isWritable(name):
            raise WriterError(f"reference name {name!r} would not read back as a reference")
        if _nameChar_is(self.last):
            self.chars_write(" <")
        self.chars_write("[" + name + "]")

    def element_write(self, elt: Element) -> None:
        if not elementName_isWritable(elt.name):
            raise WriterError(f"element name {elt.name!r} has no MinML spelling")
        if elt.name.startswith("<") and self.last in _SPACES:
            # The sucker before the name would also take this whitespace
            raise WriterError(f"element name {elt.name!r} cannot follow whitespace")
        self.name_write(elt.name)

        if elt.attributes:
            self.char_write("{")
            for i, a in enumerate(elt.attributes):
                if i > 0:
                    self.char_write(" ")
                self.attribute_write(a)
            self.char_write("}")

        self.char_write("[")
        self.nodes_write(elt.content)
        self.closer_write("]")

    def attribute_write(self, a: Attribute) -> None:
        if not isinstance(a, Attribute):
            raise WriterError(f"unknown attribute node {a!r}")
        if not xmlName_is(a.name.encode("utf-8")):
            raise WriterError(f"invalid attribute name {a.name!r}")
        self.chars_write(a.name + "=[")
        for node in a.value:
            if isinstance(node, Text) and node.raw:
                raise WriterError(f"raw text in the value of attribute {a.name!r}")
            if isinstance(node, Text):
                self.text_write(node.content, element=False)
            elif isinstance(node, Reference):
                self.reference_write(node.name)
            else:
                raise WriterError(f"unknown value node {node!r}")
        self.closer_write("]")

    def verbatim_write(self, sigil: str, body: str) -> None:
        """Write a raw section or comment, whose body the parser copies as is"""
        self.name_write(sigil)
        self.char_write("[")
        self.chars_write(body)
        self.char_write("]")

    def name_write(self, name: str) -> None:
        """Write an element name or sigil, separated from prior name characters"""
        # A leading '<' would otherwise be taken as a space-sucker
        if _nameChar_is(self.last) or name.startswith("<"):
            self.chars_write(" <")
        self.chars_write(name)

    def closer_write(self, c: str) -> None:
        """Write the closer of a construct whose content the parser trims"""
        if self.suckerTail_is():
            self.chars_write(" <")
        self.char_write(c)

    def suckerTail_is(self) -> bool:
        """Output ends with whitespace plus '<', which a closer would suck"""
        return len(self.tail) >= 2 and self.tail[-1] == "<" and self.tail[-2] in _SPACES

    def escapeTail_is(self) -> bool:
        """Output ends like '[(<)', which a ']' would turn into a reference"""
        t = self.tail
        return (len(t) == 4 and t[0] == "[" and t[1] in _OPENERS and t[2] in _SUCKERS
                and t[3] == _closer_get(t[1]))

    def chars_write(self, s: str) -> None:
        for ch in s:
            self.char_write(ch)

    def char_write(self, ch: str) -> None:
        self.last = ch
        self.pref = ch == "[" or (self.pref and _nameChar_is(ch))
        self.ss = ch in _SS_MATCHERS
        self.tail = (self.tail + ch)[-4:]
        self.out.append(ch)
