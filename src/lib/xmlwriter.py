"""
XML tree writer

Writes an AST as XML text: raw text becomes CDATA, empty elements
self-close, and comments have their internal '--' escaped.
"""

from typing import List, Sequence, TextIO

from .errors import WriterError
from .escape import Escaper
from .log import LOG
from ..models.ast import Attribute, Comment, Element, Node, Reference, Text

CDATA_SPLIT = "]]]]><![CDATA[>"


class XmlTreeWriter:
    """
    Write AST nodes to a text sink as XML

    Attributes:
        sink: Any object with write(str); flushed after ast_write() if it
              has a flush() method
    """

    def __init__(self, sink: TextIO) -> None:
        self.sink = sink

    def ast_write(self, nodes: Sequence[Node]) -> None:
        """
        Write nodes, then flush the sink

        Raises:
            WriterError: a node that has no encoding here
        """
        self.nodes_write(nodes)
        LOG(f"{type(self).__name__}: wrote {len(nodes)} top-level nodes", level=2)
        flush = getattr(self.sink, "flush", None)
        if flush is not None:
            flush()

    def nodes_write(self, nodes: Sequence[Node]) -> None:
        for node in nodes:
            if isinstance(node, Text):
                self.text_write(node, Escaper.BASIC)
            elif isinstance(node, Reference):
                self.reference_write(node.name)
            elif isinstance(node, Element):
                self.element_write(node)
            elif isinstance(node, Comment):
                self.comment_write(node.text)
            else:
                raise WriterError(f"unknown node {node!r}")

    def text_write(self, node: Text, esc: Escaper) -> None:
        if node.raw:
            self.rawText_write(node.content)
        else:
            self.sink.write(esc.escape(node.content))

    def rawText_write(self, s: str) -> None:
        """Write raw text as a CDATA section, splitting any ]]> inside it"""
        if not s:
            return
        self.sink.write("<![CDATA[" + s.replace("]]>", CDATA_SPLIT) + "]]>")

    def reference_write(self, name: str) -> None:
        self.sink.write(f"&{name};")

    def element_write(self, elt: Element) -> None:
        self.sink.write("<" + elt.name)
        self.attributes_write(elt.attributes)

        if not elt.content and self.selfClosing_is(elt.name):
            self.sink.write("/>")
            return

        self.sink.write(">")
        self.nodes_write(elt.content)
        self.sink.write(f"</{elt.name}>")

    def selfClosing_is(self, name: str) -> bool:
        """Whether an empty element of this name may use <name/>"""
        return True

    def attributes_write(self, attributes: List[Attribute]) -> None:
        for a in attributes:
            self.sink.write(f' {a.name}="')
            for node in a.value:
                # No CDATA sections inside attribute values
                if isinstance(node, Text):
                    self.sink.write(Escaper.IN_QUOT.escape(node.content))
                elif isinstance(node, Reference):
                    self.reference_write(node.name)
                else:
                    raise WriterError(f"unknown value node {node!r}")
            self.sink.write('"')

    def comment_write(self, s: str) -> None:
        self.sink.write("<!--" + comment_escape(s) + "-->")


def comment_escape(s: str) -> str:
    """
    Escape the second dash of every '--' pair in comment text

    Pairs are taken left to right without overlap. A dash left over at
    the end is escaped too, since it would run into the closing '-->',
    so '---' becomes '-&#45;&#45;'.
    """
    out = []
    i = 0
    while i < len(s):
        if s.startswith("--", i):
            out.append("-&#45;")
            i += 2
        else:
            out.append(s[i])
            i += 1
    if out and out[-1] == "-":
        out[-1] = "&#45;"
    return "".join(out)
