"""
HTML tree writer

Same output as XmlTreeWriter except that HTML has no CDATA sections, so
raw text is escaped like any other text, and only the void elements may
self-close.
"""

from .escape import Escaper
from .xmlwriter import XmlTreeWriter
from ..models.ast import Text

# https://html.spec.whatwg.org/multipage/syntax.html#void-elements
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img",
    "input", "link", "meta", "source", "track", "wbr",
})


class HtmlTreeWriter(XmlTreeWriter):

    def text_write(self, node: Text, esc: Escaper) -> None:
        self.sink.write(esc.escape(node.content))

    def selfClosing_is(self, name: str) -> bool:
        return name in VOID_ELEMENTS
