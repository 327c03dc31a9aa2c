"""
AST transformers

A transformer takes a list of sibling nodes and returns a list of nodes:
the same list modified in place, or a new one. It may replace, insert or
drop nodes, but Attribute nodes must only ever become Attribute nodes.

    EntityTransformer     [amp], [--] and friends become literal Text
    QuoteTransformer      '[...] and "[...] become directed quotes
    MatcherTransformer    unmatched ( ) [ ] { } in Text become References
"""

from html.entities import html5
from typing import Callable, List, Optional, Protocol

from .entities import MINML_ENTITIES
from .unmatched import unmatchedOffsets_find
from ..models.ast import Element, Node, Reference, Text

MatcherEscaper = Callable[[int], str]


class Transformer(Protocol):

    def transform(self, nodes: List[Node]) -> List[Node]: ...


class EntityTransformer:
    """
    Replace known character references with their text

    HTML5 named entities are looked up first, then the MinML symbolic
    entities. Unknown names, including numeric references, are left alone.
    """

    def transform(self, nodes: List[Node]) -> List[Node]:
        for i, node in enumerate(nodes):
            if isinstance(node, Reference):
                text = html5.get(node.name + ";")
                if text is None:
                    text = MINML_ENTITIES.get(node.name)
                if text is not None:
                    nodes[i] = Text(text)
        return nodes


class QuoteTransformer:
    """Splice '[...] and "[...] elements between directed quotation marks"""

    QUOTES = {
        "'": ("‘", "’"),
        '"': ("“", "”"),
    }

    def transform(self, nodes: List[Node]) -> List[Node]:
        if not any(isinstance(n, Element) and n.name in self.QUOTES for n in nodes):
            return nodes

        result: List[Node] = []
        for node in nodes:
            if isinstance(node, Element) and node.name in self.QUOTES:
                o, c = self.QUOTES[node.name]
                result.append(Text(o))
                result.extend(node.content)
                result.append(Text(c))
            else:
                result.append(node)
        return result


def numericEscaper(b: int) -> str:
    """Decimal numeric character reference name for a matcher"""
    return f"#{b}"


_MINML_ESCAPES = {
    ord("("): "(<)",
    ord(")"): "(>)",
    ord("["): "[<]",
    ord("]"): "[>]",
    ord("{"): "{<}",
    ord("}"): "{>}",
}


def minmlEscaper(b: int) -> str:
    """MinML matcher-escape reference name for a matcher, such as (<)"""
    return _MINML_ESCAPES[b]


class MatcherTransformer:
    """
    Make the literal text of a node list valid matchertext

    The Text nodes are scanned as one concatenated UTF-8 byte stream, so
    a pair may open in one Text node and close in a later one. Each
    unmatched matcher is cut out of its Text node and replaced by a
    Reference named by the escaper. Pieces of a raw Text stay raw.
    """

    def __init__(self, escaper: Optional[MatcherEscaper] = None) -> None:
        self.escaper = escaper or numericEscaper

    def transform(self, nodes: List[Node]) -> List[Node]:
        encoded = [n.content.encode("utf-8") if isinstance(n, Text) else None for n in nodes]
        offsets = unmatchedOffsets_find(b"".join(e for e in encoded if e is not None))
        if not offsets:
            return nodes
        offsets.sort()

        result: List[Node] = []
        base = 0
        k = 0
        for node, data in zip(nodes, encoded):
            if data is None:
                result.append(node)
                continue

            i = 0
            while k < len(offsets) and offsets[k] - base < len(data):
                o = offsets[k] - base
                if o > i:
                    result.append(Text(data[i:o].decode("utf-8"), node.raw))
                result.append(Reference(self.escaper(data[o])))
                i = o + 1
                k += 1
            if i < len(data):
                result.append(Text(data[i:].decode("utf-8"), node.raw))

            base += len(data)
        return result
