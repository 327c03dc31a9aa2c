"""
Abstract syntax tree for *ML markup

Five closed node kinds exchanged between the MinML parser, the
transformers and the tree writers. Nodes are frozen dataclasses, so the
generated __eq__ gives deep structural equality, and they hold no back
references. Code that switches over node kinds uses isinstance() and
treats anything else as an error.

Example:
    >>> elt = element_new("a", attribute_new("href", text_new("x")), text_new("link"))
    >>> elt.attributes
    [Attribute(name='href', value=[Text(content='x', raw=False)])]
    >>> elt.content
    [Text(content='link', raw=False)]
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Union


@dataclass(frozen=True)
class Text:
    """
    Literal UTF-8 text

    Attributes:
        content: The markup-free text
        raw: True if the text came from a raw section (+[...] in MinML,
             CDATA in XML) and must not be re-escaped as ordinary text
    """
    content: str
    raw: bool = False

    def clone(self) -> "Text":
        return self


@dataclass(frozen=True)
class Reference:
    """Named or numeric character reference, without delimiters"""
    name: str

    def clone(self) -> "Reference":
        return self


@dataclass(frozen=True)
class Comment:
    text: str

    def clone(self) -> "Comment":
        return self


@dataclass(frozen=True)
class Attribute:
    """
    Element attribute

    The value holds only Text and Reference nodes.
    """
    name: str
    value: List["Node"] = field(default_factory=list)

    def clone(self) -> "Attribute":
        """Shallow copy with its own value list"""
        return Attribute(self.name, list(self.value))


@dataclass(frozen=True)
class Element:
    """
    Markup element with a name, attributes, and content

    The lists must not be modified except on a clone().
    """
    name: str
    attributes: List[Attribute] = field(default_factory=list)
    content: List["Node"] = field(default_factory=list)

    def clone(self) -> "Element":
        """Shallow copy with its own attribute and content lists"""
        return Element(self.name, list(self.attributes), list(self.content))


Node = Union[Text, Reference, Element, Attribute, Comment]


def text_new(content: str) -> Text:
    return Text(content)


def rawText_new(content: str) -> Text:
    return Text(content, raw=True)


def reference_new(name: str) -> Reference:
    return Reference(name)


def comment_new(text: str) -> Comment:
    return Comment(text)


def attribute_new(name: str, *value: Node) -> Attribute:
    return Attribute(name, list(value))


def element_new(name: str, *nodes: Node) -> Element:
    """
    Create an element from a flat node list

    Leading Attribute nodes become the element's attributes and the
    rest its content; attributes must come first.
    """
    i = 0
    while i < len(nodes) and isinstance(nodes[i], Attribute):
        i += 1
    return Element(name, list(nodes[:i]), list(nodes[i:]))


def nodes_equal(a: Sequence[Node], b: Sequence[Node]) -> bool:
    """Deep equality of two node sequences, including node kinds"""
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))
