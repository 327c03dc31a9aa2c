"""
Build an abstract syntax tree from a MinML stream

TreeParser drives a MinmlParser with handlers that collect nodes level by
level. Each attribute list, each element's content, and finally the whole
document is passed through the registered transformers before it is
attached to its parent, so transformers always see transformed children.
"""

from typing import List, Optional

from .core import ErrorHook
from .errors import TransformerContractError
from .log import LOG
from .parser import MinmlParser
from .source import Readable
from .transform import Transformer
from ..models.ast import Attribute, Comment, Element, Node, Reference, Text


class _AstBuilder:
    """Parser handlers; kept apart from TreeParser to hide the callbacks"""

    def __init__(self, parser: MinmlParser, transformers: List[Transformer]) -> None:
        self.p = parser
        self.t = transformers
        self.m: List[Node] = []
        self.a: List[Node] = []

    def text(self, data: bytes, raw: bool) -> None:
        self.m.append(Text(data.decode("utf-8"), raw))

    def reference(self, name: bytes) -> None:
        self.m.append(Reference(name.decode("utf-8")))

    def comment(self, text: bytes) -> None:
        self.m.append(Comment(text.decode("utf-8")))

    def element(self, name: bytes) -> None:
        om, oa = self.m, self.a
        self.m, self.a = [], []

        self.p.element_read(name, self)

        attributes = self.nodes_transform(self.a)
        for node in attributes:
            if not isinstance(node, Attribute):
                raise TransformerContractError(
                    f"transformer produced {type(node).__name__} in the attributes of '{name.decode('utf-8')}'"
                )
        content = self.nodes_transform(self.m)

        self.m, self.a = om, oa
        self.m.append(Element(name.decode("utf-8"), list(attributes), list(content)))

    def attribute(self, name: bytes) -> None:
        om, oa = self.m, self.a
        self.m, self.a = [], []

        self.p.attribute_read(name, self)
        attr = Attribute(name.decode("utf-8"), self.m)

        self.m, self.a = om, oa
        self.a.append(attr)

    def content(self) -> None:
        self.p.content_read(self)

    def nodes_transform(self, nodes: List[Node]) -> List[Node]:
        for t in self.t:
            nodes = t.transform(nodes)
        return nodes


class TreeParser:
    """
    Parse MinML into a list of AST nodes

    Example:
        >>> TreeParser("x <em[y]").transformer_add(EntityTransformer()).ast_parse()
        [Text(content='x', raw=False), Element(name='em', attributes=[], content=[Text(content='y', raw=False)])]
    """

    def __init__(self, source: Optional[Readable] = None, errorHook: Optional[ErrorHook] = None) -> None:
        self.parser = MinmlParser(source, errorHook)
        self.transformers: List[Transformer] = []

    def transformer_add(self, transformer: Transformer) -> "TreeParser":
        """Apply transformer to every new node list, after those added before it"""
        self.transformers.append(transformer)
        return self

    def reader_set(self, source: Readable) -> None:
        self.parser.reader_set(source)

    def ast_parse(self) -> List[Node]:
        """
        Parse the whole stream

        Raises:
            MatchertextSyntaxError: malformed input (MinmlSyntaxError for
                                    MinML grammar errors)
            TransformerContractError: a transformer broke the attribute rule
        """
        builder = _AstBuilder(self.parser, self.transformers)
        self.parser.all_read(builder)
        nodes = builder.nodes_transform(builder.m)
        LOG(f"parsed {len(nodes)} top-level nodes with {len(self.transformers)} transformers", level=2)
        return nodes


def minml_parse(source: Readable, *transformers: Transformer) -> List[Node]:
    """Parse source with the given transformers in one call"""
    tp = TreeParser(source)
    for t in transformers:
        tp.transformer_add(t)
    return tp.ast_parse()
