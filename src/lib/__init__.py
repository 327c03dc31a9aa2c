"""
matchertext.lib - parsers, transformers and writers
"""

from .source import ByteSource, Position
from .errors import MatchertextSyntaxError, MinmlSyntaxError, TransformerContractError, WriterError
from .core import MatchertextParser
from .unmatched import unmatchedOffsets_find
from .parser import MinmlParser
from .transform import EntityTransformer, QuoteTransformer, MatcherTransformer, numericEscaper, minmlEscaper
from .treeparser import TreeParser, minml_parse
from .registry import TransformerRegistry
from .treewriter import MinmlTreeWriter
from .xmlwriter import XmlTreeWriter
from .htmlwriter import HtmlTreeWriter
from .lexer import MinmlLexer
from .log import LOG, state_connectToLogger

__all__ = [
    "ByteSource",
    "Position",
    "MatchertextSyntaxError",
    "MinmlSyntaxError",
    "TransformerContractError",
    "WriterError",
    "MatchertextParser",
    "unmatchedOffsets_find",
    "MinmlParser",
    "EntityTransformer",
    "QuoteTransformer",
    "MatcherTransformer",
    "numericEscaper",
    "minmlEscaper",
    "TreeParser",
    "minml_parse",
    "TransformerRegistry",
    "MinmlTreeWriter",
    "XmlTreeWriter",
    "HtmlTreeWriter",
    "MinmlLexer",
    "LOG",
    "state_connectToLogger",
]
