"""
matchertext - Matchertext and MinML markup toolkit

Parses matchertext (text whose parentheses, brackets and braces always
nest) and the MinML markup language built on it, transforms the
resulting AST, and writes it out as MinML, XML or HTML.
"""

__version__ = "1.0.0"

from .lib import (
    MatchertextParser,
    MinmlParser,
    TreeParser,
    minml_parse,
    unmatchedOffsets_find,
    MinmlTreeWriter,
    XmlTreeWriter,
    HtmlTreeWriter,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "MatchertextParser",
    "MinmlParser",
    "TreeParser",
    "minml_parse",
    "unmatchedOffsets_find",
    "MinmlTreeWriter",
    "XmlTreeWriter",
    "HtmlTreeWriter",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
