"""
Models package for matchertext

Contains the AST node types, transformer metadata, and the CLI pipeline state.
"""

from .state import ProgramState, pipeline
from .ast import (
    Text,
    Reference,
    Comment,
    Attribute,
    Element,
    Node,
    text_new,
    rawText_new,
    reference_new,
    comment_new,
    attribute_new,
    element_new,
    nodes_equal,
)
from .transformers import TransformerSpec, TransformerCategory

__all__ = [
    "ProgramState",
    "pipeline",
    "Text",
    "Reference",
    "Comment",
    "Attribute",
    "Element",
    "Node",
    "text_new",
    "rawText_new",
    "reference_new",
    "comment_new",
    "attribute_new",
    "element_new",
    "nodes_equal",
    "TransformerSpec",
    "TransformerCategory",
]
