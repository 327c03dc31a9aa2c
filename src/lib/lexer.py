"""
Pygments lexer for MinML syntax highlighting

Used by the CLI to colorize MinML output with --highlight.

Token types:
- Name.Tag: Element names (e.g., p, em, a)
- Name.Attribute: Attribute names inside {...}
- String: Attribute values
- Name.Entity: Character references (e.g., [amp], [--])
- String.Other: Raw section bodies +[...]
- Comment: Comments -[...]
- Operator: Space-suckers < and >
- Punctuation: Matchers ( ) [ ] { }
"""

from pygments.lexer import RegexLexer, bygroups, include
from pygments.token import (
    Text,
    Whitespace,
    Punctuation,
    Name,
    String,
    Keyword,
    Operator,
    Comment,
)

# Runs of element-name characters: anything but whitespace and matchers
_NAME = r'[^\s()\[\]{}<][^\s()\[\]{}]*'


class MinmlLexer(RegexLexer):
    """
    Lexer for MinML markup

    Example:
        a{href=[x]}[link [amp] +[raw]]

    Tokens:
        a → Name.Tag
        { → Punctuation
        href → Name.Attribute
        x → String
        [amp] → Name.Entity
        raw → String.Other
    """

    name = 'MinML'
    aliases = ['minml', 'mml']
    filenames = ['*.minml', '*.mml']

    tokens = {
        'root': [
            include('markup'),
        ],

        'markup': [
            # Raw sections and comments
            (r'(<?)(\+)(\[)', bygroups(Operator, Keyword, Punctuation), 'raw'),
            (r'(<?)(-)(\[)', bygroups(Operator, Comment.Special, Punctuation), 'comment'),

            # Elements, with or without an attribute block
            (r'(<?)(' + _NAME + r')(\{)', bygroups(Operator, Name.Tag, Punctuation), 'attributes'),
            (r'(<?)(' + _NAME + r')(\[)', bygroups(Operator, Name.Tag, Punctuation), 'markup'),

            # Character references
            (r'\[[^\s()\[\]{}]+\]', Name.Entity),

            # Space-suckers
            (r'\s*<(?=[\[\]{}])', Operator),
            (r'(?<=[\[\]{}])>\s*', Operator),

            # Literal matcher pairs nest
            (r'[(\[{]', Punctuation, 'markup'),
            (r'[)\]}]', Punctuation, '#pop'),

            (r'\s+', Whitespace),
            (r'[^\s()\[\]{}]+(?=[\s()\]}]|\Z)', Text),
            (r'.', Text),
        ],

        'attributes': [
            (r'\s+', Whitespace),
            (r'([^\s=()\[\]{}]+)(=)(\[)', bygroups(Name.Attribute, Operator, Punctuation), 'value'),
            (r'([^\s=()\[\]{}]+)(=)([^\s()\[\]{}]*)', bygroups(Name.Attribute, Operator, String)),
            (r'\}', Punctuation, '#pop'),
            (r'.', Text),
        ],

        'value': [
            (r'\[[^\s()\[\]{}]+\]', Name.Entity),
            (r'[(\[{]', Punctuation, 'value'),
            (r'[)\]}]', Punctuation, '#pop'),
            (r'[^()\[\]{}]+', String),
        ],

        'raw': [
            (r'[(\[{]', String.Other, 'raw'),
            (r'[)\]}]', String.Other, '#pop'),
            (r'[^()\[\]{}]+', String.Other),
        ],

        'comment': [
            (r'[(\[{]', Comment, 'comment'),
            (r'[)\]}]', Comment, '#pop'),
            (r'[^()\[\]{}]+', Comment),
        ],
    }


def get_lexer() -> MinmlLexer:
    """
    Get a MinmlLexer instance

    Returns:
        MinmlLexer ready for use with Pygments
    """
    return MinmlLexer()
