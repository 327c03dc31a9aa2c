"""
Character classes for matchertext and MinML

Bytes are handled as ints, the way indexing a bytes object yields them.
Matcher classification is a pure function of the byte value.
"""

import re

LPAREN, RPAREN = ord("("), ord(")")
LBRACKET, RBRACKET = ord("["), ord("]")
LBRACE, RBRACE = ord("{"), ord("}")

SUCK_LEFT = ord("<")     # space-sucker before an opener or closer
SUCK_RIGHT = ord(">")    # space-sucker after an opener or closer
EQUALS = ord("=")
RAW_SIGIL = ord("+")
COMMENT_SIGIL = ord("-")

_CLOSER_OF = {LPAREN: RPAREN, LBRACKET: RBRACKET, LBRACE: RBRACE}
_OPENERS = frozenset(_CLOSER_OF)
_CLOSERS = frozenset(_CLOSER_OF.values())

_SPACES = frozenset(b" \t\r\n")

# XML 1.0 (Fifth Edition) NameStartChar and NameChar
_NAME_START = (
    ":A-Z_a-z\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u02FF\u0370-\u037D"
    "\u037F-\u1FFF\u200C-\u200D\u2070-\u218F\u2C00-\u2FEF\u3001-\uD7FF"
    "\uF900-\uFDCF\uFDF0-\uFFFD\U00010000-\U000EFFFF"
)
_NAME_CHAR = _NAME_START + "\\-.0-9\u00B7\u0300-\u036F\u203F-\u2040"
_XML_NAME = re.compile(f"[{_NAME_START}][{_NAME_CHAR}]*")


def opener_is(b: int) -> bool:
    """True for ( [ {"""
    return b in _OPENERS


def closer_is(b: int) -> bool:
    """True for ) ] }"""
    return b in _CLOSERS


def matcher_is(b: int) -> bool:
    """True for any of the six ASCII matchers"""
    return b in _OPENERS or b in _CLOSERS


def pair_isMatched(o: int, c: int) -> bool:
    """True if o is an opener and c is its corresponding closer"""
    return _CLOSER_OF.get(o) == c


def closer_get(o: int) -> int:
    """Return the closer corresponding to opener o"""
    return _CLOSER_OF[o]


def space_is(b: int) -> bool:
    """MinML whitespace is XML whitespace: space, tab, CR, LF"""
    return b in _SPACES


def ssOpener_is(b: int) -> bool:
    """Openers next to which space-sucking applies"""
    return b == LBRACKET or b == LBRACE


def ssCloser_is(b: int) -> bool:
    """Closers next to which space-sucking applies"""
    return b == RBRACKET or b == RBRACE


def ssMatcher_is(b: int) -> bool:
    return ssOpener_is(b) or ssCloser_is(b)


def nameByte_is(b: int) -> bool:
    """
    True if b can appear in a liberalized MinML element name

    Anything but whitespace and matchers, punctuation included.
    """
    return not space_is(b) and not matcher_is(b)


def xmlName_is(name: bytes) -> bool:
    """True if name is UTF-8 encoding a valid XML Name"""
    try:
        text = name.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return _XML_NAME.fullmatch(text) is not None



def reference_is(name: bytes) -> bool:
    """
    True if name can be a liberalized MinML character reference

    Any non-empty byte sequence without whitespace qualifies, matchers
    and punctuation included.
    """
    return len(name) > 0 and not any(space_is(b) for b in name)


def starter_scan(b: bytes) -> int:
    """
    Find the element name at the end of buffered text

    Returns the position where the trailing run of name bytes starts,
    or -1 if there is none. A leading space-sucker '<' is not part of
    the name, and a lone '<' is not a name at all.
    """
    n = -1
    i = len(b) - 1
    while i >= 0 and nameByte_is(b[i]):
        n = i
        i -= 1

    if n >= 0 and b[n] == SUCK_LEFT:
        if n == len(b) - 1:
            return -1
        return n + 1
    return n


def preSpace_scan(b: bytes) -> int:
    """
    Find whitespace plus '<' at the end of b

    Returns the length b should be truncated to, len(b) if nothing
    is to be sucked.
    """
    n = len(b)
    if n >= 2 and b[n - 1] == SUCK_LEFT and space_is(b[n - 2]):
        n -= 2
        while n > 0 and space_is(b[n - 1]):
            n -= 1
    return n


def postSpace_scan(b: bytes) -> int:
    """
    Find '>' plus whitespace at the start of b

    Returns the number of leading bytes to drop.
    """
    n = 0
    if len(b) >= 2 and b[0] == SUCK_RIGHT and space_is(b[1]):
        n = 2
        while n < len(b) and space_is(b[n]):
            n += 1
    return n
