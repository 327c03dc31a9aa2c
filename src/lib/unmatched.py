"""
Unmatched-matcher scanner

Finds the matchers in a byte stream that cannot be paired at their
nesting level. Replacing exactly those bytes with escapes (for example
character references) turns arbitrary text into valid matchertext.

Example:
    >>> offsets = unmatchedOffsets_find("a[b{c}d)e")
    >>> offsets.sort()
    >>> offsets
    [1, 7]
"""

from typing import List, Optional

from .source import ByteSource, Readable
from .syntax import closer_is, opener_is, pair_isMatched


def unmatchedOffsets_find(source: Readable) -> List[int]:
    """
    Return byte offsets of all unmatched matchers in source

    The list comes back in discovery order, not sorted; an unmatched
    opener is only known to be unmatched after its nested content has
    been scanned. Call sort() before consuming it in offset order.
    """
    src = source if isinstance(source, ByteSource) else ByteSource(source)
    offsets: List[int] = []
    while True:
        closer = level_scan(src, offsets)
        if closer is None:
            return offsets

        # An unmatched closer at top level: record it and keep going
        src.getc()
        offsets.append(src.last.offset)


def level_scan(src: ByteSource, offsets: List[int]) -> Optional[int]:
    """
    Scan one nesting level, recording unmatched openers in offsets

    Returns the closer that ended the level, left unconsumed in src,
    or None at end of stream.
    """
    while True:
        b = src.getc()
        if b is None:
            return None

        if opener_is(b):
            at = src.last.offset
            closer = level_scan(src, offsets)
            if closer is not None and pair_isMatched(b, closer):
                src.getc()
            else:
                # Resume where the nested scan stopped, without
                # assuming a closer for this opener
                offsets.append(at)

        elif closer_is(b):
            src.ungetc(b)
            return b
