"""
XML character escaping

An Escaper is a set of flags naming which sensitive characters to
replace with predefined entity references.
"""

from enum import IntFlag


class Escaper(IntFlag):
    AMP = 1
    LT = 2
    GT = 4
    APOS = 8
    QUOT = 16

    ANGLE = LT | GT
    BASIC = AMP | LT | GT
    IN_QUOT = BASIC | QUOT
    IN_APOS = BASIC | APOS

    def escape(self, s: str) -> str:
        """Return s with the characters selected by these flags escaped"""
        table = {ch: rep for flag, ch, rep in _REPLACEMENTS if self & flag}
        if not any(ch in s for ch in table):
            return s
        return "".join(table.get(ch, ch) for ch in s)


_REPLACEMENTS = (
    (Escaper.AMP, "&", "&amp;"),
    (Escaper.LT, "<", "&lt;"),
    (Escaper.GT, ">", "&gt;"),
    (Escaper.APOS, "'", "&apos;"),
    (Escaper.QUOT, '"', "&quot;"),
)
