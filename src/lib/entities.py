"""
MinML symbolic character references

Short ASCII spellings for common typographic and mathematical symbols,
written as references: [--] is an en dash, [-->] a right arrow. Consulted
after the HTML5 named entities, so HTML names always win.
"""

from typing import Dict

MINML_ENTITIES: Dict[str, str] = {
    # Matcher escapes
    "(<)": "(",
    "(>)": ")",
    "[<]": "[",
    "[>]": "]",
    "{<}": "{",
    "{>}": "}",

    # Punctuation
    "--": "–",     # en dash
    "---": "—",    # em dash

    # Basic mathematical symbols
    "+-": "±",
    "-+": "∓",
    "x": "×",
    "d": "÷",
    ".": "⋅",
    ":": "∶",
    "::": "∷",
    "2rt": "√",
    "3rt": "∛",
    "4rt": "∜",

    # Comparison
    "<=": "≤",
    ">=": "≥",
    "<>": "≶",
    "><": "≷",
    "<<": "≪",
    ">>": "≫",
    "<<<": "⋘",
    ">>>": "⋙",
    "~~": "≈",
    "~~=": "≊",
    "def=": "≝",

    # Negated comparison
    "/=": "≠",
    "/<": "≮",
    "/>": "≯",
    "/<=": "≰",
    "/>=": "≱",
    "/<>": "≸",
    "/><": "≹",
    "/~~": "≉",

    # Arrows
    "<--": "←",
    "-->": "→",
    "<->": "↔",
    "<==": "⇐",
    "==>": "⇒",
    "<=>": "⇔",
    "<---": "⟵",
    "--->": "⟶",
    "<-->": "⟷",
    "<===": "⟸",
    "===>": "⟹",
    "<==>": "⟺",

    # Arrows with stroke
    "/<--": "↚",
    "/-->": "↛",
    "/<->": "↮",
    "/<==": "⇍",
    "/==>": "⇏",
    "/<=>": "⇎",

    # Tacks
    "|--": "⊢",
    "--|": "⊣",
    "~|~": "⊤",
    "_|_": "⊥",
    "|-": "⊦",
    "|=": "⊧",
    "|==": "⊨",
    "||-": "⊩",
    "||=": "⊫",
    "/|--": "⊬",
    "/|==": "⊭",
    "/||-": "⊮",
    "/||=": "⊯",

    # Logic
    "-.": "¬",
    "^": "∧",
    "v": "∨",
    "v-": "⊻",
    "-^": "⊼",
    "-v": "⊽",

    # Vulgar fractions
    "1/4": "¼",
    "1/2": "½",
    "3/4": "¾",
    "1/7": "⅐",
    "1/9": "⅑",
    "1/10": "⅒",
    "1/3": "⅓",
    "2/3": "⅔",
    "1/5": "⅕",
    "2/5": "⅖",
    "3/5": "⅗",
    "4/5": "⅘",
    "1/6": "⅙",
    "5/6": "⅚",
    "1/8": "⅛",
    "3/8": "⅜",
    "5/8": "⅝",
    "7/8": "⅞",
}
