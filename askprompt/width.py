"""Display width of characters and strings in a terminal."""

import unicodedata

_PRINTABLE_CATEGORY_CLASSES = frozenset("LMNPS")


def rune_width(char: str) -> int:
    """Return the number of terminal columns ``char`` occupies."""
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2
    if char == " " or unicodedata.category(char)[0] in _PRINTABLE_CATEGORY_CLASSES:
        return 1
    return 0


def _is_ansi_marker(char: str) -> bool:
    return char == "\x1b"


def _is_ansi_terminator(char: str) -> bool:
    code = ord(char)
    return 0x40 <= code <= 0x5A or code == 0x5E or 0x60 <= code <= 0x7E


def string_width(text: str) -> int:
    """Return the visible width of ``text``, ignoring ANSI escape sequences."""
    width = 0
    in_escape = False
    for char in text:
        if in_escape or _is_ansi_marker(char):
            in_escape = not _is_ansi_terminator(char)
        else:
            width += rune_width(char)
    return width