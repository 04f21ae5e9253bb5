"""Display width of ledger text.

Alignment is computed in screen columns, not characters. Two policies exist:

- fixed CJK width: code points in the wide-script ranges below count as 2
  columns and everything else as 1, regardless of how the terminal renders.
- host width: whatever the host editor reports. Hosts pass their own
  measuring function; when none is given, the East Asian Width property from
  ``unicodedata`` is used (combining marks 0, wide/fullwidth 2, others 1).
"""

__copyright__ = "Copyright (C) 2026 slimslickner"
__license__ = "GNU GPLv2"

import unicodedata
from typing import Callable, Optional

WidthFunction = Callable[[str], int]

# (first, last) code point, inclusive
WIDE_RANGES = (
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0x3400, 0x4DBF),  # CJK Extension A
    (0x20000, 0x2A6DF),  # CJK Extension B
    (0x3040, 0x309F),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
    (0xAC00, 0xD7AF),  # Hangul Syllables
)


def is_wide_codepoint(codepoint: int) -> bool:
    """Return True if the code point falls in one of the fixed wide ranges."""
    return any(first <= codepoint <= last for first, last in WIDE_RANGES)


def fixed_cjk_width(text: str) -> int:
    """Width with CJK, kana and hangul counted as two columns."""
    return sum(2 if is_wide_codepoint(ord(ch)) else 1 for ch in text)


def terminal_width(text: str) -> int:
    """Approximate terminal cell width using the East Asian Width property."""
    width = 0
    for ch in text:
        if unicodedata.combining(ch):
            continue
        if unicodedata.east_asian_width(ch) in ("W", "F"):
            width += 2
        else:
            width += 1
    return width


def display_width(
    text: str,
    fixed_cjk: bool = False,
    host_width: Optional[WidthFunction] = None,
) -> int:
    """Return the rendered column width of ``text``.

    Args:
        text: Text to measure
        fixed_cjk: Count wide-script code points as 2 columns regardless of
            the terminal
        host_width: Host editor's width function, used when ``fixed_cjk`` is
            off (defaults to :func:`terminal_width`)

    Returns:
        Width in display columns
    """
    if fixed_cjk:
        return fixed_cjk_width(text)
    if host_width is not None:
        return host_width(text)
    return terminal_width(text)
