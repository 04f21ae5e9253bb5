"""Recognize the shape of a single ledger line.

Patterns are compiled once at import. ``classify_line`` checks them in a fixed
priority order and returns a single ``LineKind``:

1. transaction header   ``2024-01-01 * "Payee"`` (flag ``*`` or ``!``)
2. balance assertion    ``2024-01-01 balance Assets:Cash 100.00 USD``
3. posting              ``  Assets:Cash 100.00 USD`` (indented account)
4. blank                whitespace only
5. other                anything else
"""

__copyright__ = "Copyright (C) 2026 slimslickner"
__license__ = "GNU GPLv2"

import enum
import re

DATE = r"\d{4}-\d{2}-\d{2}"
ACCOUNT = r"[A-Z][A-Za-z0-9:_-]+"

TRANSACTION_HEADER_RE = re.compile(rf"^{DATE}\s+[*!]")
BALANCE_RE = re.compile(rf"^{DATE}\s+balance\s+{ACCOUNT}")
POSTING_RE = re.compile(rf"^\s+{ACCOUNT}")
DATED_RE = re.compile(rf"^{DATE}")
BLANK_RE = re.compile(r"^\s*$")


class LineKind(enum.Enum):
    TRANSACTION_HEADER = "transaction_header"
    BALANCE = "balance"
    POSTING = "posting"
    BLANK = "blank"
    OTHER = "other"


def is_posting_line(line) -> bool:
    """Return True for an indented line starting with an account name.

    Anything that is not a string (e.g. a missing line) is not a posting.
    """
    if not isinstance(line, str):
        return False
    return POSTING_RE.match(line) is not None


def is_balance_line(line) -> bool:
    """Return True for a dated ``balance`` directive naming an account."""
    if not isinstance(line, str):
        return False
    return BALANCE_RE.match(line) is not None


def is_transaction_header(line) -> bool:
    """Return True for a dated line flagged ``*`` or ``!``."""
    if not isinstance(line, str):
        return False
    return TRANSACTION_HEADER_RE.match(line) is not None


def is_dated_line(line: str) -> bool:
    return DATED_RE.match(line) is not None


def is_blank_line(line: str) -> bool:
    return BLANK_RE.match(line) is not None


_PRIORITY = (
    (is_transaction_header, LineKind.TRANSACTION_HEADER),
    (is_balance_line, LineKind.BALANCE),
    (is_posting_line, LineKind.POSTING),
    (is_blank_line, LineKind.BLANK),
)


def classify_line(line: str) -> LineKind:
    """Classify a line by the first matching rule in priority order."""
    if not isinstance(line, str):
        return LineKind.OTHER
    for predicate, kind in _PRIORITY:
        if predicate(line):
            return kind
    return LineKind.OTHER
