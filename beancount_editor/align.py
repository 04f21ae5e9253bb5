"""Align posting and balance amounts on a configured column.

HOW IT WORKS:
A line is split into a prefix and the trailing text after the account:

    posting:  "  Assets:Cash" + " " + "100.00 USD"
    balance:  "2024-01-01 balance Assets:Cash" + "  " + "100.00 USD ~ 0.01"

For balance lines the prefix is rebuilt with single spaces between the date,
the keyword and the account, even when no padding is needed.

If the leading amount has a decimal point, padding is chosen so the "." lands
on display column ``separator_column`` (1-based):

    padding = (separator_column - 1) - width(prefix) - (width(token) - 1)

Integer amounts have their first character placed ``separator_column``
columns after the start of the line instead:

    padding = separator_column - width(prefix)

The line is only rewritten when padding is positive. Lines that are already
aligned, that would need negative padding, or that are not postings or
balance assertions come back unchanged.

CURSOR:
When a cursor column is given and it sits at or past the end of the
original prefix, it is shifted by the change in line length so it stays on
the same character.
"""

__copyright__ = "Copyright (C) 2026 slimslickner"
__license__ = "GNU GPLv2"

import logging
import re
from typing import NamedTuple, Optional

from beancount_editor.amount import locate_decimal
from beancount_editor.classify import ACCOUNT, DATE, LineKind, classify_line
from beancount_editor.config import EditorConfig
from beancount_editor.width import WidthFunction, display_width

logger = logging.getLogger(__name__)

POSTING_PARTS_RE = re.compile(rf"^(\s+)({ACCOUNT})(\s+)(\S.*)$")
BALANCE_PARTS_RE = re.compile(rf"^({DATE})\s+(balance)\s+({ACCOUNT})(\s+)(\S.*)$")


class AlignResult(NamedTuple):
    line: str
    cursor_col: Optional[int]
    changed: bool


class SplitLine(NamedTuple):
    """A line cut at the whitespace following the account.

    ``prefix`` is what the amount is measured from (normalized for balance
    lines) and ``original_prefix_len`` is where that prefix ended in the
    unmodified line.
    """

    prefix: str
    separator: str
    trailing: str
    original_prefix_len: int


def split_line(line: str) -> Optional[SplitLine]:
    """Split a posting or balance line, or return None for any other line."""
    kind = classify_line(line)

    if kind is LineKind.POSTING:
        match = POSTING_PARTS_RE.match(line)
        if match is None:
            return None
        indent, account, separator, trailing = match.groups()
        return SplitLine(indent + account, separator, trailing, match.end(2))

    if kind is LineKind.BALANCE:
        match = BALANCE_PARTS_RE.match(line)
        if match is None:
            return None
        date, keyword, account, separator, trailing = match.groups()
        return SplitLine(f"{date} {keyword} {account}", separator, trailing, match.end(3))

    return None


def needed_padding(
    prefix: str,
    trailing: str,
    config: EditorConfig,
    host_width: Optional[WidthFunction] = None,
) -> int:
    """Return the number of spaces to put between ``prefix`` and ``trailing``.

    The result may be zero or negative, meaning the amount is already at or
    beyond the target column.
    """
    prefix_width = display_width(prefix, config.fixed_cjk_width, host_width)

    decimal = locate_decimal(trailing)
    if decimal is None:
        return config.separator_column - prefix_width

    before_point = trailing[: decimal.start_offset] + decimal.token
    before_point_width = display_width(before_point, config.fixed_cjk_width, host_width) - 1
    return (config.separator_column - 1) - prefix_width - before_point_width


def align_line(
    line: str,
    config: EditorConfig,
    cursor_col: Optional[int] = None,
    host_width: Optional[WidthFunction] = None,
) -> AlignResult:
    """Align the amount of a single posting or balance line.

    Args:
        line: The line text
        config: Editor configuration (separator column, CJK policy)
        cursor_col: Optional 0-based cursor column on this line
        host_width: Host editor width function for non-fixed CJK width

    Returns:
        AlignResult with the new line, the adjusted cursor column and whether
        the text changed
    """
    parts = split_line(line)
    if parts is None:
        return AlignResult(line, cursor_col, False)

    padding = needed_padding(parts.prefix, parts.trailing, config, host_width)
    if padding > 0:
        new_line = parts.prefix + " " * padding + parts.trailing
    else:
        new_line = parts.prefix + parts.separator + parts.trailing

    if new_line == line:
        return AlignResult(line, cursor_col, False)

    new_cursor = cursor_col
    if cursor_col is not None and cursor_col >= parts.original_prefix_len:
        new_cursor = max(0, cursor_col + len(new_line) - len(line))

    logger.debug(f"Aligned {parts.prefix.strip()!r} with padding {padding}")
    return AlignResult(new_line, new_cursor, True)
