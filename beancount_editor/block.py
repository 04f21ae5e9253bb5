"""Apply amount alignment to a transaction or to a whole ledger."""

__copyright__ = "Copyright (C) 2026 slimslickner"
__license__ = "GNU GPLv2"

import logging
from typing import List, Optional, Sequence

from beancount_editor.align import align_line
from beancount_editor.classify import is_blank_line, is_dated_line, is_posting_line
from beancount_editor.config import EditorConfig
from beancount_editor.width import WidthFunction

logger = logging.getLogger(__name__)


def find_transaction_end(lines: Sequence[str], start: int) -> int:
    """Return the index of the last line of the entry starting at ``start``.

    The entry runs until the line before the next blank line or the next
    dated line.
    """
    end = start
    while end + 1 < len(lines):
        following = lines[end + 1]
        if is_blank_line(following) or is_dated_line(following):
            break
        end += 1
    return end


def format_block(
    lines: Sequence[str],
    start: int,
    end: Optional[int] = None,
    config: EditorConfig | None = None,
    host_width: Optional[WidthFunction] = None,
) -> List[str]:
    """Align the postings of one transaction.

    Args:
        lines: Buffer lines
        start: Index of the transaction header
        end: Index of the last line to format (inclusive). Found by scanning
            forward from ``start`` when omitted.
        config: Editor configuration (defaults to EditorConfig())
        host_width: Host editor width function

    Returns:
        A new list of lines. Lines after ``start`` up to ``end`` that are
        postings are aligned; everything else is copied unchanged. A
        ``start`` outside the buffer formats nothing.
    """
    config = config or EditorConfig()
    formatted = list(lines)
    if start < 0 or start >= len(formatted):
        logger.debug(f"Transaction start {start} outside buffer of {len(formatted)} lines")
        return formatted

    if end is None:
        end = find_transaction_end(formatted, start)
    end = min(end, len(formatted) - 1)

    changed = 0
    for index in range(start + 1, end + 1):
        if not is_posting_line(formatted[index]):
            continue
        result = align_line(formatted[index], config, host_width=host_width)
        if result.changed:
            formatted[index] = result.line
            changed += 1

    logger.debug(f"Formatted transaction at line {start}: {changed} postings changed")
    return formatted


def format_lines(
    lines: Sequence[str],
    config: EditorConfig | None = None,
    host_width: Optional[WidthFunction] = None,
) -> List[str]:
    """Align every posting line in a ledger, regardless of transaction bounds.

    Balance directives are not touched here; they are only aligned by direct
    line-level calls.
    """
    config = config or EditorConfig()
    formatted = list(lines)

    posting_count = 0
    changed = 0
    for index, line in enumerate(formatted):
        if not is_posting_line(line):
            continue
        posting_count += 1
        result = align_line(line, config, host_width=host_width)
        if result.changed:
            formatted[index] = result.line
            changed += 1

    if posting_count == 0:
        logger.warning("No posting lines found to format")
    else:
        logger.info(f"Aligned {changed} of {posting_count} posting lines")

    return formatted
