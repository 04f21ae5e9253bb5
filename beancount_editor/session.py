"""Editor event handlers for beancount buffers.

An ``EditorSession`` is created once per editor instance. The host calls its
handlers from its own event hooks:

    character typed      -> on_char_inserted(buffer, char)
    text changed         -> on_text_changed(buffer)
    before writing       -> on_save(buffer)
    fold query per line  -> fold_level(buffer, line_number)
    buffer closed        -> buffer_closed(buffer_id)

Handlers never raise for lines outside the buffer or lines that do not parse;
they leave the buffer as it was.
"""

__copyright__ = "Copyright (C) 2026 slimslickner"
__license__ = "GNU GPLv2"

import logging
from typing import Hashable, Optional

from beancount_editor.align import align_line
from beancount_editor.block import format_block, format_lines
from beancount_editor.buffer import TextBuffer
from beancount_editor.classify import is_posting_line, is_transaction_header
from beancount_editor.config import EditorConfig
from beancount_editor.fold import FoldCache, FoldLevel
from beancount_editor.width import WidthFunction

logger = logging.getLogger(__name__)


def indent_unit(expandtab: bool, shiftwidth: int) -> str:
    """One level of posting indentation for the buffer's tab settings."""
    if expandtab:
        return " " * shiftwidth
    return "\t"


class EditorSession:
    """Run alignment, formatting and folding against host buffers."""

    def __init__(
        self,
        config: EditorConfig | None = None,
        fold_cache: FoldCache | None = None,
        host_width: Optional[WidthFunction] = None,
    ):
        self.config = config or EditorConfig()
        self.fold_cache = fold_cache if fold_cache is not None else FoldCache()
        self.host_width = host_width

    def _lines(self, buffer: TextBuffer) -> list[str]:
        return [buffer.get_line(n) for n in range(buffer.line_count())]

    def _write_back(self, buffer: TextBuffer, original: list[str], formatted: list[str]) -> int:
        changed = 0
        for line_number, (old, new) in enumerate(zip(original, formatted)):
            if old != new:
                buffer.set_line(line_number, new)
                changed += 1
        return changed

    def align_line_at(self, buffer: TextBuffer, line_number: int) -> bool:
        """Align one posting or balance line, keeping the cursor in place.

        Returns:
            True if the line was rewritten
        """
        if not 0 <= line_number < buffer.line_count():
            logger.debug(f"Line {line_number} outside buffer {buffer.buffer_id}")
            return False

        cursor_line, cursor_col = buffer.get_cursor()
        on_cursor_line = cursor_line == line_number

        result = align_line(
            buffer.get_line(line_number),
            self.config,
            cursor_col=cursor_col if on_cursor_line else None,
            host_width=self.host_width,
        )
        if not result.changed:
            return False

        buffer.set_line(line_number, result.line)
        if on_cursor_line and result.cursor_col != cursor_col:
            buffer.set_cursor(line_number, result.cursor_col)
        return True

    def align_current_line(self, buffer: TextBuffer) -> bool:
        """Align the cursor line if it is a posting with a "." at or after the cursor."""
        line_number, col = buffer.get_cursor()
        if not 0 <= line_number < buffer.line_count():
            return False

        line = buffer.get_line(line_number)
        if not is_posting_line(line) or line.find(".", max(0, col - 1)) < 0:
            return False
        return self.align_line_at(buffer, line_number)

    def on_char_inserted(self, buffer: TextBuffer, char: str) -> bool:
        """Align the current posting right after a decimal point is typed."""
        if char != "." or not self.config.instant_alignment:
            return False
        return self.align_current_line(buffer)

    def on_text_changed(self, buffer: TextBuffer) -> bool:
        """Indent an empty line that directly follows a transaction header."""
        if not self.config.auto_indent:
            return False

        line_number, _ = buffer.get_cursor()
        if not 1 <= line_number < buffer.line_count():
            return False
        if buffer.get_line(line_number) != "":
            return False
        if not is_transaction_header(buffer.get_line(line_number - 1)):
            return False

        indent = indent_unit(buffer.expandtab, buffer.shiftwidth)
        buffer.set_line(line_number, indent)
        buffer.set_cursor(line_number, len(indent))
        return True

    def on_save(self, buffer: TextBuffer) -> int:
        """Format the whole buffer before it is written, when enabled."""
        if not self.config.auto_format_on_save:
            return 0
        return self.format_buffer(buffer)

    def format_transaction(
        self,
        buffer: TextBuffer,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> int:
        """Align the postings of the transaction starting at ``start``.

        Args:
            buffer: Buffer to edit
            start: Header line (defaults to the cursor line)
            end: Last line of the transaction (found automatically if omitted)

        Returns:
            Number of lines changed
        """
        if start is None:
            start, _ = buffer.get_cursor()

        original = self._lines(buffer)
        formatted = format_block(original, start, end, self.config, self.host_width)
        return self._write_back(buffer, original, formatted)

    def format_buffer(self, buffer: TextBuffer) -> int:
        """Align every posting line in the buffer; returns lines changed."""
        original = self._lines(buffer)
        formatted = format_lines(original, self.config, self.host_width)
        changed = self._write_back(buffer, original, formatted)
        logger.info(f"Formatted buffer {buffer.buffer_id}: {changed} lines changed")
        return changed

    def fold_level(self, buffer: TextBuffer, line_number: int) -> FoldLevel:
        return self.fold_cache.fold_level(buffer, line_number)

    def buffer_closed(self, buffer_id: Hashable) -> None:
        self.fold_cache.discard(buffer_id)
