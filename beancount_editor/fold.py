"""Fold levels for ledger buffers.

WHAT IT DOES:
- Tracks explicit fold markers ``{{{N`` / ``}}}N`` (N optional) through a
  single pass over the buffer
- Opens a fold at every transaction, dated directive and top-level
  configuration line (plugin, option, include)
- Keeps blank, indented and other lines in the surrounding fold
- Caches the pass per buffer, keyed on the buffer's revision counter

MARKERS:
An open marker sets the level to N, or one deeper without N. A close marker
sets it to N - 1, or one shallower without N, never below 0. A line that
carries only an open marker reports the level it opens; a line that carries
only a close marker reports the level it closes. When a line has both, they
apply in the order they appear and the line reports the level after an
opening marker that comes first, or the level before both when the close
marker comes first. Such a line has no marker tag and goes through the
structural rules like any other line.

STRUCTURAL RULES:
Checked in the order of ``STRUCTURAL_RULES``. They tag a line but never
change the level seen by later lines, so directives do not nest inside each
other; only markers do that.

FOLD EXPRESSIONS:
``FoldLevel.to_foldexpr()`` renders the host convention: ``>N`` opens a
fold at level N, ``<N`` closes one, ``N`` is a plain level and ``=`` keeps
the previous line's level.
"""

__copyright__ = "Copyright (C) 2026 slimslickner"
__license__ = "GNU GPLv2"

import enum
import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, NamedTuple, Sequence, Tuple

from beancount_editor.buffer import TextBuffer
from beancount_editor.classify import DATE, is_blank_line, is_transaction_header

logger = logging.getLogger(__name__)

OPEN_MARKER_RE = re.compile(r"\{\{\{(\d*)")
CLOSE_MARKER_RE = re.compile(r"\}\}\}(\d*)")

DIRECTIVE_KEYWORDS = (
    "open",
    "close",
    "balance",
    "pad",
    "document",
    "note",
    "event",
    "query",
    "custom",
    "price",
    "commodity",
    "txn",
)
DIRECTIVE_RE = re.compile(rf"^{DATE}\s+(?:{'|'.join(DIRECTIVE_KEYWORDS)})(?:\s|$)")
CONFIG_DIRECTIVE_RE = re.compile(r"^(?:plugin|option|include)")
INDENTED_RE = re.compile(r"^\s+")


class MarkerKind(enum.Enum):
    OPEN = "open"
    CLOSE = "close"
    NONE = "none"


class FoldInfo(NamedTuple):
    """Marker state recorded for one line during the marker pass."""

    marker: MarkerKind
    level: int


@dataclass(frozen=True)
class FoldLevel:
    """Answer to a fold query for one line.

    ``level`` is the fold depth of the line. For lines that continue the
    previous line's fold (``inherit``) it is the depth carried over from the
    line above.
    """

    level: int
    open_tag: bool = False
    close_tag: bool = False
    inherit: bool = False

    def to_foldexpr(self) -> str:
        if self.open_tag:
            return f">{self.level}"
        if self.close_tag:
            return f"<{self.level}"
        if self.inherit:
            return "="
        return str(self.level)


def _apply_open_marker(current_level: int, digits: str) -> int:
    if digits:
        return int(digits)
    return current_level + 1


def _apply_close_marker(current_level: int, digits: str) -> int:
    if digits:
        return max(0, int(digits) - 1)
    return max(0, current_level - 1)


def scan_markers(lines: Sequence[str]) -> List[FoldInfo]:
    """Run the marker pass over all lines."""
    levels: list[FoldInfo] = []
    current_level = 0

    for line in lines:
        open_match = OPEN_MARKER_RE.search(line)
        close_match = CLOSE_MARKER_RE.search(line)

        if open_match and close_match:
            if open_match.start() < close_match.start():
                current_level = _apply_open_marker(current_level, open_match.group(1))
                levels.append(FoldInfo(MarkerKind.NONE, current_level))
                current_level = _apply_close_marker(current_level, close_match.group(1))
            else:
                levels.append(FoldInfo(MarkerKind.NONE, current_level))
                current_level = _apply_close_marker(current_level, close_match.group(1))
                current_level = _apply_open_marker(current_level, open_match.group(1))
        elif open_match:
            current_level = _apply_open_marker(current_level, open_match.group(1))
            levels.append(FoldInfo(MarkerKind.OPEN, current_level))
        elif close_match:
            levels.append(FoldInfo(MarkerKind.CLOSE, current_level))
            current_level = _apply_close_marker(current_level, close_match.group(1))
        else:
            levels.append(FoldInfo(MarkerKind.NONE, current_level))

    return levels


def _open_fold(base: int) -> FoldLevel:
    return FoldLevel(base + 1, open_tag=True)


def _plain_level(base: int) -> FoldLevel:
    return FoldLevel(base)


def _continue_fold(base: int) -> FoldLevel:
    return FoldLevel(base, inherit=True)


# (predicate, action) in priority order; the first matching predicate wins.
STRUCTURAL_RULES: Tuple[Tuple[Callable[[str], object], Callable[[int], FoldLevel]], ...] = (
    (is_transaction_header, _open_fold),
    (DIRECTIVE_RE.match, _open_fold),
    (CONFIG_DIRECTIVE_RE.match, _open_fold),
    (is_blank_line, _plain_level),
    (INDENTED_RE.match, _continue_fold),
)


def structural_fold(line: str, base: int) -> FoldLevel:
    """Apply the structural rules to a line without a marker tag."""
    for predicate, action in STRUCTURAL_RULES:
        if predicate(line):
            return action(base)
    return _continue_fold(base)


def compute_fold_levels(
    lines: Sequence[str],
    levels: Sequence[FoldInfo] | None = None,
) -> List[FoldLevel]:
    """Compute the fold answer for every line of a buffer.

    ``levels`` is the output of :func:`scan_markers` for the same lines, when
    the caller already has it.
    """
    if levels is None:
        levels = scan_markers(lines)

    results: list[FoldLevel] = []
    carried = 0

    for line, info in zip(lines, levels):
        if info.marker is MarkerKind.OPEN:
            result = FoldLevel(info.level, open_tag=True)
        elif info.marker is MarkerKind.CLOSE:
            result = FoldLevel(info.level, close_tag=True)
        else:
            result = structural_fold(line, info.level)
            if result.inherit:
                result = FoldLevel(carried, inherit=True)

        results.append(result)
        carried = max(0, result.level - 1) if result.close_tag else result.level

    return results


@dataclass(frozen=True)
class CachedFolds:
    revision: int
    levels: Tuple[FoldInfo, ...]
    results: Tuple[FoldLevel, ...]


class FoldCache:
    """Per-buffer fold results, recomputed whenever the revision changes.

    One cache is owned by whoever manages buffer lifetimes; call
    :meth:`discard` when a buffer is closed.
    """

    def __init__(self):
        self._entries: Dict[Hashable, CachedFolds] = {}

    def __contains__(self, buffer_id: Hashable) -> bool:
        return buffer_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, buffer: TextBuffer) -> CachedFolds:
        revision = buffer.revision
        cached = self._entries.get(buffer.buffer_id)
        if cached is not None and cached.revision == revision:
            return cached

        lines = [buffer.get_line(n) for n in range(buffer.line_count())]
        levels = scan_markers(lines)
        cached = CachedFolds(
            revision=revision,
            levels=tuple(levels),
            results=tuple(compute_fold_levels(lines, levels)),
        )
        self._entries[buffer.buffer_id] = cached
        logger.debug(
            f"Recomputed folds for buffer {buffer.buffer_id} at revision {revision} "
            f"({len(lines)} lines)"
        )
        return cached

    def fold_level(self, buffer: TextBuffer, line_number: int) -> FoldLevel:
        """Return the fold answer for one line; out-of-range lines are level 0."""
        results = self.get(buffer).results
        if 0 <= line_number < len(results):
            return results[line_number]
        return FoldLevel(0)

    def discard(self, buffer_id: Hashable) -> None:
        self._entries.pop(buffer_id, None)
