"""Text buffers the editing operations work on.

Host editors adapt their own buffer objects to ``TextBuffer``. ``LineBuffer``
is a plain in-memory implementation used by the command-line front end and
in tests.
"""

__copyright__ = "Copyright (C) 2026 slimslickner"
__license__ = "GNU GPLv2"

import itertools
from dataclasses import dataclass, field
from typing import Hashable, List, Protocol, Sequence, Tuple, runtime_checkable

_buffer_ids = itertools.count(1)


@runtime_checkable
class TextBuffer(Protocol):
    """What the editing operations need from a host buffer.

    Line numbers and cursor columns are 0-based. ``revision`` must increase on
    every content change and is only ever read.
    """

    buffer_id: Hashable
    expandtab: bool
    shiftwidth: int

    @property
    def revision(self) -> int: ...

    def line_count(self) -> int: ...

    def get_line(self, line_number: int) -> str: ...

    def set_line(self, line_number: int, text: str) -> None: ...

    def get_cursor(self) -> Tuple[int, int]: ...

    def set_cursor(self, line_number: int, col: int) -> None: ...


@dataclass
class LineBuffer:
    """A list of lines with a cursor and a revision counter."""

    _lines: List[str] = field(default_factory=lambda: [""])
    buffer_id: Hashable = field(default_factory=lambda: next(_buffer_ids))
    expandtab: bool = True
    shiftwidth: int = 2
    _revision: int = 0
    _cursor: Tuple[int, int] = (0, 0)

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "LineBuffer":
        lines = text.splitlines()
        if not lines:
            lines = [""]
        return cls(_lines=lines, **kwargs)

    @classmethod
    def from_lines(cls, lines: Sequence[str], **kwargs) -> "LineBuffer":
        return cls(_lines=list(lines) or [""], **kwargs)

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(self._lines)

    def text(self) -> str:
        return "\n".join(self._lines) + "\n"

    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, line_number: int) -> str:
        return self._lines[line_number]

    def set_line(self, line_number: int, text: str) -> None:
        if self._lines[line_number] == text:
            return
        self._lines[line_number] = text
        self._revision += 1

    def append_line(self, text: str) -> None:
        self._lines.append(text)
        self._revision += 1

    def get_cursor(self) -> Tuple[int, int]:
        return self._cursor

    def set_cursor(self, line_number: int, col: int) -> None:
        self._cursor = (line_number, col)
