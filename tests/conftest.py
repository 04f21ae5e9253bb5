"""Shared fixtures for beancount_editor tests.

``load_config`` looks for beancount_editor.yaml in the current directory, so
every test runs from its own temporary directory to keep a stray config file
from changing results.
"""

from pathlib import Path

import pytest

from beancount_editor.buffer import LineBuffer
from beancount_editor.config import EditorConfig


@pytest.fixture(autouse=True)
def _isolate_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config() -> EditorConfig:
    """Configuration aligning decimal points on column 60."""
    return EditorConfig(separator_column=60)


@pytest.fixture
def ledger_lines() -> list[str]:
    return [
        'option "title" "Household"',
        "",
        "2024-01-01 open Assets:Cash",
        "",
        '2024-01-05 * "Grocer" "Weekly shop"',
        "  Expenses:Food 42.50 USD",
        "  Assets:Cash -42.50 USD",
        "",
        '2024-01-06 * "Bakery"',
        "  Expenses:Food 3 USD",
        "  Assets:Cash",
        "2024-01-31 balance Assets:Cash   -45.50 USD",
    ]


@pytest.fixture
def make_buffer():
    """Build a LineBuffer from a list of lines, optionally placing the cursor."""

    def _make(lines, cursor=(0, 0), **kwargs) -> LineBuffer:
        buffer = LineBuffer.from_lines(lines, **kwargs)
        buffer.set_cursor(*cursor)
        return buffer

    return _make
