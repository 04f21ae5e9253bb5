"""Tests for fold levels and the per-buffer fold cache."""

import pytest

from beancount_editor.buffer import LineBuffer
from beancount_editor.fold import (
    FoldCache,
    FoldInfo,
    FoldLevel,
    MarkerKind,
    compute_fold_levels,
    scan_markers,
    structural_fold,
)


def foldexprs(lines):
    return [fold.to_foldexpr() for fold in compute_fold_levels(lines)]


class TestScanMarkers:
    def test_numbered_open_and_plain_close(self):
        lines = ["section {{{2", "  text", "}}}", "after"]

        assert scan_markers(lines) == [
            FoldInfo(MarkerKind.OPEN, 2),
            FoldInfo(MarkerKind.NONE, 2),
            FoldInfo(MarkerKind.CLOSE, 2),
            FoldInfo(MarkerKind.NONE, 1),
        ]

    def test_nested_unnumbered_markers(self):
        lines = ["{{{", "{{{", "x", "}}}", "}}}", "y"]

        assert [info.level for info in scan_markers(lines)] == [1, 2, 2, 2, 1, 0]

    def test_numbered_close(self):
        lines = ["{{{1", "{{{2", "}}}2", "x"]

        assert scan_markers(lines)[-1] == FoldInfo(MarkerKind.NONE, 1)

    def test_open_then_close_on_one_line(self):
        lines = ["{{{ one-liner }}}", "next"]

        assert scan_markers(lines) == [
            FoldInfo(MarkerKind.NONE, 1),
            FoldInfo(MarkerKind.NONE, 0),
        ]

    def test_close_then_open_on_one_line(self):
        lines = ["{{{", "}}} switch {{{", "next"]

        assert scan_markers(lines) == [
            FoldInfo(MarkerKind.OPEN, 1),
            FoldInfo(MarkerKind.NONE, 1),
            FoldInfo(MarkerKind.NONE, 1),
        ]

    @pytest.mark.parametrize(
        "lines",
        [
            ["}}}", "}}}", "x"],
            ["}}}0", "x"],
            ["{{{", "}}}0", "}}}", "x"],
        ],
    )
    def test_levels_never_negative(self, lines):
        assert all(info.level >= 0 for info in scan_markers(lines))
        assert all(fold.level >= 0 for fold in compute_fold_levels(lines))


class TestStructuralRules:
    def test_transaction_header_opens(self):
        assert structural_fold('2024-01-01 * "x"', 0) == FoldLevel(1, open_tag=True)
        assert structural_fold('2024-01-01 ! "x"', 2) == FoldLevel(3, open_tag=True)

    @pytest.mark.parametrize(
        "line",
        [
            "2024-01-01 open Assets:Cash",
            "2024-01-01 open",
            "2024-01-01 close Assets:Cash",
            "2024-01-01 balance Assets:Cash 1 USD",
            "2024-01-01 pad Assets:Cash Equity:Opening",
            '2024-01-01 document Assets:Cash "a.pdf"',
            '2024-01-01 note Assets:Cash "hello"',
            '2024-01-01 event "location" "Home"',
            '2024-01-01 query "q" "SELECT 1"',
            '2024-01-01 custom "budget" 1 USD',
            "2024-01-01 price EUR 1.10 USD",
            "2024-01-01 commodity EUR",
            '2024-01-01 txn "x"',
        ],
    )
    def test_directives_open(self, line):
        assert structural_fold(line, 0) == FoldLevel(1, open_tag=True)

    def test_keyword_prefix_is_not_a_directive(self):
        assert structural_fold("2024-01-01 opening", 0) == FoldLevel(0, inherit=True)

    @pytest.mark.parametrize(
        "line", ['plugin "beancount.plugins.auto"', 'option "title" "x"', 'include "2024.bean"']
    )
    def test_configuration_lines_open(self, line):
        assert structural_fold(line, 0) == FoldLevel(1, open_tag=True)

    def test_blank_line_reports_plain_level(self):
        assert structural_fold("", 2) == FoldLevel(2)
        assert structural_fold("   ", 0).to_foldexpr() == "0"

    def test_indented_and_other_lines_continue(self):
        assert structural_fold("  Assets:Cash 1 USD", 0).inherit
        assert structural_fold("; comment", 0).inherit


class TestComputeFoldLevels:
    def test_transaction_then_directive(self):
        lines = ['2024-01-01 * "x"', "  Assets:Cash 1 USD", "2024-01-02 open Assets:Cash"]

        assert compute_fold_levels(lines) == [
            FoldLevel(1, open_tag=True),
            FoldLevel(1, inherit=True),
            FoldLevel(1, open_tag=True),
        ]
        assert foldexprs(lines) == [">1", "=", ">1"]

    def test_marker_section(self):
        lines = ["section {{{2", "  text", "}}}", "after"]

        assert foldexprs(lines) == [">2", "=", "<2", "="]
        assert compute_fold_levels(lines)[3].level == 1

    def test_directives_nest_under_markers_only(self):
        lines = ["* Banking {{{1", '2024-01-01 * "x"', "  Assets:Cash 1 USD", "", "}}}1", '2024-02-01 * "y"']

        assert foldexprs(lines) == [">1", ">2", "=", "1", "<1", ">1"]

    def test_directives_do_not_nest_in_each_other(self):
        lines = ['option "title" "x"', "2024-01-01 open Assets:Cash", '2024-01-02 * "x"']

        assert foldexprs(lines) == [">1", ">1", ">1"]

    def test_line_with_both_markers_uses_structural_rules(self):
        lines = ["{{{", "}}} 2024-01-01 open Assets:Cash {{{"]

        assert foldexprs(lines) == [">1", "="]

    def test_empty_buffer(self):
        assert compute_fold_levels([]) == []


class TestFoldCache:
    LINES = ['2024-01-01 * "x"', "  Assets:Cash 1 USD", "", "2024-01-02 open Assets:Cash"]

    def test_same_revision_returns_cached_result(self):
        cache = FoldCache()
        buffer = LineBuffer.from_lines(self.LINES)

        first = cache.get(buffer)
        second = cache.get(buffer)

        assert first is second
        assert first.revision == buffer.revision

    def test_revision_bump_recomputes(self):
        cache = FoldCache()
        buffer = LineBuffer.from_lines(self.LINES)
        before = cache.fold_level(buffer, 3)

        buffer.set_line(3, "  Expenses:Food 1 USD")
        after = cache.fold_level(buffer, 3)

        assert before == FoldLevel(1, open_tag=True)
        assert after == FoldLevel(0, inherit=True)

    def test_unchanged_revision_is_not_rescanned(self):
        cache = FoldCache()
        buffer = LineBuffer.from_lines(self.LINES)
        cache.get(buffer)

        # content swapped behind the revision counter's back
        buffer._lines[0] = "plain"

        assert cache.fold_level(buffer, 0) == FoldLevel(1, open_tag=True)

    def test_out_of_range_line(self):
        cache = FoldCache()
        buffer = LineBuffer.from_lines(self.LINES)

        assert cache.fold_level(buffer, 99) == FoldLevel(0)
        assert cache.fold_level(buffer, -1) == FoldLevel(0)

    def test_buffers_are_cached_separately(self):
        cache = FoldCache()
        first = LineBuffer.from_lines(self.LINES)
        second = LineBuffer.from_lines(["{{{3", "x"])

        assert cache.fold_level(first, 0).to_foldexpr() == ">1"
        assert cache.fold_level(second, 0).to_foldexpr() == ">3"
        assert len(cache) == 2

    def test_discard(self):
        cache = FoldCache()
        buffer = LineBuffer.from_lines(self.LINES)
        cache.get(buffer)

        cache.discard(buffer.buffer_id)
        cache.discard("never-seen")

        assert buffer.buffer_id not in cache
