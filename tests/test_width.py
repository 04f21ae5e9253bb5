"""Tests for display width calculation."""

from beancount_editor.width import display_width, fixed_cjk_width, is_wide_codepoint, terminal_width


class TestFixedCjkWidth:
    """Tests for the fixed two-column CJK policy."""

    def test_ascii_is_character_count(self):
        assert fixed_cjk_width("  Assets:Cash 100.00 USD") == 24

    def test_cjk_ideographs_count_double(self):
        assert fixed_cjk_width("食費") == 4

    def test_kana_and_hangul_count_double(self):
        assert fixed_cjk_width("カナ") == 4
        assert fixed_cjk_width("ひ") == 2
        assert fixed_cjk_width("가") == 2

    def test_extension_ranges(self):
        assert fixed_cjk_width("㐀") == 2
        assert fixed_cjk_width("\U00020000") == 2

    def test_other_wide_characters_count_single(self):
        """Fullwidth Latin is outside the fixed ranges."""
        assert fixed_cjk_width("Ａ") == 1

    def test_range_boundaries(self):
        assert is_wide_codepoint(0x4E00)
        assert is_wide_codepoint(0x9FFF)
        assert not is_wide_codepoint(0x4DC0)
        assert not is_wide_codepoint(0xD7B0)

    def test_empty(self):
        assert fixed_cjk_width("") == 0


class TestTerminalWidth:
    """Tests for the default host width."""

    def test_ascii(self):
        assert terminal_width("Assets:Cash") == 11

    def test_fullwidth_counts_double(self):
        assert terminal_width("Ａ") == 2

    def test_combining_marks_are_zero_width(self):
        assert terminal_width("é") == 1


class TestDisplayWidth:
    """Tests for policy selection."""

    def test_fixed_policy(self):
        assert display_width("Ａ", fixed_cjk=True) == 1

    def test_terminal_policy_by_default(self):
        assert display_width("Ａ") == 2

    def test_host_width_used_when_not_fixed(self):
        assert display_width("\tx", host_width=lambda s: len(s.expandtabs(4))) == 5

    def test_host_width_ignored_when_fixed(self):
        assert display_width("abc", fixed_cjk=True, host_width=lambda s: 99) == 3
