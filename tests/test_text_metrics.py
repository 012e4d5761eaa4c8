"""Tests for ANSI-aware width and row computations."""

import pytest

from spinline.utils.colors import colorize
from spinline.utils.text_metrics import rows_occupied, strip_ansi, visible_width


class TestStripAnsi:
    """Test removal of escape sequences."""

    def test_removes_sgr_sequences(self):
        assert strip_ansi("\x1b[31mred\x1b[39m") == "red"

    def test_removes_osc_hyperlinks(self):
        link = "\x1b]8;;https://example.com\x07link\x1b]8;;\x07"
        assert strip_ansi(link) == "link"

    def test_keeps_newlines(self):
        assert strip_ansi("a\x1b[1mb\nc") == "ab\nc"

    def test_empty_input(self):
        assert strip_ansi("") == ""


class TestVisibleWidth:
    """Test column width computation."""

    def test_plain_text(self):
        assert visible_width("hello") == 5

    def test_escape_sequences_are_zero_width(self):
        assert visible_width(colorize("hello", "magenta")) == 5
        assert visible_width("\x1b[?2026h\x1b[2K") == 0

    def test_wide_characters_take_two_columns(self):
        assert visible_width("日本") == 4

    def test_combining_marks_take_no_columns(self):
        assert visible_width("e\u0301") == 1

    def test_spinner_glyphs_are_single_width(self):
        assert visible_width("⠋ ✔ ✖ ⚠") == 7


class TestRowsOccupied:
    """Test row counts for wrapped and multi-line text."""

    @pytest.mark.parametrize("length,expected", [
        (1, 1),
        (77, 1),
        (78, 1),
        (79, 2),
        (158, 2),
        (159, 3),
    ])
    def test_glyph_and_text_wrap_at_terminal_width(self, length, expected):
        """A 1-column glyph, a space and L characters take ceil((L+2)/80) rows."""
        line = "- " + colorize("a", "blue") * length
        assert rows_occupied(line, 80) == expected

    def test_empty_text_takes_no_rows(self):
        assert rows_occupied("", 80) == 0

    def test_multi_line_text_sums_each_line(self):
        text = "first\n" + "x" * 100 + "\nlast"
        assert rows_occupied(text, 80) == 1 + 2 + 1

    def test_blank_lines_take_one_row(self):
        assert rows_occupied("a\n\nb", 80) == 3

    @pytest.mark.parametrize("columns", [0, None, -5])
    def test_unknown_width_counts_one_row_per_line(self, columns):
        assert rows_occupied("x" * 500, columns) == 1
        assert rows_occupied("a\nb", columns) == 2
