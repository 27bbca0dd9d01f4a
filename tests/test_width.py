"""Tests for terminal geometry and visual-width helpers."""

import os

from youtube_chat.tui.ansi import style
from youtube_chat.tui.width import (
    DEFAULT_COLUMNS,
    line_rows,
    pad_to_visual_width,
    usable_columns,
    visual_width,
)


class TestVisualWidth:
    """Tests for visual_width."""

    def test_ascii(self) -> None:
        assert visual_width("hello") == 5

    def test_wide_glyphs_count_two(self) -> None:
        assert visual_width("日本語") == 6
        assert visual_width("한국어") == 6

    def test_styling_counts_zero(self) -> None:
        assert visual_width(style("abc", bold=True, dim=True)) == 3


class TestPadToVisualWidth:
    """Tests for pad_to_visual_width."""

    def test_pads_ascii(self) -> None:
        assert pad_to_visual_width("ab", 5) == "ab   "

    def test_pads_by_cells_not_characters(self) -> None:
        padded = pad_to_visual_width("日本語", 10)
        assert padded == "日本語    "
        assert visual_width(padded) == 10

    def test_columns_align_across_scripts(self) -> None:
        names = ["English", "日本語", "Русский", "العربية"]
        rows = [pad_to_visual_width(n, 12) + "|" for n in names]
        assert {visual_width(r) for r in rows} == {13}

    def test_noop_when_already_wide_enough(self) -> None:
        assert pad_to_visual_width("abcdef", 3) == "abcdef"
        assert pad_to_visual_width("日本", 4) == "日本"

    def test_custom_pad_char(self) -> None:
        assert pad_to_visual_width("a", 3, ".") == "a.."


class TestGeometry:
    """Tests for usable_columns and line_rows."""

    def test_usable_columns_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setattr(
            "youtube_chat.tui.width.shutil.get_terminal_size",
            lambda fallback: os.terminal_size((132, 40)),
        )
        assert usable_columns() == 132

    def test_usable_columns_fallback(self, monkeypatch) -> None:
        monkeypatch.setattr(
            "youtube_chat.tui.width.shutil.get_terminal_size",
            lambda fallback: os.terminal_size(fallback),
        )
        assert usable_columns() == DEFAULT_COLUMNS == 115

    def test_usable_columns_is_not_cached(self, monkeypatch) -> None:
        sizes = iter([(80, 24), (100, 24)])
        monkeypatch.setattr(
            "youtube_chat.tui.width.shutil.get_terminal_size",
            lambda fallback: os.terminal_size(next(sizes)),
        )
        assert usable_columns() == 80
        assert usable_columns() == 100

    def test_line_rows(self) -> None:
        assert line_rows("", 10) == 1
        assert line_rows("x" * 10, 10) == 1
        assert line_rows("x" * 11, 10) == 2
        assert line_rows("日" * 6, 10) == 2
