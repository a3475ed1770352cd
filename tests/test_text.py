"""Tests for the text writers: View.text and View.ftext."""

from __future__ import annotations

from gridpage.config import Palette
from gridpage.grid import Grid
from gridpage.view import View

PALETTE = Palette(
    fg=(0.9, 0.9, 0.9),
    h1=(1.0, 0.0, 0.0),
    h2=(0.0, 1.0, 0.0),
    h3=(0.0, 0.0, 1.0),
    h4=(1.0, 1.0, 0.0),
)


def root(rows: int, cols: int) -> View:
    return View.root(Grid(rows, cols, PALETTE.fg), PALETTE)


# ---------------------------------------------------------------------------
# text
# ---------------------------------------------------------------------------


class TestText:
    """Tests for View.text()."""

    def test_newline_starts_next_row(self) -> None:
        view = root(4, 5)
        view.text("ab\ncd")
        assert view.grid.lines()[:2] == ["ab   ", "cd   "]
        assert view.origin == (2, 0)
        assert view.extent == (2, 5)

    def test_plain_style(self) -> None:
        view = root(1, 3)
        view.text("a")
        symbol = view.grid.get(0, 0)
        assert symbol.color == PALETTE.fg
        assert not symbol.bold
        assert not symbol.italic

    def test_wraps_at_character_boundary(self) -> None:
        view = root(4, 3)
        view.text("abcd")
        assert view.grid.lines()[:2] == ["abc", "d  "]
        assert view.extent == (2, 3)

    def test_exact_fill_does_not_consume_extra_row(self) -> None:
        view = root(4, 3)
        view.text("abcdef")
        assert view.grid.lines()[:2] == ["abc", "def"]
        assert view.origin == (2, 0)
        assert view.extent == (2, 3)

    def test_no_word_awareness(self) -> None:
        view = root(3, 4)
        view.text("hello world")
        assert view.grid.lines() == ["hell", "o wo", "rld "]

    def test_empty_text_consumes_one_row(self) -> None:
        view = root(3, 3)
        view.text("")
        assert view.extent == (2, 3)

    def test_trailing_newline_is_reclaimed(self) -> None:
        view = root(3, 3)
        view.text("ab\n")
        assert view.extent == (2, 3)

    def test_blank_lines_count(self) -> None:
        view = root(5, 3)
        view.text("a\n\nb")
        assert view.grid.lines()[:3] == ["a  ", "   ", "b  "]
        assert view.extent == (2, 3)

    def test_sequential_writes_stack(self) -> None:
        view = root(3, 5)
        view.text("one")
        view.text("two")
        assert view.grid.lines() == ["one  ", "two  ", "     "]
        assert view.origin == (2, 0)

    def test_offset_view_writes_in_place(self) -> None:
        grid = Grid(3, 6)
        view = View(grid, (1, 2), (2, 3), PALETTE)
        view.text("xyz")
        assert grid.lines() == ["      ", "  xyz ", "      "]
        assert view.origin == (2, 2)
        assert view.extent == (1, 3)

    def test_overflow_is_clipped_to_view(self) -> None:
        grid = Grid(4, 3)
        view = View(grid, (0, 0), (2, 3), PALETTE)
        view.text("abcdefghi")
        assert grid.lines() == ["abc", "def", "   ", "   "]
        assert view.origin == (2, 0)
        assert view.extent == (0, 3)

    def test_exhausted_view_writes_nothing(self) -> None:
        view = root(1, 3)
        view.text("abc")
        assert view.extent == (0, 3)
        view.text("zzz")
        assert view.grid.lines() == ["abc"]
        assert view.extent == (0, 3)


# ---------------------------------------------------------------------------
# ftext
# ---------------------------------------------------------------------------


class TestFtext:
    """Tests for View.ftext()."""

    def test_highlight_then_foreground(self) -> None:
        view = root(2, 5)
        view.ftext("<h1>A<fg>B")
        a = view.grid.get(0, 0)
        b = view.grid.get(0, 1)
        assert (a.character, a.color) == ("A", PALETTE.h1)
        assert (b.character, b.color) == ("B", PALETTE.fg)
        assert view.grid.row_text(0) == "AB   "
        assert view.extent == (1, 5)

    def test_unknown_tag_is_literal(self) -> None:
        view = root(1, 6)
        view.ftext("<xy>")
        assert view.grid.row_text(0) == "<xy>  "
        assert view.grid.get(0, 0).color == PALETTE.fg

    def test_all_highlights(self) -> None:
        view = root(1, 4)
        view.ftext("<h1>a<h2>b<h3>c<h4>d")
        colors = [view.grid.get(0, c).color for c in range(4)]
        assert colors == [PALETTE.h1, PALETTE.h2, PALETTE.h3, PALETTE.h4]

    def test_bold_and_italic(self) -> None:
        view = root(1, 3)
        view.ftext("<bo>B<it>I<fg>N")
        b, i, n = (view.grid.get(0, c) for c in range(3))
        assert (b.bold, b.italic) == (True, False)
        assert (i.bold, i.italic) == (True, True)
        assert (n.bold, n.italic, n.color) == (False, False, PALETTE.fg)

    def test_highlight_keeps_bold(self) -> None:
        view = root(1, 2)
        view.ftext("<h2><bo>x<h3>y")
        y = view.grid.get(0, 1)
        assert y.color == PALETTE.h3
        assert y.bold

    def test_style_does_not_persist_between_calls(self) -> None:
        view = root(2, 2)
        view.ftext("<bo><h1>a")
        view.ftext("b")
        b = view.grid.get(1, 0)
        assert b.character == "b"
        assert not b.bold
        assert b.color == PALETTE.fg

    def test_tag_at_end_is_consumed(self) -> None:
        view = root(1, 4)
        view.ftext("ab<h1>")
        assert view.grid.row_text(0) == "ab  "

    def test_short_window_is_literal(self) -> None:
        view = root(1, 4)
        view.ftext("<h1")
        assert view.grid.row_text(0) == "<h1 "

    def test_tag_inside_rejected_window(self) -> None:
        view = root(1, 4)
        view.ftext("<<h1>x")
        assert view.grid.row_text(0) == "<x  "
        assert view.grid.get(0, 1).color == PALETTE.h1

    def test_tags_do_not_take_cells_when_wrapping(self) -> None:
        view = root(3, 3)
        view.ftext("<h1>abc<fg>d")
        assert view.grid.lines() == ["abc", "d  ", "   "]
        assert view.grid.get(1, 0).color == PALETTE.fg
        assert view.extent == (1, 3)

    def test_newline(self) -> None:
        view = root(3, 3)
        view.ftext("<it>a\nb")
        assert view.grid.lines()[:2] == ["a  ", "b  "]
        assert view.grid.get(1, 0).italic
        assert view.extent == (1, 3)
