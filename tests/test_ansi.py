"""Tests for the ANSI grid preview."""

from __future__ import annotations

from gridpage.ansi import RESET, cell_text, grid_to_ansi, sgr
from gridpage.grid import Grid, Symbol


class TestSgr:
    """Tests for the sgr() escape builder."""

    def test_plain_truecolor(self) -> None:
        assert sgr((1.0, 0.0, 0.0)) == "\x1b[0;38;2;255;0;0m"

    def test_bold_italic(self) -> None:
        assert sgr((0.0, 0.0, 1.0), bold=True, italic=True) == "\x1b[0;1;3;38;2;0;0;255m"

    def test_channels_are_clamped(self) -> None:
        assert sgr((1.5, -0.2, 0.5)) == "\x1b[0;38;2;255;0;128m"


class TestCellText:
    """Tests for cell_text() width checks."""

    def test_narrow_character(self) -> None:
        assert cell_text("a") == "a"

    def test_wide_character_replaced(self) -> None:
        assert cell_text("世") == "?"

    def test_control_character_replaced(self) -> None:
        assert cell_text("\x07") == "?"


class TestGridToAnsi:
    """Tests for grid_to_ansi() previews."""

    def test_runs_share_one_sequence(self) -> None:
        grid = Grid(1, 2, (1.0, 1.0, 1.0))
        grid.write(0, 0, Symbol("a", (1.0, 1.0, 1.0)))
        grid.write(0, 1, Symbol("b", (1.0, 1.0, 1.0)))
        assert grid_to_ansi(grid) == "\x1b[0;38;2;255;255;255mab" + RESET

    def test_style_change_starts_new_sequence(self) -> None:
        grid = Grid(1, 2, (1.0, 1.0, 1.0))
        grid.write(0, 0, Symbol("a", (1.0, 1.0, 1.0)))
        grid.write(0, 1, Symbol("b", (1.0, 1.0, 1.0), bold=True))
        out = grid_to_ansi(grid)
        assert out == (
            "\x1b[0;38;2;255;255;255ma"
            "\x1b[0;1;38;2;255;255;255mb" + RESET
        )

    def test_one_line_per_row(self) -> None:
        grid = Grid(3, 1)
        assert grid_to_ansi(grid).count("\n") == 2

    def test_zero_width_grid(self) -> None:
        assert grid_to_ansi(Grid(2, 0)) == "\n"
