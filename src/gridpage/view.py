"""Views over the grid and the layout primitives that derive them.

A :class:`View` is a rectangle of the shared :class:`~gridpage.grid.Grid`
plus the ambient palette. Layout is continuation-passing: every primitive
derives child views and calls the caller's callables with them before it
returns, so the grid is filled top-down in a single pass::

    def page(view):
        view.frame(lambda inner: inner.vsplit(
            1,
            lambda title: title.ftext("<h1><bo>Title"),
            lambda body: body.text("Lorem ipsum"),
        ))

    grid = render(40, 80, page)
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from gridpage.config import Palette
from gridpage.glyphs import brightness_glyph, check_pixels, luma
from gridpage.grid import Grid, Symbol
from gridpage.markup import scan

logger = logging.getLogger(__name__)

Layout = Callable[["View"], None]

CORNER = "+"
VERTICAL = "|"
HORIZONTAL = "-"


class View:
    """Rectangular region of a grid: ``origin`` and ``extent`` are ``(row, col)``."""

    __slots__ = ("grid", "origin", "extent", "full_size", "palette")

    def __init__(
        self,
        grid: Grid,
        origin: tuple[int, int],
        extent: tuple[int, int],
        palette: Palette,
        full_size: tuple[int, int] | None = None,
    ) -> None:
        self.grid = grid
        self.origin = origin
        self.extent = extent
        self.palette = palette
        self.full_size = full_size if full_size is not None else grid.size

    @classmethod
    def root(cls, grid: Grid, palette: Palette) -> View:
        """The view spanning the whole grid."""
        return cls(grid, (0, 0), grid.size, palette)

    @property
    def rows(self) -> int:
        return self.extent[0]

    @property
    def cols(self) -> int:
        return self.extent[1]

    def copy(self) -> View:
        return View(self.grid, self.origin, self.extent, self.palette, self.full_size)

    def _derive(self, row_offset: int, col_offset: int, rows: int, cols: int) -> View:
        return View(
            self.grid,
            (self.origin[0] + row_offset, self.origin[1] + col_offset),
            (rows, cols),
            self.palette,
            self.full_size,
        )

    def _symbol(self, ch: str) -> Symbol:
        return Symbol(ch, self.palette.fg)

    def _draw(self, row: int, col: int, ch: str) -> None:
        """Write *ch* at view-local ``(row, col)`` in the ambient foreground."""
        self.grid.write(self.origin[0] + row, self.origin[1] + col, self._symbol(ch))

    def __repr__(self) -> str:
        return f"View(origin={self.origin}, extent={self.extent})"

    # ------------------------------------------------------------------
    # Layout primitives
    # ------------------------------------------------------------------

    def frame(self, inner: Layout) -> None:
        """Draw a ``+-|`` border and lay out *inner* inside it."""
        rows, cols = self.extent
        if rows < 2 or cols < 2:
            logger.debug("frame skipped: %r too small", self)
            return

        bottom = rows - 1
        right = cols - 1
        for row, col in ((0, 0), (bottom, 0), (bottom, right), (0, right)):
            self._draw(row, col, CORNER)
        for row in range(1, bottom):
            self._draw(row, 0, VERTICAL)
            self._draw(row, right, VERTICAL)
        for col in range(1, right):
            self._draw(0, col, HORIZONTAL)
            self._draw(bottom, col, HORIZONTAL)

        self.padding(1, 1, 1, 1, inner)

    def vsplit(self, split: int, up: Layout, down: Layout) -> None:
        """Split at row *split* (negative counts from the bottom) with a ``-`` line."""
        rows, cols = self.extent
        split_loc = split if split >= 0 else rows - abs(split)

        if split_loc < 0:
            down(self.copy())
        elif split_loc > rows:
            up(self.copy())
        elif split_loc == rows:
            # Divider would sit just below the view.
            if split_loc > 0:
                up(self.copy())
        else:
            for col in range(cols):
                self._draw(split_loc, col, HORIZONTAL)
            if split_loc > 0:
                up(self._derive(0, 0, split_loc, cols))
            if split_loc < rows - 1:
                down(self._derive(split_loc + 1, 0, rows - split_loc - 1, cols))

    def hsplit(self, split: int, left: Layout, right: Layout) -> None:
        """Split at column *split* (negative counts from the right) with a ``|`` line."""
        rows, cols = self.extent
        split_loc = split if split >= 0 else cols - abs(split)

        if split_loc < 0:
            right(self.copy())
        elif split_loc > cols:
            left(self.copy())
        elif split_loc == cols:
            if split_loc > 0:
                left(self.copy())
        else:
            for row in range(rows):
                self._draw(row, split_loc, VERTICAL)
            if split_loc > 0:
                left(self._derive(0, 0, rows, split_loc))
            if split_loc < cols - 1:
                right(self._derive(0, split_loc + 1, rows, cols - split_loc - 1))

    def padding(self, left: int, right: int, up: int, down: int, inner: Layout) -> None:
        """Lay out *inner* in this view shrunk by the given margins.

        Does nothing unless at least one row and one column remain.
        """
        if min(left, right, up, down) < 0:
            raise ValueError(f"Padding must be non-negative, got {(left, right, up, down)}")
        rows, cols = self.extent
        if cols < left + right + 1 or rows < up + down + 1:
            logger.debug("padding %s skipped: %r too small", (left, right, up, down), self)
            return
        inner(self._derive(up, left, rows - up - down, cols - left - right))

    # ------------------------------------------------------------------
    # Content writers
    # ------------------------------------------------------------------

    def text(self, text: str) -> None:
        """Write *text* in the ambient foreground, wrapping at the right edge."""
        fg = self.palette.fg
        self._write_symbols(Symbol(ch, fg) for ch in text)

    def ftext(self, text: str) -> None:
        """Like :meth:`text`, honouring the inline tags of :mod:`gridpage.markup`."""
        self._write_symbols(scan(text, self.palette))

    def _write_symbols(self, symbols: Iterable[Symbol]) -> None:
        rows, cols = self.extent
        top, left = self.origin
        x = 0
        y = 0

        for symbol in symbols:
            if symbol.character == "\n":
                x = 0
                y += 1
            else:
                if y < rows and x < cols:
                    self.grid.write(top + y, left + x, symbol)
                x += 1

            if x >= cols:
                x = 0
                y += 1

        if x == 0 and y > 0:
            y -= 1
        consumed = min(y + 1, rows)
        self.origin = (top + consumed, left)
        self.extent = (rows - consumed, cols)

    def img(self, pixels: Sequence[float], w: int, h: int) -> None:
        """Draw a ``w x h`` RGB image one pixel per cell as brightness glyphs.

        Pixels beyond the view are dropped; the view is left unchanged.
        """
        check_pixels(pixels, w, h)
        top, left = self.origin
        for y in range(min(h, self.rows)):
            for x in range(min(w, self.cols)):
                pix = (y * w + x) * 3
                color = (pixels[pix], pixels[pix + 1], pixels[pix + 2])
                glyph = brightness_glyph(luma(*color))
                self.grid.write(top + y, left + x, Symbol(glyph, color))


def render(rows: int, cols: int, layout: Layout, palette: Palette | None = None) -> Grid:
    """Run one render pass over a fresh ``rows x cols`` grid and return it."""
    palette = palette or Palette()
    grid = Grid(rows, cols, palette.fg)
    layout(View.root(grid, palette))
    return grid
