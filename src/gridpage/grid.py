"""Character grid: the shared canvas of styled symbols for one render pass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

Color = tuple[float, float, float]

WHITE: Color = (1.0, 1.0, 1.0)


class GridBoundsError(IndexError):
    """Raised when a cell outside the grid is addressed.

    Only wrong coordinate arithmetic in a layout primitive can trigger this,
    so it is never caught inside the engine.
    """


@dataclass(frozen=True)
class Symbol:
    """A single styled character cell."""

    character: str
    color: Color
    bold: bool = False
    italic: bool = False


class Grid:
    """Fixed-size ``rows x cols`` canvas of :class:`Symbol` cells."""

    def __init__(self, rows: int, cols: int, default_color: Color = WHITE) -> None:
        if rows < 0 or cols < 0:
            raise ValueError(f"Grid size must be non-negative, got {rows}x{cols}")
        self._rows = rows
        self._cols = cols
        blank = Symbol(" ", default_color)
        self._cells: list[list[Symbol]] = [[blank] * cols for _ in range(rows)]

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def size(self) -> tuple[int, int]:
        """``(rows, cols)``."""
        return (self._rows, self._cols)

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise GridBoundsError(
                f"Cell ({row}, {col}) is outside the {self._rows}x{self._cols} grid"
            )

    def write(self, row: int, col: int, symbol: Symbol) -> None:
        self._check(row, col)
        self._cells[row][col] = symbol

    def get(self, row: int, col: int) -> Symbol:
        self._check(row, col)
        return self._cells[row][col]

    def __getitem__(self, pos: tuple[int, int]) -> Symbol:
        row, col = pos
        return self.get(row, col)

    def __iter__(self) -> Iterator[list[Symbol]]:
        for line in self._cells:
            yield list(line)

    def __len__(self) -> int:
        return self._rows

    def row_text(self, row: int) -> str:
        """Return the characters of *row* as a plain string."""
        if not 0 <= row < self._rows:
            raise GridBoundsError(f"Row {row} is outside the {self._rows}-row grid")
        return "".join(s.character for s in self._cells[row])

    def lines(self) -> list[str]:
        return [self.row_text(r) for r in range(self._rows)]

    def __repr__(self) -> str:
        return f"Grid(rows={self._rows}, cols={self._cols})"
