"""Dump a grid as truecolor ANSI text for terminal previews."""

from __future__ import annotations

import wcwidth as _wcwidth

from gridpage.grid import Color, Grid, Symbol

RESET = "\x1b[0m"
REPLACEMENT = "?"


def _channel(value: float) -> int:
    return max(0, min(255, round(value * 255)))


def sgr(color: Color, bold: bool = False, italic: bool = False) -> str:
    """SGR sequence selecting *color* (24-bit) and the given attributes."""
    params = ["0"]
    if bold:
        params.append("1")
    if italic:
        params.append("3")
    r, g, b = (_channel(c) for c in color)
    params.append(f"38;2;{r};{g};{b}")
    return f"\x1b[{';'.join(params)}m"


def cell_text(character: str) -> str:
    """The character if it occupies exactly one terminal column, else ``?``."""
    if _wcwidth.wcwidth(character) == 1:
        return character
    return REPLACEMENT


def _style(symbol: Symbol) -> tuple[Color, bool, bool]:
    return (tuple(symbol.color), symbol.bold, symbol.italic)  # type: ignore[return-value]


def line_to_ansi(symbols: list[Symbol]) -> str:
    parts: list[str] = []
    current: tuple[Color, bool, bool] | None = None
    for symbol in symbols:
        style = _style(symbol)
        if style != current:
            parts.append(sgr(*style))
            current = style
        parts.append(cell_text(symbol.character))
    if parts:
        parts.append(RESET)
    return "".join(parts)


def grid_to_ansi(grid: Grid) -> str:
    """Render *grid* as one ANSI-styled line per row."""
    return "\n".join(line_to_ansi(line) for line in grid)
