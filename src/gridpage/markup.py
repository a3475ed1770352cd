"""Inline style markup for rich text.

A closed set of four-character tags switches the style of the characters that
follow it, for the rest of one string:

* ``<fg>`` back to the ambient foreground, bold and italic off
* ``<h1>`` .. ``<h4>`` highlight colors 1-4, bold/italic unchanged
* ``<bo>`` bold on
* ``<it>`` italic on

Anything else starting with ``<`` is ordinary text.
"""

from __future__ import annotations

from typing import Iterator

from gridpage.config import Palette
from gridpage.grid import Symbol

TAG_LENGTH = 4

MARKUP_TAGS = ("<fg>", "<h1>", "<h2>", "<h3>", "<h4>", "<bo>", "<it>")


def scan(text: str, palette: Palette) -> Iterator[Symbol]:
    """Yield one styled :class:`Symbol` per visible character of *text*.

    Line breaks are yielded as ``"\\n"`` symbols carrying the current style;
    recognised tags yield nothing.
    """
    color = palette.fg
    bold = False
    italic = False

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "<" and i + TAG_LENGTH <= n:
            tag = text[i : i + TAG_LENGTH]
            matched = True
            if tag == "<fg>":
                color = palette.fg
                bold = False
                italic = False
            elif tag == "<h1>":
                color = palette.h1
            elif tag == "<h2>":
                color = palette.h2
            elif tag == "<h3>":
                color = palette.h3
            elif tag == "<h4>":
                color = palette.h4
            elif tag == "<bo>":
                bold = True
            elif tag == "<it>":
                italic = True
            else:
                matched = False

            if matched:
                i += TAG_LENGTH
                continue

        yield Symbol(ch, color, bold, italic)
        i += 1


def strip_markup(text: str) -> str:
    """Return *text* with every recognised tag removed."""
    return "".join(s.character for s in scan(text, Palette()))
