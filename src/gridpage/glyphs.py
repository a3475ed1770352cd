"""Brightness quantisation of RGB pixels into glyphs, and image loading."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Sequence

from PIL import Image

# (exclusive upper bound, glyph), tested in order.
GLYPH_RAMP: tuple[tuple[float, str], ...] = (
    (0.2, "."),
    (0.4, ":"),
    (0.6, "o"),
    (0.8, "0"),
)
BRIGHTEST_GLYPH = "@"


def luma(r: float, g: float, b: float) -> float:
    """Rec. 601 luma of an RGB triple."""
    return 0.299 * r + 0.587 * g + 0.114 * b


def brightness_glyph(brightness: float) -> str:
    """Map a brightness value to one of ``. : o 0 @``.

    Bands are ``[0, 0.2)``, ``[0.2, 0.4)``, ``[0.4, 0.6)``, ``[0.6, 0.8)`` and
    ``[0.8, 1]``; values below 0 land in the first band, above 1 in the last.
    """
    for upper, glyph in GLYPH_RAMP:
        if brightness < upper:
            return glyph
    return BRIGHTEST_GLYPH


def check_pixels(pixels: Sequence[float], width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise ValueError(f"Image size must be non-negative, got {width}x{height}")
    needed = width * height * 3
    if len(pixels) < needed:
        raise ValueError(
            f"Pixel buffer holds {len(pixels)} values, {width}x{height} RGB needs {needed}"
        )


def load_pixels(source: str | Path | IO[bytes]) -> tuple[list[float], int, int]:
    """Load an image as row-major interleaved RGB floats in [0, 1].

    Returns ``(pixels, width, height)``.
    """
    with Image.open(source) as img:
        rgb = img.convert("RGB")
        width, height = rgb.size
        data = rgb.tobytes()
    return [v / 255 for v in data], width, height
