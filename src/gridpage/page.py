"""Physical pages: sizing the grid to a page and writing it out.

Sizes follow print conventions: page geometry in millimetres, font size and
character spacing in points. PDF pages are written as real text with reportlab;
raster pages are painted with Pillow, where the resolution (``dpi``) decides
how many pixels a millimetre becomes.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path

import reportlab.lib.units
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts
import reportlab.pdfgen.canvas
from PIL import Image, ImageDraw, ImageFont

from gridpage.config import FontFiles, PageSettings
from gridpage.grid import Color, Grid
from gridpage.view import Layout, render

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4
PT_PER_INCH = 72.0

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def pt_to_mm(pt: float) -> float:
    return pt * MM_PER_INCH / PT_PER_INCH


def mm_to_px(mm: float, dpi: int) -> float:
    return mm * dpi / MM_PER_INCH


def rgb8(color: Color) -> tuple[int, int, int]:
    return tuple(max(0, min(255, round(c * 255))) for c in color)  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------


def _load_font(path: str | None, size_px: int) -> Font:
    if path is None:
        return ImageFont.load_default(size=size_px)
    return ImageFont.truetype(path, size_px)


@dataclass
class PageFonts:
    """The four style variants, selected by ``(bold, italic)``."""

    regular: Font
    bold: Font
    italic: Font
    bold_italic: Font
    size_px: int

    @classmethod
    def load(cls, fonts: FontFiles, font_size: float, dpi: int) -> PageFonts:
        size_px = max(1, round(font_size * dpi / PT_PER_INCH))
        regular = _load_font(fonts.regular, size_px)

        def variant(path: str | None) -> Font:
            if path is None:
                return regular
            return _load_font(path, size_px)

        logger.debug("Loaded fonts %s at %dpx", fonts, size_px)
        return cls(
            regular=regular,
            bold=variant(fonts.bold),
            italic=variant(fonts.italic),
            bold_italic=variant(fonts.bold_italic),
            size_px=size_px,
        )

    def variant(self, bold: bool, italic: bool) -> Font:
        if bold and italic:
            return self.bold_italic
        if bold:
            return self.bold
        if italic:
            return self.italic
        return self.regular


# ---------------------------------------------------------------------------
# Sizing
# ---------------------------------------------------------------------------


def measure_symbol(font: Font, settings: PageSettings) -> tuple[float, float]:
    """Cell ``(width, height)`` in mm for a monospace *font*.

    The width is the advance of ``-`` plus the character spacing, the height
    the font size plus the character spacing.
    """
    advance_pt = font.getlength("-") * PT_PER_INCH / settings.dpi
    width = pt_to_mm(advance_pt + settings.character_spacing)
    height = pt_to_mm(settings.font_size + settings.character_spacing)
    return (width, height)


def grid_size(settings: PageSettings, symbol: tuple[float, float]) -> tuple[int, int]:
    """How many ``(rows, cols)`` cells fit inside the padded page."""
    symbol_width, symbol_height = symbol
    if symbol_width <= 0 or symbol_height <= 0:
        raise ValueError(f"Symbol size must be positive, got {symbol}")
    usable_width = settings.page_width - 2 * settings.page_padding
    usable_height = settings.page_height - 2 * settings.page_padding
    cols = max(0, math.floor(usable_width / symbol_width))
    rows = max(0, math.floor(usable_height / symbol_height))
    return (rows, cols)


def view_padding(
    settings: PageSettings, symbol: tuple[float, float], rows: int, cols: int
) -> tuple[float, float]:
    """Left and top margins (mm) that centre the cell block on the page."""
    view_width = cols * symbol[0]
    view_height = rows * symbol[1] + pt_to_mm(settings.character_spacing)
    return (
        (settings.page_width - view_width) / 2,
        (settings.page_height - view_height) / 2,
    )


# ---------------------------------------------------------------------------
# PageView
# ---------------------------------------------------------------------------


class PageView:
    """A sized page that can run a layout and paint the resulting grid."""

    def __init__(
        self,
        settings: PageSettings,
        fonts: PageFonts,
        symbol: tuple[float, float],
        rows: int,
        cols: int,
    ) -> None:
        self.settings = settings
        self.fonts = fonts
        self.symbol = symbol
        self.rows = rows
        self.cols = cols
        self.padding = view_padding(settings, symbol, rows, cols)

    @classmethod
    def build(cls, settings: PageSettings) -> PageView:
        fonts = PageFonts.load(settings.fonts, settings.font_size, settings.dpi)
        symbol = measure_symbol(fonts.regular, settings)
        rows, cols = grid_size(settings, symbol)
        logger.debug(
            "Page %.1fx%.1fmm, cell %.2fx%.2fmm -> %d rows x %d cols",
            settings.page_width,
            settings.page_height,
            symbol[0],
            symbol[1],
            rows,
            cols,
        )
        return cls(settings, fonts, symbol, rows, cols)

    def render_grid(self, layout: Layout) -> Grid:
        return render(self.rows, self.cols, layout, self.settings.palette)

    def paint(self, grid: Grid) -> Image.Image:
        """Paint *grid* onto a new page image."""
        dpi = self.settings.dpi
        size = (
            max(1, round(mm_to_px(self.settings.page_width, dpi))),
            max(1, round(mm_to_px(self.settings.page_height, dpi))),
        )
        image = Image.new("RGB", size, rgb8(self.settings.background))
        draw = ImageDraw.Draw(image)

        left, top = self.padding
        cell_width, cell_height = self.symbol
        # First baseline sits one font size below the top margin.
        baseline = top + pt_to_mm(self.settings.font_size)

        for row, line in enumerate(grid):
            y = mm_to_px(baseline + row * cell_height, dpi)
            for col, symbol in enumerate(line):
                if symbol.character == " ":
                    continue
                x = mm_to_px(left + col * cell_width, dpi)
                draw.text(
                    (x, y),
                    symbol.character,
                    fill=rgb8(symbol.color),
                    font=self.fonts.variant(symbol.bold, symbol.italic),
                    anchor="ls",
                )
        return image

    def draw(self, layout: Layout) -> Image.Image:
        return self.paint(self.render_grid(layout))

    def save(self, layout: Layout, path: str | Path, compress: bool = True) -> Path:
        """Run *layout* and write the page; the format follows the extension.

        ``.pdf`` pages are written as text with embedded fonts, every other
        extension is painted as a raster image.
        """
        path = Path(path)
        grid = self.render_grid(layout)
        if path.suffix.lower() == ".pdf":
            write_pdf(self, grid, path, compress=compress)
        else:
            dpi = self.settings.dpi
            self.paint(grid).save(path, dpi=(dpi, dpi))
        logger.info("Saved %dx%d page to %s", self.cols, self.rows, path)
        return path


# ---------------------------------------------------------------------------
# PDF output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PdfFontNames:
    """reportlab font names of the four style variants."""

    regular: str
    bold: str
    italic: str
    bold_italic: str

    def variant(self, bold: bool, italic: bool) -> str:
        if bold and italic:
            return self.bold_italic
        if bold:
            return self.bold
        if italic:
            return self.italic
        return self.regular


# Built-in monospace family used when no font files are configured.
STANDARD_PDF_FONTS = PdfFontNames(
    regular="Courier",
    bold="Courier-Bold",
    italic="Courier-Oblique",
    bold_italic="Courier-BoldOblique",
)


def _register_ttf(path: str) -> str:
    name = f"gridpage:{Path(path).resolve()}"
    try:
        reportlab.pdfbase.pdfmetrics.registerFont(reportlab.pdfbase.ttfonts.TTFont(name, path))
    except reportlab.pdfbase.ttfonts.TTFError as e:
        raise ValueError(f"Cannot embed font {path}: {e}") from e
    return name


def register_pdf_fonts(fonts: FontFiles) -> PdfFontNames:
    """Register the configured TrueType fonts with reportlab.

    Without a regular font the standard Courier family is used; missing
    variants fall back to the regular font.
    """
    if fonts.regular is None:
        return STANDARD_PDF_FONTS
    regular = _register_ttf(fonts.regular)

    def variant(path: str | None) -> str:
        return regular if path is None else _register_ttf(path)

    return PdfFontNames(
        regular=regular,
        bold=variant(fonts.bold),
        italic=variant(fonts.italic),
        bold_italic=variant(fonts.bold_italic),
    )


def write_pdf(page: PageView, grid: Grid, path: str | Path, compress: bool = True) -> None:
    """Write *grid* as a text PDF, one ``drawString`` per non-blank cell."""
    settings = page.settings
    names = register_pdf_fonts(settings.fonts)
    page_width = settings.page_width * reportlab.lib.units.mm
    page_height = settings.page_height * reportlab.lib.units.mm

    pdf = reportlab.pdfgen.canvas.Canvas(
        str(path),
        pagesize=(page_width, page_height),
        pageCompression=1 if compress else 0,
    )
    pdf.setFillColorRGB(*settings.background)
    pdf.rect(0, 0, page_width, page_height, stroke=0, fill=1)

    left, top = page.padding
    cell_width, cell_height = page.symbol
    baseline = top + pt_to_mm(settings.font_size)

    for row, line in enumerate(grid):
        # PDF space grows upwards from the bottom edge.
        y = page_height - (baseline + row * cell_height) * reportlab.lib.units.mm
        for col, symbol in enumerate(line):
            if symbol.character == " ":
                continue
            x = (left + col * cell_width) * reportlab.lib.units.mm
            pdf.setFont(names.variant(symbol.bold, symbol.italic), settings.font_size)
            pdf.setFillColorRGB(*symbol.color)
            pdf.drawString(x, y, symbol.character)

    pdf.showPage()
    pdf.save()
