"""gridpage: layout engine for styled text and images on a monospace grid."""

# Grid
from gridpage.grid import Color, Grid, GridBoundsError, Symbol

# Settings
from gridpage.config import (
    FontFiles,
    PageSettings,
    Palette,
    settings_from_dict,
    settings_to_dict,
)

# Layout engine
from gridpage.view import Layout, View, render

# Markup and glyphs
from gridpage.markup import MARKUP_TAGS, scan, strip_markup
from gridpage.glyphs import brightness_glyph, load_pixels, luma

# Output
from gridpage.ansi import grid_to_ansi
from gridpage.page import PageFonts, PageView

# Documents
from gridpage.document import LayoutDocumentError, build_layout, load_document

__all__ = [
    # Grid
    "Color",
    "Grid",
    "GridBoundsError",
    "Symbol",
    # Settings
    "FontFiles",
    "PageSettings",
    "Palette",
    "settings_from_dict",
    "settings_to_dict",
    # Layout engine
    "Layout",
    "View",
    "render",
    # Markup and glyphs
    "MARKUP_TAGS",
    "brightness_glyph",
    "load_pixels",
    "luma",
    "scan",
    "strip_markup",
    # Output
    "PageFonts",
    "PageView",
    "grid_to_ansi",
    # Documents
    "LayoutDocumentError",
    "build_layout",
    "load_document",
]
