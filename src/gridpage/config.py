"""Palette and page settings, with JSON-compatible (de)serialisation."""

from __future__ import annotations

from dataclasses import dataclass, field

from gridpage.grid import Color


@dataclass
class Palette:
    """Ambient foreground plus the four highlight colors used by markup."""

    fg: Color = (1.0, 1.0, 1.0)
    h1: Color = (1.0, 0.0, 0.0)
    h2: Color = (0.0, 1.0, 0.0)
    h3: Color = (0.0, 0.0, 1.0)
    h4: Color = (1.0, 1.0, 0.0)


@dataclass
class FontFiles:
    """Font file paths for the four style variants; ``None`` falls back."""

    regular: str | None = None
    bold: str | None = None
    italic: str | None = None
    bold_italic: str | None = None


@dataclass
class PageSettings:
    page_width: float = 210.0  # mm
    page_height: float = 297.0  # mm
    page_padding: float = 10.0  # mm
    font_size: float = 12.0  # pt
    character_spacing: float = 2.0  # pt
    dpi: int = 150
    background: Color = (0.0, 0.0, 0.0)
    palette: Palette = field(default_factory=Palette)
    fonts: FontFiles = field(default_factory=FontFiles)


def color_from_value(value: object) -> Color:
    """Parse ``[r, g, b]`` floats in [0, 1] or a ``"#rrggbb"`` string."""
    if isinstance(value, str):
        hex_str = value.lstrip("#")
        if len(hex_str) != 6:
            raise ValueError(f"Invalid color string: {value!r}")
        try:
            r, g, b = (int(hex_str[i : i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise ValueError(f"Invalid color string: {value!r}") from None
        return (r / 255, g / 255, b / 255)
    if isinstance(value, (list, tuple)) and len(value) == 3:
        return (float(value[0]), float(value[1]), float(value[2]))
    raise ValueError(f"Invalid color: {value!r}")


def palette_from_dict(data: dict) -> Palette:
    defaults = Palette()
    return Palette(
        fg=color_from_value(data["fg"]) if "fg" in data else defaults.fg,
        h1=color_from_value(data["h1"]) if "h1" in data else defaults.h1,
        h2=color_from_value(data["h2"]) if "h2" in data else defaults.h2,
        h3=color_from_value(data["h3"]) if "h3" in data else defaults.h3,
        h4=color_from_value(data["h4"]) if "h4" in data else defaults.h4,
    )


def palette_to_dict(palette: Palette) -> dict:
    return {
        "fg": list(palette.fg),
        "h1": list(palette.h1),
        "h2": list(palette.h2),
        "h3": list(palette.h3),
        "h4": list(palette.h4),
    }


def validate_settings(settings: PageSettings) -> None:
    """Raise ValueError for settings that cannot describe a page of cells."""
    if settings.page_width <= 0 or settings.page_height <= 0:
        raise ValueError(
            f"Page size must be positive, got {settings.page_width}x{settings.page_height}mm"
        )
    if settings.page_padding < 0:
        raise ValueError(f"Page padding must be non-negative, got {settings.page_padding}")
    if settings.font_size <= 0:
        raise ValueError(f"Font size must be positive, got {settings.font_size}")
    if settings.font_size + settings.character_spacing <= 0:
        raise ValueError(
            f"Character spacing {settings.character_spacing} leaves no room for "
            f"a {settings.font_size}pt line"
        )
    if settings.dpi <= 0:
        raise ValueError(f"Resolution must be positive, got {settings.dpi} dpi")


def settings_from_dict(data: dict) -> PageSettings:
    """Deserialize PageSettings from a JSON-compatible dict (camelCase keys)."""
    defaults = PageSettings()
    fonts = data.get("fonts", {})
    settings = PageSettings(
        page_width=float(data.get("pageWidth", defaults.page_width)),
        page_height=float(data.get("pageHeight", defaults.page_height)),
        page_padding=float(data.get("pagePadding", defaults.page_padding)),
        font_size=float(data.get("fontSize", defaults.font_size)),
        character_spacing=float(data.get("characterSpacing", defaults.character_spacing)),
        dpi=int(data.get("dpi", defaults.dpi)),
        background=(
            color_from_value(data["background"])
            if "background" in data
            else defaults.background
        ),
        palette=palette_from_dict(data.get("colors", {})),
        fonts=FontFiles(
            regular=fonts.get("regular"),
            bold=fonts.get("bold"),
            italic=fonts.get("italic"),
            bold_italic=fonts.get("boldItalic"),
        ),
    )
    validate_settings(settings)
    return settings


def settings_to_dict(settings: PageSettings) -> dict:
    """Serialize PageSettings to a JSON-compatible dict."""
    return {
        "pageWidth": settings.page_width,
        "pageHeight": settings.page_height,
        "pagePadding": settings.page_padding,
        "fontSize": settings.font_size,
        "characterSpacing": settings.character_spacing,
        "dpi": settings.dpi,
        "background": list(settings.background),
        "colors": palette_to_dict(settings.palette),
        "fonts": {
            "regular": settings.fonts.regular,
            "bold": settings.fonts.bold,
            "italic": settings.fonts.italic,
            "boldItalic": settings.fonts.bold_italic,
        },
    }
