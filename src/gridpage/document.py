"""JSON layout documents compiled into layout continuations.

A document pairs page settings with a tree of layout nodes::

    {
      "page": {"fontSize": 12, "colors": {"h1": "#ff5555"}},
      "layout": {"frame": {"vsplit": {
          "at": 1,
          "up": {"padding": {"left": 1, "right": 1, "inner": {"ftext": "<h1><bo>Title"}}},
          "down": [{"ftext": "<it>Lorem<fg> ipsum"}, {"text": "dolor sit amet"}]
      }}}
    }

A list runs its nodes one after another on the same view, so text writers
stack downwards. ``null`` draws nothing.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

from gridpage.config import PageSettings, settings_from_dict
from gridpage.glyphs import load_pixels
from gridpage.view import Layout, View

logger = logging.getLogger(__name__)


class LayoutDocumentError(ValueError):
    """A layout document or node is malformed."""


def _nothing(view: View) -> None:
    pass


def _int_field(spec: dict, key: str, path: str, default: int | None = None) -> int:
    if key not in spec:
        if default is None:
            raise LayoutDocumentError(f"{path}: missing '{key}'")
        return default
    value = spec[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise LayoutDocumentError(f"{path}.{key}: expected an integer, got {value!r}")
    return value


def _str_field(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise LayoutDocumentError(f"{path}: expected a string, got {value!r}")
    return value


def _object_field(value: Any, path: str) -> dict:
    if not isinstance(value, dict):
        raise LayoutDocumentError(f"{path}: expected an object, got {value!r}")
    return value


class _Compiler:
    def __init__(self, base_dir: Path | None) -> None:
        self._base_dir = base_dir
        self._handlers: dict[str, Callable[[Any, str], Layout]] = {
            "frame": self._frame,
            "vsplit": self._vsplit,
            "hsplit": self._hsplit,
            "padding": self._padding,
            "text": self._text,
            "ftext": self._ftext,
            "image": self._image,
        }

    def compile(self, node: Any, path: str) -> Layout:
        if node is None:
            return _nothing
        if isinstance(node, list):
            steps = [self.compile(child, f"{path}[{i}]") for i, child in enumerate(node)]

            def sequence(view: View) -> None:
                for step in steps:
                    step(view)

            return sequence
        if not isinstance(node, dict):
            raise LayoutDocumentError(f"{path}: expected an object, list or null, got {node!r}")
        if len(node) != 1:
            raise LayoutDocumentError(
                f"{path}: a node must have exactly one key, got {sorted(node)}"
            )
        (kind, spec), = node.items()
        handler = self._handlers.get(kind)
        if handler is None:
            raise LayoutDocumentError(f"{path}: unknown node type '{kind}'")
        return handler(spec, f"{path}.{kind}")

    def _frame(self, spec: Any, path: str) -> Layout:
        inner = self.compile(spec, path)
        return lambda view: view.frame(inner)

    def _vsplit(self, spec: Any, path: str) -> Layout:
        spec = _object_field(spec, path)
        at = _int_field(spec, "at", path)
        up = self.compile(spec.get("up"), f"{path}.up")
        down = self.compile(spec.get("down"), f"{path}.down")
        return lambda view: view.vsplit(at, up, down)

    def _hsplit(self, spec: Any, path: str) -> Layout:
        spec = _object_field(spec, path)
        at = _int_field(spec, "at", path)
        left = self.compile(spec.get("left"), f"{path}.left")
        right = self.compile(spec.get("right"), f"{path}.right")
        return lambda view: view.hsplit(at, left, right)

    def _padding(self, spec: Any, path: str) -> Layout:
        spec = _object_field(spec, path)
        sides = [_int_field(spec, side, path, 0) for side in ("left", "right", "up", "down")]
        if any(side < 0 for side in sides):
            raise LayoutDocumentError(f"{path}: padding must be non-negative, got {sides}")
        inner = self.compile(spec.get("inner"), f"{path}.inner")
        left, right, up, down = sides
        return lambda view: view.padding(left, right, up, down, inner)

    def _text(self, spec: Any, path: str) -> Layout:
        text = _str_field(spec, path)
        return lambda view: view.text(text)

    def _ftext(self, spec: Any, path: str) -> Layout:
        text = _str_field(spec, path)
        return lambda view: view.ftext(text)

    def _image(self, spec: Any, path: str) -> Layout:
        spec = _object_field(spec, path)
        image_path = Path(_str_field(spec.get("path"), f"{path}.path"))
        if not image_path.is_absolute() and self._base_dir is not None:
            image_path = self._base_dir / image_path
        # Loaded eagerly so a missing file fails before the render pass starts.
        pixels, width, height = load_pixels(image_path)
        logger.debug("Loaded %dx%d image %s", width, height, image_path)
        return lambda view: view.img(pixels, width, height)


def build_layout(node: Any, base_dir: str | Path | None = None) -> Layout:
    """Compile a layout node tree into a single continuation."""
    return _Compiler(Path(base_dir) if base_dir is not None else None).compile(node, "layout")


def parse_document(data: Any, base_dir: str | Path | None = None) -> tuple[PageSettings, Layout]:
    if not isinstance(data, dict):
        raise LayoutDocumentError(f"document: expected an object, got {type(data).__name__}")
    if "layout" not in data:
        raise LayoutDocumentError("document: missing 'layout'")
    page = data.get("page", {})
    if not isinstance(page, dict):
        raise LayoutDocumentError(f"document.page: expected an object, got {page!r}")
    try:
        settings = settings_from_dict(page)
    except (AttributeError, TypeError, ValueError) as e:
        raise LayoutDocumentError(f"document.page: {e}") from e
    if base_dir is not None:
        fonts = settings.fonts
        for name in ("regular", "bold", "italic", "bold_italic"):
            font_path = getattr(fonts, name)
            if font_path is not None and not Path(font_path).is_absolute():
                setattr(fonts, name, str(Path(base_dir) / font_path))
    return settings, build_layout(data["layout"], base_dir)


def load_document(path: str | Path) -> tuple[PageSettings, Layout]:
    """Read a JSON layout document; relative image paths resolve next to it."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise LayoutDocumentError(f"{path}: invalid JSON: {e}") from e
    return parse_document(data, path.parent)
