"""CLI entry point for gridpage. Uses Click for argument parsing."""

from __future__ import annotations

import logging

import click

from gridpage.ansi import grid_to_ansi
from gridpage.config import PageSettings
from gridpage.document import LayoutDocumentError, load_document
from gridpage.page import PageView
from gridpage.view import render


def _load(doc: str):
    try:
        return load_document(doc)
    except (LayoutDocumentError, OSError) as e:
        raise click.ClickException(str(e)) from e


def _build(settings: PageSettings) -> PageView:
    try:
        return PageView.build(settings)
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    help="Logging verbosity",
)
def main(log_level):
    """Lay out text and images on a monospace character grid."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@main.command("render")
@click.argument("doc", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False), help="Output file (.pdf, .png, ...)")
@click.option("--dpi", type=click.IntRange(min=1), default=None, help="Raster resolution, overrides the document")
def render_command(doc, output, dpi):
    """Render a layout document to a page file."""
    settings, layout = _load(doc)
    if dpi is not None:
        settings.dpi = dpi
    view = _build(settings)
    try:
        path = view.save(layout, output)
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Wrote {view.rows}x{view.cols} grid to {path}")


@main.command()
@click.argument("doc", type=click.Path(exists=True, dir_okay=False))
@click.option("--rows", type=click.IntRange(min=0), default=None, help="Grid rows (default: fit the page)")
@click.option("--cols", type=click.IntRange(min=0), default=None, help="Grid columns (default: fit the page)")
@click.option("--color/--no-color", default=True, help="Keep ANSI colors when output is not a terminal")
def preview(doc, rows, cols, color):
    """Print a layout document as ANSI text."""
    settings, layout = _load(doc)
    if rows is None or cols is None:
        view = _build(settings)
        rows = view.rows if rows is None else rows
        cols = view.cols if cols is None else cols
    grid = render(rows, cols, layout, settings.palette)
    click.echo(grid_to_ansi(grid), color=color)


@main.command()
@click.argument("doc", type=click.Path(exists=True, dir_okay=False))
def size(doc):
    """Print how many rows and columns fit the document's page."""
    settings, _ = _load(doc)
    view = _build(settings)
    click.echo(f"{view.rows} rows x {view.cols} cols")


if __name__ == "__main__":
    main()
