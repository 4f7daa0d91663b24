"""Render command - render one text string to SVG."""

from __future__ import annotations

import os
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape as escape_markup

from svg_textgen.config import Config
from svg_textgen.exceptions import TextGenError
from svg_textgen.options import TEXT_ALIGN_CHOICES, VERTICAL_ALIGN_CHOICES
from svg_textgen.output import open_in_browser, suggest_filename, write_svg
from svg_textgen.renderer import escape_text
from svg_textgen.renderer import render as render_svg

console = Console(stderr=True)


def resolve_output(output: str | None, text: str) -> Path:
    """Return the file to write, naming it after the text for directories.

    A value ending in a path separator is a directory even if it does not
    exist yet.
    """
    if output is None:
        return Path(suggest_filename(text))
    separators = tuple(sep for sep in (os.sep, os.altsep) if sep)
    path = Path(output)
    if output.endswith(separators) or path.is_dir():
        return path / suggest_filename(text)
    return path


@click.command()
@click.argument("text")
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Output file or directory (default: print to stdout)",
)
@click.option("--width", type=float, help="Canvas width")
@click.option("--height", type=float, help="Canvas height")
@click.option("--font-size", type=float, help="Font size")
@click.option("--font-family", help="Font family list")
@click.option("--fill", help="Text fill color")
@click.option("--stroke", help="Text outline color, or 'none'")
@click.option("--stroke-width", type=float, help="Outline width")
@click.option("--text-align", type=click.Choice(TEXT_ALIGN_CHOICES), help="Value of text-anchor")
@click.option(
    "--vertical-align",
    type=click.Choice(VERTICAL_ALIGN_CHOICES),
    help="Vertical placement of the baseline",
)
@click.option("--escape", is_flag=True, help="Escape &, < and > in TEXT")
@click.option("--open", "open_browser", is_flag=True, help="Open the written file in a browser")
@click.pass_context
def render(
    ctx: click.Context,
    text: str,
    output: str | None,
    width: float | None,
    height: float | None,
    font_size: float | None,
    font_family: str | None,
    fill: str | None,
    stroke: str | None,
    stroke_width: float | None,
    text_align: str | None,
    vertical_align: str | None,
    escape: bool,
    open_browser: bool,
) -> None:
    """Render TEXT as an SVG image.

    Options not given on the command line come from the config file
    defaults. Zero or empty values fall back to the defaults as well.
    """
    obj = ctx.obj or {}
    config = obj.get("config") or Config.load()

    options = config.render_options(
        {
            "width": width,
            "height": height,
            "font_size": font_size,
            "font_family": font_family,
            "fill": fill,
            "stroke": stroke,
            "stroke_width": stroke_width,
            "text_align": text_align,
            "vertical_align": vertical_align,
        }
    )
    svg = render_svg(escape_text(text) if escape else text, options)

    if output is None and not open_browser:
        click.echo(svg)
        return

    target = resolve_output(output, text)

    try:
        written = write_svg(svg, target)
    except TextGenError as e:
        console.print(f"[red]Error:[/red] {escape_markup(e.message)}")
        raise SystemExit(1) from e

    console.print(f"[green]Wrote[/green] {written}")
    if open_browser:
        open_in_browser(written)
