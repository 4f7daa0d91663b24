"""Entry point for the ``svg-textgen`` command."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape as escape_markup
from rich.logging import RichHandler

from svg_textgen import __version__
from svg_textgen.cli.commands import batch, render
from svg_textgen.config import LOG_LEVELS, Config
from svg_textgen.exceptions import ConfigError

err_console = Console(stderr=True)


def setup_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
    root = logging.getLogger("svg_textgen")
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False


@click.group()
@click.version_option(__version__, prog_name="svg-textgen")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: from config, else WARNING)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="Path to a YAML config file",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, config_path: Path | None) -> None:
    """Render short text strings as SVG images."""
    ctx.ensure_object(dict)
    try:
        config = Config.load(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {escape_markup(e.message)}")
        raise SystemExit(1) from e

    level = (log_level or config.log_level).upper()
    setup_logging(level)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = level


cli.add_command(render)
cli.add_command(batch)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
