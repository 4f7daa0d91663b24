"""Command-line interface for svg-textgen."""

from svg_textgen.cli.main import cli, main

__all__ = ["cli", "main"]
