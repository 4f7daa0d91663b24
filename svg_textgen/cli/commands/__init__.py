"""CLI commands for svg-textgen."""

from svg_textgen.cli.commands.batch import batch
from svg_textgen.cli.commands.render import render

__all__ = ["render", "batch"]
