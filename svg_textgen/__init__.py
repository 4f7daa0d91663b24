"""svg-textgen: Render short text strings as SVG images.

This library provides:
- A pure ``render()`` function producing a standalone SVG document
- Falsy-or-default option resolution (``width=0`` means "use 300")
- Helpers for writing the result and opening it in a browser
- A YAML config file and a ``svg-textgen`` command line tool

Example:
    >>> from svg_textgen import render
    >>> svg = render("ZALA13", {"width": 400, "height": 200, "fontSize": 60})
"""

from svg_textgen.config import Config
from svg_textgen.exceptions import (
    BatchConfigError,
    ConfigError,
    OutputError,
    TextGenError,
)
from svg_textgen.options import RenderOptions, resolve_options
from svg_textgen.output import SVG_MIME_TYPE, suggest_filename, write_svg
from svg_textgen.renderer import escape_text, render

__version__ = "0.1.0"

__all__ = [
    # Main API
    "render",
    "escape_text",
    "RenderOptions",
    "resolve_options",
    "Config",
    # Output
    "write_svg",
    "suggest_filename",
    "SVG_MIME_TYPE",
    # Exceptions
    "TextGenError",
    "ConfigError",
    "BatchConfigError",
    "OutputError",
    # Metadata
    "__version__",
]
