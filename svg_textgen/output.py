"""Writing rendered SVG documents and handing them to a browser."""

from __future__ import annotations

import logging
import re
import webbrowser
from pathlib import Path

from svg_textgen.exceptions import OutputError

logger = logging.getLogger(__name__)

SVG_MIME_TYPE = "image/svg+xml"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def suggest_filename(text: str) -> str:
    """Derive a file name like ``ZALA13.svg`` from the rendered text."""
    stem = _UNSAFE_CHARS.sub("_", text.strip()).strip("._")
    return f"{stem or 'text'}.svg"


def write_svg(svg: str, path: Path | str) -> Path:
    """Write an SVG document to ``path`` as UTF-8.

    Parent directories are created as needed.

    Raises:
        OutputError: If the file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(svg, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Cannot write SVG to {path}: {e}", path=path) from e
    logger.info("Wrote %s (%d bytes)", path, len(svg.encode("utf-8")))
    return path


def open_in_browser(path: Path | str) -> bool:
    """Open a written SVG file in the default browser."""
    url = Path(path).absolute().as_uri()
    logger.debug("Opening %s", url)
    return webbrowser.open(url)
