"""Render a text string into a standalone SVG document.

The renderer is a pure function: options are resolved, a baseline is
computed and everything is interpolated into a fixed template. Nothing is
validated or escaped, so ``render()`` never raises; odd input simply
produces odd markup.

Example:
    >>> from svg_textgen import render
    >>> svg = render("ZALA13", {"width": 400, "fill": "#2c3e50"})
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any
from xml.sax.saxutils import escape as xml_escape

from svg_textgen.options import RenderOptions, resolve_options

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

# Empirical offset that roughly centers glyphs around the baseline
BASELINE_DIVISOR = 3.5
BOTTOM_MARGIN = 10

# Numeric string forms; Python-only spellings ("inf", "nan", "1_000") are NaN
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INFINITY_RE = re.compile(r"([+-]?)Infinity")
_RADIX_RE = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")

SVG_TEMPLATE = """
<svg width="{width}" height="{height}" xmlns="{namespace}">
    <text
        x="{x}"
        y="{y}"
        font-family="{font_family}"
        font-size="{font_size}"
        fill="{fill}"
        stroke="{stroke}"
        stroke-width="{stroke_width}"
        text-anchor="{text_anchor}"
        dominant-baseline="auto"
    >{text}</text>
</svg>
"""


def to_number(value: Any) -> float:
    """Coerce a value to a float, returning NaN instead of raising."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, str):
        return _string_to_number(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _string_to_number(value: str) -> float:
    value = value.strip()
    if not value:
        return 0.0
    if _DECIMAL_RE.fullmatch(value):
        return float(value)
    if _RADIX_RE.fullmatch(value):
        try:
            return float(int(value, 0))
        except OverflowError:
            return math.inf
    match = _INFINITY_RE.fullmatch(value)
    if match:
        return -math.inf if match.group(1) == "-" else math.inf
    return math.nan


def format_number(value: float) -> str:
    """Format a float the way it reads when interpolated into markup.

    Integral values drop the fractional part (``200`` not ``200.0``) and
    exponents only appear below 1e-6 or from 1e21 up.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exp_text = text.split("e")
    exponent = int(exp_text)
    if -7 < exponent < 0:
        sign = "-" if mantissa.startswith("-") else ""
        digits = mantissa.lstrip("-").replace(".", "")
        return f"{sign}0.{'0' * (-exponent - 1)}{digits}"
    return f"{mantissa}e{'+' if exponent > 0 else '-'}{abs(exponent)}"


def format_value(value: Any) -> str:
    """Convert an option value to attribute text without validating it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        if abs(value) < 10**21:
            return str(value)
        return format_number(to_number(value))
    if isinstance(value, float):
        return format_number(value)
    if value is None:
        return "null"
    return str(value)


def compute_baseline(options: RenderOptions) -> str:
    """Return the formatted y coordinate of the text baseline."""
    if options.vertical_align == "middle":
        y = (
            to_number(options.height) / 2
            + to_number(options.font_size) / BASELINE_DIVISOR
        )
        return format_number(y)
    if options.vertical_align == "top":
        return format_value(options.font_size)
    # anything else is treated as bottom
    return format_number(to_number(options.height) - BOTTOM_MARGIN)


def compute_anchor_x(options: RenderOptions) -> str:
    """Return the formatted x coordinate of the text anchor.

    The anchor always sits at the horizontal center; ``text_align`` only
    changes the ``text-anchor`` attribute.
    """
    return format_number(to_number(options.width) / 2)


def render(
    text: Any,
    options: RenderOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> str:
    """Render ``text`` into an SVG document string.

    Args:
        text: Character content of the ``<text>`` element. It is inserted
            as-is; use ``escape_text()`` first for untrusted input.
        options: ``RenderOptions`` or a mapping with camelCase or
            snake_case keys. Missing or falsy values get their defaults.
        **overrides: Individual options, applied on top of ``options``.

    Returns:
        The SVG markup with surrounding whitespace stripped.
    """
    resolved = resolve_options(options, **overrides)
    svg = SVG_TEMPLATE.format(
        width=format_value(resolved.width),
        height=format_value(resolved.height),
        namespace=SVG_NAMESPACE,
        x=compute_anchor_x(resolved),
        y=compute_baseline(resolved),
        font_family=format_value(resolved.font_family),
        font_size=format_value(resolved.font_size),
        fill=format_value(resolved.fill),
        stroke=format_value(resolved.stroke),
        stroke_width=format_value(resolved.stroke_width),
        text_anchor=format_value(resolved.text_align),
        text=format_value(text),
    )
    return svg.strip()


def escape_text(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for use as XML character content."""
    return xml_escape(text)
