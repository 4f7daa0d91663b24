"""Render options and default resolution.

Each option is resolved independently: a value that is missing *or falsy*
(``None``, ``0``, ``""``, ``False``, NaN) falls back to its default. This
means ``width=0`` renders a 300 wide canvas, not an empty one.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

DEFAULT_WIDTH = 300
DEFAULT_HEIGHT = 150
DEFAULT_FONT_SIZE = 48
DEFAULT_FONT_FAMILY = "Arial, Helvetica, sans-serif"
DEFAULT_FILL = "#000000"
DEFAULT_STROKE = "none"
DEFAULT_STROKE_WIDTH = 1
DEFAULT_TEXT_ALIGN = "center"
DEFAULT_VERTICAL_ALIGN = "middle"

TEXT_ALIGN_CHOICES = ("left", "center", "right")
VERTICAL_ALIGN_CHOICES = ("top", "middle", "bottom")

# camelCase names accepted in mappings and YAML files
OPTION_ALIASES = {
    "width": "width",
    "height": "height",
    "fontSize": "font_size",
    "fontFamily": "font_family",
    "fill": "fill",
    "stroke": "stroke",
    "strokeWidth": "stroke_width",
    "textAlign": "text_align",
    "verticalAlign": "vertical_align",
}


@dataclass(frozen=True)
class RenderOptions:
    """Options for rendering a text string to SVG.

    Values are not validated; whatever is given ends up in the markup.
    """

    width: Any = DEFAULT_WIDTH
    height: Any = DEFAULT_HEIGHT
    font_size: Any = DEFAULT_FONT_SIZE
    font_family: Any = DEFAULT_FONT_FAMILY
    fill: Any = DEFAULT_FILL
    stroke: Any = DEFAULT_STROKE
    stroke_width: Any = DEFAULT_STROKE_WIDTH
    text_align: Any = DEFAULT_TEXT_ALIGN
    vertical_align: Any = DEFAULT_VERTICAL_ALIGN

    def to_dict(self) -> dict[str, Any]:
        """Return the options keyed by their camelCase names."""
        return {alias: getattr(self, name) for alias, name in OPTION_ALIASES.items()}


DEFAULT_OPTIONS = RenderOptions()


def is_falsy(value: Any) -> bool:
    """Return True for values that should be replaced by a default."""
    if isinstance(value, float) and math.isnan(value):
        return True
    try:
        return not value
    except (TypeError, ValueError):
        # objects with a broken __bool__ count as provided
        return False


def normalize_keys(options: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase or snake_case option keys to field names.

    Unknown keys are dropped.
    """
    field_names = {f.name for f in fields(RenderOptions)}
    normalized: dict[str, Any] = {}
    for key, value in options.items():
        name = OPTION_ALIASES.get(key, key)
        if name in field_names:
            normalized[name] = value
    return normalized


def resolve_options(
    options: RenderOptions | Mapping[str, Any] | None = None,
    defaults: RenderOptions = DEFAULT_OPTIONS,
    **overrides: Any,
) -> RenderOptions:
    """Merge user supplied options onto defaults.

    Args:
        options: A ``RenderOptions`` instance, a mapping (camelCase or
            snake_case keys) or None.
        defaults: Fallback values for every field.
        **overrides: Extra options applied on top of ``options``.

    Returns:
        A ``RenderOptions`` with every falsy field replaced by its default.
    """
    if options is None:
        supplied: dict[str, Any] = {}
    elif isinstance(options, RenderOptions):
        supplied = {f.name: getattr(options, f.name) for f in fields(RenderOptions)}
    else:
        supplied = normalize_keys(options)
    supplied.update(normalize_keys(overrides))

    resolved = {}
    for f in fields(RenderOptions):
        value = supplied.get(f.name)
        if is_falsy(value):
            value = getattr(defaults, f.name)
            if is_falsy(value):
                value = getattr(DEFAULT_OPTIONS, f.name)
        resolved[f.name] = value
    return RenderOptions(**resolved)
