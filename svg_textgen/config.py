"""YAML configuration for svg-textgen.

Example ``~/.config/svg-textgen/config.yaml``::

    log_level: INFO
    defaults:
      width: 400
      fontSize: 60
      fill: "#2c3e50"
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from svg_textgen.exceptions import ConfigError
from svg_textgen.options import DEFAULT_OPTIONS, RenderOptions, resolve_options

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "svg-textgen" / "config.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def read_yaml_mapping(path: Path, error_cls: type[ConfigError] = ConfigError) -> dict:
    """Read a YAML file whose top level must be a mapping (or empty)."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise error_cls(f"Cannot read {path}: {e}", path=path) from e
    except yaml.YAMLError as e:
        raise error_cls(f"Invalid YAML in {path}: {e}", path=path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise error_cls(f"Top level of {path} must be a mapping", path=path)
    return data


def options_from_mapping(
    data: Any,
    what: str,
    path: Path | None = None,
    defaults: RenderOptions = DEFAULT_OPTIONS,
    error_cls: type[ConfigError] = ConfigError,
) -> RenderOptions:
    """Build render options from a YAML ``defaults``/``options`` section."""
    if data is None:
        return defaults
    if not isinstance(data, Mapping):
        raise error_cls(f"'{what}' must be a mapping of render options", path=path)
    return resolve_options(data, defaults=defaults)


@dataclass
class Config:
    """User configuration: default render options and log level."""

    defaults: RenderOptions = field(default_factory=RenderOptions)
    log_level: str = "WARNING"
    path: Path | None = None

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load configuration from ``path`` or the default location.

        A missing file at the default location yields the built-in
        defaults; a missing explicit ``path`` is an error.
        """
        if path is None:
            if not DEFAULT_CONFIG_PATH.exists():
                logger.debug("No config at %s, using defaults", DEFAULT_CONFIG_PATH)
                return cls()
            path = DEFAULT_CONFIG_PATH
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}", path=path)

        data = read_yaml_mapping(path)
        log_level = str(data.get("log_level", "WARNING")).upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid log_level '{log_level}', expected one of {', '.join(LOG_LEVELS)}",
                path=path,
            )
        defaults = options_from_mapping(data.get("defaults"), "defaults", path)
        logger.debug("Loaded config from %s", path)
        return cls(defaults=defaults, log_level=log_level, path=path)

    def render_options(self, overrides: Mapping[str, Any] | None = None) -> RenderOptions:
        """Layer explicit overrides on the configured defaults.

        Overrides set to ``None`` are ignored.
        """
        given = {k: v for k, v in (overrides or {}).items() if v is not None}
        return resolve_options(given, defaults=self.defaults)
