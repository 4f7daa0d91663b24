"""Exception hierarchy for svg-textgen.

``render()`` itself never raises; these cover the layers around it
(configuration files, batch files and writing output).
"""

from __future__ import annotations

from pathlib import Path


class TextGenError(Exception):
    """Base exception for all svg-textgen errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(TextGenError):
    """Raised when a configuration file cannot be loaded or is invalid."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message, {"path": str(path) if path else None})
        self.path = path


class BatchConfigError(ConfigError):
    """Raised when a batch file is invalid."""


class OutputError(TextGenError):
    """Raised when a rendered SVG cannot be written."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message, {"path": str(path) if path else None})
        self.path = path
