"""Pytest configuration and shared fixtures for svg-textgen tests."""

import logging
from collections.abc import Generator
from pathlib import Path
from textwrap import dedent
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as ET
import pytest

SVG_NS = "http://www.w3.org/2000/svg"


def parse_svg(svg: str) -> Element:
    """Parse rendered SVG markup and return the root element."""
    return ET.fromstring(svg)


def text_element(svg: str) -> Element:
    """Return the single <text> element of a rendered document."""
    root = parse_svg(svg)
    elements = root.findall(f"{{{SVG_NS}}}text")
    assert len(elements) == 1
    return elements[0]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default config location at a file that does not exist."""
    missing = tmp_path / "no-config" / "config.yaml"
    monkeypatch.setattr("svg_textgen.config.DEFAULT_CONFIG_PATH", missing)
    return missing


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo the CLI's logging setup so caplog keeps working."""
    logger = logging.getLogger("svg_textgen")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a config file with a few render defaults."""
    path = tmp_path / "config.yaml"
    path.write_text(
        dedent("""
        log_level: info
        defaults:
          width: 400
          fontSize: 60
          fill: "#2c3e50"
        """),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def batch_file(tmp_path: Path) -> Path:
    """Write a batch file with a compact and a full item entry."""
    path = tmp_path / "batch.yaml"
    path.write_text(
        dedent("""
        settings:
          output_dir: out
          jobs: 2

        defaults:
          fill: "#2c3e50"

        items:
          - ZALA13
          - text: Hello
            output: custom/hello.svg
            options:
              fontSize: 60
              verticalAlign: top
        """),
        encoding="utf-8",
    )
    return path


slow = pytest.mark.slow
