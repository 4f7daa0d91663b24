"""Tests for svg_textgen.output."""

import logging
from pathlib import Path

import pytest

from svg_textgen import OutputError, render, suggest_filename, write_svg
from svg_textgen.output import SVG_MIME_TYPE, open_in_browser


class TestSuggestFilename:
    def test_plain_text(self) -> None:
        assert suggest_filename("ZALA13") == "ZALA13.svg"

    def test_unsafe_characters_replaced(self) -> None:
        assert suggest_filename("Hello World/2") == "Hello_World_2.svg"

    def test_empty_result_gets_placeholder(self) -> None:
        assert suggest_filename("   ") == "text.svg"
        assert suggest_filename("..") == "text.svg"


class TestWriteSvg:
    def test_writes_utf8_and_creates_parents(self, tmp_path: Path) -> None:
        svg = render("Größe")
        target = tmp_path / "nested" / "dir" / "out.svg"

        written = write_svg(svg, target)

        assert written == target
        assert target.read_text(encoding="utf-8") == svg

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        written = write_svg("<svg/>", str(tmp_path / "a.svg"))
        assert isinstance(written, Path)

    def test_logs_written_path(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="svg_textgen"):
            write_svg("<svg/>", tmp_path / "a.svg")
        assert "a.svg" in caplog.text

    def test_unwritable_path_raises_output_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(OutputError, match="Cannot write SVG") as exc_info:
            write_svg("<svg/>", blocker / "out.svg")
        assert exc_info.value.path == blocker / "out.svg"


class TestOpenInBrowser:
    def test_opens_file_uri(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        opened: list[str] = []
        monkeypatch.setattr("webbrowser.open", lambda url: opened.append(url) or True)
        path = write_svg("<svg/>", tmp_path / "a.svg")

        assert open_in_browser(path) is True
        assert opened == [path.absolute().as_uri()]


def test_mime_type() -> None:
    assert SVG_MIME_TYPE == "image/svg+xml"
