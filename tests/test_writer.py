"""Tests for artifact persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from sitegrab.config import settings
from sitegrab.scraper.models import RenderOutput
from sitegrab.scraper.writer import html_path, persist, screenshot_path, urls_path

_OUTPUT = RenderOutput(
    html="<html><body>hi</body></html>",
    screenshot=b"0123456789",
    links=["https://example.com/a", "https://example.com/b"],
)


@pytest.fixture()
def out_root(tmp_path: Path) -> Path:
    settings.ensure_output_dirs(tmp_path)
    return tmp_path


def _break_dir(root: Path, name: str) -> None:
    """Replace an output directory with a plain file so writes into it fail."""
    (root / name).rmdir()
    (root / name).write_text("not a directory")


class TestPaths:
    def test_layout(self, tmp_path: Path) -> None:
        assert html_path("site", tmp_path) == tmp_path / "data" / "site_data.html"
        assert screenshot_path("site", tmp_path) == tmp_path / "screenshot" / "site_screenshot.png"
        assert urls_path("site", tmp_path) == tmp_path / "urls" / "site_urls.txt"

    def test_defaults_to_settings_output_dir(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setattr("sitegrab.config.settings.output_dir", tmp_path)
        assert html_path("site") == tmp_path / "data" / "site_data.html"


class TestPersist:
    def test_writes_all_three(self, out_root: Path) -> None:
        written = persist("example.com", _OUTPUT, root=out_root)

        assert written.errors == {}
        assert written.paths == [
            out_root / "data" / "example.com_data.html",
            out_root / "screenshot" / "example.com_screenshot.png",
            out_root / "urls" / "example.com_urls.txt",
        ]
        assert written.html_path.read_text(encoding="utf-8") == _OUTPUT.html
        assert written.screenshot_path.read_bytes() == b"0123456789"
        assert written.urls_path.read_text(encoding="utf-8") == (
            "https://example.com/a\nhttps://example.com/b"
        )

    def test_no_links_no_urls_file(self, out_root: Path) -> None:
        output = RenderOutput(html="<html></html>", screenshot=b"x", links=[])
        written = persist("empty", output, root=out_root)

        assert written.urls_path is None
        assert list((out_root / "urls").iterdir()) == []
        assert written.html_path is not None
        assert written.screenshot_path is not None

    def test_overwrites_previous_artifacts(self, out_root: Path) -> None:
        persist("site", _OUTPUT, root=out_root)
        second = RenderOutput(html="<html>new</html>", screenshot=b"new", links=["x"])
        written = persist("site", second, root=out_root)

        assert written.html_path.read_text(encoding="utf-8") == "<html>new</html>"
        assert written.screenshot_path.read_bytes() == b"new"
        assert written.urls_path.read_text(encoding="utf-8") == "x"

    def test_failed_write_does_not_stop_later_writes(self, out_root: Path) -> None:
        _break_dir(out_root, "screenshot")

        written = persist("example.com", _OUTPUT, root=out_root)

        assert written.screenshot_path is None
        assert "screenshot" in written.errors
        assert written.html_path == out_root / "data" / "example.com_data.html"
        assert written.urls_path == out_root / "urls" / "example.com_urls.txt"
        assert written.urls_path.exists()

    def test_first_write_failure_reported(self, out_root: Path) -> None:
        _break_dir(out_root, "data")

        written = persist("example.com", _OUTPUT, root=out_root)

        assert set(written.errors) == {"html"}
        assert len(written.paths) == 2

    def test_no_temp_files_left_behind(self, out_root: Path) -> None:
        persist("example.com", _OUTPUT, root=out_root)

        for name in ("data", "screenshot", "urls"):
            leftovers = [p for p in (out_root / name).iterdir() if p.name.endswith(".tmp")]
            assert leftovers == []
