"""Data models for the scrape pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


@dataclass
class ProbeResult:
    """Outcome of the advisory reachability check.

    ``status_code`` is ``0`` when no response was obtained, in which case
    ``error`` describes the transport failure.
    """

    status_code: int = 0
    error: Optional[str] = None


@dataclass
class RenderOutput:
    """Everything captured from one successful browser render."""

    html: str
    screenshot: bytes
    links: List[str] = field(default_factory=list)


@dataclass
class WrittenPaths:
    """The artifacts that made it to disk, plus per-artifact write errors."""

    html_path: Optional[Path] = None
    screenshot_path: Optional[Path] = None
    urls_path: Optional[Path] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def paths(self) -> List[Path]:
        """Successfully written paths in write order."""
        return [
            p
            for p in (self.html_path, self.screenshot_path, self.urls_path)
            if p is not None
        ]


@dataclass
class ScrapeResult:
    """Summary returned by :func:`~sitegrab.scraper.orchestrator.scrape`."""

    url: str
    identifier: str
    status_code: int = 0
    probe_error: Optional[str] = None
    html_path: Optional[Path] = None
    screenshot_path: Optional[Path] = None
    urls_path: Optional[Path] = None
    link_count: int = 0
    error: Optional[str] = None
    write_errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def files(self) -> List[Path]:
        return [
            p
            for p in (self.html_path, self.screenshot_path, self.urls_path)
            if p is not None
        ]
