"""Scraper package — probe, render and persist a single page."""

from sitegrab.scraper.models import ProbeResult, RenderOutput, ScrapeResult, WrittenPaths
from sitegrab.scraper.naming import sanitize
from sitegrab.scraper.orchestrator import scrape
from sitegrab.scraper.prober import probe
from sitegrab.scraper.renderer import RenderError, RenderTimeoutError, render_page
from sitegrab.scraper.writer import persist

__all__ = [
    "scrape",
    "sanitize",
    "probe",
    "render_page",
    "persist",
    "RenderError",
    "RenderTimeoutError",
    "ProbeResult",
    "RenderOutput",
    "ScrapeResult",
    "WrittenPaths",
]
