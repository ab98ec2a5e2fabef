"""One scrape, start to finish: probe, render, persist.

This is the single code path shared by the CLI and the web front end.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from sitegrab.config import settings
from sitegrab.scraper.models import ScrapeResult
from sitegrab.scraper.naming import sanitize
from sitegrab.scraper.prober import probe
from sitegrab.scraper.renderer import RenderError, render_page
from sitegrab.scraper.writer import persist

logger = logging.getLogger(__name__)


def scrape(
    url: str,
    timeout: Optional[float] = None,
    *,
    root: Optional[Path] = None,
) -> ScrapeResult:
    """Scrape *url* and write its artifacts under *root*.

    The status probe is advisory: a failed probe leaves ``status_code`` at
    ``0`` and rendering goes ahead regardless.  A render failure ends the
    call with ``error`` set and nothing written.  Failed artifact writes are
    listed in ``write_errors`` but do not make the scrape fail.

    Args:
        url: Target URL.
        timeout: Render deadline in seconds (``settings.render_timeout`` if
            omitted).  The probe has its own, shorter timeout.
        root: Output root holding ``data/``, ``screenshot/`` and ``urls/``;
            defaults to ``settings.output_dir``.
    """
    timeout = settings.render_timeout if timeout is None else timeout

    probed = probe(url)
    if probed.error:
        logger.info("scraper: no status for %s (%s), rendering anyway", url, probed.error)
    else:
        logger.info("scraper: %s answered HTTP %d", url, probed.status_code)

    result = ScrapeResult(
        url=url,
        identifier=sanitize(url),
        status_code=probed.status_code,
        probe_error=probed.error,
    )

    try:
        output = render_page(url, timeout)
    except RenderError as exc:
        logger.warning("scraper: render failed for %s: %s", url, exc)
        result.error = str(exc)
        return result

    written = persist(result.identifier, output, root=root)
    result.html_path = written.html_path
    result.screenshot_path = written.screenshot_path
    result.urls_path = written.urls_path
    result.link_count = len(output.links)
    result.write_errors = written.errors
    return result
