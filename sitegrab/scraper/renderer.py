"""Headless browser rendering under a wall-clock deadline.

A render opens a fresh Playwright Chromium instance for exactly one URL,
collects the serialised document, a full-page screenshot and every anchor
``href``, then tears everything down again.  The work is all-or-nothing:
any failure, including running out of time, raises :class:`RenderError`
and no partial output is returned.

The deadline starts when the session is opened, so launching the browser
consumes the same budget as navigation.  Each browser call is handed the
time that is left; once it reaches zero :class:`RenderTimeoutError` is
raised.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from sitegrab.config import settings
from sitegrab.scraper.models import RenderOutput

logger = logging.getLogger(__name__)

_READY_SELECTOR = "body"
_COLLECT_LINKS_JS = "Array.from(document.querySelectorAll('a')).map(a => a.href)"
_SCREENSHOT_TYPE = "png"
# Only honoured by lossy formats; Playwright rejects it for PNG.
_SCREENSHOT_QUALITY = 90


class RenderError(Exception):
    """The browser could not produce a complete render of the page."""


class RenderTimeoutError(RenderError):
    """The render deadline expired before all steps completed."""


class Deadline:
    """A fixed point in time measured on the monotonic clock."""

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        self._expires_at = time.monotonic() + seconds

    def remaining(self) -> float:
        return self._expires_at - time.monotonic()

    def remaining_ms(self) -> float:
        """Milliseconds left, for Playwright ``timeout=`` arguments.

        Raises:
            RenderTimeoutError: If the deadline has passed.  Playwright treats
                ``timeout=0`` as "wait forever", so an exhausted budget must
                never be passed through.
        """
        left = self.remaining() * 1000
        if left < 1:
            raise RenderTimeoutError(f"render deadline of {self.seconds:g}s exceeded")
        return left


def _screenshot_options(deadline: Deadline) -> dict:
    options: dict = {
        "full_page": True,
        "type": _SCREENSHOT_TYPE,
        "timeout": deadline.remaining_ms(),
    }
    if _SCREENSHOT_TYPE == "jpeg":
        options["quality"] = _SCREENSHOT_QUALITY
    return options


class RenderSession:
    """Handle on one open page; only valid inside :func:`open_session`."""

    def __init__(self, page: Page, deadline: Deadline) -> None:
        self.page = page
        self.deadline = deadline

    def navigate(self, url: str) -> None:
        self.page.goto(url, wait_until="load", timeout=self.deadline.remaining_ms())

    def wait_ready(self) -> None:
        self.page.wait_for_selector(
            _READY_SELECTOR, state="attached", timeout=self.deadline.remaining_ms()
        )

    def outer_html(self) -> str:
        return self.page.locator("html").evaluate(
            "el => el.outerHTML", timeout=self.deadline.remaining_ms()
        )

    def screenshot(self) -> bytes:
        return self.page.screenshot(**_screenshot_options(self.deadline))

    def collect_links(self) -> list[str]:
        """Return the ``href`` of every ``<a>`` in document order, duplicates kept.

        ``page.evaluate`` accepts no timeout, so this step is checked against
        the deadline before and after the script runs but is not interrupted
        while it runs; a page that blocks its main thread can overrun the
        budget here.
        """
        self.deadline.remaining_ms()
        links = self.page.evaluate(_COLLECT_LINKS_JS)
        self.deadline.remaining_ms()
        if not isinstance(links, list):
            raise RenderError(f"link script returned {type(links).__name__}, expected a list")
        return [str(link) for link in links]


@contextmanager
def open_session(timeout: float) -> Iterator[RenderSession]:
    """Launch an isolated headless browser and yield a :class:`RenderSession`.

    The browser context, the browser and the Playwright driver are closed
    on every exit path, whether the body returns, raises or times out.
    """
    deadline = Deadline(timeout)
    with sync_playwright() as pw:
        browser = pw.chromium.launch(
            headless=settings.browser_headless,
            timeout=deadline.remaining_ms(),
        )
        try:
            context_args: dict = {}
            if settings.user_agent:
                context_args["user_agent"] = settings.user_agent
            context = browser.new_context(**context_args)
            try:
                context.set_default_timeout(deadline.remaining_ms())
                page = context.new_page()
                yield RenderSession(page, deadline)
            finally:
                context.close()
        finally:
            browser.close()


def render_page(url: str, timeout: float | None = None) -> RenderOutput:
    """Render *url* and return its HTML, a screenshot and its link targets.

    Args:
        url: Target URL, passed to the browser unchanged.
        timeout: Overall budget in seconds for the whole session; defaults to
            ``settings.render_timeout``.

    Raises:
        RenderTimeoutError: If the deadline expires.
        RenderError: On any navigation, readiness or script failure.
    """
    timeout = settings.render_timeout if timeout is None else timeout
    logger.info("scraper: rendering %s (deadline %gs)", url, timeout)

    try:
        with open_session(timeout) as session:
            session.navigate(url)
            session.wait_ready()
            html = session.outer_html()
            screenshot = session.screenshot()
            links = session.collect_links()
    except PlaywrightTimeoutError as exc:
        raise RenderTimeoutError(f"render of {url} timed out: {exc}") from exc
    except PlaywrightError as exc:
        raise RenderError(f"render of {url} failed: {exc}") from exc

    logger.info(
        "scraper: rendered %s (%d chars html, %d bytes screenshot, %d links)",
        url,
        len(html),
        len(screenshot),
        len(links),
    )
    return RenderOutput(html=html, screenshot=screenshot, links=links)
