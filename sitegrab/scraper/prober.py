"""Advisory reachability check performed before a page is rendered."""

from __future__ import annotations

import logging

import httpx

from sitegrab.config import settings
from sitegrab.scraper.models import ProbeResult

logger = logging.getLogger(__name__)

# Anything that leaves us without an HTTP answer: transport failures,
# redirect loops, URLs httpx refuses to send, and hostnames the resolver
# cannot IDNA-encode (UnicodeError, a ValueError, is raised unwrapped).
_PROBE_ERRORS = (httpx.RequestError, httpx.InvalidURL, ValueError)


def _default_headers() -> dict[str, str]:
    if settings.user_agent:
        return {"User-Agent": settings.user_agent}
    return {}


def probe(url: str, *, timeout: float | None = None) -> ProbeResult:
    """Return the HTTP status of *url* without downloading it if possible.

    A ``HEAD`` request is tried first.  Only a request-level failure (DNS,
    refused connection, timeout, unencodable host, ...) triggers a single
    ``GET`` fallback; any status code the server answers with is final.
    Both attempts share the same short timeout, independent of the render
    deadline.

    Never raises for network or address problems: when both attempts fail
    the result carries ``status_code=0`` and the last error message.
    """
    timeout = settings.probe_timeout if timeout is None else timeout

    with httpx.Client(
        headers=_default_headers(),
        timeout=timeout,
        follow_redirects=True,
    ) as client:
        try:
            response = client.head(url)
        except _PROBE_ERRORS as exc:
            logger.debug("scraper: HEAD failed for %s: %s; retrying with GET", url, exc)
            try:
                response = client.get(url)
            except _PROBE_ERRORS as exc:
                logger.warning("scraper: status probe failed for %s: %s", url, exc)
                return ProbeResult(status_code=0, error=str(exc) or type(exc).__name__)

    return ProbeResult(status_code=response.status_code)
