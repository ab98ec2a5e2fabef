"""HTML page endpoints.

Routes
------
GET  /          The scrape form
POST /scrape    Form field ``url`` → scrape → result page

A failed scrape is still a ``200`` response: the outcome is shown in the
page itself through the ``ok`` / ``err`` message class and the HTTP status
badge.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse

from sitegrab.scraper.models import ScrapeResult
from sitegrab.scraper.orchestrator import scrape

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _render(request: Request, **context: Any) -> HTMLResponse:
    page: dict[str, Any] = {
        "message": "",
        "css_class": "",
        "files": [],
        "write_errors": {},
        "status_code": 0,
    }
    page.update(context)
    templates = request.app.state.templates
    return templates.TemplateResponse(request, "index.html", page)


def _result_context(result: ScrapeResult) -> dict[str, Any]:
    if not result.ok:
        if result.status_code > 0:
            message = f"Hata (HTTP {result.status_code}): {result.error}"
        else:
            message = f"Hata: {result.error}"
        return {"message": message, "css_class": "err", "status_code": result.status_code}

    message = "islem tamamlandi"
    if result.status_code > 0:
        message = f"islem tamamlandi HTTP {result.status_code}"
    return {
        "message": message,
        "css_class": "ok",
        "status_code": result.status_code,
        "files": [str(p) for p in result.files],
        "write_errors": result.write_errors,
    }


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/", response_class=HTMLResponse)
def index(request: Request) -> HTMLResponse:
    """Render the empty scrape form."""
    return _render(request)


@router.post("/scrape", response_class=HTMLResponse)
def scrape_endpoint(
    request: Request,
    url: Annotated[str, Form()] = "",
) -> HTMLResponse:
    """Run one scrape synchronously and show what it produced."""
    target = url.strip()
    if not target:
        return _render(request, message="Lütfen bir URL girin", css_class="err")

    config = request.app.state.config
    result = scrape(target, config.timeout, root=config.output_dir)
    return _render(request, **_result_context(result))
