"""FastAPI application factory.

Server state
------------
Everything a request handler needs lives on the application object built by
:func:`create_app`:

    app.state.config     — :class:`ServerConfig` (listen address, render
                           deadline, output root)
    app.state.templates  — the Jinja2 template engine

Routers
-------
    /          — the scrape form
    /scrape    — run one scrape and render the result page
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from sitegrab import __version__
from sitegrab.api.routers import pages as pages_router
from sitegrab.config import parse_addr, settings

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@dataclass
class ServerConfig:
    addr: str = field(default_factory=lambda: settings.server_addr)
    timeout: float = field(default_factory=lambda: settings.render_timeout)
    output_dir: Path = field(default_factory=lambda: settings.output_dir)

    @property
    def host(self) -> str:
        return parse_addr(self.addr)[0]

    @property
    def port(self) -> int:
        return parse_addr(self.addr)[1]


def create_app(config: ServerConfig | None = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="sitegrab",
        description=(
            "Minimal web front end: submit a URL, render it in a headless "
            "browser and store its HTML, screenshot and links."
        ),
        version=__version__,
        docs_url=None,
        redoc_url=None,
    )
    app.state.config = config or ServerConfig()
    app.state.templates = Jinja2Templates(directory=_TEMPLATES_DIR)

    app.include_router(pages_router.router, tags=["pages"])

    return app
