"""sitegrab CLI — scrape one URL, or start the web front end.

Usage:
    python cli/main.py <URL> [--timeout 30]
    python cli/main.py --serve [--addr 127.0.0.1:8080] [--timeout 30]
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from sitegrab.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import NoReturn, Optional

import typer

from sitegrab.config import parse_addr, settings
from sitegrab.scraper.models import ScrapeResult
from sitegrab.scraper.orchestrator import scrape

app = typer.Typer(
    name="sitegrab",
    help="Render a web page and save its HTML, screenshot and links.",
    add_completion=False,
)

_USAGE = """\
Kullanım:
  sitegrab <URL>
  sitegrab --serve [--addr 127.0.0.1:8080] [--timeout 30]
Örnek:
  sitegrab https://example.com
  sitegrab --serve"""


def _fatal(message: str) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


def _bootstrap() -> None:
    try:
        settings.ensure_output_dirs()
    except OSError as exc:
        _fatal(f"Klasörler oluşturulamadı: {exc}")


def _report(result: ScrapeResult) -> None:
    """Print the per-artifact outcome of a finished scrape."""
    if result.html_path:
        typer.echo(f"html icerigi kaydedildi {result.html_path}")
    if result.screenshot_path:
        typer.echo(f"ekran goruntusu kaydedildi {result.screenshot_path}")
    if result.urls_path:
        typer.echo(f"{result.link_count} adet url kaydedildi {result.urls_path}")
    for name, error in result.write_errors.items():
        typer.echo(f"{name} kaydedilemedi {error}", err=True)


def _serve(addr: str, timeout: int) -> None:
    import uvicorn

    from sitegrab.api import ServerConfig, create_app

    try:
        host, port = parse_addr(addr)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--addr") from exc

    _bootstrap()
    server_app = create_app(
        ServerConfig(addr=addr, timeout=float(timeout), output_dir=settings.output_dir)
    )
    typer.echo(f"Web arayüzü başlatıldı: http://{addr}")
    uvicorn.run(server_app, host=host, port=port, log_level=settings.log_level.lower())


@app.command()
def main(
    url: Optional[str] = typer.Argument(None, help="URL to scrape."),
    serve: bool = typer.Option(False, "--serve", help="Start the web front end."),
    addr: str = typer.Option(settings.server_addr, "--addr", help="Server address (host:port)."),
    timeout: int = typer.Option(
        int(settings.render_timeout), "--timeout", help="Render timeout in seconds."
    ),
) -> None:
    """Scrape URL once, or serve the web form with --serve."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if serve:
        _serve(addr, timeout)
        return

    if not url:
        typer.echo(_USAGE)
        raise typer.Exit(code=1)

    _bootstrap()

    typer.echo(f"Hedef URL: {url}")
    result = scrape(url, float(timeout))

    if result.status_code > 0:
        typer.echo(f"http status {result.status_code}")
    else:
        typer.echo(f"status kodu alinamadi {result.probe_error or ''}".rstrip())

    if not result.ok:
        _fatal(f"Hata: {result.error}")

    _report(result)
    if result.status_code > 0:
        typer.echo(f"\nislem basariyla tamamlandi HTTP {result.status_code}")
    else:
        typer.echo("\nislem basariyla tamamlandi")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
