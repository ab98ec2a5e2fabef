"""Persist render output as the data / screenshot / urls artifact set."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from sitegrab.config import settings
from sitegrab.scraper.models import RenderOutput, WrittenPaths

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def html_path(identifier: str, root: Optional[Path] = None) -> Path:
    data_dir, _, _ = settings.output_dirs(root)
    return data_dir / f"{identifier}_data.html"


def screenshot_path(identifier: str, root: Optional[Path] = None) -> Path:
    _, screenshot_dir, _ = settings.output_dirs(root)
    return screenshot_dir / f"{identifier}_screenshot.png"


def urls_path(identifier: str, root: Optional[Path] = None) -> Path:
    _, _, urls_dir = settings.output_dirs(root)
    return urls_dir / f"{identifier}_urls.txt"


def _write_replace(path: Path, payload: bytes) -> None:
    """Write *payload* to *path*, replacing any existing file in one step.

    The bytes go to a temporary sibling first and are then renamed over the
    target, so a concurrent reader or writer never sees a mix of two files.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(payload)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def persist(
    identifier: str,
    output: RenderOutput,
    *,
    root: Optional[Path] = None,
) -> WrittenPaths:
    """Write the HTML, the screenshot and (if any) the link list for *identifier*.

    Writes happen in that fixed order and independently of each other: an
    ``OSError`` on one artifact is logged and recorded in
    :attr:`WrittenPaths.errors` under ``"html"``, ``"screenshot"`` or
    ``"urls"``, and the next artifact is still attempted.  The link file is
    skipped entirely when no links were found.  Existing files with the same
    identifier are overwritten.

    The output directories must already exist.
    """
    written = WrittenPaths()

    jobs = [
        ("html", "html_path", html_path(identifier, root), output.html.encode("utf-8")),
        ("screenshot", "screenshot_path", screenshot_path(identifier, root), output.screenshot),
    ]
    if output.links:
        jobs.append(
            ("urls", "urls_path", urls_path(identifier, root), "\n".join(output.links).encode("utf-8"))
        )

    for name, attr, path, payload in jobs:
        try:
            _write_replace(path, payload)
        except OSError as exc:
            logger.error("scraper: could not write %s artifact %s: %s", name, path, exc)
            written.errors[name] = str(exc)
            continue
        logger.info("scraper: wrote %s artifact %s", name, path)
        setattr(written, attr, path)

    return written
