"""Centralised settings for sitegrab.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from the package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DATA_DIRNAME = "data"
SCREENSHOT_DIRNAME = "screenshot"
URLS_DIRNAME = "urls"


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


def parse_addr(addr: str) -> tuple[str, int]:
    """Split a ``host:port`` string into its host and integer port.

    An empty host (``":8080"``) binds every interface.

    Raises:
        ValueError: If the port part is missing or not a valid port number.
    """
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit() or not 0 < int(port) < 65536:
        raise ValueError(f"invalid address {addr!r}, expected host:port")
    return host or "0.0.0.0", int(port)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Output layout
    # ------------------------------------------------------------------
    output_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("SITEGRAB_OUTPUT_DIR", "."))
    )

    @property
    def data_dir(self) -> Path:
        """Directory holding the rendered HTML documents."""
        return self.output_dir / DATA_DIRNAME

    @property
    def screenshot_dir(self) -> Path:
        """Directory holding the full-page screenshots."""
        return self.output_dir / SCREENSHOT_DIRNAME

    @property
    def urls_dir(self) -> Path:
        """Directory holding the extracted link lists."""
        return self.output_dir / URLS_DIRNAME

    # ------------------------------------------------------------------
    # Network / browser
    # ------------------------------------------------------------------
    probe_timeout: float = field(
        default_factory=lambda: float(os.environ.get("PROBE_TIMEOUT", "10.0"))
    )
    render_timeout: float = field(
        default_factory=lambda: float(os.environ.get("RENDER_TIMEOUT", "30.0"))
    )
    browser_headless: bool = field(
        default_factory=lambda: _env_flag("BROWSER_HEADLESS", "true")
    )
    user_agent: str | None = field(
        default_factory=lambda: os.environ.get("SITEGRAB_USER_AGENT") or None
    )

    # ------------------------------------------------------------------
    # Front ends
    # ------------------------------------------------------------------
    server_addr: str = field(
        default_factory=lambda: os.environ.get("SITEGRAB_ADDR", "127.0.0.1:8080")
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )

    def output_dirs(self, root: Path | None = None) -> list[Path]:
        """Return the three artifact directories under *root* (or ``output_dir``)."""
        base = Path(root) if root is not None else self.output_dir
        return [base / DATA_DIRNAME, base / SCREENSHOT_DIRNAME, base / URLS_DIRNAME]

    def ensure_output_dirs(self, root: Path | None = None) -> None:
        """Create the artifact directories if they do not exist.

        Raises:
            OSError: If any directory cannot be created.
        """
        for directory in self.output_dirs(root):
            directory.mkdir(parents=True, exist_ok=True)


# Module-level singleton, import this everywhere:
#   from sitegrab.config import settings
settings = Settings()
