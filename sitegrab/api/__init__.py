"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from sitegrab.api import ServerConfig, create_app

    app = create_app(ServerConfig(addr="127.0.0.1:8080", timeout=30))
"""

from sitegrab.api.app import ServerConfig, create_app

__all__ = ["ServerConfig", "create_app"]
