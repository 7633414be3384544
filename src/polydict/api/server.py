"""
ASGI Entry Point for the polydict API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads environment variables from `.env` before the application factory
reads its settings.

Usage
-----
Run via the module entry point:
    $ python -m polydict.api.server

Or via uvicorn directly:
    $ uvicorn polydict.api.server:app --reload
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from polydict.core.settings import load_settings

# Load .env BEFORE building the app so DATABASE_URL and friends are visible.
load_dotenv(dotenv_path=Path(".env"))
load_settings.cache_clear()

from polydict.api.app import create_app  # noqa: E402

app = create_app()


def main(host: str | None = None, port: int | None = None, reload: bool = False) -> None:
    """Run the API server."""
    settings = load_settings()
    uvicorn.run(
        "polydict.api.server:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
