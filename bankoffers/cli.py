"""CLI entrypoints."""

import uvicorn

from bankoffers.config import get_settings


def dev() -> None:
    """Run the dev server with reload."""
    settings = get_settings()
    uvicorn.run("bankoffers.main:app", host=settings.host, port=settings.port, reload=True)


def serve() -> None:
    """Run the server on the configured host and port."""
    settings = get_settings()
    uvicorn.run("bankoffers.main:app", host=settings.host, port=settings.port)
