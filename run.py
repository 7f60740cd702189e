"""Entry point for the Commands API.

Serves the FastAPI application with Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables through
``Settings``; defaults are ``0.0.0.0`` and ``8000``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from command_api.app.core.config import settings
from command_api.app.main import app


async def main() -> None:
    """Start the API server and wait until it exits."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        # keep the handlers installed by setup_logging
        log_config=None,
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")
