"""
Main entrypoint for the Commands API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn command_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from .core.config import settings
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .core.db import init_db
from .services.command_repo import CommandNotFoundError
from .services.command_validator import CommandValidationError

logger = logging.getLogger(__name__)


def _format_request_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def command_validation_error_handler(request: Request, exc: CommandValidationError) -> JSONResponse:
    """Render field rule violations as HTTP 400 with an ``errors`` list."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": exc.errors})


async def command_not_found_handler(request: Request, exc: CommandNotFoundError) -> Response:
    """Render a missing command as HTTP 404 with an empty body."""
    logger.debug("%s %s: %s", request.method, request.url.path, exc)
    return Response(status_code=status.HTTP_404_NOT_FOUND)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed requests in the same shape as rule violations."""
    errors = [_format_request_error(error) for error in exc.errors()]
    logger.info("Rejected malformed %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    This function performs one‑time setup tasks such as configuring
    logging, registering exception handlers and including versioned
    API routers.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_exception_handler(CommandValidationError, command_validation_error_handler)
    app.add_exception_handler(CommandNotFoundError, command_not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies pending migrations.
        init_db()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
