"""FastAPI application factory and main app.

This module creates the FastAPI application with all routers, the
security headers middleware and the error handlers configured.

The site router catches arbitrary one- to three-segment paths, so it is
included last.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from almas_enraizadas import __version__
from almas_enraizadas.config import configure_logging, get_settings
from almas_enraizadas.content.client import get_client
from almas_enraizadas.errors import VALIDATION_ERROR, AlmasError
from web.routers import ai, config, health, redirects, site, studio

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager.

    Configures logging and creates the shared content client on startup;
    closes it on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.content_client = get_client(settings)
    logger.info("Almas Enraizadas %s starting (site %s)", __version__, settings.site_url)
    try:
        yield
    finally:
        app.state.content_client.close()


async def security_headers(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Add security headers to every response."""
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


async def handle_app_error(request: Request, exc: AlmasError) -> JSONResponse:
    """Render application errors as ``{"error", "code"}`` JSON."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    """Render request validation failures as 400 JSON errors."""
    message = "Invalid request body"
    if isinstance(exc, RequestValidationError) and exc.errors():
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    return JSONResponse(
        status_code=400, content={"error": message, "code": VALIDATION_ERROR}
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application.
    """
    application = FastAPI(
        title="Almas Enraizadas",
        description="Wellness blog pages, authoring console and AI generation API",
        version=__version__,
        lifespan=lifespan,
    )

    application.middleware("http")(security_headers)
    application.add_exception_handler(AlmasError, handle_app_error)
    application.add_exception_handler(RequestValidationError, handle_validation_error)

    application.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    # Include routers
    application.include_router(health.router, tags=["health"])
    application.include_router(config.router, prefix="/config", tags=["config"])
    application.include_router(ai.router, prefix="/api/ai", tags=["ai"])
    application.include_router(studio.router, prefix="/studio", tags=["studio"])
    application.include_router(redirects.router, tags=["redirects"])
    application.include_router(site.router, tags=["site"])

    return application


# Create the default application instance
app = create_app()
