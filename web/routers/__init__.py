"""Router modules for the FastAPI application."""

from web.routers import ai, config, health, redirects, site, studio

__all__ = ["ai", "config", "health", "redirects", "site", "studio"]
