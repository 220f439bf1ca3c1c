"""FastAPI web application for Almas Enraizadas.

Serves the public site, the authoring console and the AI generation API.
All content and generation logic lives in almas_enraizadas/.
"""

from web.app import app, create_app

__all__ = ["app", "create_app"]
