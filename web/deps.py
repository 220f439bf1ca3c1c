"""Shared dependencies for FastAPI route handlers.

The content client is created once by the application lifespan and
stored on ``app.state``; handlers receive it through
:func:`get_content_client`. Tests swap either dependency with
``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request

from almas_enraizadas.config import Settings, get_settings
from almas_enraizadas.content.client import ContentClient


def get_settings_dep() -> Settings:
    """Get application settings.

    Returns:
        Settings instance.
    """
    return get_settings()


def get_content_client(request: Request) -> ContentClient:
    """Get the shared content client from app state.

    Args:
        request: FastAPI request object.

    Returns:
        Content client.
    """
    client: Any = request.app.state.content_client
    return client  # type: ignore[no-any-return]


# Type aliases for dependencies
AppSettings = Annotated[Settings, Depends(get_settings_dep)]
CmsClient = Annotated[ContentClient, Depends(get_content_client)]


__all__ = ["AppSettings", "CmsClient", "get_content_client", "get_settings_dep"]
