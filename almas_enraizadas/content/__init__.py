"""Content layer over the headless CMS.

Provides:
- Pydantic models for CMS documents
- GROQ query constants
- The HTTP client (and a null client when no CMS is configured)
- Image URL building for CMS assets
- Fetch functions used by pages, the CLI and the MCP server
"""

from almas_enraizadas.content.client import (
    ContentClient,
    NullClient,
    SanityClient,
    get_client,
)
from almas_enraizadas.content.image import ImageUrlBuilder, get_image_url, url_for

__all__ = [
    "ContentClient",
    "ImageUrlBuilder",
    "NullClient",
    "SanityClient",
    "get_client",
    "get_image_url",
    "url_for",
]
