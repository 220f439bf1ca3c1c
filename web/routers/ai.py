"""AI generation endpoints used by the authoring console.

- POST /api/ai - Generate text for an action
- POST /api/ai/image - Generate images for a prompt
- GET /api/ai/image/proxy - Download a generated image server-side

Application errors propagate to the app's exception handler; anything
else is reported here as a 500 with its message.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse, Response

from almas_enraizadas.ai.images import (
    PROXY_CACHE_CONTROL,
    GeneratedImage,
    ImageRequest,
    download_image,
    generate_images,
)
from almas_enraizadas.ai.service import AiRequest, generate_text
from almas_enraizadas.errors import INTERNAL_ERROR, AlmasError
from web.deps import AppSettings

logger = logging.getLogger(__name__)

router = APIRouter()


def _internal_error(exc: Exception) -> JSONResponse:
    logger.exception("AI request failed")
    message = str(exc) or "Internal server error"
    return JSONResponse(status_code=500, content={"error": message, "code": INTERNAL_ERROR})


@router.post("", response_model=None)
def generate_text_endpoint(
    body: AiRequest, settings: AppSettings
) -> dict[str, str] | JSONResponse:
    """Generate text for an authoring action.

    Args:
        body: Action, title and body.
        settings: Application settings.

    Returns:
        ``{"result": text}``.
    """
    try:
        result = generate_text(body, settings)
    except AlmasError:
        raise
    except Exception as e:
        return _internal_error(e)
    return {"result": result}


@router.post("/image", response_model=None)
async def generate_images_endpoint(
    body: ImageRequest, settings: AppSettings
) -> dict[str, list[dict[str, str]]] | JSONResponse:
    """Generate images for a prompt.

    Args:
        body: Prompt and optional count.
        settings: Application settings.

    Returns:
        ``{"images": [{"url", "revisedPrompt"}, ...]}``.
    """
    try:
        images: list[GeneratedImage] = await generate_images(body, settings)
    except AlmasError:
        raise
    except Exception as e:
        return _internal_error(e)
    return {"images": [image.model_dump(by_alias=True) for image in images]}


@router.get("/image/proxy", response_model=None)
async def image_proxy(
    settings: AppSettings,
    url: str | None = Query(None, description="Generated image URL"),
) -> Response:
    """Download a generated image from an allow-listed host.

    Args:
        settings: Application settings.
        url: Image URL.

    Returns:
        The image bytes.
    """
    try:
        image = await download_image(url, settings)
    except AlmasError:
        raise
    except Exception as e:
        return _internal_error(e)
    return Response(
        content=image.content,
        media_type=image.content_type,
        headers={"Cache-Control": PROXY_CACHE_CONTROL},
    )
