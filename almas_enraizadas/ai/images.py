"""Image generation and the generated-image download proxy.

The image model only returns one image per request, so ``count`` images
are requested concurrently and whichever succeed are kept. Generated
images live on temporary provider URLs; :func:`download_image` fetches
them server-side from an allow-list of hosts so the console can preview
and upload them.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, ConfigDict, Field

from almas_enraizadas.ai.prompts import build_image_prompt
from almas_enraizadas.ai.service import auth_headers, provider_error_message
from almas_enraizadas.config import Settings
from almas_enraizadas.errors import (
    AiUpstreamError,
    AiValidationError,
    ProxyDownloadError,
    ProxyHostNotAllowedError,
    ProxyInvalidUrlError,
    ProxyTooLargeError,
)

logger = logging.getLogger(__name__)

IMAGE_SIZE = "1792x1024"
IMAGE_QUALITY = "standard"
DEFAULT_COUNT = 2
MAX_COUNT = 4

ALLOWED_HOSTS = (
    "oaidalleapiprodscus.blob.core.windows.net",
    "dalleprodsec.blob.core.windows.net",
    "oaidalle.blob.core.windows.net",
)

MAX_SIZE_BYTES = 20 * 1024 * 1024

DEFAULT_CONTENT_TYPE = "image/png"

PROXY_CACHE_CONTROL = "private, max-age=3600"


class ImageRequest(BaseModel):
    """Image generation request."""

    prompt: str | None = None
    count: int | None = None

    def validate_request(self) -> None:
        """Check the prompt and count.

        Raises:
            AiValidationError: If the prompt is blank or count is out of range.
        """
        if not self.prompt or not self.prompt.strip():
            raise AiValidationError("A prompt is required")
        if self.count is not None and not 1 <= self.count <= MAX_COUNT:
            raise AiValidationError(f"Count must be between 1 and {MAX_COUNT}")

    @property
    def effective_count(self) -> int:
        """Number of images to request."""
        return min(self.count if self.count is not None else DEFAULT_COUNT, MAX_COUNT)


class GeneratedImage(BaseModel):
    """A generated image on a temporary provider URL."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    revised_prompt: str = Field(default="", alias="revisedPrompt")


@dataclass(frozen=True)
class DownloadedImage:
    """Image bytes fetched through the proxy."""

    content: bytes
    content_type: str


async def generate_single_image(
    client: httpx.AsyncClient, prompt: str, settings: Settings
) -> GeneratedImage:
    """Request one image.

    Raises:
        AiUpstreamError: If the request fails or the provider answers with an
            error.
    """
    try:
        response = await client.post(
            f"{settings.openai_base_url}/images/generations",
            json={
                "model": settings.image_model,
                "prompt": prompt,
                "n": 1,
                "size": IMAGE_SIZE,
                "quality": IMAGE_QUALITY,
            },
            headers=auth_headers(settings),
        )
    except httpx.HTTPError as e:
        logger.warning("Image generation request failed: %s", e)
        raise AiUpstreamError(f"DALL-E API request failed: {e}") from e
    if not response.is_success:
        raise AiUpstreamError(
            f"DALL-E API error ({response.status_code}): {provider_error_message(response)}",
            upstream_status=response.status_code,
        )
    image = response.json()["data"][0]
    return GeneratedImage(url=image["url"], revised_prompt=image.get("revised_prompt") or "")


async def generate_images(
    request: ImageRequest,
    settings: Settings,
    client: httpx.AsyncClient | None = None,
) -> list[GeneratedImage]:
    """Generate images for a prompt, keeping whichever requests succeed.

    Args:
        request: Image request.
        settings: Application settings.
        client: Optional async HTTPX client.

    Returns:
        Generated images (at least one).

    Raises:
        AiValidationError: If the request is invalid.
        AiNotConfiguredError: If no API key is configured.
        Exception: The first failure when every request failed.
    """
    request.validate_request()
    auth_headers(settings)

    prompt = build_image_prompt(request.prompt or "")
    count = request.effective_count
    logger.info("Requesting %d image(s) from %s", count, settings.image_model)

    async def run(http: httpx.AsyncClient) -> list[GeneratedImage | BaseException]:
        return await asyncio.gather(
            *(generate_single_image(http, prompt, settings) for _ in range(count)),
            return_exceptions=True,
        )

    if client is None:
        async with httpx.AsyncClient(timeout=settings.request_timeout) as own_client:
            results = await run(own_client)
    else:
        results = await run(client)

    images = [r for r in results if isinstance(r, GeneratedImage)]
    failures = [r for r in results if isinstance(r, BaseException)]
    if failures and images:
        logger.warning("%d of %d image generations failed", len(failures), count)
    if not images:
        if failures:
            raise failures[0]
        raise AiUpstreamError("All image generations failed")
    return images


def validate_proxy_url(url: str | None) -> str:
    """Check that a proxy target is a URL on an allowed host.

    Args:
        url: Target URL.

    Returns:
        The URL.

    Raises:
        ProxyInvalidUrlError: If the URL is missing or malformed.
        ProxyHostNotAllowedError: If the host is not allow-listed.
    """
    if not url:
        raise ProxyInvalidUrlError("Missing url parameter")
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError as e:
        raise ProxyInvalidUrlError("Invalid url parameter") from e
    if parts.scheme not in ("http", "https") or not hostname:
        raise ProxyInvalidUrlError("Invalid url parameter")
    if not any(
        hostname == host or hostname.endswith(f".{host}") for host in ALLOWED_HOSTS
    ):
        logger.warning("Rejected image proxy request for host %s", hostname)
        raise ProxyHostNotAllowedError("URL not allowed")
    return url


async def download_image(
    url: str | None,
    settings: Settings,
    client: httpx.AsyncClient | None = None,
    max_size: int = MAX_SIZE_BYTES,
) -> DownloadedImage:
    """Download a generated image from an allow-listed host.

    The size cap is checked against ``Content-Length`` and again while
    streaming the body.

    Args:
        url: Image URL.
        settings: Application settings.
        client: Optional async HTTPX client.
        max_size: Size cap in bytes.

    Returns:
        Image bytes and content type.

    Raises:
        ProxyInvalidUrlError: If the URL is missing or malformed.
        ProxyHostNotAllowedError: If the host is not allow-listed.
        ProxyDownloadError: If the upstream answers with a non-2xx status.
        ProxyTooLargeError: If the image exceeds ``max_size``.
    """
    target = validate_proxy_url(url)

    async def fetch(http: httpx.AsyncClient) -> DownloadedImage:
        async with http.stream("GET", target) as response:
            if not response.is_success:
                raise ProxyDownloadError(
                    f"Failed to download image: {response.status_code}"
                )
            declared = response.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > max_size:
                raise ProxyTooLargeError("Image too large")

            chunks: list[bytes] = []
            received = 0
            async for chunk in response.aiter_bytes():
                received += len(chunk)
                if received > max_size:
                    raise ProxyTooLargeError("Image too large")
                chunks.append(chunk)

            content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE
            return DownloadedImage(content=b"".join(chunks), content_type=content_type)

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.request_timeout) as own_client:
                return await fetch(own_client)
        return await fetch(client)
    except httpx.HTTPError as e:
        raise ProxyDownloadError(f"Failed to download image: {e}") from e


__all__ = [
    "ALLOWED_HOSTS",
    "DEFAULT_COUNT",
    "MAX_COUNT",
    "MAX_SIZE_BYTES",
    "PROXY_CACHE_CONTROL",
    "DownloadedImage",
    "GeneratedImage",
    "ImageRequest",
    "download_image",
    "generate_images",
    "validate_proxy_url",
]
