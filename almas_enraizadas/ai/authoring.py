"""Authoring helpers behind the console buttons.

Each helper works on a draft document as the console holds it: a dict
with ``title``, ``excerpt``, ``body`` (Portable Text) and so on. The web
studio, the CLI and the MCP server all go through these functions.
"""

from __future__ import annotations

import asyncio
import logging
import math
import re
import time
from enum import Enum
from typing import Any

import httpx

from almas_enraizadas.ai.images import download_image
from almas_enraizadas.ai.prompts import AiAction
from almas_enraizadas.ai.service import AiRequest, generate_text
from almas_enraizadas.config import Settings
from almas_enraizadas.constants import WORDS_PER_MINUTE
from almas_enraizadas.content.client import ContentClient
from almas_enraizadas.errors import AiValidationError
from almas_enraizadas.portable_text.extract import extract_plain_text
from almas_enraizadas.portable_text.parser import KeyFactory, parse_markdown, random_key

logger = logging.getLogger(__name__)

_NUMBERED_PREFIX_RE = re.compile(r"^\d+\.\s*")

BODY_PROMPT_LENGTH = 500
SOURCE_TITLE_PREVIEW = 40


class PromptSource(str, Enum):
    """Where an image prompt comes from."""

    TITLE = "title"
    DESCRIPTION = "description"
    EXCERPT = "excerpt"
    BODY = "body"
    CUSTOM = "custom"


def summarize(title: str, body_blocks: Any, settings: Settings) -> str:
    """Generate a summary of the draft body.

    Raises:
        AiValidationError: If the body has no text.
    """
    text = extract_plain_text(body_blocks)
    if not text:
        raise AiValidationError("Escribe contenido en el body antes de generar el resumen")
    return generate_text(
        AiRequest(action=AiAction.SUMMARY.value, title=title, body=text), settings
    )


def excerpt(title: str, body_blocks: Any, settings: Settings) -> str:
    """Generate an excerpt of the draft body.

    Raises:
        AiValidationError: If the body has no text.
    """
    text = extract_plain_text(body_blocks)
    if not text:
        raise AiValidationError("Escribe contenido en el body antes de generar el extracto")
    return generate_text(
        AiRequest(action=AiAction.EXCERPT.value, title=title, body=text), settings
    )


def suggest_seo_titles(title: str, settings: Settings) -> str:
    """Ask for three SEO title variants; returns the numbered list as is.

    Raises:
        AiValidationError: If there is no title.
    """
    if not title or not title.strip():
        raise AiValidationError("Escribe un título primero")
    return generate_text(AiRequest(action=AiAction.SEO_TITLE.value, title=title), settings)


def first_seo_option(result: str) -> str | None:
    """First non-empty option of a numbered list, without its number."""
    for line in result.split("\n"):
        option = _NUMBERED_PREFIX_RE.sub("", line).strip()
        if option:
            return option
    return None


def reading_time_from_blocks(body_blocks: Any) -> int | None:
    """Estimate reading minutes locally from the draft body.

    Returns:
        Minutes (at least one), or None when the body has no text.
    """
    text = extract_plain_text(body_blocks)
    if not text:
        return None
    words = len(text.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def generate_body(title: str, settings: Settings) -> str:
    """Generate a full article in markdown for preview.

    Raises:
        AiValidationError: If there is no title.
    """
    if not title or not title.strip():
        raise AiValidationError("Escribe un título primero para generar el contenido")
    return generate_text(
        AiRequest(action=AiAction.BODY_CONTENT.value, title=title), settings
    )


def accept_body(markdown: str, key_factory: KeyFactory = random_key) -> list[dict[str, Any]]:
    """Convert an accepted markdown preview into Portable Text."""
    return parse_markdown(markdown, key_factory)


def _document_title(doc: dict[str, Any]) -> str:
    # Authors have a name instead of a title
    return str(doc.get("title") or doc.get("name") or "")


def image_prompt_sources(doc: dict[str, Any]) -> list[tuple[PromptSource, str]]:
    """List the prompt sources available for a draft document.

    Title and custom are always offered; the rest only when present.

    Args:
        doc: Draft document.

    Returns:
        ``(source, label)`` pairs in display order.
    """
    title = _document_title(doc)
    preview = title[:SOURCE_TITLE_PREVIEW] + ("…" if len(title) > SOURCE_TITLE_PREVIEW else "")
    sources = [(PromptSource.TITLE, f'Desde el título: "{preview}"')]
    if doc.get("description"):
        sources.append((PromptSource.DESCRIPTION, "Desde la descripción"))
    if doc.get("excerpt"):
        sources.append((PromptSource.EXCERPT, "Desde el extracto"))
    if extract_plain_text(doc.get("body")):
        sources.append((PromptSource.BODY, "Desde el contenido"))
    sources.append((PromptSource.CUSTOM, "Prompt personalizado"))
    return sources


def build_prompt_from_source(
    source: PromptSource, doc: dict[str, Any], custom: str = ""
) -> str:
    """Build the image prompt text for a source.

    Raises:
        AiValidationError: If the selected source is empty.
    """
    if source is PromptSource.TITLE:
        prompt = _document_title(doc)
    elif source is PromptSource.BODY:
        prompt = extract_plain_text(doc.get("body"))[:BODY_PROMPT_LENGTH]
    elif source is PromptSource.CUSTOM:
        prompt = custom
    else:
        prompt = str(doc.get(source.value) or "")
    if not prompt.strip():
        raise AiValidationError("No hay contenido para generar. Escribe algo primero.")
    return prompt


async def accept_generated_image(
    url: str,
    settings: Settings,
    client: ContentClient,
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Upload a chosen generated image to the CMS.

    Args:
        url: Temporary provider URL of the image.
        settings: Application settings.
        client: Content client to upload with.
        http_client: Optional async HTTPX client for the download.

    Returns:
        Image field value referencing the new asset.

    Raises:
        ProxyError: If the download is refused or fails.
        ContentError: If the upload fails.
    """
    image = await download_image(url, settings, http_client)
    filename = f"ai-generated-{int(time.time() * 1000)}.png"
    asset = await asyncio.to_thread(
        client.upload_image, image.content, filename, "image/png"
    )
    logger.info("Uploaded generated image as %s", asset.get("_id"))
    return {
        "_type": "image",
        "asset": {"_type": "reference", "_ref": asset["_id"]},
    }


__all__ = [
    "PromptSource",
    "accept_body",
    "accept_generated_image",
    "build_prompt_from_source",
    "excerpt",
    "first_seo_option",
    "generate_body",
    "image_prompt_sources",
    "reading_time_from_blocks",
    "suggest_seo_titles",
    "summarize",
]
