"""Authoring console router (/studio).

A server-rendered form holding a draft document (title, description,
excerpt and a Portable Text body as JSON). Each button posts the draft
to its own route, which runs an authoring helper and re-renders the
console with the result. Helper errors are shown in the page, the way
the console reports them to editors.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse

from almas_enraizadas.ai import authoring
from almas_enraizadas.ai.authoring import PromptSource
from almas_enraizadas.ai.images import DEFAULT_COUNT, ImageRequest, generate_images
from almas_enraizadas.errors import AlmasError
from web.deps import AppSettings, CmsClient
from web.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_BODY_MESSAGE = "El body debe ser un JSON de Portable Text válido"
UNEXPECTED_ERROR_MESSAGE = "Ocurrió un error inesperado, inténtalo de nuevo"

# Form field type aliases
TextField = Annotated[str, Form()]


class DraftError(ValueError):
    """Raised when the posted draft cannot be parsed."""


def parse_body(body_json: str) -> list[dict[str, Any]]:
    """Parse the Portable Text body field.

    Raises:
        DraftError: If the field is not a JSON list.
    """
    if not body_json.strip():
        return []
    try:
        blocks = json.loads(body_json)
    except ValueError as e:
        raise DraftError(INVALID_BODY_MESSAGE) from e
    if not isinstance(blocks, list):
        raise DraftError(INVALID_BODY_MESSAGE)
    return blocks


def draft_from_form(
    title: str, description: str, excerpt: str, body_json: str
) -> dict[str, Any]:
    """Build a draft document dict from form fields."""
    return {
        "title": title,
        "description": description,
        "excerpt": excerpt,
        "body_json": body_json,
    }


def render_studio(
    request: Request,
    draft: dict[str, Any],
    status_code: int = 200,
    **context: Any,
) -> HTMLResponse:
    """Render the console with a draft and optional results."""
    doc = dict(draft)
    try:
        doc["body"] = parse_body(draft.get("body_json", ""))
    except DraftError:
        doc["body"] = []
    return templates.TemplateResponse(
        request=request,
        name="studio/index.html",
        context={
            "draft": draft,
            "sources": authoring.image_prompt_sources(doc),
            "image_count": DEFAULT_COUNT,
            **context,
        },
        status_code=status_code,
    )


@router.get("", response_class=HTMLResponse, name="studio_index")
def studio_index(request: Request) -> HTMLResponse:
    """Render an empty console."""
    return render_studio(request, draft_from_form("", "", "", ""))


@router.post("/summary", response_class=HTMLResponse, name="studio_summary")
def studio_summary(
    request: Request,
    settings: AppSettings,
    title: TextField = "",
    description: TextField = "",
    excerpt: TextField = "",
    body_json: TextField = "",
) -> HTMLResponse:
    """Generate a summary of the draft body."""
    draft = draft_from_form(title, description, excerpt, body_json)
    try:
        result = authoring.summarize(title, parse_body(body_json), settings)
    except (AlmasError, DraftError) as e:
        return render_studio(request, draft, error=_message(e))
    except Exception:
        logger.exception("Summary generation failed")
        return render_studio(request, draft, error=UNEXPECTED_ERROR_MESSAGE)
    return render_studio(request, draft, result_label="Resumen", result=result)


@router.post("/excerpt", response_class=HTMLResponse, name="studio_excerpt")
def studio_excerpt(
    request: Request,
    settings: AppSettings,
    title: TextField = "",
    description: TextField = "",
    excerpt: TextField = "",
    body_json: TextField = "",
) -> HTMLResponse:
    """Generate an excerpt of the draft body."""
    draft = draft_from_form(title, description, excerpt, body_json)
    try:
        result = authoring.excerpt(title, parse_body(body_json), settings)
    except (AlmasError, DraftError) as e:
        return render_studio(request, draft, error=_message(e))
    except Exception:
        logger.exception("Excerpt generation failed")
        return render_studio(request, draft, error=UNEXPECTED_ERROR_MESSAGE)
    return render_studio(request, draft, result_label="Extracto", result=result)


@router.post("/seo-title", response_class=HTMLResponse, name="studio_seo_title")
def studio_seo_title(
    request: Request,
    settings: AppSettings,
    title: TextField = "",
    description: TextField = "",
    excerpt: TextField = "",
    body_json: TextField = "",
) -> HTMLResponse:
    """Suggest SEO title variants for the draft title."""
    draft = draft_from_form(title, description, excerpt, body_json)
    try:
        result = authoring.suggest_seo_titles(title, settings)
    except AlmasError as e:
        return render_studio(request, draft, error=e.message)
    except Exception:
        logger.exception("SEO title suggestion failed")
        return render_studio(request, draft, error=UNEXPECTED_ERROR_MESSAGE)
    return render_studio(
        request,
        draft,
        result_label="Títulos SEO",
        result=result,
        seo_option=authoring.first_seo_option(result),
    )


@router.post("/reading-time", response_class=HTMLResponse, name="studio_reading_time")
def studio_reading_time(
    request: Request,
    title: TextField = "",
    description: TextField = "",
    excerpt: TextField = "",
    body_json: TextField = "",
) -> HTMLResponse:
    """Estimate the reading time of the draft body locally."""
    draft = draft_from_form(title, description, excerpt, body_json)
    try:
        minutes = authoring.reading_time_from_blocks(parse_body(body_json))
    except DraftError as e:
        return render_studio(request, draft, error=str(e))
    except Exception:
        logger.exception("Reading time estimation failed")
        return render_studio(request, draft, error=UNEXPECTED_ERROR_MESSAGE)
    if minutes is None:
        return render_studio(request, draft)
    return render_studio(
        request, draft, result_label="Tiempo de lectura", result=f"{minutes} min"
    )


@router.post("/body", response_class=HTMLResponse, name="studio_body")
def studio_body(
    request: Request,
    settings: AppSettings,
    title: TextField = "",
    description: TextField = "",
    excerpt: TextField = "",
    body_json: TextField = "",
) -> HTMLResponse:
    """Generate an article for the draft title and show it for review."""
    draft = draft_from_form(title, description, excerpt, body_json)
    try:
        markdown = authoring.generate_body(title, settings)
    except AlmasError as e:
        return render_studio(request, draft, error=e.message)
    except Exception:
        logger.exception("Body generation failed")
        return render_studio(request, draft, error=UNEXPECTED_ERROR_MESSAGE)
    return render_studio(request, draft, body_preview=markdown)


@router.post("/body/accept", response_class=HTMLResponse, name="studio_body_accept")
def studio_body_accept(
    request: Request,
    title: TextField = "",
    description: TextField = "",
    excerpt: TextField = "",
    markdown: TextField = "",
) -> HTMLResponse:
    """Convert the reviewed article into the draft's Portable Text body."""
    try:
        blocks = authoring.accept_body(markdown)
    except Exception:
        logger.exception("Converting the generated body failed")
        draft = draft_from_form(title, description, excerpt, "")
        return render_studio(
            request, draft, body_preview=markdown, error=UNEXPECTED_ERROR_MESSAGE
        )
    body_json = json.dumps(blocks, ensure_ascii=False, indent=2)
    draft = draft_from_form(title, description, excerpt, body_json)
    return render_studio(request, draft, accepted_blocks=len(blocks))


@router.post("/images", response_class=HTMLResponse, name="studio_images")
async def studio_images(
    request: Request,
    settings: AppSettings,
    title: TextField = "",
    description: TextField = "",
    excerpt: TextField = "",
    body_json: TextField = "",
    source: TextField = PromptSource.TITLE.value,
    custom_prompt: TextField = "",
) -> HTMLResponse:
    """Generate image options from the selected prompt source."""
    draft = draft_from_form(title, description, excerpt, body_json)
    try:
        doc = {**draft, "body": parse_body(body_json)}
        prompt = authoring.build_prompt_from_source(PromptSource(source), doc, custom_prompt)
        images = await generate_images(
            ImageRequest(prompt=prompt, count=DEFAULT_COUNT), settings
        )
    except ValueError as e:
        # Covers DraftError and unknown prompt sources
        return render_studio(request, draft, error=str(e), selected_source=source)
    except AlmasError as e:
        return render_studio(request, draft, error=e.message, selected_source=source)
    except Exception:
        logger.exception("Image generation failed")
        return render_studio(
            request, draft, error=UNEXPECTED_ERROR_MESSAGE, selected_source=source
        )
    return render_studio(
        request,
        draft,
        images=images,
        selected_source=source,
        custom_prompt=custom_prompt,
    )


@router.post("/images/accept", response_class=HTMLResponse, name="studio_images_accept")
async def studio_images_accept(
    request: Request,
    settings: AppSettings,
    client: CmsClient,
    image_url: TextField,
    title: TextField = "",
    description: TextField = "",
    excerpt: TextField = "",
    body_json: TextField = "",
) -> HTMLResponse:
    """Upload the chosen image to the CMS and show the image field value."""
    draft = draft_from_form(title, description, excerpt, body_json)
    try:
        field = await authoring.accept_generated_image(image_url, settings, client)
    except AlmasError as e:
        return render_studio(request, draft, error=e.message)
    except Exception:
        logger.exception("Uploading the generated image failed")
        return render_studio(request, draft, error=UNEXPECTED_ERROR_MESSAGE)
    return render_studio(
        request,
        draft,
        image_field=json.dumps(field, ensure_ascii=False, indent=2),
    )


def _message(error: Exception) -> str:
    return error.message if isinstance(error, AlmasError) else str(error)


__all__ = ["DraftError", "draft_from_form", "parse_body", "router"]
