"""Configuration endpoint."""

from typing import Any

from fastapi import APIRouter

from web.deps import AppSettings

router = APIRouter()


@router.get("")
def get_config(settings: AppSettings) -> dict[str, Any]:
    """Get effective non-secret configuration.

    Returns:
        Current configuration as JSON, with flags for the secrets.
    """
    return {
        "site_url": settings.site_url,
        "sanity_project_id": settings.sanity_project_id,
        "sanity_dataset": settings.sanity_dataset,
        "sanity_api_version": settings.sanity_api_version,
        "sanity_use_cdn": settings.sanity_use_cdn,
        "cms_configured": settings.is_cms_configured,
        "cms_token_configured": bool(settings.sanity_token),
        "ai_configured": settings.is_ai_configured,
        "openai_base_url": settings.openai_base_url,
        "chat_model": settings.chat_model,
        "image_model": settings.image_model,
        "request_timeout": settings.request_timeout,
        "log_level": settings.log_level,
    }
