"""Jinja2 templates shared by the site and studio routers.

Formatting helpers are registered as filters and globals so templates
never format dates, URLs or ratings themselves.
"""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates

from almas_enraizadas import __version__
from almas_enraizadas.constants import (
    ABOUT_VALUES,
    FOOTER_SOCIAL_LINKS,
    SHARE_PLATFORMS,
    SITE_DESCRIPTION,
    SITE_NAME,
    social_icon,
)
from almas_enraizadas.content.image import get_image_url
from almas_enraizadas.formatters import (
    build_share_url,
    format_date,
    format_reading_time,
    rating_stars,
    truncate_text,
)
from almas_enraizadas.portable_text.render import render_portable_text
from almas_enraizadas.routes import ABOUT, HOME, NAV_ITEMS, PROFILES, SECTIONS, tag_path
from almas_enraizadas.seo.schema import to_json_ld

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

PLACEHOLDER_IMAGE = "/static/placeholder.svg"
AVATAR_PLACEHOLDER = "/static/avatar-placeholder.svg"
SECTION_PLACEHOLDER = "/static/section-placeholder.svg"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def image_url(source: Any, width: int = 1200, height: int = 800) -> str:
    """Image URL for templates; ``""`` when unavailable."""
    return get_image_url(source, width, height)


def article_count(count: int) -> str:
    """``"1 artículo"`` / ``"N artículos"``."""
    return f"{count} {'artículo' if count == 1 else 'artículos'}"


templates.env.filters.update(
    {
        "format_date": format_date,
        "format_reading_time": format_reading_time,
        "truncate_text": truncate_text,
        "json_ld": to_json_ld,
        "portable_text": render_portable_text,
        "article_count": article_count,
    }
)

templates.env.globals.update(
    {
        "SITE_NAME": SITE_NAME,
        "SITE_DESCRIPTION": SITE_DESCRIPTION,
        "NAV_ITEMS": NAV_ITEMS,
        "FOOTER_SOCIAL_LINKS": FOOTER_SOCIAL_LINKS,
        "SHARE_PLATFORMS": SHARE_PLATFORMS,
        "ABOUT_VALUES": ABOUT_VALUES,
        "ROUTE_HOME": HOME,
        "ROUTE_SECTIONS": SECTIONS,
        "ROUTE_PROFILES": PROFILES,
        "ROUTE_ABOUT": ABOUT,
        "PLACEHOLDER_IMAGE": PLACEHOLDER_IMAGE,
        "AVATAR_PLACEHOLDER": AVATAR_PLACEHOLDER,
        "SECTION_PLACEHOLDER": SECTION_PLACEHOLDER,
        "version": __version__,
        "image_url": image_url,
        "share_url": build_share_url,
        "social_icon": social_icon,
        "rating_stars": rating_stars,
        "tag_path": tag_path,
        "current_year": lambda: datetime.date.today().year,
    }
)


__all__ = ["PLACEHOLDER_IMAGE", "TEMPLATES_DIR", "image_url", "templates"]
