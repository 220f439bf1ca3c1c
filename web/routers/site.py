"""Public site router for server-rendered HTML pages.

URL structure (see ``almas_enraizadas.routes``):

- / - Home: recent posts, sections, profiles
- /secciones - Sections index
- /perfiles, /perfiles/{slug} - Profiles index and detail
- /sobre-nosotros - About page
- /{section} - Section with subcategories and direct posts
- /{section}/{slug} - Subcategory listing, or a post directly in the section
- /{section}/{subcategory}/{post} - Post inside a subcategory

Handlers call the content service directly and render Jinja2 templates.
Every page gets the layout's website and organization JSON-LD plus its
own breadcrumb trail.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from almas_enraizadas.config import Settings
from almas_enraizadas.constants import HOME_RECENT_POSTS, REVALIDATE_TIME
from almas_enraizadas.content import service
from almas_enraizadas.content.client import ContentClient
from almas_enraizadas.content.image import get_image_url
from almas_enraizadas.content.models import Post, PostListItem
from almas_enraizadas.formatters import count_words
from almas_enraizadas.portable_text.extract import extract_plain_text
from almas_enraizadas.routes import (
    ABOUT,
    HOME,
    PROFILES,
    RESERVED_SEGMENTS,
    SECTIONS,
    absolute_url,
    post_path,
    profile_path,
    section_path,
    subcategory_path,
)
from almas_enraizadas.seo import metadata as meta
from almas_enraizadas.seo.schema import (
    build_article_list_schema,
    build_blog_post_schema,
    build_breadcrumb_schema,
    build_organization_schema,
    build_profile_schema,
    build_website_schema,
)
from web.deps import AppSettings, CmsClient
from web.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter()

HTML_CACHE_CONTROL = f"s-maxage={REVALIDATE_TIME}, stale-while-revalidate"

MAIN_IMAGE_WIDTH = 1200
MAIN_IMAGE_HEIGHT = 630
PROFILE_IMAGE_SIZE = 400


@dataclass(frozen=True)
class Crumb:
    """A visible breadcrumb entry."""

    label: str
    path: str


INICIO = Crumb("Inicio", HOME)


def render_page(
    request: Request,
    name: str,
    settings: Settings,
    page_meta: meta.PageMetadata,
    crumbs: Sequence[Crumb] = (),
    schemas: Sequence[dict[str, Any]] = (),
    context: dict[str, Any] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Render a page inside the site layout.

    Args:
        request: Current request.
        name: Template name.
        settings: Application settings.
        page_meta: Head metadata.
        crumbs: Visible breadcrumb trail (also emitted as JSON-LD).
        schemas: Extra JSON-LD documents for the page.
        context: Template context.
        status_code: Response status.

    Returns:
        HTML response.
    """
    base_url = settings.site_url
    page_schemas: list[dict[str, Any]] = []
    if crumbs:
        page_schemas.append(
            build_breadcrumb_schema(
                [
                    {"name": crumb.label, "url": absolute_url(crumb.path, base_url)}
                    for crumb in crumbs
                ]
            )
        )
    page_schemas.extend(schemas)

    response = templates.TemplateResponse(
        request=request,
        name=name,
        context={
            "meta": page_meta,
            "crumbs": list(crumbs),
            "page_schemas": page_schemas,
            "layout_schemas": [
                build_website_schema(base_url),
                build_organization_schema(base_url=base_url),
            ],
            **(context or {}),
        },
        status_code=status_code,
    )
    if status_code == 200:
        response.headers["Cache-Control"] = HTML_CACHE_CONTROL
    return response


def render_not_found(
    request: Request, settings: Settings, title: str = meta.NOT_FOUND
) -> HTMLResponse:
    """Render the 404 page."""
    return render_page(
        request,
        "404.html",
        settings,
        meta.not_found_metadata(title),
        status_code=404,
    )


# Home and indexes


@router.get("/", response_class=HTMLResponse, name="site_home")
def home(request: Request, settings: AppSettings, client: CmsClient) -> HTMLResponse:
    """Render the home page."""
    return render_page(
        request,
        "home.html",
        settings,
        meta.default_metadata(),
        context={
            "recent_posts": service.fetch_recent_posts(client, HOME_RECENT_POSTS),
            "sections": service.fetch_all_sections(client),
            "profiles": service.fetch_all_profiles(client),
        },
    )


@router.get(SECTIONS, response_class=HTMLResponse, name="site_sections")
def sections_index(
    request: Request, settings: AppSettings, client: CmsClient
) -> HTMLResponse:
    """Render the sections index."""
    return render_page(
        request,
        "sections.html",
        settings,
        meta.sections_index_metadata(settings.site_url),
        crumbs=[INICIO, Crumb("Secciones", SECTIONS)],
        context={"sections": service.fetch_all_sections(client)},
    )


@router.get(PROFILES, response_class=HTMLResponse, name="site_profiles")
def profiles_index(
    request: Request, settings: AppSettings, client: CmsClient
) -> HTMLResponse:
    """Render the profiles index."""
    return render_page(
        request,
        "profiles.html",
        settings,
        meta.profiles_index_metadata(settings.site_url),
        crumbs=[INICIO, Crumb("Perfiles", PROFILES)],
        context={"profiles": service.fetch_all_profiles(client)},
    )


@router.get(PROFILES + "/{slug}", response_class=HTMLResponse, name="site_profile")
def profile_detail(
    request: Request, slug: str, settings: AppSettings, client: CmsClient
) -> HTMLResponse:
    """Render an author profile with their posts."""
    profile = service.fetch_profile_by_slug(client, slug)
    if profile is None:
        return render_not_found(request, settings, meta.PROFILE_NOT_FOUND)

    image = get_image_url(profile.image, PROFILE_IMAGE_SIZE, PROFILE_IMAGE_SIZE, settings)
    return render_page(
        request,
        "profile.html",
        settings,
        meta.profile_metadata(profile, slug, settings.site_url),
        crumbs=[INICIO, Crumb("Perfiles", PROFILES), Crumb(profile.name, profile_path(slug))],
        schemas=[build_profile_schema(profile, image or None, settings.site_url)],
        context={"profile": profile, "profile_image": image},
    )


@router.get(ABOUT, response_class=HTMLResponse, name="site_about")
def about(request: Request, settings: AppSettings, client: CmsClient) -> HTMLResponse:
    """Render the about page."""
    return render_page(
        request,
        "about.html",
        settings,
        meta.about_metadata(),
        crumbs=[INICIO, Crumb("Sobre Nosotros", ABOUT)],
        context={"profiles": service.fetch_all_profiles(client)},
    )


# Sections, subcategories and posts


@router.get("/{section_slug}", response_class=HTMLResponse, name="site_section")
def section_detail(
    request: Request, section_slug: str, settings: AppSettings, client: CmsClient
) -> HTMLResponse:
    """Render a section with its subcategories and direct posts."""
    if section_slug in RESERVED_SEGMENTS:
        return render_not_found(request, settings)
    section = service.fetch_section_by_slug(client, section_slug)
    if section is None:
        return render_not_found(request, settings, meta.SECTION_NOT_FOUND)

    return render_page(
        request,
        "section.html",
        settings,
        meta.section_metadata(section, section_slug, settings.site_url),
        crumbs=[
            INICIO,
            Crumb("Secciones", SECTIONS),
            Crumb(section.title, section_path(section_slug)),
        ],
        schemas=_article_list(section.posts, settings),
        context={"section": section, "section_slug": section_slug},
    )


def _article_list(
    posts: Sequence[PostListItem], settings: Settings
) -> list[dict[str, Any]]:
    return [build_article_list_schema(list(posts), settings.site_url)] if posts else []


def _render_post(
    request: Request,
    settings: Settings,
    client: ContentClient,
    post: Post,
    section_slug: str,
    subcategory_slug: str | None,
) -> HTMLResponse:
    section_title = post.section.title if post.section else ""
    subcategory_title = post.subcategory.title if post.subcategory else ""
    path = post_path(section_slug, post.slug.current, subcategory_slug)
    canonical = absolute_url(path, settings.site_url)

    crumbs = [INICIO, Crumb(section_title, section_path(section_slug))]
    if subcategory_slug and subcategory_title:
        crumbs.append(Crumb(subcategory_title, subcategory_path(section_slug, subcategory_slug)))
    crumbs.append(Crumb(post.title, path))

    image = get_image_url(post.main_image, MAIN_IMAGE_WIDTH, MAIN_IMAGE_HEIGHT, settings)
    word_count = count_words(extract_plain_text(post.body)) or None
    related = service.fetch_related_posts(
        client,
        post.id,
        post.section.id if post.section else "",
        post.tag_ids,
    )
    return render_page(
        request,
        "post.html",
        settings,
        meta.post_metadata(post, section_slug, subcategory_slug, image, settings.site_url),
        crumbs=crumbs,
        schemas=[
            build_blog_post_schema(post, image or None, word_count, settings.site_url)
        ],
        context={
            "post": post,
            "main_image": image,
            "canonical": canonical,
            "related_posts": related,
        },
    )


def _post_in_section(post: Post | None, section_slug: str) -> bool:
    return post is not None and post.section_slug == section_slug


@router.get(
    "/{section_slug}/{slug_param}", response_class=HTMLResponse, name="site_section_child"
)
def section_child(
    request: Request,
    section_slug: str,
    slug_param: str,
    settings: AppSettings,
    client: CmsClient,
) -> HTMLResponse:
    """Render a subcategory listing, or a post directly in the section.

    A matching subcategory takes precedence over a post with the same slug.
    """
    if section_slug in RESERVED_SEGMENTS:
        return render_not_found(request, settings)

    subcategory = service.fetch_subcategory_by_slug(client, section_slug, slug_param)
    if subcategory is not None:
        section_title = subcategory.section.title if subcategory.section else ""
        return render_page(
            request,
            "subcategory.html",
            settings,
            meta.subcategory_metadata(subcategory, section_slug, settings.site_url),
            crumbs=[
                INICIO,
                Crumb(section_title, section_path(section_slug)),
                Crumb(subcategory.title, subcategory_path(section_slug, slug_param)),
            ],
            schemas=_article_list(subcategory.posts, settings),
            context={"subcategory": subcategory, "section_slug": section_slug},
        )

    post = service.fetch_post_by_slug(client, slug_param)
    if post is None or not _post_in_section(post, section_slug):
        return render_not_found(request, settings, meta.POST_NOT_FOUND)
    return _render_post(request, settings, client, post, section_slug, None)


@router.get(
    "/{section_slug}/{subcategory_slug}/{post_slug}",
    response_class=HTMLResponse,
    name="site_subcategory_post",
)
def subcategory_post(
    request: Request,
    section_slug: str,
    subcategory_slug: str,
    post_slug: str,
    settings: AppSettings,
    client: CmsClient,
) -> HTMLResponse:
    """Render a post inside a subcategory."""
    if section_slug in RESERVED_SEGMENTS:
        return render_not_found(request, settings)

    post = service.fetch_post_by_slug(client, post_slug)
    if post is None or not _post_in_section(post, section_slug):
        return render_not_found(request, settings, meta.POST_NOT_FOUND)
    if post.subcategory_slug and post.subcategory_slug != subcategory_slug:
        return render_not_found(request, settings, meta.POST_NOT_FOUND)
    return _render_post(request, settings, client, post, section_slug, subcategory_slug)


__all__ = ["HTML_CACHE_CONTROL", "Crumb", "render_page", "router"]
