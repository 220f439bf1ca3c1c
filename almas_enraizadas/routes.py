"""Centralized route definitions.

URL structure:
    /secciones                                  sections index
    /{section_slug}                             section detail
    /{section_slug}/{post_slug}                 article directly in a section
    /{section_slug}/{subcategory_slug}          subcategory listing
    /{section_slug}/{subcategory_slug}/{post}   article in a subcategory
    /perfiles                                   profiles index
    /perfiles/{slug}                            profile detail
    /sobre-nosotros                             about page

Templates and routers import paths from here instead of hardcoding them.
"""

from __future__ import annotations

from dataclasses import dataclass

from almas_enraizadas.config import get_settings

HOME = "/"
SECTIONS = "/secciones"
PROFILES = "/perfiles"
TAGS = "/tags"
ABOUT = "/sobre-nosotros"
STUDIO = "/studio"
SEARCH = "/buscar"

# Top-level segments that can never be section slugs
RESERVED_SEGMENTS = frozenset(
    {
        SECTIONS.strip("/"),
        PROFILES.strip("/"),
        TAGS.strip("/"),
        ABOUT.strip("/"),
        STUDIO.strip("/"),
        SEARCH.strip("/"),
        "api",
        "static",
        "health",
        "config",
    }
)


@dataclass(frozen=True)
class NavItem:
    """A navigation link."""

    label: str
    href: str


NAV_ITEMS: tuple[NavItem, ...] = (
    NavItem("Inicio", HOME),
    NavItem("Secciones", SECTIONS),
    NavItem("Perfiles", PROFILES),
    NavItem("Sobre Nosotros", ABOUT),
)

# Legacy prefixes permanently redirected to the sections index
LEGACY_REDIRECTS: tuple[str, ...] = ("/blog", "/categorias")


def section_path(section_slug: str) -> str:
    """Path to a section."""
    return f"/{section_slug}"


def subcategory_path(section_slug: str, subcategory_slug: str) -> str:
    """Path to a subcategory listing."""
    return f"/{section_slug}/{subcategory_slug}"


def post_path(
    section_slug: str, post_slug: str, subcategory_slug: str | None = None
) -> str:
    """Path to an article.

    Articles inside a subcategory get the three-segment form.
    """
    if subcategory_slug:
        return f"/{section_slug}/{subcategory_slug}/{post_slug}"
    return f"/{section_slug}/{post_slug}"


def profile_path(slug: str) -> str:
    """Path to an author profile."""
    return f"{PROFILES}/{slug}"


def tag_path(slug: str) -> str:
    """Path to a tag."""
    return f"{TAGS}/{slug}"


def absolute_url(path: str, base_url: str | None = None) -> str:
    """Build an absolute URL from a site-relative path.

    Args:
        path: Path starting with ``/``.
        base_url: Site base URL; the configured ``site_url`` if omitted.

    Returns:
        Absolute URL.
    """
    if base_url is None:
        base_url = get_settings().site_url
    return f"{base_url.rstrip('/')}{path}"


def section_url(section_slug: str, base_url: str | None = None) -> str:
    """Absolute URL to a section."""
    return absolute_url(section_path(section_slug), base_url)


def subcategory_url(
    section_slug: str, subcategory_slug: str, base_url: str | None = None
) -> str:
    """Absolute URL to a subcategory."""
    return absolute_url(subcategory_path(section_slug, subcategory_slug), base_url)


def post_url(
    section_slug: str,
    post_slug: str,
    subcategory_slug: str | None = None,
    base_url: str | None = None,
) -> str:
    """Absolute URL to an article."""
    return absolute_url(post_path(section_slug, post_slug, subcategory_slug), base_url)


def profile_url(slug: str, base_url: str | None = None) -> str:
    """Absolute URL to a profile."""
    return absolute_url(profile_path(slug), base_url)


def tag_url(slug: str, base_url: str | None = None) -> str:
    """Absolute URL to a tag."""
    return absolute_url(tag_path(slug), base_url)


__all__ = [
    "ABOUT",
    "HOME",
    "LEGACY_REDIRECTS",
    "NAV_ITEMS",
    "PROFILES",
    "RESERVED_SEGMENTS",
    "SEARCH",
    "SECTIONS",
    "STUDIO",
    "TAGS",
    "NavItem",
    "absolute_url",
    "post_path",
    "post_url",
    "profile_path",
    "profile_url",
    "section_path",
    "section_url",
    "subcategory_path",
    "subcategory_url",
    "tag_path",
    "tag_url",
]
