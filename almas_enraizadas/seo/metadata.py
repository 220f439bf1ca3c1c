"""Page metadata (title, description, canonical, Open Graph, Twitter).

Each builder returns a :class:`PageMetadata`; the base template renders it
as ``<head>`` tags. Page titles go through :data:`TITLE_TEMPLATE` unless
the page uses the site default.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from almas_enraizadas.constants import (
    DEFAULT_EXCERPT_LENGTH,
    SITE_DESCRIPTION,
    SITE_LOCALE,
    SITE_NAME,
    SITE_TAGLINE,
)
from almas_enraizadas.content.models import (
    AuthorWithPosts,
    Post,
    SectionWithPosts,
    SubcategoryWithPosts,
)
from almas_enraizadas.formatters import truncate_text
from almas_enraizadas.routes import (
    PROFILES,
    SECTIONS,
    absolute_url,
    post_url,
    profile_url,
    section_url,
    subcategory_url,
)

DEFAULT_TITLE = f"{SITE_NAME} — {SITE_TAGLINE}"
TITLE_TEMPLATE = f"%s | {SITE_NAME}"

SECTION_NOT_FOUND = "Sección no encontrada"
POST_NOT_FOUND = "Artículo no encontrado"
PROFILE_NOT_FOUND = "Perfil no encontrado"
NOT_FOUND = "No encontrado"


class PageMetadata(BaseModel):
    """Metadata rendered into a page's ``<head>``."""

    title: str | None = None
    description: str = SITE_DESCRIPTION
    canonical: str | None = None
    open_graph: dict[str, Any] = Field(default_factory=dict)
    twitter: dict[str, Any] = Field(default_factory=dict)
    robots: str = "index, follow"

    @property
    def document_title(self) -> str:
        """Title for the ``<title>`` element."""
        if not self.title:
            return DEFAULT_TITLE
        return TITLE_TEMPLATE % self.title

    @property
    def og_tags(self) -> dict[str, Any]:
        """Open Graph properties merged over the site defaults."""
        tags: dict[str, Any] = {
            "type": "website",
            "locale": SITE_LOCALE,
            "site_name": SITE_NAME,
            "title": SITE_NAME,
            "description": SITE_DESCRIPTION,
        }
        tags.update({k: v for k, v in self.open_graph.items() if v is not None})
        return tags

    @property
    def twitter_tags(self) -> dict[str, Any]:
        """Twitter card properties merged over the site defaults."""
        tags: dict[str, Any] = {
            "card": "summary_large_image",
            "title": SITE_NAME,
            "description": SITE_DESCRIPTION,
        }
        tags.update({k: v for k, v in self.twitter.items() if v is not None})
        return tags


def default_metadata() -> PageMetadata:
    """Site-wide default metadata (home page)."""
    return PageMetadata()


def not_found_metadata(title: str = NOT_FOUND) -> PageMetadata:
    """Metadata for a missing page."""
    return PageMetadata(title=title, robots="noindex, follow")


def sections_index_metadata(base_url: str | None = None) -> PageMetadata:
    """Metadata for the sections index."""
    canonical = absolute_url(SECTIONS, base_url)
    return PageMetadata(
        title="Secciones",
        description=(
            "Explora los temas de bienestar, mindfulness y crecimiento personal "
            f"en {SITE_NAME}. Cada sección agrupa artículos sobre distintos "
            "aspectos de una vida plena."
        ),
        canonical=canonical,
        open_graph={"title": "Secciones", "url": canonical},
    )


def section_metadata(
    section: SectionWithPosts | None, section_slug: str, base_url: str | None = None
) -> PageMetadata:
    """Metadata for a section page."""
    if section is None:
        return not_found_metadata(SECTION_NOT_FOUND)
    canonical = section_url(section_slug, base_url)
    return PageMetadata(
        title=section.title,
        description=section.description or f"Artículos sobre {section.title} en {SITE_NAME}",
        canonical=canonical,
        open_graph={
            "title": section.title,
            "description": section.description or f"Artículos sobre {section.title}",
            "url": canonical,
        },
    )


def subcategory_metadata(
    subcategory: SubcategoryWithPosts, section_slug: str, base_url: str | None = None
) -> PageMetadata:
    """Metadata for a subcategory listing."""
    section_title = subcategory.section.title if subcategory.section else ""
    canonical = subcategory_url(section_slug, subcategory.slug.current, base_url)
    return PageMetadata(
        title=f"{subcategory.title} — {section_title}",
        description=subcategory.description or f"{subcategory.title} en {section_title}",
        canonical=canonical,
        open_graph={
            "title": subcategory.title,
            "description": subcategory.description or subcategory.title,
            "url": canonical,
        },
    )


def post_metadata(
    post: Post | None,
    section_slug: str,
    subcategory_slug: str | None = None,
    image_url: str = "",
    base_url: str | None = None,
) -> PageMetadata:
    """Metadata for an article page.

    Args:
        post: The article, or None when not found.
        section_slug: Section slug from the URL.
        subcategory_slug: Subcategory slug from the URL, if any.
        image_url: Main image URL (empty when the post has none).
        base_url: Site base URL override.

    Returns:
        Article metadata with Open Graph ``article`` fields.
    """
    if post is None:
        return not_found_metadata(POST_NOT_FOUND)
    canonical = post_url(section_slug, post.slug.current, subcategory_slug, base_url)
    description = post.excerpt or SITE_DESCRIPTION
    open_graph: dict[str, Any] = {
        "title": post.title,
        "description": description,
        "url": canonical,
        "type": "article",
        "published_time": post.published_at,
        "authors": [post.author.name] if post.author else [],
    }
    if image_url:
        alt = post.main_image.alt if post.main_image and post.main_image.alt else post.title
        open_graph["image"] = image_url
        open_graph["image_alt"] = alt
    return PageMetadata(
        title=post.title,
        description=description,
        canonical=canonical,
        open_graph=open_graph,
        twitter={
            "card": "summary_large_image",
            "title": post.title,
            "description": description,
        },
    )


def profiles_index_metadata(base_url: str | None = None) -> PageMetadata:
    """Metadata for the profiles index."""
    canonical = absolute_url(PROFILES, base_url)
    return PageMetadata(
        title="Perfiles",
        description=(
            f"Conoce a los autores y colaboradores de {SITE_NAME}. Expertos en "
            "bienestar, mindfulness y crecimiento personal que comparten su "
            "sabiduría contigo."
        ),
        canonical=canonical,
        open_graph={"title": "Perfiles", "url": canonical},
    )


def profile_metadata(
    profile: AuthorWithPosts | None, slug: str, base_url: str | None = None
) -> PageMetadata:
    """Metadata for an author profile."""
    if profile is None:
        return not_found_metadata(PROFILE_NOT_FOUND)
    canonical = profile_url(slug, base_url)
    bio = truncate_text(profile.bio, DEFAULT_EXCERPT_LENGTH)
    return PageMetadata(
        title=profile.name,
        description=bio or f"Perfil de {profile.name} en {SITE_NAME}",
        canonical=canonical,
        open_graph={
            "title": profile.name,
            "description": bio or f"Perfil de {profile.name}",
            "url": canonical,
        },
    )


def about_metadata() -> PageMetadata:
    """Metadata for the about page."""
    return PageMetadata(
        title="Sobre Nosotros",
        description=(
            f"Conoce la misión, valores y equipo de {SITE_NAME}. Un espacio "
            "dedicado al bienestar, la conexión y el crecimiento personal."
        ),
    )


__all__ = [
    "DEFAULT_TITLE",
    "NOT_FOUND",
    "POST_NOT_FOUND",
    "PROFILE_NOT_FOUND",
    "SECTION_NOT_FOUND",
    "TITLE_TEMPLATE",
    "PageMetadata",
    "about_metadata",
    "default_metadata",
    "not_found_metadata",
    "post_metadata",
    "profile_metadata",
    "profiles_index_metadata",
    "section_metadata",
    "sections_index_metadata",
    "subcategory_metadata",
]
