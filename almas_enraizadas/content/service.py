"""Content service layer.

Thin pass-throughs over the CMS client that validate query results into
models. Pages, the CLI and the MCP server all call these functions.

All functions take a content client as the first argument so the caller
decides which CMS (or the null client) is used.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

from almas_enraizadas.constants import POSTS_PER_PAGE, RELATED_POSTS_LIMIT
from almas_enraizadas.content import queries
from almas_enraizadas.content.client import ContentClient
from almas_enraizadas.content.models import (
    Author,
    AuthorWithPosts,
    Post,
    PostListItem,
    PostSlugTuple,
    Section,
    SectionWithPosts,
    SiteSettings,
    SubcategoryListItem,
    SubcategorySlugPair,
    SubcategoryWithPosts,
    Tag,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _one(model: type[ModelT], result: Any) -> ModelT | None:
    """Validate a single-document result, keeping ``None`` as not found."""
    if not result or not isinstance(result, dict):
        return None
    return model.model_validate(result)


def _many(model: type[ModelT], result: Any) -> list[ModelT]:
    """Validate a list result; anything but a list is treated as empty."""
    if not isinstance(result, list):
        return []
    return [model.model_validate(item) for item in result if isinstance(item, dict)]


def _slug_of(document: Any) -> str | None:
    """Extract ``slug.current`` from a projected document."""
    if not isinstance(document, dict):
        return None
    slug = document.get("slug")
    if isinstance(slug, dict) and slug.get("current"):
        return str(slug["current"])
    return None


# Posts


def fetch_all_posts(client: ContentClient) -> list[PostListItem]:
    """Fetch all posts, newest first."""
    return _many(PostListItem, client.fetch(queries.ALL_POSTS_QUERY))


def fetch_post_by_slug(client: ContentClient, slug: str) -> Post | None:
    """Fetch a single post with its body.

    Args:
        client: Content client.
        slug: Post slug.

    Returns:
        Post, or None if not found.
    """
    return _one(Post, client.fetch(queries.POST_BY_SLUG_QUERY, {"slug": slug}))


def fetch_posts_by_section(client: ContentClient, section_slug: str) -> list[PostListItem]:
    """Fetch posts in a section (including subcategory posts)."""
    return _many(
        PostListItem,
        client.fetch(queries.POSTS_BY_SECTION_QUERY, {"sectionSlug": section_slug}),
    )


def fetch_posts_by_tag(client: ContentClient, tag_slug: str) -> list[PostListItem]:
    """Fetch posts carrying a tag."""
    return _many(
        PostListItem, client.fetch(queries.POSTS_BY_TAG_QUERY, {"tagSlug": tag_slug})
    )


def fetch_recent_posts(
    client: ContentClient, limit: int = POSTS_PER_PAGE
) -> list[PostListItem]:
    """Fetch the latest posts."""
    return _many(
        PostListItem, client.fetch(queries.RECENT_POSTS_QUERY, {"limit": limit})
    )


def fetch_related_posts(
    client: ContentClient,
    post_id: str,
    section_id: str,
    tag_ids: list[str],
    limit: int = RELATED_POSTS_LIMIT,
) -> list[PostListItem]:
    """Fetch posts sharing the section or a tag, excluding the post itself.

    Args:
        client: Content client.
        post_id: ID of the current post.
        section_id: ID of the current post's section.
        tag_ids: IDs of the current post's tags.
        limit: Maximum number of posts.

    Returns:
        Related posts, newest first.
    """
    params = {
        "postId": post_id,
        "sectionId": section_id,
        "tagIds": tag_ids,
        "limit": limit,
    }
    return _many(PostListItem, client.fetch(queries.RELATED_POSTS_QUERY, params))


def fetch_all_post_slugs(client: ContentClient) -> list[PostSlugTuple]:
    """Fetch slug tuples for every post that belongs to a section.

    Posts without a section slug are skipped; the subcategory slug is only
    set when the post has one.
    """
    result = client.fetch(queries.POST_SLUGS_QUERY)
    tuples: list[PostSlugTuple] = []
    for item in result if isinstance(result, list) else []:
        if not isinstance(item, dict):
            continue
        section_slug = _slug_of(item.get("section"))
        post_slug = _slug_of(item)
        if not section_slug or not post_slug:
            continue
        tuples.append(
            PostSlugTuple(
                section_slug=section_slug,
                post_slug=post_slug,
                subcategory_slug=_slug_of(item.get("subcategory")),
            )
        )
    return tuples


# Profiles


def fetch_all_profiles(client: ContentClient) -> list[Author]:
    """Fetch all authors by name."""
    return _many(Author, client.fetch(queries.ALL_AUTHORS_QUERY))


def fetch_profile_by_slug(client: ContentClient, slug: str) -> AuthorWithPosts | None:
    """Fetch an author with their posts."""
    return _one(
        AuthorWithPosts, client.fetch(queries.AUTHOR_BY_SLUG_QUERY, {"slug": slug})
    )


def fetch_all_profile_slugs(client: ContentClient) -> list[str]:
    """Fetch every author slug."""
    result = client.fetch(queries.AUTHOR_SLUGS_QUERY)
    slugs = (_slug_of(item) for item in (result if isinstance(result, list) else []))
    return [slug for slug in slugs if slug]


# Sections


def fetch_all_sections(client: ContentClient) -> list[Section]:
    """Fetch all sections in display order."""
    return _many(Section, client.fetch(queries.ALL_SECTIONS_QUERY))


def fetch_section_by_slug(client: ContentClient, slug: str) -> SectionWithPosts | None:
    """Fetch a section with its direct posts and subcategories."""
    return _one(
        SectionWithPosts,
        client.fetch(queries.SECTION_WITH_SUBCATEGORIES_QUERY, {"slug": slug}),
    )


def fetch_all_section_slugs(client: ContentClient) -> list[str]:
    """Fetch every section slug."""
    result = client.fetch(queries.SECTION_SLUGS_QUERY)
    slugs = (_slug_of(item) for item in (result if isinstance(result, list) else []))
    return [slug for slug in slugs if slug]


# Subcategories


def fetch_subcategories_by_section(
    client: ContentClient, section_slug: str
) -> list[SubcategoryListItem]:
    """Fetch subcategories of a section with post counts."""
    return _many(
        SubcategoryListItem,
        client.fetch(
            queries.SUBCATEGORIES_BY_SECTION_QUERY, {"sectionSlug": section_slug}
        ),
    )


def fetch_subcategory_by_slug(
    client: ContentClient, section_slug: str, subcategory_slug: str
) -> SubcategoryWithPosts | None:
    """Fetch a subcategory within a section, with its posts."""
    params = {"sectionSlug": section_slug, "subcategorySlug": subcategory_slug}
    return _one(
        SubcategoryWithPosts, client.fetch(queries.SUBCATEGORY_BY_SLUG_QUERY, params)
    )


def fetch_all_subcategory_slugs(client: ContentClient) -> list[SubcategorySlugPair]:
    """Fetch section/subcategory slug pairs, skipping orphans."""
    result = client.fetch(queries.SUBCATEGORY_SLUGS_QUERY)
    pairs: list[SubcategorySlugPair] = []
    for item in result if isinstance(result, list) else []:
        if not isinstance(item, dict):
            continue
        section_slug = _slug_of(item.get("section"))
        subcategory_slug = _slug_of(item)
        if section_slug and subcategory_slug:
            pairs.append(
                SubcategorySlugPair(
                    section_slug=section_slug, subcategory_slug=subcategory_slug
                )
            )
    return pairs


# Tags and settings


def fetch_all_tags(client: ContentClient) -> list[Tag]:
    """Fetch all tags by title."""
    return _many(Tag, client.fetch(queries.ALL_TAGS_QUERY))


def fetch_site_settings(client: ContentClient) -> SiteSettings | None:
    """Fetch the site settings singleton."""
    return _one(SiteSettings, client.fetch(queries.SITE_SETTINGS_QUERY))


__all__ = [
    "fetch_all_post_slugs",
    "fetch_all_posts",
    "fetch_all_profile_slugs",
    "fetch_all_profiles",
    "fetch_all_section_slugs",
    "fetch_all_sections",
    "fetch_all_subcategory_slugs",
    "fetch_all_tags",
    "fetch_post_by_slug",
    "fetch_posts_by_section",
    "fetch_posts_by_tag",
    "fetch_profile_by_slug",
    "fetch_recent_posts",
    "fetch_related_posts",
    "fetch_section_by_slug",
    "fetch_site_settings",
    "fetch_subcategories_by_section",
    "fetch_subcategory_by_slug",
]
