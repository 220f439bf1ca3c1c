"""JSON-LD structured data builders (schema.org).

Every builder is a pure function returning a plain dict; templates embed
the result with :func:`to_json_ld`.
"""

from __future__ import annotations

import json
from typing import Any, TypedDict

from almas_enraizadas.config import get_settings
from almas_enraizadas.constants import DEFAULT_EXCERPT_LENGTH, SITE_NAME
from almas_enraizadas.content.models import Author, PostListItem
from almas_enraizadas.formatters import truncate_text
from almas_enraizadas.routes import SEARCH, absolute_url, post_url, profile_url

SCHEMA_CONTEXT = "https://schema.org"


class BreadcrumbEntry(TypedDict):
    """A breadcrumb trail entry with an absolute URL."""

    name: str
    url: str


def _site_url(base_url: str | None) -> str:
    return base_url if base_url is not None else get_settings().site_url


def build_website_schema(base_url: str | None = None) -> dict[str, Any]:
    """WebSite schema with a search action."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "WebSite",
        "name": SITE_NAME,
        "url": _site_url(base_url),
        "potentialAction": {
            "@type": "SearchAction",
            "target": {
                "@type": "EntryPoint",
                "urlTemplate": f"{absolute_url(SEARCH, base_url)}?q={{search_term_string}}",
            },
            "query-input": "required name=search_term_string",
        },
    }


def build_organization_schema(
    logo_url: str | None = None, base_url: str | None = None
) -> dict[str, Any]:
    """Organization schema; ``logo`` only when a URL is given."""
    schema: dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Organization",
        "name": SITE_NAME,
        "url": _site_url(base_url),
    }
    if logo_url:
        schema["logo"] = logo_url
    return schema


def _canonical_post_url(post: PostListItem, base_url: str | None) -> str:
    return post_url(post.section_slug, post.slug.current, post.subcategory_slug, base_url)


def build_blog_post_schema(
    post: PostListItem,
    image_url: str | None = None,
    word_count: int | None = None,
    base_url: str | None = None,
) -> dict[str, Any]:
    """BlogPosting schema for an article.

    Args:
        post: The article.
        image_url: Main image URL, if any.
        word_count: Body word count, if known.
        base_url: Site base URL override.

    Returns:
        Schema dict. ``keywords`` is omitted without tags and
        ``aggregateRating`` is present only for a non-zero rating.
    """
    author = post.author or Author()
    schema: dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": "BlogPosting",
        "headline": post.title,
        "url": _canonical_post_url(post, base_url),
        "datePublished": post.published_at,
        "author": {
            "@type": "Person",
            "name": author.name,
            "url": profile_url(author.slug.current, base_url),
        },
        "description": post.excerpt,
        "articleSection": post.section.title if post.section else None,
    }
    keywords = ", ".join(tag.title for tag in post.tags or [])
    if keywords:
        schema["keywords"] = keywords
    if image_url:
        schema["image"] = image_url
    if word_count:
        schema["wordCount"] = word_count
    if post.rating:
        schema["aggregateRating"] = {
            "@type": "AggregateRating",
            "ratingValue": post.rating,
        }
    return schema


def build_breadcrumb_schema(items: list[BreadcrumbEntry]) -> dict[str, Any]:
    """BreadcrumbList schema; positions start at 1."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": [
            {
                "@type": "ListItem",
                "position": position,
                "name": item["name"],
                "item": item["url"],
            }
            for position, item in enumerate(items, start=1)
        ],
    }


def build_profile_schema(
    author: Author, image_url: str | None = None, base_url: str | None = None
) -> dict[str, Any]:
    """Person schema for an author profile."""
    schema: dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Person",
        "name": author.name,
        "description": truncate_text(author.bio, DEFAULT_EXCERPT_LENGTH),
    }
    if image_url:
        schema["image"] = image_url
    schema["url"] = profile_url(author.slug.current, base_url)
    schema["sameAs"] = [link.url for link in author.social_links or []]
    return schema


def build_article_list_schema(
    posts: list[PostListItem], base_url: str | None = None
) -> dict[str, Any]:
    """ItemList of BlogPosting entries for listing pages."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "ItemList",
        "itemListElement": [
            {
                "@type": "BlogPosting",
                "position": position,
                "headline": post.title,
                "datePublished": post.published_at,
                "url": _canonical_post_url(post, base_url),
                "author": {
                    "@type": "Person",
                    "name": post.author.name if post.author else "",
                },
            }
            for position, post in enumerate(posts, start=1)
        ],
    }


def to_json_ld(data: dict[str, Any]) -> str:
    """Serialise a schema for an inline ``<script type="application/ld+json">``.

    ``</`` is escaped so content cannot close the script element.
    """
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


__all__ = [
    "BreadcrumbEntry",
    "build_article_list_schema",
    "build_blog_post_schema",
    "build_breadcrumb_schema",
    "build_organization_schema",
    "build_profile_schema",
    "build_website_schema",
    "to_json_ld",
]
