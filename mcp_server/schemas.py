"""Pydantic schemas for MCP tool responses.

These schemas define the structured output formats for MCP tools,
ensuring consistent JSON responses across all tools.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class PostSummary(BaseModel):
    """Summary of a post for list responses."""

    model_config = ConfigDict(extra="forbid")

    id: str
    title: str
    slug: str
    path: str
    excerpt: str | None = None
    published_at: str | None = None
    author: str | None = None
    section: str | None = None
    tags: list[str] | None = None


class PostDetail(PostSummary):
    """Full post with its body as plain text."""

    model_config = ConfigDict(extra="forbid")

    text: str = ""
    ai_summary: str | None = None
    reading_time: float | None = None
    rating: float | None = None


class SectionSummary(BaseModel):
    """Summary of a section."""

    model_config = ConfigDict(extra="forbid")

    id: str
    title: str
    slug: str
    path: str
    description: str | None = None


class ListPostsResponse(BaseModel):
    """Response for list_posts tool."""

    model_config = ConfigDict(extra="forbid")

    success: bool
    posts: list[PostSummary]
    total: int
    error: dict[str, Any] | None = None


class GetPostResponse(BaseModel):
    """Response for get_post tool."""

    model_config = ConfigDict(extra="forbid")

    success: bool
    post: PostDetail | None = None
    error: dict[str, Any] | None = None


class ListSectionsResponse(BaseModel):
    """Response for list_sections tool."""

    model_config = ConfigDict(extra="forbid")

    success: bool
    sections: list[SectionSummary]
    total: int
    error: dict[str, Any] | None = None


class GenerateTextResponse(BaseModel):
    """Response for generate_text and suggest_seo_titles tools."""

    model_config = ConfigDict(extra="forbid")

    success: bool
    result: str | None = None
    error: dict[str, Any] | None = None


class PortableTextResponse(BaseModel):
    """Response for markdown_to_portable_text tool."""

    model_config = ConfigDict(extra="forbid")

    success: bool
    blocks: list[dict[str, Any]]
    total: int
    error: dict[str, Any] | None = None


class ReadingTimeResponse(BaseModel):
    """Response for estimate_reading_time tool."""

    model_config = ConfigDict(extra="forbid")

    success: bool
    minutes: int | None = None
    words: int = 0
    error: dict[str, Any] | None = None


__all__ = [
    "GenerateTextResponse",
    "GetPostResponse",
    "ListPostsResponse",
    "ListSectionsResponse",
    "PortableTextResponse",
    "PostDetail",
    "PostSummary",
    "ReadingTimeResponse",
    "SectionSummary",
]
