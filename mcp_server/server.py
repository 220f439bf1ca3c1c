"""MCP server implementation.

This module creates the FastMCP server and registers all tools.
Tools are thin wrappers around core almas_enraizadas services:
published content is read-only, and the AI tools run the same
writing assistance the studio offers.

Tools never raise; failures come back as ``success=False`` with a
structured ``{code, message}`` error.
"""

from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from almas_enraizadas.ai import authoring
from almas_enraizadas.ai.service import AiRequest
from almas_enraizadas.ai.service import generate_text as svc_generate_text
from almas_enraizadas.config import get_settings
from almas_enraizadas.content import service
from almas_enraizadas.content.client import ContentClient, get_client
from almas_enraizadas.content.models import PostListItem
from almas_enraizadas.errors import AlmasError
from almas_enraizadas.formatters import calculate_reading_time, count_words, strip_markup
from almas_enraizadas.portable_text.extract import extract_plain_text
from almas_enraizadas.portable_text.parser import parse_markdown
from mcp_server.errors import (
    INTERNAL_ERROR,
    from_app_error,
    make_error,
    post_not_found,
    validation_error,
)
from mcp_server.schemas import (
    GenerateTextResponse,
    GetPostResponse,
    ListPostsResponse,
    ListSectionsResponse,
    PortableTextResponse,
    PostDetail,
    PostSummary,
    ReadingTimeResponse,
    SectionSummary,
)

# Create the FastMCP server instance
mcp = FastMCP(
    name="almas-enraizadas",
)


def _get_client() -> ContentClient:
    """Create a content client from the current settings."""
    return get_client(get_settings())


def _error_dict(error: Exception) -> dict[str, Any]:
    if isinstance(error, AlmasError):
        return from_app_error(error).to_dict()
    return make_error(INTERNAL_ERROR, str(error)).to_dict()


def _post_summary(post: PostListItem) -> PostSummary:
    return PostSummary(
        id=post.id,
        title=post.title,
        slug=post.slug.current,
        path=post.path,
        excerpt=post.excerpt,
        published_at=post.published_at,
        author=post.author.name if post.author else None,
        section=post.section.title if post.section else None,
        tags=[tag.title for tag in post.tags] if post.tags else None,
    )


@mcp.tool()
def list_posts(
    section: Annotated[
        str | None, Field(description="Filter by section slug")
    ] = None,
    tag: Annotated[str | None, Field(description="Filter by tag slug")] = None,
) -> ListPostsResponse:
    """List published posts, newest first.

    Use filters to narrow results to a section or a tag. When both are
    given the section filter wins.

    Returns:
        ListPostsResponse with list of posts or error.
    """
    client = _get_client()
    try:
        if section:
            posts = service.fetch_posts_by_section(client, section)
        elif tag:
            posts = service.fetch_posts_by_tag(client, tag)
        else:
            posts = service.fetch_all_posts(client)
        summaries = [_post_summary(p) for p in posts]
        return ListPostsResponse(success=True, posts=summaries, total=len(summaries))
    except Exception as e:
        return ListPostsResponse(
            success=False, posts=[], total=0, error=_error_dict(e)
        )
    finally:
        client.close()


@mcp.tool()
def get_post(
    slug: Annotated[str, Field(description="Post slug")],
) -> GetPostResponse:
    """Get one post with its body flattened to plain text.

    Args:
        slug: The post slug.

    Returns:
        GetPostResponse with post details or error.
    """
    client = _get_client()
    try:
        post = service.fetch_post_by_slug(client, slug)
        if post is None:
            return GetPostResponse(success=False, error=post_not_found(slug).to_dict())
        summary = _post_summary(post)
        detail = PostDetail(
            **summary.model_dump(),
            text=extract_plain_text(post.body),
            ai_summary=post.ai_summary,
            reading_time=post.reading_time,
            rating=post.rating,
        )
        return GetPostResponse(success=True, post=detail)
    except Exception as e:
        return GetPostResponse(success=False, error=_error_dict(e))
    finally:
        client.close()


@mcp.tool()
def list_sections() -> ListSectionsResponse:
    """List content sections in display order.

    Returns:
        ListSectionsResponse with sections or error.
    """
    client = _get_client()
    try:
        sections = [
            SectionSummary(
                id=s.id,
                title=s.title,
                slug=s.slug.current,
                path=s.path,
                description=s.description,
            )
            for s in service.fetch_all_sections(client)
        ]
        return ListSectionsResponse(success=True, sections=sections, total=len(sections))
    except Exception as e:
        return ListSectionsResponse(
            success=False, sections=[], total=0, error=_error_dict(e)
        )
    finally:
        client.close()


@mcp.tool()
def generate_text(
    action: Annotated[
        str,
        Field(
            description=(
                "One of: summary, excerpt, seoTitle, readingTime, bodyContent"
            )
        ),
    ],
    title: Annotated[str, Field(description="Article title")] = "",
    body: Annotated[str, Field(description="Article body as plain text")] = "",
) -> GenerateTextResponse:
    """Generate article text with the chat model.

    summary, excerpt and readingTime need the body; seoTitle and
    bodyContent need only the title.

    Returns:
        GenerateTextResponse with the generated text or error.
    """
    try:
        result = svc_generate_text(
            AiRequest(action=action, title=title, body=body), get_settings()
        )
        return GenerateTextResponse(success=True, result=result)
    except Exception as e:
        return GenerateTextResponse(success=False, error=_error_dict(e))


@mcp.tool()
def suggest_seo_titles(
    title: Annotated[str, Field(description="Current article title")],
) -> GenerateTextResponse:
    """Suggest three SEO-optimized title variants.

    Returns:
        GenerateTextResponse with the numbered options or error.
    """
    try:
        result = authoring.suggest_seo_titles(title, get_settings())
        return GenerateTextResponse(success=True, result=result)
    except Exception as e:
        return GenerateTextResponse(success=False, error=_error_dict(e))


@mcp.tool()
def markdown_to_portable_text(
    markdown: Annotated[str, Field(description="Markdown text to convert")],
) -> PortableTextResponse:
    """Convert Markdown into Portable Text blocks.

    Supports paragraphs, ## and ### headings, > quotes, bullet and
    numbered lists, and **bold** / *italic* inline marks.

    Returns:
        PortableTextResponse with blocks.
    """
    try:
        blocks = parse_markdown(markdown)
        return PortableTextResponse(success=True, blocks=blocks, total=len(blocks))
    except Exception as e:
        return PortableTextResponse(
            success=False, blocks=[], total=0, error=_error_dict(e)
        )


@mcp.tool()
def estimate_reading_time(
    text: Annotated[
        str | None, Field(description="Plain text or Markdown to measure")
    ] = None,
    blocks: Annotated[
        list[dict[str, Any]] | None,
        Field(description="Portable Text blocks to measure instead of text"),
    ] = None,
) -> ReadingTimeResponse:
    """Estimate reading time at 200 words per minute.

    Returns:
        ReadingTimeResponse with whole minutes (minimum one) and word count.
    """
    content = extract_plain_text(blocks) if blocks else (text or "")
    words = count_words(strip_markup(content))
    if not words:
        return ReadingTimeResponse(
            success=False,
            error=validation_error("Provide non-empty text or blocks").to_dict(),
        )
    return ReadingTimeResponse(
        success=True, minutes=calculate_reading_time(content), words=words
    )


__all__ = [
    "estimate_reading_time",
    "generate_text",
    "get_post",
    "list_posts",
    "list_sections",
    "markdown_to_portable_text",
    "mcp",
    "suggest_seo_titles",
]
