"""Portable Text to HTML rendering.

Produces semantic HTML for article bodies. All text is escaped with
markupsafe; the result is a ``Markup`` instance safe to drop into a
Jinja2 template.
"""

from __future__ import annotations

import logging
from typing import Any

from markupsafe import Markup, escape

from almas_enraizadas.config import Settings
from almas_enraizadas.content.image import get_image_url

logger = logging.getLogger(__name__)

INLINE_IMAGE_WIDTH = 960
INLINE_IMAGE_HEIGHT = 540

BLOCK_TAGS = {
    "normal": "p",
    "h1": "h1",
    "h2": "h2",
    "h3": "h3",
    "h4": "h4",
    "h5": "h5",
    "h6": "h6",
    "blockquote": "blockquote",
}

DECORATOR_TAGS = {
    "strong": "strong",
    "em": "em",
    "code": "code",
    "underline": "u",
    "strike-through": "s",
}

LIST_TAGS = {"bullet": "ul", "number": "ol"}


def _render_annotation(mark_def: dict[str, Any], inner: Markup) -> Markup:
    mark_type = mark_def.get("_type")
    if mark_type == "link":
        href = str(mark_def.get("href") or "")
        if href.startswith("http"):
            return Markup(
                '<a href="{}" target="_blank" rel="noopener noreferrer">{}</a>'
            ).format(href, inner)
        return Markup('<a href="{}">{}</a>').format(href, inner)
    if mark_type == "internalLink":
        slug = mark_def.get("slug")
        href = f"/{slug}" if slug else "#"
        return Markup('<a href="{}">{}</a>').format(href, inner)
    return inner


def render_span(span: dict[str, Any], mark_defs: dict[str, dict[str, Any]]) -> Markup:
    """Render one span with its decorators and annotations.

    Args:
        span: Span dict.
        mark_defs: Mark definitions of the enclosing block, by key.

    Returns:
        Escaped HTML for the span.
    """
    html = Markup(escape(str(span.get("text") or "")))
    for mark in span.get("marks") or []:
        if mark in DECORATOR_TAGS:
            tag = DECORATOR_TAGS[mark]
            html = Markup("<{0}>{1}</{0}>").format(Markup(tag), html)
        elif mark in mark_defs:
            mark_def = mark_defs[mark]
            # Mark definitions may also be plain decorators
            decorator = DECORATOR_TAGS.get(str(mark_def.get("_type")))
            if decorator:
                html = Markup("<{0}>{1}</{0}>").format(Markup(decorator), html)
            else:
                html = _render_annotation(mark_def, html)
    return html


def render_children(block: dict[str, Any]) -> Markup:
    """Render the inline content of a block."""
    mark_defs = {
        str(d.get("_key")): d
        for d in block.get("markDefs") or []
        if isinstance(d, dict) and d.get("_key")
    }
    return Markup("").join(
        render_span(child, mark_defs)
        for child in block.get("children") or []
        if isinstance(child, dict)
    )


def render_block(block: dict[str, Any]) -> Markup:
    """Render a text block (not a list item)."""
    tag = BLOCK_TAGS.get(str(block.get("style") or "normal"), "p")
    return Markup("<{0}>{1}</{0}>").format(Markup(tag), render_children(block))


def render_image(value: dict[str, Any], settings: Settings | None = None) -> Markup:
    """Render an inline image as a figure, or nothing without a URL."""
    url = get_image_url(value, INLINE_IMAGE_WIDTH, INLINE_IMAGE_HEIGHT, settings)
    if not url:
        return Markup("")
    alt = str(value.get("alt") or "")
    img = Markup(
        '<img src="{}" alt="{}" width="{}" height="{}" loading="lazy">'
    ).format(url, alt, INLINE_IMAGE_WIDTH, INLINE_IMAGE_HEIGHT)
    caption = Markup("<figcaption>{}</figcaption>").format(alt) if alt else Markup("")
    return Markup("<figure>{}{}</figure>").format(img, caption)


def _render_list(items: list[dict[str, Any]], start: int, level: int) -> tuple[Markup, int]:
    """Render consecutive list items at ``level`` and deeper.

    Returns:
        ``(html, next_index)``.
    """
    list_type = str(items[start].get("listItem"))
    tag = LIST_TAGS.get(list_type, "ul")
    parts: list[Markup] = []
    index = start
    while index < len(items):
        item = items[index]
        item_level = int(item.get("level") or 1)
        if item_level < level:
            break
        if item_level > level:
            nested, index = _render_list(items, index, item_level)
            if parts:
                # Nested lists belong inside the previous item
                parts[-1] = Markup(str(parts[-1])[: -len("</li>")] + str(nested) + "</li>")
            else:
                parts.append(Markup("<li>{}</li>").format(nested))
            continue
        if str(item.get("listItem")) != list_type:
            break
        parts.append(Markup("<li>{}</li>").format(render_children(item)))
        index += 1
    html = Markup("<{0}>{1}</{0}>").format(Markup(tag), Markup("").join(parts))
    return html, index


def render_portable_text(blocks: Any, settings: Settings | None = None) -> Markup:
    """Render Portable Text blocks as HTML.

    Consecutive list items are grouped into ``<ul>``/``<ol>`` elements,
    nested by ``level``. Unknown block types are skipped.

    Args:
        blocks: Block list as stored in the CMS.
        settings: Application settings (for image URLs).

    Returns:
        Rendered HTML; empty for empty or invalid input.
    """
    if not isinstance(blocks, list) or not blocks:
        return Markup("")

    parts: list[Markup] = []
    index = 0
    while index < len(blocks):
        block = blocks[index]
        if not isinstance(block, dict):
            index += 1
            continue
        block_type = block.get("_type")
        if block_type == "block" and block.get("listItem"):
            run_end = index
            while (
                run_end < len(blocks)
                and isinstance(blocks[run_end], dict)
                and blocks[run_end].get("_type") == "block"
                and blocks[run_end].get("listItem")
            ):
                run_end += 1
            run = blocks[index:run_end]
            position = 0
            while position < len(run):
                html, position = _render_list(run, position, int(run[position].get("level") or 1))
                parts.append(html)
            index = run_end
            continue
        if block_type == "block":
            parts.append(render_block(block))
        elif block_type == "image":
            parts.append(render_image(block, settings))
        else:
            logger.debug("Skipping unknown block type %r", block_type)
        index += 1

    return Markup("\n").join(parts)


__all__ = [
    "render_block",
    "render_children",
    "render_image",
    "render_portable_text",
    "render_span",
]
