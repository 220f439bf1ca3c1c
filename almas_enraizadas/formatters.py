"""Pure formatting helpers used by pages and the authoring console.

No side effects and no I/O; everything here is safe to call from
templates.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any
from urllib.parse import quote

from almas_enraizadas.constants import (
    DEFAULT_EXCERPT_LENGTH,
    ELLIPSIS,
    WORDS_PER_MINUTE,
    SocialPlatform,
)

SPANISH_MONTHS = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")

# Characters encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode a URL component the way browsers do."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def extract_portable_text(blocks: list[Any]) -> str:
    """Flatten Portable Text blocks into a single line of text.

    Args:
        blocks: Portable Text block dicts.

    Returns:
        Text of every ``block`` joined with spaces.
    """
    parts = []
    for block in blocks:
        if not isinstance(block, dict) or block.get("_type") != "block":
            continue
        children = block.get("children")
        if not isinstance(children, list):
            continue
        parts.append(
            "".join(
                str(child.get("text") or "")
                for child in children
                if isinstance(child, dict)
            )
        )
    return " ".join(parts)


def format_date(date_string: str | None) -> str:
    """Format an ISO 8601 date as a long Spanish date.

    Args:
        date_string: ISO date or datetime string.

    Returns:
        Date such as ``"12 de febrero de 2025"``, or ``""`` for empty input.
    """
    if not date_string:
        return ""
    parsed = datetime.fromisoformat(date_string.replace("Z", "+00:00"))
    return f"{parsed.day} de {SPANISH_MONTHS[parsed.month - 1]} de {parsed.year}"


def format_reading_time(minutes: float) -> str:
    """Format a reading time estimate for display."""
    rounded = math.ceil(minutes)
    if rounded <= 1:
        return "1 min de lectura"
    return f"{rounded} min de lectura"


def truncate_text(text: Any, max_length: int) -> str:
    """Truncate text to ``max_length`` characters with an ellipsis.

    Portable Text block lists are flattened first. The cut backs off to the
    last space when that space lies past half of ``max_length``.

    Args:
        text: A string, Portable Text blocks, or any other value.
        max_length: Maximum character count including the ellipsis.

    Returns:
        Truncated string.
    """
    if not text:
        return ""
    value = extract_portable_text(text) if isinstance(text, list) else str(text)
    trimmed = value.strip()
    if len(trimmed) <= max_length:
        return trimmed
    cut = trimmed[: max(0, max_length - len(ELLIPSIS))]
    last_space = cut.rfind(" ")
    end = last_space if last_space > max_length / 2 else len(cut)
    return cut[:end].rstrip() + ELLIPSIS


def slug_to_title(slug: str) -> str:
    """Convert a slug such as ``bienestar-emocional`` to a title."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in slug.split("-"))


def build_share_url(platform: str, url: str, title: str) -> str:
    """Build a share URL for a social platform.

    Args:
        platform: twitter, x, facebook, whatsapp or linkedin.
        url: Page URL to share.
        title: Share headline.

    Returns:
        Share URL, or ``url`` unchanged for unknown platforms.
    """
    encoded_url = encode_uri_component(url)
    encoded_title = encode_uri_component(title)
    lower = platform.lower()

    if lower in (SocialPlatform.TWITTER.value, SocialPlatform.X.value):
        return f"https://twitter.com/intent/tweet?url={encoded_url}&text={encoded_title}"
    if lower == SocialPlatform.FACEBOOK.value:
        return f"https://www.facebook.com/sharer/sharer.php?u={encoded_url}"
    if lower == SocialPlatform.WHATSAPP.value:
        return f"https://wa.me/?text={encoded_title}%20{encoded_url}"
    if lower == SocialPlatform.LINKEDIN.value:
        return f"https://www.linkedin.com/sharing/share-offsite/?url={encoded_url}"
    return url


def strip_markup(text: str) -> str:
    """Replace HTML-like tags with spaces and collapse whitespace."""
    return _WS_RE.sub(" ", _TAG_RE.sub(" ", text)).strip()


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def calculate_reading_time(text: str) -> int:
    """Estimate reading time in whole minutes (minimum one)."""
    words = count_words(strip_markup(text))
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def generate_excerpt(text: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Generate an excerpt from text, truncated at ``max_length``."""
    return truncate_text(strip_markup(text), max_length)


def rating_stars(value: float, max_value: int = 5) -> tuple[int, int]:
    """Return filled and empty star counts for a rating.

    JavaScript-style rounding (half up) keeps 2.5 at three stars.
    """
    filled = min(max(0, math.floor(value + 0.5)), max_value)
    return filled, max_value - filled


__all__ = [
    "build_share_url",
    "calculate_reading_time",
    "count_words",
    "encode_uri_component",
    "extract_portable_text",
    "format_date",
    "format_reading_time",
    "generate_excerpt",
    "rating_stars",
    "slug_to_title",
    "strip_markup",
    "truncate_text",
]
