"""Markdown subset to Portable Text conversion.

Turns the markdown produced by the article generator into Portable Text
blocks. Supported syntax:

- ``## `` and ``### `` headings (h2, h3)
- ``> `` blockquotes
- ``- `` / ``• `` bullet items and ``1. `` numbered items (level 1)
- ``**bold**`` and ``*italic*`` inline spans
- anything else becomes a normal paragraph

Lines are classified one at a time by prefix. There is no nesting and no
escaping; malformed markup simply ends up as paragraph text.
"""

from __future__ import annotations

import re
import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

_INLINE_RE = re.compile(r"(\*\*(.+?)\*\*|\*(.+?)\*)")
_NUMBERED_RE = re.compile(r"^\d+\.\s+(.+)$")

_KEY_ALPHABET = string.ascii_lowercase + string.digits
KEY_LENGTH = 8

KeyFactory = Callable[[], str]


class TokenKind(str, Enum):
    """Inline token kinds."""

    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"


class BlockStyle(str, Enum):
    """Block styles emitted by the parser."""

    NORMAL = "normal"
    H2 = "h2"
    H3 = "h3"
    BLOCKQUOTE = "blockquote"


class ListItem(str, Enum):
    """List item kinds."""

    BULLET = "bullet"
    NUMBER = "number"


MARK_FOR_TOKEN = {TokenKind.BOLD: "strong", TokenKind.ITALIC: "em"}


@dataclass(frozen=True)
class InlineToken:
    """A run of inline text with its emphasis."""

    kind: TokenKind
    value: str


def random_key() -> str:
    """Generate a short random key for blocks, spans and mark definitions."""
    return "".join(secrets.choice(_KEY_ALPHABET) for _ in range(KEY_LENGTH))


def counter_keys(prefix: str = "k") -> KeyFactory:
    """Return a deterministic key factory (``k1``, ``k2``...)."""
    count = 0

    def next_key() -> str:
        nonlocal count
        count += 1
        return f"{prefix}{count}"

    return next_key


def tokenize_inline(text: str) -> list[InlineToken]:
    """Split text into plain, bold and italic tokens.

    Args:
        text: A single line of markdown.

    Returns:
        Tokens in order of appearance.
    """
    tokens: list[InlineToken] = []
    last_index = 0

    for match in _INLINE_RE.finditer(text):
        if match.start() > last_index:
            tokens.append(InlineToken(TokenKind.TEXT, text[last_index : match.start()]))
        if match.group(2):
            tokens.append(InlineToken(TokenKind.BOLD, match.group(2)))
        elif match.group(3):
            tokens.append(InlineToken(TokenKind.ITALIC, match.group(3)))
        last_index = match.end()

    if last_index < len(text):
        tokens.append(InlineToken(TokenKind.TEXT, text[last_index:]))

    if not tokens and text:
        tokens.append(InlineToken(TokenKind.TEXT, text))

    return tokens


def build_spans(
    text: str, key_factory: KeyFactory = random_key
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Convert inline markdown into spans and mark definitions.

    Each emphasised span gets its own mark definition.

    Args:
        text: A single line of markdown.
        key_factory: Key generator.

    Returns:
        ``(children, mark_defs)``; always at least one span.
    """
    children: list[dict[str, Any]] = []
    mark_defs: list[dict[str, Any]] = []

    for token in tokenize_inline(text):
        if token.kind is TokenKind.TEXT:
            marks: list[str] = []
        else:
            mark_key = key_factory()
            mark_defs.append({"_key": mark_key, "_type": MARK_FOR_TOKEN[token.kind]})
            marks = [mark_key]
        children.append(
            {"_type": "span", "_key": key_factory(), "text": token.value, "marks": marks}
        )

    if not children:
        children.append({"_type": "span", "_key": key_factory(), "text": "", "marks": []})

    return children, mark_defs


def create_block(
    text: str,
    style: BlockStyle = BlockStyle.NORMAL,
    list_item: ListItem | None = None,
    key_factory: KeyFactory = random_key,
) -> dict[str, Any]:
    """Create a Portable Text block.

    Args:
        text: Inline markdown content.
        style: Block style.
        list_item: List kind for list items.
        key_factory: Key generator.

    Returns:
        Block dict.
    """
    block_key = key_factory()
    children, mark_defs = build_spans(text, key_factory)
    block: dict[str, Any] = {
        "_type": "block",
        "_key": block_key,
        "style": style.value,
        "markDefs": mark_defs,
        "children": children,
    }
    if list_item is not None:
        block["listItem"] = list_item.value
        block["level"] = 1
    return block


def classify_line(line: str) -> tuple[str, BlockStyle, ListItem | None]:
    """Classify a trimmed, non-empty line by its prefix.

    Returns:
        ``(content, style, list_item)``.
    """
    if line.startswith("## ") and not line.startswith("### "):
        return line[3:].strip(), BlockStyle.H2, None
    if line.startswith("### "):
        return line[4:].strip(), BlockStyle.H3, None
    if line.startswith("> "):
        return line[2:].strip(), BlockStyle.BLOCKQUOTE, None
    if line.startswith("- ") or line.startswith("• "):
        return line[2:].strip(), BlockStyle.NORMAL, ListItem.BULLET
    numbered = _NUMBERED_RE.match(line)
    if numbered:
        return numbered.group(1).strip(), BlockStyle.NORMAL, ListItem.NUMBER
    return line, BlockStyle.NORMAL, None


def parse_markdown(
    markdown: str, key_factory: KeyFactory = random_key
) -> list[dict[str, Any]]:
    """Parse generator markdown into Portable Text blocks.

    Args:
        markdown: Markdown text.
        key_factory: Key generator (deterministic factories help in tests).

    Returns:
        List of blocks, one per non-blank line.
    """
    blocks: list[dict[str, Any]] = []
    for raw_line in markdown.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        content, style, list_item = classify_line(line)
        blocks.append(create_block(content, style, list_item, key_factory))
    return blocks


__all__ = [
    "BlockStyle",
    "InlineToken",
    "ListItem",
    "TokenKind",
    "build_spans",
    "classify_line",
    "counter_keys",
    "create_block",
    "parse_markdown",
    "random_key",
    "tokenize_inline",
]
