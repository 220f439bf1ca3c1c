"""Plain-text extraction from Portable Text."""

from __future__ import annotations

from typing import Any


def block_text(block: Any) -> str:
    """Concatenate the span text of a single block."""
    if not isinstance(block, dict):
        return ""
    children = block.get("children")
    if not isinstance(children, list):
        return ""
    return "".join(
        str(child.get("text") or "") for child in children if isinstance(child, dict)
    )


def extract_plain_text(blocks: Any) -> str:
    """Extract plain text from Portable Text blocks.

    Args:
        blocks: Block list as stored in the CMS.

    Returns:
        Text of each ``block`` on its own line, ``""`` for non-lists.
    """
    if not isinstance(blocks, list):
        return ""
    return "\n".join(
        block_text(block)
        for block in blocks
        if isinstance(block, dict) and block.get("_type") == "block"
    )


__all__ = ["block_text", "extract_plain_text"]
