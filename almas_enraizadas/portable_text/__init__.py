"""Portable Text: markdown conversion, text extraction and HTML rendering."""

from almas_enraizadas.portable_text.extract import extract_plain_text
from almas_enraizadas.portable_text.parser import parse_markdown
from almas_enraizadas.portable_text.render import render_portable_text

__all__ = ["extract_plain_text", "parse_markdown", "render_portable_text"]
