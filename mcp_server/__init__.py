"""MCP server exposing Almas Enraizadas tools.

This module implements the Model Context Protocol (MCP) server that
exposes published content and the AI writing assistance to AI tools
and external systems.

MCP tools:
- Are read-only over published content
- Return structured errors with codes
- Map directly to core services
"""

from mcp_server.server import mcp

__all__ = ["mcp"]
