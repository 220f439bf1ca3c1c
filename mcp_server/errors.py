"""Error definitions for MCP tools.

This module defines structured error types with stable codes
that can be surfaced to MCP clients. Codes match the ones the
HTTP API answers with.
"""

from dataclasses import dataclass
from typing import Any

from almas_enraizadas.errors import (
    CMS_ERROR,
    INTERNAL_ERROR,
    NOT_CONFIGURED,
    UPSTREAM_ERROR,
    VALIDATION_ERROR,
    AlmasError,
)

POST_NOT_FOUND = "post_not_found"


@dataclass
class MCPError:
    """Structured error response for MCP tools.

    Attributes:
        code: Stable error code for programmatic handling.
        message: Human-readable error message.
        details: Optional additional error details.
    """

    code: str
    message: str
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


def make_error(
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> MCPError:
    """Create an MCPError instance.

    Args:
        code: Stable error code.
        message: Human-readable message.
        details: Optional additional details.

    Returns:
        MCPError instance.
    """
    return MCPError(code=code, message=message, details=details)


def validation_error(message: str, details: dict[str, Any] | None = None) -> MCPError:
    """Create a validation error."""
    return make_error(VALIDATION_ERROR, message, details)


def post_not_found(slug: str) -> MCPError:
    """Create a post not found error."""
    return make_error(
        POST_NOT_FOUND,
        f"Post not found: {slug}",
        details={"slug": slug},
    )


def from_app_error(error: AlmasError) -> MCPError:
    """Convert an application error, keeping its code."""
    return make_error(error.code, error.message)


__all__ = [
    "CMS_ERROR",
    "INTERNAL_ERROR",
    "MCPError",
    "NOT_CONFIGURED",
    "POST_NOT_FOUND",
    "UPSTREAM_ERROR",
    "VALIDATION_ERROR",
    "from_app_error",
    "make_error",
    "post_not_found",
    "validation_error",
]
