"""Error definitions shared by the content, AI and proxy layers.

Every exception carries a stable ``code`` for structured error handling
and the HTTP status the web layer answers with.
"""

from __future__ import annotations

# Error code constants
CMS_ERROR = "cms_error"
VALIDATION_ERROR = "validation"
NOT_CONFIGURED = "not_configured"
UPSTREAM_ERROR = "upstream_error"
HOST_NOT_ALLOWED = "host_not_allowed"
INVALID_URL = "invalid_url"
DOWNLOAD_ERROR = "download_error"
TOO_LARGE = "too_large"
INTERNAL_ERROR = "internal_error"


class AlmasError(Exception):
    """Base class for application errors."""

    code = INTERNAL_ERROR
    status_code = 500

    def __init__(self, message: str, code: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Error description.
            code: Error code override.
        """
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"error": self.message, "code": self.code}


class ContentError(AlmasError):
    """Raised when the CMS request fails."""

    code = CMS_ERROR
    status_code = 502


class AiError(AlmasError):
    """Base class for AI generation errors."""


class AiValidationError(AiError):
    """Raised when an AI request is missing required input."""

    code = VALIDATION_ERROR
    status_code = 400


class AiNotConfiguredError(AiError):
    """Raised when no AI provider key is configured."""

    code = NOT_CONFIGURED
    status_code = 503


class AiUpstreamError(AiError):
    """Raised when the AI provider answers with an error."""

    code = UPSTREAM_ERROR
    status_code = 500

    def __init__(self, message: str, upstream_status: int | None = None) -> None:
        """Initialize AiUpstreamError.

        Args:
            message: Error description.
            upstream_status: HTTP status returned by the provider.
        """
        super().__init__(message)
        self.upstream_status = upstream_status


class ProxyError(AlmasError):
    """Base class for image proxy errors."""

    code = DOWNLOAD_ERROR
    status_code = 500


class ProxyInvalidUrlError(ProxyError):
    """Raised when the proxy target is missing or not a valid URL."""

    code = INVALID_URL
    status_code = 400


class ProxyHostNotAllowedError(ProxyError):
    """Raised when the proxy target host is not allow-listed."""

    code = HOST_NOT_ALLOWED
    status_code = 403


class ProxyDownloadError(ProxyError):
    """Raised when the upstream image download fails."""

    code = DOWNLOAD_ERROR
    status_code = 502


class ProxyTooLargeError(ProxyError):
    """Raised when the image exceeds the proxy size cap."""

    code = TOO_LARGE
    status_code = 413


__all__ = [
    "AiError",
    "AiNotConfiguredError",
    "AiUpstreamError",
    "AiValidationError",
    "AlmasError",
    "ContentError",
    "ProxyDownloadError",
    "ProxyError",
    "ProxyHostNotAllowedError",
    "ProxyInvalidUrlError",
    "ProxyTooLargeError",
]
