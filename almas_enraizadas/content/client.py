"""CMS client for fetching content over the Sanity HTTP API.

This module handles:
- GROQ query execution with JSON-encoded parameters
- Image asset uploads for the authoring console
- A null client used when no CMS project is configured
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Protocol

import httpx

from almas_enraizadas.config import Settings
from almas_enraizadas.errors import ContentError

logger = logging.getLogger(__name__)

# Single-document queries end in a [0] slice followed by an optional projection
_SINGLE_DOCUMENT_RE = re.compile(r"\]\s*\[0\]\s*(\{|$)")


class ContentClient(Protocol):
    """Interface shared by the real and null CMS clients."""

    def fetch(self, query: str, params: dict[str, Any] | None = None) -> Any:
        """Run a GROQ query and return its result."""
        ...

    def upload_image(
        self, data: bytes, filename: str, content_type: str = "image/png"
    ) -> dict[str, Any]:
        """Upload an image asset and return the asset document."""
        ...

    def close(self) -> None:
        """Release network resources."""
        ...


def is_single_document_query(query: str) -> bool:
    """Whether a query selects a single document rather than a list."""
    return bool(_SINGLE_DOCUMENT_RE.search(query.strip()))


def encode_params(params: dict[str, Any] | None) -> dict[str, str]:
    """Encode GROQ parameters as ``$name`` query-string entries.

    Args:
        params: Parameter values.

    Returns:
        Mapping of ``$name`` to JSON-encoded value.
    """
    if not params:
        return {}
    return {f"${name}": json.dumps(value) for name, value in params.items()}


class SanityClient:
    """Client for the Sanity query and asset APIs."""

    def __init__(
        self,
        project_id: str,
        dataset: str = "production",
        api_version: str = "2024-01-01",
        use_cdn: bool = False,
        token: str | None = None,
        timeout: float = 60.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            project_id: Sanity project ID.
            dataset: Dataset name.
            api_version: Dated API version.
            use_cdn: Query the API CDN instead of the live API.
            token: Optional API token.
            timeout: Request timeout in seconds.
            http_client: Optional pre-built HTTPX client.
        """
        if not project_id:
            raise ValueError("project_id must be provided")
        self.project_id = project_id
        self.dataset = dataset
        self.api_version = api_version
        self.use_cdn = use_cdn
        self.token = token
        self._auth_headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)

    @property
    def query_url(self) -> str:
        """URL of the query endpoint for the dataset."""
        host = "apicdn" if self.use_cdn else "api"
        return (
            f"https://{self.project_id}.{host}.sanity.io"
            f"/v{self.api_version}/data/query/{self.dataset}"
        )

    @property
    def assets_url(self) -> str:
        """URL of the image upload endpoint for the dataset."""
        return (
            f"https://{self.project_id}.api.sanity.io"
            f"/v{self.api_version}/assets/images/{self.dataset}"
        )

    def fetch(self, query: str, params: dict[str, Any] | None = None) -> Any:
        """Run a GROQ query.

        Args:
            query: GROQ query text.
            params: Query parameters.

        Returns:
            The ``result`` member of the response.

        Raises:
            ContentError: If the request fails.
        """
        request_params = {"query": query, **encode_params(params)}
        logger.debug("CMS query with params %s", sorted(params or {}))
        try:
            response = self._http.get(
                self.query_url, params=request_params, headers=self._auth_headers
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise ContentError(
                f"CMS query failed: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ContentError(f"CMS query failed: {e}") from e
        except ValueError as e:
            raise ContentError("CMS returned an invalid JSON response") from e
        if not isinstance(payload, dict):
            raise ContentError("CMS returned an unexpected response body")
        return payload.get("result")

    def upload_image(
        self, data: bytes, filename: str, content_type: str = "image/png"
    ) -> dict[str, Any]:
        """Upload an image asset.

        Args:
            data: Image bytes.
            filename: File name recorded on the asset.
            content_type: MIME type of the image.

        Returns:
            The created asset document (with ``_id``).

        Raises:
            ContentError: If no token is configured or the upload fails.
        """
        if not self.token:
            raise ContentError("A CMS token is required to upload images")
        logger.info("Uploading image asset %s (%d bytes)", filename, len(data))
        try:
            response = self._http.post(
                self.assets_url,
                params={"filename": filename},
                content=data,
                headers={**self._auth_headers, "Content-Type": content_type},
            )
            response.raise_for_status()
            document: dict[str, Any] = response.json()["document"]
        except httpx.HTTPStatusError as e:
            raise ContentError(
                f"Image upload failed: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ContentError(f"Image upload failed: {e}") from e
        except (KeyError, ValueError) as e:
            raise ContentError("CMS returned an invalid upload response") from e
        return document

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._http.close()


class NullClient:
    """Client used when the CMS is not configured.

    Returns empty results so pages render their empty states.
    """

    def fetch(self, query: str, params: dict[str, Any] | None = None) -> Any:
        """Return ``None`` for single-document queries and ``[]`` otherwise."""
        if is_single_document_query(query):
            return None
        return []

    def upload_image(
        self, data: bytes, filename: str, content_type: str = "image/png"
    ) -> dict[str, Any]:
        """Always fails; there is nowhere to upload to."""
        raise ContentError("CMS is not configured")

    def close(self) -> None:
        """Nothing to release."""


def get_client(settings: Settings) -> ContentClient:
    """Create the content client for the given settings.

    Args:
        settings: Application settings.

    Returns:
        A SanityClient, or a NullClient when no project is configured.
    """
    if not settings.is_cms_configured:
        logger.warning("CMS project not configured; serving empty content")
        return NullClient()
    return SanityClient(
        project_id=settings.sanity_project_id,
        dataset=settings.sanity_dataset,
        api_version=settings.sanity_api_version,
        use_cdn=settings.sanity_use_cdn,
        token=settings.sanity_token,
        timeout=settings.request_timeout,
    )


__all__ = [
    "ContentClient",
    "NullClient",
    "SanityClient",
    "encode_params",
    "get_client",
    "is_single_document_query",
]
