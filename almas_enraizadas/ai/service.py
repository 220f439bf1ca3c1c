"""Text generation through an OpenAI-compatible chat completions API.

One synchronous request per call, no retries. Provider errors are
surfaced as :class:`AiUpstreamError` with the provider's message.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from almas_enraizadas.ai.prompts import (
    SYSTEM_PROMPTS,
    TITLE_ONLY_ACTIONS,
    AiAction,
    build_user_message,
)
from almas_enraizadas.config import Settings
from almas_enraizadas.errors import (
    AiNotConfiguredError,
    AiUpstreamError,
    AiValidationError,
)

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
MAX_TOKENS = 4000

NOT_CONFIGURED_MESSAGE = "OPENAI_API_KEY is not configured"


class AiRequest(BaseModel):
    """Text generation request as posted by the authoring console."""

    action: str = ""
    title: str | None = None
    body: str | None = None

    def validated_action(self) -> AiAction:
        """Check the request and return its action.

        Raises:
            AiValidationError: If the action is unknown or input is missing.
        """
        try:
            action = AiAction(self.action)
        except ValueError:
            valid = ", ".join(a.value for a in AiAction)
            raise AiValidationError(f"Invalid action. Must be one of: {valid}") from None

        if action in TITLE_ONLY_ACTIONS and not self.title:
            raise AiValidationError("Title is required for this action")
        if action not in TITLE_ONLY_ACTIONS and not self.body:
            raise AiValidationError("Body content is required for this action")
        return action


def provider_error_message(response: httpx.Response) -> str:
    """Provider error message from a failed response, if any."""
    try:
        payload = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return "Unknown error"


def auth_headers(settings: Settings) -> dict[str, str]:
    """Bearer headers for the provider.

    Raises:
        AiNotConfiguredError: If no API key is configured.
    """
    if not settings.openai_api_key:
        raise AiNotConfiguredError(NOT_CONFIGURED_MESSAGE)
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {settings.openai_api_key}",
    }


def call_chat_model(
    system_prompt: str,
    user_message: str,
    settings: Settings,
    client: httpx.Client | None = None,
) -> str:
    """Send one chat completion request.

    Args:
        system_prompt: System message.
        user_message: User message.
        settings: Application settings.
        client: Optional HTTPX client (a short-lived one is created otherwise).

    Returns:
        Trimmed content of the first choice, ``""`` when absent.

    Raises:
        AiNotConfiguredError: If no API key is configured.
        AiUpstreamError: If the request fails or the provider answers with a
            non-2xx status.
    """
    headers = auth_headers(settings)
    payload: dict[str, Any] = {
        "model": settings.chat_model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
        "temperature": TEMPERATURE,
        "max_tokens": MAX_TOKENS,
    }
    url = f"{settings.openai_base_url}/chat/completions"

    logger.info("Requesting chat completion from %s (%s)", url, settings.chat_model)
    try:
        if client is None:
            with httpx.Client(timeout=settings.request_timeout) as own_client:
                response = own_client.post(url, json=payload, headers=headers)
        else:
            response = client.post(url, json=payload, headers=headers)
    except httpx.HTTPError as e:
        logger.warning("Chat completion request failed: %s", e)
        raise AiUpstreamError(f"OpenAI API request failed: {e}") from e

    if not response.is_success:
        raise AiUpstreamError(
            f"OpenAI API error ({response.status_code}): {provider_error_message(response)}",
            upstream_status=response.status_code,
        )

    data = response.json()
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content.strip() if isinstance(content, str) else ""


def generate_text(
    request: AiRequest, settings: Settings, client: httpx.Client | None = None
) -> str:
    """Validate a request and generate text for its action.

    Args:
        request: Generation request.
        settings: Application settings.
        client: Optional HTTPX client.

    Returns:
        Generated text.

    Raises:
        AiValidationError: If the request is invalid.
        AiNotConfiguredError: If no API key is configured.
        AiUpstreamError: If the provider fails.
    """
    action = request.validated_action()
    user_message = build_user_message(action, request.title or "", request.body or "")
    return call_chat_model(SYSTEM_PROMPTS[action], user_message, settings, client)


__all__ = [
    "NOT_CONFIGURED_MESSAGE",
    "AiRequest",
    "auth_headers",
    "provider_error_message",
    "call_chat_model",
    "generate_text",
]
