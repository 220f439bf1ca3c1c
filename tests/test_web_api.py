"""Tests for the JSON endpoints: health, config and AI generation."""

import httpx
import respx

from almas_enraizadas import __version__

CHAT_URL = "https://api.openai.com/v1/chat/completions"
IMAGES_URL = "https://api.openai.com/v1/images/generations"
IMAGE_URL = "https://oaidalleapiprodscus.blob.core.windows.net/private/img-1.png"


class TestHealth:
    """Tests for /health."""

    def test_health(self, web_client) -> None:
        """Should report ok with the version."""
        response = web_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}

    def test_security_headers(self, web_client) -> None:
        """Every response should carry the security headers."""
        response = web_client.get("/health")
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "DENY"
        assert response.headers["x-xss-protection"] == "1; mode=block"
        assert response.headers["referrer-policy"] == "strict-origin-when-cross-origin"


class TestConfig:
    """Tests for /config."""

    def test_config_hides_secrets(self, web_client) -> None:
        """Secrets should only be reported as flags."""
        data = web_client.get("/config").json()

        assert data["site_url"] == "https://example.test"
        assert data["sanity_project_id"] == "proj123"
        assert data["cms_configured"] is True
        assert data["cms_token_configured"] is True
        assert data["ai_configured"] is True
        assert "openai_api_key" not in data
        assert "sanity_token" not in data
        assert "sk-test" not in str(data)

    def test_config_unconfigured(self, make_web_client, bare_settings) -> None:
        """Flags should be false without CMS or AI."""
        data = make_web_client(app_settings=bare_settings).get("/config").json()
        assert data["cms_configured"] is False
        assert data["ai_configured"] is False


class TestGenerateText:
    """Tests for POST /api/ai."""

    @respx.mock
    def test_generate(self, web_client) -> None:
        """Should return the generated text."""
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(
                200, json={"choices": [{"message": {"content": "1. Respira mejor"}}]}
            )
        )
        response = web_client.post("/api/ai", json={"action": "seoTitle", "title": "Yoga"})
        assert response.status_code == 200
        assert response.json() == {"result": "1. Respira mejor"}

    def test_invalid_action(self, web_client) -> None:
        """Unknown actions should be a 400 validation error."""
        response = web_client.post("/api/ai", json={"action": "poem", "body": "x"})
        assert response.status_code == 400
        assert response.json()["code"] == "validation"
        assert response.json()["error"].startswith("Invalid action")

    def test_missing_body(self, web_client) -> None:
        """Body actions without a body should be rejected."""
        response = web_client.post("/api/ai", json={"action": "summary", "title": "Yoga"})
        assert response.status_code == 400
        assert response.json() == {
            "error": "Body content is required for this action",
            "code": "validation",
        }

    def test_malformed_json(self, web_client) -> None:
        """Unparseable requests should be a 400 validation error."""
        response = web_client.post(
            "/api/ai", content="{", headers={"content-type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "validation"

    def test_not_configured(self, make_web_client, bare_settings) -> None:
        """Without a key the endpoint should answer 503."""
        response = make_web_client(app_settings=bare_settings).post(
            "/api/ai", json={"action": "seoTitle", "title": "Yoga"}
        )
        assert response.status_code == 503
        assert response.json() == {
            "error": "OPENAI_API_KEY is not configured",
            "code": "not_configured",
        }

    @respx.mock
    def test_upstream_error(self, web_client) -> None:
        """Provider failures should be a 500 with the provider message."""
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(401, json={"error": {"message": "Bad key"}})
        )
        response = web_client.post("/api/ai", json={"action": "seoTitle", "title": "Yoga"})
        assert response.status_code == 500
        assert response.json() == {
            "error": "OpenAI API error (401): Bad key",
            "code": "upstream_error",
        }

    @respx.mock
    def test_network_error(self, web_client) -> None:
        """Connection failures should be a JSON 500, not an unhandled error."""
        respx.post(CHAT_URL).mock(side_effect=httpx.ConnectError("refused"))
        response = web_client.post("/api/ai", json={"action": "seoTitle", "title": "Yoga"})
        assert response.status_code == 500
        assert response.json() == {
            "error": "OpenAI API request failed: refused",
            "code": "upstream_error",
        }


class TestGenerateImages:
    """Tests for POST /api/ai/image."""

    @respx.mock
    def test_generate(self, web_client) -> None:
        """Should return each image URL and revised prompt."""
        respx.post(IMAGES_URL).mock(
            return_value=httpx.Response(
                200, json={"data": [{"url": IMAGE_URL, "revised_prompt": "Bosque"}]}
            )
        )
        response = web_client.post("/api/ai/image", json={"prompt": "bosque", "count": 1})
        assert response.status_code == 200
        assert response.json() == {"images": [{"url": IMAGE_URL, "revisedPrompt": "Bosque"}]}

    def test_blank_prompt(self, web_client) -> None:
        """Blank prompts should be rejected."""
        response = web_client.post("/api/ai/image", json={"prompt": " "})
        assert response.status_code == 400
        assert response.json()["error"] == "A prompt is required"

    def test_count_out_of_range(self, web_client) -> None:
        """Counts outside 1-4 should be rejected."""
        response = web_client.post("/api/ai/image", json={"prompt": "x", "count": 9})
        assert response.status_code == 400


class TestImageProxy:
    """Tests for GET /api/ai/image/proxy."""

    @respx.mock
    def test_proxy(self, web_client) -> None:
        """Should stream the image back with a private cache header."""
        respx.get(IMAGE_URL).mock(
            return_value=httpx.Response(
                200, content=b"\x89PNG", headers={"content-type": "image/png"}
            )
        )
        response = web_client.get("/api/ai/image/proxy", params={"url": IMAGE_URL})

        assert response.status_code == 200
        assert response.content == b"\x89PNG"
        assert response.headers["content-type"] == "image/png"
        assert response.headers["cache-control"] == "private, max-age=3600"

    def test_missing_url(self, web_client) -> None:
        """A missing url parameter should be a 400."""
        response = web_client.get("/api/ai/image/proxy")
        assert response.status_code == 400
        assert response.json() == {"error": "Missing url parameter", "code": "invalid_url"}

    def test_foreign_host(self, web_client) -> None:
        """Hosts outside the allow-list should be a 403."""
        response = web_client.get(
            "/api/ai/image/proxy", params={"url": "https://example.com/x.png"}
        )
        assert response.status_code == 403
        assert response.json() == {"error": "URL not allowed", "code": "host_not_allowed"}

    @respx.mock
    def test_upstream_failure(self, web_client) -> None:
        """Upstream errors should be a 502."""
        respx.get(IMAGE_URL).mock(return_value=httpx.Response(403))
        response = web_client.get("/api/ai/image/proxy", params={"url": IMAGE_URL})
        assert response.status_code == 502
        assert response.json()["error"] == "Failed to download image: 403"
