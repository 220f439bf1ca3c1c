"""Tests for the authoring console (/studio)."""

import json

import httpx
import pytest
import respx

from almas_enraizadas.ai import authoring
from web.routers.studio import UNEXPECTED_ERROR_MESSAGE, DraftError, parse_body

CHAT_URL = "https://api.openai.com/v1/chat/completions"
IMAGES_URL = "https://api.openai.com/v1/images/generations"
IMAGE_URL = "https://oaidalleapiprodscus.blob.core.windows.net/private/img-1.png"


def _chat(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


@pytest.fixture
def draft(post_doc) -> dict[str, str]:
    return {
        "title": post_doc["title"],
        "description": "",
        "excerpt": post_doc["excerpt"],
        "body_json": json.dumps(post_doc["body"]),
    }


class TestParseBody:
    """Tests for parse_body."""

    def test_blank(self) -> None:
        """A blank field is an empty body."""
        assert parse_body("  ") == []

    def test_invalid(self) -> None:
        """Non-JSON and non-list values should be refused."""
        with pytest.raises(DraftError):
            parse_body("{")
        with pytest.raises(DraftError):
            parse_body('{"_type": "block"}')


class TestStudioPage:
    """Tests for the console page."""

    def test_empty_console(self, web_client) -> None:
        """The console should render with every action and no index."""
        response = web_client.get("/studio")

        assert response.status_code == 200
        html = response.text
        assert 'content="noindex, nofollow"' in html
        for action in ("summary", "excerpt", "seo-title", "reading-time", "body"):
            assert f'formaction="/studio/{action}"' in html
        assert "Generar 2 imágenes" in html
        assert "Prompt personalizado" in html


class TestTextActions:
    """Tests for the text generation buttons."""

    @respx.mock
    def test_summary(self, web_client, draft) -> None:
        """Summaries should show in the page, draft kept."""
        respx.post(CHAT_URL).mock(return_value=_chat("Un resumen breve."))

        response = web_client.post("/studio/summary", data=draft)

        assert response.status_code == 200
        assert "Resumen" in response.text
        assert "Un resumen breve." in response.text
        assert 'value="Respirar para calmar la mente"' in response.text

    def test_summary_needs_body(self, web_client, draft) -> None:
        """An empty body should show the console error."""
        draft["body_json"] = ""
        response = web_client.post("/studio/summary", data=draft)
        assert 'role="alert"' in response.text
        assert "Escribe contenido en el body antes de generar el resumen" in response.text

    def test_invalid_body_json(self, web_client, draft) -> None:
        """Malformed bodies should show a parse error."""
        draft["body_json"] = "no es json"
        response = web_client.post("/studio/excerpt", data=draft)
        assert "El body debe ser un JSON de Portable Text válido" in response.text

    @respx.mock
    def test_seo_titles(self, web_client, draft) -> None:
        """The first option should be offered as the title."""
        respx.post(CHAT_URL).mock(return_value=_chat("1. Respira y calma\n2. Otra opción"))

        response = web_client.post("/studio/seo-title", data=draft)

        assert "Títulos SEO" in response.text
        assert "<strong>Respira y calma</strong>" in response.text

    def test_not_configured(self, make_web_client, bare_settings, draft) -> None:
        """Missing keys should be reported in the page."""
        web = make_web_client(app_settings=bare_settings)
        response = web.post("/studio/seo-title", data=draft)
        assert response.status_code == 200
        assert "OPENAI_API_KEY is not configured" in response.text

    @respx.mock
    def test_network_error_keeps_draft(self, web_client, draft) -> None:
        """Connection failures should show inline with the draft kept."""
        respx.post(CHAT_URL).mock(side_effect=httpx.ConnectError("boom"))

        response = web_client.post("/studio/summary", data=draft)

        assert response.status_code == 200
        assert 'role="alert"' in response.text
        assert "OpenAI API request failed" in response.text
        assert 'value="Respirar para calmar la mente"' in response.text

    def test_unexpected_error_keeps_draft(self, web_client, draft, monkeypatch) -> None:
        """Any other failure should still render the console."""

        def broken(*args: object) -> str:
            raise RuntimeError("broken")

        monkeypatch.setattr(authoring, "suggest_seo_titles", broken)

        response = web_client.post("/studio/seo-title", data=draft)

        assert response.status_code == 200
        assert UNEXPECTED_ERROR_MESSAGE in response.text
        assert 'value="Respirar para calmar la mente"' in response.text

    def test_reading_time(self, web_client, draft) -> None:
        """Reading time should be computed locally."""
        response = web_client.post("/studio/reading-time", data=draft)
        assert "Tiempo de lectura" in response.text
        assert "1 min" in response.text


class TestBodyGeneration:
    """Tests for article generation and acceptance."""

    @respx.mock
    def test_preview(self, web_client, draft) -> None:
        """Generated markdown should be shown for review."""
        respx.post(CHAT_URL).mock(return_value=_chat("## Inhala\n\nRespira **despacio**"))

        response = web_client.post("/studio/body", data=draft)

        assert "Contenido generado" in response.text
        assert 'action="/studio/body/accept"' in response.text
        assert "## Inhala" in response.text

    def test_preview_needs_title(self, web_client, draft) -> None:
        """Generation should ask for a title first."""
        draft["title"] = ""
        response = web_client.post("/studio/body", data=draft)
        assert "Escribe un título primero para generar el contenido" in response.text

    @respx.mock
    def test_preview_refuses_blank_title(self, web_client, draft) -> None:
        """Whitespace-only titles should not reach the model."""
        draft["title"] = "   "

        response = web_client.post("/studio/body", data=draft)

        assert "Escribe un título primero para generar el contenido" in response.text
        assert UNEXPECTED_ERROR_MESSAGE not in response.text
        assert not respx.calls

    def test_accept(self, web_client) -> None:
        """Accepted markdown should become the draft body."""
        response = web_client.post(
            "/studio/body/accept",
            data={"title": "Yoga", "markdown": "## Inhala\n\nRespira **despacio**"},
        )
        assert "Contenido convertido en 2 bloques." in response.text
        assert "&#34;style&#34;: &#34;h2&#34;" in response.text


class TestImages:
    """Tests for image generation and upload."""

    @respx.mock
    def test_generate(self, web_client, draft) -> None:
        """Options should be previewed through the proxy."""
        route = respx.post(IMAGES_URL).mock(
            return_value=httpx.Response(200, json={"data": [{"url": IMAGE_URL}]})
        )

        response = web_client.post("/studio/images", data={**draft, "source": "excerpt"})

        assert route.call_count == 2
        payload = json.loads(route.calls.last.request.content)
        assert payload["prompt"].endswith("Subject: Tres ejercicios sencillos de respiración consciente.")
        assert response.text.count('action="/studio/images/accept"') == 2
        assert "/api/ai/image/proxy?url=https%3A//oaidalleapiprodscus" in response.text
        assert '<option value="excerpt" selected>' in response.text

    def test_empty_source(self, web_client, draft) -> None:
        """Empty sources should be reported."""
        response = web_client.post("/studio/images", data={**draft, "source": "description"})
        assert "No hay contenido para generar. Escribe algo primero." in response.text

    def test_unknown_source(self, web_client, draft) -> None:
        """Unknown sources should be reported, not crash."""
        response = web_client.post("/studio/images", data={**draft, "source": "audio"})
        assert response.status_code == 200
        assert 'role="alert"' in response.text

    @respx.mock
    def test_network_error_keeps_draft(self, web_client, draft) -> None:
        """Connection failures should show inline with the draft kept."""
        respx.post(IMAGES_URL).mock(side_effect=httpx.ConnectError("boom"))

        response = web_client.post("/studio/images", data={**draft, "source": "title"})

        assert response.status_code == 200
        assert 'role="alert"' in response.text
        assert "DALL-E API request failed" in response.text
        assert 'value="Respirar para calmar la mente"' in response.text

    @respx.mock
    def test_accept(self, web_client, populated_client, draft) -> None:
        """Accepting should upload the image and show the field value."""
        respx.get(IMAGE_URL).mock(return_value=httpx.Response(200, content=b"png"))

        response = web_client.post(
            "/studio/images/accept", data={**draft, "image_url": IMAGE_URL}
        )

        assert "Imagen subida" in response.text
        assert "image-uploaded-1200x800-png" in response.text
        assert populated_client.uploads[0][0] == b"png"

    def test_accept_foreign_host(self, web_client, populated_client, draft) -> None:
        """Foreign hosts should be refused without uploading."""
        response = web_client.post(
            "/studio/images/accept", data={**draft, "image_url": "https://example.com/x.png"}
        )
        assert "URL not allowed" in response.text
        assert populated_client.uploads == []
