"""Shared fixtures: isolated settings, sample CMS documents and a fake client."""

import copy
import os
from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

from almas_enraizadas.config import Settings
from almas_enraizadas.content import queries
from web.app import create_app
from web.deps import get_content_client, get_settings_dep

SITE_URL = "https://example.test"

AUTHOR_DOC: dict[str, Any] = {
    "_id": "author-1",
    "name": "Lucía Romero",
    "slug": {"current": "lucia-romero"},
    "role": "Instructora de yoga",
    "bio": "Instructora de yoga y aromaterapeuta con diez años de práctica.",
    "socialLinks": [{"platform": "instagram", "url": "https://instagram.com/lucia"}],
}

SECTION_DOC: dict[str, Any] = {
    "_id": "section-1",
    "title": "Yoga",
    "slug": {"current": "yoga"},
    "description": "Prácticas de yoga para cada día",
    "order": 1,
}

SUBCATEGORY_DOC: dict[str, Any] = {
    "_id": "subcategory-1",
    "title": "Posturas",
    "slug": {"current": "posturas"},
    "description": "Asanas paso a paso",
    "section": SECTION_DOC,
}

TAG_DOC: dict[str, Any] = {
    "_id": "tag-1",
    "title": "Respiración",
    "slug": {"current": "respiracion"},
}

BODY_BLOCKS: list[dict[str, Any]] = [
    {
        "_type": "block",
        "_key": "b1",
        "style": "h2",
        "markDefs": [],
        "children": [{"_type": "span", "_key": "s1", "text": "Inhala", "marks": []}],
    },
    {
        "_type": "block",
        "_key": "b2",
        "style": "normal",
        "markDefs": [],
        "children": [
            {"_type": "span", "_key": "s2", "text": "Respira ", "marks": []},
            {"_type": "span", "_key": "s3", "text": "despacio", "marks": ["strong"]},
        ],
    },
]

POST_DOC: dict[str, Any] = {
    "_id": "post-1",
    "title": "Respirar para calmar la mente",
    "slug": {"current": "respirar"},
    "excerpt": "Tres ejercicios sencillos de respiración consciente.",
    "publishedAt": "2025-02-12T10:00:00Z",
    "author": AUTHOR_DOC,
    "section": SECTION_DOC,
    "tags": [TAG_DOC],
    "rating": 4.5,
    "readingTime": 5,
    "aiSummary": "Un recorrido breve por la respiración consciente.",
    "body": BODY_BLOCKS,
}


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop configuration from the developer's environment."""
    for name in list(os.environ):
        if name.startswith("ALMAS_") or name in ("OPENAI_API_KEY", "VERCEL_URL"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    """Settings with a CMS project and an AI key."""
    return Settings(
        site_url=SITE_URL,
        sanity_project_id="proj123",
        sanity_dataset="production",
        sanity_token="sk-cms",
        openai_api_key="sk-test",
    )


@pytest.fixture
def bare_settings() -> Settings:
    """Settings with neither CMS nor AI configured."""
    return Settings(site_url=SITE_URL)


@pytest.fixture
def author_doc() -> dict[str, Any]:
    return copy.deepcopy(AUTHOR_DOC)


@pytest.fixture
def section_doc() -> dict[str, Any]:
    return copy.deepcopy(SECTION_DOC)


@pytest.fixture
def subcategory_doc() -> dict[str, Any]:
    return copy.deepcopy(SUBCATEGORY_DOC)


@pytest.fixture
def post_doc() -> dict[str, Any]:
    return copy.deepcopy(POST_DOC)


class FakeContentClient:
    """In-memory content client keyed by query text.

    A response may be a value or a callable taking the query params.
    Unknown queries answer like the null client.
    """

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.uploads: list[tuple[bytes, str, str]] = []
        self.closed = False

    def fetch(self, query: str, params: dict[str, Any] | None = None) -> Any:
        self.calls.append((query, dict(params or {})))
        if query not in self.responses:
            return None if "[0]" in query else []
        response = self.responses[query]
        if callable(response):
            return response(params or {})
        return copy.deepcopy(response)

    def upload_image(
        self, data: bytes, filename: str, content_type: str = "image/png"
    ) -> dict[str, Any]:
        self.uploads.append((data, filename, content_type))
        return {"_id": "image-uploaded-1200x800-png"}

    def close(self) -> None:
        self.closed = True


def by_slug(document: dict[str, Any], key: str = "slug") -> Callable[[dict[str, Any]], Any]:
    """Response answering ``document`` only when ``params[key]`` matches its slug."""

    def respond(params: dict[str, Any]) -> Any:
        if params.get(key) == document["slug"]["current"]:
            return copy.deepcopy(document)
        return None

    return respond


@pytest.fixture
def fake_client() -> FakeContentClient:
    return FakeContentClient()


@pytest.fixture
def make_client() -> type[FakeContentClient]:
    """The fake client class, for tests that build their own responses."""
    return FakeContentClient


@pytest.fixture
def populated_client(
    post_doc: dict[str, Any],
    section_doc: dict[str, Any],
    subcategory_doc: dict[str, Any],
    author_doc: dict[str, Any],
) -> FakeContentClient:
    """Client holding one section, one subcategory, one author and one post."""
    section_with_posts = {
        **section_doc,
        "posts": [post_doc],
        "subcategories": [{**subcategory_doc, "postCount": 0}],
    }
    subcategory_with_posts = {**subcategory_doc, "posts": []}
    return FakeContentClient(
        {
            queries.ALL_POSTS_QUERY: [post_doc],
            queries.RECENT_POSTS_QUERY: [post_doc],
            queries.ALL_SECTIONS_QUERY: [section_doc],
            queries.ALL_AUTHORS_QUERY: [author_doc],
            queries.POST_BY_SLUG_QUERY: by_slug(post_doc),
            queries.AUTHOR_BY_SLUG_QUERY: by_slug({**author_doc, "posts": [post_doc]}),
            queries.SECTION_WITH_SUBCATEGORIES_QUERY: by_slug(section_with_posts),
            queries.SUBCATEGORY_BY_SLUG_QUERY: by_slug(
                subcategory_with_posts, key="subcategorySlug"
            ),
            queries.RELATED_POSTS_QUERY: [],
        }
    )


@pytest.fixture
def make_web_client(settings: Settings) -> Callable[..., TestClient]:
    """Build a TestClient over the app with injected settings and content.

    The lifespan is not run; both dependencies are overridden instead.
    """

    def build(
        content_client: Any = None, app_settings: Settings | None = None
    ) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_settings_dep] = lambda: app_settings or settings
        app.dependency_overrides[get_content_client] = (
            lambda: content_client if content_client is not None else FakeContentClient()
        )
        return TestClient(app)

    return build


@pytest.fixture
def web_client(
    make_web_client: Callable[..., TestClient], populated_client: FakeContentClient
) -> TestClient:
    """Client over the app serving the populated content."""
    return make_web_client(populated_client)
