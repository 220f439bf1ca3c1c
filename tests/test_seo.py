"""Tests for JSON-LD schemas and page metadata."""

import json

import pytest

from almas_enraizadas.content.models import (
    AuthorWithPosts,
    Post,
    SectionWithPosts,
    SubcategoryWithPosts,
)
from almas_enraizadas.seo import metadata as meta
from almas_enraizadas.seo.schema import (
    build_article_list_schema,
    build_blog_post_schema,
    build_breadcrumb_schema,
    build_organization_schema,
    build_profile_schema,
    build_website_schema,
    to_json_ld,
)

SITE = "https://example.test"


@pytest.fixture
def post(post_doc) -> Post:
    return Post.model_validate(post_doc)


class TestSchemas:
    """Tests for schema.org builders."""

    def test_website_search_action(self) -> None:
        """The website schema should declare the search URL template."""
        schema = build_website_schema(SITE)
        assert schema["@type"] == "WebSite"
        assert schema["url"] == SITE
        assert (
            schema["potentialAction"]["target"]["urlTemplate"]
            == "https://example.test/buscar?q={search_term_string}"
        )

    def test_organization_logo_optional(self) -> None:
        """Logo should only be present when given."""
        assert "logo" not in build_organization_schema(base_url=SITE)
        assert build_organization_schema("https://x.test/logo.png", SITE)["logo"] == (
            "https://x.test/logo.png"
        )

    def test_blog_post(self, post) -> None:
        """Blog posts should carry author, tags, image, words and rating."""
        schema = build_blog_post_schema(post, "https://img.test/a.jpg", 120, SITE)

        assert schema["@type"] == "BlogPosting"
        assert schema["headline"] == post.title
        assert schema["url"] == "https://example.test/yoga/respirar"
        assert schema["datePublished"] == "2025-02-12T10:00:00Z"
        assert schema["author"] == {
            "@type": "Person",
            "name": "Lucía Romero",
            "url": "https://example.test/perfiles/lucia-romero",
        }
        assert schema["articleSection"] == "Yoga"
        assert schema["keywords"] == "Respiración"
        assert schema["image"] == "https://img.test/a.jpg"
        assert schema["wordCount"] == 120
        assert schema["aggregateRating"]["ratingValue"] == 4.5

    def test_blog_post_optional_fields(self, post_doc) -> None:
        """Missing tags, image, words and rating should be omitted."""
        post_doc.update(tags=[], rating=None)
        schema = build_blog_post_schema(Post.model_validate(post_doc), base_url=SITE)
        for key in ("keywords", "image", "wordCount", "aggregateRating"):
            assert key not in schema

    def test_breadcrumb_positions(self) -> None:
        """Breadcrumb positions should start at one."""
        schema = build_breadcrumb_schema(
            [
                {"name": "Inicio", "url": SITE + "/"},
                {"name": "Yoga", "url": SITE + "/yoga"},
            ]
        )
        items = schema["itemListElement"]
        assert [i["position"] for i in items] == [1, 2]
        assert items[1] == {
            "@type": "ListItem",
            "position": 2,
            "name": "Yoga",
            "item": "https://example.test/yoga",
        }

    def test_profile(self, author_doc) -> None:
        """Profiles should link social accounts with sameAs."""
        author = AuthorWithPosts.model_validate(author_doc)
        schema = build_profile_schema(author, "https://img.test/p.jpg", SITE)
        assert schema["@type"] == "Person"
        assert schema["description"] == author_doc["bio"]
        assert schema["image"] == "https://img.test/p.jpg"
        assert schema["url"] == "https://example.test/perfiles/lucia-romero"
        assert schema["sameAs"] == ["https://instagram.com/lucia"]

    def test_article_list(self, post) -> None:
        """Listings should number their posts."""
        schema = build_article_list_schema([post, post], SITE)
        assert [i["position"] for i in schema["itemListElement"]] == [1, 2]
        assert schema["itemListElement"][0]["author"]["name"] == "Lucía Romero"

    def test_to_json_ld_escapes_script_close(self) -> None:
        """Serialised schemas should not be able to close the script tag."""
        rendered = to_json_ld({"name": "</script><b>Lucía</b>"})
        assert "</" not in rendered
        assert "Lucía" in rendered
        assert json.loads(rendered) == {"name": "</script><b>Lucía</b>"}


class TestMetadata:
    """Tests for page metadata builders."""

    def test_default_title(self) -> None:
        """The home page should use the untemplated default title."""
        page = meta.default_metadata()
        assert page.document_title == meta.DEFAULT_TITLE
        assert page.robots == "index, follow"
        assert page.og_tags["type"] == "website"
        assert page.og_tags["locale"] == "es_ES"

    def test_title_template(self) -> None:
        """Page titles should go through the site template."""
        assert meta.about_metadata().document_title == "Sobre Nosotros | Almas Enraizadas"

    def test_not_found(self) -> None:
        """Missing pages should not be indexed."""
        page = meta.not_found_metadata(meta.POST_NOT_FOUND)
        assert page.title == "Artículo no encontrado"
        assert page.robots == "noindex, follow"
        assert meta.post_metadata(None, "yoga").robots == "noindex, follow"

    def test_post(self, post) -> None:
        """Articles should get Open Graph article fields."""
        page = meta.post_metadata(post, "yoga", None, "https://img.test/a.jpg", SITE)

        assert page.document_title == "Respirar para calmar la mente | Almas Enraizadas"
        assert page.canonical == "https://example.test/yoga/respirar"
        assert page.description == post.excerpt
        og = page.og_tags
        assert og["type"] == "article"
        assert og["published_time"] == "2025-02-12T10:00:00Z"
        assert og["authors"] == ["Lucía Romero"]
        assert og["image"] == "https://img.test/a.jpg"
        assert og["image_alt"] == post.title
        assert page.twitter_tags["card"] == "summary_large_image"

    def test_post_without_image(self, post) -> None:
        """Without an image URL no image tags should be emitted."""
        og = meta.post_metadata(post, "yoga", base_url=SITE).og_tags
        assert "image" not in og
        assert "image_alt" not in og

    def test_post_in_subcategory(self, post) -> None:
        """Canonical URLs should include the subcategory."""
        page = meta.post_metadata(post, "yoga", "posturas", base_url=SITE)
        assert page.canonical == "https://example.test/yoga/posturas/respirar"

    def test_section_fallback_description(self, section_doc) -> None:
        """Sections without a description should get a generated one."""
        section_doc["description"] = None
        page = meta.section_metadata(SectionWithPosts.model_validate(section_doc), "yoga", SITE)
        assert page.description == "Artículos sobre Yoga en Almas Enraizadas"
        assert page.canonical == "https://example.test/yoga"

    def test_subcategory_title(self, subcategory_doc) -> None:
        """Subcategory titles should name their section."""
        page = meta.subcategory_metadata(
            SubcategoryWithPosts.model_validate(subcategory_doc), "yoga", SITE
        )
        assert page.title == "Posturas — Yoga"
        assert page.canonical == "https://example.test/yoga/posturas"

    def test_profile(self, author_doc) -> None:
        """Profiles should use the truncated bio as description."""
        page = meta.profile_metadata(AuthorWithPosts.model_validate(author_doc), "lucia-romero", SITE)
        assert page.description == author_doc["bio"]
        assert page.canonical == "https://example.test/perfiles/lucia-romero"
        assert meta.profile_metadata(None, "x").title == meta.PROFILE_NOT_FOUND

    def test_indexes(self) -> None:
        """Index pages should be canonical."""
        assert meta.sections_index_metadata(SITE).canonical == "https://example.test/secciones"
        assert meta.profiles_index_metadata(SITE).canonical == "https://example.test/perfiles"
