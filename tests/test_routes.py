"""Tests for centralized route definitions."""

from almas_enraizadas.routes import (
    NAV_ITEMS,
    RESERVED_SEGMENTS,
    absolute_url,
    post_path,
    post_url,
    profile_path,
    section_path,
    subcategory_path,
    subcategory_url,
    tag_url,
)


class TestPaths:
    """Tests for site-relative paths."""

    def test_section_and_subcategory(self) -> None:
        """Sections and subcategories should nest under the section slug."""
        assert section_path("yoga") == "/yoga"
        assert subcategory_path("yoga", "posturas") == "/yoga/posturas"

    def test_post_path_without_subcategory(self) -> None:
        """Posts directly in a section should use two segments."""
        assert post_path("yoga", "respirar") == "/yoga/respirar"

    def test_post_path_with_subcategory(self) -> None:
        """Posts in a subcategory should use three segments."""
        assert post_path("yoga", "respirar", "posturas") == "/yoga/posturas/respirar"

    def test_profile_path(self) -> None:
        """Profiles should live under /perfiles."""
        assert profile_path("lucia") == "/perfiles/lucia"

    def test_reserved_segments(self) -> None:
        """Top-level pages should never be treated as sections."""
        for segment in ("secciones", "perfiles", "sobre-nosotros", "studio", "api", "static"):
            assert segment in RESERVED_SEGMENTS
        assert "yoga" not in RESERVED_SEGMENTS

    def test_nav_items(self) -> None:
        """Main navigation should list the four top-level pages in order."""
        assert [item.href for item in NAV_ITEMS] == [
            "/",
            "/secciones",
            "/perfiles",
            "/sobre-nosotros",
        ]


class TestAbsoluteUrls:
    """Tests for absolute URL builders."""

    def test_explicit_base_url(self) -> None:
        """An explicit base URL should be used as given."""
        assert absolute_url("/yoga", "https://example.test/") == "https://example.test/yoga"
        assert (
            post_url("yoga", "respirar", "posturas", "https://example.test")
            == "https://example.test/yoga/posturas/respirar"
        )
        assert (
            subcategory_url("yoga", "posturas", "https://example.test")
            == "https://example.test/yoga/posturas"
        )
        assert tag_url("calma", "https://example.test") == "https://example.test/tags/calma"

    def test_configured_base_url(self, monkeypatch) -> None:
        """Without a base URL the configured site URL should be used."""
        monkeypatch.setenv("ALMAS_SITE_URL", "https://configured.test")
        assert absolute_url("/perfiles") == "https://configured.test/perfiles"
