"""Tests for the content service layer."""

from almas_enraizadas.content import queries, service
from almas_enraizadas.content.models import AuthorWithPosts, Post, SectionWithPosts


class TestPosts:
    """Tests for post fetchers."""

    def test_fetch_all_posts(self, populated_client) -> None:
        """Posts should be validated into list items."""
        posts = service.fetch_all_posts(populated_client)
        assert len(posts) == 1
        post = posts[0]
        assert post.title == "Respirar para calmar la mente"
        assert post.author is not None and post.author.name == "Lucía Romero"
        assert post.path == "/yoga/respirar"
        assert post.tag_ids == ["tag-1"]

    def test_fetch_post_by_slug(self, populated_client) -> None:
        """A matching slug should give a full post with its body."""
        post = service.fetch_post_by_slug(populated_client, "respirar")
        assert isinstance(post, Post)
        assert post.body is not None and len(post.body) == 2
        assert post.ai_summary
        assert populated_client.calls[-1] == (
            queries.POST_BY_SLUG_QUERY,
            {"slug": "respirar"},
        )

    def test_fetch_post_missing(self, populated_client) -> None:
        """An unknown slug should give None."""
        assert service.fetch_post_by_slug(populated_client, "nope") is None

    def test_recent_posts_passes_limit(self, populated_client) -> None:
        """The limit should be forwarded as a query parameter."""
        service.fetch_recent_posts(populated_client, 6)
        assert populated_client.calls[-1] == (queries.RECENT_POSTS_QUERY, {"limit": 6})

    def test_related_posts_params(self, populated_client) -> None:
        """Related posts should be queried by post, section and tags."""
        service.fetch_related_posts(populated_client, "post-1", "section-1", ["tag-1"])
        assert populated_client.calls[-1] == (
            queries.RELATED_POSTS_QUERY,
            {
                "postId": "post-1",
                "sectionId": "section-1",
                "tagIds": ["tag-1"],
                "limit": 3,
            },
        )

    def test_non_list_result_is_empty(self, make_client) -> None:
        """Unexpected result shapes should be treated as empty."""
        client = make_client({queries.ALL_POSTS_QUERY: {"oops": True}})
        assert service.fetch_all_posts(client) == []

    def test_subcategory_path(self, make_client, post_doc, subcategory_doc) -> None:
        """Posts in a subcategory should get a three-segment path."""
        post_doc["subcategory"] = subcategory_doc
        client = make_client({queries.ALL_POSTS_QUERY: [post_doc]})
        assert service.fetch_all_posts(client)[0].path == "/yoga/posturas/respirar"


class TestSlugs:
    """Tests for slug enumeration."""

    def test_post_slugs_skip_orphans(self, make_client) -> None:
        """Posts without a section should be skipped."""
        client = make_client(
            {
                queries.POST_SLUGS_QUERY: [
                    {"slug": {"current": "a"}, "section": {"slug": {"current": "yoga"}}},
                    {
                        "slug": {"current": "b"},
                        "section": {"slug": {"current": "yoga"}},
                        "subcategory": {"slug": {"current": "posturas"}},
                    },
                    {"slug": {"current": "c"}, "section": None},
                ]
            }
        )
        tuples = service.fetch_all_post_slugs(client)
        assert [t.path for t in tuples] == ["/yoga/a", "/yoga/posturas/b"]
        assert tuples[0].subcategory_slug is None

    def test_section_and_profile_slugs(self, make_client) -> None:
        """Empty slugs should be dropped."""
        client = make_client(
            {
                queries.SECTION_SLUGS_QUERY: [
                    {"slug": {"current": "yoga"}},
                    {"slug": None},
                ],
                queries.AUTHOR_SLUGS_QUERY: [{"slug": {"current": "lucia"}}],
            }
        )
        assert service.fetch_all_section_slugs(client) == ["yoga"]
        assert service.fetch_all_profile_slugs(client) == ["lucia"]

    def test_subcategory_slug_pairs(self, make_client) -> None:
        """Subcategories without a section should be skipped."""
        client = make_client(
            {
                queries.SUBCATEGORY_SLUGS_QUERY: [
                    {"slug": {"current": "posturas"}, "section": {"slug": {"current": "yoga"}}},
                    {"slug": {"current": "huerfana"}, "section": None},
                ]
            }
        )
        pairs = service.fetch_all_subcategory_slugs(client)
        assert [(p.section_slug, p.subcategory_slug) for p in pairs] == [("yoga", "posturas")]


class TestSectionsAndProfiles:
    """Tests for section and profile fetchers."""

    def test_section_with_subcategories(self, populated_client) -> None:
        """Sections should carry posts and subcategories with counts."""
        section = service.fetch_section_by_slug(populated_client, "yoga")
        assert isinstance(section, SectionWithPosts)
        assert section.path == "/yoga"
        assert len(section.posts) == 1
        assert section.subcategories[0].post_count == 0

    def test_subcategory_by_slug(self, populated_client) -> None:
        """Subcategories should be looked up within their section."""
        subcategory = service.fetch_subcategory_by_slug(populated_client, "yoga", "posturas")
        assert subcategory is not None
        assert subcategory.title == "Posturas"
        assert populated_client.calls[-1][1] == {
            "sectionSlug": "yoga",
            "subcategorySlug": "posturas",
        }

    def test_subcategories_by_section(self, make_client, subcategory_doc) -> None:
        """Subcategories should carry their post counts."""
        client = make_client(
            {queries.SUBCATEGORIES_BY_SECTION_QUERY: [{**subcategory_doc, "postCount": 3}]}
        )
        subcategories = service.fetch_subcategories_by_section(client, "yoga")
        assert subcategories[0].post_count == 3
        assert client.calls[-1][1] == {"sectionSlug": "yoga"}

    def test_fetch_all_tags(self, make_client) -> None:
        """Tags should be validated."""
        client = make_client(
            {queries.ALL_TAGS_QUERY: [{"_id": "tag-1", "title": "Calma", "slug": {"current": "calma"}}]}
        )
        tags = service.fetch_all_tags(client)
        assert [t.slug.current for t in tags] == ["calma"]

    def test_profile_by_slug(self, populated_client) -> None:
        """Profiles should include the author's posts."""
        profile = service.fetch_profile_by_slug(populated_client, "lucia-romero")
        assert isinstance(profile, AuthorWithPosts)
        assert profile.path == "/perfiles/lucia-romero"
        assert [p.slug.current for p in profile.posts] == ["respirar"]

    def test_null_like_client(self, fake_client) -> None:
        """Empty CMS results should give empty lists and None."""
        assert service.fetch_all_sections(fake_client) == []
        assert service.fetch_all_profiles(fake_client) == []
        assert service.fetch_section_by_slug(fake_client, "yoga") is None
        assert service.fetch_site_settings(fake_client) is None
