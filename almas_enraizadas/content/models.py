"""Pydantic models for CMS documents.

The CMS owns and validates these documents; the models only give the
site typed, attribute-style access to the projected query results.
Field aliases follow the CMS wire names (``_id``, ``_type``, ``_ref``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from almas_enraizadas.routes import post_path, profile_path, section_path


class CmsModel(BaseModel):
    """Base model for CMS documents.

    Unknown fields are ignored so query projections can grow freely.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Slug(CmsModel):
    """Slug object as stored by the CMS."""

    current: str = ""


class ImageAsset(CmsModel):
    """Reference to an uploaded image asset."""

    ref: str = Field(alias="_ref")
    type: str = Field(default="reference", alias="_type")


class ImageCrop(CmsModel):
    """Crop fractions removed from each edge."""

    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0


class ImageHotspot(CmsModel):
    """Hotspot ellipse in fractional coordinates."""

    x: float = 0.5
    y: float = 0.5
    height: float = 1.0
    width: float = 1.0


class SanityImage(CmsModel):
    """Image field with optional alt text, crop and hotspot."""

    type: str = Field(default="image", alias="_type")
    asset: ImageAsset | None = None
    alt: str | None = None
    crop: ImageCrop | None = None
    hotspot: ImageHotspot | None = None


class SocialLink(CmsModel):
    """Social profile link."""

    platform: str = ""
    url: str = ""


class NavLink(CmsModel):
    """Navigation entry from site settings."""

    label: str = ""
    href: str = ""


class Author(CmsModel):
    """Author of blog posts."""

    id: str = Field(default="", alias="_id")
    name: str = ""
    slug: Slug = Field(default_factory=Slug)
    bio: list[dict[str, Any]] | str | None = None
    image: SanityImage | None = None
    role: str | None = None
    social_links: list[SocialLink] | None = Field(default=None, alias="socialLinks")

    @property
    def path(self) -> str:
        """Site path of the author's profile."""
        return profile_path(self.slug.current)


class Tag(CmsModel):
    """Tag for categorizing posts."""

    id: str = Field(default="", alias="_id")
    title: str = ""
    slug: Slug = Field(default_factory=Slug)
    description: str | None = None


class SectionRef(CmsModel):
    """Section reference expanded with its identifying fields."""

    id: str = Field(default="", alias="_id")
    title: str = ""
    slug: Slug = Field(default_factory=Slug)


class Section(SectionRef):
    """Section grouping for content."""

    description: str | None = None
    image: SanityImage | None = None
    order: float | None = None

    @property
    def path(self) -> str:
        """Site path of the section."""
        return section_path(self.slug.current)


class Subcategory(CmsModel):
    """Subcategory within a section."""

    id: str = Field(default="", alias="_id")
    title: str = ""
    slug: Slug = Field(default_factory=Slug)
    description: str | None = None
    section: Section | None = None
    image: SanityImage | None = None
    order: float | None = None


class SubcategoryListItem(Subcategory):
    """Subcategory with its post count, for listing cards."""

    post_count: int = Field(default=0, alias="postCount")


class PostListItem(CmsModel):
    """Post fields for listings and cards (no body)."""

    id: str = Field(default="", alias="_id")
    title: str = ""
    slug: Slug = Field(default_factory=Slug)
    excerpt: str | None = None
    published_at: str | None = Field(default=None, alias="publishedAt")
    author: Author | None = None
    section: Section | None = None
    subcategory: Subcategory | None = None
    tags: list[Tag] | None = None
    main_image: SanityImage | None = Field(default=None, alias="mainImage")
    ai_summary: str | None = Field(default=None, alias="aiSummary")
    rating: float | None = None
    reading_time: float | None = Field(default=None, alias="readingTime")

    @property
    def section_slug(self) -> str:
        """Slug of the post's section, or ``""``."""
        return self.section.slug.current if self.section else ""

    @property
    def subcategory_slug(self) -> str | None:
        """Slug of the post's subcategory, if any."""
        if self.subcategory and self.subcategory.slug.current:
            return self.subcategory.slug.current
        return None

    @property
    def path(self) -> str:
        """Canonical site path of the post."""
        return post_path(self.section_slug, self.slug.current, self.subcategory_slug)

    @property
    def tag_ids(self) -> list[str]:
        """IDs of the post's tags."""
        return [tag.id for tag in self.tags or []]


class Post(PostListItem):
    """Full blog post with body content."""

    body: list[dict[str, Any]] | None = None


class AuthorWithPosts(Author):
    """Author with their posts."""

    posts: list[PostListItem] = Field(default_factory=list)


class SectionWithPosts(Section):
    """Section with direct posts and its subcategories."""

    posts: list[PostListItem] = Field(default_factory=list)
    subcategories: list[SubcategoryListItem] = Field(default_factory=list)


class SubcategoryWithPosts(Subcategory):
    """Subcategory with its posts."""

    posts: list[PostListItem] = Field(default_factory=list)


class SiteSettings(CmsModel):
    """Site-wide configuration singleton."""

    title: str = ""
    description: str = ""
    logo: SanityImage | None = None
    social_links: list[SocialLink] = Field(default_factory=list, alias="socialLinks")
    navigation: list[NavLink] = Field(default_factory=list)


class PostSlugTuple(CmsModel):
    """Slugs addressing one post: section, optional subcategory, post."""

    section_slug: str
    post_slug: str
    subcategory_slug: str | None = None

    @property
    def path(self) -> str:
        """Site path of the post."""
        return post_path(self.section_slug, self.post_slug, self.subcategory_slug)


class SubcategorySlugPair(CmsModel):
    """Slugs addressing one subcategory."""

    section_slug: str
    subcategory_slug: str


__all__ = [
    "Author",
    "AuthorWithPosts",
    "ImageAsset",
    "ImageCrop",
    "ImageHotspot",
    "NavLink",
    "Post",
    "PostListItem",
    "PostSlugTuple",
    "SanityImage",
    "Section",
    "SectionRef",
    "SectionWithPosts",
    "SiteSettings",
    "Slug",
    "SocialLink",
    "Subcategory",
    "SubcategoryListItem",
    "SubcategorySlugPair",
    "SubcategoryWithPosts",
    "Tag",
]
