"""GROQ queries for the CMS.

All content fetching goes through these named constants. Parameters are
passed separately to the client (``$slug``, ``$sectionSlug``...), never
interpolated into the query text.
"""

# Reusable field projection for posts, with expanded references.
# Excludes body; full post queries add it.
POST_FIELDS = """
  _id,
  title,
  slug,
  excerpt,
  publishedAt,
  mainImage,
  aiSummary,
  rating,
  readingTime,
  author->{
    _id,
    name,
    slug,
    bio,
    image,
    role,
    socialLinks
  },
  section->{
    _id,
    title,
    slug,
    description,
    image,
    order
  },
  subcategory->{
    _id,
    title,
    slug,
    description,
    section->{
      _id,
      title,
      slug
    }
  },
  tags[]->{
    _id,
    title,
    slug,
    description
  }
"""

ALL_POSTS_QUERY = f"""*[_type == "post"] | order(publishedAt desc) {{
  {POST_FIELDS}
}}"""

POST_BY_SLUG_QUERY = f"""*[_type == "post" && slug.current == $slug][0] {{
  {POST_FIELDS},
  body
}}"""

POSTS_BY_SECTION_QUERY = f"""*[_type == "post" && section->slug.current == $sectionSlug] | order(publishedAt desc) {{
  {POST_FIELDS}
}}"""

POSTS_BY_TAG_QUERY = f"""*[_type == "post" && $tagSlug in tags[]->slug.current] | order(publishedAt desc) {{
  {POST_FIELDS}
}}"""

ALL_AUTHORS_QUERY = """*[_type == "author"] | order(name asc) {
  _id,
  name,
  slug,
  bio,
  image,
  role,
  socialLinks
}"""

AUTHOR_BY_SLUG_QUERY = f"""*[_type == "author" && slug.current == $slug][0] {{
  _id,
  name,
  slug,
  bio,
  image,
  role,
  socialLinks,
  "posts": *[_type == "post" && author->slug.current == ^.slug.current] | order(publishedAt desc) {{
    {POST_FIELDS}
  }}
}}"""

ALL_SECTIONS_QUERY = """*[_type == "section"] | order(order asc) {
  _id,
  title,
  slug,
  description,
  image,
  order
}"""

SECTION_BY_SLUG_QUERY = f"""*[_type == "section" && slug.current == $slug][0] {{
  _id,
  title,
  slug,
  description,
  image,
  order,
  "posts": *[_type == "post" && section->slug.current == ^.slug.current] | order(publishedAt desc) {{
    {POST_FIELDS}
  }}
}}"""

ALL_TAGS_QUERY = """*[_type == "tag"] | order(title asc) {
  _id,
  title,
  slug,
  description
}"""

SITE_SETTINGS_QUERY = """*[_type == "siteSettings"][0] {
  title,
  description,
  logo,
  socialLinks,
  navigation
}"""

RECENT_POSTS_QUERY = f"""*[_type == "post"] | order(publishedAt desc)[0...$limit] {{
  {POST_FIELDS}
}}"""

# Same section or at least one shared tag, excluding the current post
RELATED_POSTS_QUERY = f"""*[
  _type == "post" &&
  _id != $postId &&
  (
    section._ref == $sectionId ||
    count((tags[]->_id)[@ in $tagIds]) > 0
  )
] | order(publishedAt desc)[0...$limit] {{
  {POST_FIELDS}
}}"""

SUBCATEGORIES_BY_SECTION_QUERY = """*[
  _type == "subcategory" &&
  section->slug.current == $sectionSlug
] | order(order asc) {
  _id,
  title,
  slug,
  description,
  image,
  order,
  section->{
    _id,
    title,
    slug
  },
  "postCount": count(*[_type == "post" && subcategory._ref == ^._id])
}"""

SUBCATEGORY_BY_SLUG_QUERY = f"""*[
  _type == "subcategory" &&
  slug.current == $subcategorySlug &&
  section->slug.current == $sectionSlug
][0] {{
  _id,
  title,
  slug,
  description,
  image,
  order,
  section->{{
    _id,
    title,
    slug,
    description,
    image,
    order
  }},
  "posts": *[
    _type == "post" &&
    subcategory._ref == ^._id
  ] | order(publishedAt desc) {{
    {POST_FIELDS}
  }}
}}"""

POSTS_BY_SECTION_NO_SUBCATEGORY_QUERY = f"""*[
  _type == "post" &&
  section->slug.current == $sectionSlug &&
  !defined(subcategory)
] | order(publishedAt desc) {{
  {POST_FIELDS}
}}"""

# Section with its direct posts (no subcategory) and its subcategories
SECTION_WITH_SUBCATEGORIES_QUERY = f"""*[_type == "section" && slug.current == $slug][0] {{
  _id,
  title,
  slug,
  description,
  image,
  order,
  "posts": *[
    _type == "post" &&
    section->slug.current == ^.slug.current &&
    !defined(subcategory)
  ] | order(publishedAt desc) {{
    {POST_FIELDS}
  }},
  "subcategories": *[
    _type == "subcategory" &&
    section._ref == ^._id
  ] | order(order asc) {{
    _id,
    title,
    slug,
    description,
    image,
    order,
    "postCount": count(*[_type == "post" && subcategory._ref == ^._id])
  }}
}}"""

# Slug listings for sitemaps and prerendering
POST_SLUGS_QUERY = (
    '*[_type == "post"]{ slug, section->{ slug }, subcategory->{ slug } }'
)
AUTHOR_SLUGS_QUERY = '*[_type == "author"]{ slug }'
SECTION_SLUGS_QUERY = '*[_type == "section"]{ slug }'
SUBCATEGORY_SLUGS_QUERY = '*[_type == "subcategory"]{ slug, section->{ slug } }'
