"""SEO helpers: JSON-LD structured data and page metadata."""
