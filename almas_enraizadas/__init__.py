"""Almas Enraizadas - server-rendered wellness blog with AI-assisted authoring.

This package provides the content layer over the headless CMS, the pure
formatting and SEO helpers used by the site, and the AI authoring helpers
behind the editorial console.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
