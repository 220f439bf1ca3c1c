"""Permanent redirects from legacy URLs.

The old blog and category pages were folded into the sections index.
"""

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from almas_enraizadas.routes import LEGACY_REDIRECTS, SECTIONS

router = APIRouter()


def _to_sections() -> RedirectResponse:
    return RedirectResponse(url=SECTIONS, status_code=301)


for _prefix in LEGACY_REDIRECTS:
    router.add_api_route(_prefix, _to_sections, methods=["GET"], include_in_schema=False)
    router.add_api_route(
        f"{_prefix}/{{path:path}}", _to_sections, methods=["GET"], include_in_schema=False
    )
