"""Image URL builder for CMS image assets.

Asset references look like ``image-<id>-<width>x<height>-<format>`` and
map to ``https://cdn.sanity.io/images/<project>/<dataset>/<id>-<w>x<h>.<fmt>``.
Crop and hotspot are honoured with the same rectangle computation the
CMS image pipeline uses: the crop is applied first, then the rectangle is
narrowed to the requested aspect ratio, centred on the hotspot.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from almas_enraizadas.config import Settings, get_settings

CDN_BASE_URL = "https://cdn.sanity.io/images"

DEFAULT_WIDTH = 1200
DEFAULT_HEIGHT = 800

_ASSET_REF_RE = re.compile(r"^image-(?P<id>[A-Za-z0-9]+)-(?P<w>\d+)x(?P<h>\d+)-(?P<fmt>[a-z0-9]+)$")

_DEFAULT_CROP = {"left": 0.0, "top": 0.0, "bottom": 0.0, "right": 0.0}
_DEFAULT_HOTSPOT = {"x": 0.5, "y": 0.5, "height": 1.0, "width": 1.0}


def _js_round(value: float) -> int:
    """Round half up, matching ``Math.round``."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class AssetInfo:
    """Parsed image asset reference."""

    asset_id: str
    width: int
    height: int
    format: str

    @property
    def filename(self) -> str:
        """CDN file name of the asset."""
        return f"{self.asset_id}-{self.width}x{self.height}.{self.format}"


@dataclass(frozen=True)
class Rect:
    """Source rectangle in asset pixels."""

    left: int
    top: int
    width: int
    height: int


def parse_asset_ref(ref: str) -> AssetInfo:
    """Parse an image asset reference.

    Args:
        ref: Asset reference such as ``image-abc123-2000x3000-jpg``.

    Returns:
        Parsed asset information.

    Raises:
        ValueError: If the reference is malformed.
    """
    match = _ASSET_REF_RE.match(ref)
    if not match:
        raise ValueError(f"Malformed image asset reference: {ref!r}")
    return AssetInfo(
        asset_id=match["id"],
        width=int(match["w"]),
        height=int(match["h"]),
        format=match["fmt"],
    )


def _as_dict(source: Any) -> dict[str, Any]:
    if isinstance(source, BaseModel):
        return source.model_dump(by_alias=True, exclude_none=True)
    return dict(source)


def _asset_ref(source: dict[str, Any]) -> str | None:
    asset = source.get("asset")
    if isinstance(asset, dict):
        ref = asset.get("_ref") or asset.get("_id")
        return str(ref) if ref else None
    if isinstance(source.get("_ref"), str):
        return str(source["_ref"])
    return None


def compute_rect(
    asset: AssetInfo,
    crop: dict[str, float] | None = None,
    hotspot: dict[str, float] | None = None,
    width: int | None = None,
    height: int | None = None,
) -> Rect:
    """Compute the source rectangle for a crop/hotspot and output size.

    Args:
        asset: Parsed asset.
        crop: Crop fractions (defaults to no crop).
        hotspot: Hotspot ellipse (defaults to the whole image).
        width: Requested output width.
        height: Requested output height.

    Returns:
        Source rectangle in asset pixels.
    """
    crop = {**_DEFAULT_CROP, **(crop or {})}
    hotspot = {**_DEFAULT_HOTSPOT, **(hotspot or {})}

    crop_left = _js_round(crop["left"] * asset.width)
    crop_top = _js_round(crop["top"] * asset.height)
    crop_rect = Rect(
        left=crop_left,
        top=crop_top,
        width=_js_round(asset.width - crop["right"] * asset.width - crop_left),
        height=_js_round(asset.height - crop["bottom"] * asset.height - crop_top),
    )

    if not (width and height):
        return crop_rect

    h_radius = hotspot["width"] * asset.width / 2
    v_radius = hotspot["height"] * asset.height / 2
    center_x = hotspot["x"] * asset.width
    center_y = hotspot["y"] * asset.height
    hot_left, hot_right = center_x - h_radius, center_x + h_radius
    hot_top, hot_bottom = center_y - v_radius, center_y + v_radius

    desired_ratio = width / height
    crop_ratio = crop_rect.width / crop_rect.height

    if crop_ratio > desired_ratio:
        # Wider than desired: keep full height, slide horizontally
        rect_height = _js_round(crop_rect.height)
        rect_width = _js_round(rect_height * desired_ratio)
        top = max(0, _js_round(crop_rect.top))
        hot_center = _js_round((hot_right - hot_left) / 2 + hot_left)
        left = max(0, _js_round(hot_center - rect_width / 2))
        if left < crop_rect.left:
            left = crop_rect.left
        elif left + rect_width > crop_rect.left + crop_rect.width:
            left = crop_rect.left + crop_rect.width - rect_width
        return Rect(left=left, top=top, width=rect_width, height=rect_height)

    # Taller than desired: keep full width, slide vertically
    rect_width = crop_rect.width
    rect_height = _js_round(rect_width / desired_ratio)
    left = max(0, _js_round(crop_rect.left))
    hot_center = _js_round((hot_bottom - hot_top) / 2 + hot_top)
    top = max(0, _js_round(hot_center - rect_height / 2))
    if top < crop_rect.top:
        top = crop_rect.top
    elif top + rect_height > crop_rect.top + crop_rect.height:
        top = crop_rect.top + crop_rect.height - rect_height
    return Rect(left=left, top=top, width=rect_width, height=rect_height)


class ImageUrlBuilder:
    """Fluent builder for CMS image URLs.

    Example:
        >>> builder = ImageUrlBuilder("abc123", "production")
        >>> builder.image(post.main_image).width(600).height(400).url()
    """

    def __init__(
        self,
        project_id: str,
        dataset: str,
        source: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> None:
        self.project_id = project_id
        self.dataset = dataset
        self._source = source
        self._options: dict[str, Any] = dict(options or {})

    def _with(self, **options: Any) -> ImageUrlBuilder:
        return ImageUrlBuilder(
            self.project_id, self.dataset, self._source, {**self._options, **options}
        )

    def image(self, source: Any) -> ImageUrlBuilder:
        """Select the image source (dict or model)."""
        return ImageUrlBuilder(self.project_id, self.dataset, _as_dict(source), self._options)

    def width(self, value: int) -> ImageUrlBuilder:
        """Set the output width."""
        return self._with(width=value)

    def height(self, value: int) -> ImageUrlBuilder:
        """Set the output height."""
        return self._with(height=value)

    def quality(self, value: int) -> ImageUrlBuilder:
        """Set the output quality (0-100)."""
        return self._with(quality=value)

    def format(self, value: str) -> ImageUrlBuilder:
        """Set the output format (jpg, png, webp)."""
        return self._with(format=value)

    def fit(self, value: str) -> ImageUrlBuilder:
        """Set the fit mode (clip, crop, fill, max, min, scale)."""
        return self._with(fit=value)

    def url(self) -> str:
        """Render the URL, or ``""`` when the source has no asset."""
        if not self._source:
            return ""
        ref = _asset_ref(self._source)
        if not ref:
            return ""
        asset = parse_asset_ref(ref)

        width = self._options.get("width")
        height = self._options.get("height")
        rect = compute_rect(
            asset,
            crop=self._source.get("crop"),
            hotspot=self._source.get("hotspot"),
            width=width,
            height=height,
        )

        params: list[str] = []
        if rect != Rect(0, 0, asset.width, asset.height):
            params.append(f"rect={rect.left},{rect.top},{rect.width},{rect.height}")
        for option, key in (
            ("width", "w"),
            ("height", "h"),
            ("format", "fm"),
            ("quality", "q"),
            ("fit", "fit"),
        ):
            value = self._options.get(option)
            if value is not None:
                params.append(f"{key}={value}")

        base = f"{CDN_BASE_URL}/{self.project_id}/{self.dataset}/{asset.filename}"
        return f"{base}?{'&'.join(params)}" if params else base


def url_for(source: Any, settings: Settings | None = None) -> ImageUrlBuilder:
    """Start an image URL chain for a source.

    Args:
        source: Image field value.
        settings: Application settings.

    Returns:
        Builder bound to the configured project.
    """
    settings = settings or get_settings()
    builder = ImageUrlBuilder(settings.sanity_project_id, settings.sanity_dataset)
    return builder.image(source) if source is not None else builder


def get_image_url(
    source: Any,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    settings: Settings | None = None,
) -> str:
    """Get a ready-to-use image URL with default dimensions.

    Args:
        source: Image field value (dict or model).
        width: Output width.
        height: Output height.
        settings: Application settings.

    Returns:
        URL string, or ``""`` if there is no source or no CMS project.
    """
    settings = settings or get_settings()
    if source is None or not settings.is_cms_configured:
        return ""
    try:
        return url_for(source, settings).width(width).height(height).url()
    except ValueError:
        return ""


__all__ = [
    "AssetInfo",
    "ImageUrlBuilder",
    "Rect",
    "compute_rect",
    "get_image_url",
    "parse_asset_ref",
    "url_for",
]
