"""Resolve crop variant collections into absolute crop areas.

A crop specification is a JSON object keyed by variant name, with areas in
coordinates relative to the image size:

    {"default": {"cropArea": {"x": 0.1, "y": 0, "width": 0.8, "height": 1}}}
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

from responsive_images.errors import InvalidCropSpecification
from responsive_images.model.image import CropArea, ImageHandle

CropResolver = Callable[[Any, str, ImageHandle], Optional[CropArea]]

DEFAULT_VARIANT = "default"

_FULL_AREA = (0.0, 0.0, 1.0, 1.0)


def _relative_area(raw: Any, variant: str) -> tuple[float, float, float, float]:
    if not isinstance(raw, dict):
        raise InvalidCropSpecification(f"Crop area of variant {variant!r} must be an object")
    try:
        return tuple(float(raw[key]) for key in ("x", "y", "width", "height"))  # type: ignore[return-value]
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidCropSpecification(
            f"Crop area of variant {variant!r} is malformed", cause=exc
        ) from exc


def parse_crop_variants(crop_spec: str) -> dict[str, Any]:
    """Parse a crop variant collection; blank input yields no variants."""
    if not crop_spec.strip():
        return {}
    try:
        variants = json.loads(crop_spec)
    except json.JSONDecodeError as exc:
        raise InvalidCropSpecification("Crop specification is not valid JSON", cause=exc) from exc
    if not isinstance(variants, dict):
        raise InvalidCropSpecification("Crop specification must be a JSON object")
    return variants


def resolve_crop(
    crop_spec: str | bool | None, variant: str, image: ImageHandle
) -> CropArea | None:
    """Return the absolute crop area of *variant*, or None for no cropping.

    ``False`` disables cropping; ``None`` falls back to the crop stored with
    the image. An unknown variant or the full-image area means no cropping.
    """
    if crop_spec is False:
        return None
    if crop_spec is None or crop_spec is True:
        crop_spec = image.get_property("crop") or ""
    variant = variant or DEFAULT_VARIANT

    variant_data = parse_crop_variants(str(crop_spec)).get(variant)
    if variant_data is None:
        return None
    if not isinstance(variant_data, dict) or "cropArea" not in variant_data:
        raise InvalidCropSpecification(f"Crop variant {variant!r} has no cropArea")

    x, y, width, height = _relative_area(variant_data["cropArea"], variant)
    if (x, y, width, height) == _FULL_AREA:
        return None
    if width <= 0 or height <= 0 or x < 0 or y < 0 or x + width > 1.0001 or y + height > 1.0001:
        raise InvalidCropSpecification(f"Crop area of variant {variant!r} lies outside the image")
    return CropArea(
        x=round(x * image.width),
        y=round(y * image.height),
        width=max(1, round(width * image.width)),
        height=max(1, round(height * image.height)),
    )
