"""Resolve the opaque image argument into an ImageHandle."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from PIL import Image, UnidentifiedImageError

from responsive_images.errors import UnresolvableImage
from responsive_images.model.image import ImageHandle

ImageResolver = Callable[[Any], ImageHandle]


def open_image(path: str | Path, properties: dict[str, Any] | None = None) -> ImageHandle:
    """Read the dimensions of the image at *path* and wrap it in a handle."""
    path = Path(path)
    try:
        with Image.open(path) as img:
            width, height = img.size
    except (OSError, UnidentifiedImageError) as exc:
        raise UnresolvableImage(f"Could not open image {path}", cause=exc) from exc
    return ImageHandle(path=path, width=width, height=height, properties=dict(properties or {}))


def resolve_image(argument: Any) -> ImageHandle:
    """Return the ImageHandle behind *argument*.

    Accepts a handle, a filesystem path, or a domain object exposing
    ``original_resource`` (as attribute or zero-argument method).
    """
    if argument is None or argument == "":
        raise UnresolvableImage("Missing image")
    if isinstance(argument, ImageHandle):
        return argument
    if isinstance(argument, (str, Path)):
        return open_image(argument)

    original = getattr(argument, "original_resource", None)
    if original is None:
        raise UnresolvableImage(f"Could not get image from {type(argument).__name__}")
    if callable(original):
        original = original()
    if not isinstance(original, ImageHandle):
        raise UnresolvableImage(
            f"No original resource could be resolved for supplied file {type(argument).__name__}"
        )
    return original
