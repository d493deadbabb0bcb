from __future__ import annotations

from typing import Protocol

from responsive_images.model.image import ImageHandle
from responsive_images.model.rendition import RenderedImage, ResizeInstruction


class ImageRenderer(Protocol):
    """Protocol for renderers that turn a resize instruction into a stored image."""

    def render(
        self,
        image: ImageHandle,
        instruction: ResizeInstruction,
        file_extension: str | None = None,
    ) -> RenderedImage:
        """Produce (or reuse) the rendition and return its URL and dimensions.

        Must be idempotent and safe to call concurrently with identical arguments.
        """
        ...
