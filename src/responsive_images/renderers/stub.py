"""Stub renderer for dry runs and testing."""

from __future__ import annotations

import threading

from responsive_images.model.image import ImageHandle
from responsive_images.model.rendition import RenderedImage, ResizeInstruction
from responsive_images.renderers.geometry import target_size


class StubRenderer:
    """Renderer that computes dimensions but never touches the filesystem.

    URLs look like ``<base_url><stem>-<width>x<height>.<ext>``. Every call is
    recorded in ``calls`` so tests can inspect what was requested.
    """

    def __init__(self, base_url: str = "/_processed_/", allow_upscaling: bool = True) -> None:
        self._base_url = base_url
        self._allow_upscaling = allow_upscaling
        self._lock = threading.Lock()
        self.calls: list[tuple[ImageHandle, ResizeInstruction, str | None]] = []

    def render(
        self,
        image: ImageHandle,
        instruction: ResizeInstruction,
        file_extension: str | None = None,
    ) -> RenderedImage:
        with self._lock:
            self.calls.append((image, instruction, file_extension))
        width, height = target_size(image, instruction, self._allow_upscaling)
        extension = file_extension or image.path.suffix.lstrip(".") or "jpg"
        return RenderedImage(
            url=f"{self._base_url}{image.path.stem}-{width}x{height}.{extension}",
            width=width,
            height=height,
        )
