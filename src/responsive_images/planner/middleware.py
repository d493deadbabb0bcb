"""Renderer middleware."""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable

from responsive_images.model.rendition import RenderedImage, RenditionRequest

RenderMiddleware = Callable[
    [RenditionRequest, Callable[[RenditionRequest], RenderedImage]], RenderedImage
]


def logging_middleware(logger: logging.Logger | None = None) -> RenderMiddleware:
    """Create middleware that logs each rendition request and its latency."""
    log = logger or logging.getLogger("responsive_images")

    def middleware(
        request: RenditionRequest, next_fn: Callable[[RenditionRequest], RenderedImage]
    ) -> RenderedImage:
        log.info(
            "Rendition request: width=%s density=%s instruction=%s",
            request.size.image_width,
            request.pixel_density,
            type(request.instruction).__name__,
        )
        start = time.monotonic()
        image = next_fn(request)
        elapsed = time.monotonic() - start
        log.info(
            "Rendition ready: %s (%dx%d) latency=%.3fs",
            image.url,
            image.width,
            image.height,
            elapsed,
        )
        return image

    return middleware


@dataclass
class RenderStats:
    """Counts renderer calls; safe to share between worker threads."""

    requests: int = 0
    total_seconds: float = 0.0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, seconds: float) -> None:
        with self._lock:
            self.requests += 1
            self.total_seconds += seconds


def stats_middleware(stats: RenderStats) -> RenderMiddleware:
    """Create middleware that records every completed rendition on *stats*."""

    def middleware(
        request: RenditionRequest, next_fn: Callable[[RenditionRequest], RenderedImage]
    ) -> RenderedImage:
        start = time.monotonic()
        image = next_fn(request)
        stats.record(time.monotonic() - start)
        return image

    return middleware
