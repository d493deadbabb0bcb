"""RenditionPlanner: turns size definitions x pixel densities into renditions."""

from __future__ import annotations

import logging
import math
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Sequence

from responsive_images.errors import InvalidPixelDensity, MalformedSizeToken, RenditionFailure
from responsive_images.model.image import CropArea, ImageHandle
from responsive_images.model.plan import PlannedRenditions, RenditionGroup
from responsive_images.model.rendition import (
    AspectResize,
    ExactCrop,
    RenderedImage,
    RenditionRequest,
    ResizeInstruction,
    ResolvedRendition,
    SpecialFunction,
)
from responsive_images.model.sizes import SizeDefinition
from responsive_images.planner.middleware import RenderMiddleware
from responsive_images.renderers.base import ImageRenderer

logger = logging.getLogger(__name__)

FALLBACK_DENSITY = 1.0


@dataclass(frozen=True)
class _Job:
    group: int
    slot: int | None  # density index, None for the fallback
    request: RenditionRequest


def numeric_width(size: SizeDefinition) -> float:
    """Return the size's width token as a positive number, or raise MalformedSizeToken."""
    try:
        width = float(size.image_width)
    except ValueError:
        raise MalformedSizeToken(size.image_width) from None
    if not math.isfinite(width) or width <= 0:
        raise MalformedSizeToken(size.image_width)
    return width


def build_instruction(
    size: SizeDefinition,
    pixel_density: float,
    crop: CropArea | None = None,
    special_function: SpecialFunction = SpecialFunction.NONE,
) -> ResizeInstruction:
    """Derive the resize instruction for one size x density combination.

    SQUARE asks for an exact crop of target x target; everything else is an
    aspect-preserving resize to the target width. Zero or negative densities
    (what loose parsing makes of garbage) are passed through; renderers clamp
    the output to 1px.
    """
    if not math.isfinite(pixel_density):
        raise InvalidPixelDensity(pixel_density)
    target_width = pixel_density * numeric_width(size)
    if special_function is SpecialFunction.SQUARE:
        return ExactCrop(width=target_width, height=target_width, crop=crop)
    return AspectResize(width=target_width, crop=crop)


class RenditionPlanner:
    """Plans and renders every rendition a picture needs.

    All instructions are derived before anything is rendered, so malformed
    widths or densities fail without touching the renderer. Renditions are
    then dispatched to a thread pool of ``max_workers``; the first failure
    cancels what has not started yet and aborts the plan.
    """

    def __init__(
        self,
        renderer: ImageRenderer,
        *,
        max_workers: int = 4,
        middleware: Sequence[RenderMiddleware] | None = None,
    ) -> None:
        self._renderer = renderer
        self._max_workers = max(1, max_workers)
        self._middleware = list(middleware) if middleware else []

    def plan(
        self,
        image: ImageHandle,
        sizes: Sequence[SizeDefinition],
        pixel_densities: Sequence[float],
        crop: CropArea | None = None,
        special_function: SpecialFunction = SpecialFunction.NONE,
        file_extension: str | None = None,
    ) -> PlannedRenditions:
        jobs = self._build_jobs(sizes, pixel_densities, crop, special_function, file_extension)
        logger.debug(
            "Planning %d renditions for %s (%d sizes x %d densities)",
            len(jobs),
            image.path,
            len(sizes),
            len(pixel_densities),
        )
        render = self._chain(image)
        results = self._run(jobs, render)

        # Put results back in size x density order, whatever order they finished in
        slots: list[list[ResolvedRendition]] = [[] for _ in sizes]
        fallbacks: list[ResolvedRendition | None] = [None] * len(sizes)
        for job, result in zip(jobs, results):
            resolved = ResolvedRendition(
                image=result, size=job.request.size, pixel_density=job.request.pixel_density
            )
            if job.slot is None:
                fallbacks[job.group] = resolved
            else:
                slots[job.group].append(resolved)

        return PlannedRenditions(
            groups=tuple(
                RenditionGroup(size=size, renditions=tuple(slots[i]), fallback=fallbacks[i])
                for i, size in enumerate(sizes)
            )
        )

    # --- internals ------------------------------------------------------------

    def _build_jobs(
        self,
        sizes: Sequence[SizeDefinition],
        pixel_densities: Sequence[float],
        crop: CropArea | None,
        special_function: SpecialFunction,
        file_extension: str | None,
    ) -> list[_Job]:
        jobs: list[_Job] = []

        def add(group: int, slot: int | None, size: SizeDefinition, density: float) -> None:
            instruction = build_instruction(size, density, crop, special_function)
            request = RenditionRequest(
                size=size,
                pixel_density=density,
                instruction=instruction,
                file_extension=file_extension or None,
            )
            jobs.append(_Job(group=group, slot=slot, request=request))

        for group, size in enumerate(sizes):
            for slot, density in enumerate(pixel_densities):
                add(group, slot, size, density)
            # The fallback <img> is always rendered at 1x, even if 1.0 is listed.
            if size.is_default:
                add(group, None, size, FALLBACK_DENSITY)
        return jobs

    def _chain(self, image: ImageHandle) -> Callable[[RenditionRequest], RenderedImage]:
        renderer = self._renderer

        def handler(req: RenditionRequest) -> RenderedImage:
            try:
                return renderer.render(image, req.instruction, req.file_extension)
            except Exception as exc:
                failure = RenditionFailure.from_exception(exc)
                if failure is None or failure is exc:
                    raise
                raise failure from exc

        chain = handler
        for mw in reversed(self._middleware):
            prev_chain = chain
            chain = lambda req, _prev=prev_chain, _mw=mw: _mw(req, _prev)
        return chain

    def _run(
        self, jobs: list[_Job], render: Callable[[RenditionRequest], RenderedImage]
    ) -> list[RenderedImage]:
        if not jobs:
            return []
        if self._max_workers == 1:
            return [render(job.request) for job in jobs]

        pool = ThreadPoolExecutor(max_workers=min(self._max_workers, len(jobs)))
        try:
            futures: list[Future[RenderedImage]] = [
                pool.submit(render, job.request) for job in jobs
            ]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in futures:
                if future in done and future.exception() is not None:
                    for other in pending:
                        other.cancel()
                    logger.warning(
                        "Rendition failed, abandoning %d pending requests: %s",
                        len(pending),
                        future.exception(),
                    )
                    raise future.exception()  # type: ignore[misc]
            return [future.result() for future in futures]
        finally:
            pool.shutdown(wait=True, cancel_futures=True)
