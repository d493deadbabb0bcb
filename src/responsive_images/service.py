"""ResponsiveImageService: the render-call pipeline for one <picture> element.

Example::

    service = ResponsiveImageService(PillowRenderer("public/_processed_"))
    plan = service.render(
        "images/project.jpg",
        sizes="(max-width: 414px) 378px, (max-width: 575px) 540px, 634px",
        pixel_densities="1,2",
    )

Each ``plan.sources`` entry becomes a ``<source srcset=... media=...>`` and
``plan.fallback`` supplies ``<img src width height>``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from responsive_images.assembler import MarkupAssembler
from responsive_images.collaborators.crop import DEFAULT_VARIANT, CropResolver, resolve_crop
from responsive_images.collaborators.extensions import ExtensionValidator, whitelist_validator
from responsive_images.collaborators.image import ImageResolver, resolve_image
from responsive_images.config import ResponsiveImagesConfig
from responsive_images.model.image import CropArea, ImageHandle
from responsive_images.model.plan import PictureMarkupPlan, PlannedRenditions
from responsive_images.model.rendition import SpecialFunction
from responsive_images.parser import parse_pixel_densities, parse_sizes
from responsive_images.planner import RenditionPlanner
from responsive_images.planner.middleware import RenderMiddleware
from responsive_images.renderers.base import ImageRenderer

logger = logging.getLogger(__name__)


def _image_text(image: ImageHandle, name: str, override: str | None) -> str:
    """Caller-supplied text wins; otherwise the image property, or empty."""
    if override is not None:
        return override
    value = image.get_property(name)
    return "" if value is None else str(value)


@dataclass(frozen=True)
class _Prepared:
    image: ImageHandle
    crop: CropArea | None
    special_function: SpecialFunction


class ResponsiveImageService:
    """Resolves, plans and assembles responsive pictures.

    Collaborators are injected; defaults resolve paths and handles, read
    JSON crop variants and validate extensions against the configured
    whitelist.
    """

    def __init__(
        self,
        renderer: ImageRenderer,
        config: ResponsiveImagesConfig | None = None,
        *,
        resolver: ImageResolver = resolve_image,
        crop_resolver: CropResolver = resolve_crop,
        extension_validator: ExtensionValidator | None = None,
        middleware: Sequence[RenderMiddleware] | None = None,
    ) -> None:
        self._config = config or ResponsiveImagesConfig()
        self._resolver = resolver
        self._crop_resolver = crop_resolver
        self._validate_extension = extension_validator or whitelist_validator(
            self._config.allowed_extensions
        )
        self._planner = RenditionPlanner(
            renderer, max_workers=self._config.max_workers, middleware=middleware
        )

    @property
    def config(self) -> ResponsiveImagesConfig:
        return self._config

    def plan(
        self,
        image: Any,
        sizes: str,
        pixel_densities: str = "",
        *,
        crop: str | bool | None = None,
        crop_variant: str = DEFAULT_VARIANT,
        special_function: str | SpecialFunction | None = None,
        file_extension: str | None = None,
    ) -> PlannedRenditions:
        """Resolve the inputs and render every rendition, without assembling markup."""
        prepared = self._prepare(image, crop, crop_variant, special_function, file_extension)
        return self._plan(prepared, sizes, pixel_densities, file_extension)

    def render(
        self,
        image: Any,
        sizes: str,
        pixel_densities: str = "",
        *,
        crop: str | bool | None = None,
        crop_variant: str = DEFAULT_VARIANT,
        special_function: str | SpecialFunction | None = None,
        file_extension: str | None = None,
        absolute: bool = False,
        alt: str | None = None,
        title: str | None = None,
    ) -> PictureMarkupPlan:
        """Build the PictureMarkupPlan for *image*.

        ``alt`` and ``title`` default to the image's ``alternative`` and
        ``title`` properties. Raises the first error encountered; no partial
        plan is returned.
        """
        prepared = self._prepare(image, crop, crop_variant, special_function, file_extension)
        planned = self._plan(prepared, sizes, pixel_densities, file_extension)
        assembler = MarkupAssembler(
            density_suffix=self._config.density_suffix,
            fallback_policy=self._config.fallback_policy,
            absolute=absolute,
            site_url=self._config.site_url,
        )
        if absolute and not self._config.site_url:
            logger.warning("Absolute URLs requested but no site_url is configured")
        result = assembler.assemble(
            planned,
            alt=_image_text(prepared.image, "alternative", alt),
            title=_image_text(prepared.image, "title", title) or None,
        )
        logger.debug(
            "Assembled picture with %d sources from %d renditions",
            len(result.sources),
            planned.request_count,
        )
        return result

    def _plan(
        self,
        prepared: _Prepared,
        sizes: str,
        pixel_densities: str,
        file_extension: str | None,
    ) -> PlannedRenditions:
        size_definitions = parse_sizes(sizes)
        densities = parse_pixel_densities(pixel_densities, strict=self._config.strict_densities)
        return self._planner.plan(
            prepared.image,
            size_definitions,
            densities,
            crop=prepared.crop,
            special_function=prepared.special_function,
            file_extension=file_extension or None,
        )

    def _prepare(
        self,
        image: Any,
        crop: str | bool | None,
        crop_variant: str,
        special_function: str | SpecialFunction | None,
        file_extension: str | None,
    ) -> _Prepared:
        handle = self._resolver(image)
        self._validate_extension(file_extension or "")
        if not isinstance(special_function, SpecialFunction):
            special_function = SpecialFunction.parse(special_function)
        area = self._crop_resolver(crop, crop_variant or DEFAULT_VARIANT, handle)
        return _Prepared(image=handle, crop=area, special_function=special_function)
