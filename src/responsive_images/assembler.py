"""MarkupAssembler: builds the <picture> markup plan from planned renditions."""

from __future__ import annotations

from responsive_images.config import DensitySuffixRule, FallbackPolicy
from responsive_images.model.plan import (
    FallbackImageDescriptor,
    PictureMarkupPlan,
    PlannedRenditions,
    RenditionGroup,
    SourceDescriptor,
)
from responsive_images.model.rendition import ResolvedRendition

__all__ = ["MarkupAssembler", "format_density"]


def format_density(density: float) -> str:
    """Format a density the way srcset descriptors are written: 2 -> "2", 1.5 -> "1.5"."""
    if float(density).is_integer():
        return str(int(density))
    return repr(float(density))


class MarkupAssembler:
    """Turns planner output into an ordered PictureMarkupPlan.

    One source per size definition, in parse order. The fallback image
    comes from the default size definition selected by ``fallback_policy``.
    """

    def __init__(
        self,
        density_suffix: DensitySuffixRule = DensitySuffixRule.TRUNCATE,
        fallback_policy: FallbackPolicy = FallbackPolicy.FIRST,
        absolute: bool = False,
        site_url: str = "",
    ) -> None:
        self._density_suffix = density_suffix
        self._fallback_policy = fallback_policy
        self._absolute = absolute
        self._site_url = site_url

    def assemble(
        self, planned: PlannedRenditions, alt: str = "", title: str | None = None
    ) -> PictureMarkupPlan:
        sources = tuple(self.source(group) for group in planned.groups)
        return PictureMarkupPlan(sources=sources, fallback=self.fallback(planned, alt, title))

    def source(self, group: RenditionGroup) -> SourceDescriptor:
        return SourceDescriptor(
            media_condition=group.size.media_condition,
            srcset=", ".join(self.srcset_entry(r) for r in group.renditions),
        )

    def srcset_entry(self, rendition: ResolvedRendition) -> str:
        url = rendition.public_url(self._absolute, self._site_url)
        if self._omits_descriptor(rendition.pixel_density):
            return url
        return f"{url} {format_density(rendition.pixel_density)}x"

    def fallback(
        self, planned: PlannedRenditions, alt: str = "", title: str | None = None
    ) -> FallbackImageDescriptor | None:
        """Return the fallback image, or None if no size definition is a default."""
        candidates = [g.fallback for g in planned.groups if g.fallback is not None]
        if not candidates:
            return None
        chosen = candidates[0] if self._fallback_policy is FallbackPolicy.FIRST else candidates[-1]
        return FallbackImageDescriptor(
            url=chosen.public_url(self._absolute, self._site_url),
            width=chosen.image.width,
            height=chosen.image.height,
            alt=alt,
            title=title or None,
        )

    def _omits_descriptor(self, density: float) -> bool:
        if self._density_suffix is DensitySuffixRule.EXACT:
            return density == 1.0
        return int(density) == 1
