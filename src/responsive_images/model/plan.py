"""Plan models: planner output and the final picture markup plan."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from responsive_images.model.rendition import ResolvedRendition
from responsive_images.model.sizes import SizeDefinition


@dataclass(frozen=True)
class RenditionGroup:
    """All renditions for one size definition, in pixel density order."""

    size: SizeDefinition
    renditions: tuple[ResolvedRendition, ...]
    fallback: ResolvedRendition | None = None


@dataclass(frozen=True)
class PlannedRenditions:
    """Planner output, one group per size definition in parse order."""

    groups: tuple[RenditionGroup, ...]

    @property
    def request_count(self) -> int:
        return sum(len(g.renditions) + (g.fallback is not None) for g in self.groups)


@dataclass(frozen=True)
class SourceDescriptor:
    """A <source> element: media condition and srcset line."""

    media_condition: str
    srcset: str


@dataclass(frozen=True)
class FallbackImageDescriptor:
    """The <img> element attributes.

    ``alt`` is always emitted, even when empty; ``title`` only when set.
    """

    url: str
    width: int
    height: int
    alt: str = ""
    title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        attributes: dict[str, Any] = {
            "src": self.url,
            "width": self.width,
            "height": self.height,
            "alt": self.alt,
        }
        if self.title:
            attributes["title"] = self.title
        return attributes


@dataclass(frozen=True)
class PictureMarkupPlan:
    """Ordered sources plus the fallback image of a <picture> element."""

    sources: tuple[SourceDescriptor, ...]
    fallback: FallbackImageDescriptor | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "sources": [
                {"media": s.media_condition, "srcset": s.srcset} for s in self.sources
            ],
            "fallback": None if self.fallback is None else self.fallback.to_dict(),
        }
