"""Rendition models: resize instructions, requests and their results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union
from urllib.parse import urljoin, urlsplit

from responsive_images.errors import UnknownSpecialFunction
from responsive_images.model.image import CropArea
from responsive_images.model.sizes import SizeDefinition


class SpecialFunction(Enum):
    """Named overrides of the aspect-preserving resize."""

    NONE = ""
    SQUARE = "square"

    @classmethod
    def parse(cls, name: str | None) -> SpecialFunction:
        """Return the member for *name*; None and "" mean no special function."""
        if not name:
            return cls.NONE
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise UnknownSpecialFunction(f"Unknown special function: {name!r}") from None


@dataclass(frozen=True)
class AspectResize:
    """Scale to ``width``; the renderer derives the height from the aspect ratio."""

    width: float
    crop: CropArea | None = None


@dataclass(frozen=True)
class ExactCrop:
    """Scale and crop to exactly ``width`` x ``height``."""

    width: float
    height: float
    crop: CropArea | None = None


ResizeInstruction = Union[AspectResize, ExactCrop]


@dataclass(frozen=True)
class RenditionRequest:
    """One size x density combination, ready to hand to a renderer."""

    size: SizeDefinition
    pixel_density: float
    instruction: ResizeInstruction
    file_extension: str | None = None


@dataclass(frozen=True)
class RenderedImage:
    """What a renderer produced: public URL and actual dimensions."""

    url: str
    width: int
    height: int


@dataclass(frozen=True)
class ResolvedRendition:
    """A rendered image together with the size and density it was made for."""

    image: RenderedImage
    size: SizeDefinition
    pixel_density: float

    def public_url(self, absolute: bool = False, site_url: str = "") -> str:
        """Return the image URL, joined onto *site_url* when *absolute* is set."""
        url = self.image.url
        if not absolute or not site_url or urlsplit(url).scheme:
            return url
        base = site_url if site_url.endswith("/") else site_url + "/"
        return urljoin(base, url)
