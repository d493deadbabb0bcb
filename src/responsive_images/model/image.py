"""Image handle and crop area models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class CropArea:
    """An absolute pixel rectangle within the source image."""

    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        """(left, upper, right, lower), the box form Pillow expects."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class ImageHandle:
    """A concrete source image a renderer can work on.

    ``properties`` carries metadata stored with the image such as
    ``title``, ``alternative`` or a stored ``crop`` specification.
    """

    path: Path
    width: int
    height: int
    properties: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def get_property(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)
