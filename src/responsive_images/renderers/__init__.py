from responsive_images.renderers.base import ImageRenderer
from responsive_images.renderers.pillow import PillowRenderer
from responsive_images.renderers.stub import StubRenderer

__all__ = [
    "ImageRenderer",
    "PillowRenderer",
    "StubRenderer",
]
