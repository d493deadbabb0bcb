from responsive_images.model.image import CropArea, ImageHandle
from responsive_images.model.plan import (
    FallbackImageDescriptor,
    PictureMarkupPlan,
    PlannedRenditions,
    RenditionGroup,
    SourceDescriptor,
)
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

__all__ = [
    # image
    "CropArea",
    "ImageHandle",
    # sizes
    "SizeDefinition",
    # rendition
    "SpecialFunction",
    "AspectResize",
    "ExactCrop",
    "ResizeInstruction",
    "RenditionRequest",
    "RenderedImage",
    "ResolvedRendition",
    # plan
    "RenditionGroup",
    "PlannedRenditions",
    "SourceDescriptor",
    "FallbackImageDescriptor",
    "PictureMarkupPlan",
]
