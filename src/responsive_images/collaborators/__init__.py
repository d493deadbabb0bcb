from responsive_images.collaborators.crop import CropResolver, resolve_crop
from responsive_images.collaborators.extensions import (
    ExtensionValidator,
    validate_file_extension,
    whitelist_validator,
)
from responsive_images.collaborators.image import ImageResolver, open_image, resolve_image

__all__ = [
    "CropResolver",
    "resolve_crop",
    "ExtensionValidator",
    "validate_file_extension",
    "whitelist_validator",
    "ImageResolver",
    "open_image",
    "resolve_image",
]
