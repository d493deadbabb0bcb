"""Output dimensions shared by the renderers."""

from __future__ import annotations

from responsive_images.model.image import ImageHandle
from responsive_images.model.rendition import ExactCrop, ResizeInstruction


def source_size(image: ImageHandle, instruction: ResizeInstruction) -> tuple[int, int]:
    """Size of the region being scaled: the crop area if there is one."""
    if instruction.crop is not None:
        return instruction.crop.width, instruction.crop.height
    return image.width, image.height


def target_size(
    image: ImageHandle, instruction: ResizeInstruction, allow_upscaling: bool = True
) -> tuple[int, int]:
    """Return the (width, height) a renderer produces for *instruction*."""
    src_w, src_h = source_size(image, instruction)
    if src_w <= 0 or src_h <= 0:
        raise ValueError(f"Source region of {image.path} is empty")

    if isinstance(instruction, ExactCrop):
        width, height = max(1.0, instruction.width), max(1.0, instruction.height)
        if not allow_upscaling:
            factor = min(1.0, src_w / width, src_h / height)
            width, height = width * factor, height * factor
        return max(1, round(width)), max(1, round(height))

    width = instruction.width
    if not allow_upscaling:
        width = min(width, src_w)
    width = max(1, round(width))
    return width, max(1, round(src_h * width / src_w))
