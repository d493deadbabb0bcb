"""Tests for renderer output dimensions."""

import pytest

from responsive_images.model.image import CropArea
from responsive_images.model.rendition import AspectResize, ExactCrop
from responsive_images.renderers.geometry import target_size


class TestAspectResize:
    def test_keeps_aspect_ratio(self, handle):
        assert target_size(handle, AspectResize(width=500)) == (500, 400)

    def test_rounds_fractional_width(self, handle):
        assert target_size(handle, AspectResize(width=567.4)) == (567, 454)

    def test_upscales_by_default(self, handle):
        assert target_size(handle, AspectResize(width=2000)) == (2000, 1600)

    def test_no_upscaling(self, handle):
        assert target_size(handle, AspectResize(width=2000), allow_upscaling=False) == (1000, 800)

    def test_crop_changes_ratio(self, handle):
        crop = CropArea(x=0, y=0, width=400, height=400)
        assert target_size(handle, AspectResize(width=200, crop=crop)) == (200, 200)

    def test_zero_width_clamped_to_one_pixel(self, handle):
        assert target_size(handle, AspectResize(width=0.0)) == (1, 1)


class TestExactCrop:
    def test_exact_dimensions(self, handle):
        assert target_size(handle, ExactCrop(width=300, height=300)) == (300, 300)

    def test_no_upscaling_keeps_ratio(self, handle):
        size = target_size(handle, ExactCrop(width=1600, height=1600), allow_upscaling=False)
        assert size == (800, 800)

    def test_zero_size_without_upscaling(self, handle):
        size = target_size(handle, ExactCrop(width=0.0, height=0.0), allow_upscaling=False)
        assert size == (1, 1)


def test_empty_crop_rejected(handle):
    with pytest.raises(ValueError):
        target_size(handle, AspectResize(width=100, crop=CropArea(0, 0, 0, 10)))
