"""Tests for the Pillow renderer."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from responsive_images.collaborators.image import open_image
from responsive_images.errors import FailureKind, RenditionFailure
from responsive_images.model.image import CropArea, ImageHandle
from responsive_images.model.rendition import AspectResize, ExactCrop
from responsive_images.renderers import PillowRenderer


@pytest.fixture
def renderer(tmp_path: Path) -> PillowRenderer:
    return PillowRenderer(output_dir=tmp_path / "out", base_url="/_processed_/")


def _file_for(renderer_dir: Path, url: str) -> Path:
    return renderer_dir / url.rsplit("/", 1)[-1]


class TestAspectResize:
    def test_writes_resized_file(self, tmp_path, image_path, renderer):
        result = renderer.render(open_image(image_path), AspectResize(width=500))
        assert result.url.startswith("/_processed_/photo_")
        assert result.url.endswith(".jpg")
        assert (result.width, result.height) == (500, 400)
        with Image.open(_file_for(tmp_path / "out", result.url)) as img:
            assert img.size == (500, 400)

    def test_crop_applied(self, tmp_path, image_path, renderer):
        crop = CropArea(x=100, y=100, width=400, height=200)
        result = renderer.render(open_image(image_path), AspectResize(width=200, crop=crop))
        assert (result.width, result.height) == (200, 100)

    def test_extension_override(self, tmp_path, image_path, renderer):
        result = renderer.render(open_image(image_path), AspectResize(width=100), "png")
        assert result.url.endswith(".png")
        with Image.open(_file_for(tmp_path / "out", result.url)) as img:
            assert img.format == "PNG"

    def test_rgba_source_to_jpeg(self, tmp_path, renderer):
        source = tmp_path / "alpha.png"
        Image.new("RGBA", (200, 100), (0, 0, 0, 0)).save(source)
        result = renderer.render(open_image(source), AspectResize(width=100), "jpg")
        assert (result.width, result.height) == (100, 50)


class TestExactCrop:
    def test_square(self, tmp_path, image_path, renderer):
        result = renderer.render(open_image(image_path), ExactCrop(width=200, height=200))
        assert (result.width, result.height) == (200, 200)
        with Image.open(_file_for(tmp_path / "out", result.url)) as img:
            assert img.size == (200, 200)


class TestIdempotence:
    def test_same_request_same_file(self, tmp_path, image_path, renderer):
        handle = open_image(image_path)
        first = renderer.render(handle, AspectResize(width=300))
        second = renderer.render(handle, AspectResize(width=300))
        assert first == second
        assert len(list((tmp_path / "out").iterdir())) == 1

    def test_different_instructions_different_files(self, tmp_path, image_path, renderer):
        handle = open_image(image_path)
        a = renderer.render(handle, AspectResize(width=300))
        b = renderer.render(handle, ExactCrop(width=300, height=300))
        assert a.url != b.url


class TestFailures:
    def test_missing_source(self, tmp_path, renderer):
        handle = ImageHandle(path=tmp_path / "nope.jpg", width=10, height=10)
        with pytest.raises(RenditionFailure) as exc_info:
            renderer.render(handle, AspectResize(width=5))
        assert exc_info.value.kind is FailureKind.MISSING_FILE

    def test_directory_source(self, tmp_path, renderer):
        handle = ImageHandle(path=tmp_path, width=10, height=10)
        with pytest.raises(RenditionFailure) as exc_info:
            renderer.render(handle, AspectResize(width=5))
        assert exc_info.value.kind is FailureKind.PATH_IS_NOT_A_FILE

    def test_output_dir_unavailable(self, tmp_path, image_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        renderer = PillowRenderer(output_dir=blocker / "out")
        with pytest.raises(RenditionFailure) as exc_info:
            renderer.render(open_image(image_path), AspectResize(width=5))
        assert exc_info.value.kind is FailureKind.STORAGE_UNAVAILABLE
        assert isinstance(exc_info.value.cause, OSError)

    def test_unwritable_source_suffix(self, tmp_path, renderer):
        source = tmp_path / "photo.dat"
        Image.new("RGB", (100, 80)).save(source, format="JPEG")
        with pytest.raises(RenditionFailure) as exc_info:
            renderer.render(open_image(source), AspectResize(width=50))
        assert exc_info.value.kind is FailureKind.INVALID_STORAGE_REFERENCE
        assert exc_info.value.code == 1509741914
        assert not (tmp_path / "out").exists()
