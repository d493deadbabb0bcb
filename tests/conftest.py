from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from responsive_images.model.image import ImageHandle
from responsive_images.renderers.stub import StubRenderer


@pytest.fixture
def image_path(tmp_path: Path) -> Path:
    """A 1000x800 RGB JPEG on disk."""
    path = tmp_path / "source" / "photo.jpg"
    path.parent.mkdir()
    Image.new("RGB", (1000, 800), (200, 40, 40)).save(path, format="JPEG")
    return path


@pytest.fixture
def handle() -> ImageHandle:
    """A handle that does not exist on disk, for renderers that do no I/O."""
    return ImageHandle(path=Path("/images/photo.jpg"), width=1000, height=800)


@pytest.fixture
def stub_renderer() -> StubRenderer:
    return StubRenderer(base_url="/p/")
