"""Local filesystem renderer backed by Pillow."""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from pathlib import Path

from PIL import Image, ImageOps

from responsive_images.errors import FailureKind, RenditionFailure
from responsive_images.model.image import ImageHandle
from responsive_images.model.rendition import ExactCrop, RenderedImage, ResizeInstruction
from responsive_images.renderers.geometry import target_size

logger = logging.getLogger(__name__)

# Formats that cannot store an alpha channel or palette
_RGB_ONLY_FORMATS = {"JPEG", "BMP"}


def _pillow_format(extension: str) -> str:
    fmt = Image.registered_extensions().get("." + extension.lower())
    if fmt is None or fmt not in Image.SAVE:
        raise RenditionFailure(
            f"Pillow cannot write .{extension} files",
            kind=FailureKind.INVALID_STORAGE_REFERENCE,
        )
    return fmt


class PillowRenderer:
    """Renders into ``output_dir`` and serves the files under ``base_url``.

    File names are derived from the source path, its modification time, the
    instruction and the extension, so identical requests map to the same
    file. An existing file is reused; new files are written to a temporary
    name and renamed into place, so concurrent identical requests are safe.
    """

    def __init__(
        self,
        output_dir: str | Path = "_processed_",
        base_url: str = "/_processed_/",
        allow_upscaling: bool = True,
        quality: int = 85,
    ) -> None:
        self._output_dir = Path(output_dir)
        self._base_url = base_url
        self._allow_upscaling = allow_upscaling
        self._quality = quality

    def render(
        self,
        image: ImageHandle,
        instruction: ResizeInstruction,
        file_extension: str | None = None,
    ) -> RenderedImage:
        source = image.path
        if not source.exists():
            raise RenditionFailure(f"File {source} does not exist", kind=FailureKind.MISSING_FILE)
        if not source.is_file():
            raise RenditionFailure(
                f"Path {source} is not a file", kind=FailureKind.PATH_IS_NOT_A_FILE
            )

        extension = (file_extension or source.suffix.lstrip(".") or "jpg").lower()
        fmt = _pillow_format(extension)
        target = self._output_dir / self._file_name(source, instruction, extension)

        if target.is_file():
            with Image.open(target) as existing:
                width, height = existing.size
            return RenderedImage(url=self._url(target.name), width=width, height=height)

        width, height = target_size(image, instruction, self._allow_upscaling)
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RenditionFailure(
                f"Output directory {self._output_dir} is not available",
                kind=FailureKind.STORAGE_UNAVAILABLE,
                cause=exc,
            ) from exc

        self._write(source, target, instruction, (width, height), fmt)
        logger.debug("Rendered %s -> %s (%dx%d)", source, target, width, height)
        return RenderedImage(url=self._url(target.name), width=width, height=height)

    def _write(
        self,
        source: Path,
        target: Path,
        instruction: ResizeInstruction,
        size: tuple[int, int],
        fmt: str,
    ) -> None:
        with Image.open(source) as img:
            if instruction.crop is not None:
                img = img.crop(instruction.crop.box)
            if isinstance(instruction, ExactCrop):
                out = ImageOps.fit(img, size, method=Image.Resampling.LANCZOS)
            else:
                out = img.resize(size, Image.Resampling.LANCZOS)
            if fmt in _RGB_ONLY_FORMATS and out.mode not in ("RGB", "L"):
                out = out.convert("RGB")

            fd, tmp_name = tempfile.mkstemp(dir=self._output_dir, suffix=target.suffix)
            try:
                with os.fdopen(fd, "wb") as fh:
                    out.save(fh, format=fmt, quality=self._quality)
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

    def _file_name(self, source: Path, instruction: ResizeInstruction, extension: str) -> str:
        key = f"{source.resolve()}|{source.stat().st_mtime_ns}|{instruction!r}|{extension}"
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:12]
        return f"{source.stem}_{digest}.{extension}"

    def _url(self, name: str) -> str:
        if not self._base_url:
            return name
        return self._base_url.rstrip("/") + "/" + name
