from __future__ import annotations

from typing import Callable, Iterable

from responsive_images.errors import InvalidFileExtension

ExtensionValidator = Callable[[str], None]


def validate_file_extension(extension: str | None, allowed: Iterable[str]) -> None:
    """Raise InvalidFileExtension if a non-empty *extension* is not in *allowed*."""
    if not extension:
        return
    allowed = tuple(allowed)
    if extension.lower() not in {ext.lower() for ext in allowed}:
        raise InvalidFileExtension(extension, allowed)


def whitelist_validator(allowed: Iterable[str]) -> ExtensionValidator:
    """Create a validator that checks extensions against *allowed*."""
    allowed = tuple(allowed)
    return lambda extension: validate_file_extension(extension, allowed)
