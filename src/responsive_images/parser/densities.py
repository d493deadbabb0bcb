"""Parser for comma-separated pixel density lists such as ``1, 1.5, 2``."""

from __future__ import annotations

import re

from responsive_images.errors import InvalidPixelDensity

__all__ = ["parse_pixel_densities", "loose_float"]

# Longest leading decimal number, optionally signed and with an exponent
_LEADING_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def loose_float(value: str) -> float:
    """Convert *value* the forgiving way: its leading number, or 0.0 if there is none."""
    match = _LEADING_NUMBER_RE.match(value.strip())
    return float(match.group(0)) if match else 0.0


def _strict_float(value: str) -> float:
    try:
        density = float(value)
    except ValueError:
        raise InvalidPixelDensity(value) from None
    if not density > 0:
        raise InvalidPixelDensity(value)
    return density


def parse_pixel_densities(source: str, strict: bool = False) -> list[float]:
    """Parse a pixel density list, keeping order and duplicates.

    Segments are trimmed first; a segment that is then blank or exactly
    ``"0"`` is skipped (``"0.0"`` is kept). By default a segment that is not a
    number becomes 0.0; with ``strict=True`` it raises InvalidPixelDensity.
    """
    densities: list[float] = []
    for segment in source.split(","):
        segment = segment.strip()
        if segment in ("", "0"):
            continue
        densities.append(_strict_float(segment) if strict else loose_float(segment))
    return densities
