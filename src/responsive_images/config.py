from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

DEFAULT_IMAGE_EXTENSIONS = ("gif", "jpg", "jpeg", "tif", "tiff", "bmp", "png", "webp")

_ENV_PREFIX = "RESPONSIVE_IMAGES_"


class DensitySuffixRule(Enum):
    """When a srcset entry omits its ``<density>x`` descriptor."""

    TRUNCATE = "truncate"  # int(density) == 1, so 1.5 is written without suffix
    EXACT = "exact"  # density == 1.0


class FallbackPolicy(Enum):
    """Which default size definition supplies the fallback image."""

    FIRST = "first"
    LAST = "last"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_extensions(value: str) -> tuple[str, ...]:
    return tuple(ext.strip().lower() for ext in value.split(",") if ext.strip())


_ENV_FIELDS = {
    "allowed_extensions": _env_extensions,
    "max_workers": lambda v: max(1, int(v)),
    "strict_densities": _env_bool,
    "density_suffix": lambda v: DensitySuffixRule(v.strip().lower()),
    "fallback_policy": lambda v: FallbackPolicy(v.strip().lower()),
    "site_url": str,
    "output_dir": str,
    "base_url": str,
}


@dataclass(frozen=True)
class ResponsiveImagesConfig:
    allowed_extensions: tuple[str, ...] = DEFAULT_IMAGE_EXTENSIONS
    max_workers: int = 4  # 1 = render sequentially
    strict_densities: bool = False
    density_suffix: DensitySuffixRule = DensitySuffixRule.TRUNCATE
    fallback_policy: FallbackPolicy = FallbackPolicy.FIRST
    site_url: str = ""
    output_dir: str = "_processed_"
    base_url: str = "/_processed_/"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ResponsiveImagesConfig:
        """Build a config from ``RESPONSIVE_IMAGES_*`` environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, Any] = {}
        for name, convert in _ENV_FIELDS.items():
            value = env.get(_ENV_PREFIX + name.upper())
            if value is not None:
                kwargs[name] = convert(value)
        return cls(**kwargs)
