"""Size definition model: one media condition and width from a sizes string."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SizeDefinition:
    """A single entry of a parsed sizes string.

    ``image_width`` is the unit-stripped width token, kept as text.
    ``is_default`` is True for bare widths without a media condition.
    """

    media_condition: str
    image_width: str
    is_default: bool

    @classmethod
    def with_media_condition(cls, media_condition: str, image_width: str) -> SizeDefinition:
        return cls(media_condition=media_condition, image_width=image_width, is_default=False)

    @classmethod
    def default(cls, image_width: str) -> SizeDefinition:
        return cls(media_condition="", image_width=image_width, is_default=True)
