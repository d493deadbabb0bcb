"""Parser for the sizes attribute grammar.

Syntax example:
    (max-width: 414px) 378px, (max-width: 575px) 540px, 634px

Each comma-separated entry is ``[<media-condition> ]<width>[px]``. An entry
without a media condition is a default entry.

See https://developer.mozilla.org/en-US/docs/Web/HTML/Element/img#sizes
"""

from __future__ import annotations

import re

from responsive_images.model.sizes import SizeDefinition

__all__ = ["parse_sizes"]

# Matches the last run of whitespace and the token after it
_LAST_WHITESPACE_RE = re.compile(r"\s(?P<width>\S*)$")


def _parse_entry(entry: str) -> SizeDefinition:
    """Parse one trimmed entry into a SizeDefinition."""
    if entry.endswith("px"):
        entry = entry[:-2]
    match = _LAST_WHITESPACE_RE.search(entry)
    if match is None:
        return SizeDefinition.default(entry)
    return SizeDefinition.with_media_condition(entry[: match.start()], match.group("width"))


def parse_sizes(source: str) -> list[SizeDefinition]:
    """Parse a sizes string into SizeDefinitions, in source order.

    Never raises: width tokens are not validated here, so an unusable token
    only surfaces when the renditions are planned.
    """
    return [_parse_entry(entry.strip()) for entry in source.split(",")]
