"""
Helpers for interpreting the description field of a GMAD package.

The decoder treats the description as opaque text, but the standard packing tools store a JSON object in it, of the
form::

    {"description": "Some text", "type": "gamemode", "tags": ["fun", "roleplay"]}

Older or hand-made packages just contain plain text.
"""

import json

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class GmadDescriptionInfo:
    """
    The structured content of a JSON-encoded addon description.

    Attributes:
        description: The actual human-readable description. Empty if missing.
        type: The addon type (e.g. "gamemode", "map", "weapon"), if present.
        tags: The addon tags, in the order they were stored.
    """

    description: str
    type: Optional[str] = None
    tags: Tuple[str, ...] = ()


def parse_description(description: str) -> Optional[GmadDescriptionInfo]:
    """
    Tries to interpret an addon description as the JSON object written by the standard packing tools.

    Returns:
        A `GmadDescriptionInfo` object, or None if the description is plain text (or JSON that is not an object).
        This function never raises on malformed input.
    """

    try:
        data = json.loads(description)
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None

    text = data.get('description')
    addon_type = data.get('type')
    tags = data.get('tags')

    return GmadDescriptionInfo(
        description=text if isinstance(text, str) else '',
        type=addon_type if isinstance(addon_type, str) else None,
        tags=tuple(tag for tag in tags if isinstance(tag, str)) if isinstance(tags, list) else (),
    )
