"""Enumerated option types for image generation.

The image API only accepts a fixed set of resolutions, and the UI offers
a fixed set of quality and style choices. These enums are the single
source for those values.
"""

from enum import Enum


class ImageSize(str, Enum):
    """Supported output resolutions."""

    SQUARE = "1024x1024"
    LANDSCAPE = "1792x1024"
    PORTRAIT = "1024x1792"


class ImageQuality(str, Enum):
    """Rendering quality."""

    STANDARD = "standard"
    HD = "hd"


class ImageStyle(str, Enum):
    """Rendering style."""

    VIVID = "vivid"
    NATURAL = "natural"


SUPPORTED_SIZES: frozenset[str] = frozenset(size.value for size in ImageSize)
"""Plain string form of the supported resolutions."""
