"""Global constants package for promptpix.

PACKAGE STRUCTURE:
-----------------
- limits.py   : feed sizes, storage bucket settings, text limits
- types.py    : enumerated image generation options
- prompts.py  : prompt suggestions and writing tips

USAGE EXAMPLES:
--------------
    from promptpix.constants import BUCKET_ID, NEWS_FEED_LIMIT
    from promptpix.constants import ImageSize, ImageQuality, ImageStyle
"""

from .limits import (
    BUCKET_ALLOWED_MIME_TYPES,
    BUCKET_FILE_SIZE_LIMIT,
    BUCKET_ID,
    FILENAME_PROMPT_MAX_LENGTH,
    HOME_RECENT_POSTS_LIMIT,
    NEWS_FEED_LIMIT,
    RECENT_POSTS_WINDOW_DAYS,
    UPLOAD_CACHE_CONTROL,
    UPLOAD_CONTENT_TYPE,
    USER_ID_PREFIX_LENGTH,
)
from .prompts import PROMPT_SUGGESTIONS, PROMPT_TIPS
from .types import SUPPORTED_SIZES, ImageQuality, ImageSize, ImageStyle

__all__ = [
    # Limits
    "NEWS_FEED_LIMIT",
    "HOME_RECENT_POSTS_LIMIT",
    "RECENT_POSTS_WINDOW_DAYS",
    "BUCKET_ID",
    "BUCKET_FILE_SIZE_LIMIT",
    "BUCKET_ALLOWED_MIME_TYPES",
    "UPLOAD_CONTENT_TYPE",
    "UPLOAD_CACHE_CONTROL",
    "FILENAME_PROMPT_MAX_LENGTH",
    "USER_ID_PREFIX_LENGTH",
    # Types
    "ImageSize",
    "ImageQuality",
    "ImageStyle",
    "SUPPORTED_SIZES",
    # Prompts
    "PROMPT_SUGGESTIONS",
    "PROMPT_TIPS",
]
