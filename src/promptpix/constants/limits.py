"""Limit constants for promptpix.

This module contains the fixed limits and sizes used across the client:
- Feed sizes
- Storage bucket constraints
- Upload settings

MODIFICATION GUIDE:
------------------
- FEED_* sizes: the CLI and the services read these, keep them in sync
- BUCKET_* values: only applied when the bucket is created administratively
"""

from typing import Final

# =============================================================================
# FEED LIMITS
# =============================================================================

NEWS_FEED_LIMIT: Final[int] = 10
"""Number of posts in the global news list."""

HOME_RECENT_POSTS_LIMIT: Final[int] = 6
"""Number of recent creations shown on the home dashboard."""

RECENT_POSTS_WINDOW_DAYS: Final[int] = 7
"""A post counts as recent on the home dashboard when younger than this."""

# =============================================================================
# STORAGE
# =============================================================================

BUCKET_ID: Final[str] = "images"
"""Blob store bucket holding generated images."""

BUCKET_FILE_SIZE_LIMIT: Final[int] = 5 * 1024 * 1024
"""Maximum object size (5 MiB) set when the bucket is created."""

BUCKET_ALLOWED_MIME_TYPES: Final[tuple[str, ...]] = ("image/png", "image/jpeg")
"""MIME types accepted by the bucket."""

UPLOAD_CONTENT_TYPE: Final[str] = "image/png"
"""Content type of every generated image upload."""

UPLOAD_CACHE_CONTROL: Final[str] = "3600"
"""Cache-Control max-age (seconds) sent with uploads."""

# =============================================================================
# TEXT
# =============================================================================

FILENAME_PROMPT_MAX_LENGTH: Final[int] = 50
"""Prompt characters kept when deriving a download filename."""

USER_ID_PREFIX_LENGTH: Final[int] = 8
"""Identity id characters used for the fallback username."""
