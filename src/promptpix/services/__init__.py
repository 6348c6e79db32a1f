"""Services - post creation workflow and CRUD over the shared feed.

Every public operation returns a Result: Success with the value, or one
Failure subclass naming the stage that failed.
"""

from .comments import CommentService
from .feed import FeedService, compute_home_stats
from .generation import ImageGenerationService
from .likes import LikeService
from .posts import PostCreationService, build_object_key, normalize_caption
from .profiles import ProfileService, default_username
from .results import (
    AuthRequired,
    BackendFailure,
    ConfigurationError,
    DecodeFailure,
    Failure,
    GenerationFailure,
    NotFound,
    PersistFailure,
    ProfileInitFailure,
    Result,
    StorageUnavailable,
    Success,
    UploadFailure,
)
from .storage_check import StorageDiagnostics, StorageReport, render_test_png

__all__ = [
    # Services
    "ImageGenerationService",
    "PostCreationService",
    "ProfileService",
    "LikeService",
    "CommentService",
    "FeedService",
    "StorageDiagnostics",
    "StorageReport",
    # Helpers
    "build_object_key",
    "normalize_caption",
    "default_username",
    "compute_home_stats",
    "render_test_png",
    # Results
    "Result",
    "Success",
    "Failure",
    "AuthRequired",
    "ConfigurationError",
    "ProfileInitFailure",
    "StorageUnavailable",
    "DecodeFailure",
    "UploadFailure",
    "PersistFailure",
    "GenerationFailure",
    "NotFound",
    "BackendFailure",
]
